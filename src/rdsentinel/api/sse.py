# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Server-sent events over a broadcaster subscription."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from pydantic import BaseModel
from starlette.requests import Request
from starlette.responses import StreamingResponse

from rdsentinel.collector.broadcaster import Broadcaster

logger = logging.getLogger("rdsentinel.api.sse")

KEEPALIVE_SECONDS = 15.0


def format_event(event: str, item: BaseModel) -> str:
    return f"event: {event}\ndata: {item.model_dump_json(by_alias=True)}\n\n"


async def event_stream(
    request: Request,
    broadcaster: Broadcaster[BaseModel],
    event: str,
    *,
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """Yield SSE frames until the client disconnects.

    The subscription is released on every exit path.
    """
    queue = broadcaster.subscribe()
    try:
        yield ": connected\n\n"
        while True:
            if await request.is_disconnected():
                break
            try:
                item = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except TimeoutError:
                yield ": keepalive\n\n"
                continue
            yield format_event(event, item)
    finally:
        broadcaster.unsubscribe(queue)
        logger.debug("Stream client disconnected")


def sse_response(
    request: Request, broadcaster: Broadcaster[BaseModel], event: str
) -> StreamingResponse:
    return StreamingResponse(
        event_stream(request, broadcaster, event),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )

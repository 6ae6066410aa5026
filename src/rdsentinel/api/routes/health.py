# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from rdsentinel import __version__

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ReadyResponse(BaseModel):
    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", service="rdsentinel", version=__version__)


@router.get("/ready", response_model=ReadyResponse)
async def ready(request: Request) -> ReadyResponse:
    collector = getattr(request.app.state, "collector", None)
    if collector is None:
        return ReadyResponse(status="not_ready", database="not initialized")
    if collector.db is None:
        return ReadyResponse(status="ready", database="memory")

    try:
        cursor = await collector.db.execute("SELECT 1")
        await cursor.fetchone()
        return ReadyResponse(status="ready", database="connected")
    except Exception as exc:
        return ReadyResponse(status="not_ready", database=str(exc))

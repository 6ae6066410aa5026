# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Push stream fan-out to live observers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

logger = logging.getLogger("rdsentinel.collector.broadcaster")

T = TypeVar("T")


class Broadcaster(Generic[T]):
    """Deliver published items to every subscriber in publish order.

    Each subscriber owns a bounded queue.  Publishing never waits: when a
    subscriber's queue is full the item is dropped for that subscriber only.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[T]] = set()
        self.dropped_count = 0

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[T]:
        queue: asyncio.Queue[T] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        logger.debug("Subscriber added (%d active)", len(self._subscribers))
        return queue

    def unsubscribe(self, queue: asyncio.Queue[T]) -> None:
        self._subscribers.discard(queue)
        logger.debug("Subscriber removed (%d active)", len(self._subscribers))

    def publish(self, item: T) -> int:
        """Queue *item* for every subscriber; return how many received it."""
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(item)
                delivered += 1
            except asyncio.QueueFull:
                self.dropped_count += 1
                logger.warning("Slow subscriber, dropping item (queue size %d)", self._queue_size)
        return delivered

    async def listen(self) -> AsyncIterator[T]:
        """Subscribe for the lifetime of the iteration."""
        queue = self.subscribe()
        try:
            while True:
                yield await queue.get()
        finally:
            self.unsubscribe(queue)

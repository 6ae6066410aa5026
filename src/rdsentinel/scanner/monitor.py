# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""ScanMonitor: runs a scan at a fixed interval until stopped.

Pure asyncio.  A tick that arrives while the previous scan is still running
is skipped rather than queued.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from rdsentinel.core.constants import DEFAULT_SCAN_INTERVAL_SECONDS
from rdsentinel.models.verdict import ScanVerdict

logger = logging.getLogger("rdsentinel.scanner.monitor")

ScanCallable = Callable[[], Awaitable[ScanVerdict]]
VerdictCallback = Callable[[ScanVerdict], Awaitable[None]]


@dataclass(frozen=True)
class MonitorStats:
    is_active: bool
    scan_count: int
    skipped_count: int
    interval: float


class ScanMonitor:
    """Periodic driver for a scan coroutine.

    ``on_verdict`` callbacks run after every completed scan; a callback that
    raises is logged and does not stop the monitor.
    """

    def __init__(
        self,
        scan: ScanCallable,
        *,
        interval: float = DEFAULT_SCAN_INTERVAL_SECONDS,
        on_verdict: list[VerdictCallback] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._scan = scan
        self._interval = interval
        self._callbacks: list[VerdictCallback] = list(on_verdict or [])
        self._task: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None
        self._running = False
        self._scan_count = 0
        self._skipped_count = 0
        self._last_verdict: ScanVerdict | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def scan_count(self) -> int:
        return self._scan_count

    @property
    def skipped_count(self) -> int:
        return self._skipped_count

    @property
    def last_verdict(self) -> ScanVerdict | None:
        return self._last_verdict

    def add_callback(self, callback: VerdictCallback) -> None:
        self._callbacks.append(callback)

    def stats(self) -> MonitorStats:
        return MonitorStats(
            is_active=self._running,
            scan_count=self._scan_count,
            skipped_count=self._skipped_count,
            interval=self._interval,
        )

    async def start(self) -> None:
        """Start the monitor loop; the first scan runs immediately."""
        if self._running:
            logger.warning("Monitoring is already active")
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Continuous monitoring started (interval=%ss)", self._interval)

    async def stop(self) -> None:
        """Stop the loop and wait for an in-flight scan to finish.

        Once this returns no further scan will start.  Stopping an inactive
        monitor is a no-op.
        """
        if not self._running and self._task is None:
            return
        self._running = False
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if self._inflight is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._inflight
            self._inflight = None
        logger.info("Monitoring stopped after %d scans", self._scan_count)

    async def run_once(self) -> ScanVerdict:
        """Run one scan outside the schedule and feed it to the callbacks."""
        verdict = await self._scan()
        await self._publish(verdict)
        return verdict

    async def _loop(self) -> None:
        while self._running:
            self._tick()
            await asyncio.sleep(self._interval)

    def _tick(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._skipped_count += 1
            logger.warning(
                "Previous scan still running, skipping tick (%d skipped)", self._skipped_count
            )
            return
        self._inflight = asyncio.create_task(self._run_scheduled())

    async def _run_scheduled(self) -> None:
        number = self._scan_count + 1
        logger.info("Running scan #%d", number)
        try:
            verdict = await self._scan()
        except Exception:
            logger.exception("Scan #%d failed", number)
            return
        self._scan_count = number
        if verdict.has_remote_access:
            logger.warning("Remote access detected during monitoring (scan #%d)", number)
        await self._publish(verdict)

    async def _publish(self, verdict: ScanVerdict) -> None:
        self._last_verdict = verdict
        for callback in self._callbacks:
            try:
                await callback(verdict)
            except Exception:
                logger.exception("Verdict callback failed")

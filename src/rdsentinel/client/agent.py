# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Client agent: periodic local scans, each result sent to the collector."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import TYPE_CHECKING

from rdsentinel.client.identity import build_identity
from rdsentinel.client.transmitter import ReportTransmitter
from rdsentinel.models.verdict import ScanVerdict
from rdsentinel.scanner.monitor import ScanMonitor
from rdsentinel.scanner.orchestrator import ScanOrchestrator, build_orchestrator

if TYPE_CHECKING:
    from rdsentinel.core.config import Settings

logger = logging.getLogger("rdsentinel.client.agent")


class ClientAgent:
    def __init__(
        self,
        orchestrator: ScanOrchestrator,
        transmitter: ReportTransmitter,
        *,
        interval: float,
    ) -> None:
        self._orchestrator = orchestrator
        self._transmitter = transmitter
        self._monitor = ScanMonitor(
            orchestrator.run_scan,
            interval=interval,
            on_verdict=[self._transmit],
        )
        self._stop_event = asyncio.Event()

    @classmethod
    def from_settings(cls, settings: Settings) -> ClientAgent:
        from rdsentinel.alerts.factory import build_alert_router

        identity = build_identity(settings.endpoint_id)
        transmitter = ReportTransmitter(
            settings.collector_url, identity, timeout=settings.transmit_timeout
        )
        orchestrator = build_orchestrator(settings, alert_router=build_alert_router(settings))
        return cls(orchestrator, transmitter, interval=settings.scan_interval)

    @property
    def monitor(self) -> ScanMonitor:
        return self._monitor

    @property
    def transmitter(self) -> ReportTransmitter:
        return self._transmitter

    async def _transmit(self, verdict: ScanVerdict) -> None:
        await self._transmitter.send(verdict)

    async def start(self) -> None:
        identity = self._transmitter.identity
        logger.info(
            "Client agent starting: id=%s host=%s collector=%s",
            identity.id,
            identity.host_name,
            self._transmitter.url,
        )
        await self._monitor.start()

    async def stop(self) -> None:
        await self._monitor.stop()
        self._stop_event.set()
        logger.info(
            "Client agent stopped: sent=%d failed=%d",
            self._transmitter.sent_count,
            self._transmitter.failed_count,
        )

    def request_stop(self) -> None:
        self._stop_event.set()

    async def run_forever(self) -> None:
        """Run until SIGINT/SIGTERM or :meth:`request_stop`."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            # Windows event loops do not support signal handlers.
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(sig, self.request_stop)

        await self.start()
        try:
            await self._stop_event.wait()
        finally:
            await self.stop()

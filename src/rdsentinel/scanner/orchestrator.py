# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan orchestrator: runs the three detectors and aggregates one verdict."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rdsentinel.capabilities.registry import select_registry_reader
from rdsentinel.capabilities.system import (
    PsutilPortOwnerResolver,
    PsutilProcessLister,
    SocketPortProber,
)
from rdsentinel.catalog.loader import load_catalog
from rdsentinel.detectors.network import NetworkDetector
from rdsentinel.detectors.process import ProcessDetector
from rdsentinel.detectors.registry import RegistryDetector
from rdsentinel.models.verdict import ScanVerdict
from rdsentinel.scanner.base import BaseDetector
from rdsentinel.scanner.severity import SeverityPolicy

if TYPE_CHECKING:
    from rdsentinel.alerts.router import AlertRouter
    from rdsentinel.core.config import Settings

logger = logging.getLogger("rdsentinel.scanner.orchestrator")


class ScanOrchestrator:
    """Fan out to every detector concurrently and fan the findings back in.

    Findings always come back in the order the detectors were given
    (process, network, registry), whatever order they finish in.  A failing
    detector yields a non-matching finding instead of failing the scan.
    """

    def __init__(
        self,
        process: BaseDetector,
        network: BaseDetector,
        registry: BaseDetector,
        *,
        alert_router: AlertRouter | None = None,
    ) -> None:
        self._detectors: tuple[BaseDetector, ...] = (process, network, registry)
        self._alert_router = alert_router

    @property
    def detectors(self) -> tuple[BaseDetector, ...]:
        return self._detectors

    async def run_scan(self) -> ScanVerdict:
        start = time.monotonic()
        scan_time = datetime.now(UTC)
        logger.info("Starting remote desktop detection scan")

        findings = await asyncio.gather(*(d.detect() for d in self._detectors))

        for finding in findings:
            logger.info(
                "%s detector: detected=%s severity=%s %s",
                finding.detector_type,
                finding.is_detected,
                finding.severity,
                finding.details,
            )

        verdict = ScanVerdict(detections=tuple(findings), scan_time=scan_time)
        duration_ms = int((time.monotonic() - start) * 1000)

        if verdict.has_remote_access:
            logger.warning(
                "Scan complete in %dms: %s severity=%s",
                duration_ms,
                verdict.summary,
                verdict.severity,
            )
            if self._alert_router is not None:
                await self._alert_router.dispatch(verdict)
        else:
            logger.info("Scan complete in %dms: %s", duration_ms, verdict.summary)

        return verdict

    async def is_remote_access_detected(self) -> bool:
        verdict = await self.run_scan()
        return verdict.has_remote_access


def build_orchestrator(
    settings: Settings,
    *,
    alert_router: AlertRouter | None = None,
) -> ScanOrchestrator:
    """Wire the live OS capabilities and the configured catalog into an orchestrator."""
    catalog = load_catalog(settings.catalog_path or None)
    policy = SeverityPolicy.from_settings(settings)

    process = ProcessDetector(catalog, PsutilProcessLister())
    network = NetworkDetector(
        catalog,
        SocketPortProber(timeout=settings.port_probe_timeout),
        owner_resolver=PsutilPortOwnerResolver(),
        policy=policy,
        host=settings.probe_host,
    )
    registry = RegistryDetector(catalog, select_registry_reader(), policy=policy)

    logger.debug("Orchestrator built with %d signatures", len(catalog))
    return ScanOrchestrator(process, network, registry, alert_router=alert_router)

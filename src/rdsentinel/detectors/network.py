# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Listening-port detector.

Catches remote access even when process names are renamed, by probing every
port any known product is documented to listen on.
"""

from __future__ import annotations

import asyncio
import logging

from rdsentinel.capabilities.base import PortOwnerResolver, PortProber
from rdsentinel.catalog import SignatureCatalog
from rdsentinel.core.constants import DetectorKind
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.scanner.base import BaseDetector
from rdsentinel.scanner.severity import SeverityPolicy

logger = logging.getLogger("rdsentinel.detectors.network")

UNKNOWN_OWNER = "Unknown"


class NetworkDetector(BaseDetector):
    def __init__(
        self,
        catalog: SignatureCatalog,
        prober: PortProber,
        *,
        owner_resolver: PortOwnerResolver | None = None,
        policy: SeverityPolicy | None = None,
        host: str = "127.0.0.1",
    ) -> None:
        self._catalog = catalog
        self._prober = prober
        self._owner_resolver = owner_resolver
        self._policy = policy or SeverityPolicy()
        self._host = host

    @property
    def kind(self) -> DetectorKind:
        return DetectorKind.NETWORK

    def _owner_of(self, port: int) -> str:
        if self._owner_resolver is None:
            return UNKNOWN_OWNER
        try:
            return self._owner_resolver.owner_of(port) or UNKNOWN_OWNER
        except Exception as exc:
            logger.debug("Owner lookup failed for port %d: %s", port, exc)
            return UNKNOWN_OWNER

    def _scan_ports(self) -> tuple[list[int], list[str]]:
        active_ports: list[int] = []
        labels: list[str] = []
        for entry in self._catalog.port_entries():
            if not self._prober.is_port_in_use(self._host, entry.port):
                continue
            active_ports.append(entry.port)
            owner = self._owner_of(entry.port)
            labels.append(f"{entry.app_name} - Port {entry.port} (Process: {owner})")
        return active_ports, labels

    async def _detect(self) -> DetectionFinding:
        active_ports, labels = await asyncio.to_thread(self._scan_ports)

        if not active_ports:
            return DetectionFinding.clean(self.kind, "No remote desktop ports detected")

        return DetectionFinding(
            detector_type=self.kind,
            is_detected=True,
            severity=self._policy.port_severity(active_ports),
            details=(
                f"Found {len(active_ports)} active remote desktop port(s): "
                f"{', '.join(labels)}"
            ),
            detected_items=tuple(labels),
        )

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Running-process detector."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from rdsentinel.capabilities.base import ProcessLister
from rdsentinel.catalog import SignatureCatalog
from rdsentinel.core.constants import DetectorKind
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.signature import Signature
from rdsentinel.scanner.base import BaseDetector
from rdsentinel.scanner.severity import max_severity

logger = logging.getLogger("rdsentinel.detectors.process")


class ProcessDetector(BaseDetector):
    """Compare running process names against every signature's process markers."""

    def __init__(self, catalog: SignatureCatalog, lister: ProcessLister) -> None:
        self._catalog = catalog
        self._lister = lister

    @property
    def kind(self) -> DetectorKind:
        return DetectorKind.PROCESS

    def match(self, process_names: Iterable[str]) -> list[Signature]:
        """Matched signatures, one per product name, in first-seen order."""
        matched: dict[str, Signature] = {}
        for process_name in process_names:
            for signature in self._catalog:
                if signature.name in matched:
                    continue
                if signature.matches_process(process_name):
                    matched[signature.name] = signature
        return list(matched.values())

    async def _detect(self) -> DetectionFinding:
        process_names = await asyncio.to_thread(self._lister.list_process_names)
        matched = self.match(process_names)

        if not matched:
            return DetectionFinding.clean(self.kind, "No remote desktop processes detected")

        names = [s.name for s in matched]
        logger.debug("Matched processes for: %s", ", ".join(names))
        return DetectionFinding(
            detector_type=self.kind,
            is_detected=True,
            severity=max_severity(s.severity for s in matched),
            details=(
                f"Found {len(names)} remote desktop application(s) running: "
                f"{', '.join(names)}"
            ),
            detected_items=tuple(names),
        )

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract base detector interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from rdsentinel.core.constants import DetectorKind
from rdsentinel.models.finding import DetectionFinding

logger = logging.getLogger("rdsentinel.scanner.base")


class BaseDetector(ABC):
    """All detectors must implement this interface.

    :meth:`detect` never raises: subclasses implement :meth:`_detect` and any
    exception it throws is turned into a non-matching finding whose details
    carry the error text.
    """

    @property
    @abstractmethod
    def kind(self) -> DetectorKind:
        """Which evidence source this detector covers."""
        ...

    @abstractmethod
    async def _detect(self) -> DetectionFinding:
        ...

    async def detect(self) -> DetectionFinding:
        try:
            return await self._detect()
        except Exception as exc:
            logger.warning("%s detector failed: %s", self.kind, exc)
            return DetectionFinding.clean(
                self.kind, f"Error during {self.kind} detection: {exc}"
            )

    async def is_detected(self) -> bool:
        """Quick check: run :meth:`detect` and return only the matched flag."""
        finding = await self.detect()
        return finding.is_detected

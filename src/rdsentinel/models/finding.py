# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Detector finding model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rdsentinel.core.constants import DetectorKind, Severity


class DetectionFinding(BaseModel):
    """One detector's matched / not-matched result for one scan."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    detector_type: DetectorKind
    is_detected: bool
    severity: Severity = Severity.LOW
    details: str = ""
    detected_items: tuple[str, ...] = ()
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def clean(cls, detector_type: DetectorKind, details: str) -> DetectionFinding:
        """A non-matching finding, also used to carry detector errors."""
        return cls(detector_type=detector_type, is_detected=False, details=details)

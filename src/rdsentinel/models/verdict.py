# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Aggregated scan verdict model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from rdsentinel.core.constants import Severity
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.scanner.severity import aggregate_severity


class ScanVerdict(BaseModel):
    """Outcome of one full scan across all detectors.

    ``has_remote_access``, ``severity`` and ``summary`` are derived from the
    findings so they can never disagree with them.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    detections: tuple[DetectionFinding, ...] = ()
    scan_time: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_remote_access(self) -> bool:
        return any(d.is_detected for d in self.detections)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def severity(self) -> Severity:
        return aggregate_severity(self.detections)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> str:
        if not self.has_remote_access:
            return "No remote desktop access detected. System is clean."
        return (
            "Remote desktop access DETECTED! "
            f"Found {len(self.indicators)} indicator(s)."
        )

    @property
    def indicators(self) -> list[str]:
        """Matched item labels across all positive findings."""
        items: list[str] = []
        for detection in self.detections:
            if detection.is_detected:
                items.extend(detection.detected_items)
        return items

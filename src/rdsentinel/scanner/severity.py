# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Severity ordering, aggregation, and escalation policy."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rdsentinel.core.constants import CRITICAL_PORTS, SEVERITY_RANK, Severity

if TYPE_CHECKING:
    from rdsentinel.core.config import Settings
    from rdsentinel.models.finding import DetectionFinding


def severity_rank(severity: Severity | str) -> int:
    return SEVERITY_RANK[Severity(severity)]


def max_severity(
    severities: Iterable[Severity | str], default: Severity = Severity.LOW
) -> Severity:
    """Return the highest severity in *severities*, or *default* when empty."""
    ranked = [Severity(s) for s in severities]
    if not ranked:
        return default
    return max(ranked, key=lambda s: SEVERITY_RANK[s])


def aggregate_severity(findings: Sequence[DetectionFinding]) -> Severity:
    """Highest severity across matched findings only; ``low`` if none matched."""
    return max_severity(f.severity for f in findings if f.is_detected)


@dataclass(frozen=True)
class SeverityPolicy:
    """Count-based escalation thresholds for the network and registry detectors."""

    critical_ports: frozenset[int] = field(default_factory=lambda: frozenset(CRITICAL_PORTS))
    port_high_threshold: int = 3
    registry_critical_threshold: int = 3
    registry_high_threshold: int = 2

    @classmethod
    def from_settings(cls, settings: Settings) -> SeverityPolicy:
        return cls(
            critical_ports=frozenset(settings.critical_ports),
            port_high_threshold=settings.port_high_threshold,
            registry_critical_threshold=settings.registry_critical_threshold,
            registry_high_threshold=settings.registry_high_threshold,
        )

    def port_severity(self, active_ports: Iterable[int]) -> Severity:
        ports = set(active_ports)
        if ports & self.critical_ports:
            return Severity.CRITICAL
        if len(ports) >= self.port_high_threshold:
            return Severity.HIGH
        if ports:
            return Severity.MEDIUM
        return Severity.LOW

    def registry_severity(self, matched_count: int) -> Severity:
        if matched_count >= self.registry_critical_threshold:
            return Severity.CRITICAL
        if matched_count >= self.registry_high_threshold:
            return Severity.HIGH
        if matched_count >= 1:
            return Severity.MEDIUM
        return Severity.LOW

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Client report, presence, and stored history models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rdsentinel.core.constants import ReportStatus, Severity
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.verdict import ScanVerdict


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EndpointIdentity(_WireModel):
    """The stable tuple identifying one monitored endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    host_name: str = ""
    user_name: str = ""
    platform: str = ""


class ClientReport(_WireModel):
    """A scan verdict as transmitted from an endpoint to the collector."""

    identity: EndpointIdentity
    status: ReportStatus
    severity: Severity = Severity.LOW
    findings: list[DetectionFinding] = Field(default_factory=list)
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_verdict(cls, identity: EndpointIdentity, verdict: ScanVerdict) -> ClientReport:
        return cls(
            identity=identity,
            status=ReportStatus.THREAT if verdict.has_remote_access else ReportStatus.CLEAN,
            severity=verdict.severity,
            findings=list(verdict.detections),
        )

    @property
    def threat_kinds(self) -> list[str]:
        return [str(f.detector_type) for f in self.findings if f.is_detected]


class Ack(_WireModel):
    """Acknowledgement returned for a report submission."""

    success: bool
    message: str = ""
    sequence: int | None = None


class StoredReport(_WireModel):
    """One persisted history entry."""

    sequence: int
    report: ClientReport
    received_at: datetime


@dataclass
class PresenceRecord:
    """Collector-side live view of one endpoint.

    Mutated in place on every report.  Online state is never stored here; it
    is derived by the presence tracker at read time.
    """

    identity: EndpointIdentity
    last_report: ClientReport
    last_seen: datetime


class ClientStatus(_WireModel):
    """Read model for the admin surface: a presence record plus its online flag."""

    identity: EndpointIdentity
    last_report: ClientReport
    last_seen: datetime
    is_online: bool


class FleetStats(_WireModel):
    total_clients: int
    online_clients: int
    threats_detected: int
    clean_systems: int

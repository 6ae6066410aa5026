# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for rdsentinel."""

from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.report import (
    Ack,
    ClientReport,
    ClientStatus,
    EndpointIdentity,
    FleetStats,
    PresenceRecord,
    StoredReport,
)
from rdsentinel.models.signature import RegistryCheck, Signature
from rdsentinel.models.verdict import ScanVerdict

__all__ = [
    "Ack",
    "ClientReport",
    "ClientStatus",
    "DetectionFinding",
    "EndpointIdentity",
    "FleetStats",
    "PresenceRecord",
    "RegistryCheck",
    "ScanVerdict",
    "Signature",
    "StoredReport",
]

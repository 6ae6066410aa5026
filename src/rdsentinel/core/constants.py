# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, severity ranks, and detection constants."""

from enum import StrEnum


class Severity(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DetectorKind(StrEnum):
    PROCESS = "process"
    NETWORK = "network"
    REGISTRY = "registry"


class ReportStatus(StrEnum):
    CLEAN = "clean"
    THREAT = "threat"


SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}

RDP_PORT = 3389
# RDP, VNC (5900-5902) and TeamViewer (5938, 5939)
CRITICAL_PORTS: tuple[int, ...] = (RDP_PORT, 5900, 5901, 5902, 5938, 5939)

DEFAULT_PRESENCE_WINDOW_SECONDS = 30.0
DEFAULT_SCAN_INTERVAL_SECONDS = 10.0

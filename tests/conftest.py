# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from rdsentinel.core.config import Settings
from rdsentinel.core.constants import DetectorKind, ReportStatus, Severity
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.report import ClientReport, EndpointIdentity
from rdsentinel.models.verdict import ScanVerdict

FIXED_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep RDSENTINEL_* variables and any local .env out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("RDSENTINEL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        db_path=tmp_path / "rdsentinel-test.db",
        alerts_enabled=False,
        log_format="text",
    )


def make_finding(
    kind: DetectorKind = DetectorKind.PROCESS,
    *,
    detected: bool = False,
    severity: Severity = Severity.LOW,
    items: tuple[str, ...] = (),
) -> DetectionFinding:
    return DetectionFinding(
        detector_type=kind,
        is_detected=detected,
        severity=severity,
        details="test finding",
        detected_items=items,
        timestamp=FIXED_TIME,
    )


def make_verdict(*findings: DetectionFinding) -> ScanVerdict:
    if not findings:
        findings = tuple(make_finding(kind) for kind in DetectorKind)
    return ScanVerdict(detections=findings, scan_time=FIXED_TIME)


@pytest.fixture
def clean_verdict() -> ScanVerdict:
    return make_verdict()


@pytest.fixture
def threat_verdict() -> ScanVerdict:
    return make_verdict(
        make_finding(
            DetectorKind.PROCESS, detected=True, severity=Severity.CRITICAL, items=("TeamViewer",)
        ),
        make_finding(DetectorKind.NETWORK),
        make_finding(DetectorKind.REGISTRY),
    )


@pytest.fixture
def make_report() -> Callable[..., ClientReport]:
    """Factory for ClientReport objects with sensible defaults."""

    def _make_report(
        identity_id: str = "host-a-1700000000000",
        *,
        status: ReportStatus = ReportStatus.CLEAN,
        severity: Severity = Severity.LOW,
        host_name: str = "host-a",
    ) -> ClientReport:
        findings = [make_finding(kind) for kind in DetectorKind]
        if status == ReportStatus.THREAT:
            findings[0] = make_finding(
                DetectorKind.PROCESS, detected=True, severity=severity, items=("AnyDesk",)
            )
        return ClientReport(
            identity=EndpointIdentity(
                id=identity_id, host_name=host_name, user_name="alice", platform="win32"
            ),
            status=status,
            severity=severity,
            findings=findings,
            submitted_at=FIXED_TIME,
        )

    return _make_report


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging so streams do not leak between tests."""
    import logging

    yield
    root = logging.getLogger("rdsentinel")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)

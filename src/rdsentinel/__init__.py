# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""rdsentinel - Remote-access software detection for endpoints and fleets."""

__version__ = "0.1.0"

from rdsentinel.core.constants import DetectorKind, ReportStatus, Severity
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.verdict import ScanVerdict

__all__ = [
    "DetectionFinding",
    "DetectorKind",
    "ReportStatus",
    "ScanVerdict",
    "Severity",
    "__version__",
]

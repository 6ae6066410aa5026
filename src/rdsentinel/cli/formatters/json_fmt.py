# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON output formatter."""

from __future__ import annotations

import json

from rdsentinel.models.verdict import ScanVerdict


def format_json(verdict: ScanVerdict) -> str:
    """Return the verdict as formatted camelCase JSON."""
    return verdict.model_dump_json(indent=2, by_alias=True)


def format_json_summary(verdict: ScanVerdict) -> str:
    """Return a compact JSON summary (no per-detector detail)."""
    data = {
        "hasRemoteAccess": verdict.has_remote_access,
        "severity": str(verdict.severity),
        "summary": verdict.summary,
        "indicators": verdict.indicators,
        "scanTime": verdict.scan_time.isoformat(),
    }
    return json.dumps(data, indent=2)

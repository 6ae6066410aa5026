# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert sink that writes to the application log."""

from __future__ import annotations

import logging

from rdsentinel.alerts.base import AlertSink
from rdsentinel.models.verdict import ScanVerdict

logger = logging.getLogger("rdsentinel.alerts.log")


class LogAlertSink(AlertSink):
    @property
    def name(self) -> str:
        return "log"

    async def send(self, verdict: ScanVerdict) -> bool:
        logger.warning(
            "ALERT severity=%s: %s (%s)",
            verdict.severity,
            verdict.summary,
            "; ".join(d.details for d in verdict.detections if d.is_detected),
        )
        return True

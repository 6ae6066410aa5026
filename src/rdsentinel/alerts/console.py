# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Prominent terminal banner for detected remote access."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from rdsentinel.alerts.base import AlertSink
from rdsentinel.core.constants import Severity
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.verdict import ScanVerdict

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold white on red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "green",
}


class ConsoleAlertSink(AlertSink):
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    @property
    def name(self) -> str:
        return "console"

    async def send(self, verdict: ScanVerdict) -> bool:
        body = Text()
        body.append("Summary:\n", style="bold red")
        body.append(f"  {verdict.summary}\n\n", style="red")
        body.append("Detections:\n", style="bold red")
        for index, detection in enumerate(verdict.detections, start=1):
            if detection.is_detected:
                body.append(
                    f"  {index}. [{detection.severity.upper()}] {detection.details}\n",
                    style="red",
                )

        self._console.print()
        self._console.print(
            Panel(
                body,
                title="REMOTE DESKTOP ACCESS DETECTED",
                style="bold white on red",
                border_style="red",
            )
        )
        self._console.print()
        return True

    def send_critical(self, finding: DetectionFinding) -> bool:
        """Print a short alert for a single high or critical finding."""
        if finding.severity not in (Severity.CRITICAL, Severity.HIGH):
            return False
        self._console.print(Text(" CRITICAL ALERT ", style=SEVERITY_COLORS[Severity.CRITICAL]))
        self._console.print(finding.details, style="bold red")
        return True

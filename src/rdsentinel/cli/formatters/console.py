# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output for verdicts, fleet presence, and history."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rdsentinel import __version__
from rdsentinel.core.constants import ReportStatus, Severity
from rdsentinel.models.report import ClientStatus, StoredReport
from rdsentinel.models.verdict import ScanVerdict

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}

STATUS_COLORS = {
    ReportStatus.THREAT: "bold red",
    ReportStatus.CLEAN: "bold green",
}


def format_verdict(verdict: ScanVerdict, out: Console | None = None) -> None:
    """Print a scan verdict with one line per detector."""
    out = out or console
    out.print()
    out.print(f"[bold]rdsentinel v{__version__}[/bold] - Remote Desktop Access Detection")
    out.print(f"Scan time: {verdict.scan_time.isoformat()}", style="dim")
    out.print()

    color = "bold red" if verdict.has_remote_access else "bold green"
    out.print(Panel(f"[{color}]{verdict.summary}[/{color}]", style=color))
    out.print()

    for detection in verdict.detections:
        sev_color = SEVERITY_COLORS.get(detection.severity, "white")
        marker = "DETECTED" if detection.is_detected else "clean"
        out.print(Text(detection.severity.upper().ljust(9), style=sev_color), end="")
        out.print(f"  [bold]{detection.detector_type}[/bold] ({marker})  {detection.details}")
        for item in detection.detected_items:
            out.print(f"          - {item}", style="dim")

    out.print()
    sev_color = SEVERITY_COLORS.get(verdict.severity, "white")
    out.print(f"Overall severity: [{sev_color}]{verdict.severity.upper()}[/{sev_color}]")


def format_monitor_line(verdict: ScanVerdict, scan_number: int, out: Console | None = None) -> None:
    out = out or console
    color = "red" if verdict.has_remote_access else "green"
    out.print(
        f"[dim]{verdict.scan_time.strftime('%H:%M:%S')}[/dim] "
        f"#{scan_number} [{color}]{verdict.summary}[/{color}]"
    )


def format_clients_table(clients: list[ClientStatus], out: Console | None = None) -> None:
    out = out or console
    table = Table(title="Monitored Endpoints")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Host")
    table.add_column("User")
    table.add_column("Platform")
    table.add_column("Status")
    table.add_column("Severity")
    table.add_column("Last Seen", style="dim")
    table.add_column("Online")

    for client in clients:
        report = client.last_report
        table.add_row(
            client.identity.id,
            client.identity.host_name,
            client.identity.user_name,
            client.identity.platform,
            Text(str(report.status), style=STATUS_COLORS.get(report.status, "white")),
            Text(str(report.severity), style=SEVERITY_COLORS.get(report.severity, "white")),
            client.last_seen.isoformat(timespec="seconds"),
            "yes" if client.is_online else "no",
        )

    out.print(table)


def format_history_table(
    reports: list[StoredReport], *, title: str = "Report History", out: Console | None = None
) -> None:
    out = out or console
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Endpoint", style="cyan")
    table.add_column("Status")
    table.add_column("Severity")
    table.add_column("Detectors")
    table.add_column("Received", style="dim")

    for stored in reports:
        report = stored.report
        table.add_row(
            str(stored.sequence),
            report.identity.id,
            Text(str(report.status), style=STATUS_COLORS.get(report.status, "white")),
            Text(str(report.severity), style=SEVERITY_COLORS.get(report.severity, "white")),
            ", ".join(report.threat_kinds) or "-",
            stored.received_at.isoformat(timespec="seconds"),
        )

    out.print(table)

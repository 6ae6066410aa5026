# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer

from rdsentinel.core.config import Settings, get_settings

app = typer.Typer(
    name="rdsentinel",
    help="Detect remote desktop access software and report it to a central collector",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"
    SUMMARY = "summary"


def _settings(**overrides: object) -> Settings:
    settings = get_settings()
    updates = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=updates) if updates else settings


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override RDSENTINEL_LOG_LEVEL")
    ] = None,
) -> None:
    from rdsentinel.core.logging import setup_logging

    settings = get_settings()
    setup_logging(
        log_level or settings.log_level,
        settings.log_format,
        settings.log_file,
    )


@app.command()
def scan(
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.CONSOLE,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSON output to this file"),
    ] = None,
    catalog: Annotated[
        str | None,
        typer.Option("--catalog", help="Extra signature catalog (YAML)"),
    ] = None,
) -> None:
    """Run a single scan. Exits with code 1 when remote access is detected."""
    from rdsentinel.scanner.orchestrator import build_orchestrator

    settings = _settings(catalog_path=catalog)
    verdict = asyncio.run(build_orchestrator(settings).run_scan())

    if fmt == OutputFormat.CONSOLE:
        from rdsentinel.cli.formatters.console import format_verdict

        format_verdict(verdict)
    else:
        from rdsentinel.cli.formatters.json_fmt import format_json, format_json_summary

        text = format_json(verdict) if fmt == OutputFormat.JSON else format_json_summary(verdict)
        if output:
            output.write_text(text + "\n", encoding="utf-8")
            typer.echo(f"Output written to {output}")
        else:
            typer.echo(text)

    if verdict.has_remote_access:
        raise typer.Exit(1)


@app.command()
def monitor(
    interval: Annotated[
        float | None,
        typer.Option("--interval", "-i", help="Seconds between scans"),
    ] = None,
) -> None:
    """Scan continuously on this machine until interrupted."""
    settings = _settings(scan_interval=interval)
    try:
        asyncio.run(_async_monitor(settings))
    except KeyboardInterrupt:
        typer.echo("Monitoring stopped.")


async def _async_monitor(settings: Settings) -> None:
    from rdsentinel.alerts.factory import build_alert_router
    from rdsentinel.cli.formatters.console import format_monitor_line
    from rdsentinel.models.verdict import ScanVerdict
    from rdsentinel.scanner.monitor import ScanMonitor
    from rdsentinel.scanner.orchestrator import build_orchestrator

    orchestrator = build_orchestrator(settings, alert_router=build_alert_router(settings))
    scan_monitor = ScanMonitor(orchestrator.run_scan, interval=settings.scan_interval)

    async def _print(verdict: ScanVerdict) -> None:
        format_monitor_line(verdict, scan_monitor.scan_count)

    scan_monitor.add_callback(_print)
    typer.echo(f"Monitoring every {settings.scan_interval}s. Press Ctrl+C to stop.")
    await scan_monitor.start()
    try:
        await asyncio.Event().wait()
    finally:
        await scan_monitor.stop()
        stats = scan_monitor.stats()
        typer.echo(f"Total scans: {stats.scan_count} (skipped ticks: {stats.skipped_count})")


@app.command()
def agent(
    collector_url: Annotated[
        str | None, typer.Option("--collector-url", "-c", help="Collector base URL")
    ] = None,
    interval: Annotated[
        float | None, typer.Option("--interval", "-i", help="Seconds between scans")
    ] = None,
    endpoint_id: Annotated[
        str | None, typer.Option("--endpoint-id", help="Override the endpoint identity id")
    ] = None,
) -> None:
    """Run the client agent: scan periodically and report to the collector."""
    from rdsentinel.client.agent import ClientAgent

    settings = _settings(
        collector_url=collector_url, scan_interval=interval, endpoint_id=endpoint_id
    )
    client_agent = ClientAgent.from_settings(settings)
    asyncio.run(client_agent.run_forever())


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Start the central collector API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "rdsentinel.api.app:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        factory=True,
    )


@app.command()
def local(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8083, "--port", "-p", help="Bind port"),
) -> None:
    """Start the local monitor API (start/stop/scan/status/events)."""
    import uvicorn

    uvicorn.run(
        "rdsentinel.api.local_app:create_local_app",
        host=host,
        port=port,
        factory=True,
    )


@app.command()
def clients() -> None:
    """List every endpoint known to the collector database."""
    asyncio.run(_async_clients())


async def _async_clients() -> None:
    from rdsentinel.cli.formatters.console import format_clients_table
    from rdsentinel.collector.service import CollectorService

    collector = await CollectorService.open(get_settings())
    try:
        format_clients_table(collector.presence.list_clients())
    finally:
        await collector.close()


@app.command()
def history(
    identity_id: Annotated[
        str | None, typer.Argument(help="Endpoint id (omit for the whole fleet)")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum rows")] = 50,
) -> None:
    """Show stored reports, newest first."""
    asyncio.run(_async_history(identity_id, limit))


async def _async_history(identity_id: str | None, limit: int) -> None:
    from rdsentinel.cli.formatters.console import format_history_table
    from rdsentinel.collector.service import CollectorService

    collector = await CollectorService.open(get_settings())
    try:
        if identity_id:
            reports = await collector.store.history_for(identity_id, limit)
            title = f"History for {identity_id}"
        else:
            reports = await collector.store.all(limit)
            title = "Report History"
        format_history_table(reports, title=title)
    finally:
        await collector.close()


if __name__ == "__main__":
    app()

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI application factory for the local monitor API."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rdsentinel import __version__
from rdsentinel.api.middleware import RequestMiddleware
from rdsentinel.api.routes import local
from rdsentinel.collector.broadcaster import Broadcaster
from rdsentinel.core.config import Settings, get_settings
from rdsentinel.models.verdict import ScanVerdict
from rdsentinel.scanner.monitor import ScanMonitor
from rdsentinel.scanner.orchestrator import ScanOrchestrator, build_orchestrator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    yield
    await app.state.monitor.stop()


def create_local_app(
    settings: Settings | None = None,
    *,
    orchestrator: ScanOrchestrator | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    if orchestrator is None:
        from rdsentinel.alerts.factory import build_alert_router

        orchestrator = build_orchestrator(settings, alert_router=build_alert_router(settings))

    verdicts: Broadcaster[ScanVerdict] = Broadcaster(settings.stream_queue_size)

    async def _publish(verdict: ScanVerdict) -> None:
        verdicts.publish(verdict)

    monitor = ScanMonitor(
        orchestrator.run_scan, interval=settings.scan_interval, on_verdict=[_publish]
    )

    app = FastAPI(
        title="rdsentinel-local",
        description="Local remote desktop detection monitor",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.monitor = monitor
    app.state.verdicts = verdicts

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(local.router, prefix="/api/local", tags=["local"])
    app.add_middleware(RequestMiddleware)

    return app

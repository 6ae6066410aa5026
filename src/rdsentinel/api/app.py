# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI application factory for the collector."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rdsentinel import __version__
from rdsentinel.api.middleware import RequestMiddleware
from rdsentinel.api.routes import admin, client, health
from rdsentinel.core.config import Settings, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    from rdsentinel.collector.service import CollectorService

    # StorageError here aborts startup.
    collector = await CollectorService.open(app.state.settings)
    app.state.collector = collector

    yield

    await collector.close()
    app.state.collector = None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="rdsentinel",
        description="Central collector for remote desktop access reports",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.state.settings = settings
    app.state.collector = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(client.router, prefix="/api/client", tags=["client"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
    app.add_middleware(RequestMiddleware)

    return app

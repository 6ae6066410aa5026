# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Request-scoped access to collector components."""

from __future__ import annotations

from fastapi import HTTPException, Request

from rdsentinel.collector.service import CollectorService


def get_collector(request: Request) -> CollectorService:
    collector: CollectorService | None = getattr(request.app.state, "collector", None)
    if collector is None:
        raise HTTPException(status_code=503, detail="Collector not initialized")
    return collector

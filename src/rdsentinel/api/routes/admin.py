# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Admin query surface over fleet presence and report history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rdsentinel.api.auth import require_api_key
from rdsentinel.api.deps import get_collector
from rdsentinel.api.sse import sse_response
from rdsentinel.collector.service import CollectorService
from rdsentinel.models.report import ClientStatus, FleetStats, StoredReport

router = APIRouter(dependencies=[Depends(require_api_key)])


class ClientDetail(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client: ClientStatus
    history: list[StoredReport]


@router.get("/clients", response_model=list[ClientStatus])
async def list_clients(
    collector: CollectorService = Depends(get_collector),
) -> list[ClientStatus]:
    return collector.presence.list_clients()


@router.get("/clients/{identity_id}", response_model=ClientDetail)
async def get_client(
    identity_id: str,
    collector: CollectorService = Depends(get_collector),
) -> ClientDetail:
    detail = await collector.ingestor.client_detail(identity_id, collector.settings.history_limit)
    if detail is None:
        raise HTTPException(status_code=404, detail="Client not found")
    status, history = detail
    return ClientDetail(client=status, history=history)


@router.get("/stats", response_model=FleetStats)
async def get_stats(collector: CollectorService = Depends(get_collector)) -> FleetStats:
    return await collector.ingestor.fleet_stats()


@router.get("/reports", response_model=list[StoredReport])
async def list_reports(
    limit: int | None = Query(default=None, ge=1, le=10000),
    collector: CollectorService = Depends(get_collector),
) -> list[StoredReport]:
    return await collector.store.all(limit or collector.settings.reports_limit)


@router.get("/latest", response_model=list[StoredReport])
async def latest_reports(
    collector: CollectorService = Depends(get_collector),
) -> list[StoredReport]:
    return await collector.store.latest_per_identity()


@router.get("/stream")
async def stream_reports(
    request: Request,
    collector: CollectorService = Depends(get_collector),
) -> StreamingResponse:
    """Push every ingested report, in ingestion order, as ``event: report``."""
    return sse_response(request, collector.broadcaster, "report")

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Local monitor control: start/stop continuous scanning on this machine."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rdsentinel.api.sse import sse_response
from rdsentinel.models.verdict import ScanVerdict
from rdsentinel.scanner.monitor import ScanMonitor

router = APIRouter()


class MonitorStatus(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_active: bool
    scan_count: int
    skipped_count: int
    interval: float
    last_verdict: ScanVerdict | None = None


class ControlResponse(BaseModel):
    success: bool
    message: str
    status: MonitorStatus


def _monitor(request: Request) -> ScanMonitor:
    monitor: ScanMonitor | None = getattr(request.app.state, "monitor", None)
    if monitor is None:
        raise HTTPException(status_code=503, detail="Monitor not initialized")
    return monitor


def _status(monitor: ScanMonitor) -> MonitorStatus:
    stats = monitor.stats()
    return MonitorStatus(
        is_active=stats.is_active,
        scan_count=stats.scan_count,
        skipped_count=stats.skipped_count,
        interval=stats.interval,
        last_verdict=monitor.last_verdict,
    )


@router.post("/start", response_model=ControlResponse)
async def start_monitoring(request: Request) -> ControlResponse:
    monitor = _monitor(request)
    if monitor.running:
        return ControlResponse(
            success=False, message="Monitoring already active", status=_status(monitor)
        )
    await monitor.start()
    return ControlResponse(success=True, message="Monitoring started", status=_status(monitor))


@router.post("/stop", response_model=ControlResponse)
async def stop_monitoring(request: Request) -> ControlResponse:
    monitor = _monitor(request)
    if not monitor.running:
        return ControlResponse(
            success=False, message="Monitoring is not active", status=_status(monitor)
        )
    await monitor.stop()
    return ControlResponse(success=True, message="Monitoring stopped", status=_status(monitor))


@router.get("/scan", response_model=ScanVerdict)
async def scan_once(request: Request) -> ScanVerdict:
    return await _monitor(request).run_once()


@router.get("/status", response_model=MonitorStatus)
async def monitor_status(request: Request) -> MonitorStatus:
    return _status(_monitor(request))


@router.get("/events")
async def verdict_events(request: Request) -> StreamingResponse:
    """Push every local verdict as ``event: verdict``."""
    return sse_response(request, request.app.state.verdicts, "verdict")

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Endpoint that receives scan reports from client agents."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from rdsentinel.api.deps import get_collector
from rdsentinel.collector.service import CollectorService
from rdsentinel.core.exceptions import ReportValidationError, StorageError
from rdsentinel.models.report import Ack

logger = logging.getLogger("rdsentinel.api.routes.client")

router = APIRouter()


def _failure(status_code: int, message: str) -> JSONResponse:
    body = Ack(success=False, message=message).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.post("/report", response_model=Ack, response_model_exclude_none=True)
async def submit_report(
    payload: dict[str, Any] = Body(...),
    collector: CollectorService = Depends(get_collector),
) -> Ack | JSONResponse:
    """Accept one report; the ack carries the assigned sequence number."""
    try:
        return await collector.ingestor.ingest(payload)
    except ReportValidationError as exc:
        logger.warning("Rejected report: %s", exc)
        return _failure(422, str(exc))
    except StorageError as exc:
        logger.error("Error processing report: %s", exc)
        return _failure(500, "Failed to store report")

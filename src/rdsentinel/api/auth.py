# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""API key authentication dependency."""

from __future__ import annotations

from fastapi import HTTPException, Request, Security
from fastapi.security import APIKeyHeader

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(
    request: Request,
    api_key: str | None = Security(_api_key_header),
) -> str:
    """Validate the X-API-Key header.

    If no API keys are configured, authentication is disabled (open access).
    Otherwise the provided key must match one of the configured keys.
    """
    settings = request.app.state.settings

    if not settings.api_keys:
        return "anonymous"

    if not api_key:
        raise HTTPException(status_code=401, detail="Missing X-API-Key header")

    if api_key not in settings.api_keys:
        raise HTTPException(status_code=403, detail="Invalid API key")

    return api_key

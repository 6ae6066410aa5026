# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Webhook alert sink for custom HTTP POST endpoints."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from datetime import UTC, datetime

import httpx

from rdsentinel.alerts.base import AlertSink
from rdsentinel.models.verdict import ScanVerdict

logger = logging.getLogger("rdsentinel.alerts.webhook")

_TIMEOUT_SECONDS = 10.0
SIGNATURE_HEADER = "X-RdSentinel-Signature"


def compute_signature(payload_bytes: bytes, secret: str) -> str:
    """Compute HMAC-SHA256 signature for a payload."""
    return hmac.new(
        secret.encode("utf-8"),
        payload_bytes,
        hashlib.sha256,
    ).hexdigest()


class WebhookAlertSink(AlertSink):
    """POST the verdict as JSON to an HTTP endpoint."""

    def __init__(
        self,
        url: str,
        *,
        secret: str = "",
        timeout: float = _TIMEOUT_SECONDS,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._url = url
        self._secret = secret
        self._timeout = timeout
        self._extra_headers = headers or {}

    @property
    def name(self) -> str:
        return "webhook"

    def is_configured(self) -> bool:
        return bool(self._url)

    @staticmethod
    def build_payload(verdict: ScanVerdict) -> dict[str, object]:
        return {
            "event": "remote_access.detected",
            "timestamp": datetime.now(UTC).isoformat(),
            "verdict": verdict.model_dump(mode="json", by_alias=True),
        }

    async def send(self, verdict: ScanVerdict) -> bool:
        if not self._url:
            logger.warning("Webhook URL not configured")
            return False

        payload = self.build_payload(verdict)
        payload_bytes = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode()

        headers: dict[str, str] = {"Content-Type": "application/json"}
        headers.update(self._extra_headers)
        if self._secret:
            headers[SIGNATURE_HEADER] = compute_signature(payload_bytes, self._secret)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, content=payload_bytes, headers=headers)
                response.raise_for_status()
            logger.info("Webhook alert delivered to %s", self._url)
            return True
        except httpx.HTTPError:
            logger.exception("Failed to deliver webhook alert to %s", self._url)
            return False

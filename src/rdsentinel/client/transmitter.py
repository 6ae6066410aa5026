# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Ship scan verdicts to the central collector over HTTP."""

from __future__ import annotations

import logging

import httpx

from rdsentinel.models.report import ClientReport, EndpointIdentity
from rdsentinel.models.verdict import ScanVerdict

logger = logging.getLogger("rdsentinel.client.transmitter")

REPORT_PATH = "/api/client/report"


class ReportTransmitter:
    """Fire-and-forget report submission.

    Delivery is at-most-once: a failed POST is logged and the report is
    dropped.  The next scan produces a fresh report anyway.
    """

    def __init__(
        self,
        collector_url: str,
        identity: EndpointIdentity,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = collector_url.rstrip("/") + REPORT_PATH
        self._identity = identity
        self._timeout = timeout
        self._client = client
        self.sent_count = 0
        self.failed_count = 0

    @property
    def url(self) -> str:
        return self._url

    @property
    def identity(self) -> EndpointIdentity:
        return self._identity

    def build_report(self, verdict: ScanVerdict) -> ClientReport:
        return ClientReport.from_verdict(self._identity, verdict)

    async def send(self, verdict: ScanVerdict) -> bool:
        report = self.build_report(verdict)
        payload = report.model_dump(mode="json", by_alias=True)

        try:
            if self._client is not None:
                response = await self._client.post(self._url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self.failed_count += 1
            logger.error("Failed to send report to %s: %s", self._url, exc)
            return False

        self.sent_count += 1
        logger.info("Report sent to %s: status=%s", self._url, report.status)
        return True

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Report ingestion: validate, persist, update presence, broadcast."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from rdsentinel.collector.broadcaster import Broadcaster
from rdsentinel.collector.presence import Clock, PresenceTracker, utc_now
from rdsentinel.collector.store import ReportStore
from rdsentinel.core.constants import ReportStatus
from rdsentinel.core.exceptions import ReportValidationError
from rdsentinel.models.report import Ack, ClientReport, ClientStatus, FleetStats, StoredReport

logger = logging.getLogger("rdsentinel.collector.ingestor")


class ReportIngestor:
    """Turns inbound reports into history entries and presence updates.

    The store append and the presence upsert happen under one lock: the
    store is written first and presence is only touched once that succeeded,
    so readers never see one without the other.  Identical reports are not
    de-duplicated.
    """

    def __init__(
        self,
        store: ReportStore,
        presence: PresenceTracker,
        *,
        broadcaster: Broadcaster[StoredReport] | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._presence = presence
        self._broadcaster = broadcaster
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def store(self) -> ReportStore:
        return self._store

    @property
    def presence(self) -> PresenceTracker:
        return self._presence

    @staticmethod
    def validate(payload: ClientReport | dict[str, Any]) -> ClientReport:
        if isinstance(payload, ClientReport):
            return payload
        try:
            return ClientReport.model_validate(payload)
        except ValidationError as exc:
            raise ReportValidationError(f"Invalid report: {exc.error_count()} error(s)") from exc

    async def ingest(self, payload: ClientReport | dict[str, Any]) -> Ack:
        """Record one report.

        Raises:
            ReportValidationError: the payload lacks a valid identity or status.
            StorageError: the history could not be written; presence is untouched.
        """
        report = self.validate(payload)

        async with self._lock:
            received_at = self._clock()
            stored = await self._store.append(report, received_at)
            self._presence.upsert(report, received_at)
            if self._broadcaster is not None:
                self._broadcaster.publish(stored)

        if report.status == ReportStatus.THREAT:
            logger.warning(
                "THREAT from %s (%s@%s): severity=%s kinds=%s",
                report.identity.id,
                report.identity.user_name,
                report.identity.host_name,
                report.severity,
                ",".join(report.threat_kinds),
            )
        else:
            logger.info("Report #%d from %s: clean", stored.sequence, report.identity.id)

        return Ack(success=True, message="Report received", sequence=stored.sequence)

    async def client_detail(
        self, identity_id: str, limit: int = 100
    ) -> tuple[ClientStatus, list[StoredReport]] | None:
        """Presence record and newest-first history of one endpoint.

        Both are read under the ingestion lock, so the history never runs ahead
        of or behind the presence record.  Returns None for unknown endpoints.
        """
        async with self._lock:
            status = self._presence.get(identity_id)
            if status is None:
                return None
            history = await self._store.history_for(identity_id, limit)
        return status, history

    async def fleet_stats(self) -> FleetStats:
        async with self._lock:
            return self._presence.stats()

    async def restore_presence(self) -> int:
        """Rebuild presence from the newest stored report of every endpoint.

        Returns the number of endpoints restored.
        """
        latest = await self._store.latest_per_identity()
        async with self._lock:
            for stored in reversed(latest):
                self._presence.upsert(stored.report, stored.received_at)
        if latest:
            logger.info("Restored presence for %d endpoint(s)", len(latest))
        return len(latest)

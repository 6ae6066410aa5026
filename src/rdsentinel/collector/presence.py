# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Fleet presence: last report and last-seen time per endpoint."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from rdsentinel.core.constants import DEFAULT_PRESENCE_WINDOW_SECONDS, ReportStatus
from rdsentinel.models.report import ClientReport, ClientStatus, FleetStats, PresenceRecord

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class PresenceTracker:
    """In-memory map of identity id to :class:`PresenceRecord`.

    Records are never evicted.  Whether an endpoint is online is computed on
    every read from ``last_seen`` and the window; nothing sweeps the map.
    """

    def __init__(
        self,
        window: float = DEFAULT_PRESENCE_WINDOW_SECONDS,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._window = timedelta(seconds=window)
        self._clock = clock
        self._records: dict[str, PresenceRecord] = {}

    @property
    def window(self) -> timedelta:
        return self._window

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identity_id: object) -> bool:
        return identity_id in self._records

    def upsert(self, report: ClientReport, seen_at: datetime) -> PresenceRecord:
        record = self._records.get(report.identity.id)
        if record is None:
            record = PresenceRecord(identity=report.identity, last_report=report, last_seen=seen_at)
            self._records[report.identity.id] = record
        else:
            record.identity = report.identity
            record.last_report = report
            record.last_seen = seen_at
        return record

    def is_online(self, record: PresenceRecord, now: datetime | None = None) -> bool:
        now = now or self._clock()
        return (now - record.last_seen) < self._window

    def _status(self, record: PresenceRecord, now: datetime) -> ClientStatus:
        return ClientStatus(
            identity=record.identity,
            last_report=record.last_report,
            last_seen=record.last_seen,
            is_online=self.is_online(record, now),
        )

    def get(self, identity_id: str) -> ClientStatus | None:
        record = self._records.get(identity_id)
        if record is None:
            return None
        return self._status(record, self._clock())

    def list_clients(self) -> list[ClientStatus]:
        now = self._clock()
        return [self._status(record, now) for record in self._records.values()]

    def stats(self) -> FleetStats:
        clients = self.list_clients()
        return FleetStats(
            total_clients=len(clients),
            online_clients=sum(1 for c in clients if c.is_online),
            threats_detected=sum(
                1 for c in clients if c.last_report.status == ReportStatus.THREAT
            ),
            clean_systems=sum(1 for c in clients if c.last_report.status == ReportStatus.CLEAN),
        )

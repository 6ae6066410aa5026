# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Append-only report history.

Both stores assign sequence numbers themselves under a lock.  The next
number only advances after the write succeeded, so a failed append leaves
no gap.
"""

from __future__ import annotations

import abc
import asyncio
import logging
from datetime import datetime

import aiosqlite

from rdsentinel.core.exceptions import StorageError
from rdsentinel.models.report import ClientReport, StoredReport
from rdsentinel.storage.reports import ReportRepository

logger = logging.getLogger("rdsentinel.collector.store")


class ReportStore(abc.ABC):
    @abc.abstractmethod
    async def append(self, report: ClientReport, received_at: datetime) -> StoredReport:
        """Persist *report* and return it with its assigned sequence number."""

    @abc.abstractmethod
    async def history_for(self, identity_id: str, limit: int = 100) -> list[StoredReport]:
        """Newest-first history of one endpoint."""

    @abc.abstractmethod
    async def all(self, limit: int = 1000) -> list[StoredReport]:
        """Newest-first history across the fleet."""

    @abc.abstractmethod
    async def latest_per_identity(self) -> list[StoredReport]:
        """The most recent report of every endpoint, newest first."""

    @abc.abstractmethod
    async def count(self) -> int: ...


class MemoryReportStore(ReportStore):
    def __init__(self) -> None:
        self._reports: list[StoredReport] = []
        self._lock = asyncio.Lock()

    async def append(self, report: ClientReport, received_at: datetime) -> StoredReport:
        async with self._lock:
            stored = StoredReport(
                sequence=len(self._reports) + 1, report=report, received_at=received_at
            )
            self._reports.append(stored)
            return stored

    async def history_for(self, identity_id: str, limit: int = 100) -> list[StoredReport]:
        matches = [s for s in reversed(self._reports) if s.report.identity.id == identity_id]
        return matches[:limit]

    async def all(self, limit: int = 1000) -> list[StoredReport]:
        return list(reversed(self._reports))[:limit]

    async def latest_per_identity(self) -> list[StoredReport]:
        latest: dict[str, StoredReport] = {}
        for stored in reversed(self._reports):
            latest.setdefault(stored.report.identity.id, stored)
        return list(latest.values())

    async def count(self) -> int:
        return len(self._reports)


class SQLiteReportStore(ReportStore):
    """Report history in the SQLite ``reports`` table."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._repo = ReportRepository(db)
        self._lock = asyncio.Lock()
        self._last_sequence: int | None = None

    async def _current_sequence(self) -> int:
        if self._last_sequence is None:
            self._last_sequence = await self._repo.max_sequence()
        return self._last_sequence

    async def append(self, report: ClientReport, received_at: datetime) -> StoredReport:
        async with self._lock:
            try:
                sequence = await self._current_sequence() + 1
                stored = StoredReport(sequence=sequence, report=report, received_at=received_at)
                await self._repo.insert(stored)
            except Exception as exc:
                logger.error("Failed to persist report: %s", exc)
                try:
                    await self._repo.rollback()
                except Exception:
                    logger.exception("Rollback after failed insert also failed")
                raise StorageError(f"Failed to persist report: {exc}") from exc
            self._last_sequence = sequence
            return stored

    # Reads share the writer's connection and must not run between an INSERT
    # and its commit.

    async def history_for(self, identity_id: str, limit: int = 100) -> list[StoredReport]:
        async with self._lock:
            return await self._repo.list_for_identity(identity_id, limit)

    async def all(self, limit: int = 1000) -> list[StoredReport]:
        async with self._lock:
            return await self._repo.list_recent(limit)

    async def latest_per_identity(self) -> list[StoredReport]:
        async with self._lock:
            return await self._repo.list_latest_per_identity()

    async def count(self) -> int:
        async with self._lock:
            return await self._repo.count()

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Collector wiring: one object that owns the database and its consumers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import aiosqlite

from rdsentinel.collector.broadcaster import Broadcaster
from rdsentinel.collector.ingestor import ReportIngestor
from rdsentinel.collector.presence import PresenceTracker
from rdsentinel.collector.store import MemoryReportStore, ReportStore, SQLiteReportStore
from rdsentinel.core.config import Settings
from rdsentinel.models.report import StoredReport
from rdsentinel.storage.database import close_db, connect_db

logger = logging.getLogger("rdsentinel.collector.service")


@dataclass
class CollectorService:
    settings: Settings
    store: ReportStore
    presence: PresenceTracker
    broadcaster: Broadcaster[StoredReport]
    ingestor: ReportIngestor
    db: aiosqlite.Connection | None = None

    @classmethod
    async def open(cls, settings: Settings, *, persistent: bool = True) -> CollectorService:
        """Open the report database and rebuild presence from it.

        Raises:
            StorageError: the database cannot be opened or migrated.
        """
        db: aiosqlite.Connection | None = None
        store: ReportStore
        if persistent:
            db = await connect_db(settings.db_path, auto_migrate=settings.auto_migrate)
            store = SQLiteReportStore(db)
        else:
            store = MemoryReportStore()

        presence = PresenceTracker(settings.presence_window)
        broadcaster: Broadcaster[StoredReport] = Broadcaster(settings.stream_queue_size)
        ingestor = ReportIngestor(store, presence, broadcaster=broadcaster)
        await ingestor.restore_presence()

        return cls(
            settings=settings,
            store=store,
            presence=presence,
            broadcaster=broadcaster,
            ingestor=ingestor,
            db=db,
        )

    async def close(self) -> None:
        if self.db is not None:
            await close_db(self.db)
            self.db = None
            logger.info("Collector database closed")

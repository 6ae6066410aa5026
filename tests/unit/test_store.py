# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the in-memory and SQLite report stores."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import aiosqlite
import pytest

from rdsentinel.collector.store import MemoryReportStore, ReportStore, SQLiteReportStore
from rdsentinel.core.constants import ReportStatus, Severity
from rdsentinel.core.exceptions import StorageError
from rdsentinel.storage.database import close_db, connect_db
from rdsentinel.storage.migrations import get_current_version

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def db():
    """In-memory database with all migrations applied."""
    conn = await connect_db(":memory:")
    yield conn
    await close_db(conn)


@pytest.fixture(params=["memory", "sqlite"])
async def store(request, db: aiosqlite.Connection) -> ReportStore:
    if request.param == "memory":
        return MemoryReportStore()
    return SQLiteReportStore(db)


class TestReportStore:
    async def test_sequences_start_at_one_and_increase(self, store: ReportStore, make_report):
        first = await store.append(make_report("pc-1"), T0)
        second = await store.append(make_report("pc-2"), T0)
        assert (first.sequence, second.sequence) == (1, 2)

    async def test_concurrent_appends_are_gapless(self, store: ReportStore, make_report):
        results = await asyncio.gather(
            *(store.append(make_report(f"pc-{i % 5}"), T0) for i in range(40))
        )
        sequences = sorted(r.sequence for r in results)
        assert sequences == list(range(1, 41))
        assert await store.count() == 40

    async def test_history_newest_first_and_bounded(self, store: ReportStore, make_report):
        for i in range(5):
            await store.append(make_report("pc-1"), T0 + timedelta(seconds=i))
        await store.append(make_report("pc-2"), T0)

        history = await store.history_for("pc-1", limit=3)
        assert [s.sequence for s in history] == [5, 4, 3]
        assert all(s.report.identity.id == "pc-1" for s in history)

    async def test_all_newest_first(self, store: ReportStore, make_report):
        for i in range(4):
            await store.append(make_report(f"pc-{i}"), T0)
        reports = await store.all(limit=2)
        assert [s.sequence for s in reports] == [4, 3]

    async def test_latest_per_identity(self, store: ReportStore, make_report):
        await store.append(make_report("pc-1"), T0)
        await store.append(make_report("pc-2"), T0 + timedelta(seconds=1))
        await store.append(
            make_report("pc-1", status=ReportStatus.THREAT, severity=Severity.HIGH),
            T0 + timedelta(seconds=2),
        )

        latest = await store.latest_per_identity()
        by_id = {s.report.identity.id: s for s in latest}
        assert set(by_id) == {"pc-1", "pc-2"}
        assert by_id["pc-1"].sequence == 3
        assert by_id["pc-1"].report.status == ReportStatus.THREAT
        assert by_id["pc-2"].sequence == 2

    async def test_round_trip_preserves_report(self, store: ReportStore, make_report):
        original = make_report("pc-1", status=ReportStatus.THREAT, severity=Severity.CRITICAL)
        await store.append(original, T0)

        (stored,) = await store.history_for("pc-1")
        assert stored.report == original
        assert stored.received_at == T0


class TestSQLiteReportStore:
    async def test_survives_reopen(self, tmp_path, make_report):
        path = tmp_path / "reports.db"
        conn = await connect_db(path)
        await SQLiteReportStore(conn).append(make_report("pc-1"), T0)
        await close_db(conn)

        conn = await connect_db(path)
        try:
            store = SQLiteReportStore(conn)
            assert await store.count() == 1
            stored = await store.append(make_report("pc-1"), T0)
            assert stored.sequence == 2
        finally:
            await close_db(conn)

    async def test_failed_write_leaves_no_gap(self, db: aiosqlite.Connection, make_report):
        store = SQLiteReportStore(db)
        await store.append(make_report("pc-1"), T0)

        original_insert = store._repo.insert
        calls = 0

        async def failing_once(stored):
            nonlocal calls
            calls += 1
            if calls == 1:
                raise aiosqlite.OperationalError("disk I/O error")
            await original_insert(stored)

        store._repo.insert = failing_once  # type: ignore[method-assign]

        with pytest.raises(StorageError):
            await store.append(make_report("pc-1"), T0)

        stored = await store.append(make_report("pc-1"), T0)
        assert stored.sequence == 2
        assert await store.count() == 2

    async def test_read_waits_for_commit_outcome(
        self, db: aiosqlite.Connection, make_report, monkeypatch
    ):
        store = SQLiteReportStore(db)

        async def slow_failing_commit():
            await asyncio.sleep(0.05)
            raise aiosqlite.OperationalError("disk I/O error")

        monkeypatch.setattr(db, "commit", slow_failing_commit)
        append = asyncio.create_task(store.append(make_report("pc-1"), T0))
        await asyncio.sleep(0.01)

        seen = await store.all()
        with pytest.raises(StorageError):
            await append

        assert seen == []
        assert await store.count() == 0


class TestDatabase:
    async def test_migrations_applied(self, db: aiosqlite.Connection):
        assert await get_current_version(db) == 1
        cursor = await db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='reports'"
        )
        assert await cursor.fetchone() is not None

    async def test_unopenable_path_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(StorageError, match="Failed to initialize database"):
            await connect_db(blocker / "sub" / "reports.db")

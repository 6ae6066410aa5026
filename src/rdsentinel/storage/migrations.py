# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Versioned database migrations for the report history.

Applied versions are tracked in a ``schema_migrations`` table.  Each
migration is idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

import aiosqlite

logger = logging.getLogger("rdsentinel.storage.migrations")

MigrationFunc = Callable[[aiosqlite.Connection], Coroutine[Any, Any, None]]


@dataclass(frozen=True, slots=True)
class Migration:
    version: int
    name: str
    func: MigrationFunc


_MIGRATIONS: list[Migration] = []


def _register(version: int, name: str) -> Callable[[MigrationFunc], MigrationFunc]:
    def decorator(fn: MigrationFunc) -> MigrationFunc:
        _MIGRATIONS.append(Migration(version=version, name=name, func=fn))
        return fn

    return decorator


_CREATE_SCHEMA_MIGRATIONS = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


async def get_current_version(db: aiosqlite.Connection) -> int:
    """Return the highest applied migration version, or 0 if none."""
    await db.execute(_CREATE_SCHEMA_MIGRATIONS)
    await db.commit()
    cursor = await db.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
    row = await cursor.fetchone()
    return int(row[0]) if row else 0


async def run_migrations(db: aiosqlite.Connection) -> list[Migration]:
    """Run all pending migrations in order and return those applied."""
    current = await get_current_version(db)
    applied: list[Migration] = []

    for migration in _MIGRATIONS:
        if migration.version <= current:
            continue

        logger.info("Applying migration %03d: %s", migration.version, migration.name)
        await migration.func(db)
        await db.execute(
            "INSERT OR IGNORE INTO schema_migrations (version, name) VALUES (?, ?)",
            (migration.version, migration.name),
        )
        await db.commit()
        applied.append(migration)

    return applied


# =========================================================================
# Migration 001 -- reports table
# =========================================================================

_CREATE_REPORTS = """
CREATE TABLE IF NOT EXISTS reports (
    sequence INTEGER PRIMARY KEY,
    identity_id TEXT NOT NULL,
    host_name TEXT NOT NULL DEFAULT '',
    user_name TEXT NOT NULL DEFAULT '',
    platform TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL,
    severity TEXT NOT NULL,
    findings TEXT NOT NULL DEFAULT '[]',
    submitted_at TEXT NOT NULL,
    received_at TEXT NOT NULL
);
"""

_INDEXES_001 = [
    "CREATE INDEX IF NOT EXISTS idx_reports_identity ON reports(identity_id, sequence);",
    "CREATE INDEX IF NOT EXISTS idx_reports_status ON reports(status);",
]


@_register(1, "reports_table")
async def _migration_001_reports(db: aiosqlite.Connection) -> None:
    await db.execute(_CREATE_REPORTS)
    for idx_sql in _INDEXES_001:
        await db.execute(idx_sql)

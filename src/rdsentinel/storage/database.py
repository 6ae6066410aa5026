# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database connection management.

The connection is owned by whoever opens it (the collector app or a CLI
command) and passed down explicitly.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from rdsentinel.core.exceptions import StorageError
from rdsentinel.storage.migrations import run_migrations

logger = logging.getLogger("rdsentinel.storage.database")

MEMORY_PATH = ":memory:"


async def connect_db(
    db_path: Path | str = "rdsentinel.db",
    *,
    auto_migrate: bool = True,
) -> aiosqlite.Connection:
    """Open a connection, optionally run migrations, return the connection.

    Enables WAL mode for file databases.  Any failure is raised as
    :class:`StorageError` so startup can abort with a clear message.
    """
    db: aiosqlite.Connection | None = None
    try:
        if str(db_path) != MEMORY_PATH:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        db = await aiosqlite.connect(str(db_path))
        db.row_factory = aiosqlite.Row

        if str(db_path) != MEMORY_PATH:
            await db.execute("PRAGMA journal_mode=WAL")

        if auto_migrate:
            await run_migrations(db)

        logger.info("Database ready at %s", db_path)
        return db
    except Exception as exc:
        if db is not None:
            await db.close()
        msg = f"Failed to initialize database at {db_path}: {exc}"
        raise StorageError(msg) from exc


async def close_db(db: aiosqlite.Connection) -> None:
    """Close the database connection."""
    await db.close()

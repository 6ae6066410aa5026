# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite persistence for the collector's report history."""

from rdsentinel.storage.database import close_db, connect_db
from rdsentinel.storage.migrations import run_migrations
from rdsentinel.storage.reports import ReportRepository

__all__ = ["ReportRepository", "close_db", "connect_db", "run_migrations"]

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Central collector: ingestion, presence tracking, history, live stream."""

from rdsentinel.collector.broadcaster import Broadcaster
from rdsentinel.collector.ingestor import ReportIngestor
from rdsentinel.collector.presence import PresenceTracker
from rdsentinel.collector.store import MemoryReportStore, ReportStore, SQLiteReportStore

__all__ = [
    "Broadcaster",
    "MemoryReportStore",
    "PresenceTracker",
    "ReportIngestor",
    "ReportStore",
    "SQLiteReportStore",
]

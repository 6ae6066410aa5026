# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for stored report rows."""

from __future__ import annotations

import json
from datetime import datetime

import aiosqlite

from rdsentinel.models.finding import DetectionFinding
from rdsentinel.models.report import ClientReport, EndpointIdentity, StoredReport


class ReportRepository:
    """Raw SQL access to the ``reports`` table.

    Sequence assignment is the caller's job; this class only writes the
    numbers it is given.
    """

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def insert(self, stored: StoredReport) -> None:
        report = stored.report
        await self._db.execute(
            """
            INSERT INTO reports (
                sequence, identity_id, host_name, user_name, platform,
                status, severity, findings, submitted_at, received_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                stored.sequence,
                report.identity.id,
                report.identity.host_name,
                report.identity.user_name,
                report.identity.platform,
                str(report.status),
                str(report.severity),
                json.dumps(
                    [f.model_dump(mode="json", by_alias=True) for f in report.findings]
                ),
                report.submitted_at.isoformat(),
                stored.received_at.isoformat(),
            ),
        )
        await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()

    async def max_sequence(self) -> int:
        cursor = await self._db.execute("SELECT COALESCE(MAX(sequence), 0) FROM reports")
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def count(self) -> int:
        cursor = await self._db.execute("SELECT COUNT(*) FROM reports")
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def list_for_identity(self, identity_id: str, limit: int) -> list[StoredReport]:
        cursor = await self._db.execute(
            "SELECT * FROM reports WHERE identity_id = ? ORDER BY sequence DESC LIMIT ?",
            (identity_id, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_stored(row) for row in rows]

    async def list_recent(self, limit: int) -> list[StoredReport]:
        cursor = await self._db.execute(
            "SELECT * FROM reports ORDER BY sequence DESC LIMIT ?", (limit,)
        )
        rows = await cursor.fetchall()
        return [self._row_to_stored(row) for row in rows]

    async def list_latest_per_identity(self) -> list[StoredReport]:
        cursor = await self._db.execute(
            """
            SELECT r.* FROM reports r
            JOIN (
                SELECT identity_id, MAX(sequence) AS seq
                FROM reports GROUP BY identity_id
            ) latest ON r.sequence = latest.seq
            ORDER BY r.sequence DESC
            """
        )
        rows = await cursor.fetchall()
        return [self._row_to_stored(row) for row in rows]

    @staticmethod
    def _row_to_stored(row: aiosqlite.Row) -> StoredReport:
        report = ClientReport(
            identity=EndpointIdentity(
                id=row["identity_id"],
                host_name=row["host_name"],
                user_name=row["user_name"],
                platform=row["platform"],
            ),
            status=row["status"],
            severity=row["severity"],
            findings=[DetectionFinding.model_validate(f) for f in json.loads(row["findings"])],
            submitted_at=datetime.fromisoformat(row["submitted_at"]),
        )
        return StoredReport(
            sequence=row["sequence"],
            report=report,
            received_at=datetime.fromisoformat(row["received_at"]),
        )

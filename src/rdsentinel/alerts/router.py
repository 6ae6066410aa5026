# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert router: fans a positive verdict out to registered sinks."""

from __future__ import annotations

import logging

from rdsentinel.alerts.base import AlertSink
from rdsentinel.core.constants import Severity
from rdsentinel.models.verdict import ScanVerdict
from rdsentinel.scanner.severity import severity_rank

logger = logging.getLogger("rdsentinel.alerts.router")


class _SinkEntry:
    def __init__(self, sink: AlertSink, min_severity: Severity) -> None:
        self.sink = sink
        self.min_severity = min_severity

    def matches(self, verdict: ScanVerdict) -> bool:
        return severity_rank(verdict.severity) >= severity_rank(self.min_severity)


class AlertRouter:
    """Dispatch positive verdicts to every sink whose severity floor they meet.

    A failing sink is logged and reported as ``False``; it never prevents
    delivery to the others and never propagates into the scan.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._entries: list[_SinkEntry] = []
        self._enabled = enabled

    @property
    def sinks(self) -> list[AlertSink]:
        return [entry.sink for entry in self._entries]

    def register(self, sink: AlertSink, *, min_severity: Severity = Severity.LOW) -> None:
        self._entries.append(_SinkEntry(sink, min_severity))
        logger.info("Registered alert sink: %s", sink.name)

    async def dispatch(self, verdict: ScanVerdict) -> dict[str, bool]:
        results: dict[str, bool] = {}
        if not self._enabled or not verdict.has_remote_access:
            return results

        for entry in self._entries:
            if not entry.matches(verdict):
                logger.debug(
                    "Sink %s filtered out verdict (severity=%s)", entry.sink.name, verdict.severity
                )
                continue
            try:
                results[entry.sink.name] = await entry.sink.send(verdict)
            except Exception:
                logger.exception("Unhandled error dispatching to alert sink %s", entry.sink.name)
                results[entry.sink.name] = False

        return results

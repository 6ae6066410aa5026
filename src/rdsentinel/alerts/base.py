# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract base class for alert sinks."""

from __future__ import annotations

import abc

from rdsentinel.models.verdict import ScanVerdict


class AlertSink(abc.ABC):
    """Base class for all alert sinks.

    A sink consumes a :class:`ScanVerdict` and produces nothing back.  It is
    only invoked for verdicts where remote access was detected.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Human-readable sink name (e.g. ``'console'``)."""

    @abc.abstractmethod
    async def send(self, verdict: ScanVerdict) -> bool:
        """Deliver an alert for *verdict*.

        Returns:
            ``True`` if the delivery succeeded, ``False`` otherwise.
        """

    def is_configured(self) -> bool:
        return True

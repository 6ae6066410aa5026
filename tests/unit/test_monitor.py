# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the periodic scan monitor."""

from __future__ import annotations

import asyncio

import pytest

from rdsentinel.models.verdict import ScanVerdict
from rdsentinel.scanner.monitor import ScanMonitor


class CountingScan:
    """A scan coroutine that takes *duration* seconds and counts calls."""

    def __init__(self, duration: float = 0.0, verdict: ScanVerdict | None = None) -> None:
        self.duration = duration
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._verdict = verdict or ScanVerdict()

    async def __call__(self) -> ScanVerdict:
        self.calls += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.duration:
                await asyncio.sleep(self.duration)
            return self._verdict
        finally:
            self.active -= 1


class TestScanMonitor:
    def test_rejects_non_positive_interval(self) -> None:
        with pytest.raises(ValueError):
            ScanMonitor(CountingScan(), interval=0)

    async def test_first_scan_runs_immediately(self) -> None:
        scan = CountingScan()
        monitor = ScanMonitor(scan, interval=60)
        await monitor.start()
        await asyncio.sleep(0.05)
        await monitor.stop()

        assert scan.calls == 1
        assert monitor.scan_count == 1

    async def test_runs_periodically(self) -> None:
        scan = CountingScan()
        monitor = ScanMonitor(scan, interval=0.02)
        await monitor.start()
        await asyncio.sleep(0.15)
        await monitor.stop()

        assert scan.calls >= 3

    async def test_overlapping_ticks_are_skipped(self) -> None:
        scan = CountingScan(duration=0.12)
        monitor = ScanMonitor(scan, interval=0.02)
        await monitor.start()
        await asyncio.sleep(0.1)
        await monitor.stop()

        assert scan.max_active == 1
        assert scan.calls == 1
        assert monitor.skipped_count >= 2

    async def test_stop_waits_for_in_flight_scan(self) -> None:
        scan = CountingScan(duration=0.05)
        monitor = ScanMonitor(scan, interval=10)
        await monitor.start()
        await asyncio.sleep(0.01)
        await monitor.stop()

        assert scan.active == 0
        assert monitor.scan_count == 1
        calls = scan.calls
        await asyncio.sleep(0.05)
        assert scan.calls == calls

    async def test_stop_is_idempotent(self) -> None:
        monitor = ScanMonitor(CountingScan(), interval=10)
        await monitor.stop()
        await monitor.start()
        await monitor.stop()
        await monitor.stop()
        assert monitor.running is False

    async def test_start_while_running_is_noop(self) -> None:
        scan = CountingScan()
        monitor = ScanMonitor(scan, interval=10)
        await monitor.start()
        await monitor.start()
        await asyncio.sleep(0.05)
        await monitor.stop()
        assert scan.calls == 1

    async def test_stats(self) -> None:
        monitor = ScanMonitor(CountingScan(), interval=5)
        stats = monitor.stats()
        assert stats.is_active is False
        assert stats.scan_count == 0
        assert stats.interval == 5

        await monitor.start()
        assert monitor.stats().is_active is True
        await monitor.stop()

    async def test_callbacks_receive_verdicts_and_failures_are_contained(
        self, threat_verdict: ScanVerdict
    ) -> None:
        received: list[ScanVerdict] = []

        async def broken(_: ScanVerdict) -> None:
            raise RuntimeError("callback failed")

        async def record(verdict: ScanVerdict) -> None:
            received.append(verdict)

        monitor = ScanMonitor(
            CountingScan(verdict=threat_verdict), interval=10, on_verdict=[broken, record]
        )
        verdict = await monitor.run_once()

        assert received == [verdict]
        assert monitor.last_verdict == threat_verdict

    async def test_scan_failure_does_not_stop_monitor(self) -> None:
        calls = 0

        async def flaky() -> ScanVerdict:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("first scan fails")
            return ScanVerdict()

        monitor = ScanMonitor(flaky, interval=0.02)
        await monitor.start()
        await asyncio.sleep(0.1)
        await monitor.stop()

        assert calls >= 2
        assert monitor.scan_count == calls - 1

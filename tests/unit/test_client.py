# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for endpoint identity, report transmission, and the client agent."""

from __future__ import annotations

import asyncio
import json
import socket

import httpx
import respx

from rdsentinel.client.agent import ClientAgent
from rdsentinel.client.identity import build_identity
from rdsentinel.client.transmitter import ReportTransmitter
from rdsentinel.core.config import Settings
from rdsentinel.models.report import EndpointIdentity
from rdsentinel.models.verdict import ScanVerdict

COLLECTOR = "http://collector.test:8082"
REPORT_URL = f"{COLLECTOR}/api/client/report"


def _identity() -> EndpointIdentity:
    return EndpointIdentity(id="pc-1", host_name="pc", user_name="alice", platform="win32")


class TestBuildIdentity:
    def test_default_id_is_host_and_epoch_millis(self) -> None:
        identity = build_identity()
        host, _, millis = identity.id.rpartition("-")

        assert host == socket.gethostname()
        assert millis.isdigit()
        assert len(millis) >= 13
        assert identity.host_name == socket.gethostname()
        assert identity.user_name

    def test_override_id(self) -> None:
        identity = build_identity("workstation-42", platform="darwin")
        assert identity.id == "workstation-42"
        assert identity.platform == "darwin"


class TestReportTransmitter:
    @respx.mock
    async def test_posts_camel_case_report(self, threat_verdict: ScanVerdict) -> None:
        route = respx.post(REPORT_URL).mock(
            return_value=httpx.Response(200, json={"success": True, "message": "Report received"})
        )
        transmitter = ReportTransmitter(COLLECTOR + "/", _identity())

        assert await transmitter.send(threat_verdict) is True
        body = json.loads(route.calls[0].request.content)
        assert body["identity"] == {
            "id": "pc-1",
            "hostName": "pc",
            "userName": "alice",
            "platform": "win32",
        }
        assert body["status"] == "threat"
        assert body["severity"] == "critical"
        assert "submittedAt" in body
        assert body["findings"][0]["isDetected"] is True
        assert transmitter.sent_count == 1

    @respx.mock
    async def test_server_error_drops_report(self, clean_verdict: ScanVerdict) -> None:
        route = respx.post(REPORT_URL).mock(return_value=httpx.Response(500))
        transmitter = ReportTransmitter(COLLECTOR, _identity())

        assert await transmitter.send(clean_verdict) is False
        assert route.call_count == 1
        assert transmitter.failed_count == 1

    @respx.mock
    async def test_connection_error_returns_false(self, clean_verdict: ScanVerdict) -> None:
        respx.post(REPORT_URL).mock(side_effect=httpx.ConnectError("refused"))
        transmitter = ReportTransmitter(COLLECTOR, _identity())
        assert await transmitter.send(clean_verdict) is False


class TestClientAgent:
    @respx.mock
    async def test_each_scan_is_transmitted(self, clean_verdict: ScanVerdict) -> None:
        route = respx.post(REPORT_URL).mock(return_value=httpx.Response(200, json={}))

        class StaticOrchestrator:
            async def run_scan(self) -> ScanVerdict:
                return clean_verdict

        agent = ClientAgent(
            StaticOrchestrator(),  # type: ignore[arg-type]
            ReportTransmitter(COLLECTOR, _identity()),
            interval=0.02,
        )
        await agent.start()
        await asyncio.sleep(0.1)
        await agent.stop()

        assert route.call_count >= 2
        assert route.call_count == agent.monitor.scan_count

    @respx.mock
    async def test_transmit_failure_does_not_stop_agent(self, clean_verdict: ScanVerdict) -> None:
        respx.post(REPORT_URL).mock(side_effect=httpx.ConnectError("refused"))

        class StaticOrchestrator:
            async def run_scan(self) -> ScanVerdict:
                return clean_verdict

        agent = ClientAgent(
            StaticOrchestrator(),  # type: ignore[arg-type]
            ReportTransmitter(COLLECTOR, _identity()),
            interval=0.02,
        )
        await agent.start()
        await asyncio.sleep(0.1)
        await agent.stop()

        assert agent.monitor.scan_count >= 2
        assert agent.transmitter.failed_count == agent.monitor.scan_count

    def test_from_settings(self) -> None:
        settings = Settings(
            collector_url=COLLECTOR, endpoint_id="pc-7", scan_interval=3, alerts_enabled=False
        )
        agent = ClientAgent.from_settings(settings)

        assert agent.transmitter.identity.id == "pc-7"
        assert agent.transmitter.url == REPORT_URL
        assert agent.monitor.interval == 3

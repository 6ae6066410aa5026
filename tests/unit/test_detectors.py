# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the process, network, and registry detectors."""

from __future__ import annotations

import pytest

from rdsentinel.capabilities.base import (
    PortOwnerResolver,
    PortProber,
    ProcessLister,
    RegistryReader,
)
from rdsentinel.capabilities.registry import UnavailableRegistryReader
from rdsentinel.catalog import SignatureCatalog
from rdsentinel.core.constants import DetectorKind, Severity
from rdsentinel.core.exceptions import CapabilityError
from rdsentinel.detectors.network import NetworkDetector
from rdsentinel.detectors.process import ProcessDetector
from rdsentinel.detectors.registry import RegistryDetector
from rdsentinel.models.signature import RegistryCheck, Signature

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeProcessLister(ProcessLister):
    def __init__(self, names: list[str] | None = None, error: Exception | None = None) -> None:
        self._names = names or []
        self._error = error

    def list_process_names(self) -> list[str]:
        if self._error is not None:
            raise self._error
        return list(self._names)


class FakePortProber(PortProber):
    def __init__(self, open_ports: set[int]) -> None:
        self.open_ports = open_ports
        self.probed: list[tuple[str, int]] = []

    def is_port_in_use(self, host: str, port: int) -> bool:
        self.probed.append((host, port))
        return port in self.open_ports


class FakeOwnerResolver(PortOwnerResolver):
    def __init__(self, owners: dict[int, str]) -> None:
        self._owners = owners

    def owner_of(self, port: int) -> str | None:
        return self._owners.get(port)


class FakeRegistryReader(RegistryReader):
    def __init__(self, keys: set[tuple[str, str]], failing: set[tuple[str, str]] | None = None):
        self._keys = keys
        self._failing = failing or set()
        self.lookups: list[tuple[str, str]] = []

    @property
    def available(self) -> bool:
        return True

    def key_exists(self, hive: str, key: str) -> bool:
        self.lookups.append((hive, key))
        if (hive, key) in self._failing:
            raise CapabilityError("access denied")
        return (hive, key) in self._keys


def _catalog() -> SignatureCatalog:
    return SignatureCatalog(
        [
            Signature(
                name="TeamViewer",
                process_names=("TeamViewer.exe", "TeamViewer_Service.exe"),
                registry_keys=("HKLM\\SOFTWARE\\TeamViewer", "HKCU\\Software\\TeamViewer"),
                common_ports=(5938,),
                severity=Severity.CRITICAL,
            ),
            Signature(
                name="AnyDesk",
                process_names=("AnyDesk.exe",),
                registry_keys=("HKLM\\SOFTWARE\\AnyDesk",),
                common_ports=(7070,),
                severity=Severity.HIGH,
            ),
            Signature(
                name="Windows RDP",
                process_names=("mstsc.exe",),
                common_ports=(3389,),
                severity=Severity.MEDIUM,
            ),
            Signature(
                name="Splashtop",
                process_names=("SRService.exe",),
                registry_keys=("HKLM\\SOFTWARE\\Splashtop Inc.",),
                common_ports=(6783, 6784),
                severity=Severity.HIGH,
            ),
        ],
        [
            RegistryCheck(
                hive="HKLM",
                key="SYSTEM\\CurrentControlSet\\Control\\Terminal Server",
                description="RDP Enabled Status",
            )
        ],
    )


# ---------------------------------------------------------------------------
# Process detector
# ---------------------------------------------------------------------------


class TestProcessDetector:
    async def test_teamviewer_running(self) -> None:
        detector = ProcessDetector(_catalog(), FakeProcessLister(["TeamViewer.exe", "explorer.exe"]))
        finding = await detector.detect()

        assert finding.detector_type == DetectorKind.PROCESS
        assert finding.is_detected is True
        assert finding.severity == Severity.CRITICAL
        assert finding.detected_items == ("TeamViewer",)
        assert finding.details == "Found 1 remote desktop application(s) running: TeamViewer"

    async def test_case_insensitive_and_deduplicated(self) -> None:
        lister = FakeProcessLister(
            ["anydesk.EXE", "TEAMVIEWER.exe", "TeamViewer_Service.exe", "AnyDesk.exe"]
        )
        finding = await ProcessDetector(_catalog(), lister).detect()

        assert finding.detected_items == ("AnyDesk", "TeamViewer")
        assert finding.severity == Severity.CRITICAL

    async def test_partial_names_do_not_match(self) -> None:
        lister = FakeProcessLister(["TeamViewer.exe.old", "myAnyDesk.exe"])
        finding = await ProcessDetector(_catalog(), lister).detect()

        assert finding.is_detected is False
        assert finding.severity == Severity.LOW
        assert finding.details == "No remote desktop processes detected"

    async def test_capability_failure_becomes_clean_finding(self) -> None:
        lister = FakeProcessLister(error=CapabilityError("permission denied"))
        finding = await ProcessDetector(_catalog(), lister).detect()

        assert finding.is_detected is False
        assert finding.details == "Error during process detection: permission denied"

    async def test_is_detected_quick_check(self) -> None:
        detector = ProcessDetector(_catalog(), FakeProcessLister(["mstsc.exe"]))
        assert await detector.is_detected() is True


# ---------------------------------------------------------------------------
# Network detector
# ---------------------------------------------------------------------------


class TestNetworkDetector:
    async def test_rdp_port_is_critical(self) -> None:
        detector = NetworkDetector(_catalog(), FakePortProber({3389}))
        finding = await detector.detect()

        assert finding.is_detected is True
        assert finding.severity == Severity.CRITICAL
        assert finding.detected_items == ("Windows RDP - Port 3389 (Process: Unknown)",)

    async def test_rdp_is_critical_regardless_of_others(self) -> None:
        detector = NetworkDetector(_catalog(), FakePortProber({7070, 6783, 3389}))
        finding = await detector.detect()
        assert finding.severity == Severity.CRITICAL

    async def test_three_ordinary_ports_are_high(self) -> None:
        detector = NetworkDetector(_catalog(), FakePortProber({7070, 6783, 6784}))
        finding = await detector.detect()

        assert finding.severity == Severity.HIGH
        assert len(finding.detected_items) == 3

    async def test_single_ordinary_port_is_medium_with_owner(self) -> None:
        detector = NetworkDetector(
            _catalog(),
            FakePortProber({7070}),
            owner_resolver=FakeOwnerResolver({7070: "AnyDesk.exe"}),
        )
        finding = await detector.detect()

        assert finding.severity == Severity.MEDIUM
        assert finding.detected_items == ("AnyDesk - Port 7070 (Process: AnyDesk.exe)",)
        assert finding.details.startswith("Found 1 active remote desktop port(s): ")

    async def test_probes_each_port_once_on_configured_host(self) -> None:
        prober = FakePortProber(set())
        await NetworkDetector(_catalog(), prober, host="127.0.0.1").detect()

        ports = [port for _, port in prober.probed]
        assert sorted(ports) == [3389, 5938, 6783, 6784, 7070]
        assert {host for host, _ in prober.probed} == {"127.0.0.1"}

    async def test_nothing_listening(self) -> None:
        finding = await NetworkDetector(_catalog(), FakePortProber(set())).detect()
        assert finding.is_detected is False
        assert finding.details == "No remote desktop ports detected"

    async def test_owner_lookup_failure_falls_back_to_unknown(self) -> None:
        class BrokenResolver(PortOwnerResolver):
            def owner_of(self, port: int) -> str | None:
                raise RuntimeError("boom")

        detector = NetworkDetector(
            _catalog(), FakePortProber({5938}), owner_resolver=BrokenResolver()
        )
        finding = await detector.detect()
        assert finding.detected_items == ("TeamViewer - Port 5938 (Process: Unknown)",)


# ---------------------------------------------------------------------------
# Registry detector
# ---------------------------------------------------------------------------


class TestRegistryDetector:
    async def test_unavailable_registry_is_explained(self) -> None:
        detector = RegistryDetector(_catalog(), UnavailableRegistryReader())
        finding = await detector.detect()

        assert finding.is_detected is False
        assert finding.details == "Registry detection only available on Windows"

    async def test_short_circuits_on_first_key(self) -> None:
        reader = FakeRegistryReader({("HKLM", "SOFTWARE\\TeamViewer"), ("HKCU", "Software\\TeamViewer")})
        finding = await RegistryDetector(_catalog(), reader).detect()

        assert finding.detected_items == ("TeamViewer",)
        assert ("HKCU", "Software\\TeamViewer") not in reader.lookups
        assert finding.severity == Severity.MEDIUM

    @pytest.mark.parametrize(
        ("keys", "expected"),
        [
            ({("HKLM", "SOFTWARE\\TeamViewer"), ("HKLM", "SOFTWARE\\AnyDesk")}, Severity.HIGH),
            (
                {
                    ("HKLM", "SOFTWARE\\TeamViewer"),
                    ("HKLM", "SOFTWARE\\AnyDesk"),
                    ("HKLM", "SYSTEM\\CurrentControlSet\\Control\\Terminal Server"),
                },
                Severity.CRITICAL,
            ),
        ],
    )
    async def test_severity_by_count(self, keys: set, expected: Severity) -> None:
        finding = await RegistryDetector(_catalog(), FakeRegistryReader(keys)).detect()
        assert finding.severity == expected

    async def test_configuration_check_reported_by_description(self) -> None:
        reader = FakeRegistryReader({("HKLM", "SYSTEM\\CurrentControlSet\\Control\\Terminal Server")})
        finding = await RegistryDetector(_catalog(), reader).detect()

        assert finding.detected_items == ("RDP Enabled Status",)
        assert finding.details == (
            "Found 1 remote desktop registry entry/entries: RDP Enabled Status"
        )

    async def test_failed_lookup_treated_as_absent(self) -> None:
        reader = FakeRegistryReader(
            {("HKCU", "Software\\TeamViewer")},
            failing={("HKLM", "SOFTWARE\\TeamViewer")},
        )
        finding = await RegistryDetector(_catalog(), reader).detect()
        assert finding.detected_items == ("TeamViewer",)

    async def test_nothing_installed(self) -> None:
        finding = await RegistryDetector(_catalog(), FakeRegistryReader(set())).detect()
        assert finding.is_detected is False
        assert finding.details == "No remote desktop registry entries detected"

    async def test_marker_without_hive_is_never_looked_up(self) -> None:
        catalog = SignatureCatalog(
            [
                Signature(
                    name="Windows RDP",
                    registry_keys=("SYSTEM\\CurrentControlSet\\Control\\Terminal Server",),
                    severity=Severity.CRITICAL,
                )
            ]
        )
        reader = FakeRegistryReader(
            {("HKLM", "SYSTEM\\CurrentControlSet\\Control\\Terminal Server")}
        )
        finding = await RegistryDetector(catalog, reader).detect()

        assert finding.is_detected is False
        assert reader.lookups == []

    async def test_stock_windows_host_is_not_critical(self) -> None:
        reader = FakeRegistryReader(
            {
                ("HKLM", "SYSTEM\\CurrentControlSet\\Control\\Terminal Server"),
                (
                    "HKLM",
                    "SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion\\Terminal Server"
                    "\\TSAppAllowList",
                ),
            }
        )
        finding = await RegistryDetector(SignatureCatalog.builtin(), reader).detect()

        assert finding.detected_items == (
            "Windows Remote Desktop enabled status",
            "RDP App Allow List",
        )
        assert finding.severity == Severity.HIGH

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Builtin catalog of known remote-access products."""

from __future__ import annotations

from rdsentinel.core.constants import Severity
from rdsentinel.models.signature import RegistryCheck, Signature


def _sig(
    name: str,
    processes: list[str],
    severity: Severity,
    *,
    keys: list[str] | None = None,
    ports: list[int] | None = None,
) -> Signature:
    return Signature(
        name=name,
        process_names=tuple(processes),
        registry_keys=tuple(keys or ()),
        common_ports=tuple(ports or ()),
        severity=severity,
    )


KNOWN_REMOTE_APPS: tuple[Signature, ...] = (
    _sig(
        "TeamViewer",
        ["TeamViewer.exe", "TeamViewer_Service.exe", "tv_w32.exe", "tv_x64.exe"],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\TeamViewer", "HKLM\\SOFTWARE\\WOW6432Node\\TeamViewer"],
        ports=[5938, 5939],
    ),
    _sig(
        "AnyDesk",
        ["AnyDesk.exe", "AnyDeskService.exe"],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\AnyDesk", "HKLM\\SOFTWARE\\WOW6432Node\\AnyDesk"],
        ports=[7070],
    ),
    _sig(
        "Chrome Remote Desktop",
        ["remoting_host.exe", "chrome_remote_desktop_host.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\Google\\Chrome Remote Desktop"],
        ports=[443],
    ),
    _sig(
        "Windows RDP",
        ["mstsc.exe", "RdpSa.exe", "rdpclip.exe"],
        Severity.CRITICAL,
        ports=[3389],
    ),
    _sig(
        "VNC",
        ["vncviewer.exe", "winvnc.exe", "tvnserver.exe", "vncserver.exe"],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\RealVNC", "HKLM\\SOFTWARE\\TightVNC"],
        ports=[5900, 5901, 5902],
    ),
    _sig(
        "LogMeIn",
        ["LogMeIn.exe", "LMIGuardianSvc.exe", "LogMeInSystray.exe", "ramaint.exe"],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\LogMeIn", "HKLM\\SYSTEM\\CurrentControlSet\\Services\\LogMeIn"],
        ports=[443, 5500],
    ),
    _sig(
        "Splashtop",
        [
            "Splashtop.exe",
            "SplashtopService.exe",
            "Splashtop-streamer.exe",
            "SRFeature.exe",
            "SRService.exe",
        ],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\Splashtop Inc.", "HKLM\\SOFTWARE\\Splashtop"],
        ports=[6783, 443],
    ),
    _sig(
        "GoToMyPC",
        ["g2mui.exe", "g2tray.exe", "g2pre.exe", "g2comm.exe", "g2svc.exe"],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\Citrix\\GoToMyPC"],
        ports=[8200],
    ),
    _sig(
        "Ammyy Admin",
        ["AA_v3.exe", "AMMYY_Admin.exe", "AMMYY.exe"],
        Severity.CRITICAL,
        keys=["HKCU\\SOFTWARE\\Ammyy"],
        ports=[5931],
    ),
    _sig(
        "UltraVNC",
        ["winvnc.exe", "vncviewer.exe", "ultravnc.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\ORL\\WinVNC3", "HKLM\\SOFTWARE\\UltraVNC"],
        ports=[5900, 5800],
    ),
    _sig(
        "RealVNC",
        ["vncserver.exe", "vncviewer.exe", "realvnc.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\RealVNC", "HKCU\\SOFTWARE\\RealVNC"],
        ports=[5900, 5800],
    ),
    _sig(
        "TightVNC",
        ["tvnserver.exe", "tvnviewer.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\TightVNC"],
        ports=[5900, 5800],
    ),
    _sig(
        "DameWare",
        ["dwrcs.exe", "DWRCC.exe", "DameWare.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\SolarWinds\\DameWare"],
        ports=[6129, 6130],
    ),
    _sig(
        "RemotePC",
        ["RemotePC.exe", "RPCService.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\RemotePC"],
        ports=[443],
    ),
    _sig(
        "ScreenConnect (ConnectWise)",
        ["ScreenConnect.Service.exe", "ScreenConnect.ClientService.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\ScreenConnect"],
        ports=[8040, 8041],
    ),
    _sig(
        "Radmin",
        ["r_server.exe", "Radmin.exe", "RServer3.exe"],
        Severity.CRITICAL,
        keys=["HKLM\\SOFTWARE\\Radmin", "HKLM\\SYSTEM\\RAdmin"],
        ports=[4899],
    ),
    _sig(
        "pcAnywhere",
        ["awhost32.exe", "awrem32.exe", "pcanywhere.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\Symantec\\pcAnywhere"],
        ports=[5631, 5632],
    ),
    _sig(
        "Zoho Assist",
        ["ZohoAssist.exe", "ZohoMeeting.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\Zoho\\Assist"],
        ports=[443, 8080],
    ),
    _sig(
        "Mikogo",
        ["Mikogo-Service.exe", "Mikogo.exe"],
        Severity.MEDIUM,
        keys=["HKLM\\SOFTWARE\\BeamYourScreen"],
        ports=[6800],
    ),
    _sig(
        "ShowMyPC",
        ["ShowMyPC.exe"],
        Severity.MEDIUM,
        keys=["HKCU\\SOFTWARE\\ShowMyPC"],
        ports=[3999],
    ),
    _sig(
        "BeyondTrust (Bomgar)",
        ["bomgar-scc.exe", "bomgar-rep.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\Bomgar"],
        ports=[443, 8443],
    ),
    _sig(
        "VNC Connect",
        ["vncserver.exe", "vncconnect.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\RealVNC\\vncserver"],
        ports=[5900],
    ),
    _sig(
        "NoMachine",
        ["nxservice.exe", "nxserver.exe", "nxnode.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\NoMachine"],
        ports=[4000, 4080],
    ),
    _sig(
        "RemoteUtilities",
        ["rutserv.exe", "rfusclient.exe", "rutview.exe"],
        Severity.HIGH,
        keys=["HKLM\\SOFTWARE\\Remote Utilities"],
        ports=[5650, 5655],
    ),
    _sig(
        "AeroAdmin",
        ["AeroAdmin.exe"],
        Severity.MEDIUM,
        keys=["HKCU\\SOFTWARE\\AeroAdmin"],
        ports=[5950],
    ),
    _sig(
        "FixMe.IT",
        ["FixMeIT.exe", "FixMeStick.exe"],
        Severity.MEDIUM,
        keys=["HKLM\\SOFTWARE\\TigerVNC"],
        ports=[443],
    ),
    _sig(
        "GetScreen",
        ["GetScreen.exe", "gsservice.exe", "GetScreenHost.exe"],
        Severity.CRITICAL,
        keys=[
            "HKLM\\SOFTWARE\\GetScreen",
            "HKCU\\SOFTWARE\\GetScreen",
            "HKLM\\SOFTWARE\\WOW6432Node\\GetScreen",
        ],
        ports=[443, 8443],
    ),
)

REGISTRY_CHECKS: tuple[RegistryCheck, ...] = (
    RegistryCheck(
        hive="HKLM",
        key="SYSTEM\\CurrentControlSet\\Control\\Terminal Server",
        description="Windows Remote Desktop enabled status",
    ),
    RegistryCheck(
        hive="HKLM",
        key="SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion\\Terminal Server\\TSAppAllowList",
        description="RDP App Allow List",
    ),
)

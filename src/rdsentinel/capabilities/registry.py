# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Windows registry capability and its no-op counterpart."""

from __future__ import annotations

import sys

from rdsentinel.capabilities.base import RegistryReader
from rdsentinel.core.exceptions import CapabilityError, CapabilityUnavailableError

_HIVE_ALIASES = {
    "HKLM": "HKLM",
    "HKEY_LOCAL_MACHINE": "HKLM",
    "HKCU": "HKCU",
    "HKEY_CURRENT_USER": "HKCU",
    "HKCR": "HKCR",
    "HKEY_CLASSES_ROOT": "HKCR",
}


def split_registry_path(path: str) -> tuple[str, str]:
    """Split ``HKLM\\SOFTWARE\\Foo`` into ``("HKLM", "SOFTWARE\\Foo")``.

    Raises ValueError for paths that do not start with a known hive; such
    markers are never looked up.
    """
    head, sep, rest = path.partition("\\")
    hive = _HIVE_ALIASES.get(head.upper())
    if hive is None:
        raise ValueError(f"Registry path has no recognised hive: {path!r}")
    if not sep or not rest:
        raise ValueError(f"Registry path has no key below the hive: {path!r}")
    return hive, rest


class WinRegistryReader(RegistryReader):
    """Read-only registry lookups through the standard ``winreg`` module."""

    def __init__(self) -> None:
        import winreg

        self._winreg = winreg
        self._hives = {
            "HKLM": winreg.HKEY_LOCAL_MACHINE,
            "HKCU": winreg.HKEY_CURRENT_USER,
            "HKCR": winreg.HKEY_CLASSES_ROOT,
        }

    @property
    def available(self) -> bool:
        return True

    def key_exists(self, hive: str, key: str) -> bool:
        root = self._hives.get(hive)
        if root is None:
            raise CapabilityError(f"Unsupported registry hive: {hive}")
        try:
            with self._winreg.OpenKey(root, key):
                return True
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise CapabilityError(f"Registry lookup failed for {hive}\\{key}: {exc}") from exc


class UnavailableRegistryReader(RegistryReader):
    """Stand-in for platforms or builds without a registry."""

    def __init__(self, reason: str = "Registry detection only available on Windows") -> None:
        self._reason = reason

    @property
    def available(self) -> bool:
        return False

    @property
    def unavailable_reason(self) -> str:
        return self._reason

    def key_exists(self, hive: str, key: str) -> bool:
        raise CapabilityUnavailableError(self._reason)


def select_registry_reader(platform: str | None = None) -> RegistryReader:
    """Pick the registry implementation once, at startup, from the platform tag."""
    if (platform or sys.platform) == "win32":
        return WinRegistryReader()
    return UnavailableRegistryReader()

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract OS capability interfaces.

Detectors depend only on these narrow interfaces so tests can substitute
fakes and platforms without a capability can plug in a no-op.
"""

from __future__ import annotations

import abc


class ProcessLister(abc.ABC):
    @abc.abstractmethod
    def list_process_names(self) -> list[str]:
        """Return the executable names of all running processes.

        Raises:
            CapabilityError: if the process table cannot be read.
        """


class PortProber(abc.ABC):
    @abc.abstractmethod
    def is_port_in_use(self, host: str, port: int) -> bool:
        """Return ``True`` if something accepts TCP connections on *host*:*port*."""


class PortOwnerResolver(abc.ABC):
    @abc.abstractmethod
    def owner_of(self, port: int) -> str | None:
        """Best-effort name of the process bound to *port*, or ``None``."""


class RegistryReader(abc.ABC):
    @property
    @abc.abstractmethod
    def available(self) -> bool:
        """Whether registry lookups can be performed on this host."""

    @property
    def unavailable_reason(self) -> str:
        return ""

    @abc.abstractmethod
    def key_exists(self, hive: str, key: str) -> bool:
        """Return ``True`` if *key* exists under *hive* (``HKLM``, ``HKCU``, ``HKCR``).

        Raises:
            CapabilityUnavailableError: when :attr:`available` is ``False``.
        """

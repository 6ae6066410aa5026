# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""OS capability interfaces used by the detectors, and their implementations."""

from rdsentinel.capabilities.base import (
    PortOwnerResolver,
    PortProber,
    ProcessLister,
    RegistryReader,
)
from rdsentinel.capabilities.registry import (
    UnavailableRegistryReader,
    WinRegistryReader,
    select_registry_reader,
)
from rdsentinel.capabilities.system import (
    PsutilPortOwnerResolver,
    PsutilProcessLister,
    SocketPortProber,
)

__all__ = [
    "PortOwnerResolver",
    "PortProber",
    "ProcessLister",
    "PsutilPortOwnerResolver",
    "PsutilProcessLister",
    "RegistryReader",
    "SocketPortProber",
    "UnavailableRegistryReader",
    "WinRegistryReader",
    "select_registry_reader",
]

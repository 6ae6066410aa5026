# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cross-platform process and port capabilities backed by psutil and sockets."""

from __future__ import annotations

import logging
import socket

import psutil

from rdsentinel.capabilities.base import PortOwnerResolver, PortProber, ProcessLister
from rdsentinel.core.exceptions import CapabilityError

logger = logging.getLogger("rdsentinel.capabilities.system")

_OWNER_STATES = frozenset({psutil.CONN_LISTEN, psutil.CONN_ESTABLISHED})


class PsutilProcessLister(ProcessLister):
    def list_process_names(self) -> list[str]:
        names: list[str] = []
        try:
            for proc in psutil.process_iter(attrs=["name"]):
                name = proc.info.get("name")
                if name:
                    names.append(name)
        except psutil.Error as exc:
            raise CapabilityError(f"Failed to enumerate processes: {exc}") from exc
        return names


class SocketPortProber(PortProber):
    """TCP connect probe with a bounded timeout."""

    def __init__(self, timeout: float = 0.5) -> None:
        self._timeout = timeout

    def is_port_in_use(self, host: str, port: int) -> bool:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        try:
            return sock.connect_ex((host, port)) == 0
        except OSError:
            return False
        finally:
            sock.close()


class PsutilPortOwnerResolver(PortOwnerResolver):
    def owner_of(self, port: int) -> str | None:
        try:
            connections = psutil.net_connections(kind="inet")
        except (psutil.Error, OSError) as exc:
            logger.debug("Cannot list connections for port %d: %s", port, exc)
            return None

        for conn in connections:
            if not conn.laddr or conn.laddr.port != port:
                continue
            if conn.status not in _OWNER_STATES or not conn.pid:
                continue
            try:
                return psutil.Process(conn.pid).name()
            except psutil.Error:
                continue
        return None

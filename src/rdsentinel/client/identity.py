# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Endpoint identity discovery."""

from __future__ import annotations

import getpass
import logging
import socket
import sys
import time

from rdsentinel.models.report import EndpointIdentity

logger = logging.getLogger("rdsentinel.client.identity")


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError) as exc:
        logger.debug("Could not determine user name: %s", exc)
        return "unknown"


def build_identity(endpoint_id: str = "", *, platform: str | None = None) -> EndpointIdentity:
    """Build the identity this endpoint reports under.

    Without an override the id is ``<hostname>-<epoch milliseconds>``, so a
    restarted agent shows up as a new endpoint unless ``endpoint_id`` is set.
    """
    host_name = socket.gethostname()
    identity_id = endpoint_id or f"{host_name}-{int(time.time() * 1000)}"
    return EndpointIdentity(
        id=identity_id,
        host_name=host_name,
        user_name=_current_user(),
        platform=platform or sys.platform,
    )

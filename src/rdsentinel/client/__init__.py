# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Endpoint-side agent: scan locally, report to the collector."""

from rdsentinel.client.agent import ClientAgent
from rdsentinel.client.identity import build_identity
from rdsentinel.client.transmitter import ReportTransmitter

__all__ = ["ClientAgent", "ReportTransmitter", "build_identity"]

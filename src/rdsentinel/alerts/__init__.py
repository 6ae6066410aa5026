# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert sinks that react to positive scan verdicts."""

from rdsentinel.alerts.base import AlertSink
from rdsentinel.alerts.console import ConsoleAlertSink
from rdsentinel.alerts.factory import build_alert_router
from rdsentinel.alerts.log import LogAlertSink
from rdsentinel.alerts.router import AlertRouter
from rdsentinel.alerts.webhook import WebhookAlertSink

__all__ = [
    "AlertRouter",
    "AlertSink",
    "ConsoleAlertSink",
    "LogAlertSink",
    "WebhookAlertSink",
    "build_alert_router",
]

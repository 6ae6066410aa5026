# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Factory to build an AlertRouter from application settings."""

from __future__ import annotations

import logging

from rdsentinel.alerts.console import ConsoleAlertSink
from rdsentinel.alerts.log import LogAlertSink
from rdsentinel.alerts.router import AlertRouter
from rdsentinel.alerts.webhook import WebhookAlertSink
from rdsentinel.core.config import Settings

logger = logging.getLogger("rdsentinel.alerts.factory")


def build_alert_router(settings: Settings) -> AlertRouter:
    """Create an :class:`AlertRouter` from :class:`Settings`.

    Sinks listed in ``settings.alert_channels`` are registered.  When the list
    is empty the console and log sinks are always used, plus the webhook sink
    if a URL is configured.
    """
    router = AlertRouter(enabled=settings.alerts_enabled)
    channels = list(dict.fromkeys(settings.alert_channels))

    if not channels:
        channels = ["console", "log"]
        if settings.webhook_url:
            channels.append("webhook")

    for channel in channels:
        if channel == "console":
            router.register(ConsoleAlertSink())
        elif channel == "log":
            router.register(LogAlertSink())
        elif channel == "webhook" and settings.webhook_url:
            router.register(WebhookAlertSink(settings.webhook_url, secret=settings.webhook_secret))
        else:
            logger.warning("Alert channel '%s' requested but not configured", channel)

    return router

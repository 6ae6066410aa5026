# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging with sensitive data redaction."""

import json
import logging
import re
import sys
from pathlib import Path
from typing import Any

REDACT_PATTERNS = [
    re.compile(r"(Bearer\s+[a-zA-Z0-9\-._~+/]{4})[a-zA-Z0-9\-._~+/]*"),
    re.compile(r"(X-API-Key[\"']?\s*[:=]\s*[\"']?[a-zA-Z0-9]{4})[a-zA-Z0-9\-_]*", re.IGNORECASE),
    re.compile(r"(https://hooks\.slack\.com/services/)[A-Za-z0-9/]+"),
    re.compile(r"([?&](?:token|secret|key)=)[^&\s]+", re.IGNORECASE),
]


def redact_sensitive(text: str) -> str:
    for pattern in REDACT_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact_sensitive(str(record.exc_info[1]))
        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        return redact_sensitive(msg)


_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", fmt: str = "json", log_file: str = "") -> None:
    """Configure the ``rdsentinel`` logger tree.

    A stderr handler is always installed.  When *log_file* is set, detection
    events are additionally appended to that file in text form.
    """
    root = logging.getLogger("rdsentinel")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter(_TEXT_FORMAT))
    root.addHandler(handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(TextFormatter(_TEXT_FORMAT))
        root.addHandler(file_handler)

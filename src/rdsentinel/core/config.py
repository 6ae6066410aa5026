# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _split_csv(v: object) -> list[str]:
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v if isinstance(v, list) else []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RDSENTINEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Client agent
    collector_url: str = "http://localhost:8082"
    scan_interval: float = 10.0
    endpoint_id: str = ""
    transmit_timeout: float = 10.0

    # Collector
    db_path: Path = Path("rdsentinel.db")
    auto_migrate: bool = True
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    api_keys: Annotated[list[str], NoDecode] = []
    cors_origins: Annotated[list[str], NoDecode] = ["*"]
    presence_window: float = 30.0
    history_limit: int = 100
    reports_limit: int = 1000
    stream_queue_size: int = 100

    @field_validator("api_keys", "cors_origins", mode="before")
    @classmethod
    def _parse_csv_lists(cls, v: object) -> list[str]:
        return _split_csv(v)

    # Detection
    catalog_path: str = ""
    probe_host: str = "127.0.0.1"
    port_probe_timeout: float = 0.5
    critical_ports: Annotated[list[int], NoDecode] = [3389, 5900, 5901, 5902, 5938, 5939]
    port_high_threshold: int = 3
    registry_critical_threshold: int = 3
    registry_high_threshold: int = 2

    @field_validator("critical_ports", mode="before")
    @classmethod
    def _parse_critical_ports(cls, v: object) -> list[int]:
        if isinstance(v, str):
            return [int(p) for p in _split_csv(v)]
        return v if isinstance(v, list) else []

    # Alerts
    alerts_enabled: bool = True
    alert_channels: Annotated[list[str], NoDecode] = []
    webhook_url: str = ""
    webhook_secret: str = ""

    @field_validator("alert_channels", mode="before")
    @classmethod
    def _parse_alert_channels(cls, v: object) -> list[str]:
        return _split_csv(v)

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str = ""


def get_settings() -> Settings:
    return Settings()

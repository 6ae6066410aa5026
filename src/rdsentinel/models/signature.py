# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Remote-access product signature models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rdsentinel.core.constants import Severity


class Signature(BaseModel):
    """Identifying markers of one known remote-access product."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    process_names: tuple[str, ...] = ()
    registry_keys: tuple[str, ...] = ()
    common_ports: tuple[int, ...] = ()
    severity: Severity

    def matches_process(self, process_name: str) -> bool:
        """Case-insensitive exact match against the process markers."""
        lowered = process_name.lower()
        return any(marker.lower() == lowered for marker in self.process_names)


class RegistryCheck(BaseModel):
    """A configuration key whose presence indicates remote access is enabled."""

    model_config = ConfigDict(frozen=True)

    hive: str
    key: str
    description: str

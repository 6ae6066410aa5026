# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Installed-software detector backed by the Windows registry.

Registry entries reveal remote-access tools that are installed even when they
are not currently running.
"""

from __future__ import annotations

import asyncio
import logging

from rdsentinel.capabilities.base import RegistryReader
from rdsentinel.capabilities.registry import split_registry_path
from rdsentinel.catalog import SignatureCatalog
from rdsentinel.core.constants import DetectorKind
from rdsentinel.core.exceptions import CapabilityError, CapabilityUnavailableError
from rdsentinel.models.finding import DetectionFinding
from rdsentinel.scanner.base import BaseDetector
from rdsentinel.scanner.severity import SeverityPolicy

logger = logging.getLogger("rdsentinel.detectors.registry")


class RegistryDetector(BaseDetector):
    def __init__(
        self,
        catalog: SignatureCatalog,
        reader: RegistryReader,
        *,
        policy: SeverityPolicy | None = None,
    ) -> None:
        self._catalog = catalog
        self._reader = reader
        self._policy = policy or SeverityPolicy()

    @property
    def kind(self) -> DetectorKind:
        return DetectorKind.REGISTRY

    def _key_exists(self, hive: str, key: str) -> bool:
        try:
            return self._reader.key_exists(hive, key)
        except CapabilityUnavailableError:
            raise
        except CapabilityError as exc:
            logger.debug("Treating %s\\%s as absent: %s", hive, key, exc)
            return False

    def _scan_registry(self) -> list[str]:
        found: list[str] = []

        for signature in self._catalog:
            for path in signature.registry_keys:
                try:
                    hive, key = split_registry_path(path)
                except ValueError as exc:
                    logger.debug("Skipping registry marker: %s", exc)
                    continue
                if self._key_exists(hive, key):
                    found.append(signature.name)
                    break

        for check in self._catalog.registry_checks:
            if self._key_exists(check.hive, check.key):
                found.append(check.description)

        return list(dict.fromkeys(found))

    async def _detect(self) -> DetectionFinding:
        if not self._reader.available:
            return DetectionFinding.clean(
                self.kind, self._reader.unavailable_reason or "Registry module not available"
            )

        found = await asyncio.to_thread(self._scan_registry)
        if not found:
            return DetectionFinding.clean(self.kind, "No remote desktop registry entries detected")

        return DetectionFinding(
            detector_type=self.kind,
            is_detected=True,
            severity=self._policy.registry_severity(len(found)),
            details=(
                f"Found {len(found)} remote desktop registry entry/entries: "
                f"{', '.join(found)}"
            ),
            detected_items=tuple(found),
        )

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Signature catalog of known remote-access products."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rdsentinel.catalog.builtin import KNOWN_REMOTE_APPS, REGISTRY_CHECKS
from rdsentinel.models.signature import RegistryCheck, Signature


@dataclass(frozen=True)
class PortEntry:
    port: int
    app_name: str


class SignatureCatalog:
    """Immutable, ordered collection of signatures and configuration checks."""

    def __init__(
        self,
        signatures: Iterable[Signature],
        registry_checks: Iterable[RegistryCheck] = (),
    ) -> None:
        self._signatures: tuple[Signature, ...] = tuple(signatures)
        self._registry_checks: tuple[RegistryCheck, ...] = tuple(registry_checks)

    @classmethod
    def builtin(cls) -> SignatureCatalog:
        return cls(KNOWN_REMOTE_APPS, REGISTRY_CHECKS)

    @property
    def signatures(self) -> tuple[Signature, ...]:
        return self._signatures

    @property
    def registry_checks(self) -> tuple[RegistryCheck, ...]:
        return self._registry_checks

    def __iter__(self) -> Iterator[Signature]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)

    def get(self, name: str) -> Signature | None:
        for signature in self._signatures:
            if signature.name == name:
                return signature
        return None

    def port_entries(self) -> list[PortEntry]:
        """Each distinct port once, attributed to the first product that lists it."""
        seen: set[int] = set()
        entries: list[PortEntry] = []
        for signature in self._signatures:
            for port in signature.common_ports:
                if port in seen:
                    continue
                seen.add(port)
                entries.append(PortEntry(port=port, app_name=signature.name))
        return entries

    def merged_with(self, other: SignatureCatalog) -> SignatureCatalog:
        return SignatureCatalog(
            (*self._signatures, *other.signatures),
            (*self._registry_checks, *other.registry_checks),
        )


__all__ = ["PortEntry", "SignatureCatalog"]

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Load custom signatures from a YAML catalog file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rdsentinel.catalog import SignatureCatalog
from rdsentinel.core.exceptions import CatalogError
from rdsentinel.models.signature import RegistryCheck, Signature

logger = logging.getLogger("rdsentinel.catalog.loader")


def load_catalog(catalog_path: str | Path | None = None) -> SignatureCatalog:
    """Return the builtin catalog, extended with *catalog_path* when given.

    The YAML file holds a mapping with optional ``signatures`` and
    ``registry_checks`` lists.  Entries that fail validation are skipped
    with a warning; a file that is not valid YAML raises :class:`CatalogError`.
    """
    catalog = SignatureCatalog.builtin()
    if not catalog_path:
        return catalog

    path = Path(catalog_path)
    if not path.is_file():
        logger.warning("Custom catalog file does not exist: %s", path)
        return catalog

    custom = load_catalog_file(path)
    logger.info(
        "Loaded %d custom signatures and %d registry checks from %s",
        len(custom),
        len(custom.registry_checks),
        path,
    )
    return catalog.merged_with(custom)


def load_catalog_file(path: Path) -> SignatureCatalog:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Failed to read catalog {path}: {exc}") from exc

    if data is None:
        return SignatureCatalog(())
    if not isinstance(data, dict):
        raise CatalogError(
            f"Expected a mapping at top level in {path.name}, got {type(data).__name__}"
        )

    signatures = _parse_entries(data.get("signatures") or [], Signature, path.name)
    checks = _parse_entries(data.get("registry_checks") or [], RegistryCheck, path.name)
    return SignatureCatalog(signatures, checks)


def _parse_entries(raw: list[Any], model: type, source: str) -> list[Any]:
    parsed = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.warning("Skipping non-mapping entry #%d in %s", index, source)
            continue
        try:
            parsed.append(model(**entry))
        except ValidationError as exc:
            logger.warning("Schema validation failed for entry #%d in %s: %s", index, source, exc)
    return parsed

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for rdsentinel."""


class RdSentinelError(Exception):
    """Base exception for all rdsentinel errors."""


class CatalogError(RdSentinelError):
    """Failed to load or validate the signature catalog."""


class CapabilityError(RdSentinelError):
    """An OS capability call failed."""


class CapabilityUnavailableError(CapabilityError):
    """The OS capability does not exist on this platform or build."""


class StorageError(RdSentinelError):
    """Database or storage operation failed."""


class IngestError(RdSentinelError):
    """A client report could not be ingested."""


class ReportValidationError(IngestError):
    """A client report is missing required fields."""

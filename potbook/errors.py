"""Exceptions raised by the potbook core."""


class PotbookError(Exception):
    """Base class for all potbook errors."""


class ValidationError(PotbookError, ValueError):
    """Raised when user input is rejected before any state changes."""


class StorageCorruptError(PotbookError):
    """Raised when the persisted document cannot be parsed into a ledger."""


class ImportMalformedError(PotbookError, ValueError):
    """Raised when an import payload is not a valid ledger document."""


class StorageWriteError(PotbookError, OSError):
    """Raised when the storage backend rejects a write.

    The in-memory ledger already holds the mutation when this is raised, so
    memory and the persisted copy differ until the next successful save.
    """


class ConfigError(PotbookError):
    """Raised when the config file cannot be parsed or holds an unusable value."""

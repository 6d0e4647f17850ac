"""
Error types and error logging for snip.

All recoverable failures raised by the stores derive from SnipError, so the
CLI can print a clean message for them. CorruptTimestampError is kept
outside that tree: it means the database holds a value snip never wrote,
and is left to the fatal handler in cli.main().
"""

import os
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class SnipError(Exception):
    """Base class for errors reported to the user."""


class MalformedIdentifierError(SnipError):
    """A string is not a canonical identifier."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"malformed identifier: {value!r}")


class NotFoundError(SnipError):
    """No record matches an exact or partial identifier."""


class MultipleMatchesError(SnipError):
    """A partial identifier matches more than one record."""

    def __init__(self, partial: str, collection: str):
        self.partial = partial
        self.collection = collection
        super().__init__(
            f"provided partial {partial!r} returned multiple {collection} uuids"
        )


class AttachmentIOError(SnipError):
    """An attachment file could not be read or written."""

    def __init__(self, path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class StorageError(SnipError):
    """The database rejected an operation or returned an unexpected row count."""


class ConfigError(SnipError):
    """The database location or config file could not be resolved."""


class CorruptTimestampError(RuntimeError):
    """A stored timestamp could not be parsed."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"corrupt timestamp in database: {value!r}")


def _error_log_path(db_path: Optional[Path] = None) -> Path:
    """Resolve error log path, next to the database when it lives on disk."""
    if db_path is not None and str(db_path) != ":memory:":
        return Path(db_path).expanduser().parent / "snip-errors.log"
    return Path.home() / ".snip-errors.log"


def log_exception(exc: Exception, context: str = "", db_path: Optional[Path] = None) -> Path:
    """
    Log exception with full traceback to file.

    Args:
        exc: The exception that occurred
        context: Optional context string (e.g., command name)
        db_path: Database path, used to place the log beside it

    Returns:
        Path to the error log file
    """
    log_path = _error_log_path(db_path)
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(log_path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
        with os.fdopen(fd, "a") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"[{timestamp}]")
            if context:
                f.write(f" {context}")
            f.write("\n")
            f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    except OSError:
        pass  # Can't write error log, don't crash over it
    return log_path

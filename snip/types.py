"""
Data types for snippets and attachments.
"""

import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from .errors import CorruptTimestampError


def now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Serialize a timestamp for storage (RFC 3339 with offset).

    This is the single source of truth for stored timestamp text.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def parse_timestamp(ts: str) -> datetime:
    """Parse a stored timestamp back into an aware datetime.

    Accepts what format_timestamp writes, plus a 'Z' suffix and fractions
    longer than microseconds (fromisoformat truncates them). Anything else
    means the row was not written by snip and raises CorruptTimestampError.
    """
    if not isinstance(ts, str):
        raise CorruptTimestampError(repr(ts))
    text = ts.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise CorruptTimestampError(ts) from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def display_timestamp(dt: datetime) -> str:
    """Short local-time rendering for listings."""
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")


@dataclass
class Snippet:
    """A named, timestamped free-text record."""
    uuid: UUID
    name: str
    text: str
    timestamp: datetime


@dataclass
class Attachment:
    """
    Binary data attached to a snippet.

    ``snip_uuid`` is not checked against the snippet table; an attachment
    can outlive (or predate) the snippet it names.
    """
    uuid: UUID
    snip_uuid: UUID
    timestamp: datetime
    name: str
    data: bytes = field(repr=False)
    size: int

    def remove(self, conn: sqlite3.Connection) -> None:
        """Remove this attachment from the database."""
        from .attachment import remove_attachment
        remove_attachment(conn, self)


@dataclass
class AttachmentInfo:
    """Attachment metadata without the payload, for listings."""
    uuid: UUID
    snip_uuid: UUID
    timestamp: datetime
    name: str
    size: int

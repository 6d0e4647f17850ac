"""
Resolve partial identifiers to exactly one stored identifier.

A partial identifier is any substring of the 36-character canonical form,
separators included, so "d-2946" addresses 9cfc5a2d-2946-48ee-82e0-...
The lookup fetches at most two candidates: zero is NotFoundError, two or
more is MultipleMatchesError, and only a single candidate resolves.

The stores never take partial identifiers; everything that accepts one
from a user goes through here first.
"""

import enum
import logging
import sqlite3
from uuid import UUID

from .database import ATTACHMENT_TABLE, SNIPPET_TABLE
from .errors import MultipleMatchesError, NotFoundError
from .identifier import parse_identifier

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


class Collection(enum.Enum):
    """A table of identified records; each one is its own namespace."""
    SNIPPETS = SNIPPET_TABLE
    ATTACHMENTS = ATTACHMENT_TABLE

    @property
    def label(self) -> str:
        """Human name used in error messages."""
        return "snip" if self is Collection.SNIPPETS else "attachment"


def _like_pattern(partial: str) -> str:
    """Containment pattern matching ``partial`` literally."""
    escaped = (
        partial.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def resolve(conn: sqlite3.Connection, partial: str, collection: Collection) -> UUID:
    """
    Resolve a partial identifier within one collection.

    Args:
        conn: Open database connection
        partial: Substring of the canonical identifier form
        collection: Which table to search

    Returns:
        The single identifier containing ``partial``

    Raises:
        NotFoundError: No identifier contains ``partial``
        MultipleMatchesError: More than one identifier contains ``partial``
    """
    cursor = conn.execute(f"""
        SELECT uuid FROM {collection.value}
        WHERE uuid LIKE ? ESCAPE '{_LIKE_ESCAPE}'
        LIMIT 2
    """, (_like_pattern(partial),))
    rows = cursor.fetchall()

    if not rows:
        raise NotFoundError(
            f"{collection.label} uuid not found using partial {partial!r}"
        )
    if len(rows) > 1:
        raise MultipleMatchesError(partial, collection.label)

    id = parse_identifier(rows[0]["uuid"])
    logger.debug("Resolved %s partial %r to %s", collection.label, partial, id)
    return id


def resolve_snippet(conn: sqlite3.Connection, partial: str) -> UUID:
    """Resolve a partial snippet identifier."""
    return resolve(conn, partial, Collection.SNIPPETS)


def resolve_attachment(conn: sqlite3.Connection, partial: str) -> UUID:
    """Resolve a partial attachment identifier."""
    return resolve(conn, partial, Collection.ATTACHMENTS)

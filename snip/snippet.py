"""
Snippet store.

Snippets are named free-text records in the ``snip`` table (the text lives
in its ``data`` column). Queries add no ORDER BY: listings and "first"
follow whatever order SQLite scans the table in.
"""

import logging
import sqlite3
from typing import Optional
from uuid import UUID

from .database import SNIPPET_TABLE
from .errors import NotFoundError, StorageError
from .identifier import format_identifier, new_identifier, parse_identifier
from .types import Snippet, format_timestamp, now, parse_timestamp
from .words import split_words, stem

logger = logging.getLogger(__name__)


def _snippet_from_row(row: sqlite3.Row) -> Snippet:
    return Snippet(
        uuid=parse_identifier(row["uuid"]),
        name=row["name"],
        text=row["data"],
        timestamp=parse_timestamp(row["timestamp"]),
    )


# -------------------------------------------------------------------------
# Write Operations
# -------------------------------------------------------------------------

def create_snippet(conn: sqlite3.Connection, name: str, text: str) -> Snippet:
    """
    Create and store a new snippet.

    Raises:
        StorageError: The insert failed
    """
    snippet = Snippet(uuid=new_identifier(), name=name, text=text, timestamp=now())
    try:
        conn.execute(f"""
            INSERT INTO {SNIPPET_TABLE} (uuid, name, timestamp, data)
            VALUES (?, ?, ?, ?)
        """, (
            format_identifier(snippet.uuid),
            snippet.name,
            format_timestamp(snippet.timestamp),
            snippet.text,
        ))
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"creating snip {name!r}: {e}") from e

    logger.info("Created snip %s (%s)", snippet.uuid, snippet.name)
    return snippet


def update_snippet(
    conn: sqlite3.Connection,
    id: UUID,
    name: Optional[str] = None,
    text: Optional[str] = None,
) -> Snippet:
    """
    Update the name and/or text of a snippet in place.

    The identifier and timestamp never change. Fields left as None keep
    their stored value.

    Raises:
        NotFoundError: No snippet has this identifier
        StorageError: The update failed
    """
    current = get_snippet(conn, id)
    updated = Snippet(
        uuid=current.uuid,
        name=current.name if name is None else name,
        text=current.text if text is None else text,
        timestamp=current.timestamp,
    )
    try:
        cursor = conn.execute(f"""
            UPDATE {SNIPPET_TABLE}
            SET name = ?, data = ?
            WHERE uuid = ?
        """, (updated.name, updated.text, format_identifier(id)))
        if cursor.rowcount != 1:
            conn.rollback()
            raise StorageError(f"expected 1 row affected, got {cursor.rowcount}")
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"updating snip {id}: {e}") from e

    logger.info("Updated snip %s", id)
    return updated


def delete_snippet(conn: sqlite3.Connection, id: UUID) -> None:
    """
    Delete a snippet by exact identifier.

    Attachments referencing it are left in place.

    Raises:
        StorageError: The delete failed or affected a row count other than 1
    """
    try:
        cursor = conn.execute(f"""
            DELETE FROM {SNIPPET_TABLE}
            WHERE uuid = ?
        """, (format_identifier(id),))
        if cursor.rowcount != 1:
            conn.rollback()
            raise StorageError(f"expected 1 row affected, got {cursor.rowcount}")
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"deleting snip {id}: {e}") from e

    logger.info("Deleted snip %s", id)


# -------------------------------------------------------------------------
# Read Operations
# -------------------------------------------------------------------------

def get_snippet(conn: sqlite3.Connection, id: UUID) -> Snippet:
    """
    Get a snippet by exact identifier.

    Raises:
        NotFoundError: No snippet has this identifier
    """
    logger.debug("Fetching snip %s", id)
    row = conn.execute(f"""
        SELECT uuid, name, timestamp, data
        FROM {SNIPPET_TABLE}
        WHERE uuid = ?
    """, (format_identifier(id),)).fetchone()
    if row is None:
        raise NotFoundError(f"could not find snip uuid {id}")
    return _snippet_from_row(row)


def get_first_snippet(conn: sqlite3.Connection) -> Snippet:
    """
    Get one snippet, whichever the table yields first.

    Raises:
        NotFoundError: The table is empty
    """
    row = conn.execute(f"""
        SELECT uuid, name, timestamp, data
        FROM {SNIPPET_TABLE}
        LIMIT 1
    """).fetchone()
    if row is None:
        raise NotFoundError("no snips in database")
    return _snippet_from_row(row)


def list_snippets(conn: sqlite3.Connection) -> list[Snippet]:
    """All snippets in scan order."""
    cursor = conn.execute(f"""
        SELECT uuid, name, timestamp, data
        FROM {SNIPPET_TABLE}
    """)
    return [_snippet_from_row(row) for row in cursor]


def find_snippets(conn: sqlite3.Connection, word: str) -> list[Snippet]:
    """
    Find snippets containing a word, compared by stem.

    The name and text of every snippet are split and stemmed; a snippet
    matches when any of its stems equals the stem of ``word``. Results
    are in scan order, unranked.
    """
    target = stem(word)
    if not target:
        return []

    matches = []
    for snippet in list_snippets(conn):
        words = split_words(snippet.name) + split_words(snippet.text)
        if any(stem(w) == target for w in words if w):
            matches.append(snippet)
    logger.debug("Search for %r (stem %r): %d matches", word, target, len(matches))
    return matches

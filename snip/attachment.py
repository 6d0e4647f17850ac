"""
Attachment store.

Attachments are binary payloads referencing a snippet. The payload lives in
the ``data`` BLOB column of ``snip_attachment`` and never travels through an
INSERT statement: a row is inserted with a ``zeroblob(size)`` placeholder,
and the bytes are then written straight into that slot through an
incremental blob handle opened on the new rowid. Reads mirror this, looking
up the rowid with the metadata and copying the payload out of a read-only
blob handle in chunks.

Functions here take exact identifiers. Partial identifiers are resolved
beforehand by snip.resolver.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from .database import ATTACHMENT_TABLE
from .errors import AttachmentIOError, NotFoundError, StorageError
from .identifier import format_identifier, new_identifier, parse_identifier
from .types import Attachment, AttachmentInfo, format_timestamp, now, parse_timestamp

logger = logging.getLogger(__name__)

# Bytes copied per read from a blob handle
BLOB_CHUNK_SIZE = 64 * 1024


def _attachment_name(path: Path) -> str:
    """Base name stored with the attachment."""
    name = path.name
    if not name or name == "..":
        raise AttachmentIOError(path, "path has no file name")
    return name


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise AttachmentIOError(path, e.strerror or str(e)) from e


def _read_blob(conn: sqlite3.Connection, row_id: int) -> bytes:
    """Copy the payload of one attachment row out of its blob handle."""
    data = bytearray()
    with conn.blobopen(ATTACHMENT_TABLE, "data", row_id, readonly=True) as blob:
        while True:
            chunk = blob.read(BLOB_CHUNK_SIZE)
            if not chunk:
                break
            data += chunk
    return bytes(data)


# -------------------------------------------------------------------------
# Write Operations
# -------------------------------------------------------------------------

def add_attachment(
    conn: sqlite3.Connection,
    snip_uuid: UUID,
    path: Union[Path, str],
) -> Attachment:
    """
    Store a file as an attachment of a snippet.

    The snippet is not looked up: ``snip_uuid`` is recorded as given.

    Args:
        conn: Open database connection
        snip_uuid: Identifier of the owning snippet
        path: File to read; its base name becomes the attachment name

    Returns:
        The stored Attachment

    Raises:
        AttachmentIOError: The file could not be read
        StorageError: The insert or the payload write failed
    """
    path = Path(path)
    name = _attachment_name(path)
    data = _read_file(path)

    attachment = Attachment(
        uuid=new_identifier(),
        snip_uuid=snip_uuid,
        timestamp=now(),
        name=name,
        data=data,
        size=len(data),
    )

    try:
        cursor = conn.execute(f"""
            INSERT INTO {ATTACHMENT_TABLE}
            (uuid, snip_uuid, timestamp, name, data, size)
            VALUES (?, ?, ?, ?, zeroblob(?), ?)
        """, (
            format_identifier(attachment.uuid),
            format_identifier(attachment.snip_uuid),
            format_timestamp(attachment.timestamp),
            attachment.name,
            attachment.size,
            attachment.size,
        ))
        if cursor.rowcount != 1:
            raise StorageError(f"expected 1 row inserted, got {cursor.rowcount}")

        row_id = cursor.lastrowid
        with conn.blobopen(ATTACHMENT_TABLE, "data", row_id) as blob:
            blob.write(attachment.data)
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"adding attachment {attachment.name!r}: {e}") from e
    except StorageError:
        conn.rollback()
        raise

    logger.info(
        "Added attachment %s (%s, %d bytes) to snip %s",
        attachment.uuid, attachment.name, attachment.size, attachment.snip_uuid,
    )
    return attachment


def remove_attachment(conn: sqlite3.Connection, attachment: Attachment) -> None:
    """
    Delete an attachment row, payload included.

    Exactly one row must be deleted. Zero rows (already removed, never
    stored) or more than one are reported rather than ignored, and the
    delete is rolled back.

    Raises:
        StorageError: The delete failed or affected a row count other than 1
    """
    try:
        cursor = conn.execute(f"""
            DELETE FROM {ATTACHMENT_TABLE}
            WHERE uuid = ?
        """, (format_identifier(attachment.uuid),))
        rows_affected = cursor.rowcount
        if rows_affected != 1:
            conn.rollback()
            raise StorageError(f"expected 1 row affected, got {rows_affected}")
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"removing attachment {attachment.uuid}: {e}") from e

    logger.info("Removed attachment %s (%s)", attachment.uuid, attachment.name)


def write_attachment_data(attachment: Attachment, dest: Union[Path, str]) -> Path:
    """
    Write an attachment's payload to a file.

    Raises:
        AttachmentIOError: The destination could not be written
    """
    dest = Path(dest)
    try:
        dest.write_bytes(attachment.data)
    except OSError as e:
        raise AttachmentIOError(dest, e.strerror or str(e)) from e
    logger.info("Exported attachment %s to %s", attachment.uuid, dest)
    return dest


# -------------------------------------------------------------------------
# Read Operations
# -------------------------------------------------------------------------

def get_attachment(conn: sqlite3.Connection, id: UUID) -> Attachment:
    """
    Get an attachment, payload included, by exact identifier.

    Raises:
        NotFoundError: No attachment has this identifier
    """
    logger.debug("Fetching attachment %s", id)
    row = conn.execute(f"""
        SELECT uuid, snip_uuid, timestamp, name, size, rowid AS row_id
        FROM {ATTACHMENT_TABLE}
        WHERE uuid = ?
    """, (format_identifier(id),)).fetchone()

    if row is None:
        raise NotFoundError(f"could not find attachment uuid {id}")

    data = _read_blob(conn, row["row_id"])
    if len(data) != row["size"]:
        raise StorageError(
            f"attachment {id} holds {len(data)} bytes, metadata says {row['size']}"
        )

    return Attachment(
        uuid=parse_identifier(row["uuid"]),
        snip_uuid=parse_identifier(row["snip_uuid"]),
        timestamp=parse_timestamp(row["timestamp"]),
        name=row["name"],
        data=data,
        size=len(data),
    )


def list_attachment_identifiers(conn: sqlite3.Connection) -> list[UUID]:
    """All attachment identifiers, in the database's scan order."""
    cursor = conn.execute(f"SELECT uuid FROM {ATTACHMENT_TABLE}")
    return [parse_identifier(row["uuid"]) for row in cursor]


def list_attachments(
    conn: sqlite3.Connection,
    snip_uuid: Optional[UUID] = None,
) -> list[AttachmentInfo]:
    """
    List attachment metadata without loading payloads.

    Args:
        conn: Open database connection
        snip_uuid: Only attachments of this snippet (None for all)

    Returns:
        List of AttachmentInfo in scan order
    """
    if snip_uuid is not None:
        cursor = conn.execute(f"""
            SELECT uuid, snip_uuid, timestamp, name, size
            FROM {ATTACHMENT_TABLE}
            WHERE snip_uuid = ?
        """, (format_identifier(snip_uuid),))
    else:
        cursor = conn.execute(f"""
            SELECT uuid, snip_uuid, timestamp, name, size
            FROM {ATTACHMENT_TABLE}
        """)

    return [
        AttachmentInfo(
            uuid=parse_identifier(row["uuid"]),
            snip_uuid=parse_identifier(row["snip_uuid"]),
            timestamp=parse_timestamp(row["timestamp"]),
            name=row["name"],
            size=row["size"],
        )
        for row in cursor
    ]

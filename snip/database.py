"""
SQLite database holding snippets and attachments.

One file (or ``:memory:`` database) with two tables:

- ``snip``: snippet records; the ``data`` column holds the snippet text
- ``snip_attachment``: attachment metadata plus the payload as a BLOB

Attachment payloads are written and read through incremental blob handles
(``Connection.blobopen``), so the payload column has to stay a plain BLOB
addressed by rowid. The tables are therefore not declared WITHOUT ROWID.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

SNIPPET_TABLE = "snip"
ATTACHMENT_TABLE = "snip_attachment"


def connect(db_path: Union[Path, str]) -> sqlite3.Connection:
    """
    Open the database and make sure the schema exists.

    Args:
        db_path: Path to the SQLite file, or ":memory:"

    Returns:
        An open connection returning sqlite3.Row rows. The caller owns it
        and must close it.
    """
    if str(db_path) == MEMORY:
        conn = sqlite3.connect(MEMORY)
    else:
        path = Path(db_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    try:
        init_schema(conn)
    except sqlite3.Error:
        conn.close()
        raise
    logger.debug("Opened database %s", db_path)
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the snippet and attachment tables if they are missing."""
    conn.execute(f"""
        CREATE TABLE IF NOT EXISTS {SNIPPET_TABLE} (
            uuid TEXT NOT NULL PRIMARY KEY,
            name TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            data TEXT NOT NULL
        )
    """)
    conn.execute(f"""
        CREATE TABLE IF NOT EXISTS {ATTACHMENT_TABLE} (
            uuid TEXT NOT NULL PRIMARY KEY,
            snip_uuid TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            name TEXT NOT NULL,
            data BLOB NOT NULL,
            size INTEGER NOT NULL
        )
    """)

    # Index for per-snippet attachment listings
    conn.execute(f"""
        CREATE INDEX IF NOT EXISTS idx_attachment_snip
        ON {ATTACHMENT_TABLE}(snip_uuid)
    """)
    conn.commit()

"""
Shared pytest fixtures for snip tests.

Provides an in-memory database seeded with known snips and attachments,
so lookups can be tested against fixed identifiers.
"""

from pathlib import Path

import pytest

from snip.database import connect


SNIP_ID = "4b3a5d21-0d0c-4b6a-9a4c-1f5e6f7d8e90"
SNIP_TIMESTAMP = "2023-01-12T10:11:12.123456789+01:00"
SNIP_NAME = "lorem"
SNIP_TEXT = "Lorem ipsum (dolor) sit amet, consectetur\nsecond line?"

ATTACHMENT_ID = "9cfc5a2d-2946-48ee-82e0-227ba4bcdbd5"
ATTACHMENT_NAME = "udhr.pdf"
ATTACHMENT_DATA = b"%PDF-1.4\n\x00\x01\x02\xff binary payload\n%%EOF"

OTHER_ATTACHMENT_ID = "1f0e2c44-7a3b-4d19-b6c8-5e0f9a7d3c21"
OTHER_ATTACHMENT_DATA = b"second attachment"


def _seed(conn):
    conn.execute(
        "INSERT INTO snip (uuid, name, timestamp, data) VALUES (?, ?, ?, ?)",
        (SNIP_ID, SNIP_NAME, SNIP_TIMESTAMP, SNIP_TEXT),
    )
    conn.executemany(
        """
        INSERT INTO snip_attachment (uuid, snip_uuid, timestamp, name, data, size)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        [
            (ATTACHMENT_ID, SNIP_ID, "2023-01-12T10:15:00+00:00",
             ATTACHMENT_NAME, ATTACHMENT_DATA, len(ATTACHMENT_DATA)),
            (OTHER_ATTACHMENT_ID, SNIP_ID, "2023-01-13T08:00:00Z",
             "notes.txt", OTHER_ATTACHMENT_DATA, len(OTHER_ATTACHMENT_DATA)),
        ],
    )
    conn.commit()


@pytest.fixture
def empty_conn():
    """A fresh in-memory database with the schema and no rows."""
    conn = connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def conn():
    """An in-memory database seeded with one snip and two attachments."""
    conn = connect(":memory:")
    _seed(conn)
    yield conn
    conn.close()


@pytest.fixture
def sample_file(tmp_path) -> Path:
    """A binary file larger than one blob read chunk."""
    path = tmp_path / "sample.bin"
    path.write_bytes(bytes(range(256)) * 400 + b"tail")
    return path


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Isolate the CLI from the real home directory and environment."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("SNIP_DB", raising=False)
    monkeypatch.delenv("SNIP_CONFIG", raising=False)
    monkeypatch.delenv("SNIP_VERBOSE", raising=False)
    return tmp_path

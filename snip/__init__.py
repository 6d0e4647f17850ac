"""
snip: personal snippet store with binary attachments.

Snippets and attachments live in one SQLite database and are keyed by
random UUIDs, addressable by any unique substring of their canonical form.

Quick start::

    from snip import connect, create_snippet, add_attachment, resolve_snippet

    conn = connect("~/.snip.sqlite3")
    s = create_snippet(conn, "todo", "buy milk")
    add_attachment(conn, resolve_snippet(conn, str(s.uuid)[:8]), "receipt.pdf")
"""

__version__ = "0.1.0"

from .attachment import (
    add_attachment,
    get_attachment,
    list_attachment_identifiers,
    list_attachments,
    remove_attachment,
    write_attachment_data,
)
from .database import connect, init_schema
from .errors import (
    AttachmentIOError,
    ConfigError,
    CorruptTimestampError,
    MalformedIdentifierError,
    MultipleMatchesError,
    NotFoundError,
    SnipError,
    StorageError,
)
from .identifier import (
    format_identifier,
    identifier_segments,
    new_identifier,
    parse_identifier,
    short_identifier,
)
from .resolver import Collection, resolve, resolve_attachment, resolve_snippet
from .snippet import (
    create_snippet,
    delete_snippet,
    find_snippets,
    get_first_snippet,
    get_snippet,
    list_snippets,
    update_snippet,
)
from .types import Attachment, AttachmentInfo, Snippet
from .words import split_words, stem, strip_punctuation

__all__ = [
    "__version__",
    "Attachment",
    "AttachmentIOError",
    "AttachmentInfo",
    "Collection",
    "ConfigError",
    "CorruptTimestampError",
    "MalformedIdentifierError",
    "MultipleMatchesError",
    "NotFoundError",
    "Snippet",
    "SnipError",
    "StorageError",
    "add_attachment",
    "connect",
    "create_snippet",
    "delete_snippet",
    "find_snippets",
    "format_identifier",
    "get_attachment",
    "get_first_snippet",
    "get_snippet",
    "identifier_segments",
    "init_schema",
    "list_attachment_identifiers",
    "list_attachments",
    "list_snippets",
    "new_identifier",
    "parse_identifier",
    "remove_attachment",
    "resolve",
    "resolve_attachment",
    "resolve_snippet",
    "short_identifier",
    "split_words",
    "stem",
    "strip_punctuation",
    "update_snippet",
    "write_attachment_data",
]

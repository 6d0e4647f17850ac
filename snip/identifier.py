"""
Snippet and attachment identifiers.

Identifiers are random 128-bit UUIDs. The canonical text form is the
36-character lowercase hyphenated string (8-4-4-4-12), which is what the
database stores and what partial lookups match against.
"""

import re
import uuid

from .errors import MalformedIdentifierError

_CANONICAL_RE = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$'
)

SEPARATOR = "-"


def new_identifier() -> uuid.UUID:
    """Generate a fresh random identifier."""
    return uuid.uuid4()


def parse_identifier(value: str) -> uuid.UUID:
    """Parse a canonical identifier string.

    Only the canonical form is accepted, so that formatting the result
    gives back exactly the input. Braces, URNs, uppercase hex and the
    unhyphenated form are rejected.
    """
    if not isinstance(value, str) or not _CANONICAL_RE.match(value):
        raise MalformedIdentifierError(value)
    return uuid.UUID(value)


def format_identifier(id: uuid.UUID) -> str:
    """Canonical text form of an identifier."""
    return str(id)


def identifier_segments(id: uuid.UUID) -> list[str]:
    """Split the canonical form into its 5 groups."""
    return format_identifier(id).split(SEPARATOR)


def short_identifier(id: uuid.UUID) -> str:
    """First group of the canonical form, for compact listings."""
    return identifier_segments(id)[0]

"""Tests for identifier parsing and formatting."""

import uuid

import pytest

from snip.errors import MalformedIdentifierError
from snip.identifier import (
    format_identifier,
    identifier_segments,
    new_identifier,
    parse_identifier,
    short_identifier,
)

CANONICAL = "9cfc5a2d-2946-48ee-82e0-227ba4bcdbd5"


class TestParseIdentifier:
    def test_canonical(self):
        assert parse_identifier(CANONICAL) == uuid.UUID(CANONICAL)

    @pytest.mark.parametrize("value", [
        CANONICAL,
        "00000000-0000-0000-0000-000000000000",
        "ffffffff-ffff-ffff-ffff-ffffffffffff",
        "4b3a5d21-0d0c-4b6a-9a4c-1f5e6f7d8e90",
    ])
    def test_round_trip(self, value):
        assert format_identifier(parse_identifier(value)) == value

    @pytest.mark.parametrize("value", [
        "",
        "9cfc5a2d",
        "9cfc5a2d29464 8ee82e0227ba4bcdbd5",
        "9cfc5a2d2946 48ee82e0227ba4bcdbd5",
        "9cfc5a2d294648ee82e0227ba4bcdbd5",
        "{9cfc5a2d-2946-48ee-82e0-227ba4bcdbd5}",
        "urn:uuid:9cfc5a2d-2946-48ee-82e0-227ba4bcdbd5",
        "9CFC5A2D-2946-48EE-82E0-227BA4BCDBD5",
        "9cfc5a2d-2946-48ee-82e0-227ba4bcdbd5 ",
        "9cfc5a2d-2946-48ee-82e0-227ba4bcdbdz",
        "9cfc5a2d-294648ee-82e0-227ba4bcdbd5-",
    ])
    def test_rejects_non_canonical(self, value):
        with pytest.raises(MalformedIdentifierError) as exc_info:
            parse_identifier(value)
        assert exc_info.value.value == value

    def test_rejects_non_string(self):
        with pytest.raises(MalformedIdentifierError):
            parse_identifier(None)


class TestNewIdentifier:
    def test_random_version_4(self):
        id = new_identifier()
        assert id.version == 4

    def test_distinct(self):
        ids = {new_identifier() for _ in range(1000)}
        assert len(ids) == 1000

    def test_formats_canonically(self):
        text = format_identifier(new_identifier())
        assert len(text) == 36
        assert parse_identifier(text)


class TestSegments:
    def test_five_groups(self):
        segments = identifier_segments(uuid.UUID(CANONICAL))
        assert segments == ["9cfc5a2d", "2946", "48ee", "82e0", "227ba4bcdbd5"]

    def test_short_identifier_is_first_group(self):
        assert short_identifier(uuid.UUID(CANONICAL)) == "9cfc5a2d"

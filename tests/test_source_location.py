from pathlib import Path

import pytest

from json_source_validator.utils.source_location import (
    SourceLocation,
    format_source,
    lookup_source,
    position_from_offset,
)


@pytest.mark.parametrize(
    "text, offset, expected",
    [
        ("abc", 0, (1, 1)),
        ("abc", 2, (1, 3)),
        ("abc", 3, (1, 4)),
        ("ab\ncd", 3, (2, 1)),
        ("ab\ncd", 4, (2, 2)),
        ("ab\r\ncd", 5, (2, 2)),
        ("a\n\nb", 3, (3, 1)),
    ],
)
def test_position_from_offset(text, offset, expected):
    assert position_from_offset(text, offset) == expected


@pytest.mark.parametrize("offset", [-1, 4, None, "1", 1.0, True])
def test_position_from_unusable_offset(offset):
    assert position_from_offset("abc", offset) == (0, 0)


def test_lookup_source_resolves_known_pointer():
    text = '{\n  "a": 1\n}'
    loc = lookup_source({"": 0, "/a": 9}, text, "/a")
    assert loc == SourceLocation(json_pointer="/a", line=2, column=8)
    assert loc.resolved


def test_lookup_source_unknown_pointer():
    loc = lookup_source({"": 0}, "{}", "/missing")
    assert (loc.line, loc.column) == (0, 0)
    assert not loc.resolved

    assert not lookup_source(None, "{}", "").resolved


def test_format_source():
    assert format_source(None) == ""
    assert format_source(SourceLocation()) == ""
    assert format_source(SourceLocation(json_pointer="/a", line=1, column=7)) == " (line= 1 column= 7 pointer= /a)"
    assert (
        format_source(SourceLocation(file_path=Path("w.json"), json_pointer="/a", line=2, column=3))
        == " (source= w.json:2:3 pointer= /a)"
    )
    assert format_source(SourceLocation(file_path=Path("w.json"), json_pointer="/b")) == " (source= w.json pointer= /b)"

"""Tests for string table lookup."""

from __future__ import annotations

import pytest

from elfscope.core.errors import SeekFailure, TruncatedInput
from elfscope.parsers.source import ByteSource
from elfscope.parsers.strtab import load_string_table, resolve


TABLE = b"ab\x00cd\x00"


@pytest.mark.parametrize(
    "index, expected",
    [
        (0, "ab"),
        (1, "b"),      # suffix of a longer string
        (2, ""),       # points at a terminator
        (3, "cd"),
        (6, ""),       # one past the end
        (1000, ""),
    ],
)
def test_resolve(index, expected):
    assert resolve(TABLE, index) == expected


def test_resolve_without_terminator_runs_to_end():
    assert resolve(b"\x00.text", 1) == ".text"


def test_resolve_empty_table():
    assert resolve(b"", 0) == ""


def test_resolve_replaces_invalid_utf8():
    assert resolve(b"\x00a\xffb\x00", 1) == "a\ufffdb"


def test_load_string_table():
    src = ByteSource(b"xxxx" + TABLE)
    assert load_string_table(src, 4, len(TABLE)) == TABLE


def test_load_string_table_past_end():
    src = ByteSource(TABLE)
    with pytest.raises(TruncatedInput):
        load_string_table(src, 2, len(TABLE))
    with pytest.raises(SeekFailure):
        load_string_table(src, len(TABLE) + 1, 1)

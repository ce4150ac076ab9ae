"""
String Table Resolver
======================

An ELF string table is a byte region of NUL-terminated strings addressed
by byte offset.  An offset may point into the middle of a longer string
(suffix sharing), so lookup always scans forward from the offset to the
next NUL rather than splitting the table up front.
"""

from __future__ import annotations

from elfscope.parsers.source import ByteSource


def load_string_table(source: ByteSource, offset: int, size: int) -> bytes:
    """Read the *size*-byte string table that starts at *offset*.

    Raises:
        SeekFailure: *offset* is outside the source.
        TruncatedInput: Fewer than *size* bytes follow *offset*.
    """
    return source.read_at(offset, size)


def resolve(table: bytes, index: int) -> str:
    """Return the string starting at byte *index* of *table*.

    The string runs to the next NUL byte or to the end of the table.
    An index at or beyond the end of the table names no string and
    yields ``""``.  Bytes that are not valid UTF-8 are replaced.
    """
    if index < 0 or index >= len(table):
        return ""
    end = table.find(b"\x00", index)
    if end == -1:
        end = len(table)
    return table[index:end].decode("utf-8", errors="replace")

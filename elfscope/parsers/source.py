"""
Byte Source
============

A thin seek/read abstraction over a binary stream.  Every decoder in
elfscope reads through a :class:`ByteSource`; it turns short reads and
unreachable offsets into :class:`~elfscope.core.errors.TruncatedInput`
and :class:`~elfscope.core.errors.SeekFailure` so that no partial record
ever reaches a caller.

Usage::

    with ByteSource.open("/bin/ls") as source:
        header = decode_file_header(source)

    source = ByteSource(raw_bytes)          # in-memory buffer
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import BinaryIO, Union

from elfscope.core.errors import SeekFailure, TruncatedInput


SourceLike = Union["ByteSource", BinaryIO, bytes, bytearray, memoryview]


class ByteSource:
    """Seekable, readable view of a binary stream.

    Args:
        data: Raw bytes (wrapped in :class:`io.BytesIO`) or an already
              open binary stream.  The stream stays owned by the caller
              unless the source was created through :meth:`open`.
    """

    def __init__(self, data: bytes | bytearray | memoryview | BinaryIO) -> None:
        if isinstance(data, (bytes, bytearray, memoryview)):
            self._stream: BinaryIO = io.BytesIO(bytes(data))
        else:
            self._stream = data
        self._owned = False
        self._size: int | None = self._measure()

    # ------------------------------------------------------------------ #
    #  Construction helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def open(cls, path: str | Path) -> ByteSource:
        """Open *path* for reading; the returned source closes the file."""
        source = cls(open(path, "rb"))
        source._owned = True
        return source

    @classmethod
    def wrap(cls, source: SourceLike) -> ByteSource:
        """Return *source* unchanged if it already is a ByteSource."""
        if isinstance(source, ByteSource):
            return source
        return cls(source)

    def _measure(self) -> int | None:
        """Total stream length, or ``None`` for non-seekable streams."""
        try:
            if not self._stream.seekable():
                return None
            here = self._stream.tell()
            end = self._stream.seek(0, os.SEEK_END)
            self._stream.seek(here, os.SEEK_SET)
            return end
        except (OSError, ValueError):
            return None

    # ------------------------------------------------------------------ #
    #  Positioning and reading
    # ------------------------------------------------------------------ #

    @property
    def size(self) -> int | None:
        """Length of the source in bytes (``None`` if not seekable)."""
        return self._size

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int) -> int:
        """Move to absolute *offset*.

        Seeking to exactly the end of the source is allowed; a following
        read of a non-zero length then fails with TruncatedInput.

        Raises:
            SeekFailure: If the source is not seekable or *offset* lies
                outside ``[0, size]``.
        """
        if self._size is None:
            raise SeekFailure(offset, None)
        if offset < 0 or offset > self._size:
            raise SeekFailure(offset, self._size)
        try:
            return self._stream.seek(offset, os.SEEK_SET)
        except (OSError, ValueError, OverflowError) as exc:
            raise SeekFailure(offset, self._size, str(exc)) from exc

    def read_exact(self, count: int) -> bytes:
        """Read exactly *count* bytes from the current position.

        Raises:
            TruncatedInput: If the stream ends first.  The bytes read so
                far are discarded.  With a known size, a count larger than
                what remains fails before anything is read.
        """
        start = self._stream.tell()
        if self._size is not None:
            available = max(self._size - start, 0)
            if count > available:
                raise TruncatedInput(start, count, available)
        chunks: list[bytes] = []
        remaining = count
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        if len(data) != count:
            raise TruncatedInput(start, count, len(data))
        return data

    def read_at(self, offset: int, count: int) -> bytes:
        """Seek to *offset* and read exactly *count* bytes."""
        self.seek(offset)
        return self.read_exact(count)

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def close(self) -> None:
        """Close the underlying stream if this source opened it."""
        if self._owned:
            self._stream.close()

    def __enter__(self) -> ByteSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        name = getattr(self._stream, "name", "<memory>")
        return f"ByteSource({name!r}, size={self._size})"

"""
elfscope Exceptions
====================

Every decoding failure is a structural or input-integrity fault of the
inspected file, never a transient condition, so nothing here is retried.
"""

from __future__ import annotations


class ElfScopeError(Exception):
    """Base class for all ELF decoding failures."""


class TruncatedInput(ElfScopeError):
    """Fewer bytes are available than a fixed-size read requires."""

    def __init__(self, offset: int, wanted: int, available: int) -> None:
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"truncated input at offset {offset:#x}: "
            f"wanted {wanted} bytes, {available} available"
        )


class SeekFailure(ElfScopeError):
    """A declared offset cannot be reached in the byte source."""

    def __init__(self, offset: int, size: int | None, reason: str = "") -> None:
        self.offset = offset
        self.size = size
        if reason:
            detail = reason
        elif size is None:
            detail = "source is not seekable"
        else:
            detail = f"source is {size} bytes long"
        super().__init__(f"cannot seek to offset {offset:#x}: {detail}")


class InvalidStringTableIndex(ElfScopeError):
    """The file header's string-table index names no section header slot."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(
            f"section name string table index {index} is outside "
            f"the section header table ({count} entries)"
        )


class InvalidIdent(ElfScopeError):
    """The identification bytes do not describe an ELF64 little-endian file."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"unsupported ELF identification: {reason}")

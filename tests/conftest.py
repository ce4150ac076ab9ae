"""Shared fixtures: small ELF64 images assembled in memory with struct."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable

import pytest


EHDR = struct.Struct("<16sHHIQQQIHHHHHH")
PHDR = struct.Struct("<IIQQQQQQ")
SHDR = struct.Struct("<IIQQQQIIQQ")

IDENT = b"\x7fELF" + bytes([2, 1, 1, 0, 0]) + bytes(7)

# type, flags, offset, vaddr, paddr, filesz, memsz, align
SEGMENTS = [
    (6, 4, 64, 0x400040, 0x400040, 112, 112, 8),
    (1, 5, 0, 0x400000, 0x400000, 0x200, 0x200, 0x1000),
]

# name, type, flags, addr, size, link, info, addralign, entsize
SECTIONS = [
    ("", 0, 0, 0, 0, 0, 0, 0, 0),
    (".text", 1, 0x6, 0x401000, 0x40, 0, 0, 16, 0),
    (".data", 1, 0x3, 0x402000, 0x10, 0, 0, 8, 0),
]

SECTION_NAMES = ["", ".text", ".data", ".shstrtab"]


def build_elf(
    segments: list[tuple] = SEGMENTS,
    sections: list[tuple] = SECTIONS,
    *,
    ident: bytes = IDENT,
    shstrndx: int | None = None,
    phentsize: int = 56,
    shentsize: int = 64,
) -> bytes:
    """Assemble an ELF64 image.

    Layout: file header, program headers, ``.shstrtab`` contents, then the
    section header table (8-byte aligned) ending with ``.shstrtab``.
    """
    names = [s[0] for s in sections] + [".shstrtab"]
    strtab = bytearray(b"\x00")
    name_offsets: list[int] = []
    for name in names:
        if not name:
            name_offsets.append(0)
            continue
        name_offsets.append(len(strtab))
        strtab += name.encode() + b"\x00"

    phoff = 64 if segments else 0
    strtab_off = 64 + len(segments) * PHDR.size
    shoff = strtab_off + len(strtab)
    shoff += (-shoff) % 8
    count = len(names)
    if shstrndx is None:
        shstrndx = count - 1

    image = bytearray(
        EHDR.pack(
            ident, 2, 62, 1, 0x401000, phoff, shoff, 0,
            64, phentsize, len(segments), shentsize, count, shstrndx,
        )
    )
    for seg in segments:
        image += PHDR.pack(*seg)
    image += strtab
    image += bytes(shoff - len(image))
    for name_off, (_, typ, flags, addr, size, link, info, align, entsize) in zip(
        name_offsets, sections
    ):
        offset = 0 if typ == 0 else 0x1000
        image += SHDR.pack(name_off, typ, flags, addr, offset, size, link, info, align, entsize)
    image += SHDR.pack(name_offsets[-1], 3, 0, 0, strtab_off, len(strtab), 0, 0, 1, 0)
    return bytes(image)


@pytest.fixture
def make_elf() -> Callable[..., bytes]:
    """Factory fixture around :func:`build_elf`."""
    return build_elf


@pytest.fixture
def elf_bytes() -> bytes:
    return build_elf()


@pytest.fixture
def elf_file(tmp_path: Path, elf_bytes: bytes) -> Path:
    path = tmp_path / "sample.elf"
    path.write_bytes(elf_bytes)
    return path

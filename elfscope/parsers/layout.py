"""
ELF64 Structure Decoder
========================

Manual :mod:`struct`-based decoding of the three fixed-layout ELF64
records: the file header (``Elf64_Ehdr``), program headers
(``Elf64_Phdr``) and section headers (``Elf64_Shdr``).

Every multi-byte field is little-endian and fields are unpacked in the
exact order the format declares them; nothing depends on the host's
in-memory struct layout.  Matching encoders produce the on-disk bytes
for a decoded record.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

from __future__ import annotations

import struct

from elfscope.core import constants as C
from elfscope.core.errors import InvalidIdent
from elfscope.core.models import FileHeader, ProgramHeader, SectionHeader
from elfscope.parsers.source import ByteSource


# ---------------------------------------------------------------------------
# Record layouts
# ---------------------------------------------------------------------------

# e_ident[16], e_type, e_machine, e_version, e_entry, e_phoff, e_shoff,
# e_flags, e_ehsize, e_phentsize, e_phnum, e_shentsize, e_shnum, e_shstrndx
FILE_HEADER = struct.Struct("<16sHHIQQQIHHHHHH")

# p_type, p_flags, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_align
PROGRAM_HEADER = struct.Struct("<IIQQQQQQ")

# sh_name, sh_type, sh_flags, sh_addr, sh_offset, sh_size, sh_link,
# sh_info, sh_addralign, sh_entsize
SECTION_HEADER = struct.Struct("<IIQQQQIIQQ")

FILE_HEADER_SIZE: int = FILE_HEADER.size        # 64
PROGRAM_HEADER_SIZE: int = PROGRAM_HEADER.size  # 56
SECTION_HEADER_SIZE: int = SECTION_HEADER.size  # 64

_PROGRAM_FIELDS = (
    "type", "flags", "offset", "vaddr", "paddr", "filesz", "memsz", "align",
)
_SECTION_FIELDS = (
    "name", "type", "flags", "addr", "offset", "size", "link", "info",
    "addralign", "entsize",
)


# ---------------------------------------------------------------------------
# Identification checks
# ---------------------------------------------------------------------------

def check_ident(header: FileHeader) -> list[str]:
    """List the reasons *header* is not an ELF64 little-endian file.

    Returns:
        Human-readable problems; empty when the identification is sound.
    """
    problems: list[str] = []
    if header.magic != C.ELF_MAGIC:
        problems.append(f"bad magic {header.magic.hex(' ')}")
    if header.elf_class != C.ELFCLASS64:
        problems.append(f"class {C.class_name(header.elf_class)} is not ELF64")
    if header.data_encoding != C.ELFDATA2LSB:
        problems.append(
            f"data encoding {C.data_name(header.data_encoding)} is not little endian"
        )
    return problems


def check_entry_sizes(header: FileHeader) -> list[str]:
    """List declared table entry sizes that differ from the fixed record size.

    Tables are always decoded with the fixed ELF64 record size; a zero
    entry size on an empty table is not reported.
    """
    problems: list[str] = []
    tables = (
        ("program header", header.program_header_count,
         header.program_header_entry_size, PROGRAM_HEADER_SIZE),
        ("section header", header.section_header_count,
         header.section_header_entry_size, SECTION_HEADER_SIZE),
    )
    for what, count, declared, fixed in tables:
        if count and declared != fixed:
            problems.append(
                f"{what} entry size is {declared}, decoding with {fixed}"
            )
    return problems


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------

def decode_file_header(source: ByteSource, *, strict: bool = False) -> FileHeader:
    """Decode the file header from the source's current position.

    Args:
        source: Byte source positioned at the header (offset 0 for a
            well-formed file).
        strict: Also verify magic, class and data encoding.

    Raises:
        TruncatedInput: Fewer than 64 bytes are available.
        InvalidIdent: ``strict`` is set and the identification is wrong.
    """
    raw = source.read_exact(FILE_HEADER_SIZE)
    (
        ident, e_type, machine, version, entry, phoff, shoff, flags,
        ehsize, phentsize, phnum, shentsize, shnum, shstrndx,
    ) = FILE_HEADER.unpack(raw)

    header = FileHeader(
        ident=ident,
        type=e_type,
        machine=machine,
        version=version,
        entry=entry,
        program_header_offset=phoff,
        section_header_offset=shoff,
        flags=flags,
        header_size=ehsize,
        program_header_entry_size=phentsize,
        program_header_count=phnum,
        section_header_entry_size=shentsize,
        section_header_count=shnum,
        string_table_index=shstrndx,
    )

    if strict:
        problems = check_ident(header)
        if problems:
            raise InvalidIdent(problems[0])
    return header


def _decode_table(
    source: ByteSource,
    offset: int,
    count: int,
    layout: struct.Struct,
) -> list[tuple[int, ...]]:
    """Read *count* back-to-back records of *layout* starting at *offset*.

    The whole table is read in one go, so either every record is
    returned or the call fails.
    """
    if count == 0:
        return []
    source.seek(offset)
    raw = source.read_exact(count * layout.size)
    return list(layout.iter_unpack(raw))


def decode_program_headers(source: ByteSource, header: FileHeader) -> list[ProgramHeader]:
    """Decode the program header table described by *header*.

    Raises:
        SeekFailure: ``program_header_offset`` is outside the source.
        TruncatedInput: The source ends before the last record.
    """
    rows = _decode_table(
        source,
        header.program_header_offset,
        header.program_header_count,
        PROGRAM_HEADER,
    )
    return [ProgramHeader(**dict(zip(_PROGRAM_FIELDS, row))) for row in rows]


def decode_section_headers(source: ByteSource, header: FileHeader) -> list[SectionHeader]:
    """Decode the section header table described by *header*.

    Raises:
        SeekFailure: ``section_header_offset`` is outside the source.
        TruncatedInput: The source ends before the last record.
    """
    rows = _decode_table(
        source,
        header.section_header_offset,
        header.section_header_count,
        SECTION_HEADER,
    )
    return [SectionHeader(**dict(zip(_SECTION_FIELDS, row))) for row in rows]


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------

def encode_file_header(header: FileHeader) -> bytes:
    """Return the 64 on-disk bytes of *header*."""
    return FILE_HEADER.pack(
        bytes(header.ident),
        header.type,
        header.machine,
        header.version,
        header.entry,
        header.program_header_offset,
        header.section_header_offset,
        header.flags,
        header.header_size,
        header.program_header_entry_size,
        header.program_header_count,
        header.section_header_entry_size,
        header.section_header_count,
        header.string_table_index,
    )


def encode_program_header(ph: ProgramHeader) -> bytes:
    return PROGRAM_HEADER.pack(*(getattr(ph, f) for f in _PROGRAM_FIELDS))


def encode_section_header(sh: SectionHeader) -> bytes:
    return SECTION_HEADER.pack(*(getattr(sh, f) for f in _SECTION_FIELDS))

"""
elfscope Data Models
=====================

Pydantic-based records for the structures decoded from an ELF64 file:
the file header, program headers, raw section headers and section headers
with their names resolved through the section-name string table.

All models are frozen.  A record is built once from the bytes of the
file and never mutated; the resolved view of a section header is a new
object, the raw header stays untouched.

References:
    - TIS Committee. (1995). Executable and Linkable Format (ELF) Specification.
    - System V Application Binary Interface, Edition 4.1.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from elfscope.core import constants as C


_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF
_U64 = 0xFFFF_FFFF_FFFF_FFFF


class _Record(BaseModel):
    """Common configuration for decoded, immutable records."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )


# ---------------------------------------------------------------------------
# File header
# ---------------------------------------------------------------------------

class FileHeader(_Record):
    """The ELF64 file header (``Elf64_Ehdr``).

    Attributes:
        ident: The 16 identification bytes as integers (magic, class,
            data encoding, version, OS/ABI, ABI version, padding).
        type: Object file type (``e_type``).
        machine: Target architecture (``e_machine``).
        version: Object file version (``e_version``).
        entry: Entry point virtual address.
        program_header_offset: File offset of the program header table.
        section_header_offset: File offset of the section header table.
        flags: Processor-specific flags.
        header_size: Size of this header in bytes.
        program_header_entry_size: Size of one program header table entry.
        program_header_count: Number of program header table entries.
        section_header_entry_size: Size of one section header table entry.
        section_header_count: Number of section header table entries.
        string_table_index: Section header table index of the
            section-name string table.
    """

    ident: tuple[int, ...] = Field(..., description="e_ident bytes")
    type: int = Field(default=0, ge=0, le=_U16)
    machine: int = Field(default=0, ge=0, le=_U16)
    version: int = Field(default=0, ge=0, le=_U32)
    entry: int = Field(default=0, ge=0, le=_U64)
    program_header_offset: int = Field(default=0, ge=0, le=_U64)
    section_header_offset: int = Field(default=0, ge=0, le=_U64)
    flags: int = Field(default=0, ge=0, le=_U32)
    header_size: int = Field(default=0, ge=0, le=_U16)
    program_header_entry_size: int = Field(default=0, ge=0, le=_U16)
    program_header_count: int = Field(default=0, ge=0, le=_U16)
    section_header_entry_size: int = Field(default=0, ge=0, le=_U16)
    section_header_count: int = Field(default=0, ge=0, le=_U16)
    string_table_index: int = Field(default=0, ge=0, le=_U16)

    @field_validator("ident", mode="before")
    @classmethod
    def _coerce_ident(cls, v: Any) -> Any:
        """Accept raw ``bytes`` as well as a sequence of integers."""
        if isinstance(v, (bytes, bytearray)):
            return tuple(v)
        return v

    @field_validator("ident")
    @classmethod
    def _check_ident(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if len(v) != C.EI_NIDENT:
            raise ValueError(f"ident must hold {C.EI_NIDENT} bytes, got {len(v)}")
        if any(not 0 <= b <= 0xFF for b in v):
            raise ValueError("ident values must be bytes (0..255)")
        return v

    # -- ident sub-fields ------------------------------------------------

    @property
    def magic(self) -> bytes:
        return bytes(self.ident[:4])

    @property
    def elf_class(self) -> int:
        return self.ident[C.EI_CLASS]

    @property
    def data_encoding(self) -> int:
        return self.ident[C.EI_DATA]

    @property
    def ident_version(self) -> int:
        return self.ident[C.EI_VERSION]

    @property
    def os_abi(self) -> int:
        return self.ident[C.EI_OSABI]

    @property
    def abi_version(self) -> int:
        return self.ident[C.EI_ABIVERSION]

    # -- symbolic names --------------------------------------------------

    @property
    def type_name(self) -> str:
        return C.type_name(self.type)

    @property
    def machine_name(self) -> str:
        return C.machine_name(self.machine)


# ---------------------------------------------------------------------------
# Program header
# ---------------------------------------------------------------------------

class ProgramHeader(_Record):
    """An ELF64 program header (``Elf64_Phdr``) describing one segment."""

    type: int = Field(default=0, ge=0, le=_U32)
    flags: int = Field(default=0, ge=0, le=_U32)
    offset: int = Field(default=0, ge=0, le=_U64)
    vaddr: int = Field(default=0, ge=0, le=_U64)
    paddr: int = Field(default=0, ge=0, le=_U64)
    filesz: int = Field(default=0, ge=0, le=_U64)
    memsz: int = Field(default=0, ge=0, le=_U64)
    align: int = Field(default=0, ge=0, le=_U64)

    @property
    def type_name(self) -> str:
        return C.segment_type_name(self.type)

    @property
    def flags_str(self) -> str:
        return C.segment_flags_str(self.flags)


# ---------------------------------------------------------------------------
# Section headers
# ---------------------------------------------------------------------------

class _SectionFields(_Record):
    """Fields shared by the raw and the resolved section header."""

    type: int = Field(default=0, ge=0, le=_U32)
    flags: int = Field(default=0, ge=0, le=_U64)
    addr: int = Field(default=0, ge=0, le=_U64)
    offset: int = Field(default=0, ge=0, le=_U64)
    size: int = Field(default=0, ge=0, le=_U64)
    link: int = Field(default=0, ge=0, le=_U32)
    info: int = Field(default=0, ge=0, le=_U32)
    addralign: int = Field(default=0, ge=0, le=_U64)
    entsize: int = Field(default=0, ge=0, le=_U64)

    @property
    def type_name(self) -> str:
        return C.section_type_name(self.type)

    @property
    def flags_str(self) -> str:
        return C.section_flags_str(self.flags)


class SectionHeader(_SectionFields):
    """An ELF64 section header (``Elf64_Shdr``) as stored in the file.

    ``name`` is a byte offset into the section-name string table, not
    the name itself; see :class:`ResolvedSectionHeader`.
    """

    name: int = Field(default=0, ge=0, le=_U32)


class ResolvedSectionHeader(_SectionFields):
    """A section header whose ``name`` has been looked up in the string table."""

    name: str = ""

    @classmethod
    def from_raw(cls, raw: SectionHeader, name: str) -> ResolvedSectionHeader:
        """Build the resolved view of *raw*, substituting *name*.

        Every non-name field is copied unchanged.
        """
        fields = raw.model_dump(exclude={"name"})
        return cls(name=name, **fields)


# ---------------------------------------------------------------------------
# Aggregate inspection result
# ---------------------------------------------------------------------------

class InspectionResult(BaseModel):
    """Everything decoded from one file in one inspection run.

    Attributes:
        path: Display path of the inspected file.
        file_header: The decoded file header.
        program_headers: Program headers in table order.
        section_headers: Resolved section headers in table order.
    """

    model_config = ConfigDict(frozen=True)

    path: str = ""
    file_header: FileHeader
    program_headers: list[ProgramHeader] = Field(default_factory=list)
    section_headers: list[ResolvedSectionHeader] = Field(default_factory=list)

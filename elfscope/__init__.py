"""
elfscope -- ELF64 Header Inspector
===================================

elfscope reads 64-bit little-endian ELF files and reports their
structural metadata: the file header, the program header table and the
section header table with section names resolved through the
section-name string table.  It is a read-only, readelf-like tool.

Capabilities:
    - Fixed-layout little-endian decoding of Elf64_Ehdr, Elf64_Phdr, Elf64_Shdr
    - Section name resolution through the section-name string table
    - Optional identification checks (magic, class, data encoding)
    - Highlighted console listings and JSON reports

References:
    - TIS Committee. (1995). ELF Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
"""

__version__ = "1.0.0"

from elfscope.core.engine import (
    ElfScopeEngine,
    read_file_header,
    read_program_headers,
    read_resolved_section_headers,
)
from elfscope.core.errors import (
    ElfScopeError,
    InvalidIdent,
    InvalidStringTableIndex,
    SeekFailure,
    TruncatedInput,
)
from elfscope.core.models import (
    FileHeader,
    InspectionResult,
    ProgramHeader,
    ResolvedSectionHeader,
    SectionHeader,
)
from elfscope.parsers.source import ByteSource

__all__ = [
    "ByteSource",
    "ElfScopeEngine",
    "ElfScopeError",
    "FileHeader",
    "InspectionResult",
    "InvalidIdent",
    "InvalidStringTableIndex",
    "ProgramHeader",
    "ResolvedSectionHeader",
    "SectionHeader",
    "SeekFailure",
    "TruncatedInput",
    "read_file_header",
    "read_program_headers",
    "read_resolved_section_headers",
    "__version__",
]

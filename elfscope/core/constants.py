"""
ELF Constants
==============

Identification values and symbolic names for the header fields elfscope
displays.  Values outside these tables render as hexadecimal.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Identification (e_ident)
# ---------------------------------------------------------------------------

ELF_MAGIC: bytes = b"\x7fELF"
EI_NIDENT: int = 16

EI_CLASS: int = 4
EI_DATA: int = 5
EI_VERSION: int = 6
EI_OSABI: int = 7
EI_ABIVERSION: int = 8

ELFCLASSNONE: int = 0
ELFCLASS32: int = 1
ELFCLASS64: int = 2

_CLASS_NAMES: dict[int, str] = {
    ELFCLASSNONE: "none",
    ELFCLASS32: "ELF32",
    ELFCLASS64: "ELF64",
}

ELFDATANONE: int = 0
ELFDATA2LSB: int = 1  # Little-endian
ELFDATA2MSB: int = 2  # Big-endian

_DATA_NAMES: dict[int, str] = {
    ELFDATANONE: "none",
    ELFDATA2LSB: "2's complement, little endian",
    ELFDATA2MSB: "2's complement, big endian",
}

_OSABI_NAMES: dict[int, str] = {
    0: "UNIX - System V",
    1: "HP-UX",
    2: "NetBSD",
    3: "UNIX - GNU",
    6: "Solaris",
    9: "FreeBSD",
    12: "OpenBSD",
    97: "ARM",
    255: "Standalone",
}

# ---------------------------------------------------------------------------
# Object file type (e_type)
# ---------------------------------------------------------------------------

ET_NONE: int = 0
ET_REL: int = 1
ET_EXEC: int = 2
ET_DYN: int = 3
ET_CORE: int = 4

_ET_NAMES: dict[int, str] = {
    ET_NONE: "NONE",
    ET_REL: "REL (Relocatable file)",
    ET_EXEC: "EXEC (Executable file)",
    ET_DYN: "DYN (Shared object file)",
    ET_CORE: "CORE (Core file)",
}

# ---------------------------------------------------------------------------
# Machine (e_machine)
# ---------------------------------------------------------------------------

_EM_NAMES: dict[int, str] = {
    0: "None",
    2: "SPARC",
    3: "Intel 80386",
    8: "MIPS R3000",
    20: "PowerPC",
    21: "PowerPC64",
    40: "ARM",
    43: "SPARC v9",
    62: "Advanced Micro Devices X86-64",
    183: "AArch64",
    243: "RISC-V",
    247: "Linux BPF",
    258: "LoongArch",
}

# ---------------------------------------------------------------------------
# Program header types and flags
# ---------------------------------------------------------------------------

PT_NULL: int = 0
PT_LOAD: int = 1
PT_DYNAMIC: int = 2
PT_INTERP: int = 3
PT_NOTE: int = 4
PT_SHLIB: int = 5
PT_PHDR: int = 6
PT_TLS: int = 7

_PT_NAMES: dict[int, str] = {
    PT_NULL: "NULL",
    PT_LOAD: "LOAD",
    PT_DYNAMIC: "DYNAMIC",
    PT_INTERP: "INTERP",
    PT_NOTE: "NOTE",
    PT_SHLIB: "SHLIB",
    PT_PHDR: "PHDR",
    PT_TLS: "TLS",
    0x6474E550: "GNU_EH_FRAME",
    0x6474E551: "GNU_STACK",
    0x6474E552: "GNU_RELRO",
    0x6474E553: "GNU_PROPERTY",
}

PF_X: int = 0x1
PF_W: int = 0x2
PF_R: int = 0x4

# ---------------------------------------------------------------------------
# Section header types and flags
# ---------------------------------------------------------------------------

SHT_NULL: int = 0
SHT_PROGBITS: int = 1
SHT_SYMTAB: int = 2
SHT_STRTAB: int = 3

_SHT_NAMES: dict[int, str] = {
    SHT_NULL: "NULL",
    SHT_PROGBITS: "PROGBITS",
    SHT_SYMTAB: "SYMTAB",
    SHT_STRTAB: "STRTAB",
    4: "RELA",
    5: "HASH",
    6: "DYNAMIC",
    7: "NOTE",
    8: "NOBITS",
    9: "REL",
    10: "SHLIB",
    11: "DYNSYM",
    14: "INIT_ARRAY",
    15: "FINI_ARRAY",
    16: "PREINIT_ARRAY",
    17: "GROUP",
    18: "SYMTAB_SHNDX",
    0x6FFFFFF6: "GNU_HASH",
    0x6FFFFFFD: "VERDEF",
    0x6FFFFFFE: "VERNEED",
    0x6FFFFFFF: "VERSYM",
}

# (bit, letter) in readelf's key order
_SHF_LETTERS: tuple[tuple[int, str], ...] = (
    (0x1, "W"),
    (0x2, "A"),
    (0x4, "X"),
    (0x10, "M"),
    (0x20, "S"),
    (0x40, "I"),
    (0x80, "L"),
    (0x100, "O"),
    (0x200, "G"),
    (0x400, "T"),
    (0x800, "C"),
)


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

def _lookup(table: dict[int, str], value: int) -> str:
    return table.get(value, f"0x{value:x}")


def class_name(value: int) -> str:
    return _lookup(_CLASS_NAMES, value)


def data_name(value: int) -> str:
    return _lookup(_DATA_NAMES, value)


def osabi_name(value: int) -> str:
    return _lookup(_OSABI_NAMES, value)


def type_name(value: int) -> str:
    return _lookup(_ET_NAMES, value)


def machine_name(value: int) -> str:
    return _lookup(_EM_NAMES, value)


def segment_type_name(value: int) -> str:
    return _lookup(_PT_NAMES, value)


def section_type_name(value: int) -> str:
    return _lookup(_SHT_NAMES, value)


def segment_flags_str(flags: int) -> str:
    """Convert program header flags to ``RWE`` style text.

    Args:
        flags: Program header flags value (p_flags).

    Returns:
        Three-character string, ``-`` for each absent permission.
    """
    return (
        ("R" if flags & PF_R else "-")
        + ("W" if flags & PF_W else "-")
        + ("E" if flags & PF_X else "-")
    )


def section_flags_str(flags: int) -> str:
    """Convert a section flags bitmask to readelf's letter key.

    Args:
        flags: Section header flags value (sh_flags).

    Returns:
        String like ``"AX"`` for Alloc+Exec, empty when no known bit is set.
    """
    return "".join(letter for bit, letter in _SHF_LETTERS if flags & bit)

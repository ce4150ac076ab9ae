"""
elfscope Console Output
========================

Rich-powered terminal display of decoded ELF structures: a readelf-style
listing of the file header and tables of program and section headers.

Rendered text passes through a static highlight table: the words
"section" and "program" and hexadecimal literals get their own colours.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import re
from typing import Sequence

from rich.text import Text

from shared.console import ScopeConsole

from elfscope.core import constants as C
from elfscope.core.models import (
    FileHeader,
    InspectionResult,
    ProgramHeader,
    ResolvedSectionHeader,
)


# ---------------------------------------------------------------------------
# Highlight table (pattern -> theme style)
# ---------------------------------------------------------------------------

HIGHLIGHTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(?i)section"), "scope.section_kw"),
    (re.compile(r"(?i)program"), "scope.program_kw"),
    (re.compile(r"0x[0-9a-f]+"), "scope.hex"),
)


def highlight(value: object, enabled: bool = True) -> Text:
    """Return *value* as Rich Text with the highlight table applied."""
    text = Text(str(value))
    if enabled:
        for pattern, style in HIGHLIGHTS:
            text.highlight_regex(pattern, style=style)
    return text


def _hex(value: int) -> str:
    return f"0x{value:x}"


# ---------------------------------------------------------------------------
# ElfConsoleOutput
# ---------------------------------------------------------------------------

class ElfConsoleOutput:
    """Rich terminal display for decoded ELF structures.

    Usage::

        output = ElfConsoleOutput()
        output.display(inspection_result)
    """

    def __init__(
        self,
        console: ScopeConsole | None = None,
        *,
        highlight: bool = True,
    ) -> None:
        """Initialise the renderer.

        Args:
            console: Optional ScopeConsole instance.  A new one is created
                     if not provided.
            highlight: Apply the highlight table to rendered text.
        """
        self._console: ScopeConsole = console or ScopeConsole()
        self._highlight = highlight

    def _hl(self, value: object) -> Text:
        return highlight(value, self._highlight)

    def display(
        self,
        result: InspectionResult,
        *,
        file_header: bool = True,
        program_headers: bool = True,
        section_headers: bool = True,
    ) -> None:
        """Display the selected views of an inspection result.

        Consecutive views are separated by a blank line.
        """
        steps = (
            (file_header, self.display_file_header, (result.file_header,)),
            (program_headers, self.display_program_headers,
             (result.program_headers, result.file_header)),
            (section_headers, self.display_section_headers,
             (result.section_headers, result.file_header)),
        )
        selected = [(show, args) for wanted, show, args in steps if wanted]
        for idx, (show, args) in enumerate(selected):
            if idx:
                self._console.blank()
            show(*args)

    # ------------------------------------------------------------------ #
    #  File header
    # ------------------------------------------------------------------ #

    def display_file_header(self, header: FileHeader) -> None:
        """Display the file header as an aligned key/value listing."""
        magic = " ".join(f"{b:02x}" for b in header.ident)
        rows: list[tuple[str, str]] = [
            ("Magic", magic),
            ("Class", C.class_name(header.elf_class)),
            ("Data", C.data_name(header.data_encoding)),
            ("Version", str(header.ident_version)),
            ("OS/ABI", C.osabi_name(header.os_abi)),
            ("ABI Version", str(header.abi_version)),
            ("Type", header.type_name),
            ("Machine", header.machine_name),
            ("Version", _hex(header.version)),
            ("Entry point address", _hex(header.entry)),
            ("Start of program headers",
             f"{header.program_header_offset} (bytes into file)"),
            ("Start of section headers",
             f"{header.section_header_offset} (bytes into file)"),
            ("Flags", _hex(header.flags)),
            ("Size of this header", f"{header.header_size} (bytes)"),
            ("Size of program headers",
             f"{header.program_header_entry_size} (bytes)"),
            ("Number of program headers", str(header.program_header_count)),
            ("Size of section headers",
             f"{header.section_header_entry_size} (bytes)"),
            ("Number of section headers", str(header.section_header_count)),
            ("Section header string table index",
             str(header.string_table_index)),
        ]
        self._console.key_values(
            self._hl("ELF Header"),
            [(label, self._hl(value)) for label, value in rows],
        )

    # ------------------------------------------------------------------ #
    #  Program headers
    # ------------------------------------------------------------------ #

    def display_program_headers(
        self,
        headers: Sequence[ProgramHeader],
        file_header: FileHeader | None = None,
    ) -> None:
        """Display the program header table."""
        if not headers:
            self._console.print(self._hl("There are no program headers in this file."))
            return

        rows = [
            (
                ph.type_name,
                _hex(ph.offset),
                _hex(ph.vaddr),
                _hex(ph.paddr),
                _hex(ph.filesz),
                _hex(ph.memsz),
                ph.flags_str,
                _hex(ph.align),
            )
            for ph in headers
        ]
        caption = None
        if file_header is not None:
            caption = (
                f"{len(headers)} program headers, starting at offset "
                f"{file_header.program_header_offset}"
            )
        self._table(
            "Program Headers",
            ["Type", "Offset", "VirtAddr", "PhysAddr", "FileSiz", "MemSiz", "Flg", "Align"],
            rows,
            caption=caption,
            justify=["left"] + ["right"] * 5 + ["left", "right"],
        )

    # ------------------------------------------------------------------ #
    #  Section headers
    # ------------------------------------------------------------------ #

    def display_section_headers(
        self,
        headers: Sequence[ResolvedSectionHeader],
        file_header: FileHeader | None = None,
    ) -> None:
        """Display the section header table with resolved names."""
        if not headers:
            self._console.print(self._hl("There are no sections in this file."))
            return

        rows = [
            (
                f"[{idx:2d}]",
                sh.name,
                sh.type_name,
                _hex(sh.addr),
                _hex(sh.offset),
                _hex(sh.size),
                _hex(sh.entsize),
                sh.flags_str,
                str(sh.link),
                str(sh.info),
                str(sh.addralign),
            )
            for idx, sh in enumerate(headers)
        ]
        caption = None
        if file_header is not None:
            caption = (
                f"{len(headers)} section headers, starting at offset "
                f"{_hex(file_header.section_header_offset)}"
            )
        self._table(
            "Section Headers",
            ["Nr", "Name", "Type", "Address", "Offset", "Size", "EntSize",
             "Flags", "Link", "Info", "Align"],
            rows,
            caption=caption,
            justify=["right", "left", "left"] + ["right"] * 4 + ["left"] + ["right"] * 3,
        )

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    def _table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        caption: str | None,
        justify: Sequence[str],
    ) -> None:
        self._console.table(
            self._hl(title),
            columns,
            [[self._hl(cell) for cell in row] for row in rows],
            caption=self._hl(caption) if caption is not None else None,
            justify=justify,
        )

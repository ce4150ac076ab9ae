"""
elfscope Inspection Engine
===========================

Orchestrates one inspection run over one byte source: decode the file
header, then the program header table, then the section header table
and the section-name string table it points at.

Every step seeks explicitly before reading, so the steps may run in any
order and any subset.  The first failure aborts the run; there are no
partial results and no retries.

Inspection Pipeline:
    1. Decode the 64-byte file header at offset 0
    2. Check identification bytes and declared entry sizes
    3. Seek and decode the program header table
    4. Seek and decode the section header table
    5. Seek and load the section-name string table
    6. Resolve section names in table order
"""

from __future__ import annotations

from pathlib import Path

from shared.config import ScopeConfig
from shared.logger import ScopeLogger

from elfscope.core.binder import bind_names
from elfscope.core.models import (
    FileHeader,
    InspectionResult,
    ProgramHeader,
    ResolvedSectionHeader,
)
from elfscope.parsers.layout import (
    check_entry_sizes,
    check_ident,
    decode_file_header,
    decode_program_headers,
)
from elfscope.parsers.source import ByteSource, SourceLike


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------

def read_file_header(source: SourceLike, *, strict: bool = False) -> FileHeader:
    """Decode the file header found at the start of *source*.

    Raises:
        TruncatedInput: The source is shorter than a file header.
        InvalidIdent: ``strict`` is set and the file is not ELF64 LSB.
    """
    src = ByteSource.wrap(source)
    src.seek(0)
    return decode_file_header(src, strict=strict)


def read_program_headers(source: SourceLike, header: FileHeader) -> list[ProgramHeader]:
    """Decode the program headers described by *header*.

    Raises:
        SeekFailure, TruncatedInput: The table is not fully inside *source*.
    """
    return decode_program_headers(ByteSource.wrap(source), header)


def read_resolved_section_headers(
    source: SourceLike, header: FileHeader
) -> list[ResolvedSectionHeader]:
    """Decode the section headers described by *header* with their names.

    Raises:
        SeekFailure, TruncatedInput: A table is not fully inside *source*.
        InvalidStringTableIndex: The string table index is out of range.
    """
    return bind_names(ByteSource.wrap(source), header)


# ---------------------------------------------------------------------------
# ElfScopeEngine
# ---------------------------------------------------------------------------

class ElfScopeEngine:
    """Runs configured, logged inspections of ELF64 files.

    Usage::

        engine = ElfScopeEngine()
        result = engine.inspect("/bin/ls")
        print(result.file_header.entry)
    """

    def __init__(
        self,
        config: ScopeConfig | None = None,
        logger: ScopeLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: elfscope configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: ScopeConfig = config or ScopeConfig()
        self._logger: ScopeLogger = logger or ScopeLogger("engine")

    @property
    def config(self) -> ScopeConfig:
        return self._config

    # ------------------------------------------------------------------ #
    #  Main entry point
    # ------------------------------------------------------------------ #

    def inspect(
        self,
        file_path: str | Path,
        *,
        program_headers: bool = True,
        section_headers: bool = True,
    ) -> InspectionResult:
        """Inspect the ELF file at *file_path*.

        Args:
            file_path: Path of the file to inspect.
            program_headers: Decode the program header table.
            section_headers: Decode the section headers and resolve names.

        Returns:
            The decoded structures; skipped tables are empty lists.

        Raises:
            OSError: The file cannot be opened.
            ElfScopeError: Decoding failed.
        """
        path = Path(file_path)
        with self._logger.timed(f"inspect {path}"):
            with ByteSource.open(path) as source:
                self._logger.debug("Opened %s (%s bytes)", path, source.size)
                return self.inspect_source(
                    source,
                    display_path=str(path),
                    program_headers=program_headers,
                    section_headers=section_headers,
                )

    def inspect_source(
        self,
        source: SourceLike,
        *,
        display_path: str = "<memory>",
        program_headers: bool = True,
        section_headers: bool = True,
    ) -> InspectionResult:
        """Inspect an already open source (stream or in-memory bytes)."""
        src = ByteSource.wrap(source)
        header = self.read_header(src)

        phdrs: list[ProgramHeader] = []
        if program_headers:
            with self._logger.operation("program_headers"):
                self._logger.debug(
                    "Decoding %d program headers at offset %#x",
                    header.program_header_count,
                    header.program_header_offset,
                )
                phdrs = read_program_headers(src, header)

        shdrs: list[ResolvedSectionHeader] = []
        if section_headers:
            with self._logger.operation("section_headers"):
                self._logger.debug(
                    "Decoding %d section headers at offset %#x, names from section %d",
                    header.section_header_count,
                    header.section_header_offset,
                    header.string_table_index,
                )
                shdrs = read_resolved_section_headers(src, header)

        self._logger.info(
            "Inspected %s: %d program headers, %d section headers",
            display_path,
            len(phdrs),
            len(shdrs),
        )
        return InspectionResult(
            path=display_path,
            file_header=header,
            program_headers=phdrs,
            section_headers=shdrs,
        )

    def read_header(self, source: ByteSource) -> FileHeader:
        """Decode the file header and log identification anomalies."""
        settings = self._config.elfscope
        with self._logger.operation("file_header"):
            header = read_file_header(source, strict=settings.strict_ident)
            if not settings.strict_ident:
                for problem in check_ident(header):
                    self._logger.warning("Identification: %s", problem)
            if settings.warn_entry_size_mismatch:
                for problem in check_entry_sizes(header):
                    self._logger.warning("Layout: %s", problem)
            self._logger.debug(
                "File header: type=%s machine=%s entry=%#x",
                header.type_name,
                header.machine_name,
                header.entry,
            )
        return header

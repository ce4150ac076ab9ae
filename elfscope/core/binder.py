"""
Section Name Binder
====================

Section names are not stored in the section headers themselves: each
header holds an offset into the section-name string table, and that
table is one of the sections, found through the file header's
``string_table_index``.  Binding therefore takes two passes over the
source: decode the raw headers, then load the string table they point
at and substitute the names.
"""

from __future__ import annotations

from elfscope.core.errors import InvalidStringTableIndex
from elfscope.core.models import FileHeader, ResolvedSectionHeader, SectionHeader
from elfscope.parsers.layout import decode_section_headers
from elfscope.parsers.source import ByteSource
from elfscope.parsers.strtab import load_string_table, resolve


def string_table_section(
    sections: list[SectionHeader], header: FileHeader
) -> SectionHeader:
    """Return the section holding the section names.

    Raises:
        InvalidStringTableIndex: The index names no slot of *sections*.
    """
    index = header.string_table_index
    if not 0 <= index < len(sections):
        raise InvalidStringTableIndex(index, len(sections))
    return sections[index]


def name_sections(
    sections: list[SectionHeader], table: bytes
) -> list[ResolvedSectionHeader]:
    """Resolve every section's name against *table*, keeping table order."""
    return [ResolvedSectionHeader.from_raw(sh, resolve(table, sh.name)) for sh in sections]


def bind_names(source: ByteSource, header: FileHeader) -> list[ResolvedSectionHeader]:
    """Decode the section header table and resolve every section name.

    An empty section header table yields an empty list and no string
    table is read.

    Raises:
        SeekFailure, TruncatedInput: Reading the headers or the string
            table failed.
        InvalidStringTableIndex: ``header.string_table_index`` does not
            address a section; nothing is resolved.
    """
    sections = decode_section_headers(source, header)
    if not sections:
        return []
    strtab = string_table_section(sections, header)
    table = load_string_table(source, strtab.offset, strtab.size)
    return name_sections(sections, table)

"""Tests for the decoded record models and name tables."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from elfscope.core import constants as C
from elfscope.core.models import (
    FileHeader,
    ProgramHeader,
    ResolvedSectionHeader,
    SectionHeader,
)

from conftest import IDENT


def test_ident_accepts_bytes_and_exposes_subfields():
    header = FileHeader(ident=IDENT, type=3, machine=183)
    assert header.ident == tuple(IDENT)
    assert header.magic == C.ELF_MAGIC
    assert (header.elf_class, header.data_encoding, header.ident_version) == (2, 1, 1)
    assert header.type_name == "DYN (Shared object file)"
    assert header.machine_name == "AArch64"


@pytest.mark.parametrize("ident", [b"\x7fELF", tuple(range(17)), (256,) + (0,) * 15])
def test_ident_must_be_sixteen_bytes(ident):
    with pytest.raises(ValidationError):
        FileHeader(ident=ident)


def test_field_width_is_enforced():
    with pytest.raises(ValidationError):
        FileHeader(ident=IDENT, section_header_count=0x10000)
    with pytest.raises(ValidationError):
        ProgramHeader(type=-1)


def test_records_are_frozen():
    ph = ProgramHeader(type=1)
    with pytest.raises(ValidationError):
        ph.type = 2


def test_resolved_header_copies_fields():
    raw = SectionHeader(name=7, type=1, flags=0x6, addr=0x1000, size=0x40, addralign=16)
    resolved = ResolvedSectionHeader.from_raw(raw, ".text")

    assert resolved.name == ".text"
    assert resolved.model_dump(exclude={"name"}) == raw.model_dump(exclude={"name"})
    assert raw.name == 7
    assert resolved.type_name == "PROGBITS"
    assert resolved.flags_str == "AX"


def test_unknown_values_render_as_hex():
    assert C.segment_type_name(0x12345) == "0x12345"
    assert C.section_type_name(0x99) == "0x99"
    assert C.machine_name(0xBEEF) == "0xbeef"


@pytest.mark.parametrize(
    "flags, expected",
    [(0, "---"), (4, "R--"), (5, "R-E"), (6, "RW-"), (7, "RWE")],
)
def test_segment_flags(flags, expected):
    assert C.segment_flags_str(flags) == expected


def test_section_flags():
    assert C.section_flags_str(0) == ""
    assert C.section_flags_str(0x3) == "WA"
    assert C.section_flags_str(0x32) == "AMS"

"""Tests for the public read operations and the inspection engine."""

from __future__ import annotations

import io
import json

import pytest

from shared.config import ScopeConfig
from shared.logger import ScopeLogger

from elfscope import (
    ElfScopeEngine,
    read_file_header,
    read_program_headers,
    read_resolved_section_headers,
)
from elfscope.core.errors import (
    ElfScopeError,
    InvalidIdent,
    InvalidStringTableIndex,
    TruncatedInput,
)

from conftest import SECTION_NAMES


def _quiet_logger(tmp_path, **kwargs) -> ScopeLogger:
    return ScopeLogger(
        "test",
        console_output=False,
        log_file=tmp_path / "elfscope.log",
        json_logs=True,
        **kwargs,
    )


def _log_lines(tmp_path) -> list[dict]:
    text = (tmp_path / "elfscope.log").read_text(encoding="utf-8")
    return [json.loads(line) for line in text.splitlines() if line]


def test_operations_accept_bytes_and_streams(elf_bytes):
    header = read_file_header(elf_bytes)
    assert header.entry == 0x401000

    stream = io.BytesIO(elf_bytes)
    assert len(read_program_headers(stream, header)) == 2
    names = [s.name for s in read_resolved_section_headers(stream, header)]
    assert names == SECTION_NAMES


def test_read_file_header_seeks_to_start(elf_bytes):
    stream = io.BytesIO(elf_bytes)
    stream.seek(100)
    assert read_file_header(stream).section_header_count == 4


def test_operations_are_order_independent(elf_bytes):
    stream = io.BytesIO(elf_bytes)
    header = read_file_header(stream)
    sections_first = read_resolved_section_headers(stream, header)
    programs = read_program_headers(stream, header)
    assert read_resolved_section_headers(stream, header) == sections_first
    assert read_program_headers(stream, header) == programs


def test_inspect_file(elf_file, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    result = engine.inspect(elf_file)

    assert result.path == str(elf_file)
    assert result.file_header.program_header_count == 2
    assert [p.type_name for p in result.program_headers] == ["PHDR", "LOAD"]
    assert [s.name for s in result.section_headers] == SECTION_NAMES


def test_inspect_skips_unrequested_tables(elf_bytes, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    result = engine.inspect_source(
        elf_bytes, program_headers=False, section_headers=False
    )
    assert result.path == "<memory>"
    assert result.program_headers == []
    assert result.section_headers == []


def test_inspect_missing_file_raises_oserror(tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    with pytest.raises(OSError):
        engine.inspect(tmp_path / "missing.elf")


def test_errors_share_a_base(make_elf, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    with pytest.raises(ElfScopeError):
        engine.inspect_source(make_elf()[:40])
    with pytest.raises(InvalidStringTableIndex):
        engine.inspect_source(make_elf(shstrndx=9))


def test_truncated_tables_abort(elf_bytes, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    with pytest.raises(TruncatedInput):
        engine.inspect_source(elf_bytes[:300])


def test_lenient_ident_logs_warning(make_elf, tmp_path):
    ident = b"\x7fELF" + bytes([1, 1, 1]) + bytes(9)
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    result = engine.inspect_source(make_elf(ident=ident))

    assert result.file_header.elf_class == 1
    records = _log_lines(tmp_path)
    assert any(
        r["level"] == "WARNING" and "not ELF64" in r["message"] for r in records
    )
    assert all(r["component"] == "test" for r in records)
    assert records[0]["operation"] == "file_header"


def test_strict_ident_from_config(make_elf, tmp_path):
    config = ScopeConfig()
    config.elfscope.strict_ident = True
    engine = ElfScopeEngine(config=config, logger=_quiet_logger(tmp_path))
    with pytest.raises(InvalidIdent):
        engine.inspect_source(make_elf(ident=b"\x7fELF" + bytes([2, 2, 1]) + bytes(9)))


def test_entry_size_mismatch_warning(make_elf, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path))
    result = engine.inspect_source(make_elf(shentsize=40))

    assert len(result.section_headers) == 4
    messages = [r["message"] for r in _log_lines(tmp_path)]
    assert "Layout: section header entry size is 40, decoding with 64" in messages


def test_entry_size_warning_can_be_disabled(make_elf, tmp_path):
    config = ScopeConfig()
    config.elfscope.warn_entry_size_mismatch = False
    engine = ElfScopeEngine(config=config, logger=_quiet_logger(tmp_path))
    engine.inspect_source(make_elf(shentsize=40))
    assert _log_lines(tmp_path) == []


def test_debug_logging_traces_steps(elf_file, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path, log_level="DEBUG"))
    engine.inspect(elf_file)

    records = _log_lines(tmp_path)
    operations = {r.get("operation") for r in records}
    assert {"file_header", "program_headers", "section_headers"} <= operations
    assert records[-1]["message"].startswith("Completed: inspect")


def test_info_logging_summarises_run(elf_file, tmp_path):
    engine = ElfScopeEngine(logger=_quiet_logger(tmp_path, log_level="INFO"))
    engine.inspect(elf_file, program_headers=False)

    records = _log_lines(tmp_path)
    assert [r["level"] for r in records] == ["INFO"]
    assert records[0]["message"] == (
        f"Inspected {elf_file}: 0 program headers, 4 section headers"
    )

"""Tests for the elfscope command line."""

from __future__ import annotations

import json
import struct

import pytest
from click.testing import CliRunner

from elfscope import __version__
from elfscope.cli import elfscope_cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"COLUMNS": "200"})


def test_default_shows_every_view(runner, elf_file):
    result = runner.invoke(elfscope_cli, [str(elf_file)])
    assert result.exit_code == 0, result.output
    assert "ELF Header" in result.output
    assert "Program Headers" in result.output
    assert "Section Headers" in result.output
    assert ".shstrtab" in result.output


def test_single_view_flags(runner, elf_file):
    result = runner.invoke(elfscope_cli, ["-l", str(elf_file)])
    assert result.exit_code == 0
    assert "Program Headers" in result.output
    assert "ELF Header" not in result.output
    assert "Section Headers" not in result.output


def test_json_section_headers(runner, elf_file):
    result = runner.invoke(elfscope_cli, ["-S", "--json", str(elf_file)])
    assert result.exit_code == 0
    sections = json.loads(result.stdout)
    assert [s["name"] for s in sections] == ["", ".text", ".data", ".shstrtab"]


def test_json_file_header(runner, elf_file):
    result = runner.invoke(elfscope_cli, ["-h", "-j", str(elf_file)])
    assert result.exit_code == 0
    header = json.loads(result.stdout)
    assert header["section_header_count"] == 4
    assert header["string_table_index"] == 3


def test_output_file_implies_json(runner, elf_file, tmp_path):
    target = tmp_path / "report.json"
    result = runner.invoke(elfscope_cli, [str(elf_file), "-o", str(target)])
    assert result.exit_code == 0
    doc = json.loads(target.read_text(encoding="utf-8"))
    assert set(doc) >= {"file_header", "program_headers", "section_headers"}
    assert "JSON report saved" in result.output


def test_truncated_file_fails(runner, tmp_path, elf_bytes):
    path = tmp_path / "short.elf"
    path.write_bytes(elf_bytes[:300])
    result = runner.invoke(elfscope_cli, [str(path)])
    assert result.exit_code == 1
    assert "Cannot decode" in result.output
    assert "truncated input" in result.output


def test_strict_rejects_non_elf(runner, tmp_path):
    path = tmp_path / "not-elf.bin"
    path.write_bytes(b"MZ" + bytes(200))
    result = runner.invoke(elfscope_cli, ["--strict", "-h", str(path)])
    assert result.exit_code == 1
    assert "bad magic" in result.output


def test_config_file_sets_json_indent(runner, elf_file, tmp_path):
    config = tmp_path / "elfscope.toml"
    config.write_text("[elfscope]\njson_indent = 4\n", encoding="utf-8")
    result = runner.invoke(
        elfscope_cli, ["-c", str(config), "-h", "-j", str(elf_file)]
    )
    assert result.exit_code == 0
    assert '\n    "ident": [' in result.stdout


def test_missing_path_is_usage_error(runner, tmp_path):
    result = runner.invoke(elfscope_cli, [str(tmp_path / "nope")])
    assert result.exit_code == 2


def test_version(runner):
    result = runner.invoke(elfscope_cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_huge_string_table_size_fails_cleanly(runner, tmp_path, elf_bytes):
    image = bytearray(elf_bytes)
    struct.pack_into("<Q", image, 200 + 3 * 64 + 32, 0xFFFF_FFFF_FFFF_FFFF)
    path = tmp_path / "huge-strtab.elf"
    path.write_bytes(bytes(image))
    result = runner.invoke(elfscope_cli, ["-S", str(path)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, (MemoryError, OverflowError))
    assert "truncated input" in result.output

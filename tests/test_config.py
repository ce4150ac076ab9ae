"""Tests for TOML configuration loading."""

from __future__ import annotations

import pytest

from shared.config import (
    DEFAULT_CONFIG_NAME,
    ElfScopeConfig,
    GlobalConfig,
    ScopeConfig,
)


def test_defaults():
    config = ScopeConfig()
    assert config.elfscope == ElfScopeConfig()
    assert config.global_settings == GlobalConfig()
    assert config.elfscope.strict_ident is False
    assert config.global_settings.log_level == "WARNING"


def test_load_partial_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[global]\n"
        'log_level = "DEBUG"\n'
        "color = false\n"
        "\n"
        "[elfscope]\n"
        "strict_ident = true\n"
        "unknown_key = 1\n",
        encoding="utf-8",
    )
    config = ScopeConfig.load(path)

    assert config.global_settings.log_level == "DEBUG"
    assert config.global_settings.color is False
    assert config.global_settings.log_json is False
    assert config.elfscope.strict_ident is True
    assert config.elfscope.json_indent == 2


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ScopeConfig.load(tmp_path / "absent.toml")


def test_default_file_comes_from_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert ScopeConfig.load() == ScopeConfig()

    (tmp_path / DEFAULT_CONFIG_NAME).write_text(
        "[elfscope]\njson_indent = 0\n", encoding="utf-8"
    )
    assert ScopeConfig.load().elfscope.json_indent == 0

"""
elfscope Configuration Management
==================================

Centralized configuration for the elfscope inspector using Python
dataclasses and TOML-based persistence.

Architecture follows the Twelve-Factor App methodology for configuration
management (Wiggins, 2011), separating config from code.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - PEP 681 -- Data Class Transforms (2022).
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file, looked up in the working directory at load time
# ---------------------------------------------------------------------------
DEFAULT_CONFIG_NAME: str = "elfscope.toml"


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=False, slots=True)
class ElfScopeConfig:
    """Configuration for the ELF inspector.

    Controls identification strictness, decoding warnings and output
    formatting used by the ``elfscope`` command.

    Reference:
        TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
        Linkable Format (ELF) Specification, Version 1.2.
    """

    # Decoding parameters
    strict_ident: bool = False
    warn_entry_size_mismatch: bool = True

    # Output parameters
    json_indent: int = 2
    highlight: bool = True


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity, log files and colour output."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    color: bool = True


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ScopeConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = ScopeConfig.load()                  # from default path
        >>> config = ScopeConfig.load("custom.toml")     # from custom path
        >>> print(config.elfscope.json_indent)
        2
        >>> print(config.global_settings.log_level)
        'WARNING'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    elfscope: ElfScopeConfig = field(default_factory=ElfScopeConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> ScopeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``elfscope.toml`` in the
        current working directory.  Missing keys gracefully fall back to dataclass
        defaults -- no ``KeyError`` is raised.

        Args:
            path: Filesystem path to a TOML configuration file.
                  Defaults to ``./elfscope.toml``.

        Returns:
            A fully-populated :class:`ScopeConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        if path is not None:
            config_path = Path(path)
        else:
            config_path = Path.cwd() / DEFAULT_CONFIG_NAME

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            # Fall back to pure defaults when the default file is absent.
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            elfscope=cls._build_section(ElfScopeConfig, raw.get("elfscope", {})),
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


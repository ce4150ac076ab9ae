"""
elfscope Console Interface
===========================

Rich-powered console abstraction providing one presentation layer for
every elfscope view.

The class wraps :class:`rich.console.Console` and adds convenience methods
for severity-coloured messages, key/value panels and tables, all
with consistent styling.  Report output goes to stdout,
status and error messages go to stderr.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme -- consistent palette across all elfscope output
# ---------------------------------------------------------------------------
_SCOPE_THEME = Theme(
    {
        "scope.title": "bold bright_cyan",
        "scope.section": "bold bright_magenta",
        "scope.success": "bold green",
        "scope.warning": "bold yellow",
        "scope.error": "bold red",
        "scope.info": "bold bright_blue",
        "scope.dim": "dim white",
        "scope.label": "bold",
        "scope.section_kw": "blue",
        "scope.program_kw": "green",
        "scope.hex": "magenta",
    }
)


class ScopeConsole:
    """Unified console interface for elfscope output.

    Usage::

        con = ScopeConsole()
        con.key_values("ELF Header", [("Class", "ELF64")])
        con.error("Truncated input")

    Args:
        quiet:    Suppress all output (useful in library / test mode).
        record:   Enable Rich recording for text / HTML export.
        no_color: Render without ANSI colour codes.
        width:    Fixed console width; ``None`` lets Rich detect it.
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        no_color: bool = False,
        width: int | None = None,
    ) -> None:
        self._console = Console(
            theme=_SCOPE_THEME,
            quiet=quiet,
            record=record,
            no_color=no_color,
            highlight=False,
            width=width,
        )
        self._err_console = Console(
            theme=_SCOPE_THEME,
            stderr=True,
            quiet=quiet,
            no_color=no_color,
            highlight=False,
        )

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured, stderr)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._err_console.print(
            f"[scope.success][✔] SUCCESS:[/scope.success] {message}"
        )

    def warning(self, message: str) -> None:
        self._err_console.print(
            f"[scope.warning][⚠] WARNING:[/scope.warning] {message}"
        )

    def error(self, message: str) -> None:
        self._err_console.print(
            f"[scope.error][✘] ERROR:[/scope.error] {message}"
        )

    # ------------------------------------------------------------------ #
    #  Structured display
    # ------------------------------------------------------------------ #

    def key_values(
        self,
        title: Text | str,
        rows: Sequence[tuple[str, Text | str]],
        *,
        label_width: int = 36,
    ) -> None:
        """Render an aligned ``label: value`` listing inside a panel.

        Args:
            title:       Panel title; Rich Text keeps its own spans.
            rows:        ``(label, value)`` pairs; values may be Rich Text.
            label_width: Column width reserved for ``label:``.
        """
        body = Text()
        for idx, (label, value) in enumerate(rows):
            if idx:
                body.append("\n")
            body.append(f"{label + ':':<{label_width}}", style="scope.label")
            body.append(value if isinstance(value, Text) else Text(str(value)))
        heading = Text(style="scope.title").append_text(
            title if isinstance(title, Text) else Text(title)
        )
        panel = Panel(
            body,
            title=heading,
            border_style="bright_cyan",
            expand=False,
        )
        self._console.print(panel)

    def table(
        self,
        title: Text | str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: Text | str | None = None,
        justify: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title (str or Rich Text).
            columns:  Column header labels.
            rows:     Row sequences; Text cells are kept, others stringified.
            caption:  Optional footer caption (str or Rich Text).
            justify:  Optional per-column justification (``"left"``/``"right"``).
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            just = justify[idx] if justify and idx < len(justify) else "left"
            tbl.add_column(col_name, justify=just, overflow="fold")  # type: ignore[arg-type]

        for row in rows:
            tbl.add_row(*(c if isinstance(c, Text) else str(c) for c in row))

        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        """Print *count* blank lines."""
        for _ in range(count):
            self._console.print()

    def export_text(self) -> str:
        """Export recorded console output as plain text (requires ``record=True``)."""
        return self._console.export_text()

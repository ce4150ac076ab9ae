"""
elfscope CLI -- ELF64 Header Inspector
=======================================

Click-based command-line interface.  Selects which decoded views to show
(file header, program headers, section headers) and whether to render
them as highlighted text or as JSON.

Usage::

    # All three views
    elfscope /bin/ls

    # File header only
    elfscope -h /bin/ls

    # Section headers as JSON
    elfscope -S --json /bin/ls

    # Everything as a JSON report file
    elfscope /bin/ls --output report.json

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys

import click

from shared.config import ScopeConfig
from shared.console import ScopeConsole
from shared.logger import ScopeLogger

from elfscope import __version__
from elfscope.core.engine import ElfScopeEngine
from elfscope.core.errors import ElfScopeError
from elfscope.output.console import ElfConsoleOutput
from elfscope.output.report import ElfReportGenerator


@click.command("elfscope")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--file-header", "-h",
    "show_header",
    is_flag=True,
    default=False,
    help="Display the ELF file header.",
)
@click.option(
    "--program-headers", "-l",
    "show_program",
    is_flag=True,
    default=False,
    help="Display the program headers.",
)
@click.option(
    "--section-headers", "-S",
    "show_sections",
    is_flag=True,
    default=False,
    help="Display the section headers.",
)
@click.option(
    "--json", "-j",
    "json_output",
    is_flag=True,
    default=False,
    help="Output the selected views as JSON to stdout.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the selected views as a JSON report to this file.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Reject files that are not ELF64 little-endian.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colour and highlighting.",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help=(
        "Path to an elfscope configuration file (TOML).  "
        "Defaults to ./elfscope.toml when present."
    ),
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging on stderr.",
)
@click.version_option(__version__, prog_name="elfscope")
def elfscope_cli(
    path: str,
    show_header: bool,
    show_program: bool,
    show_sections: bool,
    json_output: bool,
    output_path: str | None,
    strict: bool,
    no_color: bool,
    config_path: str | None,
    verbose: bool,
) -> None:
    """elfscope -- display the headers of an ELF64 file.

    PATH is the ELF file to inspect.  Without -h, -l or -S all three
    views are shown.

    Examples:

    \b
        elfscope /bin/ls
        elfscope -l /bin/ls
        elfscope -S --json /bin/ls
    """
    config = ScopeConfig.load(config_path)
    if strict:
        config.elfscope.strict_ident = True

    color = config.global_settings.color and not no_color
    console = ScopeConsole(no_color=not color)

    log_level = "DEBUG" if verbose else config.global_settings.log_level
    logger = ScopeLogger(
        "engine",
        log_level=log_level,
        log_file=config.global_settings.log_file or None,
        json_logs=config.global_settings.log_json,
        color=color,
    )

    if not (show_header or show_program or show_sections):
        show_header = show_program = show_sections = True

    engine = ElfScopeEngine(config=config, logger=logger)

    try:
        result = engine.inspect(
            path,
            program_headers=show_program,
            section_headers=show_sections,
        )
    except KeyboardInterrupt:
        console.warning("Inspection interrupted by user.")
        sys.exit(130)
    except ElfScopeError as exc:
        console.error(f"Cannot decode {path}: {exc}")
        if verbose:
            logger.exception("Decoding failed")
        sys.exit(1)
    except OSError as exc:
        console.error(f"Cannot read {path}: {exc}")
        sys.exit(1)

    views = [
        view
        for view, selected in (
            ("file_header", show_header),
            ("program_headers", show_program),
            ("section_headers", show_sections),
        )
        if selected
    ]

    # JSON output modes
    if json_output or output_path:
        report_gen = ElfReportGenerator(indent=config.elfscope.json_indent)
        if output_path:
            report_path = report_gen.generate_json(result, output_path, views)
            console.success(f"JSON report saved: {report_path}")
        else:
            click.echo(report_gen.render(result, views))
        return

    # Console display
    output_display = ElfConsoleOutput(
        console=console,
        highlight=color and config.elfscope.highlight,
    )
    output_display.display(
        result,
        file_header=show_header,
        program_headers=show_program,
        section_headers=show_sections,
    )


# ---------------------------------------------------------------------------
# Module entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Entry point for the ``elfscope`` script and ``python -m elfscope``."""
    elfscope_cli()


if __name__ == "__main__":
    main()

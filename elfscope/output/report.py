"""
elfscope Report Generator
==========================

Builds JSON documents from decoded ELF structures, for stdout or for a
file.

Document shape:
    - a single view yields that view directly: the file header as an
      object, program or section headers as an array (the same shape as
      ``readelf``-like tools that dump one table);
    - several views yield one object keyed by view name, with the
      inspected path and a generation timestamp.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from elfscope.core.models import InspectionResult


VIEWS: tuple[str, ...] = ("file_header", "program_headers", "section_headers")


class ElfReportGenerator:
    """Generate JSON reports from inspection results.

    Usage::

        generator = ElfReportGenerator(indent=2)
        text = generator.render(result, ["section_headers"])
        generator.generate_json(result, "report.json")
    """

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def build(
        self,
        result: InspectionResult,
        views: Sequence[str] = VIEWS,
    ) -> Any:
        """Build the JSON-ready document for the selected *views*.

        Raises:
            ValueError: An unknown view name was requested.
        """
        unknown = [v for v in views if v not in VIEWS]
        if unknown:
            raise ValueError(f"Unknown report view(s): {', '.join(unknown)}")

        payload = {view: self._view(result, view) for view in VIEWS if view in views}
        if len(payload) == 1:
            return next(iter(payload.values()))

        return {
            "report_type": "elfscope_inspection",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "path": result.path,
            **payload,
        }

    def render(
        self,
        result: InspectionResult,
        views: Sequence[str] = VIEWS,
    ) -> str:
        """Return the JSON text for the selected *views*."""
        return json.dumps(
            self.build(result, views),
            indent=self._indent,
            ensure_ascii=False,
        )

    def generate_json(
        self,
        result: InspectionResult,
        output_path: str | Path,
        views: Sequence[str] = VIEWS,
    ) -> str:
        """Write the JSON report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(result, views) + "\n", encoding="utf-8")
        return str(path.resolve())

    # ------------------------------------------------------------------ #
    #  View builders
    # ------------------------------------------------------------------ #

    @staticmethod
    def _view(result: InspectionResult, view: str) -> Any:
        if view == "file_header":
            return result.file_header.model_dump(mode="json")
        if view == "program_headers":
            return [ph.model_dump(mode="json") for ph in result.program_headers]
        return [sh.model_dump(mode="json") for sh in result.section_headers]

"""
elfscope Output Module
=======================

Console display and JSON report generation for decoded ELF structures.
"""

from elfscope.output.console import ElfConsoleOutput
from elfscope.output.report import ElfReportGenerator

__all__ = [
    "ElfConsoleOutput",
    "ElfReportGenerator",
]

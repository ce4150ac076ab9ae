"""
elfscope Core Module
=====================

Data models, exceptions, the section name binder and the inspection
engine.
"""

from elfscope.core.errors import (
    ElfScopeError,
    InvalidIdent,
    InvalidStringTableIndex,
    SeekFailure,
    TruncatedInput,
)
from elfscope.core.models import (
    FileHeader,
    InspectionResult,
    ProgramHeader,
    ResolvedSectionHeader,
    SectionHeader,
)
from elfscope.core.binder import bind_names
from elfscope.core.engine import ElfScopeEngine

__all__ = [
    "ElfScopeEngine",
    "ElfScopeError",
    "FileHeader",
    "InspectionResult",
    "InvalidIdent",
    "InvalidStringTableIndex",
    "ProgramHeader",
    "ResolvedSectionHeader",
    "SectionHeader",
    "SeekFailure",
    "TruncatedInput",
    "bind_names",
]

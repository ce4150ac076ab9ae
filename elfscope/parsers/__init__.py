"""
elfscope Parsers
=================

Byte source abstraction, fixed-layout ELF64 record decoding and string
table lookup.
"""

from elfscope.parsers.source import ByteSource
from elfscope.parsers.layout import (
    decode_file_header,
    decode_program_headers,
    decode_section_headers,
)
from elfscope.parsers.strtab import load_string_table, resolve

__all__ = [
    "ByteSource",
    "decode_file_header",
    "decode_program_headers",
    "decode_section_headers",
    "load_string_table",
    "resolve",
]

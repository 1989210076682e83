"""Shared utilities for flatpdf.

This package contains common functionality used across multiple modules:
- pdf_helpers: literal-string escaping and number formatting
- encoding: single-byte text encoding for the standard fonts
- file_ops: output delivery (files, data URIs)
"""

from .pdf_helpers import (
    escape_pdf_text,
    fmt_len,
    fmt_number,
    fmt_numbers,
    format_xref_offset,
    iobj_ref,
)
from .encoding import (
    encode_latin1,
    encode_standard,
    encode_text,
    standard_code,
)
from .file_ops import (
    ensure_parent_dir,
    format_file_size,
    pdf_data_uri,
    write_pdf,
)

__all__ = [
    # PDF syntax helpers
    'escape_pdf_text',
    'fmt_len',
    'fmt_number',
    'fmt_numbers',
    'format_xref_offset',
    'iobj_ref',
    # Text encoding
    'encode_latin1',
    'encode_standard',
    'encode_text',
    'standard_code',
    # Output delivery
    'ensure_parent_dir',
    'format_file_size',
    'pdf_data_uri',
    'write_pdf',
]

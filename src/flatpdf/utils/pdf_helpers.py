"""PDF syntax helpers: literal-string escaping and number formatting."""

import math
from typing import Iterable


def escape_pdf_text(text: str) -> str:
    """Escape text for safe inclusion in a PDF literal string.

    Backslashes are escaped first so the backslashes introduced for
    parentheses are not escaped again. Not idempotent: escaping twice
    escapes twice.
    """
    if not text:
        return ""
    escaped = text.replace('\\', '\\\\')
    escaped = escaped.replace('(', '\\(')
    escaped = escaped.replace(')', '\\)')
    return escaped


def fmt_number(value: float, places: int = 2) -> str:
    """Fixed-point rendering, e.g. fmt_number(1.005) -> '1.00'.

    PDF has no notation for infinity or NaN, so those raise ValueError.
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Cannot write non-finite number {value!r} to a PDF")
    return f"{number:.{places}f}"


def fmt_numbers(values: Iterable[float], places: int = 2) -> str:
    """Space-separated fixed-point numbers, as operands of one operator."""
    return ' '.join(fmt_number(v, places) for v in values)


def fmt_len(val: float) -> str:
    """Format a length value removing trailing zeros (used for font sizes)."""
    try:
        return (f"{float(val):.6f}").rstrip('0').rstrip('.')
    except (TypeError, ValueError):
        return "0"


def format_xref_offset(offset: int) -> str:
    """Render one in-use cross-reference entry."""
    return f"{offset:010d} 00000 n "


def iobj_ref(number: int) -> str:
    return f"{number} 0 R"

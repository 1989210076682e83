"""Single-byte text encoding for the standard Type 1 fonts.

The standard fonts are referenced without an /Encoding entry, so readers use
each font's built-in StandardEncoding. Printable ASCII is passed through
as-is; other characters are mapped through the Adobe Glyph List to their
StandardEncoding code, when they have one.
"""

import warnings
from typing import Dict, List, Tuple

from fontTools.agl import UV2AGL
from fontTools.encodings.StandardEncoding import StandardEncoding

REPLACEMENT = '?'

# Presentation-form ligatures the Adobe Glyph List does not name
LIGATURE_GLYPHS = {0xFB01: 'fi', 0xFB02: 'fl'}

_code_cache: Dict[str, int] = {}


def _standard_code_map() -> Dict[str, int]:
    """Glyph name -> StandardEncoding code, built once."""
    if not _code_cache:
        for code, name in enumerate(StandardEncoding):
            if name != '.notdef' and name not in _code_cache:
                _code_cache[name] = code
    return _code_cache


def standard_code(ch: str) -> int | None:
    """StandardEncoding code for a single character, or None."""
    cp = ord(ch)
    if 0x20 <= cp < 0x7F or ch in '\n\r\t':
        return cp
    glyph = LIGATURE_GLYPHS.get(cp) or UV2AGL.get(cp)
    if glyph is None:
        return None
    return _standard_code_map().get(glyph)


def encode_standard(text: str) -> Tuple[bytes, List[str]]:
    """Encode text; returns (data, characters that had no code)."""
    out = bytearray()
    missing: List[str] = []
    for ch in text:
        code = standard_code(ch)
        if code is None:
            missing.append(ch)
            out.append(ord(REPLACEMENT))
        else:
            out.append(code)
    return bytes(out), missing


def encode_text(text: str, warn: bool = True) -> bytes:
    """Encode content-stream text, warning once about unencodable characters."""
    data, missing = encode_standard(text)
    if missing and warn:
        shown = ', '.join(sorted({f"U+{ord(c):04X}" for c in missing}))
        warnings.warn(
            f"Characters not available in the standard font encoding replaced with "
            f"'{REPLACEMENT}': {shown}",
            UserWarning,
        )
    return data


def encode_latin1(text: str) -> bytes:
    """Encode info-dictionary and structural text (Latin-1, '?' replacement)."""
    return text.encode('latin-1', errors='replace')

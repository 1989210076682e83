"""Standard Type 1 font registry.

Twelve of the standard fonts (Helvetica, Courier and Times, each in four
styles) are registered at document construction with resource keys F1..F12.
Object numbers are assigned while the document is serialized.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

HELVETICA = 'helvetica'
TIMES = 'times'
COURIER = 'courier'

NORMAL = 'normal'
BOLD = 'bold'
ITALIC = 'italic'
BOLD_ITALIC = 'bolditalic'

FAMILIES = (HELVETICA, TIMES, COURIER)
STYLES = (NORMAL, BOLD, ITALIC, BOLD_ITALIC)

# Registration order defines the resource keys
STANDARD_FONTS = [
    ('Helvetica', HELVETICA, NORMAL),
    ('Helvetica-Bold', HELVETICA, BOLD),
    ('Helvetica-Oblique', HELVETICA, ITALIC),
    ('Helvetica-BoldOblique', HELVETICA, BOLD_ITALIC),
    ('Courier', COURIER, NORMAL),
    ('Courier-Bold', COURIER, BOLD),
    ('Courier-Oblique', COURIER, ITALIC),
    ('Courier-BoldOblique', COURIER, BOLD_ITALIC),
    ('Times-Roman', TIMES, NORMAL),
    ('Times-Bold', TIMES, BOLD),
    ('Times-Italic', TIMES, ITALIC),
    ('Times-BoldItalic', TIMES, BOLD_ITALIC),
]

FALLBACK_KEY = 'F1'


@dataclass
class FontDescriptor:
    key: str
    base_font: str
    family: str
    style: str
    number: Optional[int] = None


class FontRegistry:
    """Resource keys and object numbers for the standard fonts."""

    def __init__(self):
        self._fonts: List[FontDescriptor] = []
        for base_font, family, style in STANDARD_FONTS:
            self.add(base_font, family, style)

    def add(self, base_font: str, family: str, style: str) -> FontDescriptor:
        font = FontDescriptor(f"F{len(self._fonts) + 1}", base_font, family, style)
        self._fonts.append(font)
        return font

    def __iter__(self) -> Iterator[FontDescriptor]:
        return iter(self._fonts)

    def __len__(self) -> int:
        return len(self._fonts)

    def lookup(self, family: str, style: str) -> str:
        """Resource key for family+style; never fails."""
        for font in self._fonts:
            if font.family == family and font.style == style:
                return font.key
        return FALLBACK_KEY

    def by_key(self, key: str) -> Optional[FontDescriptor]:
        for font in self._fonts:
            if font.key == key:
                return font
        return None


def normalize_family(name: Optional[str]) -> Optional[str]:
    """Lowercased family name when it is one of the standard families."""
    if not isinstance(name, str):
        return None
    s = name.strip().lower()
    return s if s in FAMILIES else None


def normalize_style(name: Optional[str]) -> Optional[str]:
    if not isinstance(name, str):
        return None
    s = name.strip().lower()
    return s if s in STYLES else None


def standard_fonts() -> List[FontDescriptor]:
    """Descriptors as registered on a new document (no object numbers yet)."""
    return list(FontRegistry())

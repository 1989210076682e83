"""Unit, page format and orientation resolution."""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .errors import ConfigurationError

# Points per user unit
UNITS = {
    'pt': 1.0,
    'mm': 72 / 25.4,
    'cm': 72 / 2.54,
    'in': 72.0,
}

# Size in pt of the supported paper formats (portrait)
PAGE_FORMATS_PT = {
    'a3': (841.89, 1190.55),
    'a4': (595.28, 841.89),
    'a5': (420.94, 595.28),
    'letter': (612.0, 792.0),
    'legal': (612.0, 1008.0),
}

PORTRAIT = 'p'
LANDSCAPE = 'l'

ORIENTATIONS = {
    'p': PORTRAIT,
    'portrait': PORTRAIT,
    'l': LANDSCAPE,
    'landscape': LANDSCAPE,
}

DEFAULTS = {
    'ORIENTATION': 'p',
    'UNIT': 'mm',
    'FORMAT': 'a4',
    'FONT': 'helvetica',
    'FONT_TYPE': 'normal',
    'FONT_SIZE': 16,
    'LINE_WIDTH': 0.200025,  # 0.2mm
}

FormatSpec = Union[str, Sequence[float]]


@dataclass(frozen=True)
class PageGeometry:
    """Resolved scale factor and page box; width/height are in user units."""

    orientation: str
    unit: str
    k: float
    width: float
    height: float

    @property
    def width_pt(self) -> float:
        return self.width * self.k

    @property
    def height_pt(self) -> float:
        return self.height * self.k

    def swapped(self) -> 'PageGeometry':
        """Return the same page turned by 90 degrees."""
        other = LANDSCAPE if self.orientation == PORTRAIT else PORTRAIT
        return PageGeometry(other, self.unit, self.k, self.height, self.width)


def resolve_unit(unit: Optional[str]) -> float:
    if not isinstance(unit, str) or unit.strip().lower() not in UNITS:
        raise ConfigurationError(f"Invalid unit: {unit!r}. Valid values: {', '.join(UNITS)}")
    return UNITS[unit.strip().lower()]


def resolve_format_pt(fmt: FormatSpec) -> tuple[float, float]:
    """Return (width_pt, height_pt) for a named format or an explicit pair."""
    if isinstance(fmt, str):
        key = fmt.strip().lower()
        if key in PAGE_FORMATS_PT:
            return PAGE_FORMATS_PT[key]
        raise ConfigurationError(
            f"Invalid format: {fmt!r}. Valid names: {', '.join(PAGE_FORMATS_PT)}"
        )
    if isinstance(fmt, (bytes, bytearray)):
        raise ConfigurationError(f"Invalid format: {fmt!r}")
    try:
        width, height = fmt
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid format: {fmt!r}") from None
    for v in (width, height):
        # bool is an Integral; a True/False page size is a caller bug
        if isinstance(v, bool) or not isinstance(v, numbers.Real) or not math.isfinite(v) or v <= 0:
            raise ConfigurationError(f"Invalid format: {fmt!r}")
    return float(width), float(height)


def resolve_orientation(orientation: Optional[str]) -> str:
    key = str(orientation).strip().lower() if orientation is not None else ''
    if key not in ORIENTATIONS:
        raise ConfigurationError(
            f"Invalid orientation: {orientation!r}. Valid values: {', '.join(ORIENTATIONS)}"
        )
    return ORIENTATIONS[key]


def resolve_geometry(
    orientation: Optional[str] = 'p', unit: Optional[str] = 'mm', fmt: FormatSpec = 'a4'
) -> PageGeometry:
    """Resolve scale factor k and the page box in user units.

    Named formats and explicit [width, height] pairs are both given in points
    and divided by k. Landscape swaps width and height.
    """
    k = resolve_unit(unit)
    width_pt, height_pt = resolve_format_pt(fmt)
    geometry = PageGeometry(PORTRAIT, unit.strip().lower(), k, width_pt / k, height_pt / k)
    if resolve_orientation(orientation) == LANDSCAPE:
        geometry = geometry.swapped()
    return geometry


def document_options(meta: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merge caller options over DEFAULTS.

    Keys are case-insensitive; None and empty-string values keep the default.
    Unknown keys are dropped.
    """
    d = DEFAULTS.copy()
    for k, v in (meta or {}).items():
        key = str(k).upper()
        if key not in d:
            continue
        if v is None or (isinstance(v, str) and v.strip() == ''):
            continue
        d[key] = v
    return d

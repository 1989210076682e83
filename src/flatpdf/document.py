"""Document: drawing and text calls compiled to PDF content-stream operators.

Coordinates are given in the document unit with the origin at the top-left
corner of the page; every emitted coordinate is converted to points with the
origin at the bottom-left:

    x_pt = x * k
    y_pt = (page_height - y) * k

All mutators return the document so calls can be chained.
"""

import math
import pathlib
import warnings
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

from .errors import AssemblyError
from .fonts import FontRegistry, normalize_family, normalize_style
from .generation.builder import BuildState, DocumentBuilder
from .generation.ledger import ObjectLedger
from .geometry import DEFAULTS, FormatSpec, resolve_geometry
from .utils.encoding import encode_text
from .utils.file_ops import pdf_data_uri, write_pdf
from .utils.pdf_helpers import escape_pdf_text, fmt_len, fmt_number, fmt_numbers

# Bezier control point offset for a quarter circle of radius 1
KAPPA = 4 / 3 * (math.sqrt(2) - 1)

PROPERTY_KEYS = ('title', 'subject', 'author', 'keywords', 'creator')

OUTPUT_TYPES = (None, 'bytes', 'string', 'datauristring')

TextContent = Union[str, Sequence[str]]


def paint_operator(style: Optional[str]) -> str:
    """'F' fills, 'FD'/'DF' fill then stroke, anything else strokes."""
    if style == 'F':
        return 'f'
    if style in ('FD', 'DF'):
        return 'B'
    return 'S'


def color_operator(stroke: bool, r: float, g: Optional[float], b: Optional[float]) -> str:
    """Grayscale for a single channel or all-zero RGB, else RGB.

    Channels are 0-255 and normalized by 255.
    """
    if g is None or (r == 0 and g == 0 and b == 0):
        op = 'G' if stroke else 'g'
        return f"{fmt_number(r / 255, 3)} {op}"
    if b is None:
        raise TypeError("Both g and b are required for an RGB color")
    op = 'RG' if stroke else 'rg'
    return f"{fmt_numbers((r / 255, g / 255, b / 255), 3)} {op}"


class Document:
    """An in-progress PDF document.

    orientation: 'p'/'portrait' or 'l'/'landscape'
    unit: 'pt', 'mm', 'cm' or 'in'
    fmt: 'a3', 'a4', 'a5', 'letter', 'legal' or an explicit (width, height) in points
    clock: callable returning the creation datetime (defaults to datetime.now)
    """

    def __init__(
        self,
        orientation: str = DEFAULTS['ORIENTATION'],
        unit: str = DEFAULTS['UNIT'],
        fmt: FormatSpec = DEFAULTS['FORMAT'],
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.geometry = resolve_geometry(orientation, unit, fmt)
        self.ledger = ObjectLedger()
        self.fonts = FontRegistry()
        self.properties: Dict[str, Any] = {}
        self.clock = clock

        self.font_name = DEFAULTS['FONT']
        self.font_type = DEFAULTS['FONT_TYPE']
        self.font_size = DEFAULTS['FONT_SIZE']
        self.line_width = DEFAULTS['LINE_WIDTH']
        self.draw_color = '0 G'
        self.fill_color: Optional[str] = None
        self.text_color = '0 g'

        self._builder: Optional[DocumentBuilder] = None
        self._output: Optional[bytes] = None

    # Geometry

    @property
    def k(self) -> float:
        return self.geometry.k

    @property
    def page_width(self) -> float:
        return self.geometry.width

    @property
    def page_height(self) -> float:
        return self.geometry.height

    @property
    def orientation(self) -> str:
        return self.geometry.orientation

    @property
    def page_count(self) -> int:
        return self.ledger.page_count

    @property
    def state(self) -> BuildState:
        if self._finalizing:
            return self._builder.state
        if self.ledger.active_page is not None:
            return BuildState.PAGE_OPEN
        return BuildState.EMPTY

    @property
    def _finalizing(self) -> bool:
        return self._builder is not None and self._builder.state is not BuildState.EMPTY

    def _x(self, x: float) -> float:
        return x * self.k

    def _y(self, y: float) -> float:
        return (self.page_height - y) * self.k

    # Routing

    def _check_open(self) -> None:
        if self._finalizing:
            raise AssemblyError("Document is finalized; no further changes are possible")

    def _out(self, line: str) -> None:
        """Append an operator to the current page, opening the first page if needed."""
        self._check_open()
        if self.ledger.active_page is None:
            self._begin_page()
        self.ledger.write(line)

    def _begin_page(self) -> None:
        self.ledger.begin_page()
        self.ledger.write(f"{fmt_number(self.line_width * self.k)} w")
        self.ledger.write(self.draw_color)
        if self.fill_color is not None:
            self.ledger.write(self.fill_color)

    def _state_out(self, line: str) -> None:
        """State operators only reach an open page; the next page restates them."""
        self._check_open()
        if self.ledger.active_page is not None:
            self.ledger.write(line)

    # Pages

    def add_page(self) -> 'Document':
        """Start a new page; line width and colors carry over."""
        self._check_open()
        self._begin_page()
        return self

    # Text

    def text(self, x: float, y: float, content: TextContent) -> 'Document':
        """Place a string, or a sequence of strings as successive lines.

        Each line is shifted down by the current font size.
        """
        if isinstance(content, str):
            lines = [content]
        elif isinstance(content, Sequence) and all(isinstance(s, str) for s in content):
            lines = list(content)
        else:
            raise TypeError("text content must be a string or a sequence of strings")
        encode_text(''.join(lines))  # warns about characters the font cannot show

        # escape per line so join markers stay unescaped
        joined = ") Tj\nT* (".join(escape_pdf_text(s) for s in lines)
        size = fmt_len(self.font_size)
        self._out(
            'BT\n'
            f"/{self.current_font_key()} {size} Tf\n"
            f"{size} TL\n"
            f"{self.text_color}\n"
            f"{fmt_numbers((self._x(x), self._y(y)))} Td\n"
            f"({joined}) Tj\n"
            'ET'
        )
        return self

    # Shapes

    def line(self, x1: float, y1: float, x2: float, y2: float) -> 'Document':
        self._out(
            f"{fmt_numbers((self._x(x1), self._y(y1)))} m "
            f"{fmt_numbers((self._x(x2), self._y(y2)))} l S"
        )
        return self

    def rect(self, x: float, y: float, w: float, h: float, style: Optional[str] = None) -> 'Document':
        """Rectangle with top-left corner (x, y); style 'F', 'FD'/'DF' or stroke."""
        self._out(
            f"{fmt_numbers((self._x(x), self._y(y), w * self.k, -h * self.k))} re "
            f"{paint_operator(style)}"
        )
        return self

    def ellipse(
        self, x: float, y: float, rx: float, ry: float, style: Optional[str] = None
    ) -> 'Document':
        """Ellipse centered on (x, y) drawn as four cubic Bezier segments."""
        lx = KAPPA * rx
        ly = KAPPA * ry
        X, Y = self._x, self._y
        self._out(
            f"{fmt_numbers((X(x + rx), Y(y)))} m "
            f"{fmt_numbers((X(x + rx), Y(y - ly), X(x + lx), Y(y - ry), X(x), Y(y - ry)))} c"
        )
        self._out(f"{fmt_numbers((X(x - lx), Y(y - ry), X(x - rx), Y(y - ly), X(x - rx), Y(y)))} c")
        self._out(f"{fmt_numbers((X(x - rx), Y(y + ly), X(x - lx), Y(y + ry), X(x), Y(y + ry)))} c")
        self._out(
            f"{fmt_numbers((X(x + lx), Y(y + ry), X(x + rx), Y(y + ly), X(x + rx), Y(y)))} c "
            f"{paint_operator(style)}"
        )
        return self

    def circle(self, x: float, y: float, r: float, style: Optional[str] = None) -> 'Document':
        return self.ellipse(x, y, r, r, style)

    def add_image(self, image_data: Any, fmt: Any = None, x: float = 0, y: float = 0,
                  w: float = 0, h: float = 0) -> 'Document':
        """Image embedding hook; not implemented, draws nothing."""
        self._check_open()
        return self

    # Graphics state

    def set_font_size(self, size: float) -> 'Document':
        self._check_open()
        self.font_size = size
        return self

    def set_font(self, name: str) -> 'Document':
        """Select helvetica, times or courier; other names are ignored."""
        self._check_open()
        family = normalize_family(name)
        if family is not None:
            self.font_name = family
        return self

    def set_font_type(self, style: str) -> 'Document':
        """Select normal, bold, italic or bolditalic; other values are ignored."""
        self._check_open()
        normalized = normalize_style(style)
        if normalized is not None:
            self.font_type = normalized
        return self

    def current_font_key(self) -> str:
        return self.fonts.lookup(self.font_name, self.font_type)

    def set_line_width(self, width: float) -> 'Document':
        self._check_open()
        line = f"{fmt_number(width * self.k)} w"
        self.line_width = width
        self._state_out(line)
        return self

    def set_draw_color(
        self, r: float, g: Optional[float] = None, b: Optional[float] = None
    ) -> 'Document':
        self._check_open()
        self.draw_color = color_operator(True, r, g, b)
        self._state_out(self.draw_color)
        return self

    def set_fill_color(
        self, r: float, g: Optional[float] = None, b: Optional[float] = None
    ) -> 'Document':
        self._check_open()
        self.fill_color = color_operator(False, r, g, b)
        self._state_out(self.fill_color)
        return self

    def set_text_color(
        self, r: float, g: Optional[float] = None, b: Optional[float] = None
    ) -> 'Document':
        self._check_open()
        self.text_color = color_operator(False, r, g, b)
        return self

    def set_properties(
        self, properties: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> 'Document':
        """Replace document metadata (title, subject, author, keywords, creator)."""
        self._check_open()
        merged = dict(properties or {})
        merged.update(kwargs)
        unknown = sorted(k for k in merged if k not in PROPERTY_KEYS)
        if unknown:
            warnings.warn(
                f"Unknown document properties ignored: {', '.join(unknown)}", UserWarning
            )
        self.properties = {k: v for k, v in merged.items() if k in PROPERTY_KEYS}
        return self

    # Output

    def build(self) -> bytes:
        """Finalize the document and return the PDF bytes (cached)."""
        if self._output is None:
            # a builder that failed before starting (no pages) leaves the document usable
            if self._builder is None or self._builder.state is BuildState.EMPTY:
                self._builder = DocumentBuilder(self, clock=self.clock)
            self._output = self._builder.build()
        return self._output

    def output(self, dest: Optional[str] = None) -> Union[bytes, str]:
        """Return the PDF as bytes (default), a Latin-1 string or a data URI string."""
        if dest not in OUTPUT_TYPES:
            raise ValueError(f"Unsupported output type: {dest!r}")
        data = self.build()
        if dest == 'string':
            return data.decode('latin-1')
        if dest == 'datauristring':
            return pdf_data_uri(data)
        return data

    def save(self, path: Union[str, pathlib.Path]) -> pathlib.Path:
        """Write the PDF to path and return the pathlib.Path written."""
        return write_pdf(path, self.build())

    # camelCase aliases
    addPage = add_page
    addImage = add_image
    setFontSize = set_font_size
    setFont = set_font
    setFontType = set_font_type
    setLineWidth = set_line_width
    setDrawColor = set_draw_color
    setFillColor = set_fill_color
    setTextColor = set_text_color
    setProperties = set_properties

#!/usr/bin/env python3
"""Unified CLI for flatpdf

Subcommands:
  text      plain text file -> pdf
  validate  check the structure of a pdf file
  fonts     list the standard fonts and their resource keys

"""

import argparse
import math
import pathlib
import sys
from typing import List

from . import Document, validate_pdf
from .errors import ConfigurationError
from .fonts import STYLES, standard_fonts
from .geometry import DEFAULTS, PAGE_FORMATS_PT, UNITS, document_options
from .utils.file_ops import format_file_size

DEFAULT_MARGIN = 20.0

FORM_FEED = '\f'


def _lines_per_page(doc: Document, margin: float) -> int:
    line_height = doc.font_size / doc.k
    usable = doc.page_height - 2 * margin
    return max(1, int(usable // line_height))


def paginate(text: str, per_page: int) -> List[List[str]]:
    """Split text into pages of at most per_page lines; form feeds force a break."""
    pages: List[List[str]] = []
    for chunk in text.split(FORM_FEED):
        page: List[str] = []
        for line in chunk.splitlines():
            if len(page) >= per_page:
                pages.append(page)
                page = []
            page.append(line.rstrip())
        pages.append(page)
    return pages or [[]]


def render_text(text: str, options: dict, margin: float = DEFAULT_MARGIN) -> Document:
    """Lay out lines of text top-down, one text block per page."""
    opts = document_options(options)
    try:
        font_size = float(opts['FONT_SIZE'])
    except (TypeError, ValueError):
        font_size = math.nan
    if not math.isfinite(font_size) or font_size <= 0:
        raise ConfigurationError(f"Invalid font size: {opts['FONT_SIZE']!r}. Must be positive")
    doc = Document(opts['ORIENTATION'], opts['UNIT'], opts['FORMAT'])
    doc.set_font(opts['FONT']).set_font_type(opts['FONT_TYPE']).set_font_size(font_size)
    properties = {k: options.get(k) for k in ('title', 'author') if options.get(k)}
    if properties:
        doc.set_properties(properties)
    first_baseline = margin + doc.font_size / doc.k
    for page in paginate(text, _lines_per_page(doc, margin)):
        doc.add_page()
        if page:
            doc.text(margin, first_baseline, page)
    return doc


def cmd_text(args):
    src = pathlib.Path(args.file)
    if not src.exists():
        print(f"ERROR: text file not found: {src}", file=sys.stderr)
        sys.exit(1)
    options = {
        'orientation': args.orientation,
        'unit': args.unit,
        'format': args.format,
        'font': args.font,
        'font_type': args.font_type,
        'font_size': args.font_size,
        'title': args.title,
        'author': args.author,
    }
    try:
        doc = render_text(src.read_text(encoding='utf-8'), options, margin=args.margin)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)
    out_path = doc.save(args.output)
    size = format_file_size(out_path.stat().st_size)
    print(f"Built PDF: {out_path} pages={doc.page_count} ({size})")


def cmd_validate(args):
    path = pathlib.Path(args.file)
    if not path.exists():
        print(f"ERROR: pdf file not found: {path}", file=sys.stderr)
        sys.exit(1)
    result = validate_pdf(path.read_bytes())
    for issue in result.issues:
        print(f"{issue.severity.upper()}: {issue.path}: {issue.message}")
    if result.ok():
        print("PDF valid: no errors")
    if not result.ok():
        sys.exit(1)


def cmd_fonts(args):
    for font in standard_fonts():
        print(f"{font.key:<4} {font.base_font:<22} {font.family:<10} {font.style}")


def build_parser():
    p = argparse.ArgumentParser(prog='flatpdf')
    sub = p.add_subparsers(dest='command', required=True)

    t = sub.add_parser('text', help='text file -> pdf')
    t.add_argument('file')
    t.add_argument('-o', '--output', default='out.pdf')
    t.add_argument('--unit', default=DEFAULTS['UNIT'], help=f"one of {', '.join(UNITS)}")
    t.add_argument(
        '--format', default=DEFAULTS['FORMAT'], help=f"one of {', '.join(PAGE_FORMATS_PT)}"
    )
    t.add_argument('--orientation', default=DEFAULTS['ORIENTATION'])
    t.add_argument('--font', default=DEFAULTS['FONT'])
    t.add_argument('--font-type', default=DEFAULTS['FONT_TYPE'], choices=list(STYLES))
    t.add_argument('--font-size', type=float, default=12.0)
    t.add_argument(
        '--margin',
        type=float,
        default=DEFAULT_MARGIN,
        help='page margin in document units (default: 20)',
    )
    t.add_argument('--title')
    t.add_argument('--author')
    t.set_defaults(func=cmd_text)

    val = sub.add_parser('validate', help='check pdf structure')
    val.add_argument('file')
    val.set_defaults(func=cmd_validate)

    fonts = sub.add_parser('fonts', help='list standard fonts')
    fonts.set_defaults(func=cmd_fonts)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == '__main__':
    main()

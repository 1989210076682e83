"""Final serialization of a Document into PDF 1.3 bytes.

Objects are emitted in a fixed order:

- header
- per page: Page dictionary, then its content stream
- object 1, the Pages root (offset fixed retroactively)
- font objects, then object 2, the resource dictionary
- Info dictionary
- Catalog
- cross-reference table and trailer

Page objects are therefore always numbered 3 + 2*i and each page's content
stream is the object claimed right after it.
"""

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from ..errors import AssemblyError
from ..utils.encoding import encode_text
from ..utils.pdf_helpers import escape_pdf_text, fmt_numbers, format_xref_offset, iobj_ref
from ..version import __version__
from .ledger import PAGES_ROOT, RESOURCES

if TYPE_CHECKING:
    from ..document import Document

PDF_VERSION = '1.3'
PRODUCER = f"flatpdf {__version__}"
FIRST_PAGE_OBJECT = 3

# Info dictionary fields, in emission order
INFO_FIELDS = ('title', 'subject', 'author', 'keywords', 'creator')


class BuildState(enum.IntEnum):
    EMPTY = 0
    BUILDING = 1
    PAGE_OPEN = 2
    FINALIZED = 3


def pdf_date(when: datetime) -> str:
    return when.strftime('D:%Y%m%d%H%M%S')


def page_object_number(index: int) -> int:
    """Object number of the index-th (0-based) page dictionary."""
    return FIRST_PAGE_OBJECT + 2 * index


class DocumentBuilder:
    """Walks a Document's ledger and fonts and produces the final bytes."""

    def __init__(self, document: 'Document', clock: Optional[Callable[[], datetime]] = None):
        self.document = document
        self.ledger = document.ledger
        self.clock = clock or datetime.now
        self.state = BuildState.EMPTY
        self.info_number: Optional[int] = None
        self.catalog_number: Optional[int] = None
        self.xref_offset: Optional[int] = None

    def build(self) -> bytes:
        if self.state is not BuildState.EMPTY:
            raise AssemblyError(f"Document already built (state {self.state.name})")
        if self.ledger.page_count == 0:
            raise AssemblyError("Cannot finalize a document without pages")
        self.state = BuildState.BUILDING
        self.ledger.close_pages()

        self._put_header()
        self._put_pages()
        self._put_resources()
        self._put_info()
        self._put_catalog()
        self._put_xref()
        self._put_trailer()

        self.state = BuildState.FINALIZED
        return bytes(self.ledger.buffer)

    def _out(self, line: str) -> None:
        self.ledger.write(line)

    def _put_header(self) -> None:
        self._out(f"%PDF-{PDF_VERSION}")

    def _put_pages(self) -> None:
        ledger = self.ledger
        for index, page in enumerate(ledger.pages):
            number = ledger.claim_object()
            if number != page_object_number(index):
                raise AssemblyError(
                    f"Page {index + 1} claimed object {number}, "
                    f"expected {page_object_number(index)}"
                )
            contents = number + 1
            self._out('<</Type /Page')
            self._out(f"/Parent {iobj_ref(PAGES_ROOT)}")
            self._out(f"/Resources {iobj_ref(RESOURCES)}")
            self._out(f"/Contents {iobj_ref(contents)}>>")
            self._out('endobj')

            body = encode_text('\n'.join(page), warn=False)
            if ledger.claim_object() != contents:
                raise AssemblyError(f"Content stream of page {index + 1} is not object {contents}")
            self._out(f"<</Length {len(body)}>>")
            self._put_stream(body)
            self._out('endobj')

        ledger.claim_reserved(PAGES_ROOT)
        self._out('<</Type /Pages')
        kids = ''.join(f"{iobj_ref(page_object_number(i))} " for i in range(ledger.page_count))
        self._out(f"/Kids [{kids}]")
        self._out(f"/Count {ledger.page_count}")
        geometry = self.document.geometry
        self._out(f"/MediaBox [0 0 {fmt_numbers((geometry.width_pt, geometry.height_pt))}]")
        self._out('>>')
        self._out('endobj')

    def _put_stream(self, body: bytes) -> None:
        self._out('stream')
        self.ledger.write_bytes(body + b"\n")
        self._out('endstream')

    def _put_resources(self) -> None:
        for font in self.document.fonts:
            font.number = self.ledger.claim_object()
            self._out(f"<</BaseFont/{font.base_font}/Type/Font")
            self._out('/Subtype/Type1>>')
            self._out('endobj')
        self._put_images()

        self.ledger.claim_reserved(RESOURCES)
        self._out('<<')
        self._out('/ProcSet [/PDF /Text /ImageB /ImageC /ImageI]')
        self._out('/Font <<')
        for font in self.document.fonts:
            if font.number is None:
                raise AssemblyError(f"Font {font.key} was not written")
            self._out(f"/{font.key} {iobj_ref(font.number)}")
        self._out('>>')
        self._out('/XObject <<')
        self._put_xobject_dict()
        self._out('>>')
        self._out('>>')
        self._out('endobj')

    def _put_images(self) -> None:
        # Image embedding is not implemented; no XObjects are written.
        pass

    def _put_xobject_dict(self) -> None:
        pass

    def _put_info(self) -> None:
        self.info_number = self.ledger.claim_object()
        self._out('<<')
        self._out(f"/Producer ({escape_pdf_text(PRODUCER)})")
        properties = self.document.properties
        for field in INFO_FIELDS:
            value = properties.get(field)
            if value is not None:
                self._out(f"/{field.capitalize()} ({escape_pdf_text(str(value))})")
        self._out(f"/CreationDate ({pdf_date(self.clock())})")
        self._out('>>')
        self._out('endobj')

    def _put_catalog(self) -> None:
        self.catalog_number = self.ledger.claim_object()
        self._out('<<')
        self._out('/Type /Catalog')
        self._out(f"/Pages {iobj_ref(PAGES_ROOT)}")
        self._out(f"/OpenAction [{iobj_ref(FIRST_PAGE_OBJECT)} /FitH null]")
        self._out('/PageLayout /OneColumn')
        self._out('>>')
        self._out('endobj')

    def _put_xref(self) -> None:
        ledger = self.ledger
        count = ledger.object_number
        missing = [n for n in range(1, count + 1) if n not in ledger.offsets]
        if missing:
            raise AssemblyError(f"Objects never written: {missing}")
        offsets = [ledger.offsets[n] for n in range(1, count + 1)]
        self.xref_offset = ledger.offset
        self._out('xref')
        self._out(f"0 {count + 1}")
        self._out('0000000000 65535 f ')
        for offset in offsets:
            self._out(format_xref_offset(offset))

    def _put_trailer(self) -> None:
        self._out('trailer')
        self._out('<<')
        self._out(f"/Size {self.ledger.object_number + 1}")
        self._out(f"/Root {iobj_ref(self.catalog_number)}")
        self._out(f"/Info {iobj_ref(self.info_number)}")
        self._out('>>')
        self._out('startxref')
        self._out(str(self.xref_offset))
        self._out('%%EOF')

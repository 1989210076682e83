"""Generation package for PDF serialization.

This package turns a Document's recorded pages into PDF bytes:
- ledger: object numbering, offsets and page/main-buffer routing
- builder: ordered emission of objects, xref table and trailer
"""

from .ledger import ObjectLedger, PAGES_ROOT, RESOURCES
from .builder import BuildState, DocumentBuilder, page_object_number, pdf_date

__all__ = [
    # Bookkeeping
    'ObjectLedger',
    'PAGES_ROOT',
    'RESOURCES',
    # Serialization
    'BuildState',
    'DocumentBuilder',
    'page_object_number',
    'pdf_date',
]

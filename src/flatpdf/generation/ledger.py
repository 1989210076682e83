"""Object numbering, offsets and output routing.

Writes go to the active page's operator list while a page is open, and to
the main output buffer otherwise. Pages are buffered separately because a
content stream's /Length is only known once the page is complete.
"""

from typing import Dict, List, Optional

from ..errors import AssemblyError
from ..utils.encoding import encode_latin1

PAGES_ROOT = 1
RESOURCES = 2
RESERVED = (PAGES_ROOT, RESOURCES)


class ObjectLedger:
    def __init__(self):
        self.object_number = RESOURCES  # last number handed out
        self.offsets: Dict[int, int] = {}
        self.buffer = bytearray()
        self.pages: List[List[str]] = []
        self.active_page: Optional[List[str]] = None

    # Pages

    def begin_page(self) -> List[str]:
        page: List[str] = []
        self.pages.append(page)
        self.active_page = page
        return page

    def close_pages(self) -> None:
        self.active_page = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    # Objects

    def claim_object(self) -> int:
        """Claim the next object number and write its declaration."""
        if self.active_page is not None:
            raise AssemblyError("Cannot claim an object while a page is open")
        number = self.object_number + 1
        if number in self.offsets:
            raise AssemblyError(f"Object {number} claimed twice")
        self.object_number = number
        self.offsets[number] = len(self.buffer)
        self.write(f"{number} 0 obj")
        return number

    def claim_reserved(self, number: int) -> int:
        """Fix the offset of reserved object 1 or 2 and write its declaration."""
        if number not in RESERVED:
            raise AssemblyError(f"Object {number} is not a reserved object")
        if number in self.offsets:
            raise AssemblyError(f"Object {number} claimed twice")
        if self.active_page is not None:
            raise AssemblyError("Cannot claim an object while a page is open")
        self.offsets[number] = len(self.buffer)
        self.write(f"{number} 0 obj")
        return number

    # Output

    def write(self, line: str) -> None:
        if self.active_page is not None:
            self.active_page.append(line)
        else:
            self.buffer += encode_latin1(line) + b"\n"

    def write_bytes(self, data: bytes) -> None:
        if self.active_page is not None:
            raise AssemblyError("Raw bytes cannot be written into a page")
        self.buffer += data

    @property
    def offset(self) -> int:
        return len(self.buffer)

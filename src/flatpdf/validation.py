import re
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class ValidationIssue:
    path: str
    message: str
    severity: str = "error"  # 'error' | 'warn'


@dataclass
class ValidationResult:
    issues: List[ValidationIssue]

    def ok(self) -> bool:
        return all(i.severity != 'error' for i in self.issues)


OBJ_RE = re.compile(rb'(?m)^(\d+) (\d+) obj\b')
REF_RE = re.compile(rb'(\d+) (\d+) R\b')
STARTXREF_RE = re.compile(rb'startxref\s+(\d+)\s+%%EOF\s*$')
XREF_ENTRY_RE = re.compile(rb'^(\d{10}) (\d{5}) ([nf]) ?$')
SIZE_RE = re.compile(rb'/Size (\d+)')
ROOT_RE = re.compile(rb'/Root (\d+) 0 R')
INFO_RE = re.compile(rb'/Info (\d+) 0 R')
STREAM_RE = re.compile(rb'<</Length (\d+)>>\nstream\n')


def _check_xref(data: bytes, issues: List[ValidationIssue]) -> Optional[Dict[int, int]]:
    """Parse the xref table; returns object number -> offset for in-use entries."""
    m = STARTXREF_RE.search(data)
    if not m:
        issues.append(ValidationIssue(path="/startxref", message="Missing startxref"))
        return None
    xref_at = int(m.group(1))
    if data[xref_at:xref_at + 5] != b'xref\n':
        issues.append(
            ValidationIssue(path="/startxref", message=f"startxref {xref_at} does not point at xref")
        )
        return None
    lines = data[xref_at:].split(b'\n')
    try:
        first, count = (int(v) for v in lines[1].split())
    except ValueError:
        issues.append(ValidationIssue(path="/xref", message="Malformed xref subsection header"))
        return None
    entries: Dict[int, int] = {}
    # never read past the table, whatever the header claims
    for i in range(min(count, max(len(lines) - 2, 0))):
        path = f"/xref/{first + i}"
        em = XREF_ENTRY_RE.match(lines[2 + i])
        if not em:
            issues.append(ValidationIssue(path=path, message="Malformed xref entry"))
            continue
        if em.group(3) == b'n':
            entries[first + i] = int(em.group(1))
    if lines[2 + count:3 + count] != [b'trailer']:
        issues.append(ValidationIssue(path="/xref", message="xref entry count does not match header"))

    trailer = data[xref_at:]
    sm = SIZE_RE.search(trailer)
    if not sm:
        issues.append(ValidationIssue(path="/trailer/Size", message="Missing /Size"))
    elif int(sm.group(1)) != count:
        issues.append(
            ValidationIssue(
                path="/trailer/Size",
                message=f"/Size {int(sm.group(1))} differs from xref entry count {count}",
            )
        )
    for name, pattern in (("Root", ROOT_RE), ("Info", INFO_RE)):
        if not pattern.search(trailer):
            issues.append(ValidationIssue(path=f"/trailer/{name}", message=f"Missing /{name}"))
    return entries


def _mask_streams(data: bytes) -> bytes:
    """Blank out stream bodies so their bytes are not read as PDF syntax.

    Lengths are preserved, so offsets into the result match the original.
    """
    masked = bytearray(data)
    for m in STREAM_RE.finditer(data):
        end = min(m.end() + int(m.group(1)), len(data))
        masked[m.end():end] = b' ' * (end - m.end())
    return bytes(masked)


def validate_pdf(data: bytes) -> ValidationResult:
    """Check the structure of a classic flat-xref PDF.

    Verifies header and %%EOF, that startxref points at the xref table, that
    every xref offset lands on the matching object declaration, that every
    indirect reference resolves, and that stream lengths match their bodies.
    """
    issues: List[ValidationIssue] = []
    if not isinstance(data, (bytes, bytearray)):
        return ValidationResult([ValidationIssue(path="/", message="PDF data is not bytes")])
    data = bytes(data)
    if not data.startswith(b'%PDF-'):
        issues.append(ValidationIssue(path="/header", message="Missing %PDF- header"))
    if not data.rstrip().endswith(b'%%EOF'):
        issues.append(ValidationIssue(path="/eof", message="Missing %%EOF marker"))

    syntax = _mask_streams(data)
    declared = {int(m.group(1)): m.start() for m in OBJ_RE.finditer(syntax)}
    entries = _check_xref(data, issues)
    if entries is not None:
        for number, offset in sorted(entries.items()):
            m = OBJ_RE.match(syntax, offset)
            if not m or int(m.group(1)) != number:
                issues.append(
                    ValidationIssue(
                        path=f"/xref/{number}",
                        message=f"Offset {offset} does not start object {number}",
                    )
                )
        for number in sorted(set(declared) - set(entries)):
            issues.append(
                ValidationIssue(
                    path=f"/objects/{number}", message="Object missing from xref", severity='warn'
                )
            )

    body_end = syntax.rfind(b'\nxref\n')
    body = syntax if body_end < 0 else syntax[:body_end]
    for m in REF_RE.finditer(body):
        number = int(m.group(1))
        if number not in declared:
            issues.append(
                ValidationIssue(
                    path=f"/refs/{number}", message=f"Reference to undeclared object {number}"
                )
            )

    for m in STREAM_RE.finditer(data):
        length = int(m.group(1))
        end = m.end() + length
        if data[end:end + 11] != b'\nendstream\n':
            issues.append(
                ValidationIssue(
                    path=f"/streams/{m.start()}",
                    message=f"Stream /Length {length} does not match its body",
                )
            )
    return ValidationResult(issues)

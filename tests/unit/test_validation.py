#!/usr/bin/env python3
"""Structural PDF validation"""
import datetime
import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
import flatpdf as fp


def sample_pdf() -> bytes:
    doc = fp.Document(clock=lambda: datetime.datetime(2020, 1, 1))
    doc.text(10, 10, 'Hello').add_page().circle(50, 50, 10, 'F')
    return doc.output()


def messages(result):
    return [i.message for i in result.issues]


class TestValidatePdf(unittest.TestCase):
    def test_generated_pdf_is_valid(self):
        result = fp.validate_pdf(sample_pdf())
        self.assertTrue(result.ok())
        self.assertEqual(result.issues, [])

    def test_not_bytes(self):
        result = fp.validate_pdf('text')
        self.assertFalse(result.ok())

    def test_missing_header_and_eof(self):
        result = fp.validate_pdf(b'hello')
        self.assertFalse(result.ok())
        paths = [i.path for i in result.issues]
        self.assertIn('/header', paths)
        self.assertIn('/eof', paths)
        self.assertIn('/startxref', paths)

    def test_shifted_offsets_detected(self):
        data = sample_pdf().replace(b'%PDF-1.3\n', b'%PDF-1.3\n%extra\n', 1)
        result = fp.validate_pdf(data)
        self.assertFalse(result.ok())
        self.assertTrue(any('does not start object' in m or 'does not point at xref' in m
                            for m in messages(result)))

    def test_bad_stream_length(self):
        data = sample_pdf()
        start = data.index(b'<</Length ') + len(b'<</Length ')
        end = data.index(b'>>', start)
        length = int(data[start:end])
        tampered = data[:start] + str(length + 1).encode() + data[end:]
        result = fp.validate_pdf(tampered)
        self.assertTrue(any('/Length' in m for m in messages(result)))

    def test_dangling_reference(self):
        data = sample_pdf().replace(b'/Parent 1 0 R', b'/Parent 99 0 R', 1)
        result = fp.validate_pdf(data)
        self.assertIn('Reference to undeclared object 99', messages(result))

    def test_size_mismatch(self):
        data = sample_pdf()
        tail = data.rindex(b'/Size ')
        patched = data[:tail] + data[tail:].replace(b'/Size 21', b'/Size 22', 1)
        result = fp.validate_pdf(patched)
        self.assertTrue(any('differs from xref entry count' in m for m in messages(result)))

    def test_stream_text_is_not_read_as_syntax(self):
        doc = fp.Document(clock=lambda: datetime.datetime(2020, 1, 1))
        doc.text(10, 10, ['see 99 0 R', '42 0 obj'])
        doc.add_page().text(10, 10, '7 0 R and 8 0 R')
        result = fp.validate_pdf(doc.output())
        self.assertTrue(result.ok())
        self.assertEqual(result.issues, [])

    def test_reference_outside_stream_still_checked(self):
        data = sample_pdf().replace(b'/Contents 4 0 R', b'/Contents 98 0 R', 1)
        result = fp.validate_pdf(data)
        self.assertIn('Reference to undeclared object 98', messages(result))

    def test_oversized_xref_header_bounded(self):
        data = sample_pdf()
        xref_at = data.rindex(b'\nxref\n') + len(b'\nxref\n')
        eol = data.index(b'\n', xref_at)
        tampered = data[:xref_at] + b'0 999999999' + data[eol:]
        result = fp.validate_pdf(tampered)
        self.assertFalse(result.ok())
        self.assertLess(len(result.issues), 50)
        self.assertTrue(any('does not match header' in m for m in messages(result)))

    def test_warn_severity_does_not_fail(self):
        r = fp.ValidationResult([fp.ValidationIssue(path='/x', message='m', severity='warn')])
        self.assertTrue(r.ok())


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""Escaping and number formatting helpers"""
import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
from flatpdf.utils import (
    escape_pdf_text,
    fmt_len,
    fmt_number,
    fmt_numbers,
    format_file_size,
    format_xref_offset,
    pdf_data_uri,
)


class TestEscapePdfText(unittest.TestCase):
    def test_reserved_characters(self):
        self.assertEqual(escape_pdf_text('a(b)c\\d'), 'a\\(b\\)c\\\\d')

    def test_plain_text_unchanged(self):
        self.assertEqual(escape_pdf_text('Hello World'), 'Hello World')

    def test_empty(self):
        self.assertEqual(escape_pdf_text(''), '')

    def test_double_escaping(self):
        once = escape_pdf_text('(x)')
        twice = escape_pdf_text(once)
        self.assertEqual(once, '\\(x\\)')
        self.assertEqual(twice, '\\\\\\(x\\\\\\)')


class TestNumbers(unittest.TestCase):
    def test_fmt_number(self):
        self.assertEqual(fmt_number(1), '1.00')
        self.assertEqual(fmt_number(841.889), '841.89')
        self.assertEqual(fmt_number(0.5, 3), '0.500')

    def test_fmt_numbers(self):
        self.assertEqual(fmt_numbers((1, 2.5, -3)), '1.00 2.50 -3.00')

    def test_non_finite_rejected(self):
        for bad in (float('nan'), float('inf'), float('-inf')):
            with self.assertRaises(ValueError, msg=repr(bad)):
                fmt_number(bad)
        with self.assertRaises(ValueError):
            fmt_numbers((1, float('nan')))

    def test_fmt_len(self):
        self.assertEqual(fmt_len(16), '16')
        self.assertEqual(fmt_len(10.5), '10.5')

    def test_xref_offset(self):
        line = format_xref_offset(1234)
        self.assertEqual(line, '0000001234 00000 n ')
        self.assertEqual(len(line.split()[0]), 10)


class TestDelivery(unittest.TestCase):
    def test_data_uri(self):
        uri = pdf_data_uri(b'%PDF-1.3')
        self.assertEqual(uri, 'data:application/pdf;base64,JVBERi0xLjM=')

    def test_file_size(self):
        self.assertEqual(format_file_size(0), '0 B')
        self.assertEqual(format_file_size(512), '512 B')
        self.assertEqual(format_file_size(2048), '2.0 KB')


if __name__ == '__main__':
    unittest.main()

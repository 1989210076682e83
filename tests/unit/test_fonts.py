#!/usr/bin/env python3
"""Standard font registry"""
import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
from flatpdf.fonts import FontRegistry, normalize_family, normalize_style, standard_fonts


class TestFontRegistry(unittest.TestCase):
    def setUp(self):
        self.fonts = FontRegistry()

    def test_twelve_fonts_keyed_in_order(self):
        self.assertEqual(len(self.fonts), 12)
        self.assertEqual([f.key for f in self.fonts], [f"F{i}" for i in range(1, 13)])
        self.assertEqual(self.fonts.by_key('F1').base_font, 'Helvetica')
        self.assertEqual(self.fonts.by_key('F8').base_font, 'Courier-BoldOblique')
        self.assertEqual(self.fonts.by_key('F9').base_font, 'Times-Roman')
        self.assertEqual(self.fonts.by_key('F12').base_font, 'Times-BoldItalic')

    def test_lookup(self):
        self.assertEqual(self.fonts.lookup('helvetica', 'normal'), 'F1')
        self.assertEqual(self.fonts.lookup('courier', 'bold'), 'F6')
        self.assertEqual(self.fonts.lookup('times', 'italic'), 'F11')

    def test_lookup_fallback(self):
        self.assertEqual(self.fonts.lookup('comic sans', 'normal'), 'F1')
        self.assertEqual(self.fonts.lookup('times', 'wavy'), 'F1')

    def test_object_numbers_unassigned(self):
        self.assertTrue(all(f.number is None for f in standard_fonts()))

    def test_keys_unique(self):
        keys = [f.key for f in self.fonts]
        self.assertEqual(len(keys), len(set(keys)))


class TestNormalize(unittest.TestCase):
    def test_family(self):
        self.assertEqual(normalize_family('Times'), 'times')
        self.assertIsNone(normalize_family('Arial'))
        self.assertIsNone(normalize_family(None))

    def test_style(self):
        self.assertEqual(normalize_style('BoldItalic'), 'bolditalic')
        self.assertIsNone(normalize_style('oblique'))


if __name__ == '__main__':
    unittest.main()

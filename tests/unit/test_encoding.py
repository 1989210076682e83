#!/usr/bin/env python3
"""Standard-font text encoding"""
import os
import sys
import unittest
import warnings

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
from flatpdf.utils.encoding import encode_latin1, encode_standard, encode_text, standard_code


class TestStandardEncoding(unittest.TestCase):
    def test_ascii_passthrough(self):
        data, missing = encode_standard("Hi (there) \\ 'quote' `tick`")
        self.assertEqual(data, "Hi (there) \\ 'quote' `tick`".encode('ascii'))
        self.assertEqual(missing, [])

    def test_mapped_glyphs(self):
        # StandardEncoding codes: germandbls 0xFB, endash 0xB1, fi 0xAE
        self.assertEqual(standard_code('ß'), 0xFB)
        self.assertEqual(standard_code('–'), 0xB1)
        self.assertEqual(standard_code('ﬁ'), 0xAE)

    def test_ligatures_encoded(self):
        # fi/fl have StandardEncoding slots but no Adobe Glyph List entry
        self.assertEqual(standard_code('ﬂ'), 0xAF)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            self.assertEqual(encode_text('ﬁne ﬂy'), b'\xaene \xafy')
        self.assertEqual(caught, [])

    def test_unmapped_replaced(self):
        data, missing = encode_standard('aéb')  # eacute has no StandardEncoding slot
        self.assertEqual(data, b'a?b')
        self.assertEqual(missing, ['é'])

    def test_warning_once(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            encode_text('éé中')
        self.assertEqual(len(caught), 1)
        self.assertIn('U+00E9', str(caught[0].message))
        self.assertIn('U+4E2D', str(caught[0].message))

    def test_no_warning_when_silenced(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            self.assertEqual(encode_text('é', warn=False), b'?')
        self.assertEqual(caught, [])

    def test_latin1(self):
        self.assertEqual(encode_latin1('café'), b'caf\xe9')
        self.assertEqual(encode_latin1('中'), b'?')


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""
Tests for PDF text extraction.
"""

import unittest

from core.exceptions import ExtractionError
from etl.resume.parser import PdfTextExtractor
from tests import build_pdf


class TestPdfTextExtractor(unittest.TestCase):

    def setUp(self):
        self.extractor = PdfTextExtractor()

    def test_media_type(self):
        self.assertEqual(self.extractor.media_type, "application/pdf")

    def test_extracts_text(self):
        text = self.extractor.extract(build_pdf(["Jane Q. Doe", "jane.doe@example.com"]))
        self.assertIn("Jane Q. Doe", text)
        self.assertIn("jane.doe@example.com", text)

    def test_extraction_is_deterministic(self):
        content = build_pdf()
        self.assertEqual(self.extractor.extract(content), self.extractor.extract(content))

    def test_empty_bytes(self):
        with self.assertRaises(ExtractionError) as ctx:
            self.extractor.extract(b"")
        self.assertEqual(ctx.exception.stage, "extract")

    def test_not_a_pdf(self):
        with self.assertRaises(ExtractionError):
            self.extractor.extract(b"plain text pretending to be a resume")

    def test_pdf_without_text(self):
        with self.assertRaises(ExtractionError):
            self.extractor.extract(build_pdf([]))


if __name__ == '__main__':
    unittest.main()

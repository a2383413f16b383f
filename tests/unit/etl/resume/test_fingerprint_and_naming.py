#!/usr/bin/env python3
"""
Tests for content fingerprints and object key derivation.
"""

import hashlib
import unittest

from etl.resume.fingerprint import generate_file_fingerprint, short_fingerprint
from etl.resume.naming import (
    UNKNOWN_SLUG,
    claim_key,
    display_name_from_key,
    parsed_key,
    raw_key,
    slugify_name,
)

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestFingerprint(unittest.TestCase):

    def test_fingerprint_is_sha256_hex(self):
        content = b"%PDF-1.4 resume"
        fp = generate_file_fingerprint(content)
        self.assertEqual(fp, hashlib.sha256(content).hexdigest())
        self.assertEqual(len(fp), 64)

    def test_fingerprint_is_deterministic(self):
        self.assertEqual(generate_file_fingerprint(b"same"), generate_file_fingerprint(b"same"))
        self.assertNotEqual(generate_file_fingerprint(b"same"), generate_file_fingerprint(b"same "))

    def test_empty_input_has_fixed_hash(self):
        self.assertEqual(generate_file_fingerprint(b""), EMPTY_SHA256)

    def test_short_fingerprint(self):
        self.assertEqual(short_fingerprint(EMPTY_SHA256), "e3b0c442")


class TestSlugify(unittest.TestCase):

    def test_name_with_initial(self):
        self.assertEqual(slugify_name("Jane Q. Doe"), "jane_q_doe")

    def test_collapses_whitespace_and_keeps_hyphens(self):
        self.assertEqual(slugify_name("  Mary-Jane   Watson "), "mary-jane_watson")

    def test_drops_unsafe_characters(self):
        self.assertEqual(slugify_name("../../etc/passwd"), "etcpasswd")
        self.assertEqual(slugify_name("Ann <script>"), "ann_script")

    def test_unicode_letters_kept(self):
        self.assertEqual(slugify_name("José Álvarez"), "josé_álvarez")

    def test_empty_falls_back_to_unknown(self):
        self.assertEqual(slugify_name(""), UNKNOWN_SLUG)
        self.assertEqual(slugify_name(None), UNKNOWN_SLUG)
        self.assertEqual(slugify_name("!!!"), UNKNOWN_SLUG)

    def test_length_is_capped(self):
        slug = slugify_name("a" * 200, max_length=64)
        self.assertEqual(len(slug), 64)


class TestKeys(unittest.TestCase):

    def setUp(self):
        self.fp = hashlib.sha256(b"resume").hexdigest()

    def test_raw_key(self):
        self.assertEqual(raw_key(self.fp), f"{self.fp}.pdf")

    def test_parsed_key(self):
        self.assertEqual(parsed_key("Jane Q. Doe", self.fp), f"parsed/jane_q_doe-{self.fp[:8]}.txt")

    def test_same_name_different_content_never_collides(self):
        other = hashlib.sha256(b"another resume").hexdigest()
        self.assertNotEqual(parsed_key("John Smith", self.fp), parsed_key("John Smith", other))

    def test_claim_key(self):
        self.assertEqual(claim_key(self.fp), f"pending/{self.fp}.json")

    def test_display_name_round_trip(self):
        key = parsed_key("Jane Q. Doe", self.fp)
        self.assertEqual(display_name_from_key(key), "jane_q_doe")

    def test_display_name_keeps_hyphenated_names(self):
        self.assertEqual(display_name_from_key("parsed/mary-jane-0123abcd.txt"), "mary-jane")

    def test_display_name_without_hash_suffix(self):
        self.assertEqual(display_name_from_key("parsed/legacy.txt"), "legacy")


if __name__ == '__main__':
    unittest.main()

# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for word_list_loader module."""

import os
import shutil
import sys
import tempfile
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from word_list_loader import WordListImportError, load_word_list, split_entries


class TestSplitEntries(unittest.TestCase):
    """Tests for split_entries."""

    def test_plain_strings(self):
        words, clues = split_entries(["apple", "berry"])
        self.assertEqual(words, ["apple", "berry"])
        self.assertEqual(clues, ["", ""])

    def test_mappings_and_parallel_clues(self):
        words, clues = split_entries(
            [{"word": "apple", "clue": "n. fruit"}, "berry"],
            ["ignored", "n. small fruit"],
        )
        self.assertEqual(words, ["apple", "berry"])
        self.assertEqual(clues, ["n. fruit", "n. small fruit"])

    def test_mapping_without_word(self):
        with self.assertRaises(WordListImportError):
            split_entries([{"clue": "orphan"}])


class TestLoadWordList(unittest.TestCase):
    """Tests for load_word_list."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _write(self, name, content):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_text_file(self):
        path = self._write("week.txt", (
            "# week 23\n"
            "apple\tn. : a fruit\n"
            "\n"
            "berry\n"
            "  swim \tv. : move through water\n"
        ))
        words, clues = load_word_list(path)

        self.assertEqual(words, ["apple", "berry", "swim"])
        self.assertEqual(clues, ["n. : a fruit", "", "v. : move through water"])

    def test_yaml_file(self):
        path = self._write("week.yaml", (
            "words:\n"
            "  - apple\n"
            "  - word: berry\n"
            "    clue: \"n. : a small fruit\"\n"
        ))
        words, clues = load_word_list(path)

        self.assertEqual(words, ["apple", "berry"])
        self.assertEqual(clues, ["", "n. : a small fruit"])

    def test_yaml_bare_list(self):
        path = self._write("week.yml", "- apple\n- berry\n")
        words, _ = load_word_list(path)
        self.assertEqual(words, ["apple", "berry"])

    def test_yaml_without_words(self):
        path = self._write("week.yaml", "title: nothing here\n")
        with self.assertRaises(WordListImportError):
            load_word_list(path)

    def test_invalid_yaml(self):
        path = self._write("week.yaml", "words: [apple, berry\n")
        with self.assertRaises(WordListImportError):
            load_word_list(path)

    def test_missing_file(self):
        with self.assertRaises(WordListImportError):
            load_word_list(os.path.join(self.temp_dir, "missing.txt"))


if __name__ == '__main__':
    unittest.main()

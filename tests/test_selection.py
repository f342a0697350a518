"""
Tests for CitationSelection
"""

import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bodycount import BodyParseResult, CitationEntry, CitationSelection


class TestCitationSelection(unittest.TestCase):

    def setUp(self):
        self.result = BodyParseResult(
            word_count=100,
            raw_word_count=110,
            started_by="heading",
            citation_words_removed=10,
            structural_blocks_excluded=2,
            citations=[
                CitationEntry("Smith, 2020", 2, 3),
                CitationEntry("Lee, 2018; Park, 2019", 4, 1),
            ],
            citation_count=4,
        )
        self.selection = CitationSelection(self.result)

    def test_everything_starts_excluded(self):
        self.assertTrue(self.selection.is_excluded("Smith, 2020"))
        self.assertTrue(self.selection.is_excluded("Lee, 2018; Park, 2019"))
        self.assertEqual(self.selection.unique_count, 2)
        self.assertEqual(self.selection.excluded_count, 4)
        self.assertEqual(self.selection.included_count, 0)
        self.assertEqual(self.selection.adjusted_word_count, 100)

    def test_excluded_total_adds_tables(self):
        self.assertEqual(self.selection.excluded_total, 4 + 2)

    def test_toggle_adds_words_back(self):
        self.assertFalse(self.selection.toggle("Smith, 2020"))
        self.assertEqual(self.selection.adjusted_word_count, 106)
        self.assertEqual(self.selection.included_count, 3)
        self.assertEqual(self.selection.excluded_count, 1)
        self.assertTrue(self.selection.toggle("Smith, 2020"))
        self.assertEqual(self.selection.adjusted_word_count, 100)

    def test_include_all_matches_raw_count(self):
        self.selection.include_all()
        self.assertEqual(self.selection.adjusted_word_count, self.result.raw_word_count)
        self.selection.exclude_all()
        self.assertEqual(self.selection.adjusted_word_count, self.result.word_count)

    def test_unknown_citation(self):
        with self.assertRaises(KeyError):
            self.selection.set_excluded("Nobody, 1999", False)

    def test_filter(self):
        self.assertEqual([c.text for c in self.selection.filter("PARK")], ["Lee, 2018; Park, 2019"])
        self.assertEqual(len(self.selection.filter("")), 2)
        self.assertEqual(self.selection.filter("zzz"), [])


if __name__ == '__main__':
    unittest.main()

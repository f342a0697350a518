import unittest
import sys
import os

# Add parent directory to path to allow importing modules from root
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bodycount.types import KIND_HEADING, KIND_PARAGRAPH
from bodycount.blocks import (
    normalize_heading,
    is_standalone_heading,
    is_title_case,
    is_all_caps,
    is_heading_style,
    BlockSegmenter,
    split_into_blocks,
)


class TestHeadingPredicates(unittest.TestCase):
    def test_normalize_strips_numbering_and_marks(self):
        self.assertEqual(normalize_heading("2.1 Introduction"), "introduction")
        self.assertEqual(normalize_heading("IV. METHODS:"), "methods")
        self.assertEqual(normalize_heading("1. References"), "references")
        self.assertEqual(normalize_heading("  Works   Cited  "), "works cited")

    def test_roman_prefix_needs_numeral(self):
        self.assertEqual(normalize_heading("IV Methods"), "methods")
        self.assertEqual(normalize_heading("ii. Background"), "background")
        self.assertEqual(normalize_heading("Mix Methods"), "mix methods")
        self.assertEqual(normalize_heading("CV Background"), "cv background")

    def test_keyword_heading(self):
        self.assertTrue(is_standalone_heading("Introduction"))
        self.assertTrue(is_standalone_heading("references"))

    def test_capitalized_heading(self):
        self.assertTrue(is_standalone_heading("Results and Discussion"))
        self.assertTrue(is_standalone_heading("METHODS AND DATA"))

    def test_prose_is_not_heading(self):
        self.assertFalse(is_standalone_heading("the results were clear"))
        self.assertFalse(is_standalone_heading("It Works. Then It Stops"))
        self.assertFalse(is_standalone_heading(""))
        self.assertFalse(is_standalone_heading("2020"))

    def test_word_limit(self):
        long_title = " ".join(["Word"] * 13)
        self.assertFalse(is_standalone_heading(long_title))
        self.assertTrue(is_standalone_heading(long_title, max_words=13))

    def test_title_case_ratio(self):
        self.assertTrue(is_title_case("A Study of Things"))
        self.assertFalse(is_title_case("a study of things"))
        self.assertFalse(is_title_case("12 34"))

    def test_all_caps(self):
        self.assertTrue(is_all_caps("ABSTRACT"))
        self.assertFalse(is_all_caps("Abstract"))

    def test_heading_style(self):
        self.assertTrue(is_heading_style("Heading 1"))
        self.assertTrue(is_heading_style("heading2"))
        self.assertFalse(is_heading_style("Normal"))
        self.assertFalse(is_heading_style(None))


class TestBlockSegmenter(unittest.TestCase):
    def test_paragraphs_and_headings(self):
        text = (
            "Title\n"
            "\n"
            "Introduction\n"
            "This is the first line\n"
            "and the second line.\n"
            "\n"
            "Another paragraph here."
        )
        blocks = split_into_blocks(text)
        self.assertEqual([b.text for b in blocks], [
            "Title",
            "Introduction",
            "This is the first line and the second line.",
            "Another paragraph here.",
        ])
        self.assertEqual([b.kind for b in blocks],
                         [KIND_HEADING, KIND_HEADING, KIND_PARAGRAPH, KIND_PARAGRAPH])
        self.assertEqual(blocks[2].lines, ("This is the first line", "and the second line."))

    def test_heading_is_never_merged(self):
        blocks = BlockSegmenter().split("some text here\nMethods\nmore text follows")
        self.assertEqual([b.text for b in blocks], ["some text here", "Methods", "more text follows"])
        self.assertEqual(blocks[1].kind, KIND_HEADING)

    def test_crlf_and_nbsp_normalized(self):
        blocks = split_into_blocks("Introduction\r\nbody\u00a0text here\r\n")
        self.assertEqual([b.text for b in blocks], ["Introduction", "body text here"])

    def test_pipe_rows_stay_in_one_block(self):
        blocks = split_into_blocks("A | B | C\nD | E | F\n-----\nG | H | I")
        self.assertEqual(len(blocks), 1)
        self.assertEqual(len(blocks[0].lines), 4)
        self.assertEqual(blocks[0].kind, KIND_PARAGRAPH)

    def test_space_aligned_rows_stay_in_one_block(self):
        blocks = split_into_blocks("Group  Mean  SD\nControl  12.1  3.2\nTreatment  14.5  2.9")
        self.assertEqual(len(blocks), 1)
        self.assertEqual(len(blocks[0].lines), 3)
        self.assertEqual(blocks[0].kind, KIND_PARAGRAPH)

    def test_tab_rows_stay_in_one_block(self):
        blocks = split_into_blocks("Group\tScore\nControl\t12")
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].lines, ("Group\tScore", "Control\t12"))

    def test_keyword_heading_with_wide_gap_still_splits(self):
        blocks = split_into_blocks("1  Introduction\nbody text here")
        self.assertEqual([b.text for b in blocks], ["1  Introduction", "body text here"])
        self.assertEqual(blocks[0].kind, KIND_HEADING)

    def test_every_line_assigned_once(self):
        text = "Abstract\nshort summary\n\n\nIntroduction\nline one\nline two\n\nREFERENCES\nref a\nref b"
        blocks = split_into_blocks(text)
        non_blank = [ln.strip() for ln in text.split("\n") if ln.strip()]
        assigned = [ln for b in blocks for ln in b.lines]
        self.assertEqual(assigned, non_blank)

    def test_empty_input(self):
        self.assertEqual(split_into_blocks(""), [])
        self.assertEqual(split_into_blocks("\n\n  \n"), [])


if __name__ == '__main__':
    unittest.main()

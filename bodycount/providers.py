"""
Block Capability Providers
==========================
The classifier and filter only ask three questions of a block:
- is it a heading?
- is it a table?
- is it already marked as a caption?

Two providers answer them:
- PlainTextTraits: heuristics over the block text and its raw lines
- TypedBlockTraits: reads the kind / style name / outline level supplied
  by a document reader
"""

from dataclasses import dataclass
from typing import Optional

from .types import TextBlock, KIND_HEADING, KIND_TABLE, KIND_CAPTION, normalize_input
from .words import count_words
from .blocks.headings import (
    is_standalone_heading, is_heading_style, BODY_START_KEYWORDS, BODY_END_KEYWORDS
)
from .structure.filter import is_table_like


@dataclass
class BlockView:
    """A block as seen by the classifier: trimmed text plus its traits"""
    block: TextBlock
    text: str
    word_count: int
    is_heading: bool
    is_table: bool
    is_caption: bool


class BlockTraits:
    """Base provider. Subclasses implement the three capability checks."""

    def is_heading(self, block: TextBlock, text: str, word_count: int) -> bool:
        raise NotImplementedError

    def is_table(self, block: TextBlock) -> bool:
        raise NotImplementedError

    def is_caption(self, block: TextBlock) -> bool:
        raise NotImplementedError

    def describe(self, block: TextBlock) -> Optional[BlockView]:
        """Build the classifier view, or None if the block carries nothing"""
        text = normalize_input(block.text).strip()
        is_table = self.is_table(block)
        if not text and not is_table:
            return None
        word_count = count_words(text)
        return BlockView(
            block=block,
            text=text,
            word_count=word_count,
            is_heading=bool(text) and not is_table and self.is_heading(block, text, word_count),
            is_table=is_table,
            is_caption=self.is_caption(block),
        )


class PlainTextTraits(BlockTraits):
    """Heuristic traits for blocks produced by the BlockSegmenter"""

    def __init__(
        self,
        heading_max_words: int = 12,
        title_case_ratio: float = 0.6,
        table_min_score: int = 2,
        table_line_ratio: float = 0.6,
        start_keywords: tuple = BODY_START_KEYWORDS,
        end_keywords: tuple = BODY_END_KEYWORDS,
    ):
        self.heading_max_words = heading_max_words
        self.title_case_ratio = title_case_ratio
        self.table_min_score = table_min_score
        self.table_line_ratio = table_line_ratio
        self.start_keywords = start_keywords
        self.end_keywords = end_keywords

    def is_heading(self, block: TextBlock, text: str, word_count: int) -> bool:
        return is_standalone_heading(
            text,
            word_count,
            max_words=self.heading_max_words,
            title_case_ratio=self.title_case_ratio,
            start_keywords=self.start_keywords,
            end_keywords=self.end_keywords,
        )

    def is_table(self, block: TextBlock) -> bool:
        return is_table_like(
            block.lines,
            min_score=self.table_min_score,
            line_ratio=self.table_line_ratio,
        )

    def is_caption(self, block: TextBlock) -> bool:
        # Plain text has no caption kind
        return False


class TypedBlockTraits(BlockTraits):
    """Traits read off pre-tagged blocks from a document reader"""

    def is_heading(self, block: TextBlock, text: str, word_count: int) -> bool:
        return (
            block.kind == KIND_HEADING
            or is_heading_style(block.style_name)
            or block.outline_level is not None
        )

    def is_table(self, block: TextBlock) -> bool:
        return block.kind == KIND_TABLE

    def is_caption(self, block: TextBlock) -> bool:
        return block.kind == KIND_CAPTION

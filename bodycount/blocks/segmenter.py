"""
Block Segmenter
===============
Converts raw plain text into an ordered list of TextBlock.

- Consecutive non-blank lines form one paragraph block
- A blank line closes the current paragraph
- A standalone heading line is always emitted as its own block
"""

import re
from dataclasses import dataclass
from typing import List

from ..types import (
    TextBlock, KIND_HEADING, KIND_PARAGRAPH, normalize_input, collapse_whitespace
)
from ..words import count_words
from .headings import (
    is_standalone_heading, normalize_heading, is_body_start_heading, is_body_end_heading,
    BODY_START_KEYWORDS, BODY_END_KEYWORDS,
)


_BORDER_LINE = re.compile(r"^[\-=+|]{3,}$")
_COLUMN_GAP = re.compile(r"\S+\s{2,}\S+")


@dataclass
class SegmenterConfig:
    """Thresholds shared with the heading predicate"""
    heading_max_words: int = 12
    title_case_ratio: float = 0.6
    start_keywords: tuple = BODY_START_KEYWORDS
    end_keywords: tuple = BODY_END_KEYWORDS


def looks_like_table_row(line: str) -> bool:
    """Pipe, tab or space-aligned rows and border lines belong to a table"""
    return (
        "|" in line
        or "\t" in line
        or bool(_BORDER_LINE.match(line))
        or bool(_COLUMN_GAP.search(line))
    )


class BlockSegmenter:
    """
    Split plain text into blocks.

    Usage:
        segmenter = BlockSegmenter()
        blocks = segmenter.split(raw_text)
    """

    def __init__(self, config: SegmenterConfig = None):
        self.config = config or SegmenterConfig()

    def is_heading(self, text: str) -> bool:
        cfg = self.config
        return is_standalone_heading(
            text,
            count_words(text),
            max_words=cfg.heading_max_words,
            title_case_ratio=cfg.title_case_ratio,
            start_keywords=cfg.start_keywords,
            end_keywords=cfg.end_keywords,
        )

    def is_keyword_heading(self, text: str) -> bool:
        normalized = normalize_heading(text)
        return (
            is_body_start_heading(normalized, self.config.start_keywords)
            or is_body_end_heading(normalized, self.config.end_keywords)
        )

    def is_line_heading(self, line: str) -> bool:
        """A keyword heading always stands alone; other headings never look like table rows"""
        if self.is_keyword_heading(line):
            return True
        return not looks_like_table_row(line) and self.is_heading(line)

    def split(self, raw_text: str) -> List[TextBlock]:
        text = normalize_input(raw_text)
        blocks: List[TextBlock] = []
        pending: List[str] = []

        def flush():
            if not pending:
                return
            joined = collapse_whitespace(" ".join(pending))
            if joined:
                tabular = any(looks_like_table_row(ln) for ln in pending)
                kind = KIND_HEADING if not tabular and self.is_heading(joined) else KIND_PARAGRAPH
                blocks.append(TextBlock(text=joined, kind=kind, lines=tuple(pending)))
            pending.clear()

        for line in text.split("\n"):
            trimmed = line.strip()
            if not trimmed:
                flush()
                continue

            if self.is_line_heading(trimmed):
                flush()
                blocks.append(TextBlock(text=trimmed, kind=KIND_HEADING, lines=(trimmed,)))
                continue

            pending.append(trimmed)

        flush()
        return blocks


def split_into_blocks(raw_text: str, config: SegmenterConfig = None) -> List[TextBlock]:
    """
    Convenience function for segmentation.
    """
    return BlockSegmenter(config).split(raw_text)

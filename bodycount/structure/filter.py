"""
Structural Filter
=================
Drops tables, captions and figure/table labels from the in-body stream.

Rules, in order, per in-body block:
1. Table (tagged, or table-like lines) -> excluded, counted
2. Tagged caption -> dropped silently
3. Pending caption skip -> a short non-heading block is dropped as the caption
4. "Figure 1:" / "Table II." label -> dropped, next short block presumed caption
5. Otherwise the block is kept
"""

import math
import re
from dataclasses import dataclass
from typing import Iterable

# Label numerals: digits (optional letter suffix) or a roman numeral, ending at a word boundary
FIGURE_TABLE_LABEL = re.compile(
    r"^(?:figure|fig\.?|table)\s+(?:\d+[a-z]?|[ivxlc]+)\b(?:[.\-]\d+)*\s*[:.\-]?\s*",
    re.IGNORECASE,
)

_MULTI_SPACE_COLUMNS = re.compile(r"\S+\s{2,}\S+")
_BORDER_LINE = re.compile(r"^[\-=+|]{3,}$")
_NUMERIC_ROW = re.compile(r"(?:\d+\s+){2,}\d+")

# Filter decisions
KEEP = "keep"
DROP_TABLE = "table"
DROP_CAPTION = "caption"
DROP_LABEL = "label"


def table_score(lines: Iterable[str]) -> int:
    """Sum of table-row signals across the lines"""
    score = 0
    for line in lines:
        if "|" in line:
            score += 1
        if "\t" in line:
            score += 1
        if _MULTI_SPACE_COLUMNS.search(line):
            score += 1
        if _BORDER_LINE.match(line):
            score += 1
        if _NUMERIC_ROW.search(line):
            score += 1
    return score


def is_table_like(lines: Iterable[str], min_score: int = 2, line_ratio: float = 0.6) -> bool:
    """
    Heuristic table detection over raw lines.

    Requires at least 2 non-blank lines and
    score >= max(min_score, ceil(line_ratio * line_count)).
    """
    trimmed = [ln.strip() for ln in (lines or ()) if ln and ln.strip()]
    if len(trimmed) < 2:
        return False
    threshold = max(min_score, math.ceil(len(trimmed) * line_ratio))
    return table_score(trimmed) >= threshold


def is_figure_or_table_label(text: str) -> bool:
    return bool(FIGURE_TABLE_LABEL.match((text or "").strip()))


def is_likely_caption(word_count: int, max_words: int = 40) -> bool:
    return 0 < word_count <= max_words


@dataclass
class FilterStats:
    tables_excluded: int = 0
    captions_dropped: int = 0
    labels_dropped: int = 0


class StructuralFilter:
    """
    Stateful per-document filter. Owns the `skip_caption` flag carried
    between consecutive in-body blocks.
    """

    def __init__(self, caption_max_words: int = 40):
        self.caption_max_words = caption_max_words
        self.skip_caption = False
        self.stats = FilterStats()

    def check(self, view) -> str:
        """
        Decide what happens to one in-body block.

        Args:
            view: BlockView with text, word_count, is_heading, is_table, is_caption

        Returns:
            KEEP, DROP_TABLE, DROP_CAPTION or DROP_LABEL
        """
        if view.is_table:
            self.stats.tables_excluded += 1
            return DROP_TABLE

        if view.is_caption:
            self.stats.captions_dropped += 1
            return DROP_CAPTION

        if self.skip_caption:
            self.skip_caption = False
            if is_likely_caption(view.word_count, self.caption_max_words) and not view.is_heading:
                self.stats.captions_dropped += 1
                return DROP_CAPTION

        if is_figure_or_table_label(view.text):
            self.skip_caption = True
            self.stats.labels_dropped += 1
            return DROP_LABEL

        return KEEP

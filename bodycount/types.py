"""
Unified Data Types for the Body Counter
=======================================
All modules MUST use these types. No custom structures allowed.

Type Hierarchy:
- TextBlock: One block of manuscript text (paragraph, heading, table, caption)
- CitationEntry: A unique in-text citation with its occurrence count
- BodyParseResult: The single output value of one parse call
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# ============================================================
# Block Kinds
# ============================================================

KIND_PARAGRAPH = "paragraph"
KIND_HEADING = "heading"
KIND_TABLE = "table"
KIND_CAPTION = "caption"
KIND_UNKNOWN = "unknown"

BLOCK_KINDS = (KIND_PARAGRAPH, KIND_HEADING, KIND_TABLE, KIND_CAPTION, KIND_UNKNOWN)

# How the body was entered
STARTED_BY_HEADING = "heading"
STARTED_BY_FALLBACK = "fallback"
STARTED_BY_NONE = "none"


# ============================================================
# Core Data Structures
# ============================================================

@dataclass(frozen=True)
class TextBlock:
    """
    A block of text handed to the classifier.

    Attributes:
        text: Block text (paragraph text, heading line, table cell text)
        kind: One of BLOCK_KINDS ("paragraph" | "heading" | "table" | "caption" | "unknown")
        style_name: Style name from the source document, if any
        outline_level: Explicit outline level marker, if the source carries one
        lines: Raw constituent lines (plain-text pipeline only, used for table detection)
    """
    text: str
    kind: str = KIND_PARAGRAPH
    style_name: Optional[str] = None
    outline_level: Optional[int] = None
    lines: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.kind not in BLOCK_KINDS:
            object.__setattr__(self, "kind", KIND_UNKNOWN)
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))


@dataclass
class CitationEntry:
    """
    A unique citation, keyed by its normalized text.

    Attributes:
        text: Normalized citation text (whitespace-collapsed, trimmed)
        words: Word count of the normalized text
        occurrences: How many times this exact citation was seen
    """
    text: str
    words: int
    occurrences: int = 1

    @property
    def words_removed(self) -> int:
        """Total words this citation removed from the body"""
        return self.words * self.occurrences


@dataclass
class BodyParseResult:
    """
    Result of one parse call.

    UI Display Contract:
        - word_count: body words after citation stripping
        - raw_word_count: body words including the removed citation words
        - started_by: "heading" | "fallback" | "none"
        - citations: sorted by occurrences desc, then words desc
    """
    word_count: int = 0
    raw_word_count: int = 0
    body_text: str = ""
    started_by: str = STARTED_BY_NONE
    start_heading: Optional[str] = None
    end_heading: Optional[str] = None
    citation_words_removed: int = 0
    structural_blocks_excluded: int = 0
    citations: List[CitationEntry] = field(default_factory=list)
    citation_count: int = 0

    @property
    def table_count(self) -> int:
        """Tables excluded from the body (alias of structural_blocks_excluded)"""
        return self.structural_blocks_excluded

    @property
    def unique_citation_count(self) -> int:
        return len(self.citations)

    def is_empty(self) -> bool:
        """True if no body was found"""
        return self.started_by == STARTED_BY_NONE

    def to_dict(self) -> dict:
        return {
            "wordCount": self.word_count,
            "rawWordCount": self.raw_word_count,
            "bodyText": self.body_text,
            "startedBy": self.started_by,
            "startHeading": self.start_heading,
            "endHeading": self.end_heading,
            "citationWordsRemoved": self.citation_words_removed,
            "structuralBlocksExcluded": self.structural_blocks_excluded,
            "citations": [
                {"text": c.text, "words": c.words, "occurrences": c.occurrences}
                for c in self.citations
            ],
            "citationCount": self.citation_count,
            "tableCount": self.table_count,
        }


# ============================================================
# Helper Functions
# ============================================================

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_input(raw: str) -> str:
    """
    Normalize raw input text.

    - CRLF / CR -> LF
    - Non-breaking space -> space
    """
    if raw is None:
        return ""
    return str(raw).replace("\r\n", "\n").replace("\r", "\n").replace("\u00a0", " ")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim"""
    return _WHITESPACE_RUN.sub(" ", text or "").strip()


def normalize_citation_text(raw: str) -> str:
    """
    Normalize citation text into its map key.

    Idempotent: normalize_citation_text(normalize_citation_text(s)) == normalize_citation_text(s)
    """
    return collapse_whitespace(raw)

"""
Heading Predicates
==================
Pure predicates that decide whether a line/block is a section heading,
and whether a heading opens or closes the manuscript body.

Normalization for keyword matching:
- "2.1 Introduction" -> "introduction"
- "IV. METHODS:" -> "methods"
- "1. References" -> "references"
"""

import re
from typing import Iterable, Optional

from ..words import alphabetic_words, count_words


BODY_START_KEYWORDS = (
    "introduction",
    "background",
    "rationale",
    "research question",
    "aim",
    "methodology",
    "method",
    "methods",
)

BODY_END_KEYWORDS = (
    "bibliography",
    "references",
    "works cited",
    "appendix",
    "appendices",
)

_NUMERIC_PREFIX = re.compile(r"^[0-9]+(?:[.\-][0-9]+)*\.?\s+")
# Roman numeral prefix: "IV. " with a dot, or a bare i/v/x numeral ("IV ")
_ROMAN_PREFIX = re.compile(r"^(?:[ivxlcdm]+\.|(?=[ivx])x{0,3}(?:ix|iv|v?i{0,3}))\s+", re.IGNORECASE)
_TRAILING_MARKS = re.compile(r"[:.\-]+$")
_SENTENCE_BREAK = re.compile(r"[.!?]\s+\w")


def normalize_heading(text: str) -> str:
    """Strip numbering and trailing marks, collapse whitespace, lower-case"""
    s = (text or "").strip()
    s = _NUMERIC_PREFIX.sub("", s)
    s = _ROMAN_PREFIX.sub("", s)
    s = _TRAILING_MARKS.sub("", s)
    return re.sub(r"\s+", " ", s).strip().lower()


def is_body_start_heading(normalized: str, keywords: Iterable[str] = BODY_START_KEYWORDS) -> bool:
    return normalized in keywords


def is_body_end_heading(normalized: str, keywords: Iterable[str] = BODY_END_KEYWORDS) -> bool:
    return normalized in keywords


def capitalized_ratio(text: str) -> float:
    """
    Share of alphabetic words whose first character is upper-case.
    A word starting with a digit ("3D") counts as capitalized.
    """
    words = alphabetic_words(text)
    if not words:
        return 0.0
    capitalized = sum(1 for w in words if w[0] == w[0].upper())
    return capitalized / len(words)


def is_title_case(text: str, ratio: float = 0.6) -> bool:
    """True if at least `ratio` of the alphabetic words are capitalized"""
    if not alphabetic_words(text):
        return False
    return capitalized_ratio(text) >= ratio


def is_all_caps(text: str) -> bool:
    """True if every alphabetic word is entirely upper-case"""
    words = alphabetic_words(text)
    if not words:
        return False
    return all(w == w.upper() for w in words)


def is_standalone_heading(
    text: str,
    word_count: Optional[int] = None,
    max_words: int = 12,
    title_case_ratio: float = 0.6,
    start_keywords: Iterable[str] = BODY_START_KEYWORDS,
    end_keywords: Iterable[str] = BODY_END_KEYWORDS,
) -> bool:
    """
    Decide if a line is a standalone heading.

    Rules:
    - non-empty, at most `max_words` words
    - not a full sentence (no ". Word" inside)
    - a body start/end keyword after normalization, OR
      mostly capitalized, OR all upper-case
    """
    if not text or not text.strip():
        return False
    if word_count is None:
        word_count = count_words(text)
    if word_count > max_words:
        return False
    if _SENTENCE_BREAK.search(text):
        return False

    normalized = normalize_heading(text)
    if is_body_start_heading(normalized, start_keywords) or is_body_end_heading(normalized, end_keywords):
        return True

    if not alphabetic_words(text):
        return False
    return is_all_caps(text) or capitalized_ratio(text) >= title_case_ratio


def is_heading_style(style_name: Optional[str]) -> bool:
    """Style names like "Heading 1", "heading2" mark headings"""
    if not style_name:
        return False
    return style_name.strip().lower().startswith("heading")

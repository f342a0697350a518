"""
Word Counter
============
Locale-aware word counting.

- Latin text: whitespace tokenization
- CJK / Kana text: character count after stripping whitespace and punctuation
"""

import re
import unicodedata
from typing import List


# CJK Unified Ideographs, Hiragana, Katakana
CJK_PATTERN = re.compile(r"[\u4e00-\u9fff\u3040-\u309f\u30a0-\u30ff]")

# Word-like tokens used by capitalization heuristics (not by counting)
WORD_PATTERN = re.compile(r"[A-Za-z0-9]+(?:'[A-Za-z0-9]+)?")

_FULLWIDTH_PARENS = {"(", ")", "\uff08", "\uff09"}


def contains_cjk(text: str) -> bool:
    """Check if text contains any CJK / Kana code point"""
    return bool(CJK_PATTERN.search(text or ""))


def _is_punctuation(ch: str) -> bool:
    return ch in _FULLWIDTH_PARENS or unicodedata.category(ch).startswith("P")


def count_words(text: str) -> int:
    """
    Count words in a block of text.

    Examples:
    - "The study found results." -> 4
    - "" -> 0
    - "研究表明，结果显著。" -> 8
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return 0

    if contains_cjk(trimmed):
        return sum(1 for ch in trimmed if not ch.isspace() and not _is_punctuation(ch))

    return len(trimmed.split())


def extract_words(text: str) -> List[str]:
    """Extract ASCII word tokens (letters/digits, inner apostrophe allowed)"""
    return WORD_PATTERN.findall(text or "")


def alphabetic_words(text: str) -> List[str]:
    """Word tokens that contain at least one ASCII letter"""
    return [w for w in extract_words(text) if re.search(r"[A-Za-z]", w)]

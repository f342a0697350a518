"""
Citation Extractor
==================
Composes the parenthetical and bracket channels, removes residual
"et al." / "ibid." fragments, and folds every recorded citation into a
per-parse tally.
"""

import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import List

from ..types import CitationEntry, normalize_citation_text, collapse_whitespace
from ..words import count_words
from .parenthetical import strip_parenthetical_citations
from .bracket import strip_bracket_citations

RESIDUAL_FRAGMENT = re.compile(r"\b(?:et al|ibid)\b\.?", re.IGNORECASE)

# Placeholder left where a citation was removed, resolved by tidy_text
CITATION_GAP = "\x00"
_GAP_BEFORE_PUNCT = re.compile(r"\s*(?:\x00\s*)+(?=[,.;:!?])")


@dataclass
class Extraction:
    """Result of extracting citations from one block"""
    cleaned_text: str
    citations: List[str] = field(default_factory=list)
    parenthetical_count: int = 0
    bracket_count: int = 0


def tidy_text(text: str) -> str:
    """
    Resolve removal gaps and collapse whitespace.
    A gap directly before , . ; : ! ? is closed up; any other gap becomes a space.
    Whitespace the author wrote before punctuation is left alone.
    """
    text = _GAP_BEFORE_PUNCT.sub("", text or "")
    return collapse_whitespace(text.replace(CITATION_GAP, " "))


def extract_citations(text: str) -> Extraction:
    """
    Strip in-text citations from a block.

    Example:
        "The study (Smith, 2020) found results [4]."
        -> cleaned "The study found results."
        -> citations ["Smith, 2020", "4"]
    """
    text = (text or "").replace(CITATION_GAP, " ")
    cleaned, paren_citations = strip_parenthetical_citations(text, CITATION_GAP)
    cleaned, bracket_citations = strip_bracket_citations(cleaned, CITATION_GAP)
    bracket_citations = [c.replace(CITATION_GAP, " ") for c in bracket_citations]
    cleaned = RESIDUAL_FRAGMENT.sub(CITATION_GAP, cleaned)
    return Extraction(
        cleaned_text=tidy_text(cleaned),
        citations=paren_citations + bracket_citations,
        parenthetical_count=len(paren_citations),
        bracket_count=len(bracket_citations),
    )


class CitationTally:
    """
    Running citation map for one parse call.
    Insertion-ordered, so ties keep first-seen order after sorting.
    """

    def __init__(self):
        self._entries: "OrderedDict[str, CitationEntry]" = OrderedDict()

    def add(self, raw: str) -> None:
        normalized = normalize_citation_text(raw)
        if not normalized:
            return
        entry = self._entries.get(normalized)
        if entry is not None:
            entry.occurrences += 1
            return
        self._entries[normalized] = CitationEntry(
            text=normalized,
            words=count_words(normalized),
            occurrences=1,
        )

    def add_all(self, citations: List[str]) -> None:
        for raw in citations:
            self.add(raw)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: str) -> bool:
        return normalize_citation_text(text) in self._entries

    @property
    def total_occurrences(self) -> int:
        return sum(e.occurrences for e in self._entries.values())

    @property
    def words_removed(self) -> int:
        return sum(e.words_removed for e in self._entries.values())

    def sorted_entries(self) -> List[CitationEntry]:
        """Sorted by occurrences desc, then words desc"""
        return sorted(self._entries.values(), key=lambda e: (-e.occurrences, -e.words))

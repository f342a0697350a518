"""
Citation Selection
==================
Tracks which citations the user keeps excluded from the body count.
Every citation starts excluded; toggling one adds its words back.
"""

from typing import Dict, List

from .types import BodyParseResult, CitationEntry


class CitationSelection:
    """
    Include/exclude state over the citations of one result.

    Usage:
        selection = CitationSelection(result)
        selection.toggle("Smith, 2020")
        selection.adjusted_word_count
    """

    def __init__(self, result: BodyParseResult):
        self.result = result
        self._excluded: Dict[str, bool] = {c.text: True for c in result.citations}

    def is_excluded(self, text: str) -> bool:
        return self._excluded.get(text, True)

    def set_excluded(self, text: str, excluded: bool) -> None:
        if text not in self._excluded:
            raise KeyError(f"Unknown citation: {text!r}")
        self._excluded[text] = excluded

    def toggle(self, text: str) -> bool:
        """Flip one citation; returns the new excluded state"""
        new_state = not self.is_excluded(text)
        self.set_excluded(text, new_state)
        return new_state

    def exclude_all(self) -> None:
        for text in self._excluded:
            self._excluded[text] = True

    def include_all(self) -> None:
        for text in self._excluded:
            self._excluded[text] = False

    @property
    def unique_count(self) -> int:
        return len(self.result.citations)

    @property
    def excluded_count(self) -> int:
        """Citation occurrences currently excluded"""
        return sum(c.occurrences for c in self.result.citations if self.is_excluded(c.text))

    @property
    def included_count(self) -> int:
        """Citation occurrences currently included"""
        return sum(c.occurrences for c in self.result.citations if not self.is_excluded(c.text))

    @property
    def excluded_total(self) -> int:
        """Excluded citation occurrences plus excluded tables"""
        return self.excluded_count + self.result.table_count

    @property
    def adjusted_word_count(self) -> int:
        """Body words plus the words of every included citation"""
        added = sum(c.words_removed for c in self.result.citations if not self.is_excluded(c.text))
        return self.result.word_count + added

    def filter(self, query: str = "") -> List[CitationEntry]:
        """Citations containing `query` (case-insensitive), in result order"""
        q = (query or "").strip().lower()
        if not q:
            return list(self.result.citations)
        return [c for c in self.result.citations if q in c.text.lower()]

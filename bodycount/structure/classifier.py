"""
Body Boundary Classifier
========================
Linear scan with a three-state machine deciding where the body starts and ends.

States:
- NOT_IN_BODY (start): blocks are discarded until a start transition fires
- IN_BODY: blocks go on to the structural filter
- DONE (terminal): an end heading was seen, the scan stops

Start transitions:
- heading: a heading whose normalized text is a body-start keyword
- fallback: a non-heading, non-table block with more than `fallback_min_words`
  words that is not title-case (skips title pages and author blocks)
"""

from typing import Optional, Tuple

from ..types import STARTED_BY_HEADING, STARTED_BY_FALLBACK, STARTED_BY_NONE
from ..blocks.headings import (
    BODY_START_KEYWORDS, BODY_END_KEYWORDS,
    normalize_heading, is_body_start_heading, is_body_end_heading, is_title_case,
)

NOT_IN_BODY = "not_in_body"
IN_BODY = "in_body"
DONE = "done"


class BodyClassifier:
    """
    Usage:
        classifier = BodyClassifier()
        for view in views:
            state = classifier.step(view)
            if state == DONE: break
            if state != IN_BODY: continue
            ...
    """

    def __init__(
        self,
        start_keywords: Tuple[str, ...] = BODY_START_KEYWORDS,
        end_keywords: Tuple[str, ...] = BODY_END_KEYWORDS,
        fallback_min_words: int = 20,
        title_case_ratio: float = 0.6,
        enable_fallback: bool = True,
    ):
        self.start_keywords = start_keywords
        self.end_keywords = end_keywords
        self.fallback_min_words = fallback_min_words
        self.title_case_ratio = title_case_ratio
        self.enable_fallback = enable_fallback

        self.state = NOT_IN_BODY
        self.started_by = STARTED_BY_NONE
        self.start_heading: Optional[str] = None
        self.end_heading: Optional[str] = None

    def _try_start(self, view) -> bool:
        if view.is_heading:
            normalized = normalize_heading(view.text)
            if is_body_start_heading(normalized, self.start_keywords):
                self.started_by = STARTED_BY_HEADING
                self.start_heading = normalized
                return True

        if (
            self.enable_fallback
            and not view.is_heading
            and not view.is_table
            and view.word_count > self.fallback_min_words
            and not is_title_case(view.text, self.title_case_ratio)
        ):
            self.started_by = STARTED_BY_FALLBACK
            return True

        return False

    def step(self, view) -> str:
        """
        Advance the state machine by one block.

        Returns the state the block belongs to: NOT_IN_BODY (discard),
        IN_BODY (filter and count) or DONE (stop scanning; block excluded).
        """
        if self.state == DONE:
            return DONE

        if self.state == NOT_IN_BODY:
            if not self._try_start(view):
                return NOT_IN_BODY
            self.state = IN_BODY

        if view.is_heading:
            normalized = normalize_heading(view.text)
            if is_body_end_heading(normalized, self.end_keywords):
                self.end_heading = normalized
                self.state = DONE
                return DONE

        return IN_BODY

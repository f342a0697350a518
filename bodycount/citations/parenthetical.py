"""
Parenthetical Citation Channel
==============================
Removes every non-nested (...) / full-width （...） span and records its
trimmed content as a citation, unconditionally.
"""

import re
from typing import List, Tuple

# Matches one innermost parenthetical span, ASCII or full-width
PAREN_PATTERN = re.compile(r"[(\uff08][^()\uff08\uff09]*[)\uff09]")


def strip_parenthetical_citations(text: str, gap: str = " ") -> Tuple[str, List[str]]:
    """
    Strip parenthetical spans.

    Returns:
        (cleaned_text, citations) where each removed span leaves `gap`
        and empty spans like "()" are removed but not recorded.
    """
    citations: List[str] = []

    def _replace(match: re.Match) -> str:
        content = match.group(0)[1:-1].strip()
        if content:
            citations.append(content)
        return gap

    cleaned = PAREN_PATTERN.sub(_replace, text or "")
    return cleaned, citations

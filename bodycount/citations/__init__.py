"""
Citation Extraction Module
==========================
Each channel strips one citation shape:
- parenthetical: (Smith, 2020), （王, 2019）
- bracket: [1], [3-5], [Jones et al.], [ibid]
"""

from .parenthetical import strip_parenthetical_citations, PAREN_PATTERN
from .bracket import strip_bracket_citations, should_strip_bracket
from .extractor import CitationTally, Extraction, extract_citations, tidy_text

__all__ = [
    'strip_parenthetical_citations', 'PAREN_PATTERN',
    'strip_bracket_citations', 'should_strip_bracket',
    'CitationTally', 'Extraction', 'extract_citations', 'tidy_text',
]

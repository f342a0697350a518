"""
Academic Body Counter
=====================
Extracts the body of an academic manuscript (introduction through the last
section before the references/appendix) and counts its words, excluding
in-text citations, tables, captions and front/back matter.

Architecture:
- blocks: Plain-text segmentation and heading predicates
- structure: Body boundary classifier and structural filter
- citations: Parenthetical and bracket citation channels, citation tally
- readers: DOCX / PDF / text collaborators

Usage:
    from bodycount import count_from_text
    result = count_from_text(manuscript)
    print(result.word_count, result.citation_count)
"""

from .types import (
    TextBlock,
    CitationEntry,
    BodyParseResult,
)
from .pipeline import (
    BodyCountPipeline,
    PipelineConfig,
    DebugBundle,
    count_from_text,
    count_from_blocks,
)
from .selection import CitationSelection
from .words import count_words

__all__ = [
    'TextBlock',
    'CitationEntry',
    'BodyParseResult',
    'BodyCountPipeline',
    'PipelineConfig',
    'DebugBundle',
    'count_from_text',
    'count_from_blocks',
    'CitationSelection',
    'count_words',
]

__version__ = '1.0.0'

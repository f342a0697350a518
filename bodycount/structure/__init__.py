"""
Document Structure Module
=========================
Body boundary classification and structural filtering.
"""

from .classifier import BodyClassifier, NOT_IN_BODY, IN_BODY, DONE
from .filter import (
    StructuralFilter,
    FilterStats,
    is_table_like,
    is_figure_or_table_label,
    is_likely_caption,
    KEEP, DROP_TABLE, DROP_CAPTION, DROP_LABEL,
)

__all__ = [
    'BodyClassifier', 'NOT_IN_BODY', 'IN_BODY', 'DONE',
    'StructuralFilter', 'FilterStats',
    'is_table_like', 'is_figure_or_table_label', 'is_likely_caption',
    'KEEP', 'DROP_TABLE', 'DROP_CAPTION', 'DROP_LABEL',
]

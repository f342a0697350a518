"""
Block Segmentation Module
=========================
Plain-text segmentation and heading predicates.
"""

from .headings import (
    BODY_START_KEYWORDS,
    BODY_END_KEYWORDS,
    normalize_heading,
    is_body_start_heading,
    is_body_end_heading,
    is_standalone_heading,
    is_title_case,
    is_all_caps,
    is_heading_style,
)
from .segmenter import BlockSegmenter, SegmenterConfig, split_into_blocks

__all__ = [
    'BODY_START_KEYWORDS', 'BODY_END_KEYWORDS',
    'normalize_heading', 'is_body_start_heading', 'is_body_end_heading',
    'is_standalone_heading', 'is_title_case', 'is_all_caps', 'is_heading_style',
    'BlockSegmenter', 'SegmenterConfig', 'split_into_blocks',
]

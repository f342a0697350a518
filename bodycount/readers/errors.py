"""
Reader Errors
"""

import os

# 50 MB
DEFAULT_MAX_BYTES = 50 * 1024 * 1024


class DocumentUnreadable(Exception):
    """The source document cannot be opened or lacks its mandatory content."""


def check_source_file(path, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    """
    Validate a file path before parsing.

    Returns:
        The path as a string

    Raises:
        DocumentUnreadable: missing file or file larger than max_bytes
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise DocumentUnreadable(f"File not found: {path}")
    size = os.path.getsize(path)
    if max_bytes and size > max_bytes:
        raise DocumentUnreadable(f"File too large: {size} bytes (limit {max_bytes})")
    return path

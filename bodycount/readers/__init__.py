"""
Document Readers
================
Collaborators that turn files into pipeline input:
- .docx -> typed TextBlock list (DocxReader)
- .pdf  -> flat text (PdfTextReader)
- .txt / .md -> flat text
"""

import os
from typing import List, Optional, Union

from ..types import TextBlock, BodyParseResult
from ..pipeline import PipelineConfig, count_from_text, count_from_blocks
from .errors import DocumentUnreadable, DEFAULT_MAX_BYTES, check_source_file
from .docx import DocxReader, read_docx_blocks
from .pdf import PdfTextReader, read_pdf_text, lines_to_text

TEXT_SUFFIXES = (".txt", ".md", ".text")
SUPPORTED_SUFFIXES = (".docx", ".pdf") + TEXT_SUFFIXES


def read_text_file(path, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    path = check_source_file(path, max_bytes)
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def read_document(path, max_bytes: int = DEFAULT_MAX_BYTES) -> Union[List[TextBlock], str]:
    """
    Read a document by suffix.

    Returns:
        List[TextBlock] for .docx, str for .pdf and text files

    Raises:
        DocumentUnreadable: unsupported suffix or unreadable file
    """
    suffix = os.path.splitext(os.fspath(path))[1].lower()
    if suffix == ".docx":
        return DocxReader(max_bytes).read(path)
    if suffix == ".pdf":
        return PdfTextReader(max_bytes).read_text(path)
    if suffix in TEXT_SUFFIXES:
        return read_text_file(path, max_bytes)
    raise DocumentUnreadable(f"Unsupported file type: {suffix or '(none)'}")


def count_document(
    path,
    config: Optional[PipelineConfig] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> BodyParseResult:
    """
    Read a document and run the matching pipeline.
    """
    content = read_document(path, max_bytes)
    if isinstance(content, str):
        return count_from_text(content, config)
    return count_from_blocks(content, config)


__all__ = [
    'DocumentUnreadable', 'DEFAULT_MAX_BYTES', 'SUPPORTED_SUFFIXES',
    'DocxReader', 'read_docx_blocks',
    'PdfTextReader', 'read_pdf_text', 'lines_to_text',
    'read_text_file', 'read_document', 'count_document',
]

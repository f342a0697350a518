"""
PDF Reader
==========
Extracts plain text from a PDF with pdfplumber, restoring paragraph breaks
from line spacing so the plain-text segmenter can find blocks.

A blank line is inserted where the distance between two consecutive line
tops exceeds `paragraph_gap_ratio` x the page's median line pitch.
"""

import statistics
from typing import Any, Dict, List

import pdfplumber

from .errors import DocumentUnreadable, DEFAULT_MAX_BYTES, check_source_file


def lines_to_text(lines: List[Dict[str, Any]], paragraph_gap_ratio: float = 1.5) -> str:
    """
    Join pdfplumber text lines, separating paragraphs with a blank line.

    Args:
        lines: dicts with at least 'text' and 'top' (as from page.extract_text_lines())
        paragraph_gap_ratio: pitch multiple that marks a paragraph break
    """
    lines = [ln for ln in lines if (ln.get("text") or "").strip()]
    if not lines:
        return ""

    pitches = [
        cur.get("top", 0) - prev.get("top", 0)
        for prev, cur in zip(lines, lines[1:])
        if cur.get("top", 0) > prev.get("top", 0)
    ]
    median_pitch = statistics.median(pitches) if pitches else 0.0

    out = [lines[0]["text"]]
    for prev, cur in zip(lines, lines[1:]):
        pitch = cur.get("top", 0) - prev.get("top", 0)
        if median_pitch > 0 and pitch > median_pitch * paragraph_gap_ratio:
            out.append("")
        out.append(cur["text"])
    return "\n".join(out)


class PdfTextReader:
    """
    Read a PDF into flat text for the plain-text pipeline.

    Usage:
        reader = PdfTextReader()
        text = reader.read_text("paper.pdf")
    """

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES, paragraph_gap_ratio: float = 1.5):
        self.max_bytes = max_bytes
        self.paragraph_gap_ratio = paragraph_gap_ratio

    def read_text(self, path) -> str:
        """
        Raises:
            DocumentUnreadable: missing, too large, or not openable by pdfplumber
        """
        path = check_source_file(path, self.max_bytes)
        pages_text: List[str] = []
        try:
            with pdfplumber.open(path) as pdf:
                for page in pdf.pages:
                    page_text = lines_to_text(page.extract_text_lines(), self.paragraph_gap_ratio)
                    if page_text:
                        pages_text.append(page_text)
        except Exception as e:
            raise DocumentUnreadable(f"Cannot read PDF: {e}") from e

        return "\n\n".join(pages_text)


def read_pdf_text(path, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    """
    Convenience function for PDF reading.
    """
    return PdfTextReader(max_bytes).read_text(path)

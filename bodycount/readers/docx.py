"""
DOCX Reader
===========
Turns a .docx package into a flat list of typed TextBlock.

- word/document.xml (mandatory): body paragraphs and tables, in order
- word/styles.xml (optional): styleId -> style name

Paragraph kinds:
- "caption": style name contains "caption"
- "heading": style name starts with "heading", or the paragraph has w:outlineLvl
- "paragraph": everything else
Tables become one "table" block carrying their cell text.
"""

import io
import zipfile
import zlib
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from ..types import (
    TextBlock, KIND_PARAGRAPH, KIND_HEADING, KIND_TABLE, KIND_CAPTION, collapse_whitespace
)
from ..blocks.headings import is_heading_style
from .errors import DocumentUnreadable, DEFAULT_MAX_BYTES, check_source_file

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
NS = {"w": W_NS}

DOCUMENT_PART = "word/document.xml"
STYLES_PART = "word/styles.xml"


def qn(tag: str) -> str:
    """'w:p' -> '{namespace}p'"""
    prefix, local = tag.split(":", 1)
    return f"{{{NS[prefix]}}}{local}"


_P = qn("w:p")
_TBL = qn("w:tbl")
_T = qn("w:t")
_TAB = qn("w:tab")
_BR = qn("w:br")
_CR = qn("w:cr")
_DEL_TEXT = qn("w:delText")
_PPR = qn("w:pPr")
_VAL = qn("w:val")


def build_style_map(styles_root: ET.Element) -> Dict[str, str]:
    """Map styleId -> human style name"""
    style_map: Dict[str, str] = {}
    for style in styles_root.iter(qn("w:style")):
        style_id = style.get(qn("w:styleId"))
        if not style_id:
            continue
        name_node = style.find("w:name", NS)
        name = name_node.get(_VAL) if name_node is not None else None
        if name:
            style_map[style_id] = name
    return style_map


def paragraph_text(paragraph: ET.Element) -> str:
    """
    Concatenate run text of one paragraph.
    Tabs become spaces, breaks become newlines, deleted text is dropped.
    """
    parts: List[str] = []

    def walk(node: ET.Element):
        tag = node.tag
        if tag == _T:
            parts.append(node.text or "")
            return
        if tag == _TAB:
            parts.append(" ")
            return
        if tag in (_BR, _CR):
            parts.append("\n")
            return
        if tag in (_DEL_TEXT, _PPR):
            return
        for child in node:
            walk(child)

    walk(paragraph)
    return collapse_whitespace("".join(parts))


def paragraph_style_id(paragraph: ET.Element) -> Optional[str]:
    ppr = paragraph.find("w:pPr", NS)
    if ppr is None:
        return None
    style = ppr.find("w:pStyle", NS)
    if style is None:
        return None
    return style.get(_VAL) or None


def paragraph_outline_level(paragraph: ET.Element) -> Optional[int]:
    ppr = paragraph.find("w:pPr", NS)
    if ppr is None:
        return None
    outline = ppr.find("w:outlineLvl", NS)
    if outline is None:
        return None
    try:
        return int(outline.get(_VAL, "0"))
    except ValueError:
        return 0


def table_text(table: ET.Element) -> str:
    """Rows on separate lines, cells joined by ' | '"""
    rows: List[str] = []
    for row in table.findall("w:tr", NS):
        cells = []
        for cell in row.findall("w:tc", NS):
            cell_text = " ".join(
                t for t in (paragraph_text(p) for p in cell.iter(_P)) if t
            )
            cells.append(cell_text)
        if any(cells):
            rows.append(" | ".join(cells))
    return "\n".join(rows)


class DocxReader:
    """
    Read .docx files into typed blocks.

    Usage:
        reader = DocxReader()
        blocks = reader.read("paper.docx")
    """

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES):
        self.max_bytes = max_bytes

    def _load(self, source) -> bytes:
        if isinstance(source, (bytes, bytearray)):
            if self.max_bytes and len(source) > self.max_bytes:
                raise DocumentUnreadable(f"Document too large: {len(source)} bytes (limit {self.max_bytes})")
            return bytes(source)
        path = check_source_file(source, self.max_bytes)
        with open(path, "rb") as f:
            return f.read()

    def read(self, source) -> List[TextBlock]:
        """
        Args:
            source: File path or raw .docx bytes

        Returns:
            Ordered list of TextBlock

        Raises:
            DocumentUnreadable: not a zip package, missing document.xml, malformed XML
        """
        data = self._load(source)

        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                names = set(archive.namelist())
                if DOCUMENT_PART not in names:
                    raise DocumentUnreadable(f"DOCX {DOCUMENT_PART} not found")
                document_xml = archive.read(DOCUMENT_PART)
                styles_xml = archive.read(STYLES_PART) if STYLES_PART in names else None
        except zipfile.BadZipFile as e:
            raise DocumentUnreadable(f"Not a DOCX package: {e}") from e
        except (zlib.error, NotImplementedError, RuntimeError, EOFError) as e:
            # Corrupt deflate stream, unsupported compression or encrypted entry
            raise DocumentUnreadable(f"Cannot decompress DOCX part: {e}") from e

        try:
            document_root = ET.fromstring(document_xml)
            style_map = build_style_map(ET.fromstring(styles_xml)) if styles_xml else {}
        except ET.ParseError as e:
            raise DocumentUnreadable(f"Malformed DOCX XML: {e}") from e

        body = document_root.find("w:body", NS)
        if body is None:
            return []

        blocks: List[TextBlock] = []
        for child in body:
            if child.tag == _P:
                blocks.append(self._paragraph_block(child, style_map))
            elif child.tag == _TBL:
                text = table_text(child)
                blocks.append(TextBlock(text=text, kind=KIND_TABLE, lines=tuple(text.split("\n"))))
        return blocks

    def _paragraph_block(self, paragraph: ET.Element, style_map: Dict[str, str]) -> TextBlock:
        text = paragraph_text(paragraph)
        style_id = paragraph_style_id(paragraph)
        style_name = style_map.get(style_id, style_id) if style_id else None
        outline_level = paragraph_outline_level(paragraph)
        normalized_style = (style_name or "").lower()

        if "caption" in normalized_style:
            kind = KIND_CAPTION
        elif is_heading_style(normalized_style) or outline_level is not None:
            kind = KIND_HEADING
        else:
            kind = KIND_PARAGRAPH

        return TextBlock(text=text, kind=kind, style_name=style_name, outline_level=outline_level)


def read_docx_blocks(source, max_bytes: int = DEFAULT_MAX_BYTES) -> List[TextBlock]:
    """
    Convenience function for DOCX reading.
    """
    return DocxReader(max_bytes).read(source)

import unittest
import sys
import os
import io
import tempfile
import zipfile
import zlib

# Add parent directory to path to allow importing modules from root
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from unittest.mock import MagicMock, patch

from bodycount import count_from_blocks
from bodycount.readers import (
    DocumentUnreadable,
    DocxReader,
    PdfTextReader,
    lines_to_text,
    read_document,
    count_document,
)

W = 'xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"'

DOCUMENT_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document {W}>
  <w:body>
    <w:p><w:r><w:t>A Study of Things</w:t></w:r></w:p>
    <w:p>
      <w:pPr><w:pStyle w:val="Heading1"/></w:pPr>
      <w:r><w:t>Introduction</w:t></w:r>
    </w:p>
    <w:p>
      <w:r><w:t xml:space="preserve">The study </w:t></w:r>
      <w:r><w:t>(Smith, 2020)</w:t><w:tab/><w:t>found</w:t></w:r>
      <w:del><w:r><w:delText>never</w:delText></w:r></w:del>
      <w:r><w:br/><w:t>results.</w:t></w:r>
    </w:p>
    <w:tbl>
      <w:tr>
        <w:tc><w:p><w:r><w:t>Group</w:t></w:r></w:p></w:tc>
        <w:tc><w:p><w:r><w:t>Score</w:t></w:r></w:p></w:tc>
      </w:tr>
      <w:tr>
        <w:tc><w:p><w:r><w:t>A</w:t></w:r></w:p></w:tc>
        <w:tc><w:p><w:r><w:t>12</w:t></w:r></w:p></w:tc>
      </w:tr>
    </w:tbl>
    <w:p>
      <w:pPr><w:pStyle w:val="Caption"/></w:pPr>
      <w:r><w:t>Table 1: Scores by group</w:t></w:r>
    </w:p>
    <w:p>
      <w:pPr><w:outlineLvl w:val="0"/></w:pPr>
      <w:r><w:t>References</w:t></w:r>
    </w:p>
    <w:p><w:r><w:t>Smith J 2020 A paper</w:t></w:r></w:p>
  </w:body>
</w:document>
"""

STYLES_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:styles {W}>
  <w:style w:type="paragraph" w:styleId="Heading1"><w:name w:val="heading 1"/></w:style>
  <w:style w:type="paragraph" w:styleId="Caption"><w:name w:val="caption"/></w:style>
</w:styles>
"""


def build_docx(document_xml=DOCUMENT_XML, styles_xml=STYLES_XML):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        if document_xml is not None:
            archive.writestr("word/document.xml", document_xml)
        if styles_xml is not None:
            archive.writestr("word/styles.xml", styles_xml)
    return buf.getvalue()


class TestDocxReader(unittest.TestCase):
    def test_blocks_and_kinds(self):
        blocks = DocxReader().read(build_docx())
        self.assertEqual([b.kind for b in blocks], [
            "paragraph", "heading", "paragraph", "table", "caption", "heading", "paragraph",
        ])
        self.assertEqual(blocks[1].style_name, "heading 1")
        self.assertEqual(blocks[5].outline_level, 0)

    def test_run_text(self):
        blocks = DocxReader().read(build_docx())
        self.assertEqual(blocks[2].text, "The study (Smith, 2020) found results.")
        self.assertNotIn("never", blocks[2].text)

    def test_table_text(self):
        table = DocxReader().read(build_docx())[3]
        self.assertEqual(table.text, "Group | Score\nA | 12")
        self.assertEqual(table.lines, ("Group | Score", "A | 12"))

    def test_style_id_used_without_styles_part(self):
        blocks = DocxReader().read(build_docx(styles_xml=None))
        self.assertEqual(blocks[1].style_name, "Heading1")
        self.assertEqual(blocks[1].kind, "heading")
        self.assertEqual(blocks[4].kind, "caption")

    def test_counts_through_pipeline(self):
        result = count_from_blocks(DocxReader().read(build_docx()))
        self.assertEqual(result.started_by, "heading")
        self.assertEqual(result.end_heading, "references")
        self.assertEqual(result.word_count, 5)
        self.assertEqual(result.table_count, 1)
        self.assertEqual([c.text for c in result.citations], ["Smith, 2020"])

    def test_missing_body(self):
        xml = f'<w:document {W}></w:document>'
        self.assertEqual(DocxReader().read(build_docx(document_xml=xml)), [])

    def test_not_a_zip(self):
        with self.assertRaises(DocumentUnreadable) as ctx:
            DocxReader().read(b"definitely not a zip file")
        self.assertIsInstance(ctx.exception.__cause__, zipfile.BadZipFile)

    def test_missing_document_part(self):
        with self.assertRaises(DocumentUnreadable):
            DocxReader().read(build_docx(document_xml=None))

    def test_malformed_xml(self):
        with self.assertRaises(DocumentUnreadable):
            DocxReader().read(build_docx(document_xml="<w:document"))

    def test_decompression_failures(self):
        for error in (zlib.error("invalid stored block lengths"), NotImplementedError("compression type 99")):
            with patch("zipfile.ZipFile.read", side_effect=error):
                with self.assertRaises(DocumentUnreadable) as ctx:
                    DocxReader().read(build_docx())
                self.assertIs(ctx.exception.__cause__, error)

    def test_size_limit(self):
        with self.assertRaises(DocumentUnreadable):
            DocxReader(max_bytes=10).read(build_docx())


class TestPdfReader(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.pdf_path = os.path.join(self.tmp.name, "paper.pdf")
        with open(self.pdf_path, "wb") as f:
            f.write(b"%PDF-1.4 placeholder")

    def tearDown(self):
        self.tmp.cleanup()

    def test_lines_to_text_paragraph_gaps(self):
        lines = [
            {"text": "Introduction", "top": 100},
            {"text": "first line", "top": 112},
            {"text": "second line", "top": 124},
            {"text": "new paragraph", "top": 150},
        ]
        self.assertEqual(lines_to_text(lines), "Introduction\nfirst line\nsecond line\n\nnew paragraph")

    def test_lines_to_text_empty(self):
        self.assertEqual(lines_to_text([]), "")
        self.assertEqual(lines_to_text([{"text": "  ", "top": 0}]), "")
        self.assertEqual(lines_to_text([{"text": "only", "top": 0}]), "only")

    @patch("pdfplumber.open")
    def test_read_text_joins_pages(self, mock_open):
        page1 = MagicMock()
        page1.extract_text_lines.return_value = [
            {"text": "Introduction", "top": 10},
            {"text": "body one", "top": 22},
        ]
        page2 = MagicMock()
        page2.extract_text_lines.return_value = [{"text": "body two", "top": 10}]
        empty_page = MagicMock()
        empty_page.extract_text_lines.return_value = []

        mock_pdf = MagicMock()
        mock_pdf.pages = [page1, empty_page, page2]
        mock_open.return_value.__enter__.return_value = mock_pdf

        text = PdfTextReader().read_text(self.pdf_path)
        self.assertEqual(text, "Introduction\nbody one\n\nbody two")
        mock_open.assert_called_once_with(self.pdf_path)

    @patch("pdfplumber.open")
    def test_open_failure_is_wrapped(self, mock_open):
        mock_open.side_effect = ValueError("broken xref")
        with self.assertRaises(DocumentUnreadable) as ctx:
            PdfTextReader().read_text(self.pdf_path)
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_missing_file(self):
        with self.assertRaises(DocumentUnreadable):
            PdfTextReader().read_text(os.path.join(self.tmp.name, "nope.pdf"))


class TestReadDocument(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, name, data):
        path = os.path.join(self.tmp.name, name)
        mode = "wb" if isinstance(data, bytes) else "w"
        kwargs = {} if isinstance(data, bytes) else {"encoding": "utf-8"}
        with open(path, mode, **kwargs) as f:
            f.write(data)
        return path

    def test_docx_path_returns_blocks(self):
        path = self._write("paper.docx", build_docx())
        content = read_document(path)
        self.assertIsInstance(content, list)
        self.assertEqual(count_document(path).word_count, 5)

    def test_text_file(self):
        path = self._write("paper.txt", "Introduction\n\nSome body text here.\n")
        self.assertEqual(read_document(path), "Introduction\n\nSome body text here.\n")
        self.assertEqual(count_document(path).word_count, 5)

    def test_unsupported_suffix(self):
        path = self._write("paper.odt", b"data")
        with self.assertRaises(DocumentUnreadable):
            read_document(path)

    def test_missing_file(self):
        with self.assertRaises(DocumentUnreadable):
            read_document(os.path.join(self.tmp.name, "missing.docx"))


if __name__ == '__main__':
    unittest.main()

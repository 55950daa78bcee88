"""
Tests for local text extraction.
"""

import io

import pytest
from docx import Document

from rfp_responder.extractors import (
    DOCX_TYPE,
    UnsupportedFileType,
    detect_kind,
    extract_text,
)


def _docx_bytes(paragraphs):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


class TestDetectKind:
    """Tests for detect_kind."""

    def test_by_content_type(self):
        assert detect_kind("upload", "application/pdf") == "pdf"
        assert detect_kind("upload", DOCX_TYPE) == "docx"

    def test_by_extension(self):
        assert detect_kind("RFP.PDF") == "pdf"
        assert detect_kind("rfp.docx") == "docx"
        assert detect_kind("rfp.txt", "text/plain") == "text"
        assert detect_kind("") == "text"

    def test_legacy_doc_rejected(self):
        with pytest.raises(UnsupportedFileType):
            detect_kind("rfp.doc")


class TestExtractText:
    """Tests for extract_text."""

    def test_plain_text(self):
        assert extract_text("REQUEST NO. 1 Leases".encode(), "rfp.txt") == "REQUEST NO. 1 Leases"

    def test_invalid_utf8_replaced(self):
        assert "�" in extract_text(b"caf\xe9", "rfp.txt")

    def test_docx_paragraphs_joined_by_newline(self):
        content = _docx_bytes(["REQUEST NO. 1", "Produce leases."])

        assert extract_text(content, "rfp.docx") == "REQUEST NO. 1\nProduce leases."


def _pdf_bytes(lines):
    from reportlab.lib.pagesizes import A4
    from reportlab.pdfgen import canvas

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    y = A4[1] - 72
    c.setFont("Helvetica", 12)
    for line in lines:
        c.drawString(72, y, line)
        y -= 18
    c.showPage()
    c.save()
    return buf.getvalue()


class TestExtractPdf:
    """Tests for the pdfplumber path."""

    def test_pdf_text_extracted(self):
        content = _pdf_bytes(["REQUEST NO. 1", "Produce bank statements."])

        text = extract_text(content, "rfp.pdf")

        assert "REQUEST NO. 1" in text
        assert "Produce bank statements." in text

    def test_pdf_text_segments_into_requests(self):
        from rfp_responder.segmenter import extract_requests

        content = _pdf_bytes(["REQUEST NO. 1", "Produce bank statements.", "REQUEST NO. 2", "Produce tax returns."])

        requests = extract_requests(extract_text(content, "upload", "application/pdf"))

        assert [(r.id, r.text) for r in requests] == [
            (1, "Produce bank statements."),
            (2, "Produce tax returns."),
        ]

"""Local text extraction from uploaded PDF, DOCX and plain-text files."""

import io
from pathlib import Path

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class UnsupportedFileType(ValueError):
    pass


def detect_kind(filename: str, content_type: str = "") -> str:
    """Classify an upload as "pdf", "docx" or "text" from its type or extension."""
    suffix = Path(filename or "").suffix.lower()
    if content_type == PDF_TYPE or suffix == ".pdf":
        return "pdf"
    if content_type == DOCX_TYPE or suffix == ".docx":
        return "docx"
    if suffix == ".doc":
        raise UnsupportedFileType("Legacy .doc files are not supported; save as .docx")
    return "text"


def extract_pdf_text(content: bytes) -> str:
    import pdfplumber

    text_parts = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text() or ""
            if page_text.strip():
                text_parts.append(page_text)
    return "\n\n".join(text_parts)


def extract_docx_text(content: bytes) -> str:
    from docx import Document

    doc = Document(io.BytesIO(content))
    return "\n".join(p.text for p in doc.paragraphs)


def extract_plain_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def extract_text(content: bytes, filename: str, content_type: str = "") -> str:
    """Extract raw text from an uploaded file without any remote service."""
    kind = detect_kind(filename, content_type)
    if kind == "pdf":
        return extract_pdf_text(content)
    if kind == "docx":
        return extract_docx_text(content)
    return extract_plain_text(content)

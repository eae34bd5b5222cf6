"""
Uploaded file -> RawDocument.

DOCX paragraphs and PDF page text are read deterministically; plain text is
decoded as UTF-8. OCR is not attempted, so scanned PDFs yield empty text.
"""

import logging
from io import BytesIO
from typing import List, Optional

import pdfplumber
from docx import Document

from resume_analyzer.core.exceptions import UnsupportedDocumentError
from resume_analyzer.core.schemas import RawDocument

logger = logging.getLogger(__name__)


DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME = "application/pdf"
TEXT_MIMES = {"text/plain", "text/markdown"}


def extract_docx_text(docx_bytes: bytes) -> str:
    """Non-empty paragraph text of a DOCX, one paragraph per line."""
    doc = Document(BytesIO(docx_bytes))
    lines: List[str] = []
    for p in doc.paragraphs:
        t = (p.text or "").strip()
        if t:
            lines.append(t)
    return "\n".join(lines)


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Text of every page, pages separated by a blank line."""
    pages: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            text = page.extract_text() or ""
            if text.strip():
                pages.append(text)
    return "\n\n".join(pages)


def detect_kind(file_name: str, content_type: Optional[str]) -> Optional[str]:
    """
    Examples:
        >>> detect_kind("resume.PDF", None)
        'pdf'
        >>> detect_kind("upload", "text/plain")
        'text'
        >>> detect_kind("photo.png", "image/png") is None
        True
    """
    name = (file_name or "").lower()
    content_type = (content_type or "").split(";")[0].strip().lower()
    if name.endswith(".docx") or content_type == DOCX_MIME:
        return "docx"
    if name.endswith(".pdf") or content_type == PDF_MIME:
        return "pdf"
    if name.endswith((".txt", ".md")) or content_type in TEXT_MIMES:
        return "text"
    return None


def load_document(raw: bytes, file_name: str, content_type: Optional[str] = None) -> RawDocument:
    """
    Read an uploaded résumé into plain text.

    Raises:
        UnsupportedDocumentError: for anything other than DOCX, PDF or text
    """
    kind = detect_kind(file_name, content_type)
    if kind is None:
        raise UnsupportedDocumentError(
            f"Unsupported content type: {content_type or 'unknown'}",
            file_name=file_name,
            content_type=content_type,
        )

    if kind == "docx":
        text = extract_docx_text(raw)
    elif kind == "pdf":
        text = extract_pdf_text(raw)
    else:
        text = raw.decode("utf-8", errors="replace")

    logger.info("loaded %s document %s (%d bytes, %d chars)", kind, file_name, len(raw), len(text))
    return RawDocument(
        file_name=file_name,
        file_size_bytes=len(raw),
        mime_type=content_type or "",
        text=text,
    )

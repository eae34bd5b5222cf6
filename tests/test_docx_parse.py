from io import BytesIO

import pytest
from docx import Document
from fastapi.testclient import TestClient

from resume_analyzer.api.routes.analyze import get_pipeline
from resume_analyzer.core.document_loader import DOCX_MIME, detect_kind, extract_docx_text, load_document
from resume_analyzer.core.exceptions import UnsupportedDocumentError
from resume_analyzer.core.pipeline import ResumePipeline
from resume_analyzer.main import app

app.dependency_overrides[get_pipeline] = lambda: ResumePipeline()
client = TestClient(app)


def _docx_bytes(*paragraphs):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_extract_docx_text_skips_empty_paragraphs():
    raw = _docx_bytes("Jane Doe", "", "jane.doe@example.com")
    assert extract_docx_text(raw) == "Jane Doe\njane.doe@example.com"


def test_detect_kind():
    assert detect_kind("resume.docx", None) == "docx"
    assert detect_kind("upload", DOCX_MIME) == "docx"
    assert detect_kind("resume.PDF", None) == "pdf"
    assert detect_kind("notes.md", None) == "text"
    assert detect_kind("upload", "text/plain; charset=utf-8") == "text"
    assert detect_kind("photo.png", "image/png") is None


def test_load_text_document():
    document = load_document("Jane Doe\nnaïve café".encode("utf-8"), "resume.txt", "text/plain")
    assert document.text == "Jane Doe\nnaïve café"
    assert document.file_size_bytes == len("Jane Doe\nnaïve café".encode("utf-8"))
    assert document.mime_type == "text/plain"


def test_load_text_document_replaces_invalid_bytes():
    document = load_document(b"Jane \xff Doe", "resume.txt")
    assert document.text == "Jane \ufffd Doe"


def test_load_unsupported_document():
    with pytest.raises(UnsupportedDocumentError) as excinfo:
        load_document(b"GIF89a", "photo.gif", "image/gif")
    assert excinfo.value.details["content_type"] == "image/gif"


def test_extract_docx_upload():
    raw = _docx_bytes(
        "Jane Doe",
        "jane.doe@example.com",
        "(555) 123-4567",
        "Skills: Python, FastAPI",
    )
    files = {"file": ("resume.docx", raw, DOCX_MIME)}
    r = client.post("/extract", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["profile"]["name"] == "Jane Doe"
    assert data["profile"]["email"] == "jane.doe@example.com"
    assert {"Python", "FastAPI"} <= set(data["profile"]["skills"]["technical"])
    assert data["fileName"] == "resume.docx"


def test_extract_empty_docx_has_no_text():
    files = {"file": ("resume.docx", _docx_bytes(), DOCX_MIME)}
    r = client.post("/extract", files=files)
    assert r.status_code == 422

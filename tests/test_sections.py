"""Tests for section heading detection and section segmentation."""

from resume_analyzer.core.sections import (
    detect_heading,
    find_section,
    identify_sections,
    section_body,
    section_lines,
)


RESUME = """Jane Doe
jane@example.com

PROFESSIONAL SUMMARY
Backend engineer with six years of experience.

Work Experience:
Senior Engineer at Acme Corp (2019-Present)
- Built APIs

EDUCATION
University of Lahore

Skills: Python, FastAPI, SQL
"""


def test_detect_heading_synonyms():
    assert detect_heading("PROFESSIONAL EXPERIENCE") == "experience"
    assert detect_heading("Work History:") == "experience"
    assert detect_heading("Academic Background") == "education"
    assert detect_heading("Core Competencies") == "skills"
    assert detect_heading("Objective") == "summary"


def test_detect_heading_inline_content():
    assert detect_heading("Skills: Python, FastAPI") == "skills"


def test_detect_heading_rejects_content_lines():
    assert detect_heading("Software Engineer at TechCorp") is None
    assert detect_heading("- Experience with Docker") is None
    assert detect_heading("Email: jane@example.com") is None
    assert detect_heading("") is None


def test_terminator_headings_are_detected():
    assert detect_heading("References") == "references"
    assert detect_heading("Honors & Awards") == "awards"


def test_find_section_includes_heading():
    found = find_section("EXPERIENCE\nDev at X\nEDUCATION\nMIT", "experience")
    assert found == "EXPERIENCE\nDev at X"


def test_find_section_missing_returns_none():
    assert find_section("Jane Doe\njane@example.com", "education") is None


def test_blank_lines_do_not_end_a_section():
    body = section_body(RESUME, "experience")
    assert body == "Senior Engineer at Acme Corp (2019-Present)\n- Built APIs"


def test_inline_heading_content_becomes_first_body_line():
    assert section_lines(RESUME, "skills") == ["Python, FastAPI, SQL"]


def test_section_ends_at_terminator_heading():
    text = "EXPERIENCE\nDev at X (2020-2021)\nREFERENCES\nAvailable on request"
    assert section_lines(text, "experience") == ["Dev at X (2020-2021)"]


def test_identify_sections_in_document_order():
    assert identify_sections(RESUME) == ["summary", "experience", "education", "skills"]

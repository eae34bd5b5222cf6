"""Tests for summary, projects, certifications, languages and interests."""

from resume_analyzer.core.section_parsers import (
    extract_certifications,
    extract_interests,
    extract_languages,
    extract_projects,
    extract_summary,
    parse_certification,
)


def test_summary_joins_lines():
    text = "SUMMARY\nBackend engineer with 6 years\nof Python.\nSKILLS\nPython"
    assert extract_summary(text) == "Backend engineer with 6 years of Python."


def test_summary_from_objective_heading():
    text = "Jane Roe\nCareer Objective:\nTo build reliable systems."
    assert extract_summary(text) == "To build reliable systems."


def test_summary_absent_is_none():
    assert extract_summary("Jane Roe\njane@example.com") is None


def test_projects_name_dash_description():
    text = "PROJECTS\nChat App - Real-time messaging\nTech Stack: React, Socket.io"
    projects = extract_projects(text)

    assert len(projects) == 1
    assert projects[0].name == "Chat App"
    assert projects[0].description == "Real-time messaging"
    assert projects[0].technologies == ["React", "Socket.io"]


def test_projects_title_with_technologies_and_bullets():
    text = """PROJECTS
Portfolio Site (React, Node.js)
- Personal site with a blog and contact form.
Expense Tracker
- Tracks monthly spending with charts.
"""
    projects = extract_projects(text)

    assert [p.name for p in projects] == ["Portfolio Site", "Expense Tracker"]
    assert projects[0].technologies == ["React", "Node.js"]
    assert projects[0].description == "Personal site with a blog and contact form."
    assert projects[1].description == "Tracks monthly spending with charts."


def test_projects_absent():
    assert extract_projects("Jane Roe") == []


def test_certification_pipe_format():
    cert = parse_certification("AWS Certified Developer | Amazon | 2022")
    assert cert.name == "AWS Certified Developer"
    assert cert.issuer == "Amazon"
    assert cert.date == "2022"


def test_certification_trailing_year_and_issuer():
    cert = parse_certification("Professional Scrum Master by Scrum.org (2021)")
    assert cert.name == "Professional Scrum Master"
    assert cert.issuer == "Scrum.org"
    assert cert.date == "2021"


def test_certification_name_only():
    cert = parse_certification("- Google Data Analytics Certificate")
    assert cert.name == "Google Data Analytics Certificate"
    assert cert.issuer is None
    assert cert.date is None


def test_extract_certifications_section():
    text = "CERTIFICATIONS\nCKA - CNCF - 2023\nOracle Certified Associate, Oracle"
    certs = extract_certifications(text)

    assert [c.name for c in certs] == ["CKA", "Oracle Certified Associate"]
    assert certs[0].issuer == "CNCF"
    assert certs[0].date == "2023"
    assert certs[1].issuer == "Oracle"


def test_languages_with_proficiency():
    entries = extract_languages("LANGUAGES\nEnglish (Fluent), Urdu (Native)")
    assert [(e.language, e.proficiency) for e in entries] == [("English", "Fluent"), ("Urdu", "Native")]


def test_languages_colon_and_plain_list():
    entries = extract_languages("Languages\nArabic: Conversational\nFrench, German")
    assert [(e.language, e.proficiency) for e in entries] == [
        ("Arabic", "Conversational"),
        ("French", None),
        ("German", None),
    ]


def test_interests_split_and_deduplicated():
    text = "INTERESTS\nChess, hiking and photography\n• chess"
    assert extract_interests(text) == ["Chess", "Hiking", "Photography"]


def test_interests_absent():
    assert extract_interests("Jane Roe") == []

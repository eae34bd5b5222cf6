"""
Section segmentation for résumé text.

A section runs from its heading line up to the next line that is a heading of
a different known section. Blank lines never end a section: PDF extraction
inserts and drops them too unpredictably to be trusted.
"""

import re
from typing import Dict, List, Optional, Tuple

from resume_analyzer.core.text_normalization import BULLET_RE, clean_lines


# ===== SECTION HEADINGS =====
# Lower-cased, single-spaced synonyms for every known section

SECTION_HEADINGS: Dict[str, Tuple[str, ...]] = {
    "summary": (
        "summary",
        "professional summary",
        "career summary",
        "executive summary",
        "profile",
        "professional profile",
        "about me",
        "about",
        "objective",
        "career objective",
        "overview",
    ),
    "experience": (
        "experience",
        "work experience",
        "professional experience",
        "employment",
        "employment history",
        "work history",
        "career history",
        "career experience",
        "relevant experience",
        "internships",
        "internship",
    ),
    "education": (
        "education",
        "academic background",
        "education & training",
        "education and training",
        "academics",
        "academic qualifications",
        "qualifications",
        "educational background",
        "schooling",
    ),
    "skills": (
        "skills",
        "technical skills",
        "core skills",
        "key skills",
        "skills & abilities",
        "skills and abilities",
        "core competencies",
        "competencies",
        "technical proficiencies",
        "proficiencies",
        "areas of expertise",
        "expertise",
        "tools & technologies",
        "tools and technologies",
        "soft skills",
    ),
    "projects": (
        "projects",
        "personal projects",
        "academic projects",
        "key projects",
        "selected projects",
        "project experience",
    ),
    "certifications": (
        "certifications",
        "certification",
        "certificates",
        "licenses & certifications",
        "licenses and certifications",
        "licenses",
        "courses",
        "training",
    ),
    "languages": (
        "languages",
        "language",
        "spoken languages",
        "language proficiency",
        "language skills",
    ),
    "interests": (
        "interests",
        "hobbies",
        "hobbies & interests",
        "hobbies and interests",
        "interests & hobbies",
        "activities",
        "extracurricular activities",
    ),
}

# Headings that only end other sections; nothing is extracted from them
TERMINATOR_HEADINGS: Dict[str, Tuple[str, ...]] = {
    "awards": ("awards", "honors", "honors & awards", "awards & honors", "achievements", "accomplishments"),
    "references": ("references", "referees"),
    "publications": ("publications",),
    "volunteer": ("volunteer", "volunteering", "volunteer experience"),
}

_HEADING_LOOKUP: Dict[str, str] = {
    synonym: section
    for headings in (SECTION_HEADINGS, TERMINATOR_HEADINGS)
    for section, synonyms in headings.items()
    for synonym in synonyms
}

INLINE_HEADING_RE = re.compile(r"^([A-Za-z][A-Za-z &/]{1,40}?)\s*:\s*(.*)$")


def _normalize_heading(text: str) -> str:
    t = text.strip().rstrip(":").strip().lower()
    return re.sub(r"\s+", " ", t)


def detect_heading(line: str) -> Optional[str]:
    """
    Return the section key a heading line opens, or None.

    Accepts a bare heading with an optional trailing colon ("EXPERIENCE",
    "Work History:") and a heading with inline content after the colon
    ("Skills: Python, SQL"). Bullet lines are never headings.

    Examples:
        >>> detect_heading("PROFESSIONAL EXPERIENCE")
        'experience'
        >>> detect_heading("Skills: Python, FastAPI")
        'skills'
        >>> detect_heading("Software Engineer at TechCorp") is None
        True
    """
    if not line or not line.strip():
        return None
    if BULLET_RE.match(line) and not line.lstrip().startswith("+"):
        return None

    key = _normalize_heading(line)
    if key in _HEADING_LOOKUP:
        return _HEADING_LOOKUP[key]

    m = INLINE_HEADING_RE.match(line.strip())
    if m:
        label = _normalize_heading(m.group(1))
        return _HEADING_LOOKUP.get(label)
    return None


def is_section_heading(line: str) -> bool:
    return detect_heading(line) is not None


def inline_content(line: str) -> str:
    """Text after the colon of a heading line, '' for a bare heading."""
    if _normalize_heading(line) in _HEADING_LOOKUP:
        return ""
    m = INLINE_HEADING_RE.match(line.strip())
    return m.group(2).strip() if m else ""


def _section_span(lines: List[str], section: str) -> Optional[Tuple[int, int]]:
    start = None
    for idx, line in enumerate(lines):
        if detect_heading(line) == section:
            start = idx
            break
    if start is None:
        return None

    end = len(lines)
    for idx in range(start + 1, len(lines)):
        found = detect_heading(lines[idx])
        if found is not None and found != section:
            end = idx
            break
    return start, end


def find_section(text: str, section: str) -> Optional[str]:
    """
    Return the section text, heading line included, or None when no heading
    for `section` exists.

    Examples:
        >>> find_section("EXPERIENCE\\nDev at X\\nEDUCATION\\nMIT", "experience")
        'EXPERIENCE\\nDev at X'
    """
    lines = clean_lines(text)
    span = _section_span(lines, section)
    if span is None:
        return None
    start, end = span
    return "\n".join(lines[start:end])


def section_lines(text: str, section: str) -> Optional[List[str]]:
    """
    Body lines of a section. Inline content of the heading line
    ("Skills: Python, SQL") becomes the first body line.
    """
    lines = clean_lines(text)
    span = _section_span(lines, section)
    if span is None:
        return None
    start, end = span
    body = lines[start + 1:end]
    first = inline_content(lines[start])
    return ([first] if first else []) + body


def section_body(text: str, section: str) -> Optional[str]:
    """Same as find_section() minus the heading line itself."""
    body = section_lines(text, section)
    if body is None:
        return None
    return "\n".join(body)


def identify_sections(text: str) -> List[str]:
    """Known sections that have a heading in the text, in document order."""
    found: List[str] = []
    for line in clean_lines(text):
        section = detect_heading(line)
        if section in SECTION_HEADINGS and section not in found:
            found.append(section)
    return found

"""
Education parsing module for detecting and extracting education entries from resumes.

Provides deterministic, rule-based classification of education lines (school,
degree, dates, GPA) and a small state machine that groups them into entries.
Parsing is scoped to the Education section; without one nothing is returned.
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Tuple

from resume_analyzer.core.schemas import EducationEntry
from resume_analyzer.core.sections import section_lines
from resume_analyzer.core.text_normalization import strip_bullet

logger = logging.getLogger(__name__)


# ===== INSTITUTION KEYWORDS =====

SCHOOL_RE = re.compile(
    r"\b(?:university|universit[àé]|college|institute|school|academy|polytechnic|campus)\b",
    re.IGNORECASE,
)

# ===== DEGREE KEYWORDS (Strong Signal) =====
# Spelled-out degrees are matched case-insensitively; abbreviations only in
# their usual casing so "ms" inside prose or "BA" in "BAC" never match

DEGREE_WORDS_RE = re.compile(
    r"\b(?:bachelor'?s?|master'?s?|associate(?:'s)?\s+(?:of|degree|in)|doctorate|doctoral|"
    r"doctor\s+of|ph\.?\s?d|mphil|diploma|postgraduate|graduate\s+degree|"
    r"matric(?:ulation)?|intermediate|a[\s-]levels?|o[\s-]levels?|high\s+school\s+diploma|ged)\b",
    re.IGNORECASE,
)
DEGREE_ABBREV_RE = re.compile(
    r"(?<![A-Za-z])(?:B\.?\s?S\.?c?|B\.?A\.?|B\.?E\.?|B\.?Eng|B\.?Tech|BBA|BCA|BCS|"
    r"M\.?\s?S\.?c?|M\.?A\.?|M\.?E\.?|M\.?Eng|M\.?Tech|M\.?B\.?A\.?|MCA|MCS|"
    r"Ph\.?D\.?|M\.?D\.?|J\.?D\.?|LLB|LLM|BDS|MBBS|HSC|SSC|FSc|FSC)(?![A-Za-z])"
)

MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?|"
    r"Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)
YEAR = r"(?:19|20)\d{2}"
EDU_DATE_RANGE_RE = re.compile(
    rf"(?:{MONTH}\s+)?{YEAR}\s*(?:-|–|—|to)\s*(?:(?:{MONTH}\s+)?{YEAR}|Present|Current|Now)",
    re.IGNORECASE,
)
EDU_SINGLE_DATE_RE = re.compile(rf"(?:(?:Expected|Graduated|Class of)\s+)?(?:{MONTH}\s+)?\b{YEAR}\b", re.IGNORECASE)

GPA_RE = re.compile(
    r"\b(?:c?gpa|grade|percentage|marks)\s*[:\-]?\s*"
    r"(\d+(?:\.\d+)?\s*(?:/\s*\d+(?:\.\d+)?|out\s+of\s+\d+(?:\.\d+)?)?\s*%?)",
    re.IGNORECASE,
)
GPA_SUFFIX_RE = re.compile(r"\b(\d\.\d{1,2}\s*(?:/\s*\d(?:\.\d{1,2})?)?)\s*c?gpa\b", re.IGNORECASE)

PRIMARY_SPLIT_RE = re.compile(r"\s*\|\s*|\s+[-–—]\s+|\s+at\s+|\s+from\s+", re.IGNORECASE)


class EducationState(str, Enum):
    SEEKING_ENTRY_START = "seeking_entry_start"
    ACCUMULATING_ENTRY = "accumulating_entry"


def has_degree_keyword(text: str) -> bool:
    """
    Check if text contains degree keywords.
    This is a STRONG signal that a line describes education.

    Examples:
        >>> has_degree_keyword("Bachelor of Science in Computer Science")
        True
        >>> has_degree_keyword("MS in Data Science")
        True
        >>> has_degree_keyword("Stanford University")
        False
    """
    if not text:
        return False
    return bool(DEGREE_WORDS_RE.search(text) or DEGREE_ABBREV_RE.search(text))


def is_institution_keyword(text: str) -> bool:
    return bool(text and SCHOOL_RE.search(text))


def extract_dates(text: str) -> Optional[str]:
    """
    Date range or single (graduation) year in the text.

    Examples:
        >>> extract_dates("University of Lahore, 2014 - 2018")
        '2014 - 2018'
        >>> extract_dates("Expected May 2025")
        'Expected May 2025'
    """
    if not text:
        return None
    m = EDU_DATE_RANGE_RE.search(text)
    if m:
        return m.group(0).strip()
    m = EDU_SINGLE_DATE_RE.search(text)
    return m.group(0).strip() if m else None


def extract_gpa(text: str) -> Optional[str]:
    """
    Examples:
        >>> extract_gpa("GPA: 3.8/4.0")
        '3.8/4.0'
        >>> extract_gpa("3.45 CGPA")
        '3.45'
    """
    if not text:
        return None
    m = GPA_RE.search(text) or GPA_SUFFIX_RE.search(text)
    return re.sub(r"\s+", "", m.group(1)) if m else None


def _strip_details(text: str) -> str:
    """Remove dates and GPA from a fragment, keeping the name part."""
    t = EDU_DATE_RANGE_RE.sub(" ", text)
    t = EDU_SINGLE_DATE_RE.sub(" ", t)
    t = GPA_RE.sub(" ", t)
    t = GPA_SUFFIX_RE.sub(" ", t)
    t = re.sub(r"\(\s*\)", " ", t)
    return re.sub(r"\s+", " ", t).strip(" ,;|-–—()")


def split_degree_and_school(line: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a line carrying both a degree and a school.

    Separators tried: "|", " - ", " at ", " from ", then ",".

    Examples:
        >>> split_degree_and_school("BSc Computer Science | University of Lahore | 2018")
        ('BSc Computer Science', 'University of Lahore')
        >>> split_degree_and_school("Master of Science, Stanford University")
        ('Master of Science', 'Stanford University')
    """
    parts = [p for p in PRIMARY_SPLIT_RE.split(line) if p and p.strip()]
    if len(parts) < 2:
        parts = [p for p in re.split(r"\s*,\s*", line) if p and p.strip()]

    degree = school = None
    for part in parts:
        name = _strip_details(part)
        if not name:
            continue
        if school is None and is_institution_keyword(name):
            school = name
        elif degree is None and has_degree_keyword(name):
            degree = name
    return degree, school


class _EducationBuilder:
    """Mutable accumulator for the entry being built."""

    def __init__(self):
        self.entries: List[EducationEntry] = []
        self.current: Optional[EducationEntry] = None

    @property
    def state(self) -> EducationState:
        return EducationState.SEEKING_ENTRY_START if self.current is None else EducationState.ACCUMULATING_ENTRY

    def open(self) -> EducationEntry:
        if self.current is None:
            self.current = EducationEntry()
        return self.current

    def flush(self):
        if self.current is not None and (self.current.institution or self.current.degree):
            self.entries.append(self.current)
        self.current = None

    def start_new(self) -> EducationEntry:
        self.flush()
        return self.open()


def parse_education_lines(lines: List[str]) -> List[EducationEntry]:
    """
    Group education lines into entries.

    - a line with both degree and school opens a new entry carrying both
    - a school line opens a new entry unless the open one is still missing
      its school
    - a degree line attaches to the open entry, or opens a new one when the
      open entry already has a degree
    - dates and GPA attach to the open entry
    """
    builder = _EducationBuilder()

    for raw in lines:
        line = strip_bullet(raw)
        if not line:
            continue

        has_school = is_institution_keyword(line)
        has_degree = has_degree_keyword(line)
        dates = extract_dates(line)
        gpa = extract_gpa(line)

        if has_school and has_degree:
            degree, school = split_degree_and_school(line)
            entry = builder.start_new()
            entry.degree = degree
            entry.institution = school or _strip_details(line)
        elif has_school:
            current = builder.current
            if current is None or current.institution:
                entry = builder.start_new()
            else:
                entry = current
            entry.institution = _strip_details(line) or line
        elif has_degree:
            current = builder.current
            if current is None or current.degree:
                entry = builder.start_new()
            else:
                entry = current
            entry.degree = _strip_details(line) or line
        elif dates or gpa:
            entry = builder.open()
        else:
            continue

        if dates and not entry.dates:
            entry.dates = dates
        if gpa and not entry.gpa:
            entry.gpa = gpa
        logger.debug("education line %r -> state %s", line, builder.state.value)

    builder.flush()
    return builder.entries


def extract_education(text: str) -> List[EducationEntry]:
    """
    Extract education entries from the Education section.

    Examples:
        >>> entries = extract_education("EDUCATION\\nUniversity of Lahore\\nBS Computer Science\\n2014 - 2018")
        >>> entries[0].institution, entries[0].degree, entries[0].dates
        ('University of Lahore', 'BS Computer Science', '2014 - 2018')
    """
    body = section_lines(text or "", "education")
    if not body:
        return []
    return parse_education_lines(body)

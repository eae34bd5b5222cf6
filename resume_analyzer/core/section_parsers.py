"""
Parsers for the smaller résumé sections: summary, projects, certifications,
languages and interests.

Each is scoped to its own section and returns None/empty when the section is
absent.
"""

import re
from typing import List, Optional, Tuple

from resume_analyzer.core.schemas import CertificationEntry, LanguageEntry, ProjectEntry
from resume_analyzer.core.sections import section_lines
from resume_analyzer.core.text_normalization import is_bullet, strip_bullet


def extract_summary(text: str) -> Optional[str]:
    """
    Join the Summary/Profile/Objective section into one paragraph.

    Examples:
        >>> extract_summary("SUMMARY\\nBackend engineer with 6 years\\nof Python.\\nSKILLS\\nPython")
        'Backend engineer with 6 years of Python.'
    """
    body = section_lines(text or "", "summary")
    if not body:
        return None
    summary = " ".join(strip_bullet(line) for line in body).strip()
    return summary or None


# ============================================================================
# Projects
# ============================================================================

TECH_LABEL_RE = re.compile(r"^(?:technologies|tech\s*stack|built\s+with|tools|stack)\s*[:\-]\s*(.+)$", re.IGNORECASE)
PROJECT_SPLIT_RE = re.compile(r"^(.{2,60}?)\s*(?::|\s[-–—|]\s)\s*(.+)$")
NAME_TECH_RE = re.compile(r"^(.+?)\s*\(([^)]+)\)\s*$")
MAX_PROJECT_NAME = 60


def _split_list(text: str) -> List[str]:
    return [t.strip(" .") for t in re.split(r"\s*[,;|/]\s*", text) if t.strip(" .")]


def _name_and_tech(name: str) -> Tuple[str, List[str]]:
    """'Portfolio Site (React, Node.js)' -> ('Portfolio Site', ['React', 'Node.js'])"""
    m = NAME_TECH_RE.match(name)
    if m:
        return m.group(1).strip(), _split_list(m.group(2))
    return name.strip(), []


def _looks_like_title(line: str) -> bool:
    return len(line) <= MAX_PROJECT_NAME and not line.endswith(".") and len(line.split()) <= 8


def extract_projects(text: str) -> List[ProjectEntry]:
    """
    Parse the Projects section.

    Recognized shapes:
      - "Name: description" / "Name - description"
      - "Name (Tech, Tech)" title lines followed by description lines
      - "Technologies: ..." / "Tech Stack: ..." lines attach to the last project

    Examples:
        >>> extract_projects("PROJECTS\\nChat App - Real-time messaging\\nTech Stack: React, Socket.io")[0].technologies
        ['React', 'Socket.io']
    """
    body = section_lines(text or "", "projects")
    if not body:
        return []

    projects: List[ProjectEntry] = []
    current: Optional[ProjectEntry] = None

    for raw in body:
        bullet = is_bullet(raw)
        line = strip_bullet(raw)
        if not line:
            continue

        m = TECH_LABEL_RE.match(line)
        if m:
            if current is not None:
                current.technologies.extend(t for t in _split_list(m.group(1)) if t not in current.technologies)
            continue

        if not bullet:
            m = PROJECT_SPLIT_RE.match(line)
            if m and not re.search(r"[.!?]$", m.group(1)):
                name, techs = _name_and_tech(m.group(1))
                current = ProjectEntry(name=name, description=m.group(2).strip(), technologies=techs)
                projects.append(current)
                continue

            if current is None or _looks_like_title(line):
                name, techs = _name_and_tech(line)
                current = ProjectEntry(name=name, technologies=techs)
                projects.append(current)
                continue

        if current is None:
            current = ProjectEntry(name=line if _looks_like_title(line) else None, description=None)
            projects.append(current)
            if current.name:
                continue
        current.description = f"{current.description} {line}".strip() if current.description else line

    return [p for p in projects if p.name or p.description]


# ============================================================================
# Certifications
# ============================================================================

CERT_SPLIT_RE = re.compile(r"\s*\|\s*|\s+[-–—]\s+")
TRAILING_DATE_RE = re.compile(
    r"[\s,(\-–—]*((?:(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?\s+)?(?:19|20)\d{2})\)?\s*$",
    re.IGNORECASE,
)
ISSUER_RE = re.compile(r"^(.+?)\s+(?:by|from|issued by)\s+(.+)$", re.IGNORECASE)
YEAR_ONLY_RE = re.compile(r"^(?:(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?\s+)?(?:19|20)\d{2}$", re.IGNORECASE)


def parse_certification(line: str) -> Optional[CertificationEntry]:
    """
    Parse one certification line.

    Examples:
        >>> parse_certification("AWS Certified Developer | Amazon | 2022")
        CertificationEntry(name='AWS Certified Developer', issuer='Amazon', date='2022')
        >>> parse_certification("Google Data Analytics Certificate (2023)")
        CertificationEntry(name='Google Data Analytics Certificate', issuer=None, date='2023')
    """
    t = strip_bullet(line)
    if not t:
        return None

    parts = [p.strip() for p in CERT_SPLIT_RE.split(t) if p.strip()]
    if len(parts) < 2 and t.count(",") >= 1:
        parts = [p.strip() for p in t.split(",") if p.strip()]

    name = issuer = date = None
    if len(parts) >= 2:
        name = parts[0]
        rest = parts[1:]
        if YEAR_ONLY_RE.match(rest[-1]):
            date = rest[-1]
            rest = rest[:-1]
        if rest:
            issuer = rest[0]
    else:
        m = TRAILING_DATE_RE.search(t)
        if m:
            date = m.group(1)
            t = t[:m.start()].strip(" ,(-–—")
        m = ISSUER_RE.match(t)
        if m:
            name, issuer = m.group(1).strip(), m.group(2).strip()
        else:
            name = t

    if name:
        m = TRAILING_DATE_RE.search(name)
        if m and date is None and m.start() > 0:
            date = m.group(1)
            name = name[:m.start()].strip(" ,(-–—")
    return CertificationEntry(name=name or None, issuer=issuer, date=date)


def extract_certifications(text: str) -> List[CertificationEntry]:
    body = section_lines(text or "", "certifications")
    if not body:
        return []
    certs = [parse_certification(line) for line in body]
    return [c for c in certs if c is not None and c.name]


# ============================================================================
# Languages
# ============================================================================

LANG_PAREN_RE = re.compile(r"^([A-Za-zÀ-ÿ][A-Za-zÀ-ÿ \-]{1,30}?)\s*\(([^)]+)\)$")
LANG_SEP_RE = re.compile(r"^([A-Za-zÀ-ÿ][A-Za-zÀ-ÿ \-]{1,30}?)\s*(?::|\s[-–—|]\s)\s*(.+)$")
LANG_NAME_RE = re.compile(r"^[A-Za-zÀ-ÿ][A-Za-zÀ-ÿ\-]+(?: [A-Za-zÀ-ÿ\-]+){0,2}$")


def _parse_language_item(item: str) -> Optional[LanguageEntry]:
    t = item.strip(" .")
    if not t:
        return None
    for pattern in (LANG_PAREN_RE, LANG_SEP_RE):
        m = pattern.match(t)
        if m:
            return LanguageEntry(language=m.group(1).strip(), proficiency=m.group(2).strip())
    if LANG_NAME_RE.match(t):
        return LanguageEntry(language=t, proficiency=None)
    return None


def extract_languages(text: str) -> List[LanguageEntry]:
    """
    Parse spoken languages.

    Examples:
        >>> [l.language for l in extract_languages("LANGUAGES\\nEnglish (Fluent), Urdu (Native)")]
        ['English', 'Urdu']
    """
    body = section_lines(text or "", "languages")
    if not body:
        return []

    entries: List[LanguageEntry] = []
    for raw in body:
        line = strip_bullet(raw)
        # "English: Fluent" is one entry; "English, Urdu, Arabic" is a list
        items = [line] if LANG_SEP_RE.match(line) and "," not in line else re.split(r"\s*[,;|•]\s*", line)
        for item in items:
            entry = _parse_language_item(item)
            if entry is not None and entry.language.lower() not in {e.language.lower() for e in entries}:
                entries.append(entry)
    return entries


# ============================================================================
# Interests
# ============================================================================

INTEREST_SPLIT_RE = re.compile(r"\s*(?:[,;•|·]|\s+and\s+)\s*", re.IGNORECASE)


def extract_interests(text: str) -> List[str]:
    """
    Examples:
        >>> extract_interests("INTERESTS\\nChess, hiking and photography")
        ['Chess', 'Hiking', 'Photography']
    """
    body = section_lines(text or "", "interests")
    if not body:
        return []

    interests: List[str] = []
    for raw in body:
        for item in INTEREST_SPLIT_RE.split(strip_bullet(raw)):
            value = item.strip(" .")
            if len(value) < 3 or len(value) > 60:
                continue
            value = value[0].upper() + value[1:]
            if value.lower() not in {i.lower() for i in interests}:
                interests.append(value)
    return interests

"""
Contact field extraction: name, e-mail, phone, location and profile links.

Every extractor takes the full résumé text and returns a string or None.
None of them raise for any string input.
"""

import logging
import re
from typing import Iterator, List, Optional

from resume_analyzer.core.sections import detect_heading
from resume_analyzer.core.text_normalization import (
    clean_lines,
    decode_obfuscated_emails,
    digits_only,
    title_case_each_word,
    user_looks_like_phone,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Name
# ============================================================================

# Words that open a résumé but are never a person's name
HEADER_BLACKLIST = {
    "resume",
    "résumé",
    "curriculum vitae",
    "cv",
    "contact",
    "contact information",
    "contact details",
    "personal information",
    "personal details",
}

JOB_TITLE_WORDS_RE = re.compile(
    r"\b(?:developer|engineer|manager|director|analyst|specialist|consultant|architect|"
    r"lead|senior|junior|intern|coordinator|associate|executive|officer|president|vp|"
    r"cto|ceo|founder|designer|scientist)s?\b",
    re.IGNORECASE,
)

NAME_LABEL_RE = re.compile(r"^\s*(?:full\s+)?name\s*[:\-]\s*(.+)$", re.IGNORECASE)
TITLE_CASE_NAME_RE = re.compile(r"^[A-Z][a-zà-ÿ'\-]+(?:\s+[A-Z][a-zà-ÿ'\-]+){1,2}$")
ALL_CAPS_NAME_RE = re.compile(r"^[A-Z][A-Z'\-]+(?:\s+[A-Z][A-Z'\-]+){1,3}$")
HONORIFIC_RE = re.compile(r"^(?:mr|ms|mrs|dr|miss|prof)\.?\s+(.+)$", re.IGNORECASE)
INITIALS_NAME_RE = re.compile(
    r"^(?:[A-Z]\.\s?){1,2}[A-Z][a-z]+$"          # J.R. Smith
    r"|^[A-Z][a-z]+\s+(?:[A-Z]\.\s?){1,2}$"      # John A. B.
    r"|^[A-Z][a-z]+\s+[A-Z]\.\s?[A-Z][a-z]+$"    # John A. Smith
)
TWO_WORD_NAME_RE = re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+")
CONTACT_HINT_RE = re.compile(r"@|\d{3}[-.\s]?\d{3}[-.\s]?\d{4}")
COMPANY_TOKEN_RE = re.compile(r"\b(?:inc|llc|ltd|corp|corporation|company|co\.)\b", re.IGNORECASE)

NAME_SCAN_LINES = 20


def _is_header_line(line: str) -> bool:
    key = re.sub(r"\s+", " ", line.strip().rstrip(":").lower())
    return key in HEADER_BLACKLIST or detect_heading(line) is not None


def _is_name_candidate(line: str) -> bool:
    if _is_header_line(line):
        return False
    if "@" in line or any(ch.isdigit() for ch in line):
        return False
    if JOB_TITLE_WORDS_RE.search(line) or COMPANY_TOKEN_RE.search(line):
        return False
    return True


def _name_from_line(line: str) -> Optional[str]:
    """Apply the per-line name shapes in priority order."""
    if not _is_name_candidate(line):
        return None

    if TITLE_CASE_NAME_RE.match(line):
        return line

    if ALL_CAPS_NAME_RE.match(line):
        return title_case_each_word(line)

    m = HONORIFIC_RE.match(line)
    if m:
        rest = m.group(1).strip()
        if TITLE_CASE_NAME_RE.match(rest) or ALL_CAPS_NAME_RE.match(rest):
            return title_case_each_word(rest) if rest.isupper() else rest

    if INITIALS_NAME_RE.match(line):
        return re.sub(r"\s+", " ", line).strip()

    return None


def extract_name(text: str) -> Optional[str]:
    """
    Extract the candidate's name from the top of the résumé.

    Priority:
      1. Explicit "Name:" label
      2. Title-Case 2-3 word line (not a heading or header word)
      3. ALL-CAPS 2-4 word line, re-cased to Title Case
      4. Courtesy title (Mr./Ms./Dr./...) followed by a name
      5. Initials ("J.R. Smith", "John A. B.")
      6. Title-Case two-word line at most 3 lines above an e-mail/phone line

    Examples:
        >>> extract_name("JOHN DOE\\njohn@example.com")
        'John Doe'
        >>> extract_name("Name: Ayesha Khan\\nLahore, Pakistan")
        'Ayesha Khan'
    """
    lines = clean_lines(text)
    top = lines[:NAME_SCAN_LINES]

    for line in top:
        m = NAME_LABEL_RE.match(line)
        if m and m.group(1).strip():
            value = m.group(1).strip()
            return title_case_each_word(value) if value.isupper() else value

    for line in top:
        name = _name_from_line(line)
        if name:
            logger.debug("name matched line %r", line)
            return name

    for idx, line in enumerate(lines):
        if not CONTACT_HINT_RE.search(line):
            continue
        for prev in lines[max(0, idx - 3):idx]:
            if _is_header_line(prev) or COMPANY_TOKEN_RE.search(prev):
                continue
            m = TWO_WORD_NAME_RE.match(prev)
            if m:
                return m.group(0)

    return None


# ============================================================================
# E-mail
# ============================================================================

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+\-']+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")
PERSONAL_EMAIL_DOMAINS = ("gmail", "yahoo", "outlook", "hotmail", "icloud", "protonmail")
CORPORATE_DOMAIN_RE = re.compile(r"company|inc|corp", re.IGNORECASE)


def is_valid_email(email: str) -> bool:
    """
    Structural e-mail check.

    Examples:
        >>> is_valid_email("jane.doe@example.com")
        True
        >>> is_valid_email("jane..doe@example.com")
        False
    """
    if not email or email.count("@") != 1:
        return False
    user, domain = email.split("@")
    if not user or not domain:
        return False
    for part in (user, domain):
        if part.startswith(".") or part.endswith(".") or ".." in part:
            return False
    if not re.search(r"\.[A-Za-z]{2,}$", domain):
        return False
    return not user_looks_like_phone(user)


def _is_personal(email: str) -> bool:
    domain = email.split("@")[1]
    if any(p in domain for p in PERSONAL_EMAIL_DOMAINS):
        return True
    return len(domain) <= 20 and not CORPORATE_DOMAIN_RE.search(domain)


def extract_email(text: str) -> Optional[str]:
    """
    Extract the candidate's e-mail address, lower-cased.

    Obfuscated forms ("[at]", "(dot)", " at ... dot ") are decoded first.
    A personal-looking address wins over a corporate one.

    Examples:
        >>> extract_email("Contact: user [at] domain [dot] com")
        'user@domain.com'
    """
    if not text:
        return None
    decoded = decode_obfuscated_emails(text)

    candidates: List[str] = []
    for m in EMAIL_RE.finditer(decoded):
        email = m.group(0).strip(".'").lower()
        if is_valid_email(email) and email not in candidates:
            candidates.append(email)

    if not candidates:
        return None
    for email in candidates:
        if _is_personal(email):
            return email
    return candidates[0]


# ============================================================================
# Phone
# ============================================================================

PHONE_PATTERNS = [
    # International: +92 318 0623294, +1 (555) 123-4567, +44 20 7946 0958
    re.compile(r"\+\d{1,3}[ \t\-.]?\(?\d{1,4}\)?(?:[ \t\-.]?\d{2,5}){1,3}"),
    # (555) 123-4567
    re.compile(r"\(\d{3}\)[ \t]*\d{3}[ \t\-.]?\d{4}"),
    # 555-123-4567
    re.compile(r"\b\d{3}-\d{3}-\d{4}\b"),
    # 555.123.4567
    re.compile(r"\b\d{3}\.\d{3}\.\d{4}\b"),
    # 555 123 4567
    re.compile(r"\b\d{3} \d{3} \d{4}\b"),
    # 0318-0623294, 0318 062 3294
    re.compile(r"\b0\d{3}[ \-]\d{3}[ \-]?\d{4}\b"),
    re.compile(r"\b\d{10,15}\b"),
]
PHONE_KEYWORD_RE = re.compile(r"\b(?:tel|phone|mobile|cell|contact)\b", re.IGNORECASE)
PHONE_SCAN_TOP_LINES = 10


def is_valid_phone(phone: str) -> bool:
    return 10 <= len(digits_only(phone)) <= 15


def _phone_candidates(line: str) -> Iterator[str]:
    for pattern in PHONE_PATTERNS:
        for m in pattern.finditer(line):
            candidate = m.group(0).strip()
            if is_valid_phone(candidate):
                yield candidate


def _scan_phone(lines: List[str]) -> Optional[str]:
    first_valid = None
    for line in lines:
        candidate = next(_phone_candidates(line), None)
        if candidate is None:
            continue
        if PHONE_KEYWORD_RE.search(line):
            return candidate
        if first_valid is None:
            first_valid = candidate
    return first_valid


def extract_phone(text: str) -> Optional[str]:
    """
    Extract a phone number with 10-15 digits.

    The first 10 lines are searched before the rest of the document; within a
    scan, a match on a line mentioning phone/tel/mobile/cell/contact wins.

    Examples:
        >>> extract_phone("John Doe\\nPhone: +92 318 0623294")
        '+92 318 0623294'
    """
    lines = clean_lines(text)
    return _scan_phone(lines[:PHONE_SCAN_TOP_LINES]) or _scan_phone(lines)


# ============================================================================
# Location
# ============================================================================

LOCATION_PATTERNS = [
    # City, State / City, Country
    re.compile(r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*, ?(?:[A-Z]{2,}|[A-Z][a-z]+(?: [A-Z][a-z]+)*)\b"),
    # City ST
    re.compile(r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)* [A-Z]{2}\b"),
    # US ZIP
    re.compile(r"\b\d{5}(?:-\d{4})?\b"),
    # Canadian postcode
    re.compile(r"\b[A-Z]\d[A-Z] ?\d[A-Z]\d\b"),
    # UK postcode
    re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]? ?\d[A-Z]{2}\b"),
    # Street address
    re.compile(
        r"\b\d+\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|"
        r"Lane|Ln|Drive|Dr|Court|Ct|Place|Pl)\b\.?"
    ),
]
LOCATION_KEYWORD_RE = re.compile(r"\b(?:location|city|based|reside|residing|address|state|country)\b", re.IGNORECASE)
LOCATION_LABEL_RE = re.compile(r"^(?:location|address|city|based in|residence)\s*[:\-]\s*(.+)$", re.IGNORECASE)
LOCATION_CONTACT_RE = re.compile(r"\b(?:phone|email|e-mail|contact|tel|mobile)\b", re.IGNORECASE)
LOCATION_SKIP_RE = re.compile(
    r"\b(?:inc|llc|ltd|corp|corporation|company|technologies|solutions|"
    r"developer|engineer|manager|director|analyst|consultant|intern|owner|lead|head|"
    r"specialist|architect|designer|scientist|coordinator|administrator|officer|founder|recruiter|"
    # Credentials after a name; MD is left out since it is also Maryland
    r"mba|phd|ph\.d|cpa|pmp|msc|bsc|cfa)\b",
    re.IGNORECASE,
)
MONTH_OR_YEAR_RE = re.compile(
    r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\b|\b(?:19|20)\d{2}\b",
    re.IGNORECASE,
)

MAJOR_CITIES = [
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix", "Philadelphia",
    "San Antonio", "San Diego", "Dallas", "San Jose", "San Francisco", "Seattle",
    "Boston", "Austin", "London", "Paris", "Tokyo", "Sydney", "Toronto", "Vancouver",
    "Berlin", "Madrid", "Rome", "Amsterdam", "Dubai", "Singapore", "Hong Kong",
    "Shanghai", "Mumbai", "Bangalore", "Delhi", "Karachi", "Lahore", "Islamabad",
    "São Paulo", "Mexico City", "Moscow", "Istanbul",
]

CONTENT_SECTIONS = {"experience", "education", "skills", "projects", "certifications", "languages", "interests"}

LOCATION_TOP_LINES = 10
LOCATION_CONTACT_LINES = 20
LOCATION_CITY_LINES = 15


def _location_in_line(line: str, allow_dates: bool = False) -> Optional[str]:
    for pattern in LOCATION_PATTERNS:
        for m in pattern.finditer(line):
            value = m.group(0).strip()
            if not allow_dates and MONTH_OR_YEAR_RE.search(value):
                continue
            return value
    return None


def _skip_location_line(line: str) -> bool:
    return (
        "@" in line
        or "http" in line.lower()
        or _is_header_line(line)
        or bool(LOCATION_SKIP_RE.search(line))
    )


def _outside_content_sections(lines: List[str]) -> List[str]:
    """
    Blank out lines that belong to a content section ("Python, Django" in a
    skills list looks exactly like "City, State"). Line positions are kept.
    """
    kept: List[str] = []
    current = None
    for line in lines:
        heading = detect_heading(line)
        if heading is not None:
            current = heading
            kept.append("")
            continue
        kept.append("" if current in CONTENT_SECTIONS else line)
    return kept


def extract_location(text: str) -> Optional[str]:
    """
    Extract the candidate's location.

    The candidate's name is removed from the start of each line first, so
    "John Doe, MBA" is not read as "City, State".

    Strategies, in order:
      1. Location patterns in the first 10 lines, keyword lines first
      2. Contact lines (an address, or a phone/email label) in the first 20 lines
      3. A fixed list of major world cities in the first 15 lines

    Examples:
        >>> extract_location("Jane Roe\\nSan Francisco, CA\\njane@x.io")
        'San Francisco, CA'
    """
    lines = _outside_content_sections(clean_lines(text))
    name = extract_name(text)
    if name:
        name_re = re.compile(rf"^\s*{re.escape(name)}\b[\s,|]*", re.IGNORECASE)
        lines = [name_re.sub("", line) for line in lines]
    top = [line for line in lines[:LOCATION_TOP_LINES] if not _skip_location_line(line)]

    keyword_lines = [line for line in top if LOCATION_KEYWORD_RE.search(line)]
    for line in keyword_lines:
        found = _location_in_line(line, allow_dates=True)
        if found:
            return found
        m = LOCATION_LABEL_RE.match(line)
        if m:
            return m.group(1).strip()

    for line in top:
        found = _location_in_line(line)
        if found:
            return found

    for line in lines[:LOCATION_CONTACT_LINES]:
        if not (LOCATION_CONTACT_RE.search(line) or "@" in line):
            continue
        # Drop the address itself so its domain is not read as a place
        stripped = EMAIL_RE.sub(" ", line)
        if LOCATION_SKIP_RE.search(stripped):
            continue
        found = _location_in_line(stripped)
        if found:
            return found

    for line in lines[:LOCATION_CITY_LINES]:
        for city in MAJOR_CITIES:
            if re.search(rf"\b{re.escape(city)}\b", line, re.IGNORECASE):
                return city

    return None


# ============================================================================
# Profile links
# ============================================================================

LINKEDIN_RE = re.compile(r"\b(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/(?:in|pub)/[A-Za-z0-9_%\-]+/?", re.IGNORECASE)
GITHUB_RE = re.compile(r"\b(?:https?://)?(?:www\.)?github\.com/[A-Za-z0-9_.\-]+", re.IGNORECASE)


def _first_link(pattern: re.Pattern, text: str) -> Optional[str]:
    if not text:
        return None
    m = pattern.search(text)
    if not m:
        return None
    return re.split(r"[?#]", m.group(0))[0].rstrip("/.")


def extract_github(text: str) -> Optional[str]:
    return _first_link(GITHUB_RE, text)


def extract_linkedin(text: str) -> Optional[str]:
    return _first_link(LINKEDIN_RE, text)

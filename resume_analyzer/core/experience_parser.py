"""
Work experience extraction.

Entries are found by an explicit state machine over the Experience section
(the whole text when no Experience heading exists):

  SEEKING_ENTRY_START      -> a line with a date range seeds an entry
  ACCUMULATING_ENTRY       -> company/position resolved from the date line
                              and its neighbours
  SEEKING_RESPONSIBILITIES -> following lines collected until the next date
                              line, a section heading, or the lookahead ends
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Set, Tuple

from resume_analyzer.core.schemas import ExperienceEntry
from resume_analyzer.core.sections import detect_heading, section_lines
from resume_analyzer.core.text_normalization import clean_lines, is_bullet, strip_bullet

logger = logging.getLogger(__name__)


MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?|"
    r"Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)
DATE_TOKEN = rf"(?:{MONTH}\s+)?(?:\d{{1,2}}/)?\d{{4}}"
DATE_RANGE_RE = re.compile(
    rf"\b{DATE_TOKEN}\s*(?:-|–|—|to)\s*(?:{DATE_TOKEN}|Present|Current|Now|Till\s+Date)\b",
    re.IGNORECASE,
)

JOB_TITLE_RE = re.compile(
    r"\b(?:developer|engineer|manager|director|analyst|specialist|consultant|architect|"
    r"lead|senior|junior|intern|coordinator|associate|executive|officer|president|vp|"
    r"cto|ceo|founder|designer|scientist|administrator|programmer|assistant)s?\b",
    re.IGNORECASE,
)
COMPANY_SUFFIX_RE = re.compile(r"\b(?:inc|llc|ltd|corp|corporation|company|co|gmbh|plc|pvt)\b\.?", re.IGNORECASE)
SCHOOL_RE = re.compile(r"\b(?:university|college|school|institute|academy|polytechnic)\b", re.IGNORECASE)

COMPANY_LABEL_RE = re.compile(r"^(?:company|employer|organization|organisation|institute)\s*:\s*(.+)$", re.IGNORECASE)
POSITION_LABEL_RE = re.compile(r"^(?:job\s*title|position|role|title|designation)\s*:\s*(.+)$", re.IGNORECASE)
AT_RE = re.compile(r"^(.+?)\s+(?:at|@)\s+(.+)$", re.IGNORECASE)
SEPARATOR_RE = re.compile(r"\s*\|\s*|\s+[-–—]\s+|\s*[–—]\s*")
EMPTY_PARENS_RE = re.compile(r"\(\s*[,\-–—]?\s*\)|\[\s*\]")

MAX_ENTRIES = 10
RESPONSIBILITY_LOOKAHEAD = 10
POSITION_SEARCH_RADIUS = 2


class ExperienceState(str, Enum):
    SEEKING_ENTRY_START = "seeking_entry_start"
    ACCUMULATING_ENTRY = "accumulating_entry"
    SEEKING_RESPONSIBILITIES = "seeking_responsibilities"


def has_date_range(line: str) -> bool:
    return bool(DATE_RANGE_RE.search(line or ""))


def _role_text(line: str) -> str:
    """Line with its date range and leftover punctuation removed."""
    t = DATE_RANGE_RE.sub(" ", line)
    t = EMPTY_PARENS_RE.sub(" ", t)
    t = re.sub(r"\s+", " ", t)
    return t.strip(" |,;:-–—()")


def _split_role(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Split "X | Y" / "X - Y" into (company, position).

    The side carrying a job-title keyword is the position; without one the
    first part is taken as the company.

    Examples:
        >>> _split_role("Senior Engineer | Acme Corp")
        ('Acme Corp', 'Senior Engineer')
        >>> _split_role("Acme Corp - Platform Team")
        ('Acme Corp', 'Platform Team')
    """
    parts = [p.strip() for p in SEPARATOR_RE.split(text) if p and p.strip()]
    if len(parts) < 2:
        return None, None
    first, second = parts[0], parts[1]
    if JOB_TITLE_RE.search(first) and not JOB_TITLE_RE.search(second):
        return second, first
    return first, second


def _resolve_role(contexts: List[str]) -> Tuple[Optional[str], Optional[str], Set[int]]:
    """
    Resolve (company, position) from context lines, ordered current/prev/next.
    Returns the positions in `contexts` that were consumed.
    """
    company = position = None
    used: Set[int] = set()

    for idx, ctx in enumerate(contexts):
        if not company:
            m = COMPANY_LABEL_RE.match(ctx)
            if m:
                company = m.group(1).strip()
                used.add(idx)
        if not position:
            m = POSITION_LABEL_RE.match(ctx)
            if m:
                position = m.group(1).strip()
                used.add(idx)
    if company or position:
        return company, position, used

    for idx, ctx in enumerate(contexts):
        m = AT_RE.match(ctx)
        if m:
            return m.group(2).strip(), m.group(1).strip(), {idx}

    for idx, ctx in enumerate(contexts):
        split_company, split_position = _split_role(ctx)
        if split_company or split_position:
            return split_company, split_position, {idx}

    # A lone line: job-title words make it the position, a corporate suffix the company
    for idx, ctx in enumerate(contexts):
        if not position and JOB_TITLE_RE.search(ctx):
            position = ctx
            used.add(idx)
        elif not company and COMPANY_SUFFIX_RE.search(ctx):
            company = ctx
            used.add(idx)
    return company, position, used


def _is_role_context(line: str) -> bool:
    return bool(line) and not is_bullet(line) and detect_heading(line) is None and len(line) <= 120


def _is_plain(line: str) -> bool:
    return not is_bullet(line) and not has_date_range(line)


def _is_next_entry_header(lines: List[str], idx: int, stacked: bool = False) -> bool:
    """
    A plain line directly above a date line belongs to the next entry. With
    `stacked`, so does a company line above a title line and a date line.
    """
    if idx + 1 >= len(lines) or not _is_plain(lines[idx]):
        return False
    if has_date_range(lines[idx + 1]):
        return True
    return (
        stacked
        and idx + 2 < len(lines)
        and _is_plain(lines[idx + 1])
        and bool(JOB_TITLE_RE.search(lines[idx + 1]))
        and has_date_range(lines[idx + 2])
    )


def _near_school(lines: List[str], idx: int) -> bool:
    window = lines[max(0, idx - 1):idx + 2]
    return any(SCHOOL_RE.search(line) for line in window)


def _search_position(lines: List[str], idx: int) -> Optional[str]:
    lo = max(0, idx - POSITION_SEARCH_RADIUS)
    hi = min(len(lines), idx + POSITION_SEARCH_RADIUS + 1)
    for j in range(lo, hi):
        if j == idx or is_bullet(lines[j]):
            continue
        text = _role_text(lines[j])
        if text and JOB_TITLE_RE.search(text):
            return text
    return None


def _search_company(lines: List[str], idx: int, consumed: Set[int]) -> Optional[Tuple[int, str]]:
    """
    Company line up to two lines above a date line, for the stacked
    "Company / Title / Dates" layout. "Google - Mountain View, CA" gives "Google".
    """
    for j in range(idx - 1, max(-1, idx - POSITION_SEARCH_RADIUS - 1), -1):
        if j in consumed or not _is_role_context(lines[j]) or has_date_range(lines[j]):
            continue
        text = _role_text(lines[j])
        company = _split_role(text)[0] or text
        if company and not JOB_TITLE_RE.search(company) and len(company.split()) <= 6 and not company.endswith("."):
            return j, company
    return None


def parse_experience_lines(lines: List[str], skip_education: bool = False) -> List[ExperienceEntry]:
    """
    Run the experience state machine over cleaned lines.

    Args:
        lines: Cleaned, non-empty lines
        skip_education: Ignore date lines that look like school entries
            (used when scanning a whole document without headings)

    Returns:
        At most 10 entries, in scan order
    """
    entries: List[ExperienceEntry] = []
    state = ExperienceState.SEEKING_ENTRY_START
    consumed: Set[int] = set()
    current: Optional[ExperienceEntry] = None
    i = 0

    while i < len(lines) and len(entries) < MAX_ENTRIES:
        line = lines[i]

        if state == ExperienceState.SEEKING_ENTRY_START:
            if has_date_range(line) and not (skip_education and _near_school(lines, i)):
                state = ExperienceState.ACCUMULATING_ENTRY
                continue
            i += 1

        elif state == ExperienceState.ACCUMULATING_ENTRY:
            duration = DATE_RANGE_RE.search(line).group(0)
            neighbours = [(i, _role_text(line))]
            if i - 1 >= 0 and i - 1 not in consumed and _is_role_context(lines[i - 1]) and not has_date_range(lines[i - 1]):
                neighbours.append((i - 1, _role_text(lines[i - 1])))
            if i + 1 < len(lines) and _is_role_context(lines[i + 1]) and not has_date_range(lines[i + 1]):
                neighbours.append((i + 1, _role_text(lines[i + 1])))
            neighbours = [(j, t) for j, t in neighbours if t]

            company, position, used = _resolve_role([t for _, t in neighbours])
            for k in used:
                consumed.add(neighbours[k][0])
            if not position:
                position = _search_position(lines, i)
            if not company and not skip_education:
                found = _search_company(lines, i, consumed)
                if found:
                    consumed.add(found[0])
                    company = found[1]

            current = ExperienceEntry(company=company, position=position, duration=duration)
            consumed.add(i)
            logger.debug("experience entry seeded at line %d: %r / %r", i, company, position)
            state = ExperienceState.SEEKING_RESPONSIBILITIES
            i += 1

        else:  # SEEKING_RESPONSIBILITIES
            start = i
            while i < len(lines) and i - start < RESPONSIBILITY_LOOKAHEAD - 1:
                candidate = lines[i]
                if has_date_range(candidate) or detect_heading(candidate) is not None:
                    break
                # The first plain line after the dates belongs to the entry itself
                if _is_next_entry_header(lines, i, stacked=bool(current.responsibilities)):
                    break
                if i not in consumed and (is_bullet(candidate) or len(candidate) > 10):
                    text = strip_bullet(candidate)
                    if text:
                        current.responsibilities.append(text)
                        consumed.add(i)
                i += 1

            if current.company or current.position:
                entries.append(current)
            current = None
            state = ExperienceState.SEEKING_ENTRY_START

    if current is not None and (current.company or current.position) and len(entries) < MAX_ENTRIES:
        entries.append(current)
    return entries


def extract_experience(text: str) -> List[ExperienceEntry]:
    """
    Extract work experience entries.

    Examples:
        >>> entries = extract_experience(
        ...     "EXPERIENCE\\nSoftware Engineer at TechCorp (2020-Present)\\n- Developed web applications"
        ... )
        >>> entries[0].company, entries[0].position, entries[0].duration
        ('TechCorp', 'Software Engineer', '2020-Present')
    """
    body = section_lines(text or "", "experience")
    if body is not None:
        return parse_experience_lines(body)
    return parse_experience_lines(clean_lines(text or ""), skip_education=True)

"""
Text normalization utilities for cleaning up PDF/DOCX extraction artifacts.

Handles letter-spaced headings, bullet markers and obfuscated e-mail
addresses ("jane [at] mail [dot] com") before the extractors run.
"""

import re
from typing import List


# ============================================================================
# Line cleanup
# ============================================================================

BULLET_RE = re.compile(r"^[\s•●▪◦·\-–*>+]+")
SPACED_CHARS_RE = re.compile(r"^(?:[A-Za-z0-9@.()\-\+]\s+){2,}[A-Za-z0-9@.()\-\+]+$")
MULTI_SPACE_RE = re.compile(r"[ \t ]+")


def despace_if_needed(text: str) -> str:
    """
    Fix PDFs that extract text with spaces between characters.

    Examples:
      'E X P E R I E N C E' -> 'EXPERIENCE'
      'J O H N   D O E' -> 'JOHN DOE'   (preserves word boundary)
      '5 5 5 . 1 2 3 . 4 5 6 7' -> '555.123.4567'
    """
    t = text.strip()
    if not t:
        return t

    if SPACED_CHARS_RE.match(t):
        # 2+ spaces are word boundaries; single spaces are extraction noise
        parts = re.split(r"\s{2,}", t)
        parts = ["".join(p.split()) for p in parts]
        return " ".join([p for p in parts if p])

    return t


def clean_line(line: str) -> str:
    """De-space and collapse runs of blanks inside a single line."""
    return MULTI_SPACE_RE.sub(" ", despace_if_needed(line)).strip()


def clean_lines(text: str) -> List[str]:
    """Split text into cleaned, non-empty lines."""
    if not text:
        return []
    lines = (clean_line(raw) for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"))
    return [line for line in lines if line]


def is_bullet(line: str) -> bool:
    # A leading "+" followed by digits is a phone number, not a bullet
    if re.match(r"^\s*\+\d", line):
        return False
    return bool(BULLET_RE.match(line))


def strip_bullet(line: str) -> str:
    if not is_bullet(line):
        return line.strip()
    return BULLET_RE.sub("", line).strip()


def title_case_each_word(text: str) -> str:
    """
    Convert to title case: lowercase everything then uppercase first letter of each word.
    This works better than str.title() for text with hyphens, apostrophes, etc.
    """
    words = text.split()
    return " ".join(w[0].upper() + w[1:].lower() if w else "" for w in words)


def digits_only(text: str) -> str:
    return re.sub(r"\D", "", text or "")


# ============================================================================
# Obfuscated e-mail addresses
# ============================================================================

BRACKET_AT_RE = re.compile(r"\s*[\[\(\{]\s*at\s*[\]\)\}]\s*", re.IGNORECASE)
BRACKET_DOT_RE = re.compile(r"\s*[\[\(\{]\s*dot\s*[\]\)\}]\s*", re.IGNORECASE)
# "jane at mail dot com" - only when at least one " dot " follows, so that
# "Engineer at TechCorp" is left alone
SPELLED_EMAIL_RE = re.compile(
    r"\b([A-Za-z0-9._%+-]+)\s+at\s+([A-Za-z0-9-]+(?:\s+dot\s+[A-Za-z0-9-]+)+)\b",
    re.IGNORECASE,
)
SPELLED_DOT_RE = re.compile(r"\s+dot\s+", re.IGNORECASE)


def decode_obfuscated_emails(text: str) -> str:
    """
    Rewrite obfuscated address forms into plain e-mail syntax.

    Examples:
        'user [at] domain [dot] com' -> 'user@domain.com'
        'user(at)domain{dot}co{dot}uk' -> 'user@domain.co.uk'
        'user at domain dot com' -> 'user@domain.com'
    """
    if not text:
        return text
    t = BRACKET_AT_RE.sub("@", text)
    t = BRACKET_DOT_RE.sub(".", t)
    return SPELLED_EMAIL_RE.sub(
        lambda m: m.group(1) + "@" + SPELLED_DOT_RE.sub(".", m.group(2)),
        t,
    )


def user_looks_like_phone(user: str) -> bool:
    """
    Check if the local part of an address is really a glued phone number,
    as in "(856)366-5713k.o.harbaugh@gmail.com".
    """
    digit_count = sum(1 for c in user if c.isdigit())
    has_parens = "(" in user or ")" in user
    has_plus = user.startswith("+")
    has_digits_and_hyphens = digit_count >= 7 and "-" in user
    return has_parens or has_plus or has_digits_and_hyphens

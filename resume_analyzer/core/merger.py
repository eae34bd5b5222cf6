"""
Reconciliation of heuristic extraction with AI oracle output.

The heuristic profile is the base. Every AI value that carries real
information replaces the heuristic one; empty, null-ish and placeholder
values ("N/A", "unknown", "string") never do.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from resume_analyzer.core.schemas import ExtractedProfile, Skills
from resume_analyzer.core.text_normalization import digits_only

logger = logging.getLogger(__name__)


NON_MEANINGFUL_STRINGS = {"", "null", "unknown", "n/a", "not provided", "undefined", "string", "none"}
STRICT_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
STRICT_MIN_PHONE_DIGITS = 10
# Entry fields that hold lists; oracles sometimes send them as one string
LIST_ENTRY_KEYS = {"responsibilities", "technologies"}


class MergeStrictness(str, Enum):
    LENIENT = "lenient"
    STRICT = "strict"


def is_meaningful(value: Any) -> bool:
    """
    Whether a value carries real information.

    Examples:
        >>> is_meaningful(" N/A ")
        False
        >>> is_meaningful([])
        False
        >>> is_meaningful({"technical": []})
        True
        >>> is_meaningful(0)
        True
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in NON_MEANINGFUL_STRINGS
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, Mapping):
        return len(value) > 0
    return True


def _passes_strict_checks(key: str, value: Any) -> bool:
    if key == "email":
        return isinstance(value, str) and bool(STRICT_EMAIL_RE.match(value.strip()))
    if key == "phone":
        return len(digits_only(str(value))) >= STRICT_MIN_PHONE_DIGITS
    return True


def _stringify(value: Any) -> Any:
    """Numbers from the oracle become strings ("2019", "3.8")."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _clean_entry(entry: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(entry, Mapping):
        return None
    cleaned: Dict[str, Any] = {}
    for k, v in entry.items():
        v = _stringify(v)
        if k in LIST_ENTRY_KEYS and isinstance(v, str):
            v = _string_list(v)
        if isinstance(v, str) and not is_meaningful(v):
            v = None
        elif isinstance(v, list):
            v = [str(_stringify(item)) for item in v if is_meaningful(item) and not isinstance(item, (Mapping, list))]
        cleaned[k] = v
    return cleaned


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [v for v in re.split(r"\s*,\s*", value)]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(_stringify(v)).strip() for v in value if is_meaningful(v) and not isinstance(v, (Mapping, list))]


_FIELD_ADAPTERS = {
    name: TypeAdapter(field.annotation)
    for name, field in ExtractedProfile.model_fields.items()
    if name != "skills"
}


def _coerce(key: str, value: Any) -> Any:
    """
    Coerce an AI value into the profile field type.
    Raises ValidationError when the value cannot be used.
    """
    if key == "interests":
        value = _string_list(value)
    elif isinstance(value, list):
        value = [e for e in (_clean_entry(item) for item in value) if e is not None]
    else:
        value = _stringify(value)
        if isinstance(value, str):
            value = value.strip()
    return _FIELD_ADAPTERS[key].validate_python(value)


def merge(
    heuristic: ExtractedProfile,
    ai: Optional[Mapping[str, Any]],
    strictness: MergeStrictness = MergeStrictness.LENIENT,
) -> ExtractedProfile:
    """
    Merge AI oracle output over a heuristic profile.

    Args:
        heuristic: Profile produced by the field extractors
        ai: Raw mapping returned by the oracle (may be None or empty)
        strictness: STRICT also rejects badly formed AI email/phone values

    Returns:
        A new profile; `heuristic` is not modified

    Examples:
        >>> h = ExtractedProfile(name="Jane Roe", email="jane@x.io")
        >>> merge(h, {"name": "Jane A. Roe", "email": "N/A"}).email
        'jane@x.io'
    """
    if not ai:
        return heuristic.model_copy(deep=True)

    updates: Dict[str, Any] = {}
    for key, value in ai.items():
        if key == "skills":
            if not isinstance(value, Mapping):
                continue
            skills = heuristic.skills.model_copy(deep=True)
            for sub in ("technical", "soft"):
                if is_meaningful(value.get(sub)):
                    coerced = _string_list(value.get(sub))
                    if coerced:
                        setattr(skills, sub, coerced)
            updates["skills"] = Skills(technical=skills.technical, soft=skills.soft)
            continue

        if key not in _FIELD_ADAPTERS or not is_meaningful(value):
            continue
        if strictness == MergeStrictness.STRICT and not _passes_strict_checks(key, value):
            logger.debug("strict merge rejected AI %s value", key)
            continue
        try:
            coerced = _coerce(key, value)
        except ValidationError:
            logger.debug("AI value for %s could not be coerced; keeping heuristic value", key)
            continue
        if is_meaningful(coerced):
            updates[key] = coerced

    return heuristic.model_copy(deep=True, update=updates)

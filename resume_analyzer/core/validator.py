"""
Quality checks on an extracted profile.

Produces ExtractionMetadata: which sections were found, how complete the
profile is, and which fields look missing or like placeholder text.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from resume_analyzer.core.confidence_calculator import ConfidenceCalculator
from resume_analyzer.core.schemas import ExtractedProfile, ExtractionMetadata, ExtractionMethod

logger = logging.getLogger(__name__)


# Sample values that extraction templates and AI models like to echo back
SAMPLE_NAME = "John Smith"
SAMPLE_EMAIL = "john.smith@example.com"
SAMPLE_PHONE = "(555) 123-4567"

PLACEHOLDER_TOKENS = ("placeholder", "not specified", "not provided", "lorem ipsum")
ADDRESS_COMPANY_TOKENS = ("company", "inc", "llc", "corp")
COMPLETENESS_FIELDS = 6


def is_placeholder(value: Optional[str]) -> bool:
    """
    Whether a value is template or display placeholder text.

    Examples:
        >>> is_placeholder("Company Not Specified")
        True
        >>> is_placeholder("John Smith")
        True
        >>> is_placeholder("Acme Corp")
        False
    """
    if not value or not value.strip():
        return True
    lowered = value.strip().lower()
    if lowered in {SAMPLE_NAME.lower(), SAMPLE_EMAIL, SAMPLE_PHONE}:
        return True
    return any(token in lowered for token in PLACEHOLDER_TOKENS)


def _name_ok(name: Optional[str]) -> bool:
    if not name:
        return False
    lowered = name.lower()
    return "name" not in lowered and "placeholder" not in lowered and name.strip() != SAMPLE_NAME


def _email_ok(email: Optional[str]) -> bool:
    if not email or "@" not in email:
        return False
    return "email" not in email.lower() and email.strip().lower() != SAMPLE_EMAIL


def _phone_ok(phone: Optional[str]) -> bool:
    if not phone or len(phone.strip()) < 7:
        return False
    return "phone" not in phone.lower() and phone.strip() != SAMPLE_PHONE


def _contains_token(value: str, tokens) -> bool:
    words = value.lower().replace(",", " ").replace(".", " ").split()
    return any(token in words for token in tokens)


def sections_identified(profile: ExtractedProfile) -> List[str]:
    checks = [
        ("summary", bool(profile.summary)),
        ("experience", bool(profile.experience)),
        ("education", bool(profile.education)),
        ("technical_skills", bool(profile.skills.technical)),
        ("soft_skills", bool(profile.skills.soft)),
        ("projects", bool(profile.projects)),
        ("certifications", bool(profile.certifications)),
        ("languages", bool(profile.languages)),
        ("interests", bool(profile.interests)),
    ]
    return [name for name, present in checks if present]


def completeness_score(profile: ExtractedProfile) -> float:
    """
    Fraction of the six core fields (name, email, phone, experience,
    education, technical skills) that are present and not placeholders.
    """
    present = [
        _name_ok(profile.name),
        _email_ok(profile.email),
        _phone_ok(profile.phone),
        bool(profile.experience),
        bool(profile.education),
        bool(profile.skills.technical),
    ]
    return sum(present) / COMPLETENESS_FIELDS


def validation_issues(profile: ExtractedProfile) -> List[str]:
    issues: List[str] = []

    if not _name_ok(profile.name):
        issues.append("Name not detected or is default")
    if not _email_ok(profile.email):
        issues.append("Email not detected or is default")
    if not _phone_ok(profile.phone):
        issues.append("Phone not detected or is default")

    if profile.address and _contains_token(profile.address, ADDRESS_COMPANY_TOKENS):
        issues.append("Address appears to contain company name instead of personal location")

    for idx, exp in enumerate(profile.experience, start=1):
        company = (exp.company or "").lower()
        position = (exp.position or "").lower()
        if not company or "company" in company or "placeholder" in company:
            issues.append(f"Experience entry {idx}: Company name appears to be a placeholder")
        if not position or any(t in position for t in ("position", "role", "placeholder")):
            issues.append(f"Experience entry {idx}: Position appears to be a placeholder")

    for idx, edu in enumerate(profile.education, start=1):
        institution = (edu.institution or "").strip().lower()
        degree = (edu.degree or "").lower()
        if not institution or institution == "university" or "placeholder" in institution:
            issues.append(f"Education entry {idx}: Institution appears to be a placeholder")
        if not degree or "degree" in degree or "placeholder" in degree:
            issues.append(f"Education entry {idx}: Degree appears to be a placeholder")

    return issues


def extraction_errors(profile: ExtractedProfile) -> List[str]:
    errors: List[str] = []
    if not profile.experience:
        errors.append("No experience data extracted")
    if not profile.skills.technical:
        errors.append("No technical skills extracted")
    if not profile.education:
        errors.append("No education data extracted")
    return errors


def validate(profile: ExtractedProfile, method: ExtractionMethod) -> ExtractionMetadata:
    """
    Build extraction metadata for a profile.

    Args:
        profile: Merged or heuristic profile
        method: "AI-Augmented" or "Heuristic-Only"

    Returns:
        ExtractionMetadata with completeness, issues and per-field confidence
    """
    metadata = ExtractionMetadata(
        method=method,
        timestamp=datetime.now(timezone.utc).isoformat(),
        sections_identified=sections_identified(profile),
        completeness_score=completeness_score(profile),
        validation_issues=validation_issues(profile),
        extraction_errors=extraction_errors(profile),
        extraction_confidence=ConfidenceCalculator.extraction(method),
        field_confidence=ConfidenceCalculator.for_profile(profile),
    )
    logger.debug(
        "validated profile: completeness=%.2f issues=%d",
        metadata.completeness_score,
        len(metadata.validation_issues),
    )
    return metadata

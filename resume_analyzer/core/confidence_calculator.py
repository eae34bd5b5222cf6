"""
Confidence scoring for extracted profile fields.

Per-field confidence lets downstream consumers decide whether a value can be
trusted or the candidate should be asked to confirm it.

Confidence Scale:
  1.0   = Exact match (regex, known value)
  0.9   = Very high confidence (minor normalization needed)
  0.8   = High confidence (inferred but validated)
  0.7   = Medium-high confidence (heuristic with good signals)
  0.6   = Medium confidence (multiple signals, some uncertainty)
  0.5   = Low-medium confidence (ambiguous but extractable)
  <0.5  = Low confidence (should prompt for clarification)
"""

import re
from typing import Dict, Tuple

from resume_analyzer.core.schemas import ExtractedProfile, ExtractionMethod


AI_AUGMENTED_CONFIDENCE = 0.95
HEURISTIC_ONLY_CONFIDENCE = 0.6


class ConfidenceCalculator:
    """Central place for all extraction confidence logic."""

    @staticmethod
    def extraction(method: ExtractionMethod) -> float:
        """Overall confidence of an extraction run."""
        return AI_AUGMENTED_CONFIDENCE if method == "AI-Augmented" else HEURISTIC_ONLY_CONFIDENCE

    @staticmethod
    def email(email_value: str) -> Tuple[float, str]:
        """
        Calculate confidence for email extraction.

        High confidence if it matches the standard pattern (simplified RFC5322).
        """
        if not email_value:
            return 0.0, "no_email_found"

        email_pattern = r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$"
        if not re.match(email_pattern, email_value, re.IGNORECASE):
            return 0.4, "invalid_email_format"
        return 1.0, "regex_exact"

    @staticmethod
    def phone(phone_value: str) -> Tuple[float, str]:
        """
        Calculate confidence for phone extraction.

        10-15 digits is a full number; fewer is probably a fragment.
        """
        if not phone_value:
            return 0.0, "no_phone_found"

        digits_only = re.sub(r"\D", "", phone_value)
        if len(digits_only) < 7:
            return 0.3, "too_few_digits"
        if len(digits_only) < 10 or len(digits_only) > 15:
            return 0.6, "unusual_digit_count"
        if phone_value.strip().startswith("+"):
            return 1.0, "international_format"
        return 0.9, "regex_exact"

    @staticmethod
    def name(name_value: str) -> Tuple[float, str]:
        """
        Calculate confidence for name extraction.

        Factors:
          + Two or three words (first + last, optional middle)
          - Contains digits (likely bad parse)
          - Single word or very long
        """
        if not name_value:
            return 0.0, "no_name_found"
        if len(name_value) > 60:
            return 0.2, "name_too_long"
        if any(c.isdigit() for c in name_value):
            return 0.3, "name_contains_digits"
        if " " not in name_value.strip():
            return 0.4, "no_space_in_name"
        if len(name_value.split()) <= 3:
            return 0.85, "heuristic_window"
        return 0.6, "long_name"

    @staticmethod
    def location(location_value: str) -> Tuple[float, str]:
        """
        Calculate confidence for location extraction.

        "City, State/Country" is the strongest shape; a bare city or postcode
        is less certain.
        """
        if not location_value:
            return 0.0, "no_location_found"
        if "," in location_value:
            return 0.85, "city_region_pattern"
        return 0.65, "partial_location"

    @staticmethod
    def list_field(count: int, base: float, step: float, cap: float = 0.95) -> float:
        """
        Confidence for list fields: grows with the number of items found.

        Examples:
            >>> ConfidenceCalculator.list_field(0, 0.7, 0.1)
            0.0
            >>> ConfidenceCalculator.list_field(2, 0.7, 0.1)
            0.9
        """
        if count <= 0:
            return 0.0
        return round(min(cap, base + step * count), 2)

    @staticmethod
    def for_profile(profile: ExtractedProfile) -> Dict[str, float]:
        """Per-field confidence for a whole profile."""
        calc = ConfidenceCalculator
        return {
            "name": calc.name(profile.name)[0],
            "email": calc.email(profile.email)[0],
            "phone": calc.phone(profile.phone)[0],
            "address": calc.location(profile.address)[0],
            "experience": calc.list_field(len(profile.experience), 0.7, 0.1),
            "education": calc.list_field(len(profile.education), 0.75, 0.1),
            "skills": calc.list_field(len(profile.skills.technical) + len(profile.skills.soft), 0.6, 0.05),
        }

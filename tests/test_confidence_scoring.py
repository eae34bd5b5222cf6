"""
Test suite for per-field confidence scoring.

Confidence scores let consumers decide whether an extracted value can be
trusted or the candidate should be asked to confirm it.
"""

from resume_analyzer.core.confidence_calculator import ConfidenceCalculator
from resume_analyzer.core.schemas import ExperienceEntry, ExtractedProfile, Skills


def test_extraction_confidence_by_method():
    assert ConfidenceCalculator.extraction("AI-Augmented") == 0.95
    assert ConfidenceCalculator.extraction("Heuristic-Only") == 0.6


def test_email_confidence():
    assert ConfidenceCalculator.email("jane@example.com") == (1.0, "regex_exact")
    assert ConfidenceCalculator.email("jane at example")[0] == 0.4
    assert ConfidenceCalculator.email(None) == (0.0, "no_email_found")


def test_phone_confidence():
    assert ConfidenceCalculator.phone("+92 318 0623294") == (1.0, "international_format")
    assert ConfidenceCalculator.phone("555-123-4567") == (0.9, "regex_exact")
    assert ConfidenceCalculator.phone("123-4567")[0] == 0.6
    assert ConfidenceCalculator.phone("12345")[0] == 0.3
    assert ConfidenceCalculator.phone("")[0] == 0.0


def test_name_confidence():
    assert ConfidenceCalculator.name("Jane Roe")[0] == 0.85
    assert ConfidenceCalculator.name("Jane")[1] == "no_space_in_name"
    assert ConfidenceCalculator.name("Jane Roe 2")[1] == "name_contains_digits"
    assert ConfidenceCalculator.name("Anna Maria de la Cruz")[1] == "long_name"


def test_location_confidence():
    assert ConfidenceCalculator.location("Austin, TX")[0] == 0.85
    assert ConfidenceCalculator.location("Karachi")[0] == 0.65
    assert ConfidenceCalculator.location(None)[0] == 0.0


def test_list_field_confidence_grows_and_caps():
    assert ConfidenceCalculator.list_field(0, 0.7, 0.1) == 0.0
    assert ConfidenceCalculator.list_field(1, 0.7, 0.1) == 0.8
    assert ConfidenceCalculator.list_field(2, 0.7, 0.1) == 0.9
    assert ConfidenceCalculator.list_field(5, 0.7, 0.1) == 0.95, "confidence is capped"


def test_confidence_for_profile():
    profile = ExtractedProfile(
        name="Jane Roe",
        email="jane@example.com",
        experience=[ExperienceEntry(company="Acme Corp")],
        skills=Skills(technical=["Python", "SQL"]),
    )
    scores = ConfidenceCalculator.for_profile(profile)

    assert scores["name"] == 0.85
    assert scores["email"] == 1.0
    assert scores["phone"] == 0.0
    assert scores["experience"] == 0.8
    assert scores["education"] == 0.0
    assert scores["skills"] == 0.7
    assert all(0.0 <= v <= 1.0 for v in scores.values())

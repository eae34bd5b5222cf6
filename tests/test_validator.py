"""Tests for profile validation metadata."""

from datetime import datetime

from resume_analyzer.core.schemas import (
    EducationEntry,
    ExperienceEntry,
    ExtractedProfile,
    Skills,
    display_placeholders,
)
from resume_analyzer.core.validator import (
    completeness_score,
    extraction_errors,
    is_placeholder,
    sections_identified,
    validate,
    validation_issues,
)


def _full_profile():
    return ExtractedProfile(
        name="Jane Roe",
        email="jane@example.com",
        phone="555-123-4567",
        experience=[ExperienceEntry(company="Acme Corp", position="Engineer")],
        education=[EducationEntry(institution="University of Lahore", degree="BS Computer Science")],
        skills=Skills(technical=["Python"]),
    )


def test_completeness_full_and_empty():
    assert completeness_score(_full_profile()) == 1.0
    assert completeness_score(ExtractedProfile()) == 0.0


def test_completeness_counts_six_core_fields():
    profile = ExtractedProfile(name="Jane Roe", email="jane@example.com", skills=Skills(technical=["Python"]))
    assert completeness_score(profile) == 3 / 6


def test_completeness_is_monotonic():
    profile = ExtractedProfile(name="Jane Roe")
    before = completeness_score(profile)
    after = completeness_score(profile.model_copy(update={"phone": "555-123-4567"}))
    assert after >= before


def test_sample_values_do_not_count():
    profile = ExtractedProfile(name="John Smith", email="john.smith@example.com", phone="(555) 123-4567")
    assert completeness_score(profile) == 0.0
    issues = validation_issues(profile)
    assert "Name not detected or is default" in issues
    assert "Email not detected or is default" in issues
    assert "Phone not detected or is default" in issues


def test_address_with_company_name_is_flagged():
    profile = _full_profile().model_copy(update={"address": "Acme Inc, Austin"})
    assert "Address appears to contain company name instead of personal location" in validation_issues(profile)


def test_placeholder_entries_are_flagged():
    profile = ExtractedProfile(
        experience=[ExperienceEntry(company="Company Not Specified", position="Position Not Specified")],
        education=[EducationEntry(institution="University", degree="Degree Not Specified")],
    )
    issues = validation_issues(profile)
    assert "Experience entry 1: Company name appears to be a placeholder" in issues
    assert "Experience entry 1: Position appears to be a placeholder" in issues
    assert "Education entry 1: Institution appears to be a placeholder" in issues
    assert "Education entry 1: Degree appears to be a placeholder" in issues


def test_display_placeholders_are_detected_by_validator():
    profile = ExtractedProfile(experience=[ExperienceEntry(duration="2019 - 2020")])
    shown = display_placeholders(profile)

    assert shown.experience[0].company == "Company Not Specified"
    assert profile.experience[0].company is None, "display copy must not modify the profile"
    assert is_placeholder(shown.experience[0].company)
    assert any("Company name appears to be a placeholder" in i for i in validation_issues(shown))


def test_is_placeholder():
    assert is_placeholder("")
    assert is_placeholder("John Smith")
    assert is_placeholder("Lorem ipsum dolor")
    assert not is_placeholder("Acme Corp")


def test_extraction_errors():
    assert extraction_errors(ExtractedProfile()) == [
        "No experience data extracted",
        "No technical skills extracted",
        "No education data extracted",
    ]
    assert extraction_errors(_full_profile()) == []


def test_sections_identified():
    profile = _full_profile().model_copy(update={"summary": "Engineer", "interests": ["Chess"]})
    assert sections_identified(profile) == ["summary", "experience", "education", "technical_skills", "interests"]


def test_validate_builds_metadata():
    metadata = validate(_full_profile(), "AI-Augmented")

    assert metadata.method == "AI-Augmented"
    assert metadata.extraction_confidence == 0.95
    assert metadata.completeness_score == 1.0
    assert metadata.validation_issues == []
    assert datetime.fromisoformat(metadata.timestamp).tzinfo is not None
    assert set(metadata.field_confidence) == {"name", "email", "phone", "address", "experience", "education", "skills"}


def test_validate_heuristic_confidence():
    assert validate(ExtractedProfile(), "Heuristic-Only").extraction_confidence == 0.6

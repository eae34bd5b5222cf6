"""Tests for reconciling heuristic extraction with AI oracle output."""

from resume_analyzer.core.merger import MergeStrictness, is_meaningful, merge
from resume_analyzer.core.schemas import EducationEntry, ExperienceEntry, ExtractedProfile, Skills


def _heuristic():
    return ExtractedProfile(
        name="Jane Roe",
        email="jane@example.com",
        phone="555-123-4567",
        experience=[ExperienceEntry(company="Acme Corp", position="Engineer", duration="2019 - 2021")],
        skills=Skills(technical=["Python", "SQL"], soft=["Teamwork"]),
    )


def test_is_meaningful():
    assert not is_meaningful(None)
    assert not is_meaningful("")
    assert not is_meaningful("  N/A ")
    assert not is_meaningful("Unknown")
    assert not is_meaningful("string")
    assert not is_meaningful([])
    assert is_meaningful("Jane")
    assert is_meaningful(["x"])
    assert is_meaningful(0)


def test_empty_ai_output_returns_heuristic_copy():
    heuristic = _heuristic()
    merged = merge(heuristic, {})
    assert merged == heuristic
    assert merged is not heuristic
    assert merge(heuristic, None) == heuristic


def test_meaningful_ai_values_win():
    merged = merge(_heuristic(), {"name": "Jane A. Roe", "address": "Austin, TX"})
    assert merged.name == "Jane A. Roe"
    assert merged.address == "Austin, TX"
    assert merged.email == "jane@example.com"


def test_null_ish_ai_values_never_replace():
    ai = {"name": "unknown", "email": "N/A", "phone": None, "experience": [], "summary": "null"}
    merged = merge(_heuristic(), ai)
    assert merged.name == "Jane Roe"
    assert merged.email == "jane@example.com"
    assert merged.phone == "555-123-4567"
    assert len(merged.experience) == 1
    assert merged.summary is None


def test_heuristic_input_is_not_modified():
    heuristic = _heuristic()
    merge(heuristic, {"name": "Someone Else", "skills": {"technical": ["Go"]}})
    assert heuristic.name == "Jane Roe"
    assert heuristic.skills.technical == ["Python", "SQL"]


def test_skill_sub_keys_merge_independently():
    merged = merge(_heuristic(), {"skills": {"technical": ["Go", "Rust"], "soft": []}})
    assert merged.skills.technical == ["Go", "Rust"]
    assert merged.skills.soft == ["Teamwork"], "empty AI soft list keeps heuristic soft skills"


def test_ai_entries_are_coerced():
    ai = {
        "experience": [
            {"company": "Globex", "position": "Lead", "duration": "2021 - Present",
             "responsibilities": "Led team, Shipped product"},
            "not an entry",
        ],
        "education": [{"institution": "MIT", "degree": "BS", "dates": 2018, "gpa": 3.9}],
    }
    merged = merge(_heuristic(), ai)

    assert merged.experience == [
        ExperienceEntry(company="Globex", position="Lead", duration="2021 - Present",
                        responsibilities=["Led team", "Shipped product"])
    ]
    assert merged.education == [EducationEntry(institution="MIT", degree="BS", dates="2018", gpa="3.9")]


def test_uncoercible_value_keeps_heuristic():
    merged = merge(_heuristic(), {"experience": {"company": "not a list"}})
    assert merged.experience[0].company == "Acme Corp"


def test_unknown_keys_ignored():
    merged = merge(_heuristic(), {"favouriteColour": "blue"})
    assert merged == _heuristic()


def test_interests_accept_comma_string():
    merged = merge(_heuristic(), {"interests": "chess, hiking"})
    assert merged.interests == ["chess", "hiking"]


def test_lenient_accepts_odd_contact_values():
    merged = merge(_heuristic(), {"email": "jane at example", "phone": "12345"})
    assert merged.email == "jane at example"
    assert merged.phone == "12345"


def test_strict_rejects_malformed_contact_values():
    ai = {"email": "jane at example", "phone": "12345"}
    merged = merge(_heuristic(), ai, MergeStrictness.STRICT)
    assert merged.email == "jane@example.com"
    assert merged.phone == "555-123-4567"


def test_strict_accepts_well_formed_contact_values():
    ai = {"email": "jane.roe@gmail.com", "phone": "+1 (555) 987-6543"}
    merged = merge(_heuristic(), ai, MergeStrictness.STRICT)
    assert merged.email == "jane.roe@gmail.com"
    assert merged.phone == "+1 (555) 987-6543"

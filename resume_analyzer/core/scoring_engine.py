"""
Deterministic résumé scoring, used when the AI oracle is unavailable.

Sub-scores (totals to 100):
  ATS compatibility  0-30
  Keyword coverage   0-30
  Content quality    0-20
  Role relevance     0-20
"""

import math
from typing import List, Optional

from resume_analyzer.core.schemas import (
    AnalysisResult,
    ExtractedProfile,
    ExtractionMetadata,
    IndustrySpecific,
    KeywordMatches,
    Personalization,
    SubScores,
)
from resume_analyzer.core.validator import validate


ATS_MAX = 30
KEYWORD_MAX = 30
CONTENT_MAX = 20
RELEVANCE_MAX = 20

TRENDING_KEYWORDS = [
    "DevOps", "Microservices", "Cloud Computing", "Agile", "Scrum",
    "Continuous Integration", "Continuous Deployment", "API Development",
]

GENERIC_SUGGESTIONS = [
    "Add specific metrics to quantify your achievements (e.g., 'increased efficiency by 30%', 'managed team of 5 developers')",
    "Include relevant certifications or online courses to show continuous learning",
    "Tailor your summary to the specific role you're targeting",
    "Emphasize leadership and teamwork experiences more prominently",
]

INDUSTRY_RECOMMENDATIONS = [
    "Highlight experience with version control systems like Git in your summary",
    "Emphasize experience with testing frameworks relevant to the role",
    "Include metrics that show impact of your contributions",
]


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() is banker's rounding (round(2.5) == 2); scores use the
    schoolbook rule instead.

    Examples:
        >>> round_half_up(7.5)
        8
        >>> round_half_up(2.5)
        3
    """
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def _capped(value: float, maximum: int) -> int:
    return min(round_half_up(value), maximum)


def ats_score(profile: ExtractedProfile, metadata: ExtractionMetadata) -> int:
    score = 0.0
    if profile.name and profile.email:
        score += 10
    sections = len(metadata.sections_identified)
    if sections >= 4:
        score += 10
    elif sections >= 2:
        score += 5
    score += round_half_up(metadata.completeness_score * 10)
    return _capped(score, ATS_MAX)


def keyword_score(profile: ExtractedProfile) -> int:
    technical = len(profile.skills.technical)
    if technical >= 15:
        score = 15.0
    elif technical >= 10:
        score = 12.0
    elif technical >= 5:
        score = 8.0
    else:
        score = technical * 1.5
    score += min(len(profile.skills.soft), 5)
    if profile.experience:
        score += 5
    if any(e.responsibilities for e in profile.experience):
        score += 5
    return _capped(score, KEYWORD_MAX)


def content_score(profile: ExtractedProfile) -> int:
    experience = len(profile.experience)
    score = 8.0 if experience >= 3 else experience * 2.5

    technical = len(profile.skills.technical)
    if technical >= 10:
        score += 7
    elif technical >= 5:
        score += 4
    elif technical > 0:
        score += 2

    if profile.projects:
        score += 2
    if profile.certifications:
        score += 2
    if profile.summary and len(profile.summary) > 50:
        score += 1
    return _capped(score, CONTENT_MAX)


def relevance_score(profile: ExtractedProfile) -> int:
    score = 0.0
    if profile.education:
        score += 5
    experience = len(profile.experience)
    score += 10 if experience >= 3 else experience * 3
    if profile.certifications:
        score += 3
    if profile.projects:
        score += 2
    return _capped(score, RELEVANCE_MAX)


def _strengths(profile: ExtractedProfile) -> List[str]:
    strengths: List[str] = []
    technical = profile.skills.technical
    if len(technical) >= 5:
        strengths.append(f"Strong technical skills in {', '.join(technical[:3])}")
    elif technical:
        strengths.append(f"Technical skills listed: {', '.join(technical)}")
    if len(profile.experience) >= 2:
        strengths.append("Good work experience with progressive responsibilities")
    elif profile.experience:
        strengths.append("Relevant work experience included")
    if any(e.responsibilities for e in profile.experience):
        strengths.append("Work history describes concrete responsibilities")
    if profile.projects:
        strengths.append("Relevant projects that demonstrate practical skills")
    if profile.certifications:
        strengths.append("Additional certifications that enhance credibility")
    if profile.education:
        strengths.append("Education background is clearly stated")
    return strengths


def _weaknesses(profile: ExtractedProfile) -> List[str]:
    weaknesses: List[str] = []
    if not profile.summary:
        weaknesses.append("Missing a professional summary")
    elif len(profile.summary) <= 50:
        weaknesses.append("Summary section could be more compelling and specific")
    if not profile.experience:
        weaknesses.append("No work experience detected")
    elif not any(e.responsibilities for e in profile.experience):
        weaknesses.append("Work experience lacks described responsibilities and achievements")
    if len(profile.skills.technical) < 5:
        weaknesses.append("Could benefit from a broader technical skill set")
    if not profile.education:
        weaknesses.append("Education section is missing")
    if not profile.email or not profile.phone:
        weaknesses.append("Contact information is incomplete")
    return weaknesses


def _suggestions(profile: ExtractedProfile) -> List[str]:
    suggestions: List[str] = []
    if not profile.summary:
        suggestions.append("Add a short professional summary tailored to the role you're targeting")
    if profile.experience and not any(e.responsibilities for e in profile.experience):
        suggestions.append("Describe your responsibilities and achievements under each role")
    if not profile.certifications:
        suggestions.append("Include relevant certifications or online courses to show continuous learning")
    if not profile.projects:
        suggestions.append("Add projects that show how you apply your skills")
    if "JavaScript" in profile.skills.technical:
        suggestions.append("Consider highlighting your JavaScript framework expertise more prominently")
    return suggestions or list(GENERIC_SUGGESTIONS)


def custom_feedback(profile: ExtractedProfile) -> str:
    latest = profile.experience[0].position if profile.experience and profile.experience[0].position else "your field"
    return (
        f"Based on your experience in {latest}, you have strong foundational skills. "
        "To improve your competitiveness for senior roles, focus on showcasing measurable impacts "
        "of your work and obtaining additional certifications in emerging technologies."
    )


def _trending_matches(profile: ExtractedProfile) -> KeywordMatches:
    skills = [s.lower() for s in profile.skills.technical + profile.skills.soft]
    matched, missing = [], []
    for keyword in TRENDING_KEYWORDS:
        k = keyword.lower()
        if any(k in s or s in k for s in skills):
            matched.append(keyword)
        else:
            missing.append(keyword)
    return KeywordMatches(matched=matched, missing=missing)


def _fit_label(overall: int) -> str:
    if overall >= 75:
        return "strong"
    if overall >= 50:
        return "good"
    return "developing"


def score_profile(profile: ExtractedProfile, metadata: Optional[ExtractionMetadata] = None) -> AnalysisResult:
    """
    Score a profile deterministically.

    Args:
        profile: Extracted profile
        metadata: Validation metadata; computed when not given

    Returns:
        AnalysisResult with source "heuristic"; overall score is the sum of
        the capped sub-scores
    """
    if metadata is None:
        metadata = validate(profile, "Heuristic-Only")

    scores = SubScores(
        ats=ats_score(profile, metadata),
        keyword=keyword_score(profile),
        content=content_score(profile),
        relevance=relevance_score(profile),
    )
    overall = scores.ats + scores.keyword + scores.content + scores.relevance

    return AnalysisResult(
        overall_score=overall,
        scores=scores,
        strengths=_strengths(profile),
        weaknesses=_weaknesses(profile),
        suggestions=_suggestions(profile),
        industry_specific=IndustrySpecific(
            recommendations=list(INDUSTRY_RECOMMENDATIONS),
            trending_keywords=list(TRENDING_KEYWORDS),
        ),
        keyword_matches=_trending_matches(profile),
        personalization=Personalization(
            target_role_fit=_fit_label(overall),
            career_goals_alignment="medium" if profile.summary else "unclear",
            custom_feedback=custom_feedback(profile),
        ),
        source="heuristic",
    )

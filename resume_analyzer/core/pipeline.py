"""
Résumé analysis pipeline.

    text -> field extractors -> merge with oracle output -> validator
    profile -> oracle evaluation or scoring engine
    profile + job description -> oracle matching or keyword matcher

The oracle is optional and injected; every oracle call has a deterministic
fallback, so a failing or absent oracle only changes the result's method/source.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from resume_analyzer.config import Settings
from resume_analyzer.core.exceptions import InputError
from resume_analyzer.core.keyword_matcher import build_recommendations, match_keywords
from resume_analyzer.core.merger import MergeStrictness, merge
from resume_analyzer.core.oracle import OpenAIResumeOracle, ResumeOracle
from resume_analyzer.core.profile_parser import extract_profile
from resume_analyzer.core.schemas import (
    AnalysisResult,
    ExtractedProfile,
    ExtractionResult,
    MatchResult,
    SubScores,
)
from resume_analyzer.core.scoring_engine import (
    ATS_MAX,
    CONTENT_MAX,
    KEYWORD_MAX,
    RELEVANCE_MAX,
    round_half_up,
    score_profile,
)
from resume_analyzer.core.validator import validate

logger = logging.getLogger(__name__)


MIN_TEXT_LENGTH = 20
SUB_SCORE_LIMITS = {"ats": ATS_MAX, "keyword": KEYWORD_MAX, "content": CONTENT_MAX, "relevance": RELEVANCE_MAX}


def format_file_size(size_bytes: Optional[int]) -> Optional[str]:
    """
    Human readable file size.

    Examples:
        >>> format_file_size(1260)
        '1.23 KB'
        >>> format_file_size(0)
        '0 Bytes'
    """
    if size_bytes is None:
        return None
    if size_bytes <= 0:
        return "0 Bytes"
    size = float(size_bytes)
    for unit in ("Bytes", "KB", "MB"):
        if size < 1024:
            return f"{size:.2f} {unit}" if unit != "Bytes" else f"{int(size)} Bytes"
        size /= 1024
    return f"{size:.2f} GB"


def ensure_usable_text(raw_text: Optional[str]) -> str:
    """
    Raises:
        InputError: when the text is shorter than 20 characters after
            whitespace normalization
    """
    normalized = " ".join((raw_text or "").split())
    if len(normalized) < MIN_TEXT_LENGTH:
        raise InputError(
            "Resume text is too short to analyze",
            length=len(normalized),
        )
    return raw_text


def _clamp(value: Any, maximum: int) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(round_half_up(number), maximum))


def _strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, (str, int, float)) and str(v).strip()]


def analysis_from_oracle(data: Mapping[str, Any]) -> AnalysisResult:
    """
    Build an AnalysisResult from oracle JSON.

    Sub-scores are clamped to their ranges and the overall score is always
    their sum, whatever the oracle reported.

    Raises:
        ValueError: when the payload has no usable "scores" object
    """
    raw_scores = data.get("scores")
    if not isinstance(raw_scores, Mapping) or not any(k in raw_scores for k in SUB_SCORE_LIMITS):
        raise ValueError("oracle evaluation has no scores")

    scores = SubScores(**{k: _clamp(raw_scores.get(k), limit) for k, limit in SUB_SCORE_LIMITS.items()})
    industry = data.get("industrySpecific") if isinstance(data.get("industrySpecific"), Mapping) else {}
    matches = data.get("keywordMatches") if isinstance(data.get("keywordMatches"), Mapping) else {}
    personal = data.get("personalization") if isinstance(data.get("personalization"), Mapping) else {}

    return AnalysisResult(
        overall_score=scores.ats + scores.keyword + scores.content + scores.relevance,
        scores=scores,
        strengths=_strings(data.get("strengths")),
        weaknesses=_strings(data.get("weaknesses")),
        suggestions=_strings(data.get("suggestions")),
        industry_specific={
            "recommendations": _strings(industry.get("recommendations")),
            "trending_keywords": _strings(industry.get("trendingKeywords")),
        },
        keyword_matches={
            "matched": _strings(matches.get("matched")),
            "missing": _strings(matches.get("missing")),
        },
        personalization={
            "target_role_fit": str(personal.get("targetRoleFit") or ""),
            "career_goals_alignment": str(personal.get("careerGoalsAlignment") or ""),
            "custom_feedback": str(personal.get("customFeedback") or ""),
        },
        source="ai",
    )


def match_from_oracle(data: Mapping[str, Any], resume_keyword_count: int) -> MatchResult:
    """
    Build a MatchResult from oracle JSON.

    Raises:
        ValueError: when the payload has no match percentage
    """
    if "matchPercentage" not in data:
        raise ValueError("oracle match has no matchPercentage")
    matched = _strings(data.get("matched"))
    missing = _strings(data.get("missing"))
    recommendations = _strings(data.get("recommendations"))
    if len(recommendations) < 3:
        recommendations = recommendations + build_recommendations(matched, missing)[len(recommendations):]

    total_job = data.get("totalJobKeywords")
    return MatchResult(
        match_percentage=_clamp(data.get("matchPercentage"), 100),
        matched=matched,
        missing=missing,
        total_job_keywords=total_job if isinstance(total_job, int) and total_job >= 0 else len(matched) + len(missing),
        total_resume_keywords=resume_keyword_count,
        recommendations=recommendations,
        analysis=str(data["analysis"]) if data.get("analysis") else None,
        source="ai",
    )


class ResumePipeline:
    """
    Extraction, scoring and matching with an optional AI oracle.

    Args:
        oracle: Any ResumeOracle; None means heuristic-only
        strictness: How AI email/phone values are vetted during merging
    """

    def __init__(self, oracle: Optional[ResumeOracle] = None, strictness: MergeStrictness = MergeStrictness.LENIENT):
        self.oracle = oracle
        self.strictness = strictness

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResumePipeline":
        oracle = OpenAIResumeOracle.from_settings(settings) if settings.openai_api_key else None
        return cls(oracle=oracle, strictness=MergeStrictness(settings.merge_strictness.lower()))

    def extract_heuristic(
        self,
        raw_text: str,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> ExtractionResult:
        """Extraction without the oracle."""
        text = ensure_usable_text(raw_text)
        profile = extract_profile(text)
        return ExtractionResult(
            profile=profile,
            metadata=validate(profile, "Heuristic-Only"),
            file_name=file_name,
            file_size=format_file_size(file_size),
        )

    async def extract(
        self,
        raw_text: str,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> ExtractionResult:
        """
        Extract a profile, merging oracle output over the heuristic result.

        Raises:
            InputError: text shorter than 20 characters
        """
        text = ensure_usable_text(raw_text)
        heuristic = extract_profile(text)

        ai_data: Optional[Dict[str, Any]] = None
        if self.oracle is not None:
            try:
                ai_data = await self.oracle.extract_structured(text)
            except Exception as exc:
                logger.warning("oracle extraction failed, using heuristic profile: %s", exc)
                ai_data = None
            if ai_data is not None and not isinstance(ai_data, Mapping):
                logger.warning("oracle extraction returned %s, using heuristic profile", type(ai_data).__name__)
                ai_data = None

        if ai_data is not None:
            profile = merge(heuristic, ai_data, self.strictness)
            method = "AI-Augmented"
        else:
            profile = heuristic
            method = "Heuristic-Only"

        metadata = validate(profile, method)
        logger.info("extracted profile (%s), completeness %.2f", method, metadata.completeness_score)
        return ExtractionResult(
            profile=profile,
            metadata=metadata,
            file_name=file_name,
            file_size=format_file_size(file_size),
        )

    async def score(self, profile: ExtractedProfile) -> AnalysisResult:
        """Evaluate a profile; falls back to the scoring engine."""
        if self.oracle is not None:
            try:
                return analysis_from_oracle(await self.oracle.evaluate(profile))
            except Exception as exc:
                logger.warning("oracle evaluation failed, scoring deterministically: %s", exc)
        return score_profile(profile)

    async def match(self, profile: ExtractedProfile, job_description: str) -> MatchResult:
        """Match a profile against a job description; falls back to the keyword matcher."""
        if self.oracle is not None:
            try:
                data = await self.oracle.match_job(profile, job_description)
                return match_from_oracle(data, len(profile.skills.technical) + len(profile.skills.soft))
            except Exception as exc:
                logger.warning("oracle match failed, matching deterministically: %s", exc)
        return match_keywords(profile, job_description)

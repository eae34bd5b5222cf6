"""
Deterministic job description matching, used when the AI oracle is unavailable.

Job keywords come from a fixed vocabulary searched as substrings of the job
description; the résumé side is the candidate's technical and soft skills.
"""

from typing import List

from resume_analyzer.core.schemas import ExtractedProfile, MatchResult
from resume_analyzer.core.scoring_engine import round_half_up


KEYWORD_VOCABULARY = [
    "javascript", "react", "node.js", "python", "java", "angular", "vue", "html", "css",
    "sql", "mongodb", "express", "api", "rest", "agile", "scrum", "git", "github", "docker",
    "kubernetes", "aws", "azure", "gcp", "ci/cd", "testing", "debugging", "optimization",
    "leadership", "communication", "teamwork", "problem-solving", "design", "architecture",
    "security", "performance", "scalability", "microservices", "devops", "full-stack",
    "typescript", "graphql", "jest", "redux", "webpack", "sass", "bootstrap", "material-ui",
    "postgresql", "mysql", "redis", "elasticsearch", "firebase", "heroku", "netlify",
]

MAX_MISSING = 10
MIN_RECOMMENDATIONS = 3
FILLER_RECOMMENDATIONS = [
    "Tailor your summary to mirror the language of the job description",
    "Quantify achievements that relate to the role's core requirements",
    "Move the most relevant skills and experience to the top of your résumé",
]


def extract_job_keywords(job_description: str) -> List[str]:
    """
    Vocabulary terms present in the job description, in vocabulary order.

    Examples:
        >>> extract_job_keywords("We use React, Node.js and Agile")
        ['react', 'node.js', 'agile']
    """
    lowered = (job_description or "").lower()
    return [keyword for keyword in KEYWORD_VOCABULARY if keyword in lowered]


MIN_CONTAINED_LENGTH = 3


def _matches(job_keyword: str, resume_keywords: List[str]) -> bool:
    k = job_keyword.lower()
    # "C" or "Go" on the résumé would otherwise match "react" and "mongodb"
    return any(
        k in r or (len(r) >= MIN_CONTAINED_LENGTH and r in k)
        for r in resume_keywords
        if r
    )


def build_recommendations(matched: List[str], missing: List[str]) -> List[str]:
    recommendations = [
        f"Add experience or projects that demonstrate {keyword}" for keyword in missing[:3]
    ]
    if matched:
        recommendations.append(f"Highlight your strengths in {', '.join(matched[:3])} prominently")
    for filler in FILLER_RECOMMENDATIONS:
        if len(recommendations) >= MIN_RECOMMENDATIONS:
            break
        recommendations.append(filler)
    return recommendations


def match_keywords(profile: ExtractedProfile, job_description: str) -> MatchResult:
    """
    Match a profile against a job description.

    Matching is bidirectional case-insensitive substring containment, so
    "React" on the résumé matches "react" in the job description and
    "Node" would match "node.js". Résumé skills shorter than three
    characters only match exactly.

    Examples:
        >>> from resume_analyzer.core.schemas import Skills
        >>> p = ExtractedProfile(skills=Skills(technical=["React", "AWS"]))
        >>> match_keywords(p, "react, node.js, agile").match_percentage
        33
    """
    job_keywords = extract_job_keywords(job_description)
    resume_keywords = [k.lower().strip() for k in profile.skills.technical + profile.skills.soft]

    matched = [k for k in job_keywords if _matches(k, resume_keywords)]
    missing = [k for k in job_keywords if not _matches(k, resume_keywords)][:MAX_MISSING]

    total = len(matched) + len(missing)
    percentage = round_half_up(len(matched) / total * 100) if total else 0

    return MatchResult(
        match_percentage=percentage,
        matched=matched,
        missing=missing,
        total_job_keywords=len(job_keywords),
        total_resume_keywords=len(resume_keywords),
        recommendations=build_recommendations(matched, missing),
        analysis=f"{len(matched)} of {total} job keywords found in your résumé" if total else None,
        source="heuristic",
    )

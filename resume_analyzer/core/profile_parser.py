import logging

from resume_analyzer.core.contact_parser import (
    extract_email,
    extract_github,
    extract_linkedin,
    extract_location,
    extract_name,
    extract_phone,
)
from resume_analyzer.core.education_parser import extract_education
from resume_analyzer.core.experience_parser import extract_experience
from resume_analyzer.core.schemas import ExtractedProfile, Skills
from resume_analyzer.core.section_parsers import (
    extract_certifications,
    extract_interests,
    extract_languages,
    extract_projects,
    extract_summary,
)
from resume_analyzer.core.skills_parser import extract_soft_skills, extract_technical_skills

logger = logging.getLogger(__name__)


def extract_profile(text: str) -> ExtractedProfile:
    """
    Run every field extractor over the résumé text.

    Pure: the same text always yields the same profile.
    """
    text = text or ""
    profile = ExtractedProfile(
        name=extract_name(text),
        email=extract_email(text),
        phone=extract_phone(text),
        address=extract_location(text),
        summary=extract_summary(text),
        github=extract_github(text),
        linkedin=extract_linkedin(text),
        experience=extract_experience(text),
        education=extract_education(text),
        skills=Skills(
            technical=extract_technical_skills(text),
            soft=extract_soft_skills(text),
        ),
        projects=extract_projects(text),
        certifications=extract_certifications(text),
        languages=extract_languages(text),
        interests=extract_interests(text),
    )
    logger.info(
        "heuristic extraction: %d experience, %d education, %d technical skills",
        len(profile.experience),
        len(profile.education),
        len(profile.skills.technical),
    )
    return profile

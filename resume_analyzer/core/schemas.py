from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Literal, Optional


ExtractionMethod = Literal["AI-Augmented", "Heuristic-Only"]
ResultSource = Literal["ai", "heuristic"]


class CamelModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawDocument(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    file_name: str
    file_size_bytes: int = Field(..., ge=0)
    mime_type: str
    text: str


class ExperienceEntry(CamelModel):
    company: Optional[str] = None
    position: Optional[str] = None
    duration: Optional[str] = None  # e.g. "Jan 2020 - Present"
    responsibilities: List[str] = Field(default_factory=list)


class EducationEntry(CamelModel):
    """Education entry in the extracted profile."""
    institution: Optional[str] = None  # University, College, Institute name
    degree: Optional[str] = None  # Bachelor of Science, BSc, MBA, etc.
    dates: Optional[str] = None  # "2014 - 2018" or a single graduation year
    gpa: Optional[str] = None


class Skills(CamelModel):
    technical: List[str] = Field(default_factory=list)
    soft: List[str] = Field(default_factory=list)


class ProjectEntry(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)


class CertificationEntry(CamelModel):
    name: Optional[str] = None
    issuer: Optional[str] = None
    date: Optional[str] = None


class LanguageEntry(CamelModel):
    language: Optional[str] = None
    proficiency: Optional[str] = None


class ExtractedProfile(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    summary: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)
    languages: List[LanguageEntry] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)


class ExtractionMetadata(CamelModel):
    method: ExtractionMethod
    timestamp: str = Field(..., description="UTC ISO-8601 time of extraction")
    sections_identified: List[str] = Field(default_factory=list)
    completeness_score: float = Field(..., ge=0.0, le=1.0)
    validation_issues: List[str] = Field(default_factory=list)
    extraction_errors: List[str] = Field(default_factory=list)
    extraction_confidence: float = Field(..., ge=0.0, le=1.0, description="0.95 AI-augmented, 0.6 heuristic-only")
    field_confidence: Dict[str, float] = Field(default_factory=dict)


class ExtractionResult(CamelModel):
    profile: ExtractedProfile
    metadata: ExtractionMetadata
    file_name: Optional[str] = None
    file_size: Optional[str] = None  # human readable, "1.23 KB"


class SubScores(CamelModel):
    ats: int = Field(..., ge=0, le=30)
    keyword: int = Field(..., ge=0, le=30)
    content: int = Field(..., ge=0, le=20)
    relevance: int = Field(..., ge=0, le=20)


class IndustrySpecific(CamelModel):
    recommendations: List[str] = Field(default_factory=list)
    trending_keywords: List[str] = Field(default_factory=list)


class KeywordMatches(CamelModel):
    matched: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


class Personalization(CamelModel):
    target_role_fit: str = ""
    career_goals_alignment: str = ""
    custom_feedback: str = ""


class AnalysisResult(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    overall_score: int = Field(..., ge=0, le=100)
    scores: SubScores
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    industry_specific: IndustrySpecific = Field(default_factory=IndustrySpecific)
    keyword_matches: KeywordMatches = Field(default_factory=KeywordMatches)
    personalization: Personalization = Field(default_factory=Personalization)
    source: ResultSource = "heuristic"


class MatchResult(CamelModel):
    match_percentage: int = Field(..., ge=0, le=100)
    matched: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    total_job_keywords: int = Field(default=0, ge=0)
    total_resume_keywords: int = Field(default=0, ge=0)
    recommendations: List[str] = Field(default_factory=list)
    analysis: Optional[str] = None
    source: ResultSource = "heuristic"


# Display strings shown to people in place of missing values. Extractors never
# produce these; they are only added by display_placeholders().
COMPANY_PLACEHOLDER = "Company Not Specified"
POSITION_PLACEHOLDER = "Position Not Specified"
DURATION_PLACEHOLDER = "Duration Not Specified"
INSTITUTION_PLACEHOLDER = "Institution Not Specified"
DEGREE_PLACEHOLDER = "Degree Not Specified"
DATES_PLACEHOLDER = "Dates Not Specified"


def display_placeholders(profile: ExtractedProfile) -> ExtractedProfile:
    """
    Return a copy of the profile with missing entry fields replaced by
    human readable placeholder text.

    The input profile is left untouched.

    Examples:
        >>> p = ExtractedProfile(education=[EducationEntry(institution="MIT")])
        >>> display_placeholders(p).education[0].degree
        'Degree Not Specified'
    """
    experience = [
        e.model_copy(update={
            "company": e.company or COMPANY_PLACEHOLDER,
            "position": e.position or POSITION_PLACEHOLDER,
            "duration": e.duration or DURATION_PLACEHOLDER,
        })
        for e in profile.experience
    ]
    education = [
        e.model_copy(update={
            "institution": e.institution or INSTITUTION_PLACEHOLDER,
            "degree": e.degree or DEGREE_PLACEHOLDER,
            "dates": e.dates or DATES_PLACEHOLDER,
        })
        for e in profile.education
    ]
    return profile.model_copy(update={"experience": experience, "education": education})

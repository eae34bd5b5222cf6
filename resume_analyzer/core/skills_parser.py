"""
Technical and soft skill extraction.

Two passes are unioned:
  - pattern pass: list items inside the Skills section
  - dictionary pass: known skills found anywhere in the document

Duplicates are removed case-insensitively; when a token is also a dictionary
skill the dictionary spelling is kept ("aws" -> "AWS").
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from resume_analyzer.core.sections import find_section
from resume_analyzer.core.text_normalization import clean_lines, strip_bullet, title_case_each_word

logger = logging.getLogger(__name__)


TECHNICAL_SKILLS = [
    # Languages
    "JavaScript", "TypeScript", "Python", "Java", "C#", "C++", "C", "Go", "Rust", "PHP",
    "Ruby", "Swift", "Kotlin", "Scala", "R", "MATLAB", "Perl", "Dart", "Objective-C",
    # Front end
    "React", "React Native", "Vue.js", "Angular", "Svelte", "Next.js", "Nuxt.js", "Redux",
    "HTML", "CSS", "Sass", "Tailwind CSS", "Bootstrap", "jQuery", "Webpack", "Flutter",
    # Back end
    "Node.js", "Express", "Django", "Flask", "FastAPI", "Spring Boot", "Spring",
    "Laravel", "Ruby on Rails", "ASP.NET", ".NET", "GraphQL", "REST", "gRPC",
    # Data stores
    "SQL", "PostgreSQL", "MySQL", "MongoDB", "Redis", "SQLite", "Oracle", "Cassandra",
    "DynamoDB", "Elasticsearch", "Firebase", "Supabase",
    # Cloud and infrastructure
    "AWS", "Azure", "GCP", "Google Cloud", "Heroku", "Netlify", "Vercel",
    "Docker", "Kubernetes", "Jenkins", "Terraform", "Ansible", "Nginx",
    "CI/CD", "DevOps", "Linux", "Bash", "PowerShell",
    # Tooling and process
    "Git", "GitHub", "GitLab", "Bitbucket", "Jira", "Confluence", "Postman", "Figma",
    "Jest", "Cypress", "Selenium", "Pytest", "Agile", "Scrum", "Kanban", "TDD",
    # Data and messaging
    "Pandas", "NumPy", "TensorFlow", "PyTorch", "scikit-learn", "Machine Learning",
    "Deep Learning", "Data Analysis", "Power BI", "Tableau", "Excel",
    "Kafka", "RabbitMQ", "Microservices",
]

SOFT_SKILLS = [
    "Communication", "Leadership", "Teamwork", "Problem Solving", "Critical Thinking",
    "Time Management", "Adaptability", "Creativity", "Collaboration", "Interpersonal Skills",
    "Emotional Intelligence", "Decision Making", "Conflict Resolution", "Negotiation",
    "Project Management", "Organization", "Attention to Detail", "Multitasking",
    "Customer Service", "Presentation Skills", "Public Speaking", "Mentoring",
    "Work Ethic", "Self-Motivated", "Flexibility", "Analytical Skills", "Empathy",
    "Active Listening", "Strategic Thinking", "Team Building", "Stakeholder Management",
    "Resilience", "Accountability", "Coaching", "Delegation",
]

# Dictionary entries that are also ordinary English words; matched only in
# their usual capitalisation
CASE_SENSITIVE_SKILLS = {"C", "R", "Go", "Express", "Swift", "Rust", "Ruby", "Spring", "Oracle", "Excel", "Dart", "Flutter", "REST"}

SKILL_BLACKLIST_RE = re.compile(
    r"^(?:experience|experienced|knowledge|skills?|proficient|proficiency|familiar|expert|"
    r"advanced|intermediate|basic|beginner|working|strong|good|solid|excellent|"
    r"technical|soft|tools?|languages?|frameworks?|libraries|databases?|others?|etc|"
    r"bachelor|master|degree|university|college|years?)$",
    re.IGNORECASE,
)
LABEL_RE = re.compile(r"^([A-Za-z][A-Za-z &/\-]{0,40}?)\s*:\s*(.*)$|^([A-Za-z][A-Za-z &/]{0,40}?)\s+[\-–]\s+(.*)$")
SOFT_LABEL_RE = re.compile(r"\b(?:soft|interpersonal|personal)\b", re.IGNORECASE)
TOKEN_SPLIT_RE = re.compile(r"\s*(?:[,;/|•·]|\s+and\s+|\s+&\s+)\s*", re.IGNORECASE)
# Profile links and addresses that sit inside a Skills section
LINK_LINE_RE = re.compile(r"https?://|www\.|@|\b[\w-]+\.(?:com|io|org|net|dev)/", re.IGNORECASE)

MAX_TOKEN_LENGTH = 40
MAX_TOKEN_WORDS = 4


def _skill_pattern(skill: str) -> re.Pattern:
    flags = 0 if skill in CASE_SENSITIVE_SKILLS else re.IGNORECASE
    return re.compile(r"(?<![A-Za-z0-9.#+])" + re.escape(skill) + r"(?![A-Za-z0-9#+]|\.[A-Za-z])", flags)


_TECHNICAL_PATTERNS = [(skill, _skill_pattern(skill)) for skill in TECHNICAL_SKILLS]
_SOFT_PATTERNS = [(skill, _skill_pattern(skill)) for skill in SOFT_SKILLS]
# "CI/CD" must survive the "/" split
_UNSPLITTABLE = {s.lower(): s for s in TECHNICAL_SKILLS if "/" in s}


def _dictionary_hits(text: str, patterns) -> List[str]:
    return [skill for skill, pattern in patterns if pattern.search(text)]


def _clean_token(token: str) -> Optional[str]:
    t = token.strip().strip(".()[]*-•").strip()
    if len(t) < 1 or len(t) > MAX_TOKEN_LENGTH:
        return None
    if len(t.split()) > MAX_TOKEN_WORDS or t.isdigit():
        return None
    if SKILL_BLACKLIST_RE.match(t):
        return None
    if not re.search(r"[A-Za-z]", t):
        return None
    # Lower-case tokens get Title Case; anything already cased is kept ("AWS")
    return title_case_each_word(t) if t.islower() else t[0].upper() + t[1:]


def _split_tokens(text: str) -> List[str]:
    protected = text
    for lower, skill in _UNSPLITTABLE.items():
        protected = re.sub(re.escape(lower), skill.replace("/", "\x00"), protected, flags=re.IGNORECASE)
    return [tok.replace("\x00", "/") for tok in TOKEN_SPLIT_RE.split(protected) if tok]


def _pattern_tokens(section_text: Optional[str]) -> Dict[str, List[str]]:
    """List items of the Skills section, split into technical and soft by label."""
    found: Dict[str, List[str]] = {"technical": [], "soft": []}
    if not section_text:
        return found

    for idx, raw in enumerate(clean_lines(section_text)):
        line = strip_bullet(raw)
        if LINK_LINE_RE.search(line):
            continue
        bucket = "technical"
        m = LABEL_RE.match(line)
        if m:
            label = m.group(1) if m.group(1) is not None else m.group(3)
            line = m.group(2) if m.group(1) is not None else m.group(4)
            if SOFT_LABEL_RE.search(label):
                bucket = "soft"
        elif idx == 0:
            # Bare heading line ("SKILLS")
            continue

        for token in _split_tokens(line):
            cleaned = _clean_token(token)
            if cleaned:
                found[bucket].append(cleaned)
    return found


def _union(*groups: Iterable[str], canonical: Iterable[str] = ()) -> List[str]:
    """Case-insensitive ordered union; canonical spellings replace token spellings."""
    canon = {s.lower(): s for s in canonical}
    merged: Dict[str, str] = {}
    for group in groups:
        for item in group:
            key = item.lower()
            if key not in merged:
                merged[key] = canon.get(key, item)
    return list(merged.values())


def extract_technical_skills(text: str) -> List[str]:
    """
    Extract technical skills.

    Examples:
        >>> extract_technical_skills("SKILLS\\nTechnical: python, React, aws")
        ['Python', 'React', 'AWS']
    """
    if not text:
        return []
    section = find_section(text, "skills")
    tokens = _pattern_tokens(section)
    soft_keys = {s.lower() for s in SOFT_SKILLS} | {s.lower() for s in tokens["soft"]}
    pattern_hits = [t for t in tokens["technical"] if t.lower() not in soft_keys]
    dictionary_hits = _dictionary_hits(text, _TECHNICAL_PATTERNS)
    skills = _union(pattern_hits, dictionary_hits, canonical=TECHNICAL_SKILLS)
    logger.debug("technical skills: %d from section, %d from dictionary", len(pattern_hits), len(dictionary_hits))
    return skills


def extract_soft_skills(text: str) -> List[str]:
    """
    Extract soft skills: dictionary matches over the whole document plus
    items listed under a "Soft"/"Interpersonal" label in the Skills section.
    """
    if not text:
        return []
    tokens = _pattern_tokens(find_section(text, "skills"))
    return _union(_dictionary_hits(text, _SOFT_PATTERNS), tokens["soft"], canonical=SOFT_SKILLS)

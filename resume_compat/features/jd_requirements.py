from __future__ import annotations

import logging
import re
from collections import Counter

from resume_compat.core.config import settings
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.schemas.job import (
    CompensationInfo,
    ExperienceLevel,
    JobRequirements,
    QualificationSections,
    SalaryRange,
)
from resume_compat.schemas.resume import dedupe_preserving_order

logger = logging.getLogger(__name__)

_SKILL_KEYWORDS: tuple[str, ...] = (
    # languages
    "javascript", "typescript", "python", "java", "c++", "c#", "php", "ruby", "go", "rust",
    "swift", "kotlin", "scala", "r", "matlab", "sql", "html", "css",
    # frameworks
    "react", "angular", "vue", "node.js", "express", "django", "flask", "spring", "laravel",
    "rails", "asp.net", "jquery", "bootstrap", "tailwind",
    # databases
    "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "oracle", "sqlite",
    # cloud and devops
    "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "git", "github", "gitlab",
    "terraform", "ansible", "chef", "puppet",
    # soft skills
    "leadership", "communication", "teamwork", "problem-solving", "analytical", "creative",
    "adaptable", "organized", "detail-oriented", "time-management", "collaboration",
    # business
    "project-management", "agile", "scrum", "kanban", "waterfall", "lean", "six-sigma",
    "data-analysis", "machine-learning", "artificial-intelligence", "blockchain",
)

_EXPERIENCE_LEVEL_KEYWORDS: tuple[tuple[str, ExperienceLevel], ...] = (
    ("entry", "entry-level"),
    ("junior", "entry-level"),
    ("associate", "entry-level"),
    ("mid", "mid-level"),
    ("intermediate", "mid-level"),
    ("senior", "senior-level"),
    ("lead", "senior-level"),
    ("principal", "senior-level"),
    ("staff", "senior-level"),
    ("manager", "management"),
    ("director", "management"),
    ("vp", "executive"),
    ("vice president", "executive"),
    ("cto", "executive"),
    ("ceo", "executive"),
)

_EDUCATION_KEYWORDS: tuple[str, ...] = (
    "bachelor", "bachelors", "bs", "ba", "bsc", "beng",
    "master", "masters", "ms", "ma", "msc", "meng", "mba",
    "phd", "doctorate", "doctoral",
    "associate", "diploma", "certificate",
    "computer science", "engineering", "mathematics", "physics",
    "business", "marketing", "finance", "accounting",
)

_CERTIFICATION_KEYWORDS: tuple[str, ...] = (
    "aws certified", "azure certified", "google cloud certified",
    "pmp", "scrum master", "cissp", "cisa", "cism",
    "comptia", "cisco", "microsoft certified", "oracle certified",
    "salesforce certified", "tableau certified",
)

_REQUIRED_INDICATORS: tuple[str, ...] = (
    "required", "must have", "essential", "mandatory", "necessary",
    "minimum", "at least", "should have", "need", "needs",
)
_PREFERRED_INDICATORS: tuple[str, ...] = (
    "preferred", "nice to have", "bonus", "plus", "advantage",
    "desirable", "ideal", "would be great", "additional",
)

_BENEFIT_KEYWORDS: tuple[str, ...] = (
    "health insurance", "dental", "vision", "401k", "retirement",
    "vacation", "pto", "paid time off", "flexible schedule",
    "remote work", "work from home", "stock options", "equity",
    "bonus", "gym membership", "learning budget", "conference",
)

_STOPWORDS: frozenset[str] = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by", "a", "an",
        "are", "is", "be", "will", "you", "your", "our", "we", "us", "this", "that", "these",
        "those", "as", "from", "have", "has", "who", "what", "which", "can", "able", "all",
        "any", "about", "into", "their", "they", "them", "its", "it's", "not", "than", "more",
        "most", "other", "such", "also", "well", "must", "should", "would", "may", "plus",
        "looking", "seeking", "join", "team", "role", "position", "candidate", "ideal",
        "including", "across", "within", "etc", "years", "year", "using", "work", "working",
    }
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?](?:\s|$)|\n")
_YEARS_RE = re.compile(r"(\d+)\s*(?:[-–]\s*\d+\s*)?\+?\s*(?:years?|yrs?)\b")
_TOKEN_RE = re.compile(r"[a-z][a-z0-9+#]*(?:[.\-][a-z0-9+#]+)*")
_QUALIFICATION_BULLET_RE = re.compile(r"^(?:[•\-*]|\d+\.)\s*")
_SALARY_PATTERNS = (
    re.compile(r"\$(\d{1,3}(?:,\d{3})*(?:\.\d{2})?)\s*-\s*\$(\d{1,3}(?:,\d{3})*(?:\.\d{2})?)"),
    re.compile(r"(\d{1,3}(?:,\d{3})*)\s*-\s*(\d{1,3}(?:,\d{3})*)\s*(?:usd|dollars?)"),
)


def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9+#]){re.escape(term)}(?![a-z0-9+#])")


_SKILL_PATTERNS = tuple((skill, _term_pattern(skill)) for skill in _SKILL_KEYWORDS)
_EDUCATION_PATTERNS = tuple((keyword, _term_pattern(keyword)) for keyword in _EDUCATION_KEYWORDS)
_CERTIFICATION_PATTERNS = tuple((keyword, _term_pattern(keyword)) for keyword in _CERTIFICATION_KEYWORDS)
_LEVEL_PATTERNS = tuple((_term_pattern(keyword), level) for keyword, level in _EXPERIENCE_LEVEL_KEYWORDS)


def _mentions_any(sentence: str, indicators: tuple[str, ...]) -> bool:
    return any(re.search(rf"(?<![a-z]){re.escape(indicator)}", sentence) for indicator in indicators)


def extract_job_skills(text: str) -> tuple[list[str], list[str]]:
    """Split dictionary skills into (required, preferred) by the sentence they appear in."""
    required: list[str] = []
    preferred: list[str] = []
    for sentence in _SENTENCE_SPLIT_RE.split((text or "").lower()):
        found = [skill for skill, pattern in _SKILL_PATTERNS if pattern.search(sentence)]
        if not found:
            continue
        if _mentions_any(sentence, _PREFERRED_INDICATORS):
            preferred.extend(found)
        else:
            required.extend(found)
    return dedupe_preserving_order(required), dedupe_preserving_order(preferred)


def extract_experience_level(text: str) -> ExperienceLevel:
    lowered = (text or "").lower()
    match = _YEARS_RE.search(lowered)
    if match is not None:
        years = int(match.group(1))
        if years <= int(get_scoring_value("job_analysis.entry_level_max_years", 2)):
            return "entry-level"
        if years <= int(get_scoring_value("job_analysis.mid_level_max_years", 4)):
            return "mid-level"
        return "senior-level"

    for pattern, level in _LEVEL_PATTERNS:
        if pattern.search(lowered):
            return level
    return "not-specified"


def extract_education_requirements(text: str) -> list[str]:
    lowered = (text or "").lower()
    return [keyword for keyword, pattern in _EDUCATION_PATTERNS if pattern.search(lowered)]


def extract_certification_requirements(text: str) -> list[str]:
    lowered = (text or "").lower()
    return [keyword for keyword, pattern in _CERTIFICATION_PATTERNS if pattern.search(lowered)]


def extract_job_keywords(text: str, *, limit: int | None = None) -> list[str]:
    tokens = [
        token
        for token in _TOKEN_RE.findall((text or "").lower())
        if len(token) > 2 and token not in _STOPWORDS
    ]
    cap = limit if limit is not None else settings.job_keyword_limit
    return [term for term, _ in Counter(tokens).most_common(cap)]


def analyze_job_description(text: str, *, keyword_limit: int | None = None) -> JobRequirements:
    required, preferred = extract_job_skills(text)
    requirements = JobRequirements(
        required_skills=required,
        preferred_skills=preferred,
        experience_level=extract_experience_level(text),
        education=extract_education_requirements(text),
        certifications=extract_certification_requirements(text),
        keywords=extract_job_keywords(text, limit=keyword_limit),
    )
    logger.debug(
        "job_description_analyzed required=%s preferred=%s level=%s keywords=%s",
        len(requirements.required_skills),
        len(requirements.preferred_skills),
        requirements.experience_level,
        len(requirements.keywords),
    )
    return requirements


def parse_qualification_sections(text: str) -> QualificationSections:
    sections: dict[str, list[str]] = {
        "required_qualifications": [],
        "preferred_qualifications": [],
        "responsibilities": [],
    }
    min_length = int(get_scoring_value("job_analysis.qualification_min_length", 10))
    current: str | None = None

    for raw_line in (text or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        lowered = line.lower()
        if "required" in lowered and ("qualification" in lowered or "skill" in lowered):
            current = "required_qualifications"
            continue
        if "preferred" in lowered or "nice to have" in lowered or "bonus" in lowered:
            current = "preferred_qualifications"
            continue
        if "responsibilit" in lowered or "duties" in lowered or "role" in lowered:
            current = "responsibilities"
            continue

        if current is None or not _QUALIFICATION_BULLET_RE.match(line):
            continue
        cleaned = _QUALIFICATION_BULLET_RE.sub("", line).strip()
        if len(cleaned) > min_length:
            sections[current].append(cleaned)

    return QualificationSections(**sections)


def _parse_amount(raw: str) -> int:
    return int(float(raw.replace(",", "").replace("$", "")))


def extract_compensation_info(text: str) -> CompensationInfo:
    lowered = (text or "").lower()
    salary_range: SalaryRange | None = None
    currency: str | None = None

    for pattern in _SALARY_PATTERNS:
        match = pattern.search(lowered)
        if match is None:
            continue
        salary_range = SalaryRange(min=_parse_amount(match.group(1)), max=_parse_amount(match.group(2)))
        currency = "USD"
        break

    benefits = [benefit for benefit in _BENEFIT_KEYWORDS if benefit in lowered]
    return CompensationInfo(salary_range=salary_range, currency=currency, benefits=benefits)

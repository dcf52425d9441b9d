from __future__ import annotations

from dataclasses import dataclass, field

from resume_compat.analysis.lexicons import PROFESSIONAL_KEYWORDS
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.resume import ResumeContent, dedupe_preserving_order


def resume_text_corpus(content: ResumeContent) -> str:
    """Summary, experience, skills and education text joined into one matchable string."""
    parts: list[str] = [content.summary or ""]
    parts.extend(experience.full_text for experience in content.experience)
    parts.extend(content.skills)
    parts.extend(
        " ".join(value for value in (edu.degree, edu.field, edu.institution) if value)
        for edu in content.education
    )
    return " ".join(parts).strip()


@dataclass(slots=True)
class KeywordMatch:
    score: float
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    achieved_weight: float = 0.0
    max_weight: float = 0.0
    total_keywords: int = 0


def _keyword_weights() -> tuple[float, float, float]:
    return (
        float(get_scoring_value("keywords.weights.required", 2.0)),
        float(get_scoring_value("keywords.weights.preferred", 1.5)),
        float(get_scoring_value("keywords.weights.general", 1.0)),
    )


def weighted_keyword_match(text: str, job: JobRequirements, *, empty_score: float) -> KeywordMatch:
    """Score substring matches of job keywords, weighting required > preferred > general.

    ``empty_score`` is returned when the job lists no keywords at all.
    """
    lowered = (text or "").lower()
    required_weight, preferred_weight, general_weight = _keyword_weights()
    groups = (
        (job.required_skills, required_weight),
        (job.preferred_skills, preferred_weight),
        (job.keywords, general_weight),
    )

    matched: list[str] = []
    missing: list[str] = []
    achieved = 0.0
    maximum = 0.0
    total = 0
    for keywords, weight in groups:
        for keyword in keywords:
            total += 1
            maximum += weight
            if keyword.lower() in lowered:
                achieved += weight
                matched.append(keyword)
            else:
                missing.append(keyword)

    score = (achieved / maximum) * 100 if maximum > 0 else empty_score
    return KeywordMatch(
        score=score,
        matched=dedupe_preserving_order(matched),
        missing=dedupe_preserving_order(missing),
        achieved_weight=achieved,
        max_weight=maximum,
        total_keywords=total,
    )


def professional_keyword_match(text: str) -> KeywordMatch:
    lowered = (text or "").lower()
    matched = [keyword for keyword in PROFESSIONAL_KEYWORDS if keyword in lowered]
    missing = [keyword for keyword in PROFESSIONAL_KEYWORDS if keyword not in lowered]
    score = min(100.0, (len(matched) / len(PROFESSIONAL_KEYWORDS)) * 100)
    return KeywordMatch(
        score=score,
        matched=matched,
        missing=missing,
        achieved_weight=float(len(matched)),
        max_weight=float(len(PROFESSIONAL_KEYWORDS)),
        total_keywords=len(PROFESSIONAL_KEYWORDS),
    )


def find_missing_keywords(content: ResumeContent, job: JobRequirements, *, limit: int | None = None) -> list[str]:
    lowered = resume_text_corpus(content).lower()
    missing = [keyword for keyword in job.all_keywords if keyword.lower() not in lowered]
    if limit is None:
        limit = int(get_scoring_value("recommendations.missing_keyword_limit", 10))
    return missing[:limit]

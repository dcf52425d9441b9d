from __future__ import annotations

import logging
import re
from typing import Any

from resume_compat.analysis.ats import analyze_ats_compatibility
from resume_compat.analysis.content import analyze_resume_content
from resume_compat.analysis.lexicons import LEADERSHIP_VERBS
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.core.scores import clamp_score, round_half_up
from resume_compat.features.job_type import classify_job_type, weights_for_job_type
from resume_compat.features.keyword_match import (
    professional_keyword_match,
    resume_text_corpus,
    weighted_keyword_match,
)
from resume_compat.schemas.ats import ATSCompatibilityResult
from resume_compat.schemas.content import ContentAnalysisResult
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.resume import ParsedSection, ResumeContent, WorkExperience
from resume_compat.schemas.scoring import (
    CategoryBreakdownItem,
    CategoryScores,
    CategoryWeights,
    ConfidenceLevel,
    JobType,
    ScoreBreakdown,
    ScoreExplanation,
    ScoringResult,
)

logger = logging.getLogger(__name__)

_DIGIT_RE = re.compile(r"\d")
_SUMMARY_BANDS: tuple[tuple[int, str], ...] = (
    (90, "Excellent match! Your resume aligns very well with the job requirements."),
    (80, "Strong match! Your resume shows good alignment with most requirements."),
    (70, "Good match! Some improvements could strengthen your application."),
    (60, "Moderate match. Several areas need improvement to better align with requirements."),
    (50, "Below average match. Significant improvements needed to meet job requirements."),
)
_POOR_SUMMARY = "Poor match. Major revisions needed to align with job requirements."


def _cfg(path: str, default: Any) -> Any:
    return get_scoring_value(f"scoring.{path}", default)


def calculate_keyword_score(content: ResumeContent, job_requirements: JobRequirements | None) -> float:
    text = resume_text_corpus(content)
    if job_requirements is None:
        return professional_keyword_match(text).score
    return weighted_keyword_match(text, job_requirements, empty_score=0.0).score


def _has_quantified_achievement(experience: WorkExperience) -> bool:
    for achievement in experience.achievements:
        lowered = achievement.lower()
        if _DIGIT_RE.search(lowered) or "%" in lowered or "increased" in lowered or "reduced" in lowered:
            return True
    return False


def _experience_entry_score(experience: WorkExperience, job_requirements: JobRequirements | None) -> float:
    score = float(_cfg("experience.base", 50))
    if _has_quantified_achievement(experience):
        score += float(_cfg("experience.quantified_bonus", 20))

    if job_requirements is not None:
        text = experience.full_text.lower()
        relevant = [*job_requirements.required_skills, *job_requirements.preferred_skills]
        matched = [skill for skill in relevant if skill.lower() in text]
        if matched:
            score += min(
                float(_cfg("experience.skill_match_cap", 30)),
                len(matched) * float(_cfg("experience.skill_match_points", 5)),
            )

    description = experience.description.lower()
    if any(verb in description for verb in LEADERSHIP_VERBS):
        score += float(_cfg("experience.leadership_bonus", 10))
    return min(100.0, score)


def calculate_experience_score(content: ResumeContent, job_requirements: JobRequirements | None) -> float:
    if not content.experience:
        return 0.0
    scores = [_experience_entry_score(experience, job_requirements) for experience in content.experience]
    return sum(scores) / len(scores)


def _skill_overlaps(resume_skills: list[str], wanted: str) -> bool:
    return any(skill in wanted or wanted in skill for skill in resume_skills)


def calculate_skills_score(content: ResumeContent, job_requirements: JobRequirements | None) -> float:
    resume_skills = [skill.lower() for skill in content.skills]
    if not resume_skills:
        return 0.0
    if job_requirements is None:
        return min(100.0, len(resume_skills) * float(_cfg("skills.per_skill_points", 5)))

    required_points = float(_cfg("skills.required_points", 10))
    preferred_points = float(_cfg("skills.preferred_points", 5))
    achieved = 0.0
    maximum = 0.0
    for skill in job_requirements.required_skills:
        maximum += required_points
        if _skill_overlaps(resume_skills, skill.lower()):
            achieved += required_points
    for skill in job_requirements.preferred_skills:
        maximum += preferred_points
        if _skill_overlaps(resume_skills, skill.lower()):
            achieved += preferred_points
    return min(100.0, achieved / maximum * 100) if maximum > 0 else 0.0


def calculate_category_scores(
    content: ResumeContent,
    sections: list[ParsedSection],
    job_requirements: JobRequirements | None = None,
    *,
    ats_result: ATSCompatibilityResult | None = None,
    content_analysis: ContentAnalysisResult | None = None,
) -> CategoryScores:
    """Compute the five category scores; analyses already run by the caller can be passed in."""
    ats = ats_result if ats_result is not None else analyze_ats_compatibility(content, sections)
    if content_analysis is None:
        content_analysis = analyze_resume_content(content, sections, job_requirements, ats_result=ats)

    return CategoryScores(
        content=clamp_score(content_analysis.overall_score),
        structure=clamp_score(ats.overall_score),
        keywords=clamp_score(round_half_up(calculate_keyword_score(content, job_requirements))),
        experience=clamp_score(round_half_up(calculate_experience_score(content, job_requirements))),
        skills=clamp_score(round_half_up(calculate_skills_score(content, job_requirements))),
    )


def determine_job_type(job_description: str | None, job_requirements: JobRequirements | None) -> JobType:
    return classify_job_type(job_description, job_requirements).job_type


def weighted_total(scores: CategoryScores, weights: CategoryWeights) -> float:
    return sum(score * getattr(weights, name) for name, score in scores.items())


def summarize_score(overall_score: int) -> str:
    for floor, message in _SUMMARY_BANDS:
        if overall_score >= floor:
            return message
    return _POOR_SUMMARY


def build_explanation(scores: CategoryScores, weights: CategoryWeights, overall_score: int) -> ScoreExplanation:
    strength_min = int(_cfg("explanation.strength_min", 80))
    improvement_below = int(_cfg("explanation.improvement_below", 60))
    lines: list[str] = []
    strengths: list[str] = []
    improvements: list[str] = []

    for name, score in scores.items():
        weight = getattr(weights, name)
        if score >= strength_min:
            strengths.append(f"Strong {name} performance ({score}/100)")
        elif score < improvement_below:
            improvements.append(f"{name} needs improvement ({score}/100)")
        lines.append(
            f"{name.capitalize()}: {score}/100 "
            f"({round_half_up(weight * 100)}% weight, contributes {round_half_up(score * weight)} points)"
        )

    return ScoreExplanation(
        overall_score=overall_score,
        category_breakdown=lines,
        strengths=strengths,
        improvements=improvements,
        summary=summarize_score(overall_score),
    )


def build_breakdown(scores: CategoryScores, weights: CategoryWeights) -> ScoreBreakdown:
    items: list[CategoryBreakdownItem] = []
    total = 0.0
    for name, score in scores.items():
        weight = getattr(weights, name)
        weighted = score * weight
        total += weighted
        items.append(
            CategoryBreakdownItem(
                name=name,
                score=score,
                weight=round_half_up(weight * 100),
                weighted_score=round_half_up(weighted),
                max_weighted_score=round_half_up(100 * weight),
                percentage=score,
            )
        )
    return ScoreBreakdown(categories=items, total_weighted_score=clamp_score(round_half_up(total)))


def calculate_confidence_level(scores: CategoryScores, job_requirements: JobRequirements | None) -> ConfidenceLevel:
    low = int(_cfg("confidence.reasonable_min", 10))
    high = int(_cfg("confidence.reasonable_max", 95))
    reasonable = sum(1 for _, score in scores.items() if low < score < high)

    factors = (
        job_requirements is not None,
        reasonable >= int(_cfg("confidence.reasonable_count", 4)),
        scores.keywords > 0,
        scores.experience > 0,
        scores.skills > 0,
    )
    ratio = sum(factors) / len(factors)
    if ratio >= float(_cfg("confidence.high_ratio", 0.8)):
        return "high"
    if ratio >= float(_cfg("confidence.medium_ratio", 0.6)):
        return "medium"
    return "low"


def calculate_overall_score(
    content: ResumeContent,
    sections: list[ParsedSection],
    job_requirements: JobRequirements | None = None,
    job_description: str | None = None,
    *,
    ats_result: ATSCompatibilityResult | None = None,
    content_analysis: ContentAnalysisResult | None = None,
) -> ScoringResult:
    scores = calculate_category_scores(
        content,
        sections,
        job_requirements,
        ats_result=ats_result,
        content_analysis=content_analysis,
    )
    job_type = determine_job_type(job_description, job_requirements)
    weights = weights_for_job_type(job_type)
    overall = clamp_score(round_half_up(weighted_total(scores, weights)))

    result = ScoringResult(
        overall_score=overall,
        category_scores=scores,
        weights=weights,
        explanation=build_explanation(scores, weights, overall),
        breakdown=build_breakdown(scores, weights),
        confidence_level=calculate_confidence_level(scores, job_requirements),
        job_type=job_type,
    )
    logger.info(
        "resume_scored overall=%s job_type=%s confidence=%s content=%s structure=%s keywords=%s experience=%s skills=%s",
        result.overall_score,
        job_type,
        result.confidence_level,
        scores.content,
        scores.structure,
        scores.keywords,
        scores.experience,
        scores.skills,
    )
    return result

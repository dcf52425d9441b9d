from __future__ import annotations

import logging

from resume_compat.analysis.ats import analyze_ats_compatibility, get_compatibility_level
from resume_compat.analysis.content import analyze_resume_content
from resume_compat.features.jd_requirements import analyze_job_description
from resume_compat.parsing.parse import parse_resume
from resume_compat.schemas.analysis import ResumeAnalysis
from resume_compat.schemas.job import JobRequirements
from resume_compat.services.recommendation_service import generate_recommendations
from resume_compat.services.scoring_service import calculate_overall_score

logger = logging.getLogger(__name__)


def analyze_resume(
    raw_text: str,
    job_requirements: JobRequirements | None = None,
    job_description: str | None = None,
) -> ResumeAnalysis:
    """Run parsing, ATS and content analysis, scoring and recommendations over one resume.

    When only ``job_description`` is given, requirements are derived from it.
    Each analysis runs once and is shared by the later stages.
    """
    if job_requirements is None and job_description:
        job_requirements = analyze_job_description(job_description)

    parsed = parse_resume(raw_text)
    content, sections = parsed.content, parsed.sections

    ats = analyze_ats_compatibility(content, sections)
    content_analysis = analyze_resume_content(content, sections, job_requirements, ats_result=ats)
    scoring = calculate_overall_score(
        content,
        sections,
        job_requirements,
        job_description,
        ats_result=ats,
        content_analysis=content_analysis,
    )
    recommendations = generate_recommendations(
        content,
        sections,
        scoring.category_scores,
        job_requirements,
        content_analysis=content_analysis,
        ats_result=ats,
    )

    logger.info(
        "resume_analyzed overall=%s ats=%s recommendations=%s has_job=%s",
        scoring.overall_score,
        ats.overall_score,
        recommendations.summary.total_recommendations,
        job_requirements is not None,
    )
    return ResumeAnalysis(
        parsed=parsed,
        job_requirements=job_requirements,
        ats=ats,
        compatibility_level=get_compatibility_level(ats.overall_score),
        content_analysis=content_analysis,
        scoring=scoring,
        recommendations=recommendations,
    )

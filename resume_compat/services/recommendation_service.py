from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from resume_compat.analysis.ats import analyze_ats_compatibility
from resume_compat.analysis.content import analyze_resume_content
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.features.keyword_match import find_missing_keywords
from resume_compat.schemas.ats import ATSCompatibilityResult, Priority
from resume_compat.schemas.content import ContentAnalysisResult, ContentCategory, ContentRecommendation
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.recommendations import (
    PriorityBreakdown,
    PriorityItem,
    Recommendation,
    RecommendationExamples,
    RecommendationResult,
    RecommendationSummary,
)
from resume_compat.schemas.resume import ParsedSection, ResumeContent
from resume_compat.schemas.scoring import CategoryName, CategoryScores

logger = logging.getLogger(__name__)

PRIORITY_ORDER: dict[Priority, int] = {"high": 3, "medium": 2, "low": 1}
CATEGORY_ORDER: dict[CategoryName, int] = {"content": 5, "keywords": 4, "structure": 3, "experience": 2, "skills": 1}

_CONTENT_CATEGORY_MAP: dict[ContentCategory, CategoryName] = {
    "action-verbs": "content",
    "quantification": "content",
    "keywords": "keywords",
    "clarity": "content",
    "ats-compatibility": "structure",
}

_CONTENT_IMPACT: dict[ContentCategory, dict[Priority, str]] = {
    "action-verbs": {
        "high": "Significantly improves how recruiters perceive your achievements",
        "medium": "Moderately enhances the impact of your experience descriptions",
        "low": "Slightly improves the professional tone of your resume",
    },
    "quantification": {
        "high": "Dramatically demonstrates your concrete value and results",
        "medium": "Clearly shows measurable impact of your work",
        "low": "Adds credibility to your achievements",
    },
    "keywords": {
        "high": "Greatly improves ATS matching and recruiter search visibility",
        "medium": "Enhances alignment with job requirements",
        "low": "Slightly improves keyword relevance",
    },
}

_ATS_IMPACT: dict[Priority, str] = {
    "high": "Critical for passing ATS screening and reaching human reviewers",
    "medium": "Important for optimal ATS parsing and formatting",
    "low": "Helpful for consistent formatting and readability",
}

_CATEGORY_IMPACT: dict[CategoryName, dict[Priority, str]] = {
    "content": {
        "high": "Major improvement in how employers perceive your qualifications",
        "medium": "Noticeable enhancement in resume effectiveness",
        "low": "Minor improvement in overall presentation",
    },
    "structure": {
        "high": "Critical for ATS compatibility and professional appearance",
        "medium": "Important for readability and organization",
        "low": "Helpful for consistent formatting",
    },
    "keywords": {
        "high": "Significantly improves job matching and search visibility",
        "medium": "Enhances relevance to job requirements",
        "low": "Slightly improves keyword alignment",
    },
    "experience": {
        "high": "Dramatically showcases your value and achievements",
        "medium": "Clearly demonstrates your capabilities",
        "low": "Adds credibility to your background",
    },
    "skills": {
        "high": "Greatly improves technical qualification matching",
        "medium": "Enhances skill relevance and completeness",
        "low": "Slightly improves skill presentation",
    },
}

_CONTENT_BEFORE_EXAMPLES: dict[ContentCategory, str] = {
    "action-verbs": "Worked on projects and helped team members",
    "quantification": "Improved system performance and user experience",
    "keywords": "Developed applications using various technologies",
    "clarity": "Responsible for various tasks and duties",
    "ats-compatibility": "Complex formatting with graphics and tables",
}

_CANNED_EXAMPLES: dict[CategoryName, RecommendationExamples] = {
    "content": RecommendationExamples(
        before="Worked on projects and helped team members with various tasks",
        after="Led development of 3 web applications, increasing user engagement by 40% and reducing load time by 2 seconds",
    ),
    "structure": RecommendationExamples(
        before="Complex formatting with graphics, tables, and unusual fonts",
        after="Clean, simple formatting with clear section headers and consistent bullet points",
    ),
    "keywords": RecommendationExamples(
        before="Developed applications using various programming languages",
        after="Developed React and Node.js applications using JavaScript, TypeScript, and PostgreSQL",
    ),
    "experience": RecommendationExamples(
        before="Responsible for managing projects and working with team",
        after=(
            "Managed 5 cross-functional projects with teams of 6-8 members, "
            "delivering all projects on time and 15% under budget"
        ),
    ),
    "skills": RecommendationExamples(
        before="Programming, databases, communication",
        after="JavaScript, React, Node.js, PostgreSQL, Agile methodology, Cross-functional team leadership",
    ),
}

_DEFAULT_IMPACT = "Improves overall resume quality"


@dataclass(frozen=True)
class CategoryTemplate:
    category: CategoryName
    cutoff: int
    high_below: int
    title: str
    description: str
    before: str
    after: str
    impact: str
    needs_job: bool = False

    def threshold(self) -> tuple[int, int]:
        prefix = f"recommendations.thresholds.{self.category}"
        return (
            int(get_scoring_value(f"{prefix}.cutoff", self.cutoff)),
            int(get_scoring_value(f"{prefix}.high_below", self.high_below)),
        )


CATEGORY_TEMPLATES: tuple[CategoryTemplate, ...] = (
    CategoryTemplate(
        category="content",
        cutoff=70,
        high_below=50,
        title="Improve Content Quality",
        description="Enhance the overall quality and impact of your resume content",
        before="Worked on various projects and helped the team",
        after="Led development of 3 high-impact web applications, resulting in 40% improved user engagement",
        impact="Significantly improves how recruiters perceive your experience and achievements",
    ),
    CategoryTemplate(
        category="structure",
        cutoff=80,
        high_below=60,
        title="Optimize Resume Structure",
        description="Improve formatting and organization for better ATS compatibility",
        before="Complex formatting with tables and graphics",
        after="Clean, simple formatting with clear section headers and bullet points",
        impact="Ensures your resume passes through ATS systems and reaches human reviewers",
    ),
    CategoryTemplate(
        category="keywords",
        cutoff=60,
        high_below=40,
        title="Add Relevant Keywords",
        description="Include more job-relevant keywords.",
        before="Developed web applications using various technologies",
        after="Developed web applications using {skills}, improving performance by 30%",
        impact="Increases keyword matching score and improves ATS ranking",
        needs_job=True,
    ),
    CategoryTemplate(
        category="experience",
        cutoff=70,
        high_below=50,
        title="Strengthen Experience Descriptions",
        description="Add quantifiable achievements and use stronger action verbs",
        before="Responsible for managing projects and working with team members",
        after="Led cross-functional team of 8 members to deliver 5 projects on time, reducing delivery time by 25%",
        impact="Demonstrates concrete value and leadership capabilities to employers",
    ),
    CategoryTemplate(
        category="skills",
        cutoff=60,
        high_below=40,
        title="Enhance Skills Section",
        description="Add relevant technical and soft skills that match job requirements",
        before="Programming, databases, teamwork",
        after="JavaScript, React, Node.js, PostgreSQL, Agile methodology, Cross-functional collaboration",
        impact="Better alignment with job requirements and improved keyword matching",
    ),
)


def _ats_before_example(title: str) -> str:
    lowered = title.lower()
    if "format" in lowered:
        return "Complex formatting with tables, graphics, and unusual fonts"
    if "section" in lowered:
        return "Unclear section headers or missing standard sections"
    if "contact" in lowered:
        return "Contact information embedded in headers or graphics"
    return "Non-standard formatting that may confuse ATS systems"


def from_content_recommendations(recommendations: list[ContentRecommendation]) -> list[Recommendation]:
    converted: list[Recommendation] = []
    for index, rec in enumerate(recommendations):
        examples = None
        if rec.examples and rec.examples[0]:
            examples = RecommendationExamples(
                before=_CONTENT_BEFORE_EXAMPLES.get(rec.category, "Generic description without specific details"),
                after=rec.examples[0],
            )
        converted.append(
            Recommendation(
                id=f"content-{index}",
                category=_CONTENT_CATEGORY_MAP.get(rec.category, "content"),
                priority=rec.priority,
                title=rec.title,
                description=rec.description,
                examples=examples,
                impact=_CONTENT_IMPACT.get(rec.category, {}).get(rec.priority, _DEFAULT_IMPACT),
            )
        )
    return converted


def from_ats_result(ats_result: ATSCompatibilityResult) -> list[Recommendation]:
    converted: list[Recommendation] = []
    for index, rec in enumerate(ats_result.recommendations):
        examples = None
        if rec.example:
            examples = RecommendationExamples(before=_ats_before_example(rec.title), after=rec.example)
        converted.append(
            Recommendation(
                id=f"ats-{index}",
                category="structure",
                priority=rec.priority,
                title=rec.title,
                description=rec.description,
                examples=examples,
                impact=_ATS_IMPACT.get(rec.priority, "Improves ATS compatibility"),
            )
        )
    return converted


def category_recommendations(
    scores: CategoryScores,
    content: ResumeContent,
    job_requirements: JobRequirements | None = None,
) -> list[Recommendation]:
    """Fixed templates triggered by category scores below their cutoff."""
    recommendations: list[Recommendation] = []
    for template in CATEGORY_TEMPLATES:
        if template.needs_job and job_requirements is None:
            continue
        cutoff, high_below = template.threshold()
        score = getattr(scores, template.category)
        if score >= cutoff:
            continue

        description = template.description
        after = template.after
        if template.needs_job and job_requirements is not None:
            missing = find_missing_keywords(content, job_requirements)
            if missing:
                description = f"{description} Missing: {', '.join(missing[:3])}"
            after = after.format(skills=" and ".join(missing[:2]) or "the technologies named in the posting")

        recommendations.append(
            Recommendation(
                id=f"category-{template.category}",
                category=template.category,
                priority="high" if score < high_below else "medium",
                title=template.title,
                description=description,
                examples=RecommendationExamples(before=template.before, after=after),
                impact=template.impact,
            )
        )
    return recommendations


def dedupe_recommendations(recommendations: list[Recommendation]) -> list[Recommendation]:
    seen: set[tuple[str, str]] = set()
    unique: list[Recommendation] = []
    for rec in recommendations:
        key = (rec.category, rec.title.lower())
        if key in seen:
            continue
        seen.add(key)
        unique.append(rec)
    return unique


def prioritize_recommendations(recommendations: list[Recommendation]) -> list[Recommendation]:
    unique = dedupe_recommendations(recommendations)
    return sorted(unique, key=lambda rec: (-PRIORITY_ORDER[rec.priority], -CATEGORY_ORDER[rec.category]))


def _finalize(rec: Recommendation) -> Recommendation:
    updates: dict[str, object] = {}
    if not rec.impact:
        updates["impact"] = _CATEGORY_IMPACT.get(rec.category, {}).get(rec.priority, _DEFAULT_IMPACT)
    if rec.examples is None:
        updates["examples"] = _CANNED_EXAMPLES[rec.category]
    return rec.model_copy(update=updates) if updates else rec


def summarize_recommendations(recommendations: list[Recommendation]) -> RecommendationSummary:
    counts = Counter(rec.priority for rec in recommendations)
    high, medium, low = counts["high"], counts["medium"], counts["low"]

    parts: list[str] = []
    if high:
        parts.append(f"Focus on {high} high-priority improvements first.")
    if medium:
        parts.append(f"Then address {medium} medium-priority items.")
    if low:
        parts.append(f"Finally, consider {low} low-priority enhancements.")

    return RecommendationSummary(
        total_recommendations=len(recommendations),
        high_priority=high,
        medium_priority=medium,
        low_priority=low,
        category_breakdown=dict(Counter(rec.category for rec in recommendations)),
        summary=" ".join(parts),
    )


def build_priority_breakdown(recommendations: list[Recommendation]) -> PriorityBreakdown:
    tiers: dict[Priority, list[PriorityItem]] = {"high": [], "medium": [], "low": []}
    for rec in recommendations:
        tiers[rec.priority].append(PriorityItem(title=rec.title, category=rec.category, impact=rec.impact))
    return PriorityBreakdown(**tiers)


def generate_recommendations(
    content: ResumeContent,
    sections: list[ParsedSection],
    category_scores: CategoryScores,
    job_requirements: JobRequirements | None = None,
    content_analysis: ContentAnalysisResult | None = None,
    ats_result: ATSCompatibilityResult | None = None,
) -> RecommendationResult:
    if ats_result is None:
        ats_result = (
            content_analysis.ats_compatibility
            if content_analysis is not None
            else analyze_ats_compatibility(content, sections)
        )
    if content_analysis is None:
        content_analysis = analyze_resume_content(content, sections, job_requirements, ats_result=ats_result)

    merged = [
        *from_content_recommendations(content_analysis.recommendations),
        *from_ats_result(ats_result),
        *category_recommendations(category_scores, content, job_requirements),
    ]
    final = [_finalize(rec) for rec in prioritize_recommendations(merged)]

    result = RecommendationResult(
        recommendations=final,
        summary=summarize_recommendations(final),
        priority_breakdown=build_priority_breakdown(final),
    )
    logger.debug(
        "recommendations_generated total=%s high=%s medium=%s low=%s merged=%s",
        result.summary.total_recommendations,
        result.summary.high_priority,
        result.summary.medium_priority,
        result.summary.low_priority,
        len(merged),
    )
    return result

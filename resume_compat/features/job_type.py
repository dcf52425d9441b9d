from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.scoring import CategoryWeights, JobType


@dataclass(frozen=True)
class JobTypeRule:
    job_type: JobType
    keywords: tuple[str, ...]

    def hits(self, text: str) -> list[str]:
        return [keyword for keyword in self.keywords if keyword in text]


# Order is the tie-break policy: technical beats management beats creative.
JOB_TYPE_RULES: tuple[JobTypeRule, ...] = (
    JobTypeRule(
        "technical",
        ("developer", "engineer", "programmer", "architect", "devops",
         "javascript", "python", "java", "react", "node", "aws", "docker"),
    ),
    JobTypeRule(
        "management",
        ("manager", "director", "lead", "supervisor", "head of",
         "team lead", "project manager", "product manager", "scrum master"),
    ),
    JobTypeRule(
        "creative",
        ("designer", "creative", "artist", "writer", "content",
         "marketing", "brand", "ui/ux", "graphic", "visual"),
    ),
)

_DEFAULT_PROFILE = {
    "content": 0.25,
    "structure": 0.20,
    "keywords": 0.25,
    "experience": 0.15,
    "skills": 0.15,
}
_PROFILE_DEFAULTS: dict[str, dict[str, float]] = {
    "default": _DEFAULT_PROFILE,
    "technical": {"content": 0.20, "structure": 0.15, "keywords": 0.25, "experience": 0.10, "skills": 0.30},
    "management": {"content": 0.25, "structure": 0.15, "keywords": 0.20, "experience": 0.30, "skills": 0.10},
    "creative": {"content": 0.35, "structure": 0.25, "keywords": 0.10, "experience": 0.10, "skills": 0.20},
}


class JobTypeClassification(BaseModel):
    job_type: JobType
    keyword_hits: dict[str, int] = Field(default_factory=dict)
    evidence: list[str] = Field(default_factory=list)


def _job_text(job_description: str | None, job_requirements: JobRequirements | None) -> str:
    skills: list[str] = []
    if job_requirements is not None:
        skills = [*job_requirements.required_skills, *job_requirements.preferred_skills]
    return f"{(job_description or '').lower()} {' '.join(skills).lower()}"


def classify_job_type(
    job_description: str | None = None,
    job_requirements: JobRequirements | None = None,
) -> JobTypeClassification:
    """Pick the archetype with the most keyword hits.

    Ties, including no hits at all, go to the earliest rule, so any job context
    resolves to at least "technical". Only a call without job context is "general".
    """
    if not job_description and job_requirements is None:
        return JobTypeClassification(job_type="general")

    text = _job_text(job_description, job_requirements)
    hits = {rule.job_type: rule.hits(text) for rule in JOB_TYPE_RULES}
    counts = {job_type: len(found) for job_type, found in hits.items()}

    best = JOB_TYPE_RULES[0]
    for rule in JOB_TYPE_RULES[1:]:
        if counts[rule.job_type] > counts[best.job_type]:
            best = rule
    return JobTypeClassification(job_type=best.job_type, keyword_hits=counts, evidence=hits[best.job_type])


def weights_for_job_type(job_type: JobType) -> CategoryWeights:
    profile_name = "default" if job_type == "general" else job_type
    fallback = _PROFILE_DEFAULTS.get(profile_name, _DEFAULT_PROFILE)
    configured = get_scoring_value(f"scoring.profiles.{profile_name}", None)
    values = dict(fallback)
    if isinstance(configured, dict):
        values.update({key: float(value) for key, value in configured.items() if key in fallback})
    return CategoryWeights(**values)

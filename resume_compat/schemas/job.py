from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resume_compat.schemas.resume import dedupe_preserving_order

ExperienceLevel = Literal[
    "entry-level",
    "mid-level",
    "senior-level",
    "management",
    "executive",
    "not-specified",
]


class JobRequirements(BaseModel):
    model_config = ConfigDict(frozen=True)

    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    experience_level: ExperienceLevel = "not-specified"
    education: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    @field_validator("required_skills", "preferred_skills", "education", "certifications", "keywords")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return dedupe_preserving_order([item for item in value if item and item.strip()])

    @property
    def all_keywords(self) -> list[str]:
        return [*self.required_skills, *self.preferred_skills, *self.keywords]


class QualificationSections(BaseModel):
    required_qualifications: list[str] = Field(default_factory=list)
    preferred_qualifications: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)


class SalaryRange(BaseModel):
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class CompensationInfo(BaseModel):
    salary_range: SalaryRange | None = None
    currency: str | None = None
    benefits: list[str] = Field(default_factory=list)

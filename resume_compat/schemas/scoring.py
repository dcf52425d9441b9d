from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

CategoryName = Literal["content", "structure", "keywords", "experience", "skills"]
JobType = Literal["technical", "management", "creative", "general"]
ConfidenceLevel = Literal["high", "medium", "low"]

CATEGORY_NAMES: tuple[CategoryName, ...] = ("content", "structure", "keywords", "experience", "skills")
_WEIGHT_SUM_TOLERANCE = 1e-6


class CategoryScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: int = Field(ge=0, le=100)
    structure: int = Field(ge=0, le=100)
    keywords: int = Field(ge=0, le=100)
    experience: int = Field(ge=0, le=100)
    skills: int = Field(ge=0, le=100)

    def items(self) -> list[tuple[CategoryName, int]]:
        return [(name, getattr(self, name)) for name in CATEGORY_NAMES]


class CategoryWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: float = Field(ge=0.0, le=1.0)
    structure: float = Field(ge=0.0, le=1.0)
    keywords: float = Field(ge=0.0, le=1.0)
    experience: float = Field(ge=0.0, le=1.0)
    skills: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_sum(self) -> "CategoryWeights":
        total = self.content + self.structure + self.keywords + self.experience + self.skills
        if abs(total - 1.0) > _WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"category weights must sum to 1.0, got {total:.4f}")
        return self

    def items(self) -> list[tuple[CategoryName, float]]:
        return [(name, getattr(self, name)) for name in CATEGORY_NAMES]


class ScoreExplanation(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    category_breakdown: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    summary: str = ""


class CategoryBreakdownItem(BaseModel):
    name: CategoryName
    score: int = Field(ge=0, le=100)
    weight: int = Field(ge=0, le=100)
    weighted_score: int = Field(ge=0, le=100)
    max_weighted_score: int = Field(ge=0, le=100)
    percentage: int = Field(ge=0, le=100)


class ScoreBreakdown(BaseModel):
    categories: list[CategoryBreakdownItem] = Field(default_factory=list)
    total_weighted_score: int = Field(default=0, ge=0, le=100)
    max_possible_score: int = 100


class ScoringResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    category_scores: CategoryScores
    weights: CategoryWeights
    explanation: ScoreExplanation
    breakdown: ScoreBreakdown
    confidence_level: ConfidenceLevel
    job_type: JobType = "general"

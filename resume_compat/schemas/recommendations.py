from __future__ import annotations

from pydantic import BaseModel, Field

from resume_compat.schemas.ats import Priority
from resume_compat.schemas.scoring import CategoryName


class RecommendationExamples(BaseModel):
    before: str | None = None
    after: str


class Recommendation(BaseModel):
    id: str
    category: CategoryName
    priority: Priority
    title: str
    description: str
    examples: RecommendationExamples | None = None
    impact: str = ""


class RecommendationSummary(BaseModel):
    total_recommendations: int = Field(default=0, ge=0)
    high_priority: int = Field(default=0, ge=0)
    medium_priority: int = Field(default=0, ge=0)
    low_priority: int = Field(default=0, ge=0)
    category_breakdown: dict[str, int] = Field(default_factory=dict)
    summary: str = ""


class PriorityItem(BaseModel):
    title: str
    category: CategoryName
    impact: str


class PriorityBreakdown(BaseModel):
    high: list[PriorityItem] = Field(default_factory=list)
    medium: list[PriorityItem] = Field(default_factory=list)
    low: list[PriorityItem] = Field(default_factory=list)


class RecommendationResult(BaseModel):
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: RecommendationSummary = Field(default_factory=RecommendationSummary)
    priority_breakdown: PriorityBreakdown = Field(default_factory=PriorityBreakdown)

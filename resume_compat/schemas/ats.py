from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

AtsCategory = Literal["formatting", "organization", "readability", "presentation"]
Severity = Literal["low", "medium", "high"]
Priority = Literal["low", "medium", "high"]
CompatibilityLevel = Literal["excellent", "good", "fair", "poor"]


class ATSIssue(BaseModel):
    category: AtsCategory
    severity: Severity
    description: str
    impact: str


class ATSRecommendation(BaseModel):
    category: AtsCategory
    priority: Priority
    title: str
    description: str
    example: str | None = None


class ATSCompatibilityResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    formatting_score: int = Field(ge=0, le=100)
    section_organization_score: int = Field(ge=0, le=100)
    readability_score: int = Field(ge=0, le=100)
    professional_presentation_score: int = Field(ge=0, le=100)
    issues: list[ATSIssue] = Field(default_factory=list)
    recommendations: list[ATSRecommendation] = Field(default_factory=list)

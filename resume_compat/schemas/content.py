from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from resume_compat.schemas.ats import ATSCompatibilityResult, Priority

ContentCategory = Literal["action-verbs", "quantification", "keywords", "clarity", "ats-compatibility"]


class ActionVerbSuggestion(BaseModel):
    weak_verb: str
    suggestions: list[str] = Field(default_factory=list)
    example: str


class ActionVerbAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    strong_verbs: list[str] = Field(default_factory=list)
    weak_verbs: list[str] = Field(default_factory=list)
    total_verbs: int = Field(default=0, ge=0)
    suggestions: list[ActionVerbSuggestion] = Field(default_factory=list)


class QuantifiedAchievement(BaseModel):
    section: str = "experience"
    company: str | None = None
    achievements: list[str] = Field(default_factory=list)


class QuantifiableAchievementAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    quantified_achievements: list[QuantifiedAchievement] = Field(default_factory=list)
    missing_quantification: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class KeywordMatchingAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    total_job_keywords: int = Field(default=0, ge=0)
    match_percentage: int = Field(default=0, ge=0, le=100)
    uses_job_requirements: bool = False


class ClarityAndImpactAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    clarity_score: int = Field(ge=0, le=100)
    impact_score: int = Field(ge=0, le=100)
    sentiment_score: int = 0
    word_count: int = Field(default=0, ge=0)
    readability_issues: list[str] = Field(default_factory=list)
    impact_indicators: list[str] = Field(default_factory=list)


class ContentRecommendation(BaseModel):
    category: ContentCategory
    priority: Priority
    title: str
    description: str
    examples: list[str] = Field(default_factory=list)


class ContentAnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    action_verb_analysis: ActionVerbAnalysis
    quantifiable_achievements: QuantifiableAchievementAnalysis
    keyword_matching: KeywordMatchingAnalysis
    clarity_and_impact: ClarityAndImpactAnalysis
    ats_compatibility: ATSCompatibilityResult
    recommendations: list[ContentRecommendation] = Field(default_factory=list)

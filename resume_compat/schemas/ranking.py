from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from resume_compat.schemas.ats import Severity
from resume_compat.schemas.resume import ParsedSection, ResumeContent
from resume_compat.schemas.scoring import CategoryName, ConfidenceLevel, ScoringResult

HiringDecision = Literal["strong_hire", "hire", "maybe", "no_hire", "strong_no_hire"]
BiasType = Literal["name_bias", "education_bias", "experience_gap_bias", "overqualification_bias"]
StrengthImpact = Literal["low", "medium", "high"]


class CandidateData(BaseModel):
    candidate_id: str
    name: str = ""
    content: ResumeContent
    sections: list[ParsedSection] = Field(default_factory=list)


class CandidateStrength(BaseModel):
    category: CategoryName
    score: int = Field(ge=0, le=100)
    description: str
    impact: StrengthImpact


class CandidateWeakness(BaseModel):
    category: CategoryName
    score: int = Field(ge=0, le=100)
    description: str
    severity: Severity
    improvement_suggestions: list[str] = Field(default_factory=list)


class ScoredCandidate(CandidateData):
    scoring_result: ScoringResult
    strengths: list[CandidateStrength] = Field(default_factory=list)
    weaknesses: list[CandidateWeakness] = Field(default_factory=list)


class BiasWarning(BaseModel):
    type: BiasType
    description: str
    severity: Severity
    mitigation: str


class HiringRecommendation(BaseModel):
    recommendation: HiringDecision
    confidence: ConfidenceLevel
    reasoning: list[str] = Field(default_factory=list)
    bias_warnings: list[BiasWarning] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


class ComparativeAnalysis(BaseModel):
    overall_rank: int = Field(ge=1)
    total_candidates: int = Field(ge=1)
    percentile_rank: float = Field(ge=0.0, le=100.0)
    category_percentiles: dict[CategoryName, float] = Field(default_factory=dict)
    similar_candidates_count: int = Field(default=0, ge=0)
    differentiating_factors: list[str] = Field(default_factory=list)
    competitive_advantages: list[str] = Field(default_factory=list)
    improvement_opportunities: list[str] = Field(default_factory=list)


class RankingCriteria(BaseModel):
    overall_score_weight: float = Field(default=0.6, ge=0.0)
    category_weights: dict[CategoryName, float] = Field(default_factory=dict)


class RankedCandidate(ScoredCandidate):
    rank: int = Field(ge=1)
    hiring_recommendation: HiringRecommendation
    comparative_analysis: ComparativeAnalysis

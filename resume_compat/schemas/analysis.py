from __future__ import annotations

from pydantic import BaseModel

from resume_compat.schemas.ats import ATSCompatibilityResult, CompatibilityLevel
from resume_compat.schemas.content import ContentAnalysisResult
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.recommendations import RecommendationResult
from resume_compat.schemas.resume import ParsedResume
from resume_compat.schemas.scoring import ScoringResult


class ResumeAnalysis(BaseModel):
    parsed: ParsedResume
    job_requirements: JobRequirements | None = None
    ats: ATSCompatibilityResult
    compatibility_level: CompatibilityLevel
    content_analysis: ContentAnalysisResult
    scoring: ScoringResult
    recommendations: RecommendationResult

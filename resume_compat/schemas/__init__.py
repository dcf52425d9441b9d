from .analysis import ResumeAnalysis
from .ats import ATSCompatibilityResult, ATSIssue, ATSRecommendation, CompatibilityLevel
from .content import (
    ActionVerbAnalysis,
    ActionVerbSuggestion,
    ClarityAndImpactAnalysis,
    ContentAnalysisResult,
    ContentRecommendation,
    KeywordMatchingAnalysis,
    QuantifiableAchievementAnalysis,
    QuantifiedAchievement,
)
from .job import CompensationInfo, JobRequirements, QualificationSections, SalaryRange
from .ranking import (
    BiasWarning,
    CandidateData,
    CandidateStrength,
    CandidateWeakness,
    ComparativeAnalysis,
    HiringRecommendation,
    RankedCandidate,
    RankingCriteria,
    ScoredCandidate,
)
from .recommendations import (
    PriorityBreakdown,
    PriorityItem,
    Recommendation,
    RecommendationExamples,
    RecommendationResult,
    RecommendationSummary,
)
from .resume import (
    Certification,
    ContactInfo,
    Education,
    ParsedResume,
    ParsedSection,
    ResumeContent,
    WorkExperience,
)
from .scoring import (
    CATEGORY_NAMES,
    CategoryBreakdownItem,
    CategoryScores,
    CategoryWeights,
    ScoreBreakdown,
    ScoreExplanation,
    ScoringResult,
)

__all__ = [
    "ResumeAnalysis",
    "ATSCompatibilityResult",
    "ATSIssue",
    "ATSRecommendation",
    "CompatibilityLevel",
    "ActionVerbAnalysis",
    "ActionVerbSuggestion",
    "ClarityAndImpactAnalysis",
    "ContentAnalysisResult",
    "ContentRecommendation",
    "KeywordMatchingAnalysis",
    "QuantifiableAchievementAnalysis",
    "QuantifiedAchievement",
    "CompensationInfo",
    "JobRequirements",
    "QualificationSections",
    "SalaryRange",
    "BiasWarning",
    "CandidateData",
    "CandidateStrength",
    "CandidateWeakness",
    "ComparativeAnalysis",
    "HiringRecommendation",
    "RankedCandidate",
    "RankingCriteria",
    "ScoredCandidate",
    "PriorityBreakdown",
    "PriorityItem",
    "Recommendation",
    "RecommendationExamples",
    "RecommendationResult",
    "RecommendationSummary",
    "Certification",
    "ContactInfo",
    "Education",
    "ParsedResume",
    "ParsedSection",
    "ResumeContent",
    "WorkExperience",
    "CATEGORY_NAMES",
    "CategoryBreakdownItem",
    "CategoryScores",
    "CategoryWeights",
    "ScoreBreakdown",
    "ScoreExplanation",
    "ScoringResult",
]

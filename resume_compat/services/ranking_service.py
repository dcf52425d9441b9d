from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable

from resume_compat.core.config import settings
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.core.scores import round_half_up
from resume_compat.schemas.ats import Severity
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.ranking import (
    BiasType,
    BiasWarning,
    CandidateData,
    CandidateStrength,
    CandidateWeakness,
    ComparativeAnalysis,
    HiringDecision,
    HiringRecommendation,
    RankedCandidate,
    RankingCriteria,
    ScoredCandidate,
)
from resume_compat.schemas.scoring import CATEGORY_NAMES, CategoryName, ConfidenceLevel, ScoringResult
from resume_compat.services.scoring_service import calculate_overall_score

logger = logging.getLogger(__name__)

CONFIDENCE_ORDER: dict[ConfidenceLevel, int] = {"high": 3, "medium": 2, "low": 1}

_STRENGTH_DESCRIPTIONS: dict[CategoryName, str] = {
    "content": "Excellent resume content with clear, impactful descriptions ({score}/100)",
    "structure": "Well-organized and ATS-friendly resume format ({score}/100)",
    "keywords": "Strong keyword alignment with job requirements ({score}/100)",
    "experience": "Relevant and impressive work experience ({score}/100)",
    "skills": "Comprehensive skill set matching job needs ({score}/100)",
}
_WEAKNESS_DESCRIPTIONS: dict[CategoryName, str] = {
    "content": "Resume content needs improvement for clarity and impact ({score}/100)",
    "structure": "Resume formatting could be more ATS-friendly ({score}/100)",
    "keywords": "Limited keyword alignment with job requirements ({score}/100)",
    "experience": "Experience may not fully match job requirements ({score}/100)",
    "skills": "Skill set has gaps compared to job needs ({score}/100)",
}
_IMPROVEMENT_SUGGESTIONS: dict[CategoryName, tuple[str, ...]] = {
    "content": (
        "Use more action verbs and quantifiable achievements",
        "Improve clarity and conciseness of descriptions",
        "Add more specific examples of accomplishments",
    ),
    "structure": (
        "Use standard section headings",
        "Improve formatting consistency",
        "Ensure ATS-friendly layout",
    ),
    "keywords": (
        "Include more relevant industry keywords",
        "Match terminology used in job description",
        "Add technical skills and certifications",
    ),
    "experience": (
        "Highlight more relevant work experience",
        "Add quantifiable results and achievements",
        "Include leadership and project management experience",
    ),
    "skills": (
        "Add missing technical skills",
        "Include relevant certifications",
        "Highlight transferable skills",
    ),
}
_NEXT_STEPS: dict[HiringDecision, tuple[str, ...]] = {
    "strong_hire": ("Schedule interview immediately", "Prepare competitive offer", "Check references"),
    "hire": ("Schedule interview", "Assess cultural fit", "Verify key skills through technical assessment"),
    "maybe": (
        "Phone screening to assess interest and basic fit",
        "Focus interview on identified weakness areas",
        "Compare with other candidates before final decision",
    ),
    "no_hire": ("Send polite rejection email", "Keep resume on file for future opportunities"),
    "strong_no_hire": ("Send rejection email", "Do not consider for similar roles"),
}


def _cfg(path: str, default: Any) -> Any:
    return get_scoring_value(f"ranking.{path}", default)


def default_ranking_criteria() -> RankingCriteria:
    defaults: dict[CategoryName, float] = {
        "content": 0.10,
        "structure": 0.05,
        "keywords": 0.10,
        "experience": 0.10,
        "skills": 0.05,
    }
    configured = _cfg("category_weights", None)
    if isinstance(configured, dict):
        defaults.update({key: float(value) for key, value in configured.items() if key in defaults})
    return RankingCriteria(
        overall_score_weight=float(_cfg("overall_score_weight", 0.6)),
        category_weights=defaults,
    )


def identify_strengths(result: ScoringResult) -> list[CandidateStrength]:
    min_score = int(_cfg("strengths.min_score", 80))
    high_impact = int(_cfg("strengths.high_impact", 90))
    strengths = [
        CandidateStrength(
            category=name,
            score=score,
            description=_STRENGTH_DESCRIPTIONS[name].format(score=score),
            impact="high" if score >= high_impact else "medium",
        )
        for name, score in result.category_scores.items()
        if score >= min_score
    ]
    return sorted(strengths, key=lambda strength: strength.score, reverse=True)


def _weakness_severity(score: int) -> Severity:
    if score < int(_cfg("weaknesses.high_below", 40)):
        return "high"
    if score < int(_cfg("weaknesses.medium_below", 50)):
        return "medium"
    return "low"


def identify_weaknesses(result: ScoringResult) -> list[CandidateWeakness]:
    max_score = int(_cfg("weaknesses.max_score", 60))
    weaknesses = [
        CandidateWeakness(
            category=name,
            score=score,
            description=_WEAKNESS_DESCRIPTIONS[name].format(score=score),
            severity=_weakness_severity(score),
            improvement_suggestions=list(_IMPROVEMENT_SUGGESTIONS[name]),
        )
        for name, score in result.category_scores.items()
        if score < max_score
    ]
    return sorted(weaknesses, key=lambda weakness: weakness.score)


def _category_weighted(candidate: ScoredCandidate, criteria: RankingCriteria) -> float:
    scores = candidate.scoring_result.category_scores
    return sum(getattr(scores, name) * weight for name, weight in criteria.category_weights.items())


def compare_candidates(a: ScoredCandidate, b: ScoredCandidate, criteria: RankingCriteria) -> float:
    """Negative when ``a`` ranks ahead of ``b``; 0 keeps the input order."""
    overall_a = a.scoring_result.overall_score * criteria.overall_score_weight
    overall_b = b.scoring_result.overall_score * criteria.overall_score_weight
    if abs(overall_a - overall_b) > float(_cfg("overall_gap", 2)):
        return overall_b - overall_a

    category_a = _category_weighted(a, criteria)
    category_b = _category_weighted(b, criteria)
    if abs(category_a - category_b) > float(_cfg("category_gap", 1)):
        return category_b - category_a

    return CONFIDENCE_ORDER[b.scoring_result.confidence_level] - CONFIDENCE_ORDER[a.scoring_result.confidence_level]


def order_candidates(candidates: list[ScoredCandidate], criteria: RankingCriteria) -> list[ScoredCandidate]:
    return sorted(candidates, key=cmp_to_key(lambda a, b: compare_candidates(a, b, criteria)))


def percentile_for_index(index: int, total: int) -> float:
    """Percentile of the candidate at 0-based position ``index``: first is 100, last is 100/total."""
    if total <= 0:
        return 0.0
    return (total - index) / total * 100


@dataclass(frozen=True)
class BiasRule:
    bias_type: BiasType
    description: str
    severity: Severity
    mitigation: str
    detect: Callable[[ScoredCandidate], bool]

    def check(self, candidate: ScoredCandidate) -> BiasWarning | None:
        if not self.detect(candidate):
            return None
        return BiasWarning(
            type=self.bias_type,
            description=self.description,
            severity=self.severity,
            mitigation=self.mitigation,
        )


def _no_signal(_candidate: ScoredCandidate) -> bool:
    # Placeholder check: no heuristic exists for this bias yet, so it never fires.
    return False


def _is_overqualified(candidate: ScoredCandidate) -> bool:
    return candidate.scoring_result.overall_score > int(_cfg("overqualification_score", 95))


BIAS_RULES: tuple[BiasRule, ...] = (
    BiasRule(
        "name_bias",
        "Consider focusing on qualifications rather than name",
        "medium",
        "Review candidate based solely on skills and experience",
        _no_signal,
    ),
    BiasRule(
        "education_bias",
        "Avoid overweighting prestigious institutions",
        "low",
        "Focus on relevant skills and practical experience",
        _no_signal,
    ),
    BiasRule(
        "experience_gap_bias",
        "Employment gaps may have valid reasons",
        "medium",
        "Consider overall experience quality over continuity",
        _no_signal,
    ),
    BiasRule(
        "overqualification_bias",
        "High qualifications should not be penalized",
        "low",
        "Consider candidate motivation and growth potential",
        _is_overqualified,
    ),
)


def detect_bias(candidate: ScoredCandidate) -> list[BiasWarning]:
    warnings: list[BiasWarning] = []
    for rule in BIAS_RULES:
        warning = rule.check(candidate)
        if warning is not None:
            warnings.append(warning)
    return warnings


def lower_confidence(confidence: ConfidenceLevel) -> ConfidenceLevel:
    return "medium" if confidence == "high" else "low"


def _tier_threshold(tier: str, key: str, default: float) -> float:
    return float(_cfg(f"tiers.{tier}.{key}", default))


def _decide(score: int, percentile: float, confidence: ConfidenceLevel) -> tuple[HiringDecision, ConfidenceLevel, list[str]]:
    if score >= _tier_threshold("strong_hire", "score", 85) and percentile >= _tier_threshold("strong_hire", "percentile", 80):
        return (
            "strong_hire",
            "high" if confidence == "high" else "medium",
            [
                f"Excellent overall score of {score}/100",
                f"Ranks in top {round_half_up(100 - percentile)}% of candidates",
                "Strong alignment with job requirements",
            ],
        )
    if score >= _tier_threshold("hire", "score", 75) and percentile >= _tier_threshold("hire", "percentile", 60):
        return (
            "hire",
            "medium" if confidence == "high" else "low",
            [
                f"Good overall score of {score}/100",
                "Above average performance compared to other candidates",
                "Meets most job requirements",
            ],
        )
    if score >= _tier_threshold("maybe", "score", 65) and percentile >= _tier_threshold("maybe", "percentile", 40):
        return (
            "maybe",
            "low",
            [
                f"Moderate score of {score}/100",
                "Some gaps in requirements alignment",
                "Consider for interview to assess fit",
            ],
        )
    if score >= _tier_threshold("no_hire", "score", 50):
        return (
            "no_hire",
            "medium",
            [
                f"Below average score of {score}/100",
                "Significant gaps in key requirements",
                "Better candidates available",
            ],
        )
    return (
        "strong_no_hire",
        "high",
        [
            f"Low score of {score}/100",
            "Major misalignment with job requirements",
            "Not suitable for this position",
        ],
    )


def next_steps_for(decision: HiringDecision, candidate: ScoredCandidate) -> list[str]:
    steps = list(_NEXT_STEPS[decision])
    if any(s.category == "skills" and s.impact == "high" for s in candidate.strengths):
        steps.append("Consider for technical leadership roles")
    if any(w.category == "experience" and w.severity == "high" for w in candidate.weaknesses):
        steps.append("Consider for junior or mid-level positions instead")
    return steps


def generate_hiring_recommendation(candidate: ScoredCandidate, index: int, total: int) -> HiringRecommendation:
    """Place ``candidate`` (0-based ``index`` of ``total``) on the hire ladder and apply bias checks."""
    result = candidate.scoring_result
    percentile = percentile_for_index(index, total)
    decision, confidence, reasoning = _decide(result.overall_score, percentile, result.confidence_level)

    warnings = detect_bias(candidate)
    if warnings:
        confidence = lower_confidence(confidence)
        reasoning.append("Note: Potential bias factors detected - review carefully")

    return HiringRecommendation(
        recommendation=decision,
        confidence=confidence,
        reasoning=reasoning,
        bias_warnings=warnings,
        next_steps=next_steps_for(decision, candidate),
    )


def _category_percentile(name: CategoryName, score: int, candidates: list[ScoredCandidate]) -> float:
    better = sum(1 for other in candidates if getattr(other.scoring_result.category_scores, name) > score)
    return (len(candidates) - better) / len(candidates) * 100


def _differentiating_factors(candidate: ScoredCandidate, similar: list[ScoredCandidate]) -> list[str]:
    if not similar:
        return []
    margin = float(_cfg("differentiating_margin", 10))
    factors: list[str] = []
    for name, score in candidate.scoring_result.category_scores.items():
        average = sum(getattr(other.scoring_result.category_scores, name) for other in similar) / len(similar)
        if score > average + margin:
            factors.append(f"Stronger {name} performance than similar candidates")
        elif score < average - margin:
            factors.append(f"Weaker {name} performance than similar candidates")
    return factors


def generate_comparative_analysis(index: int, ordered: list[ScoredCandidate]) -> ComparativeAnalysis:
    candidate = ordered[index]
    total = len(ordered)
    scores = candidate.scoring_result.category_scores
    percentiles = {name: _category_percentile(name, score, ordered) for name, score in scores.items()}

    window = int(_cfg("similar_window", 10))
    similar = [
        other
        for position, other in enumerate(ordered)
        if position != index
        and abs(other.scoring_result.overall_score - candidate.scoring_result.overall_score) <= window
    ]

    advantage_at = float(_cfg("advantage_percentile", 75))
    opportunity_at = float(_cfg("opportunity_percentile", 25))
    return ComparativeAnalysis(
        overall_rank=index + 1,
        total_candidates=total,
        percentile_rank=percentile_for_index(index, total),
        category_percentiles=percentiles,
        similar_candidates_count=len(similar),
        differentiating_factors=_differentiating_factors(candidate, similar),
        competitive_advantages=[
            f"Top 25% in {name}" for name in CATEGORY_NAMES if percentiles[name] >= advantage_at
        ],
        improvement_opportunities=[
            f"Improvement needed in {name}" for name in CATEGORY_NAMES if percentiles[name] <= opportunity_at
        ],
    )


def score_candidate(
    candidate: CandidateData,
    job_requirements: JobRequirements | None = None,
    job_description: str | None = None,
) -> ScoredCandidate:
    result = calculate_overall_score(candidate.content, candidate.sections, job_requirements, job_description)
    return ScoredCandidate(
        **dict(candidate),
        scoring_result=result,
        strengths=identify_strengths(result),
        weaknesses=identify_weaknesses(result),
    )


def _candidate_label(candidate: CandidateData) -> str:
    if settings.log_candidate_names and candidate.name:
        return f"{candidate.candidate_id}:{candidate.name}"
    return candidate.candidate_id


def rank_candidates(
    candidates: list[CandidateData],
    job_requirements: JobRequirements | None = None,
    job_description: str | None = None,
    criteria: RankingCriteria | None = None,
) -> list[RankedCandidate]:
    if not candidates:
        logger.warning("rank_candidates_empty returning=[]")
        return []

    criteria = criteria or default_ranking_criteria()
    scored = [score_candidate(candidate, job_requirements, job_description) for candidate in candidates]
    ordered = order_candidates(scored, criteria)
    total = len(ordered)

    ranked: list[RankedCandidate] = []
    for index, candidate in enumerate(ordered):
        ranked.append(
            RankedCandidate(
                **dict(candidate),
                rank=index + 1,
                hiring_recommendation=generate_hiring_recommendation(candidate, index, total),
                comparative_analysis=generate_comparative_analysis(index, ordered),
            )
        )
        logger.debug(
            "candidate_ranked candidate=%s rank=%s overall=%s decision=%s",
            _candidate_label(candidate),
            index + 1,
            candidate.scoring_result.overall_score,
            ranked[-1].hiring_recommendation.recommendation,
        )

    logger.info("candidates_ranked total=%s", total)
    return ranked

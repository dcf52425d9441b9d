from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any

from afinn import Afinn

from resume_compat.analysis.ats import analyze_ats_compatibility, get_priority_recommendations
from resume_compat.analysis.lexicons import (
    BENEFIT_INDICATORS,
    CLARITY_NEGATIVE,
    CLARITY_POSITIVE,
    IMPACT_INDICATORS,
    IMPACT_WORDS,
    NON_VERB_WORDS,
    PASSIVE_INDICATORS,
    QUANTIFIABLE_INDICATORS,
    STRONG_ACTION_VERBS,
    WEAK_ACTION_VERBS,
    WEAK_VERB_REPLACEMENTS,
)
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.core.scores import clamp_score, round_half_up
from resume_compat.features.keyword_match import (
    KeywordMatch,
    professional_keyword_match,
    resume_text_corpus,
    weighted_keyword_match,
)
from resume_compat.schemas.ats import ATSCompatibilityResult
from resume_compat.schemas.content import (
    ActionVerbAnalysis,
    ActionVerbSuggestion,
    ClarityAndImpactAnalysis,
    ContentAnalysisResult,
    ContentRecommendation,
    KeywordMatchingAnalysis,
    QuantifiableAchievementAnalysis,
    QuantifiedAchievement,
)
from resume_compat.schemas.job import JobRequirements
from resume_compat.schemas.resume import ParsedSection, ResumeContent, dedupe_preserving_order

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z]+(?:'[a-z]+)?")
_SENTENCE_RE = re.compile(r"[.!?]+")
_SUFFIXES = ("ed", "ing", "s", "d")
_CLARITY_POSITIVE_PATTERNS = tuple(re.compile(rf"\b{re.escape(term)}\b") for term in CLARITY_POSITIVE)
_CLARITY_NEGATIVE_PATTERNS = tuple(re.compile(rf"\b{re.escape(term)}\b") for term in CLARITY_NEGATIVE)
_PASSIVE_PATTERNS = tuple(re.compile(rf"\b{term}\b") for term in PASSIVE_INDICATORS)


def _cfg(path: str, default: Any) -> Any:
    return get_scoring_value(f"content.{path}", default)


def _verb_forms(word: str) -> list[str]:
    forms = [word]
    for suffix in _SUFFIXES:
        if word.endswith(suffix) and len(word) > len(suffix):
            forms.append(word[: -len(suffix)])
    return forms


def classify_verb(word: str) -> tuple[str, str] | None:
    """Return ("strong" | "weak", matched form) for a verb token, or None when it is not a known verb."""
    for form in _verb_forms(word):
        if form in STRONG_ACTION_VERBS:
            return "strong", form
        if form in WEAK_ACTION_VERBS:
            return "weak", form
    return None


def extract_verbs(text: str) -> list[str]:
    """Tokens found in the strong or weak verb dictionaries.

    Other -ed/-ing words are not counted: in resumes they are mostly nouns
    ("engineering", "training") and would dilute the strong-verb ratio.
    """
    return [
        word
        for word in _WORD_RE.findall((text or "").lower())
        if word not in NON_VERB_WORDS and classify_verb(word) is not None
    ]


@lru_cache(maxsize=1)
def _sentiment_model() -> Afinn:
    return Afinn(language="en")


def sentiment_score(text: str) -> int:
    """Sum of AFINN-165 word valences (-5..5 per word)."""
    return int(_sentiment_model().score(text or ""))


def analyze_action_verbs(text: str) -> ActionVerbAnalysis:
    verbs = extract_verbs(text)
    strong: list[str] = []
    weak: list[str] = []
    suggestions: list[ActionVerbSuggestion] = []

    for verb in verbs:
        classified = classify_verb(verb)
        if classified is None:
            continue
        strength, form = classified
        if strength == "strong":
            strong.append(verb)
            continue
        weak.append(verb)
        alternatives = WEAK_VERB_REPLACEMENTS.get(form)
        if alternatives:
            suggestions.append(
                ActionVerbSuggestion(
                    weak_verb=form,
                    suggestions=list(alternatives),
                    example=f'Instead of "{form}", try "{alternatives[0]}"',
                )
            )

    score = 0
    if verbs:
        strong_ratio = len(strong) / len(verbs)
        weak_ratio = len(weak) / len(verbs)
        score = clamp_score(round_half_up((strong_ratio - 0.5 * weak_ratio) * 100))

    return ActionVerbAnalysis(
        score=score,
        strong_verbs=dedupe_preserving_order(strong),
        weak_verbs=dedupe_preserving_order(weak),
        total_verbs=len(verbs),
        suggestions=suggestions,
    )


def _quantified_sentences(text: str) -> list[str]:
    lowered = text.lower()
    sentences = _SENTENCE_RE.split(text)
    found: list[str] = []
    for indicator in QUANTIFIABLE_INDICATORS:
        if indicator not in lowered:
            continue
        for sentence in sentences:
            if indicator in sentence.lower():
                found.append(sentence.strip())
                break
    return dedupe_preserving_order(found)


def analyze_quantifiable_achievements(content: ResumeContent) -> QuantifiableAchievementAnalysis:
    quantified: list[QuantifiedAchievement] = []
    missing: list[str] = []

    for experience in content.experience:
        text = experience.full_text
        sentences = _quantified_sentences(text)
        if sentences:
            quantified.append(QuantifiedAchievement(company=experience.company, achievements=sentences))
        elif any(indicator in text.lower() for indicator in BENEFIT_INDICATORS):
            label = " - ".join(value for value in (experience.company, experience.position) if value)
            missing.append(label or "Untitled role")

    opportunities = len(quantified) + len(missing)
    score = 100 if opportunities == 0 else round_half_up(len(quantified) / opportunities * 100)
    return QuantifiableAchievementAnalysis(
        score=score,
        quantified_achievements=quantified,
        missing_quantification=missing,
        suggestions=[
            f"Add specific metrics to {item} (e.g., percentages, dollar amounts, time saved, team size)"
            for item in missing
        ],
    )


def analyze_keyword_matching(content: ResumeContent, job_requirements: JobRequirements | None) -> KeywordMatchingAnalysis:
    text = resume_text_corpus(content)
    match: KeywordMatch
    if job_requirements is not None:
        match = weighted_keyword_match(text, job_requirements, empty_score=100.0)
    else:
        match = professional_keyword_match(text)

    match_percentage = 0
    if match.total_keywords:
        match_percentage = clamp_score(round_half_up(len(match.matched) / match.total_keywords * 100))

    return KeywordMatchingAnalysis(
        score=clamp_score(round_half_up(match.score)),
        matched_keywords=match.matched,
        missing_keywords=match.missing,
        total_job_keywords=match.total_keywords,
        match_percentage=match_percentage,
        uses_job_requirements=job_requirements is not None,
    )


def _clarity_score(lowered: str) -> int:
    score = float(_cfg("clarity.base", 70))
    score += float(_cfg("clarity.positive_bonus", 2)) * sum(
        1 for pattern in _CLARITY_POSITIVE_PATTERNS if pattern.search(lowered)
    )
    score -= float(_cfg("clarity.negative_penalty", 3)) * sum(
        1 for pattern in _CLARITY_NEGATIVE_PATTERNS if pattern.search(lowered)
    )
    return clamp_score(round_half_up(score))


def _impact_score(lowered: str, sentiment: int) -> int:
    score = float(_cfg("impact.base", 50))
    if sentiment > 0:
        score += min(
            float(_cfg("impact.sentiment_cap", 20)),
            sentiment * float(_cfg("impact.sentiment_multiplier", 2)),
        )
    score += float(_cfg("impact.word_bonus", 3)) * sum(1 for word in IMPACT_WORDS if word in lowered)
    return clamp_score(round_half_up(score))


def identify_readability_issues(text: str) -> list[str]:
    issues: list[str] = []
    max_words = int(_cfg("readability.max_sentence_words", 25))
    long_sentences = [s for s in _SENTENCE_RE.split(text) if len(s.split()) > max_words]
    if long_sentences:
        issues.append(f"{len(long_sentences)} sentences are too long (over {max_words} words)")

    lowered = text.lower()
    passive_count = sum(len(pattern.findall(lowered)) for pattern in _PASSIVE_PATTERNS)
    if passive_count > int(_cfg("readability.passive_limit", 5)):
        issues.append("Consider reducing passive voice usage")
    return issues


def analyze_clarity_and_impact(text: str) -> ClarityAndImpactAnalysis:
    lowered = (text or "").lower()
    sentiment = sentiment_score(lowered)
    clarity = _clarity_score(lowered)
    impact = _impact_score(lowered, sentiment)
    return ClarityAndImpactAnalysis(
        score=round_half_up((clarity + impact) / 2),
        clarity_score=clarity,
        impact_score=impact,
        sentiment_score=sentiment,
        word_count=len(lowered.split()),
        readability_issues=identify_readability_issues(text or ""),
        impact_indicators=[indicator for indicator in IMPACT_INDICATORS if indicator in lowered],
    )


def _overall_content_score(
    action_verbs: ActionVerbAnalysis,
    quantification: QuantifiableAchievementAnalysis,
    keywords: KeywordMatchingAnalysis,
    clarity: ClarityAndImpactAnalysis,
    ats_result: ATSCompatibilityResult,
) -> int:
    parts = {
        "action_verbs": action_verbs.score,
        "quantification": quantification.score,
        "keywords": keywords.score,
        "clarity": clarity.score,
        "ats": ats_result.overall_score,
    }
    total = sum(score * float(_cfg(f"weights.{name}", 0.2)) for name, score in parts.items())
    return clamp_score(round_half_up(total))


def _content_recommendations(
    action_verbs: ActionVerbAnalysis,
    quantification: QuantifiableAchievementAnalysis,
    keywords: KeywordMatchingAnalysis,
    clarity: ClarityAndImpactAnalysis,
    ats_result: ATSCompatibilityResult,
) -> list[ContentRecommendation]:
    recommendations: list[ContentRecommendation] = []

    if action_verbs.score < int(_cfg("thresholds.action_verbs", 70)):
        recommendations.append(
            ContentRecommendation(
                category="action-verbs",
                priority="high",
                title="Strengthen Action Verbs",
                description="Replace weak action verbs with stronger alternatives to show impact",
                examples=[suggestion.example for suggestion in action_verbs.suggestions[:3]],
            )
        )

    if quantification.score < int(_cfg("thresholds.quantification", 60)):
        recommendations.append(
            ContentRecommendation(
                category="quantification",
                priority="high",
                title="Add Quantifiable Achievements",
                description="Include specific numbers, percentages, and metrics to demonstrate impact",
                examples=quantification.suggestions[:2],
            )
        )

    if keywords.score < int(_cfg("thresholds.keywords", 50)) and keywords.total_job_keywords > 0:
        recommendations.append(
            ContentRecommendation(
                category="keywords",
                priority="medium",
                title="Improve Keyword Matching",
                description="Include more relevant keywords from the job description",
                examples=[f"Consider adding: {keyword}" for keyword in keywords.missing_keywords[:5]],
            )
        )

    if clarity.score < int(_cfg("thresholds.clarity", 60)):
        recommendations.append(
            ContentRecommendation(
                category="clarity",
                priority="medium",
                title="Improve Content Clarity",
                description="Make your achievements more specific and impactful",
                examples=clarity.readability_issues[:2],
            )
        )

    if ats_result.overall_score < int(_cfg("thresholds.ats", 80)):
        for ats_rec in get_priority_recommendations(ats_result.recommendations):
            recommendations.append(
                ContentRecommendation(
                    category="ats-compatibility",
                    priority=ats_rec.priority,
                    title=ats_rec.title,
                    description=ats_rec.description,
                    examples=[ats_rec.example] if ats_rec.example else [],
                )
            )

    return recommendations


def analyze_resume_content(
    content: ResumeContent,
    sections: list[ParsedSection],
    job_requirements: JobRequirements | None = None,
    ats_result: ATSCompatibilityResult | None = None,
) -> ContentAnalysisResult:
    """Score verbs, quantification, keywords and clarity, then fold in the ATS score as a fifth equal part.

    ``ats_result`` may be passed in when the caller has already analyzed the same content.
    """
    text = resume_text_corpus(content)
    action_verbs = analyze_action_verbs(text)
    quantification = analyze_quantifiable_achievements(content)
    keywords = analyze_keyword_matching(content, job_requirements)
    clarity = analyze_clarity_and_impact(text)
    ats = ats_result if ats_result is not None else analyze_ats_compatibility(content, sections)

    result = ContentAnalysisResult(
        overall_score=_overall_content_score(action_verbs, quantification, keywords, clarity, ats),
        action_verb_analysis=action_verbs,
        quantifiable_achievements=quantification,
        keyword_matching=keywords,
        clarity_and_impact=clarity,
        ats_compatibility=ats,
        recommendations=_content_recommendations(action_verbs, quantification, keywords, clarity, ats),
    )
    logger.debug(
        "content_analyzed overall=%s verbs=%s quantification=%s keywords=%s clarity=%s",
        result.overall_score,
        action_verbs.score,
        quantification.score,
        keywords.score,
        clarity.score,
    )
    return result

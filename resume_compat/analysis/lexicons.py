from __future__ import annotations

ATS_ACTION_VERBS: tuple[str, ...] = (
    "achieved",
    "managed",
    "led",
    "developed",
    "created",
    "implemented",
    "improved",
    "increased",
    "reduced",
    "optimized",
    "designed",
    "built",
    "delivered",
    "executed",
)

STRONG_ACTION_VERBS: frozenset[str] = frozenset(
    {
        "achieved", "accelerated", "accomplished", "advanced", "analyzed", "architected",
        "automated", "built", "created", "delivered", "designed", "developed", "directed",
        "drove", "enhanced", "established", "executed", "expanded", "generated", "implemented",
        "improved", "increased", "initiated", "innovated", "launched", "led", "managed",
        "optimized", "orchestrated", "pioneered", "produced", "reduced", "resolved",
        "spearheaded", "streamlined", "strengthened", "transformed", "upgraded",
    }
)

WEAK_ACTION_VERBS: frozenset[str] = frozenset(
    {
        "did", "made", "worked", "helped", "assisted", "participated", "involved",
        "responsible", "duties", "tasks", "handled", "dealt", "used", "utilized",
        "familiar", "experienced", "knowledgeable",
    }
)

WEAK_VERB_REPLACEMENTS: dict[str, tuple[str, ...]] = {
    "did": ("achieved", "accomplished", "executed", "delivered"),
    "made": ("created", "developed", "built", "produced"),
    "worked": ("collaborated", "contributed", "participated", "engaged"),
    "helped": ("assisted", "supported", "facilitated", "enabled"),
    "responsible": ("managed", "oversaw", "directed", "led"),
    "handled": ("managed", "processed", "resolved", "addressed"),
    "used": ("utilized", "leveraged", "applied", "implemented"),
}

# Dictionary verb forms that read as adjectives in resume prose ("advanced degree").
NON_VERB_WORDS: frozenset[str] = frozenset(
    {
        "during", "bed", "need", "seed", "speed", "feed", "hundred", "thing", "things",
        "something", "nothing", "anything", "everything", "morning", "evening", "spring",
        "string", "strings", "king", "ring", "wing", "ceiling", "wedding", "red", "shed",
        "united", "limited", "related", "based", "detailed", "advanced", "sophisticated",
        "dedicated", "talented", "skilled", "motivated", "oriented", "interested",
    }
)

QUANTIFIABLE_INDICATORS: tuple[str, ...] = (
    "%", "percent", "percentage", "$", "dollar", "million", "thousand", "billion",
    "increased", "decreased", "reduced", "improved", "grew", "generated", "saved",
    "hours", "days", "weeks", "months", "years", "times faster", "x faster",
    "team of", "budget of", "revenue of", "sales of", "users", "customers", "clients",
)

BENEFIT_INDICATORS: tuple[str, ...] = (
    "improved", "increased", "reduced", "managed", "led", "developed",
    "created", "implemented", "optimized", "streamlined", "enhanced",
    "helped", "assisted", "worked", "participated", "contributed",
    "supported", "collaborated", "delivered", "built", "designed",
)

CLARITY_POSITIVE: tuple[str, ...] = (
    "specifically", "precisely", "exactly", "clearly", "directly", "successfully",
    "effectively", "efficiently", "systematically", "strategically", "proactively",
)

CLARITY_NEGATIVE: tuple[str, ...] = (
    "various", "multiple", "several", "many", "some", "different", "numerous",
    "stuff", "things", "etc", "and so on", "among others", "including but not limited to",
)

IMPACT_WORDS: tuple[str, ...] = (
    "achieved", "delivered", "exceeded", "successful", "significant",
    "major", "critical", "key", "essential", "innovative",
)

IMPACT_INDICATORS: tuple[str, ...] = (
    "increased", "improved", "reduced", "saved", "generated",
    "achieved", "exceeded", "delivered", "launched", "created",
)

PASSIVE_INDICATORS: tuple[str, ...] = ("was", "were", "been", "being")

PROFESSIONAL_KEYWORDS: tuple[str, ...] = (
    "managed", "led", "developed", "implemented", "created", "improved",
    "increased", "reduced", "achieved", "delivered", "collaborated",
    "analyzed", "designed", "optimized", "streamlined", "enhanced",
)

LEADERSHIP_VERBS: tuple[str, ...] = ("led", "managed", "supervised", "directed", "coordinated")

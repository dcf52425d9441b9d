from __future__ import annotations

import re

ACHIEVEMENT_MARKERS = ("-", "•", "*")

_ACHIEVEMENT_PREFIX_RE = re.compile(r"^[-•*]\s*")
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[a-zA-Z0-9-]+", re.IGNORECASE)
WEBSITE_RE = re.compile(r"(?:https?://)?(?:www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}(?:/[^\s]*)?")
_URL_MARKER_RE = re.compile(r"(?:https?://|www\.|linkedin\.com)", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
PARENTHETICAL_RE = re.compile(r"\([^)]*\)")


def split_lines(text: str) -> list[str]:
    return (text or "").split("\n")


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line or "").strip()


def non_blank_lines(text: str) -> list[str]:
    return [line.strip() for line in split_lines(text) if line.strip()]


def is_achievement_line(line: str) -> bool:
    return line.startswith(ACHIEVEMENT_MARKERS)


def strip_achievement_prefix(line: str) -> str:
    return _ACHIEVEMENT_PREFIX_RE.sub("", line).strip()


def has_email(line: str) -> bool:
    return bool(EMAIL_RE.search(line or ""))


def has_url(line: str) -> bool:
    return bool(_URL_MARKER_RE.search(line or ""))


def is_contact_like(line: str) -> bool:
    stripped = normalize_line(line)
    if not stripped:
        return False
    return bool(EMAIL_RE.search(stripped) or PHONE_RE.search(stripped) or WEBSITE_RE.search(stripped))


def strip_years_and_parentheticals(line: str) -> str:
    without_years = YEAR_RE.sub("", line)
    return normalize_line(PARENTHETICAL_RE.sub("", without_years))


def clean_fragment(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = normalize_line(value).strip(" -–—|,;:")
    return cleaned or None

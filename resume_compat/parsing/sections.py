from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resume_compat.parsing.utils import has_email, has_url, is_achievement_line, normalize_line, split_lines
from resume_compat.schemas.resume import ParsedSection, SectionKind

logger = logging.getLogger(__name__)

_HEADER_MAX_LENGTH = 50


@dataclass(frozen=True)
class SectionRule:
    kind: SectionKind
    keywords: tuple[str, ...]

    def matches_exactly(self, normalized: str) -> bool:
        return normalized in self.keywords

    def mentions(self, normalized: str) -> bool:
        return any(keyword in normalized for keyword in self.keywords)


# Evaluated in order; the first rule that matches wins.
SECTION_RULES: tuple[SectionRule, ...] = (
    SectionRule("contact", ("contact", "personal information", "personal details")),
    SectionRule("summary", ("summary", "profile", "objective", "about", "overview")),
    SectionRule(
        "experience",
        ("experience", "work experience", "employment", "work history", "professional experience", "career"),
    ),
    SectionRule("education", ("education", "academic", "qualifications", "degrees")),
    SectionRule("skills", ("skills", "technical skills", "competencies", "technologies", "expertise")),
    SectionRule("certifications", ("certifications", "certificates", "licenses", "credentials")),
)


def _looks_like_header(line: str) -> bool:
    if len(line) >= _HEADER_MAX_LENGTH:
        return False
    if ":" in line:
        return True
    if not any(char.isalpha() for char in line):
        return False
    return line == line.upper() or line == line.lower()


def detect_section_kind(line: str) -> SectionKind:
    """Classify a single line as a section header, or return "unknown" for body text."""
    stripped = normalize_line(line)
    if not stripped or is_achievement_line(stripped) or has_email(stripped) or has_url(stripped):
        return "unknown"

    normalized = stripped.lower().rstrip(":").strip()
    for rule in SECTION_RULES:
        if rule.matches_exactly(normalized):
            return rule.kind

    if not _looks_like_header(stripped):
        return "unknown"

    for rule in SECTION_RULES:
        if rule.mentions(normalized):
            return rule.kind
    return "unknown"


def is_section_header(line: str) -> bool:
    return detect_section_kind(line) != "unknown"


@dataclass(slots=True)
class _OpenSection:
    kind: SectionKind
    start_offset: int
    end_offset: int
    lines: list[str] = field(default_factory=list)

    def close(self) -> ParsedSection:
        return ParsedSection(
            kind=self.kind,
            text="\n".join(self.lines),
            start_offset=self.start_offset,
            end_offset=self.end_offset,
        )


def detect_sections(raw_text: str) -> list[ParsedSection]:
    """Split raw resume text into ordered, non-overlapping typed sections.

    Blank lines are skipped. A header line opens a new section (and closes the
    previous one); any other line is appended to the open section. Lines seen
    before the first header form an implicit leading contact section.
    Offsets are character positions in ``raw_text``; ``end_offset`` points just
    past the last non-blank line of the section.
    """
    sections: list[ParsedSection] = []
    current: _OpenSection | None = None
    cursor = 0

    for raw_line in split_lines(raw_text):
        line_start = cursor
        line_end = cursor + len(raw_line)
        cursor = line_end + 1

        stripped = raw_line.strip()
        if not stripped:
            continue

        kind = detect_section_kind(stripped)
        if kind != "unknown":
            if current is not None:
                sections.append(current.close())
            current = _OpenSection(kind=kind, start_offset=line_start, end_offset=line_end, lines=[stripped])
        elif current is not None:
            current.lines.append(stripped)
            current.end_offset = line_end
        else:
            current = _OpenSection(kind="contact", start_offset=line_start, end_offset=line_end, lines=[stripped])

    if current is not None:
        sections.append(current.close())

    logger.debug("sections_detected count=%s kinds=%s", len(sections), [section.kind for section in sections])
    return sections


def reconstruct_text(sections: list[ParsedSection]) -> str:
    return "\n".join(section.text for section in sections)

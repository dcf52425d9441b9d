from __future__ import annotations

import logging

from resume_compat.parsing.extractors import (
    extract_certifications,
    extract_contact_info,
    extract_education,
    extract_skills,
    extract_summary,
    extract_work_experience,
)
from resume_compat.parsing.sections import detect_sections
from resume_compat.schemas.resume import ParsedResume, ResumeContent, dedupe_preserving_order

logger = logging.getLogger(__name__)


def parse_resume(raw_text: str) -> ParsedResume:
    """Parse plain resume text into typed sections and structured entities.

    Never raises on malformed input: anything that cannot be recognised is
    simply absent from the result.
    """
    text = raw_text or ""
    sections = detect_sections(text)
    content = ResumeContent(
        raw_text=text,
        contact_info=extract_contact_info(text, sections),
        summary=extract_summary(sections),
        experience=extract_work_experience(sections),
        education=extract_education(sections),
        skills=extract_skills(sections),
        certifications=extract_certifications(sections),
    )
    logger.debug(
        "resume_parsed sections=%s experience=%s education=%s skills=%s certifications=%s",
        len(sections),
        len(content.experience),
        len(content.education),
        len(content.skills),
        len(content.certifications),
    )
    return ParsedResume(content=content, sections=sections)


def extract_resume_keywords(content: ResumeContent) -> list[str]:
    keywords: list[str] = list(content.skills)
    keywords.extend(exp.position for exp in content.experience if exp.position)
    keywords.extend(exp.company for exp in content.experience if exp.company)
    keywords.extend(edu.field for edu in content.education if edu.field)
    keywords.extend(cert.name for cert in content.certifications if cert.name)
    return dedupe_preserving_order(keywords)

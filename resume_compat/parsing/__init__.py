from .extractors import (
    extract_certifications,
    extract_contact_info,
    extract_education,
    extract_skills,
    extract_summary,
    extract_work_experience,
)
from .parse import extract_resume_keywords, parse_resume
from .sections import SECTION_RULES, SectionRule, detect_section_kind, detect_sections, reconstruct_text

__all__ = [
    "SECTION_RULES",
    "SectionRule",
    "detect_section_kind",
    "detect_sections",
    "reconstruct_text",
    "extract_contact_info",
    "extract_summary",
    "extract_work_experience",
    "extract_education",
    "extract_skills",
    "extract_certifications",
    "parse_resume",
    "extract_resume_keywords",
]

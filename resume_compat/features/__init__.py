from .jd_requirements import (
    analyze_job_description,
    extract_compensation_info,
    extract_experience_level,
    extract_job_skills,
    parse_qualification_sections,
)
from .job_type import JOB_TYPE_RULES, JobTypeClassification, JobTypeRule, classify_job_type, weights_for_job_type
from .keyword_match import (
    KeywordMatch,
    find_missing_keywords,
    professional_keyword_match,
    resume_text_corpus,
    weighted_keyword_match,
)

__all__ = [
    "analyze_job_description",
    "extract_compensation_info",
    "extract_experience_level",
    "extract_job_skills",
    "parse_qualification_sections",
    "JOB_TYPE_RULES",
    "JobTypeClassification",
    "JobTypeRule",
    "classify_job_type",
    "weights_for_job_type",
    "KeywordMatch",
    "find_missing_keywords",
    "professional_keyword_match",
    "resume_text_corpus",
    "weighted_keyword_match",
]

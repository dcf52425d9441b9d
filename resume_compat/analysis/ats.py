from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from resume_compat.analysis.lexicons import ATS_ACTION_VERBS
from resume_compat.core.config.scoring import get_scoring_value
from resume_compat.core.scores import round_half_up
from resume_compat.schemas.ats import (
    ATSCompatibilityResult,
    ATSIssue,
    ATSRecommendation,
    AtsCategory,
    CompatibilityLevel,
    Priority,
    Severity,
)
from resume_compat.schemas.resume import ParsedSection, ResumeContent

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS: tuple[str, ...] = ("contact", "experience", "education", "skills")
RECOMMENDED_SECTIONS: tuple[str, ...] = ("summary", "certifications")

_COMPLEX_FORMATTING_PATTERNS = (
    re.compile(r"\t+"),
    re.compile(r" {4,}"),
    re.compile(r"[^\x00-\x7F]"),
    re.compile(r"[│┌┐└┘├┤┬┴┼]"),
    re.compile(r"[▪▫■□●○]"),
)
_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]")
_BULLET_KIND_RE = re.compile(r"^(?:(?P<glyph>[-•*▪▫■□●○])|(?P<numbered>\d+[.)]))\s")
_NUMBER_RE = re.compile(r"\d+")
_ACTION_VERB_PATTERNS = tuple(re.compile(rf"\b{verb}\b") for verb in ATS_ACTION_VERBS)
_UNPROFESSIONAL_EMAIL_PATTERNS = (
    re.compile(r"\d{4,}"),
    re.compile(r"(sexy|hot|cool|awesome|ninja|rockstar|guru)", re.IGNORECASE),
    re.compile(r"[._]{2,}"),
    re.compile(r"@(yahoo|hotmail|aol)", re.IGNORECASE),
)
_DATE_FORMATS = (
    ("year", re.compile(r"^\d{4}$")),
    ("month/year", re.compile(r"^\d{1,2}/\d{4}$")),
    ("month year", re.compile(r"^[A-Za-z]+\.?\s+\d{4}$")),
)


@dataclass(slots=True)
class _DimensionResult:
    score: float = 100
    issues: list[ATSIssue] = field(default_factory=list)
    recommendations: list[ATSRecommendation] = field(default_factory=list)

    def penalize(
        self,
        points: float,
        *,
        category: AtsCategory,
        severity: Severity | None = None,
        description: str | None = None,
        impact: str | None = None,
        priority: Priority,
        title: str,
        recommendation: str,
        example: str | None = None,
    ) -> None:
        self.score -= points
        if severity is not None and description is not None:
            self.issues.append(
                ATSIssue(category=category, severity=severity, description=description, impact=impact or "")
            )
        self.recommendations.append(
            ATSRecommendation(
                category=category,
                priority=priority,
                title=title,
                description=recommendation,
                example=example,
            )
        )

    @property
    def final_score(self) -> int:
        return max(0, round_half_up(self.score))


def _cfg(path: str, default: Any) -> Any:
    return get_scoring_value(f"ats.{path}", default)


def _bullet_kinds(raw_text: str) -> set[str]:
    kinds: set[str] = set()
    for line in raw_text.split("\n"):
        match = _BULLET_KIND_RE.match(line.strip())
        if match is None:
            continue
        kinds.add("numbered" if match.group("numbered") else match.group("glyph"))
    return kinds


def analyze_formatting(content: ResumeContent) -> _DimensionResult:
    result = _DimensionResult()
    raw_text = content.raw_text

    complex_count = sum(len(pattern.findall(raw_text)) for pattern in _COMPLEX_FORMATTING_PATTERNS)
    if complex_count > int(_cfg("formatting.complex_pattern_limit", 5)):
        result.penalize(
            float(_cfg("formatting.complex_penalty", 20)),
            category="formatting",
            severity="high",
            description="Complex formatting detected that may not be ATS-friendly",
            impact="ATS systems may not parse content correctly, leading to missed keywords",
            priority="high",
            title="Simplify Formatting",
            recommendation="Use simple formatting with standard bullets (- or •) and avoid complex layouts",
            example="Replace special characters with standard bullets: • instead of ▪",
        )

    if len(_NON_ASCII_RE.findall(raw_text)) > int(_cfg("formatting.non_ascii_limit", 5)):
        result.penalize(
            float(_cfg("formatting.non_ascii_penalty", 10)),
            category="formatting",
            severity="medium",
            description="Non-standard characters detected",
            impact="May cause parsing issues in some ATS systems",
            priority="medium",
            title="Use Standard Characters",
            recommendation="Replace special characters with standard ASCII equivalents",
            example='Use standard quotes " instead of curly quotes “ ”',
        )

    if len(_bullet_kinds(raw_text)) > 1:
        result.penalize(
            float(_cfg("formatting.bullet_penalty", 5)),
            category="formatting",
            severity="low",
            description="Inconsistent bullet point formatting",
            impact="May appear unprofessional and reduce readability",
            priority="low",
            title="Standardize Bullet Points",
            recommendation="Use consistent bullet points throughout the resume",
            example="Use • for all bullet points instead of mixing •, -, and *",
        )

    lines = raw_text.split("\n")
    max_line_length = int(_cfg("formatting.max_line_length", 100))
    long_lines = [line for line in lines if len(line) > max_line_length]
    if len(long_lines) > len(lines) * float(_cfg("formatting.long_line_ratio", 0.3)):
        result.penalize(
            float(_cfg("formatting.long_line_penalty", 10)),
            category="formatting",
            severity="medium",
            description="Many lines exceed recommended length",
            impact="May cause formatting issues when parsed by ATS",
            priority="medium",
            title="Optimize Line Length",
            recommendation=f"Keep lines under {max_line_length} characters for better ATS parsing",
            example="Break long sentences into multiple lines or bullet points",
        )

    return result


def analyze_section_organization(content: ResumeContent, sections: list[ParsedSection]) -> _DimensionResult:
    result = _DimensionResult()
    kinds = [section.kind for section in sections]

    missing_required = [kind for kind in REQUIRED_SECTIONS if kind not in kinds]
    if missing_required:
        missing_text = ", ".join(missing_required)
        result.penalize(
            len(missing_required) * float(_cfg("organization.missing_required_penalty", 25)),
            category="organization",
            severity="high",
            description=f"Missing required sections: {missing_text}",
            impact="ATS may not find key information, reducing match scores",
            priority="high",
            title="Add Missing Sections",
            recommendation=f"Include all required sections: {missing_text}",
            example='Add a "Skills" section with relevant technical and soft skills',
        )

    missing_recommended = [kind for kind in RECOMMENDED_SECTIONS if kind not in kinds]
    if missing_recommended:
        missing_text = ", ".join(missing_recommended)
        result.penalize(
            len(missing_recommended) * float(_cfg("organization.missing_recommended_penalty", 5)),
            category="organization",
            severity="low",
            description=f"Missing recommended sections: {missing_text}",
            impact="Optional sections help recruiters and ATS understand your profile",
            priority="medium",
            title="Consider Adding Recommended Sections",
            recommendation=f"Consider adding: {missing_text}",
            example='Add a "Summary" section to highlight key qualifications',
        )

    contact_index = kinds.index("contact") if "contact" in kinds else -1
    if contact_index != 0:
        result.penalize(
            float(_cfg("organization.contact_not_first_penalty", 10)),
            category="organization",
            severity="medium",
            description="Contact information is not at the top of the resume",
            impact="ATS may have difficulty locating contact information",
            priority="medium",
            title="Move Contact Information to Top",
            recommendation="Place contact information at the very beginning of your resume",
            example="Start with: Name, Phone, Email, LinkedIn, Location",
        )

    experience_index = kinds.index("experience") if "experience" in kinds else -1
    if experience_index > int(_cfg("organization.late_experience_index", 2)):
        result.penalize(
            float(_cfg("organization.late_experience_penalty", 5)),
            category="organization",
            severity="low",
            description="Experience section appears late in the resume",
            impact="Recruiters and ATS may weigh early sections more heavily",
            priority="low",
            title="Consider Moving Experience Section Earlier",
            recommendation="Place work experience near the top after contact info and summary",
            example="Order: Contact → Summary → Experience → Education → Skills",
        )

    field_penalty = float(_cfg("organization.missing_field_penalty", 15))
    if not content.contact_info.name:
        result.penalize(
            field_penalty,
            category="organization",
            severity="high",
            description="Name not found in contact information",
            impact="ATS cannot identify the candidate",
            priority="high",
            title="Add Your Name",
            recommendation="Ensure your full name is clearly visible at the top of the resume",
            example="John Smith (as the first line of your resume)",
        )

    if not content.contact_info.email:
        result.penalize(
            field_penalty,
            category="organization",
            severity="high",
            description="Email address not found",
            impact="Recruiters cannot contact you",
            priority="high",
            title="Add Email Address",
            recommendation="Include a professional email address in your contact information",
            example="john.smith@email.com",
        )

    if not content.experience:
        result.penalize(
            field_penalty,
            category="organization",
            severity="high",
            description="No work experience found",
            impact="ATS cannot assess relevant experience",
            priority="high",
            title="Add Work Experience",
            recommendation="Include relevant work experience with job titles, companies, and dates",
            example="Software Developer at Tech Company (2020-2023)",
        )

    return result


def analyze_readability(content: ResumeContent) -> _DimensionResult:
    result = _DimensionResult()
    raw_text = content.raw_text

    word_count = len(raw_text.split())
    estimated_pages = word_count / float(_cfg("readability.words_per_page", 250))
    max_pages = int(_cfg("readability.max_pages", 2))
    if estimated_pages > max_pages:
        result.penalize(
            float(_cfg("readability.length_penalty", 15)),
            category="readability",
            severity="medium",
            description=(
                f"Resume appears to be {-int(-estimated_pages // 1)} pages, "
                f"exceeding recommended {max_pages} pages"
            ),
            impact="May overwhelm recruiters and ATS systems",
            priority="medium",
            title="Reduce Resume Length",
            recommendation=f"Trim content to fit within {max_pages} pages",
            example="Focus on most recent and relevant experience, remove outdated skills",
        )

    lines = raw_text.split("\n")
    blank_lines = sum(1 for line in lines if not line.strip())
    if blank_lines / len(lines) < float(_cfg("readability.min_blank_line_ratio", 0.1)):
        result.penalize(
            float(_cfg("readability.whitespace_penalty", 10)),
            category="readability",
            severity="medium",
            description="Insufficient white space detected",
            impact="Dense text is harder to read and may appear cluttered",
            priority="medium",
            title="Add White Space",
            recommendation="Add blank lines between sections and entries for better readability",
            example="Leave a blank line between each job entry",
        )

    min_description = int(_cfg("readability.min_description_length", 50))
    short_descriptions = [exp for exp in content.experience if len(exp.description) < min_description]
    if short_descriptions:
        result.penalize(
            len(short_descriptions) * float(_cfg("readability.short_description_penalty", 5)),
            category="readability",
            severity="medium",
            description=f"{len(short_descriptions)} job(s) have insufficient description",
            impact="ATS may not find enough keywords to match job requirements",
            priority="medium",
            title="Expand Job Descriptions",
            recommendation="Provide detailed descriptions for each role with specific achievements",
            example="Add 2-4 bullet points describing key responsibilities and accomplishments",
        )

    experience_text = " ".join(exp.description for exp in content.experience).lower()
    action_verb_count = sum(1 for pattern in _ACTION_VERB_PATTERNS if pattern.search(experience_text))
    if action_verb_count < int(_cfg("readability.min_action_verbs", 3)):
        result.penalize(
            float(_cfg("readability.action_verb_penalty", 10)),
            category="readability",
            severity="medium",
            description="Limited use of strong action verbs",
            impact="Weak language may not effectively communicate achievements",
            priority="medium",
            title="Use Strong Action Verbs",
            recommendation="Start bullet points with powerful action verbs",
            example='Instead of "Was responsible for..." use "Managed team of 5 developers..."',
        )

    if len(_NUMBER_RE.findall(experience_text)) < len(content.experience):
        result.penalize(
            float(_cfg("readability.quantification_penalty", 10)),
            category="readability",
            severity="low",
            description="Experience entries lack quantified results",
            impact="Achievements without numbers are harder to evaluate",
            priority="medium",
            title="Add Quantifiable Results",
            recommendation="Include numbers, percentages, and metrics to demonstrate impact",
            example="Increased sales by 25% or Managed team of 8 people",
        )

    return result


def _date_formats(content: ResumeContent) -> set[str]:
    dates: list[str] = []
    for exp in content.experience:
        dates.extend(value for value in (exp.start_date, exp.end_date) if value)
    dates.extend(edu.graduation_date for edu in content.education if edu.graduation_date)

    formats: set[str] = set()
    for value in dates:
        for name, pattern in _DATE_FORMATS:
            if pattern.match(value.strip()):
                formats.add(name)
    return formats


def _capitalization_issue_count(content: ResumeContent) -> int:
    upper_min = int(_cfg("presentation.upper_case_min_length", 5))
    lower_min = int(_cfg("presentation.lower_case_min_length", 3))
    values = [content.contact_info.name]
    values.extend(exp.position for exp in content.experience)
    values.extend(exp.company for exp in content.experience)
    values.extend(edu.degree for edu in content.education)
    values.extend(edu.institution for edu in content.education)

    count = 0
    for value in values:
        if not value:
            continue
        if value.isupper() and len(value) > upper_min:
            count += 1
        if value.islower() and len(value) > lower_min:
            count += 1
    return count


def analyze_professional_presentation(content: ResumeContent) -> _DimensionResult:
    result = _DimensionResult()
    contact = content.contact_info

    if contact.email and any(pattern.search(contact.email) for pattern in _UNPROFESSIONAL_EMAIL_PATTERNS):
        result.penalize(
            float(_cfg("presentation.email_penalty", 15)),
            category="presentation",
            severity="medium",
            description="Email address may appear unprofessional",
            impact="May create negative first impression with recruiters",
            priority="medium",
            title="Use Professional Email",
            recommendation="Use a simple, professional email format",
            example="firstname.lastname@gmail.com or firstnamelastname@gmail.com",
        )

    if len(_date_formats(content)) > 1:
        result.penalize(
            float(_cfg("presentation.date_format_penalty", 5)),
            category="presentation",
            severity="low",
            description="Inconsistent date formatting",
            impact="May appear careless and reduce professional appearance",
            priority="low",
            title="Standardize Date Format",
            recommendation="Use consistent date format throughout the resume",
            example="Use MM/YYYY format: 01/2020 - 12/2022",
        )

    capitalization_issues = _capitalization_issue_count(content)
    if capitalization_issues:
        result.penalize(
            capitalization_issues * float(_cfg("presentation.capitalization_penalty", 3)),
            category="presentation",
            severity="low",
            description="Inappropriate capitalization detected",
            impact="May appear unprofessional",
            priority="low",
            title="Fix Capitalization",
            recommendation="Use proper title case for names, positions, and institutions",
            example="Software Developer instead of SOFTWARE DEVELOPER or software developer",
        )

    if len(content.skills) > int(_cfg("presentation.max_skills", 15)):
        result.penalize(
            float(_cfg("presentation.skills_penalty", 5)),
            category="presentation",
            severity="low",
            description="Skills section is long and unorganized",
            impact="Key skills are harder to spot in a long flat list",
            priority="low",
            title="Organize Skills Section",
            recommendation="Group skills by category (Technical, Languages, etc.) for better presentation",
            example="Technical Skills: JavaScript, Python, React\nLanguages: English (Native), Spanish (Fluent)",
        )

    if not contact.linkedin:
        result.penalize(
            float(_cfg("presentation.linkedin_penalty", 5)),
            category="presentation",
            severity="low",
            description="No LinkedIn profile found",
            impact="Recruiters often verify candidates on LinkedIn",
            priority="low",
            title="Add LinkedIn Profile",
            recommendation="Include your LinkedIn profile URL in contact information",
            example="linkedin.com/in/yourname",
        )

    return result


def _weighted_overall(scores: dict[str, int]) -> int:
    defaults = {"formatting": 0.30, "organization": 0.30, "readability": 0.25, "presentation": 0.15}
    configured = _cfg("weights", None)
    weights = dict(defaults)
    if isinstance(configured, dict):
        weights.update({key: float(value) for key, value in configured.items() if key in defaults})

    weighted_sum = 0.0
    total_weight = 0.0
    for name, score in scores.items():
        weight = weights.get(name, 0.0)
        weighted_sum += score * weight
        total_weight += weight
    if total_weight <= 0:
        return 0
    return round_half_up(weighted_sum / total_weight)


def analyze_ats_compatibility(content: ResumeContent, sections: list[ParsedSection]) -> ATSCompatibilityResult:
    formatting = analyze_formatting(content)
    organization = analyze_section_organization(content, sections)
    readability = analyze_readability(content)
    presentation = analyze_professional_presentation(content)
    dimensions = (formatting, organization, readability, presentation)

    overall = _weighted_overall(
        {
            "formatting": formatting.final_score,
            "organization": organization.final_score,
            "readability": readability.final_score,
            "presentation": presentation.final_score,
        }
    )
    result = ATSCompatibilityResult(
        overall_score=overall,
        formatting_score=formatting.final_score,
        section_organization_score=organization.final_score,
        readability_score=readability.final_score,
        professional_presentation_score=presentation.final_score,
        issues=[issue for dimension in dimensions for issue in dimension.issues],
        recommendations=[rec for dimension in dimensions for rec in dimension.recommendations],
    )
    logger.debug(
        "ats_analyzed overall=%s formatting=%s organization=%s readability=%s presentation=%s issues=%s",
        result.overall_score,
        result.formatting_score,
        result.section_organization_score,
        result.readability_score,
        result.professional_presentation_score,
        len(result.issues),
    )
    return result


def get_compatibility_level(score: int) -> CompatibilityLevel:
    if score >= int(_cfg("levels.excellent", 90)):
        return "excellent"
    if score >= int(_cfg("levels.good", 75)):
        return "good"
    if score >= int(_cfg("levels.fair", 60)):
        return "fair"
    return "poor"


def get_priority_recommendations(
    recommendations: list[ATSRecommendation],
    *,
    limit: int | None = None,
) -> list[ATSRecommendation]:
    cap = limit if limit is not None else int(_cfg("priority_limit", 5))
    return [rec for rec in recommendations if rec.priority == "high"][:cap]

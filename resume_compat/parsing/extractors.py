from __future__ import annotations

import re

from resume_compat.parsing.sections import is_section_header
from resume_compat.parsing.utils import (
    EMAIL_RE,
    LINKEDIN_RE,
    PHONE_RE,
    WEBSITE_RE,
    YEAR_RE,
    clean_fragment,
    is_achievement_line,
    is_contact_like,
    non_blank_lines,
    normalize_line,
    strip_achievement_prefix,
    strip_years_and_parentheticals,
)
from resume_compat.schemas.resume import (
    Certification,
    ContactInfo,
    Education,
    ParsedSection,
    SectionKind,
    WorkExperience,
    dedupe_preserving_order,
)

_CONTACT_FALLBACK_CHARS = 500
_NAME_MAX_LENGTH = 50
_JOB_HEADER_MAX_LENGTH = 100
_SKILL_MAX_LENGTH = 50

_ADDRESS_RE = re.compile(r"([A-Za-z ]+,\s*[A-Z]{2}\s*\d{5})|([A-Za-z ]+,\s*[A-Za-z ]+)")
_ADDRESS_EXCLUDED = (".com", ".org", ".net", "@")

_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"
_DATE_TOKEN = rf"(?:\d{{1,2}}/\d{{4}}|{_MONTH}\s+\d{{4}}|\d{{4}})"
_DATE_RANGE_RE = re.compile(
    rf"({_DATE_TOKEN})\s*(?:[-–—]|\bto\b)\s*({_DATE_TOKEN}|present|current)",
    re.IGNORECASE,
)
_OPEN_ENDED = {"present", "current"}
_JOB_HEADER_RE = re.compile(r"\bat\b|@|,|\d{4}", re.IGNORECASE)
_POSITION_COMPANY_SEPARATORS = (
    re.compile(r"\s+at\s+", re.IGNORECASE),
    re.compile(r"\s+@\s+"),
    re.compile(r",\s+"),
)

_DEGREE_RE = re.compile(r"bachelor|master|phd|doctorate|associate|diploma|certificate", re.IGNORECASE)
_EDUCATION_SPLIT_RE = re.compile(r",|\bat\b|\bfrom\b", re.IGNORECASE)
_FIELD_RE = re.compile(r"\bin\s+(.+)", re.IGNORECASE)
_CERTIFICATION_SPLIT_RE = re.compile(r",|\bby\b|\bfrom\b", re.IGNORECASE)
_SKILL_SPLIT_RE = re.compile(r"[,;|•\-]")


def _sections_of(sections: list[ParsedSection], kind: SectionKind) -> list[ParsedSection]:
    return [section for section in sections if section.kind == kind]


def _body_lines(section: ParsedSection) -> list[str]:
    return non_blank_lines(section.text)[1:]


def extract_contact_info(raw_text: str, sections: list[ParsedSection]) -> ContactInfo:
    contact_text = "\n".join(section.text for section in _sections_of(sections, "contact"))
    if not contact_text:
        contact_text = (raw_text or "")[:_CONTACT_FALLBACK_CHARS]
    lines = non_blank_lines(contact_text)

    name: str | None = None
    for line in lines:
        if is_section_header(line) or is_contact_like(line):
            continue
        if len(line) < _NAME_MAX_LENGTH:
            name = line
        break

    email_match = EMAIL_RE.search(contact_text)
    phone_match = PHONE_RE.search(contact_text)
    linkedin_match = LINKEDIN_RE.search(contact_text)

    website: str | None = None
    for match in WEBSITE_RE.finditer(contact_text):
        candidate = match.group(0)
        lowered = candidate.lower()
        if "linkedin.com" in lowered or "@" in candidate or "mailto:" in lowered:
            continue
        start = match.start()
        if start > 0 and contact_text[start - 1] in "@.":
            continue
        if lowered.startswith("www.") or lowered.startswith("http"):
            website = candidate
            break

    address: str | None = None
    for line in lines:
        if line == name:
            continue
        match = _ADDRESS_RE.search(line)
        if match is None:
            continue
        candidate = normalize_line(match.group(0))
        if any(marker in candidate for marker in _ADDRESS_EXCLUDED):
            continue
        address = candidate
        break

    return ContactInfo(
        name=name,
        email=email_match.group(0) if email_match else None,
        phone=phone_match.group(0) if phone_match else None,
        linkedin=linkedin_match.group(0) if linkedin_match else None,
        website=website,
        address=address,
    )


def extract_summary(sections: list[ParsedSection]) -> str | None:
    summary_sections = _sections_of(sections, "summary")
    if not summary_sections:
        return None
    body = "\n".join(_body_lines(summary_sections[0])).strip()
    return body or None


def looks_like_job_header(line: str) -> bool:
    return (
        bool(_JOB_HEADER_RE.search(line))
        and len(line) < _JOB_HEADER_MAX_LENGTH
        and not is_achievement_line(line)
    )


def parse_date_range(line: str) -> tuple[str | None, str | None, bool]:
    """Return (start, end, matched); ``end`` is None for present/current roles."""
    match = _DATE_RANGE_RE.search(line)
    if match is None:
        return None, None, False
    start = normalize_line(match.group(1))
    end_raw = normalize_line(match.group(2))
    end = None if end_raw.lower() in _OPEN_ENDED else end_raw
    return start, end, True


def parse_job_header(line: str) -> WorkExperience:
    start_date, end_date, _ = parse_date_range(line)
    remainder = _DATE_RANGE_RE.sub("", line)
    remainder = normalize_line(re.sub(r"\([^)]*\)", "", remainder))
    remainder = remainder.strip(" -–—|,")

    position: str | None = remainder
    company: str | None = None
    for separator in _POSITION_COMPANY_SEPARATORS:
        if separator.search(remainder):
            parts = separator.split(remainder)
            position = parts[0]
            company = parts[1] if len(parts) > 1 else None
            break

    return WorkExperience(
        position=clean_fragment(position) or "",
        company=clean_fragment(company),
        start_date=start_date,
        end_date=end_date,
    )


def _finish_experience(experience: WorkExperience, description_lines: list[str]) -> WorkExperience:
    achievements = [
        strip_achievement_prefix(line) for line in description_lines if is_achievement_line(line)
    ]
    return experience.model_copy(
        update={
            "description": "\n".join(description_lines).strip(),
            "achievements": [item for item in achievements if item],
        }
    )


def _parse_experience_section(section: ParsedSection) -> list[WorkExperience]:
    experiences: list[WorkExperience] = []
    current: WorkExperience | None = None
    description_lines: list[str] = []

    for line in _body_lines(section):
        if not looks_like_job_header(line):
            if current is not None:
                description_lines.append(line)
            continue

        header = parse_job_header(line)
        # A bare date line directly under a title belongs to that title.
        if (
            current is not None
            and not header.position
            and header.start_date
            and current.start_date is None
            and not description_lines
        ):
            current = current.model_copy(update={"start_date": header.start_date, "end_date": header.end_date})
            continue

        if current is not None:
            experiences.append(_finish_experience(current, description_lines))
        current = header
        description_lines = []

    if current is not None:
        experiences.append(_finish_experience(current, description_lines))
    return experiences


def extract_work_experience(sections: list[ParsedSection]) -> list[WorkExperience]:
    experiences: list[WorkExperience] = []
    for section in _sections_of(sections, "experience"):
        experiences.extend(_parse_experience_section(section))
    return experiences


def _split_field(degree: str) -> tuple[str, str | None]:
    match = _FIELD_RE.search(degree)
    if match is None:
        return degree, None
    return degree[: match.start()].strip(), clean_fragment(match.group(1))


def parse_education_line(line: str) -> Education | None:
    if not _DEGREE_RE.search(line):
        return None

    years = YEAR_RE.findall(line)
    graduation_date = years[-1] if years else None
    remainder = strip_years_and_parentheticals(line)

    parts = _EDUCATION_SPLIT_RE.split(remainder)
    if len(parts) >= 2:
        degree_text, institution = parts[0], clean_fragment(parts[1])
    else:
        degree_text, institution = remainder, None

    degree, field = _split_field(clean_fragment(degree_text) or "")
    return Education(
        institution=institution,
        degree=degree,
        field=field,
        graduation_date=graduation_date,
    )


def extract_education(sections: list[ParsedSection]) -> list[Education]:
    entries: list[Education] = []
    for section in _sections_of(sections, "education"):
        for line in _body_lines(section):
            education = parse_education_line(line)
            if education is not None:
                entries.append(education)
    return entries


def _split_skill_line(line: str) -> list[str]:
    if ":" in line:
        _, _, line = line.partition(":")
    tokens = [token.strip() for token in _SKILL_SPLIT_RE.split(line)]
    return [token for token in tokens if 0 < len(token) < _SKILL_MAX_LENGTH]


def extract_skills(sections: list[ParsedSection]) -> list[str]:
    skills: list[str] = []
    for section in _sections_of(sections, "skills"):
        lines = non_blank_lines(section.text)
        if not lines:
            continue
        header, body = lines[0], lines[1:]
        # "SKILLS: Python, SQL" carries skills on the header line itself.
        _, _, inline = header.partition(":")
        if inline.strip():
            skills.extend(_split_skill_line(inline))
        for line in body:
            skills.extend(_split_skill_line(line))
    return dedupe_preserving_order(skills)


def parse_certification_line(line: str) -> Certification | None:
    years = YEAR_RE.findall(line)
    date = years[-1] if years else None
    remainder = strip_years_and_parentheticals(line)

    parts = _CERTIFICATION_SPLIT_RE.split(remainder)
    if len(parts) >= 2:
        name, issuer = clean_fragment(parts[0]), clean_fragment(parts[1])
    else:
        name, issuer = clean_fragment(remainder), None

    if not name:
        return None
    return Certification(name=name, issuer=issuer, date=date)


def extract_certifications(sections: list[ParsedSection]) -> list[Certification]:
    certifications: list[Certification] = []
    for section in _sections_of(sections, "certifications"):
        for line in _body_lines(section):
            certification = parse_certification_line(line)
            if certification is not None:
                certifications.append(certification)
    return certifications

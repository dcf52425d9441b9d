from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SectionKind = Literal["contact", "summary", "experience", "education", "skills", "certifications", "unknown"]


def dedupe_preserving_order(values: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


class ParsedSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: SectionKind
    text: str
    start_offset: int = Field(ge=0)
    end_offset: int = Field(ge=0)

    @model_validator(mode="after")
    def _validate_offsets(self) -> "ParsedSection":
        if self.end_offset < self.start_offset:
            raise ValueError("end_offset must not precede start_offset")
        return self

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n") if self.text else []


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    website: str | None = None
    address: str | None = None


class WorkExperience(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: str | None = None
    position: str = ""
    start_date: str | None = None
    end_date: str | None = None
    description: str = ""
    achievements: list[str] = Field(default_factory=list)

    @property
    def is_current(self) -> bool:
        return self.start_date is not None and self.end_date is None

    @property
    def full_text(self) -> str:
        return f"{self.description} {' '.join(self.achievements)}"


class Education(BaseModel):
    model_config = ConfigDict(frozen=True)

    institution: str | None = None
    degree: str = ""
    field: str | None = None
    graduation_date: str | None = None


class Certification(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    issuer: str | None = None
    date: str | None = None


class ResumeContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: str | None = None
    experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str]) -> list[str]:
        return dedupe_preserving_order(value)


class ParsedResume(BaseModel):
    content: ResumeContent
    sections: list[ParsedSection] = Field(default_factory=list)

    def section_kinds(self) -> list[SectionKind]:
        return [section.kind for section in self.sections]

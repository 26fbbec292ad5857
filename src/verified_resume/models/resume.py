"""Pydantic models for the tailored resume produced by the generator."""

from __future__ import annotations

from pydantic import Field

from verified_resume.models.base import CamelModel


class Links(CamelModel):
    linked_in: str | None = None
    github: str | None = None
    portfolio: str | None = None
    website: str | None = None


class Basics(CamelModel):
    name: str = Field(min_length=1)
    email: str
    phone: str | None = None
    location: str | None = None
    links: Links | None = None


class ResumeBullet(CamelModel):
    text: str = Field(min_length=1)
    # Quote from the original resume text backing this bullet
    evidence_snippet: str | None = None


class ExperienceEntry(CamelModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    start_date: str
    end_date: str  # "Present" for a current role
    bullets: list[ResumeBullet] = Field(min_length=1)
    location: str | None = None


class ProjectEntry(CamelModel):
    name: str = Field(min_length=1)
    description: str | None = None
    technologies: list[str] = Field(default_factory=list)
    url: str | None = None
    bullets: list[ResumeBullet] = Field(default_factory=list)


class EducationEntry(CamelModel):
    degree: str = Field(min_length=1)
    school: str = Field(min_length=1)
    graduation_date: str | None = None
    gpa: str | None = None
    honors: list[str] = Field(default_factory=list)


class TailoringNotes(CamelModel):
    keywords_targeted: list[str]
    job_requirements_matched: list[str] = Field(default_factory=list)
    job_requirements_not_matched: list[str] = Field(default_factory=list)


class TailoredResume(CamelModel):
    basics: Basics
    summary: str = Field(min_length=1)
    skills: list[str]
    experience: list[ExperienceEntry]
    projects: list[ProjectEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    tailoring_notes: TailoringNotes

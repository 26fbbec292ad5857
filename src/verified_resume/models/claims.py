"""Pydantic models for claims: the generator's claim map and extracted bullets."""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict

from verified_resume.models.base import CamelModel

Section = Literal["summary", "experience", "projects", "education"]


class ClaimMapEntry(CamelModel):
    """Generator-supplied audit pairing of a bullet with its evidence."""

    bullet_text: str
    evidence_snippet: str
    section: Section
    index: int | None = None


class SuggestedAddition(CamelModel):
    """A job requirement the original resume does not cover."""

    requirement: str
    reason: str
    suggested_text: str | None = None


class ExtractedBullet(CamelModel):
    """One addressable claim; ``bullet_id`` joins extraction to verification."""

    model_config = ConfigDict(frozen=True)

    bullet_id: str
    bullet_text: str
    section: Section
    section_index: int
    bullet_index: int
    role_title: str | None = None
    company: str | None = None
    project_name: str | None = None

"""Pydantic models for a generation request, generator payload and stored record."""

from __future__ import annotations

import hashlib
from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from verified_resume.models.base import CamelModel
from verified_resume.models.claims import ClaimMapEntry, SuggestedAddition
from verified_resume.models.resume import TailoredResume
from verified_resume.models.verification import BulletVerification, Flag


class GenerationRequest(CamelModel):
    job_text: str = Field(min_length=1)
    resume_text: str = Field(min_length=1)
    include_cover_letter: bool = False
    user_id: str | None = None
    job_url: str | None = None

    @field_validator("job_text", "resume_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("job_url")
    @classmethod
    def _empty_url_is_absent(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class GenerationOutput(CamelModel):
    """Validated generator payload."""

    tailored_resume_json: TailoredResume
    cover_letter_text: str | None = None
    claim_map: list[ClaimMapEntry]
    suggested_additions: list[SuggestedAddition] = Field(default_factory=list)


class GenerationRecord(CamelModel):
    """Immutable snapshot of one completed generation, handed to storage."""

    model_config = ConfigDict(frozen=True)

    generation_id: str
    user_id: str = "anonymous"
    created_at: datetime = Field(default_factory=datetime.now)
    job_url: str | None = None
    job_text: str = ""
    resume_text_hash: str = ""
    include_cover_letter: bool = False
    tailored_resume_json: TailoredResume | None = None
    cover_letter_text: str | None = None
    claim_map: list[ClaimMapEntry] = Field(default_factory=list)
    suggested_additions: list[SuggestedAddition] = Field(default_factory=list)
    verifications: list[BulletVerification] = Field(default_factory=list)
    truth_score: int = 0
    flags: list[Flag] = Field(default_factory=list)
    models: dict[str, str] = Field(default_factory=dict)


def hash_resume_text(resume_text: str) -> str:
    """SHA-256 of the resume text; the raw text itself is never stored."""
    return hashlib.sha256(resume_text.encode("utf-8")).hexdigest()

"""Pydantic models for verifier output and user-facing flags."""

from __future__ import annotations

from enum import Enum

from verified_resume.models.base import CamelModel

NO_EVIDENCE = "none"


class VerificationStatus(str, Enum):
    SUPPORTED = "SUPPORTED"
    STRETCH = "STRETCH"
    UNSUPPORTED = "UNSUPPORTED"


class BulletVerification(CamelModel):
    bullet_text: str
    status: VerificationStatus
    reason: str
    evidence: str  # quote from the original resume, or "none"
    suggested_fix: str | None = None
    # Filled in by the verifier after re-association, even if the model omits it
    bullet_id: str | None = None


class VerificationOutput(CamelModel):
    verifications: list[BulletVerification]


class Flag(CamelModel):
    bullet_id: str | None
    bullet_text: str | None
    status: str  # STRETCH | UNSUPPORTED | MISSING_REQUIREMENT
    reason: str
    evidence: str
    suggested_fix: str | None = None
    section: str
    type: str | None = None
    requirement: str | None = None

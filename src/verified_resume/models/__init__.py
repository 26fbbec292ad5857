"""Data models for the resume generation and verification pipeline."""

from verified_resume.models.claims import ClaimMapEntry, ExtractedBullet, SuggestedAddition
from verified_resume.models.generation import (
    GenerationOutput,
    GenerationRecord,
    GenerationRequest,
)
from verified_resume.models.resume import (
    Basics,
    EducationEntry,
    ExperienceEntry,
    Links,
    ProjectEntry,
    ResumeBullet,
    TailoredResume,
    TailoringNotes,
)
from verified_resume.models.verification import (
    BulletVerification,
    Flag,
    VerificationOutput,
    VerificationStatus,
)

__all__ = [
    "Basics",
    "BulletVerification",
    "ClaimMapEntry",
    "EducationEntry",
    "ExperienceEntry",
    "ExtractedBullet",
    "Flag",
    "GenerationOutput",
    "GenerationRecord",
    "GenerationRequest",
    "Links",
    "ProjectEntry",
    "ResumeBullet",
    "SuggestedAddition",
    "TailoredResume",
    "TailoringNotes",
    "VerificationOutput",
    "VerificationStatus",
]

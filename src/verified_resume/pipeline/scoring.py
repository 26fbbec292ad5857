"""Truth score and flag derivation from bullet verifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from verified_resume.models.claims import SuggestedAddition
from verified_resume.models.verification import (
    NO_EVIDENCE,
    BulletVerification,
    Flag,
    VerificationStatus,
)

MAX_SCORE = 100
MIN_SCORE = 0

PENALTIES: dict[VerificationStatus, int] = {
    VerificationStatus.SUPPORTED: 0,
    VerificationStatus.STRETCH: 8,
    VerificationStatus.UNSUPPORTED: 20,
}

FLAGGED_STATUSES = (VerificationStatus.STRETCH, VerificationStatus.UNSUPPORTED)

MISSING_REQUIREMENT = "MISSING_REQUIREMENT"

# Sections that carry extracted bullets
BULLET_SECTIONS = ("summary", "experience", "projects")
UNKNOWN_SECTION = "unknown"


def calculate_truth_score(verifications: Sequence[BulletVerification]) -> int:
    """Score 0-100: start at 100, -8 per STRETCH, -20 per UNSUPPORTED.

    Clamped once at the end. No verifications means no confidence, so an
    empty list scores 0.
    """
    if not verifications:
        return MIN_SCORE

    score = MAX_SCORE - sum(PENALTIES[v.status] for v in verifications)
    return max(MIN_SCORE, min(MAX_SCORE, score))


def generate_flags(
    verifications: Iterable[BulletVerification],
    suggested_additions: Iterable[SuggestedAddition] = (),
) -> list[Flag]:
    """Flags for STRETCH/UNSUPPORTED bullets, then one per missing requirement."""
    flags = [
        Flag(
            bullet_id=v.bullet_id,
            bullet_text=v.bullet_text,
            status=v.status.value,
            reason=v.reason,
            evidence=v.evidence,
            suggested_fix=v.suggested_fix,
            section=_section_of(v.bullet_id),
        )
        for v in verifications
        if v.status in FLAGGED_STATUSES
    ]
    flags.extend(
        Flag(
            bullet_id=None,
            bullet_text=None,
            status=MISSING_REQUIREMENT,
            reason=addition.reason,
            evidence=NO_EVIDENCE,
            suggested_fix=addition.suggested_text,
            section="requirements",
            type="missing_requirement",
            requirement=addition.requirement,
        )
        for addition in suggested_additions
    )
    return flags


def _section_of(bullet_id: str | None) -> str:
    """Section tag from an extracted bullet id; fallback ids map to "unknown"."""
    prefix = (bullet_id or "").split("_", 1)[0]
    return prefix if prefix in BULLET_SECTIONS else UNKNOWN_SECTION

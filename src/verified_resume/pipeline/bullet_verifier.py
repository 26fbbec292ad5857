"""Bullet Verifier - fact-checks every extracted claim against the original resume."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from verified_resume.clients.llm_client import LLMClient, LLMResponse
from verified_resume.config import DEFAULT_MODEL_VARIANTS
from verified_resume.errors import InvalidModelOutputError
from verified_resume.models.claims import ExtractedBullet
from verified_resume.models.verification import NO_EVIDENCE, BulletVerification
from verified_resume.utils.json_parser import JSONRecoveryError
from verified_resume.validation import validate_verification_output

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a resume fact-checker. You compare claims in a tailored resume with
the candidate's original resume and report, for each claim, whether the
original text supports it. Respond with a single JSON object only."""

# (verification, position in the reply, extracted bullets) -> matched bullet
Matcher = Callable[[BulletVerification, int, Sequence[ExtractedBullet]], ExtractedBullet | None]


def match_by_id(
    verification: BulletVerification, position: int, bullets: Sequence[ExtractedBullet]
) -> ExtractedBullet | None:
    """The id the model echoed back, if it names a known bullet."""
    wanted = (verification.bullet_id or "").strip()
    if not wanted:
        return None
    return next((b for b in bullets if b.bullet_id == wanted), None)


def match_by_exact_text(
    verification: BulletVerification, position: int, bullets: Sequence[ExtractedBullet]
) -> ExtractedBullet | None:
    return next((b for b in bullets if b.bullet_text == verification.bullet_text), None)


def match_by_containment(
    verification: BulletVerification, position: int, bullets: Sequence[ExtractedBullet]
) -> ExtractedBullet | None:
    """Either text contains the other; absorbs punctuation and quoting drift."""
    text = verification.bullet_text.strip()
    if not text:
        return None
    for bullet in bullets:
        original = bullet.bullet_text.strip()
        if original and (text in original or original in text):
            return bullet
    return None


def match_by_position(
    verification: BulletVerification, position: int, bullets: Sequence[ExtractedBullet]
) -> ExtractedBullet | None:
    if 0 <= position < len(bullets):
        return bullets[position]
    return None


MATCHERS: tuple[Matcher, ...] = (
    match_by_id,
    match_by_exact_text,
    match_by_containment,
    match_by_position,
)


def resolve_bullet(
    verification: BulletVerification,
    position: int,
    bullets: Sequence[ExtractedBullet],
    matchers: Sequence[Matcher] = MATCHERS,
) -> ExtractedBullet | None:
    """Apply ``matchers`` in order; the first hit wins."""
    for matcher in matchers:
        bullet = matcher(verification, position, bullets)
        if bullet is not None:
            return bullet
    return None


class BulletVerifier:
    def __init__(
        self,
        llm: LLMClient,
        models: Sequence[str] = DEFAULT_MODEL_VARIANTS,
        temperature: float = 0.0,
        max_tokens: int = 8192,
        matchers: Sequence[Matcher] = MATCHERS,
    ):
        self.llm = llm
        self.models = tuple(models)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.matchers = tuple(matchers)

    async def verify(
        self,
        resume_text: str,
        bullets: Sequence[ExtractedBullet],
    ) -> tuple[list[BulletVerification], LLMResponse | None]:
        """Classify every bullet as SUPPORTED, STRETCH or UNSUPPORTED.

        Returns one verification per item in the model's reply, each resolved
        to an extracted bullet id, plus the model response (None when the
        list is empty, in which case no model call is made).
        """
        if not bullets:
            logger.info("No bullets to verify, skipping verification")
            return [], None

        logger.info("Verifying %d bullets", len(bullets))
        prompt = self.build_prompt(resume_text, bullets)

        try:
            data, response = await self.llm.generate_json(
                prompt=prompt,
                models=self.models,
                system=SYSTEM_PROMPT,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except JSONRecoveryError as exc:
            raise InvalidModelOutputError(
                f"Invalid model output from verifier: {exc}"
            ) from exc

        output = validate_verification_output(data)
        if len(output.verifications) != len(bullets):
            logger.warning(
                "Verifier returned %d verifications for %d bullets",
                len(output.verifications),
                len(bullets),
            )

        verifications = [
            self._associate(verification, position, bullets)
            for position, verification in enumerate(output.verifications)
        ]
        return verifications, response

    def _associate(
        self,
        verification: BulletVerification,
        position: int,
        bullets: Sequence[ExtractedBullet],
    ) -> BulletVerification:
        bullet = resolve_bullet(verification, position, bullets, self.matchers)
        evidence = verification.evidence.strip() or NO_EVIDENCE
        if bullet is None:
            logger.warning("Could not match verification %d to a bullet", position)
            return verification.model_copy(
                update={"bullet_id": f"bullet_{position}", "evidence": evidence}
            )
        return verification.model_copy(
            update={
                "bullet_id": bullet.bullet_id,
                "bullet_text": bullet.bullet_text,
                "evidence": evidence,
            }
        )

    def build_prompt(self, resume_text: str, bullets: Sequence[ExtractedBullet]) -> str:
        return f"""Verify each bullet of a tailored resume against the original resume text.

CLASSIFICATION RULES:

1. SUPPORTED: the claim, its metrics and facts appear explicitly (or are unmistakably
   implied) in the original resume.
   Example: the original says "increased sales by 20%"; "Increased sales by 20%" is SUPPORTED.

2. STRETCH: the core claim is plausible from the original resume but some details are
   inferred or slightly exaggerated.
   Example: the original says "worked on web application"; "Developed web application
   features" is STRETCH because "developed" is not stated.

3. UNSUPPORTED: the claim includes facts, metrics or skills that cannot be found in or
   reasonably inferred from the original resume.
   Example: the original never mentions Python; "Used Python" is UNSUPPORTED.

4. EVIDENCE: for every bullet give an exact quote from the original resume that supports
   it. For STRETCH give the closest related quote. If nothing supports it, use exactly
   "{NO_EVIDENCE}".

5. SUGGESTED FIX: for STRETCH and UNSUPPORTED bullets, rewrite the bullet using only facts
   from the original resume.

## Original resume
{resume_text}

## Bullets to verify
{self._format_bullets(bullets)}

Return ONLY valid JSON with this structure:
{{
  "verifications": [
    {{
      "bulletId": "the id shown in brackets, e.g. experience_0_1",
      "bulletText": "exact bullet text from above",
      "status": "SUPPORTED | STRETCH | UNSUPPORTED",
      "reason": "brief explanation",
      "evidence": "exact quote from the original resume or '{NO_EVIDENCE}'",
      "suggestedFix": "rewrite using only supported facts (STRETCH/UNSUPPORTED only)"
    }}
  ]
}}

Verify all {len(bullets)} bullets, in the order given."""

    def _format_bullets(self, bullets: Sequence[ExtractedBullet]) -> str:
        parts = []
        for index, bullet in enumerate(bullets, start=1):
            line = f'Bullet {index} [{bullet.bullet_id}]: "{bullet.bullet_text}"'
            if bullet.role_title:
                line += f"\n  Role: {bullet.role_title} at {bullet.company}"
            if bullet.project_name:
                line += f"\n  Project: {bullet.project_name}"
            parts.append(line)
        return "\n\n".join(parts)

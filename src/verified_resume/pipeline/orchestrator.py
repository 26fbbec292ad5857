"""Main pipeline orchestrator - generate, extract, verify, score."""

from __future__ import annotations

import logging
import random
import string
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pydantic import ValidationError

from verified_resume.clients.llm_client import LLMClient, summarize_usage
from verified_resume.config import DEFAULT_MODEL_VARIANTS
from verified_resume.errors import InvalidInputError
from verified_resume.models.claims import ExtractedBullet
from verified_resume.models.generation import (
    GenerationOutput,
    GenerationRecord,
    GenerationRequest,
    hash_resume_text,
)
from verified_resume.models.verification import BulletVerification, Flag
from verified_resume.pipeline.bullet_verifier import BulletVerifier
from verified_resume.pipeline.claim_extractor import extract_bullets
from verified_resume.pipeline.resume_generator import ResumeGenerator
from verified_resume.pipeline.scoring import calculate_truth_score, generate_flags
from verified_resume.storage.generation_store import GenerationStore
from verified_resume.validation import validation_issues

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_generation_id() -> str:
    """``gen_<epoch-ms>_<random suffix>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"gen_{int(time.time() * 1000)}_{suffix}"


@dataclass
class PipelineResult:
    """Complete result of one generation request."""

    generation_id: str
    request: GenerationRequest
    output: GenerationOutput
    bullets: list[ExtractedBullet]
    verifications: list[BulletVerification]
    truth_score: int
    flags: list[Flag]
    elapsed_seconds: float = 0.0
    metadata: dict = field(default_factory=dict)

    def to_record(self) -> GenerationRecord:
        return GenerationRecord(
            generation_id=self.generation_id,
            user_id=self.request.user_id or "anonymous",
            job_url=self.request.job_url,
            job_text=self.request.job_text,
            resume_text_hash=hash_resume_text(self.request.resume_text),
            include_cover_letter=self.request.include_cover_letter,
            tailored_resume_json=self.output.tailored_resume_json,
            cover_letter_text=self.output.cover_letter_text,
            claim_map=self.output.claim_map,
            suggested_additions=self.output.suggested_additions,
            verifications=self.verifications,
            truth_score=self.truth_score,
            flags=self.flags,
            models=self.metadata.get("models", {}),
        )

    def to_response(self) -> dict:
        """camelCase payload for the caller."""
        return {
            "generationId": self.generation_id,
            "truthScore": self.truth_score,
            "flags": [f.model_dump(mode="json", by_alias=True) for f in self.flags],
            "claimMap": [c.to_wire() for c in self.output.claim_map],
            "verifications": [v.to_wire() for v in self.verifications],
            "suggestedAdditions": [s.to_wire() for s in self.output.suggested_additions],
        }


class PipelineOrchestrator:
    """Runs generation and verification sequentially for each request.

    Holds no per-request state, so one instance can serve concurrent runs.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        model_variants: Sequence[str] = DEFAULT_MODEL_VARIANTS,
        generator_temperature: float = 0.3,
        verifier_temperature: float = 0.0,
        max_tokens: int = 8192,
        store: GenerationStore | None = None,
    ):
        self.llm = llm
        self.generator = ResumeGenerator(
            llm, model_variants, temperature=generator_temperature, max_tokens=max_tokens
        )
        self.verifier = BulletVerifier(
            llm, model_variants, temperature=verifier_temperature, max_tokens=max_tokens
        )
        self.store = store

    async def run(
        self,
        job_text: str,
        resume_text: str,
        include_cover_letter: bool = False,
        *,
        user_id: str | None = None,
        job_url: str | None = None,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> PipelineResult:
        """Run the full pipeline.

        Any failure is terminal: an unverified resume is never returned.

        Args:
            job_text: Job posting text.
            resume_text: The user's original resume as plain text.
            include_cover_letter: Also generate cover letter text.
            user_id: Owner recorded with the stored generation.
            job_url: Source URL of the job posting, if known.
            on_phase: Optional callback(phase_name, detail) for progress.
        """
        request = self._validate_request(
            job_text=job_text,
            resume_text=resume_text,
            include_cover_letter=include_cover_letter,
            user_id=user_id,
            job_url=job_url,
        )
        start = time.monotonic()
        generation_id = new_generation_id()
        logger.info(
            "Starting generation %s (job text %d chars, resume %d chars)",
            generation_id,
            len(request.job_text),
            len(request.resume_text),
        )

        def _notify(phase: str, detail: str = ""):
            if on_phase:
                on_phase(phase, detail)

        _notify("generate", "Generating tailored resume")
        output, generator_response = await self.generator.generate(
            request.job_text, request.resume_text, request.include_cover_letter
        )

        bullets = extract_bullets(output.tailored_resume_json)
        _notify("verify", f"Verifying {len(bullets)} claims")
        verifications, verifier_response = await self.verifier.verify(
            request.resume_text, bullets
        )

        truth_score = calculate_truth_score(verifications)
        flags = generate_flags(verifications, output.suggested_additions)

        elapsed = time.monotonic() - start
        # Per-request models and usage come from this run's responses
        responses = [generator_response]
        models = {"generator": generator_response.model}
        if verifier_response is not None:
            responses.append(verifier_response)
            models["verifier"] = verifier_response.model
        result = PipelineResult(
            generation_id=generation_id,
            request=request,
            output=output,
            bullets=bullets,
            verifications=verifications,
            truth_score=truth_score,
            flags=flags,
            elapsed_seconds=elapsed,
            metadata={
                "models": models,
                "tokens": summarize_usage(responses),
            },
        )

        if self.store is not None:
            self.store.save(result.to_record())

        logger.info(
            "Generation %s done: truth score %d, %d flags, %.1fs",
            generation_id,
            truth_score,
            len(flags),
            elapsed,
        )
        _notify("done", f"Truth score {truth_score}, {len(flags)} flags")
        return result

    @staticmethod
    def _validate_request(**fields) -> GenerationRequest:
        try:
            return GenerationRequest(**fields)
        except ValidationError as exc:
            issues = validation_issues(exc)
            logger.error("Rejected generation request: %s", issues)
            raise InvalidInputError(issues) from exc

"""Resume Generator - tailors the original resume to a job posting."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from verified_resume.clients.llm_client import LLMClient, LLMResponse
from verified_resume.config import DEFAULT_MODEL_VARIANTS
from verified_resume.errors import InvalidModelOutputError
from verified_resume.models.generation import GenerationOutput
from verified_resume.models.resume import TailoredResume
from verified_resume.utils.json_parser import JSONRecoveryError
from verified_resume.validation import validate_generation_output

logger = logging.getLogger(__name__)

# scheme://..., or an opaque mailto:/tel: link; "host:port" has no scheme
_SCHEME_RE = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*://|(?:mailto|tel):)", re.IGNORECASE)

LINK_FIELDS = ("linked_in", "github", "portfolio", "website")

SYSTEM_PROMPT = """\
You are a resume tailoring assistant. You rewrite a candidate's resume for a
specific job posting without ever adding facts the candidate did not state.
Respond with a single JSON object only."""

OUTPUT_SHAPE = """\
{
  "tailoredResumeJson": {
    "basics": {
      "name": "string",
      "email": "string",
      "phone": "string (optional)",
      "location": "string (optional)",
      "links": {
        "linkedIn": "url (optional)",
        "github": "url (optional)",
        "portfolio": "url (optional)",
        "website": "url (optional)"
      }
    },
    "summary": "string - tailored professional summary",
    "skills": ["only skills that appear in the original resume"],
    "experience": [
      {
        "title": "string",
        "company": "string",
        "startDate": "string",
        "endDate": "string or 'Present'",
        "location": "string (optional)",
        "bullets": [
          {"text": "tailored bullet", "evidenceSnippet": "quote from the original resume"}
        ]
      }
    ],
    "projects": [
      {
        "name": "string",
        "description": "string (optional)",
        "technologies": ["string"],
        "url": "url (optional)",
        "bullets": [{"text": "string", "evidenceSnippet": "string"}]
      }
    ],
    "education": [
      {
        "degree": "string",
        "school": "string",
        "graduationDate": "string (optional)",
        "gpa": "string (optional)",
        "honors": ["string"]
      }
    ],
    "tailoringNotes": {
      "keywordsTargeted": ["keywords taken from the job posting"],
      "jobRequirementsMatched": ["requirements the resume covers"],
      "jobRequirementsNotMatched": ["requirements the resume does not cover"]
    }
  },
  "coverLetterText": "string (omit unless a cover letter is requested)",
  "claimMap": [
    {
      "bulletText": "exact bullet text",
      "evidenceSnippet": "quote from the original resume",
      "section": "summary | experience | projects | education",
      "index": 0
    }
  ],
  "suggestedAdditions": [
    {
      "requirement": "job requirement missing from the resume",
      "reason": "why it matters for this job",
      "suggestedText": "bullet the candidate could add if it is true (optional)"
    }
  ]
}"""


class ResumeGenerator:
    def __init__(
        self,
        llm: LLMClient,
        models: Sequence[str] = DEFAULT_MODEL_VARIANTS,
        temperature: float = 0.3,
        max_tokens: int = 8192,
    ):
        self.llm = llm
        self.models = tuple(models)
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(
        self,
        job_text: str,
        resume_text: str,
        include_cover_letter: bool = False,
    ) -> tuple[GenerationOutput, LLMResponse]:
        """Generate a tailored resume, claim map and suggested additions.

        Returns the validated output and the model response it came from.

        Raises ModelUnavailableError when every model variant fails,
        InvalidModelOutputError when no JSON can be recovered and
        SchemaValidationError when the JSON has the wrong shape.
        """
        logger.info("Generating tailored resume (cover letter: %s)", include_cover_letter)
        prompt = self.build_prompt(job_text, resume_text, include_cover_letter)

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
                f"Invalid model output from generator: {exc}"
            ) from exc

        output = validate_generation_output(data)

        updates: dict = {"tailored_resume_json": normalize_links(output.tailored_resume_json)}
        if not include_cover_letter:
            updates["cover_letter_text"] = None
        output = output.model_copy(update=updates)

        logger.info(
            "Generated resume with %d experience entries, %d claims, %d suggested additions",
            len(output.tailored_resume_json.experience),
            len(output.claim_map),
            len(output.suggested_additions),
        )
        return output, response

    def build_prompt(self, job_text: str, resume_text: str, include_cover_letter: bool) -> str:
        cover_instruction = (
            "Also write a tailored cover letter in coverLetterText, using only facts "
            "from the original resume."
            if include_cover_letter
            else "Do not write a cover letter; omit coverLetterText."
        )
        return f"""Create a resume tailored to the job posting below from the candidate's original resume.

CRITICAL RULES - FOLLOW THESE STRICTLY:

1. FACT ACCURACY
   - Use ONLY facts, metrics and skills that are explicitly stated in the original resume.
   - Never invent, estimate or round numbers. "Increased revenue by 20%" is only valid if
     "20%" appears in the original resume.
   - If a metric is not present, describe the work qualitatively instead.

2. JOB REQUIREMENTS
   - If the job asks for something the original resume does not show, do NOT claim it.
   - Put it in "suggestedAdditions" with the requirement and the reason it matters.
   - Suggested additions must never appear in the resume itself.

3. EVIDENCE
   - Every experience and project bullet must carry an "evidenceSnippet": an exact or
     near-exact quote from the original resume that supports it.
   - List every bullet and its evidence in "claimMap".

4. TAILORING
   - Reorder and emphasize the experience and skills that match the job.
   - Reuse the job posting's keywords where the original resume supports them and record
     them in "tailoringNotes.keywordsTargeted".

5. OUTPUT
   - Return ONLY valid JSON with exactly this structure:
{OUTPUT_SHAPE}

{cover_instruction}

## Job posting
{job_text}

## Original resume
{resume_text}

Remember: only use facts from the original resume. Do not invent anything."""


def normalize_url(value: str | None) -> str | None:
    """Prefix ``https://`` to a link without a scheme; blank links become None."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if _SCHEME_RE.match(value):
        return value
    return f"https://{value.lstrip('/')}"


def normalize_links(resume: TailoredResume) -> TailoredResume:
    """Return a copy of ``resume`` with link-like fields carrying a scheme."""
    basics = resume.basics
    if basics.links is not None:
        links = basics.links.model_copy(
            update={name: normalize_url(getattr(basics.links, name)) for name in LINK_FIELDS}
        )
        basics = basics.model_copy(update={"links": links})

    projects = [
        project.model_copy(update={"url": normalize_url(project.url)})
        for project in resume.projects
    ]
    return resume.model_copy(update={"basics": basics, "projects": projects})

"""Claude API wrapper with async support and model-variant fallback."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import anthropic

from verified_resume.errors import ModelUnavailableError
from verified_resume.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


class EmptyResponseError(RuntimeError):
    """The model answered without any text content."""


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int
    model: str = ""


class LLMClient:
    """Async Claude API client that falls back across model variants."""

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)

    async def _call_api(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        messages = [{"role": "user", "content": prompt}]
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system
        return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ) -> LLMResponse:
        """Send a prompt to one model and return the text response with usage."""
        logger.debug("LLM call: model=%s", model)
        message = await self._call_api(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        text = "".join(
            getattr(block, "text", "") or "" for block in (message.content or [])
        )
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model,
        )

    async def generate_with_fallback(
        self,
        prompt: str,
        models: Sequence[str],
        system: str = "",
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ) -> LLMResponse:
        """Try each model in order; the first non-empty reply wins.

        A variant fails when the call raises (including the provider refusing
        the model for this key) or when it returns no text. There is exactly
        one pass through ``models``. If every variant fails the last failure
        is raised as ``ModelUnavailableError``.
        """
        if not models:
            raise ValueError("At least one model variant is required")

        last_error: BaseException | None = None
        for model in models:
            logger.info("Attempting model: %s", model)
            try:
                response = await self.generate(
                    prompt=prompt,
                    system=system,
                    model=model,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except (anthropic.NotFoundError, anthropic.PermissionDeniedError) as exc:
                logger.warning("Model %s unavailable for this API key: %s", model, exc)
                last_error = exc
                continue
            except Exception as exc:
                logger.warning("Model %s failed", model, exc_info=True)
                last_error = exc
                continue

            if not response.text.strip():
                logger.warning("Model %s returned an empty response", model)
                last_error = EmptyResponseError(f"{model} returned no text")
                continue

            logger.info("Using model: %s", model)
            return response

        logger.error("All model variants failed: %s", ", ".join(models))
        raise ModelUnavailableError(list(models), last_error) from last_error

    async def generate_json(
        self,
        prompt: str,
        models: Sequence[str],
        system: str = "",
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ) -> tuple[dict | list, LLMResponse]:
        """Send a prompt with fallback and recover JSON from the reply.

        Returns the parsed value and the response that carried it, so the
        caller knows which model answered and what it cost.
        """
        response = await self.generate_with_fallback(
            prompt=prompt,
            models=models,
            system=system,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return extract_json(response.text), response


def summarize_usage(responses: Iterable[LLMResponse]) -> dict:
    """Total token usage over the responses of one request."""
    calls = [(r.model, r.input_tokens, r.output_tokens) for r in responses]
    return {
        "input": sum(c[1] for c in calls),
        "output": sum(c[2] for c in calls),
        "calls": calls,
    }

"""Error taxonomy for the generation and verification pipeline."""

from __future__ import annotations


class ResumePipelineError(Exception):
    """Base class for terminal failures of a generation request."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ModelUnavailableError(ResumePipelineError):
    """Every configured model variant failed for one prompt.

    Usually an access or billing problem with the API key, so the last
    upstream failure is kept for the operator.
    """

    def __init__(self, models: list[str], last_error: BaseException | None) -> None:
        tried = ", ".join(models) or "<none>"
        super().__init__(f"All model variants failed ({tried}): {last_error}")
        self.models = list(models)
        self.last_error = last_error


class InvalidModelOutputError(ResumePipelineError):
    """No JSON could be recovered from the model's reply."""


class SchemaValidationError(ResumePipelineError):
    """Recovered JSON does not match the expected payload shape."""

    def __init__(self, payload: str, issues: list[tuple[str, str]]) -> None:
        joined = ", ".join(f"{path}: {message}" for path, message in issues)
        super().__init__(f"Invalid {payload} structure: {joined}")
        self.payload = payload
        self.issues = list(issues)


class InvalidInputError(ResumePipelineError):
    """Request fields are missing or malformed; raised before any model call."""

    def __init__(self, issues: list[tuple[str, str]]) -> None:
        joined = ", ".join(f"{path}: {message}" for path, message in issues)
        super().__init__(f"Invalid input: {joined}")
        self.issues = list(issues)


class StorageError(ResumePipelineError):
    """A completed generation could not be persisted."""

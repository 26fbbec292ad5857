"""Schema validation for generator and verifier payloads.

Untyped JSON recovered from a model reply stops here: callers get either a
validated pydantic model or a ``SchemaValidationError`` listing every
offending field path.
"""

from __future__ import annotations

import logging
import types
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from verified_resume.errors import SchemaValidationError
from verified_resume.models.generation import GenerationOutput
from verified_resume.models.verification import VerificationOutput

logger = logging.getLogger(__name__)

ROOT_PATH = "<root>"

_UNION_TYPES = (Union, types.UnionType)


def strip_optional_nulls(data: Any, model: type[BaseModel]) -> Any:
    """Drop explicit ``null`` values on optional fields of ``model``.

    Generators emit ``null`` where the field should simply be absent. Only
    fields with a default are touched; a ``null`` on a required field is
    left in place so validation reports it. Recurses into nested models and
    lists of models.
    """
    if not isinstance(data, dict):
        return data

    fields = _fields_by_key(model)
    cleaned: dict = {}
    for key, value in data.items():
        field = fields.get(key)
        if field is None:
            cleaned[key] = value
            continue
        if value is None and not field.is_required():
            continue
        cleaned[key] = _strip_value(value, field.annotation)
    return cleaned


def validate_generation_output(data: Any) -> GenerationOutput:
    """Validate a recovered generator payload."""
    return _validate(data, GenerationOutput, "generator output")


def validate_verification_output(data: Any) -> VerificationOutput:
    """Validate a recovered verifier payload."""
    return _validate(data, VerificationOutput, "verifier output")


def validation_issues(exc: ValidationError) -> list[tuple[str, str]]:
    """Flatten a pydantic error into (dotted field path, message) pairs."""
    issues = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or ROOT_PATH
        issues.append((path, err["msg"]))
    return issues


def _validate(data: Any, model: type[BaseModel], payload: str):
    if not isinstance(data, dict):
        issues = [(ROOT_PATH, f"expected a JSON object, got {type(data).__name__}")]
        logger.error("Schema validation failed for %s: %s", payload, issues)
        raise SchemaValidationError(payload, issues)

    try:
        return model.model_validate(strip_optional_nulls(data, model))
    except ValidationError as exc:
        issues = validation_issues(exc)
        logger.error("Schema validation failed for %s: %s", payload, issues)
        raise SchemaValidationError(payload, issues) from exc


def _fields_by_key(model: type[BaseModel]) -> dict:
    """Map every accepted key (name and camelCase alias) to its field."""
    by_key = {}
    for name, field in model.model_fields.items():
        by_key[name] = field
        by_key[field.alias or to_camel(name)] = field
    return by_key


def _strip_value(value: Any, annotation: Any) -> Any:
    if isinstance(value, dict):
        nested = _model_in(annotation)
        return strip_optional_nulls(value, nested) if nested else value
    if isinstance(value, list):
        item = _list_item(annotation)
        if item is None:
            return value
        return [_strip_value(v, item) for v in value]
    return value


def _model_in(annotation: Any) -> type[BaseModel] | None:
    origin = get_origin(annotation)
    if origin is None:
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return annotation
        return None
    if origin in _UNION_TYPES:
        for arg in get_args(annotation):
            found = _model_in(arg)
            if found is not None:
                return found
    return None


def _list_item(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is list:
        args = get_args(annotation)
        return args[0] if args else None
    if origin in _UNION_TYPES:
        for arg in get_args(annotation):
            item = _list_item(arg)
            if item is not None:
                return item
    return None

"""Tests for generator/verifier payload validation."""

import copy

import pytest

from verified_resume.errors import SchemaValidationError
from verified_resume.models.generation import GenerationOutput
from verified_resume.validation import (
    ROOT_PATH,
    strip_optional_nulls,
    validate_generation_output,
    validate_verification_output,
)


class TestStripOptionalNulls:
    def test_drops_optional_nulls_recursively(self, sample_generation_json):
        cleaned = strip_optional_nulls(sample_generation_json, GenerationOutput)

        resume = cleaned["tailoredResumeJson"]
        assert "coverLetterText" not in cleaned
        assert "phone" not in resume["basics"]
        assert "github" not in resume["basics"]["links"]
        assert "location" not in resume["experience"][0]
        assert "evidenceSnippet" not in resume["experience"][0]["bullets"][1]
        assert "suggestedText" not in cleaned["suggestedAdditions"][0]

    def test_keeps_required_nulls(self, sample_generation_json):
        data = copy.deepcopy(sample_generation_json)
        data["tailoredResumeJson"]["summary"] = None
        cleaned = strip_optional_nulls(data, GenerationOutput)
        assert cleaned["tailoredResumeJson"]["summary"] is None

    def test_does_not_mutate_input(self, sample_generation_json):
        before = copy.deepcopy(sample_generation_json)
        strip_optional_nulls(sample_generation_json, GenerationOutput)
        assert sample_generation_json == before


class TestValidateGenerationOutput:
    def test_valid_payload(self, sample_generation_json):
        output = validate_generation_output(sample_generation_json)
        assert output.tailored_resume_json.basics.name == "Jane Doe"
        assert output.cover_letter_text is None
        assert output.suggested_additions[0].requirement == "SQL"
        assert output.tailored_resume_json.experience[0].bullets[1].evidence_snippet is None

    def test_missing_summary_reports_path(self, sample_generation_json):
        data = copy.deepcopy(sample_generation_json)
        del data["tailoredResumeJson"]["summary"]

        with pytest.raises(SchemaValidationError) as exc_info:
            validate_generation_output(data)

        paths = [path for path, _ in exc_info.value.issues]
        assert "tailoredResumeJson.summary" in paths
        assert "tailoredResumeJson.summary" in str(exc_info.value)

    def test_null_summary_is_still_an_error(self, sample_generation_json):
        data = copy.deepcopy(sample_generation_json)
        data["tailoredResumeJson"]["summary"] = None

        with pytest.raises(SchemaValidationError) as exc_info:
            validate_generation_output(data)

        assert exc_info.value.issues[0][0] == "tailoredResumeJson.summary"

    def test_reports_every_bad_field(self, sample_generation_json):
        data = copy.deepcopy(sample_generation_json)
        data["tailoredResumeJson"]["experience"][0]["bullets"] = []
        data["claimMap"][0]["section"] = "hobbies"

        with pytest.raises(SchemaValidationError) as exc_info:
            validate_generation_output(data)

        paths = {path for path, _ in exc_info.value.issues}
        assert "tailoredResumeJson.experience.0.bullets" in paths
        assert "claimMap.0.section" in paths

    def test_non_object_rejected(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_generation_output(["not", "an", "object"])
        assert exc_info.value.issues[0][0] == ROOT_PATH


class TestValidateVerificationOutput:
    def test_valid_payload(self, sample_verification_json):
        output = validate_verification_output(sample_verification_json)
        assert len(output.verifications) == 4
        assert output.verifications[0].suggested_fix is None

    def test_bad_status_reports_path(self):
        data = {
            "verifications": [
                {"bulletText": "x", "status": "MAYBE", "reason": "r", "evidence": "none"}
            ]
        }
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_verification_output(data)
        assert exc_info.value.issues[0][0] == "verifications.0.status"

    def test_missing_verifications_key(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_verification_output({"results": []})
        assert exc_info.value.issues[0][0] == "verifications"

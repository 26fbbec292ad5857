"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from verified_resume.models import (
    BulletVerification,
    ExperienceEntry,
    ExtractedBullet,
    Flag,
    GenerationRecord,
    GenerationRequest,
    VerificationStatus,
)
from verified_resume.models.generation import hash_resume_text


class TestTailoredResume:
    def test_camel_case_input(self, sample_tailored_resume):
        assert sample_tailored_resume.basics.links.linked_in == "linkedin.com/in/janedoe"
        assert sample_tailored_resume.experience[0].start_date == "2020"
        assert sample_tailored_resume.tailoring_notes.job_requirements_not_matched == ["SQL"]

    def test_optional_sections_default_empty(self, sample_tailored_resume):
        data = sample_tailored_resume.to_wire()
        data.pop("projects")
        data.pop("education")
        restored = type(sample_tailored_resume).model_validate(data)
        assert restored.projects == []
        assert restored.education == []

    def test_wire_shape_uses_camel_case(self, sample_tailored_resume):
        data = sample_tailored_resume.to_wire()
        assert "tailoringNotes" in data
        assert data["experience"][0]["endDate"] == "Present"
        assert "phone" not in data["basics"]

    def test_experience_requires_a_bullet(self):
        with pytest.raises(ValidationError):
            ExperienceEntry(
                title="Analyst", company="Acme", start_date="2020", end_date="Present", bullets=[]
            )


class TestVerificationModels:
    def test_status_enum(self):
        v = BulletVerification(
            bullet_text="Did a thing", status="STRETCH", reason="r", evidence="none"
        )
        assert v.status is VerificationStatus.STRETCH
        assert v.status == "STRETCH"
        assert v.bullet_id is None

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            BulletVerification(bullet_text="x", status="MAYBE", reason="r", evidence="none")

    def test_extracted_bullet_is_frozen(self):
        bullet = ExtractedBullet(
            bullet_id="summary_0",
            bullet_text="S",
            section="summary",
            section_index=0,
            bullet_index=0,
        )
        with pytest.raises(ValidationError):
            bullet.bullet_id = "other"

    def test_flag_allows_null_bullet(self):
        flag = Flag(
            bullet_id=None,
            bullet_text=None,
            status="MISSING_REQUIREMENT",
            reason="r",
            evidence="none",
            section="requirements",
        )
        assert flag.model_dump(by_alias=True)["bulletId"] is None


class TestGenerationRequest:
    def test_blank_job_text_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(job_text="   ", resume_text="resume")

    def test_empty_job_url_is_absent(self):
        request = GenerationRequest(job_text="job", resume_text="resume", job_url="")
        assert request.job_url is None
        assert request.include_cover_letter is False


class TestGenerationRecord:
    def test_defaults(self):
        record = GenerationRecord(generation_id="gen_1_abc")
        assert record.user_id == "anonymous"
        assert record.truth_score == 0
        assert record.flags == []

    def test_json_round_trip(self, sample_tailored_resume):
        record = GenerationRecord(
            generation_id="gen_1_abc",
            tailored_resume_json=sample_tailored_resume,
            truth_score=72,
        )
        restored = GenerationRecord.model_validate_json(record.model_dump_json())
        assert restored == record

    def test_hash_resume_text(self):
        digest = hash_resume_text("resume")
        assert len(digest) == 64
        assert digest == hash_resume_text("resume")
        assert digest != hash_resume_text("resume ")

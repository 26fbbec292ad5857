"""Tests for config validation."""

import pytest

from verified_resume.config import load_config


class TestConfigValidation:
    def test_valid_defaults(self, tmp_path):
        """Default config passes validation without raising."""
        config = load_config(tmp_path / "missing.yaml")
        assert config.llm.timeout == 120
        assert len(config.llm.model_variants) == 2

    def test_empty_model_variants(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  model_variants: []\n")
        with pytest.raises(ValueError, match="model_variants"):
            load_config(yaml)

    def test_invalid_timeout(self, tmp_path):
        """timeout of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_temperature(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  verifier_temperature: 2.5\n")
        with pytest.raises(ValueError, match="verifier_temperature"):
            load_config(yaml)

    def test_invalid_max_job_chars(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("pipeline:\n  max_job_chars: 0\n")
        with pytest.raises(ValueError, match="max_job_chars"):
            load_config(yaml)

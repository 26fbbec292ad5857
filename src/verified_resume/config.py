"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_MODEL_VARIANTS = (
    "claude-sonnet-4-5-20250929",
    "claude-haiku-4-5-20251001",
)


@dataclass(frozen=True)
class LLMConfig:
    # Tried in order until one returns a usable reply
    model_variants: tuple[str, ...] = DEFAULT_MODEL_VARIANTS
    timeout: int = 120
    max_tokens: int = 8192
    generator_temperature: float = 0.3
    verifier_temperature: float = 0.0

    def __post_init__(self) -> None:
        # YAML gives lists; keep the dataclass hashable
        object.__setattr__(self, "model_variants", tuple(self.model_variants))
        if not self.model_variants:
            raise ValueError("llm.model_variants must name at least one model")
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"llm.timeout must be between 1 and 600, got {self.timeout}")
        if self.max_tokens < 1:
            raise ValueError(f"llm.max_tokens must be positive, got {self.max_tokens}")
        for name in ("generator_temperature", "verifier_temperature"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"llm.{name} must be between 0 and 1, got {value}")


@dataclass(frozen=True)
class PipelineConfig:
    max_job_chars: int = 12000
    include_cover_letter: bool = False

    def __post_init__(self) -> None:
        if self.max_job_chars < 1:
            raise ValueError(
                f"pipeline.max_job_chars must be positive, got {self.max_job_chars}"
            )


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.verified-resume/generations.db"
    output_dir: str = "./output"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        pipeline=PipelineConfig(**raw.get("pipeline", {})),
        storage=StorageConfig(**raw.get("storage", {})),
    )

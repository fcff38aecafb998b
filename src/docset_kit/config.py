# src/docset_kit/config.py

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from docset_kit.reporting.serializers import EXTENSIONS, ReportFormat

logger = logging.getLogger(__name__)


class NormalizerConfig(BaseModel):
    """Settings for one normalization run.

    Immutable. Explicit. No magic defaults from environment.
    """

    window: int = Field(default=5, ge=1)
    identical_threshold: float = Field(default=0.95, ge=0.0, le=1.0)
    minor_edit_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    reference_index: int = Field(default=0, ge=0)
    workers: int = Field(default=1, ge=1)
    report_format: ReportFormat = "json"
    canonical_filename: str = "canonical.md"
    report_basename: str = "report"

    class Config:
        extra = "forbid"
        frozen = True

    @property
    def report_filename(self) -> str:
        return f"{self.report_basename}.{EXTENSIONS[self.report_format]}"

    def with_overrides(self, **overrides: object) -> "NormalizerConfig":
        """Return a validated copy; None values leave the setting untouched."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return NormalizerConfig(**{**self.model_dump(), **updates})


def load_config(path: str | Path) -> NormalizerConfig:
    logger.info("Loading config from: %s", path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return NormalizerConfig(**data)

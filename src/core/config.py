"""Configuration models and YAML loader for the candidate search engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from src.core.schemas import FilterSpec


class DataConfig(BaseModel):
    """Locations of the candidate data service exports."""

    candidates_path: str = "data/candidates.json"
    requirements_path: str = "data/requirements.json"
    submissions_path: str = "data/submissions.json"

    @field_validator("candidates_path", "requirements_path", "submissions_path")
    @classmethod
    def path_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "data paths must not be empty"
            raise ValueError(msg)
        return v.strip()


class PaginationConfig(BaseModel):
    """Result paging for search views."""

    page_size: int = Field(default=6, ge=1, le=100)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    data: DataConfig = Field(default_factory=DataConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    search: FilterSpec = Field(default_factory=FilterSpec)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from pydantic import BaseModel, Field, field_validator


class PinSyncConfig(BaseModel):
    owner: str
    repo: str
    path: str = "saved-points.json"
    branch: str | None = None
    api_url: str = "https://api.github.com"
    cache_dir: Path = Path(".pinsync")
    pull_timeout: float = Field(default=5.0, gt=0)
    http_timeout: float = Field(default=30.0, gt=0)
    max_read_retries: int = Field(default=3, ge=0, le=10)
    status_info_seconds: float = Field(default=5.0, ge=0)
    status_error_seconds: float = Field(default=10.0, ge=0)

    model_config = {"frozen": True}

    @field_validator("owner", "repo", "path")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def content_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/contents/{quote(self.path)}"

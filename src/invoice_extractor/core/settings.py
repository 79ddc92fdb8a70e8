from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="IE_", extra="ignore")

    # App
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=3000, validation_alias=AliasChoices("IE_APP_PORT", "PORT"))
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Uploads
    upload_dir: Path = Field(default=Path("uploads"))
    max_upload_mb: int = Field(default=25)

    # Extraction
    tabular_row_limit: int = Field(default=15, ge=0)  # data rows read after the header
    gemini_api_key: str | None = Field(default=None, validation_alias=AliasChoices("IE_GEMINI_API_KEY", "GEMINI_API"))
    gemini_model: str = Field(default="gemini-1.5-flash")

    # Build metadata (populated by CI or docker build args)
    build_version: str | None = Field(default=os.getenv("BUILD_VERSION"))
    build_git_commit: str | None = Field(default=os.getenv("BUILD_GIT_COMMIT"))
    build_time: str | None = Field(default=os.getenv("BUILD_TIME"))

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    def ensure_data_dirs(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()  # type: ignore[call-arg]

"""Runtime settings, read from the environment (and a .env file if present).

- LOG_LEVEL: root log level for the service
- PALINDROME_MAX_WORKERS: thread pool size for async checks
- PALINDROME_MAX_UPLOAD_BYTES: upper bound for /check/file uploads
- PALINDROME_LEGACY_ENCODINGS: comma-separated encodings tried, in order,
  for uploads that are not UTF-8
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    log_level: str = "INFO"
    max_workers: int = Field(default=4, ge=1)
    max_upload_bytes: int = Field(default=65536, ge=1)
    legacy_encodings: List[str] = Field(default_factory=lambda: ["latin_1", "cp1251"], min_length=1)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("legacy_encodings", mode="before")
    @classmethod
    def _split_encodings(cls, value):
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


def load_settings() -> Settings:
    """Build settings from environment variables; unset ones keep defaults."""
    load_dotenv()
    data = {
        "log_level": os.getenv("LOG_LEVEL"),
        "max_workers": os.getenv("PALINDROME_MAX_WORKERS"),
        "max_upload_bytes": os.getenv("PALINDROME_MAX_UPLOAD_BYTES"),
        "legacy_encodings": os.getenv("PALINDROME_LEGACY_ENCODINGS"),
    }
    return Settings.model_validate({k: v for k, v in data.items() if v is not None})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()

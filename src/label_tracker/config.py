"""Application configuration."""

import os
from typing import Literal

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    azure_vision_key: str
    azure_vision_endpoint: str
    azure_vision_api_version: str = "v3.2"
    supabase_url: str
    supabase_service_key: str
    nutrition_table: str = "nutrition_records"
    caption_backend: Literal["azure", "openai"] = "azure"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    ocr_poll_interval_seconds: float = 1.0
    ocr_max_poll_attempts: int = 60
    http_timeout_seconds: float = 30.0
    food_table_path: str | None = None
    timezone: str = "UTC"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


def normalize_endpoint(raw: str) -> str:
    """Strip trailing slashes from a service endpoint URL."""
    return raw.strip().rstrip("/")

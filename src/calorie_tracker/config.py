"""Application configuration."""

import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_TIMEZONE = "UTC"

_logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "high"
    openai_store: bool = False
    default_timezone: str = DEFAULT_TIMEZONE
    history_limit: int = 50
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_timezone(raw: str | None, default: str = DEFAULT_TIMEZONE) -> ZoneInfo:
    """Resolve a timezone name, falling back to the default for unknown names."""
    cleaned = (raw or "").strip()
    if not cleaned:
        return ZoneInfo(default)
    try:
        return ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError):
        _logger.warning("Unknown timezone %r, using %s", cleaned, default)
        return ZoneInfo(default)

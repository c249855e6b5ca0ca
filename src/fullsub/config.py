"""Application settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Evaluator settings, read from ``FULLSUB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FULLSUB_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="WARNING")
    typecheck: bool = Field(default=True)
    show_types: bool = Field(default=True)


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, applying non-``None`` overrides."""
    settings = Settings()
    updates = {k: v for k, v in overrides.items() if v is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings


__all__ = ["Settings", "load_settings"]

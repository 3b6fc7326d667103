"""
Application settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "staging", "prod"] = "dev"

    # Formats
    # JSON list in the environment, e.g. ENABLED_FORMATS='["UPC12", "EAN8"]'
    enabled_formats: list[str] = Field(
        default_factory=lambda: ["EAN8", "UPC12"],
        description="Built-in formats in resolution order",
    )

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "text"

    # CLI
    output_format: Literal["table", "json", "csv", "markdown"] = "table"

    @field_validator("enabled_formats")
    @classmethod
    def check_enabled_formats(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one barcode format must be enabled")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate barcode formats: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

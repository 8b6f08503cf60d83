"""Centralized configuration using Pydantic Settings.

All settings can be overridden via environment variables, using the
prefix of each group (``LOG_``, ``CRISIS_``, ``API_``) or the nested
``__`` delimiter on the root settings.

Crisis hotline strings are configuration rather than scoring logic so
deployments outside Singapore can substitute local services.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Skip reading .env file during testing to use code defaults
ENV_FILE = None if os.environ.get("TESTING") else ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_HOTLINES: tuple[str, ...] = (
    "Institute of Mental Health's Mental Health Helpline: 6389-2222",
    "National Care Hotline: 1800-202-6868",
)

DEFAULT_DISCLOSURE_PROMPT = (
    "Your response indicates thoughts of self-harm. Please contact a healthcare "
    "provider or mental health helpline immediately."
)


class CrisisSettings(BaseSettings):
    """Crisis resources surfaced when a self-harm item is endorsed.

    Hotlines are shown in the configured order, ahead of every other
    recommendation, followed by the disclosure prompt.
    """

    model_config = SettingsConfigDict(
        env_prefix="CRISIS_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    hotlines: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HOTLINES),
        min_length=1,
        description="Crisis hotline entries, highest priority first",
    )
    disclosure_prompt: str = Field(
        default=DEFAULT_DISCLOSURE_PROMPT,
        min_length=1,
        description="Prompt shown after the hotlines when self-harm is endorsed",
    )

    @field_validator("hotlines", mode="after")
    @classmethod
    def reject_blank_hotlines(cls, v: list[str]) -> list[str]:
        """Hotline entries must carry text."""
        if any(not entry.strip() for entry in v):
            raise ValueError("Hotline entries cannot be blank")
        return v

    @property
    def escalation_entries(self) -> tuple[str, ...]:
        """Hotlines followed by the disclosure prompt, in display order."""
        return (*self.hotlines, self.disclosure_prompt)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(default=True)
    include_caller: bool = Field(default=True)


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (restrict in production)",
    )
    max_open_sessions: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on in-progress questionnaire sessions held in memory",
    )


class Settings(BaseSettings):
    """Root settings combining all configuration groups."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        env_nested_delimiter="__",
        extra="ignore",
    )

    crisis: CrisisSettings = Field(default_factory=CrisisSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()


def get_crisis_settings() -> CrisisSettings:
    """Get crisis settings (for FastAPI Depends)."""
    return get_settings().crisis

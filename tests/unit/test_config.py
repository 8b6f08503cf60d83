"""Tests for configuration management.

Tests verify crisis resource defaults, validation, caching, and
environment variable loading.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from maternal_wellness.config import (
    DEFAULT_DISCLOSURE_PROMPT,
    DEFAULT_HOTLINES,
    APISettings,
    CrisisSettings,
    LoggingSettings,
    Settings,
    get_crisis_settings,
    get_settings,
)

pytestmark = pytest.mark.unit


class TestCrisisSettings:
    """Tests for crisis resource configuration."""

    def test_default_hotline_order(self) -> None:
        """The IMH helpline comes before the National Care Hotline."""
        settings = CrisisSettings()
        assert settings.hotlines == list(DEFAULT_HOTLINES)
        assert settings.hotlines[0].startswith("Institute of Mental Health")
        assert settings.hotlines[1].startswith("National Care Hotline")

    def test_escalation_entries(self) -> None:
        """Hotlines are followed by the disclosure prompt."""
        entries = CrisisSettings().escalation_entries
        assert entries == (*DEFAULT_HOTLINES, DEFAULT_DISCLOSURE_PROMPT)

    def test_empty_hotlines_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CrisisSettings(hotlines=[])

    def test_blank_hotline_rejected(self) -> None:
        with pytest.raises(ValidationError, match="blank"):
            CrisisSettings(hotlines=["Helpline: 1", "  "])

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Deployments can substitute local services."""
        monkeypatch.setenv("CRISIS_HOTLINES", '["Samaritans: 116 123"]')
        monkeypatch.setenv("CRISIS_DISCLOSURE_PROMPT", "Please reach out now.")

        settings = CrisisSettings()

        assert settings.escalation_entries == ("Samaritans: 116 123", "Please reach out now.")


class TestLoggingSettings:
    """Tests for logging configuration."""

    def test_defaults(self) -> None:
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.format == "json"
        assert settings.include_timestamp is True

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="TRACE")  # type: ignore[arg-type]

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "console")
        assert LoggingSettings().format == "console"


class TestAPISettings:
    """Tests for API server configuration."""

    def test_defaults(self) -> None:
        settings = APISettings()
        assert settings.port == 8000
        assert settings.max_open_sessions == 1000

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_validation(self, port: int) -> None:
        with pytest.raises(ValidationError):
            APISettings(port=port)

    def test_max_open_sessions_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            APISettings(max_open_sessions=0)


class TestSettings:
    """Tests for root settings and caching."""

    def test_groups_present(self) -> None:
        settings = Settings()
        assert isinstance(settings.crisis, CrisisSettings)
        assert isinstance(settings.logging, LoggingSettings)
        assert isinstance(settings.api, APISettings)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("API_PORT", "9001")
        get_settings.cache_clear()

        assert get_settings() is not first
        assert get_settings().api.port == 9001

    def test_get_crisis_settings(self) -> None:
        assert get_crisis_settings() is get_settings().crisis

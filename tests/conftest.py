"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest

# Set TESTING mode BEFORE any app imports to prevent .env file loading.
os.environ["TESTING"] = "1"

# Clear environment variables BEFORE any imports that might use Pydantic Settings
# This runs at conftest import time, before test collection
_ENV_VARS_TO_CLEAR = [
    "CRISIS_HOTLINES",
    "CRISIS_DISCLOSURE_PROMPT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_INCLUDE_TIMESTAMP",
    "LOG_INCLUDE_CALLER",
    "API_HOST",
    "API_PORT",
    "API_CORS_ORIGINS",
    "API_MAX_OPEN_SESSIONS",
]

for _var in _ENV_VARS_TO_CLEAR:
    os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that might be set by .env file.

    This ensures tests use code defaults, not local developer overrides.
    Also clears any cached settings to force re-read of defaults.
    """
    for var in _ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    from maternal_wellness.config import get_settings  # noqa: PLC0415

    get_settings.cache_clear()


@pytest.fixture
def fixed_time() -> datetime:
    """Return a fixed completion timestamp."""
    return datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def epds_all_zero() -> dict[int, int]:
    """EPDS answers with every item at its lowest value."""
    return dict.fromkeys(range(1, 11), 0)


@pytest.fixture
def phq9_all_zero() -> dict[int, int]:
    """PHQ-9 answers with every item at its lowest value."""
    return dict.fromkeys(range(1, 10), 0)


@pytest.fixture
def epds_possible() -> dict[int, int]:
    """EPDS answers totalling 10 with no self-harm endorsement."""
    return {1: 1, 2: 1, 3: 1, 4: 1, 5: 1, 6: 1, 7: 1, 8: 1, 9: 2, 10: 0}


@pytest.fixture
def phq9_moderate() -> dict[int, int]:
    """PHQ-9 answers totalling 12 with no self-harm endorsement."""
    return {1: 2, 2: 2, 3: 2, 4: 2, 5: 1, 6: 1, 7: 1, 8: 1, 9: 0}

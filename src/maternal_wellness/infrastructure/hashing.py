"""Stable hashing helpers for privacy-safe logging.

Screening results are health data. Logs carry a short SHA-256 prefix of
the user id so events can be correlated without exposing the identity.
"""

from __future__ import annotations

import hashlib
from typing import Final

HASH_PREFIX_LENGTH: Final[int] = 12


def stable_text_hash(text: str) -> str:
    """Return a stable short hash for a text payload (no raw text)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:HASH_PREFIX_LENGTH]


def user_ref(user_id: str | int) -> str:
    """Return the log-safe reference for a user id."""
    return f"u_{stable_text_hash(str(user_id))}"

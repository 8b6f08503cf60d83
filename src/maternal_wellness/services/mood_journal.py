"""Mood journal collaborator.

One entry per user per calendar day: recording a mood again on the same
day replaces the earlier entry. Notes are free text and are never logged.
"""

from __future__ import annotations

from collections import Counter
from datetime import UTC
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from maternal_wellness.domain.entities import MoodEntry, utc_now
from maternal_wellness.domain.enums import MoodTrend, MoodType
from maternal_wellness.infrastructure.hashing import user_ref
from maternal_wellness.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from datetime import date, datetime

logger = get_logger(__name__)

TREND_WINDOW = 3


@runtime_checkable
class MoodJournal(Protocol):
    """Append/query log of mood entries."""

    def record(
        self,
        user_id: str,
        mood: MoodType,
        notes: str | None = None,
        at: datetime | None = None,
    ) -> MoodEntry:
        """Record a mood for the day of ``at``."""
        ...

    def entries_for(self, user_id: str) -> list[MoodEntry]:
        """Return a user's entries, oldest first."""
        ...


def classify_trend(entries: list[MoodEntry]) -> MoodTrend:
    """Classify the direction of the last three entries.

    Args:
        entries: Mood entries in any order.

    Returns:
        IMPROVING or DECLINING for a strictly monotone run, FLUCTUATING
        otherwise, INSUFFICIENT_DATA with fewer than three entries.
    """
    if len(entries) < TREND_WINDOW:
        return MoodTrend.INSUFFICIENT_DATA
    ordered = sorted(entries, key=lambda e: e.timestamp)
    first, middle, last = (e.mood.trend_value for e in ordered[-TREND_WINDOW:])
    if first < middle < last:
        return MoodTrend.IMPROVING
    if first > middle > last:
        return MoodTrend.DECLINING
    return MoodTrend.FLUCTUATING


class InMemoryMoodJournal:
    """Process-local MoodJournal with daily aggregation helpers."""

    def __init__(self) -> None:
        self._by_user: dict[str, list[MoodEntry]] = {}

    def record(
        self,
        user_id: str,
        mood: MoodType,
        notes: str | None = None,
        at: datetime | None = None,
    ) -> MoodEntry:
        """Record a mood, replacing any entry on the same calendar day.

        A naive ``at`` is taken to be UTC.
        """
        timestamp = at or utc_now()
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        entry = MoodEntry(
            user_id=user_id,
            mood=mood,
            timestamp=timestamp,
            notes=(notes.strip() or None) if notes else None,
        )
        entries = self._by_user.get(user_id, [])
        day = timestamp.date()
        kept = [e for e in entries if e.timestamp.date() != day]
        replaced = len(kept) != len(entries)
        self._by_user[user_id] = sorted([*kept, entry], key=lambda e: e.timestamp)
        logger.debug(
            "mood_recorded",
            user=user_ref(user_id),
            mood=mood.value,
            replaced=replaced,
        )
        return entry

    def entries_for(self, user_id: str) -> list[MoodEntry]:
        """Return a copy of the user's entries, oldest first."""
        return list(self._by_user.get(user_id, ()))

    def entries_since(self, user_id: str, since: datetime) -> list[MoodEntry]:
        """Return entries at or after ``since``, oldest first."""
        return [e for e in self.entries_for(user_id) if e.timestamp >= since]

    def todays_mood(self, user_id: str, today: date | None = None) -> MoodEntry | None:
        """Return the entry for ``today`` (UTC date by default)."""
        day = today or utc_now().date()
        for entry in self.entries_for(user_id):
            if entry.timestamp.date() == day:
                return entry
        return None

    def mood_counts(self, user_id: str) -> dict[MoodType, int]:
        """Count entries per mood, including zero counts."""
        counts = Counter(e.mood for e in self.entries_for(user_id))
        return {mood: counts.get(mood, 0) for mood in MoodType}

    def mood_trend(self, user_id: str) -> MoodTrend:
        """Classify the user's recent mood direction."""
        return classify_trend(self.entries_for(user_id))

"""Tests for the mood journal."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from maternal_wellness.domain.entities import MoodEntry
from maternal_wellness.domain.enums import MoodTrend, MoodType
from maternal_wellness.services.mood_journal import (
    InMemoryMoodJournal,
    MoodJournal,
    classify_trend,
)

pytestmark = pytest.mark.unit

_DAY = datetime(2025, 2, 1, 8, 0, tzinfo=UTC)


def _on(day: int, hour: int = 8) -> datetime:
    return _DAY + timedelta(days=day, hours=hour - 8)


class TestClassifyTrend:
    """Tests for classify_trend."""

    def _entries(self, *moods: MoodType) -> list[MoodEntry]:
        return [MoodEntry("u", mood, timestamp=_on(i)) for i, mood in enumerate(moods)]

    def test_insufficient_data(self) -> None:
        assert classify_trend(self._entries(MoodType.SAD, MoodType.GOOD)) is (
            MoodTrend.INSUFFICIENT_DATA
        )

    def test_improving(self) -> None:
        entries = self._entries(MoodType.EXHAUSTED, MoodType.SAD, MoodType.OKAY, MoodType.GREAT)
        assert classify_trend(entries) is MoodTrend.IMPROVING

    def test_declining(self) -> None:
        entries = self._entries(MoodType.GREAT, MoodType.OKAY, MoodType.ANXIOUS)
        assert classify_trend(entries) is MoodTrend.DECLINING

    def test_flat_counts_as_fluctuating(self) -> None:
        entries = self._entries(MoodType.OKAY, MoodType.OKAY, MoodType.GOOD)
        assert classify_trend(entries) is MoodTrend.FLUCTUATING

    def test_uses_timestamps_not_list_order(self) -> None:
        entries = self._entries(MoodType.SAD, MoodType.OKAY, MoodType.GOOD)
        assert classify_trend(list(reversed(entries))) is MoodTrend.IMPROVING


class TestInMemoryMoodJournal:
    """Tests for InMemoryMoodJournal."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryMoodJournal(), MoodJournal)

    def test_record_and_list(self) -> None:
        journal = InMemoryMoodJournal()
        later = journal.record("u", MoodType.GOOD, at=_on(2))
        earlier = journal.record("u", MoodType.SAD, at=_on(1))
        assert journal.entries_for("u") == [earlier, later]
        assert journal.entries_for("someone-else") == []

    def test_same_day_replaces(self) -> None:
        journal = InMemoryMoodJournal()
        journal.record("u", MoodType.SAD, at=_on(0, hour=8))
        replacement = journal.record("u", MoodType.GOOD, "better after a nap", at=_on(0, hour=20))

        assert journal.entries_for("u") == [replacement]
        assert replacement.notes == "better after a nap"

    def test_blank_notes_dropped(self) -> None:
        entry = InMemoryMoodJournal().record("u", MoodType.OKAY, "   ", at=_on(0))
        assert entry.notes is None

    def test_entries_since(self) -> None:
        journal = InMemoryMoodJournal()
        for day in range(4):
            journal.record("u", MoodType.OKAY, at=_on(day))
        assert len(journal.entries_since("u", _on(2))) == 2

    def test_todays_mood(self) -> None:
        journal = InMemoryMoodJournal()
        entry = journal.record("u", MoodType.GREAT, at=_on(3))
        assert journal.todays_mood("u", today=_on(3).date()) == entry
        assert journal.todays_mood("u", today=_on(4).date()) is None

    def test_mood_counts_include_zeroes(self) -> None:
        journal = InMemoryMoodJournal()
        journal.record("u", MoodType.SAD, at=_on(0))
        journal.record("u", MoodType.SAD, at=_on(1))
        counts = journal.mood_counts("u")
        assert counts[MoodType.SAD] == 2
        assert counts[MoodType.GREAT] == 0
        assert set(counts) == set(MoodType)

    def test_mood_trend(self) -> None:
        journal = InMemoryMoodJournal()
        for day, mood in enumerate((MoodType.GOOD, MoodType.OKAY, MoodType.SAD)):
            journal.record("u", mood, at=_on(day))
        assert journal.mood_trend("u") is MoodTrend.DECLINING

    def test_naive_timestamp_taken_as_utc(self) -> None:
        """Mixing naive and aware timestamps keeps every entry queryable."""
        journal = InMemoryMoodJournal()
        aware = journal.record("u", MoodType.SAD, at=_on(0))
        naive = journal.record("u", MoodType.GOOD, at=_on(1).replace(tzinfo=None))

        assert naive.timestamp == _on(1)
        assert naive.timestamp.tzinfo is UTC
        assert journal.entries_for("u") == [aware, naive]
        assert journal.entries_since("u", _on(1)) == [naive]

    def test_naive_timestamp_on_same_day_replaces(self) -> None:
        journal = InMemoryMoodJournal()
        journal.record("u", MoodType.SAD, at=_on(0, hour=8))
        replacement = journal.record(
            "u", MoodType.OKAY, at=_on(0, hour=21).replace(tzinfo=None)
        )
        assert journal.entries_for("u") == [replacement]

"""Tests for domain enumerations."""

from __future__ import annotations

import pytest

from maternal_wellness.domain.enums import ColorTag, Instrument, MoodTrend, MoodType, SessionState

pytestmark = pytest.mark.unit


class TestInstrument:
    """Tests for Instrument enum."""

    def test_values_match_display_names(self) -> None:
        """Values should be the names shown to users."""
        assert Instrument.EPDS.value == "EPDS"
        assert Instrument.PHQ9.value == "PHQ-9"

    @pytest.mark.parametrize(
        ("instrument", "count", "max_score", "self_harm_id"),
        [
            (Instrument.EPDS, 10, 30, 10),
            (Instrument.PHQ9, 9, 27, 9),
        ],
    )
    def test_instrument_shape(
        self, instrument: Instrument, count: int, max_score: int, self_harm_id: int
    ) -> None:
        """Question count, maximum score and self-harm item are fixed per instrument."""
        assert instrument.question_count == count
        assert instrument.max_score == max_score
        assert instrument.self_harm_question_id == self_harm_id

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("EPDS", Instrument.EPDS),
            ("epds", Instrument.EPDS),
            ("PHQ-9", Instrument.PHQ9),
            ("phq9", Instrument.PHQ9),
            (" Phq_9 ", Instrument.PHQ9),
        ],
    )
    def test_parse_is_lenient(self, raw: str, expected: Instrument) -> None:
        """Parsing should ignore case, dashes and underscores."""
        assert Instrument.parse(raw) is expected

    def test_parse_unknown_raises(self) -> None:
        """Unknown names should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown instrument"):
            Instrument.parse("GAD-7")


class TestColorTag:
    """Tests for ColorTag enum."""

    def test_all_tags(self) -> None:
        """Should expose the five display tags."""
        assert [c.value for c in ColorTag] == ["green", "lightgreen", "yellow", "orange", "red"]


class TestSessionState:
    """Tests for SessionState enum."""

    def test_states(self) -> None:
        assert {s.value for s in SessionState} == {"not_started", "in_progress", "completed"}


class TestMoodType:
    """Tests for MoodType enum."""

    def test_trend_values_descend_from_great(self) -> None:
        """Great scores highest and Exhausted lowest."""
        values = [mood.trend_value for mood in MoodType]
        assert values == [5, 4, 3, 2, 1, 0]

    def test_every_mood_has_emoji(self) -> None:
        for mood in MoodType:
            assert mood.emoji


class TestMoodTrend:
    """Tests for MoodTrend enum."""

    def test_messages(self) -> None:
        """Each trend should carry a user-facing message."""
        assert MoodTrend.IMPROVING.message == "Your mood appears to be improving"
        assert MoodTrend.DECLINING.message == "Your mood appears to be declining"
        assert MoodTrend.FLUCTUATING.message == "Your mood has been fluctuating"
        assert "few more days" in MoodTrend.INSUFFICIENT_DATA.message

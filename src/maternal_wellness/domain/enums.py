"""Domain enumerations for Maternal Wellness.

This module defines the closed tags used throughout the domain layer:
- Instrument: The screening questionnaires (EPDS, PHQ-9)
- ColorTag: Display-priority tag attached to an interpretation
- SessionState: Lifecycle of an answer session
- MoodType: Mood journal categories
- MoodTrend: Direction of recent mood entries
"""

from __future__ import annotations

from enum import StrEnum


class Instrument(StrEnum):
    """Screening instruments supported by the question bank.

    Values match the instrument names shown to users and stored with
    persisted results.
    """

    EPDS = "EPDS"
    """Edinburgh Postnatal Depression Scale (10 items, 0-30)."""

    PHQ9 = "PHQ-9"
    """Patient Health Questionnaire-9 (9 items, 0-27)."""

    @property
    def question_count(self) -> int:
        """Number of items in the instrument."""
        return 10 if self is Instrument.EPDS else 9

    @property
    def max_score(self) -> int:
        """Highest attainable total score (every item answered 3)."""
        return self.question_count * 3

    @property
    def self_harm_question_id(self) -> int:
        """Id of the item that screens for thoughts of self-harm.

        EPDS item 10 ("The thought of harming myself has occurred to me")
        and PHQ-9 item 9 ("Thoughts that you would be better off dead...").
        """
        return 10 if self is Instrument.EPDS else 9

    @classmethod
    def parse(cls, raw: str) -> Instrument:
        """Parse an instrument name leniently (case and dash insensitive).

        Args:
            raw: Instrument name such as "EPDS", "phq9" or "PHQ-9".

        Returns:
            The matching Instrument.

        Raises:
            ValueError: If the name matches no instrument.
        """
        normalized = raw.strip().upper().replace("-", "").replace("_", "")
        for instrument in cls:
            if instrument.value.replace("-", "") == normalized:
                return instrument
        raise ValueError(f"Unknown instrument: {raw!r}")


class ColorTag(StrEnum):
    """Display-priority tag for a severity band.

    Mapped to concrete colors only at the presentation boundary.
    """

    GREEN = "green"
    LIGHTGREEN = "lightgreen"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


class SessionState(StrEnum):
    """Answer session lifecycle."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MoodType(StrEnum):
    """Mood journal categories, ordered from best to worst."""

    GREAT = "Great"
    GOOD = "Good"
    OKAY = "Okay"
    SAD = "Sad"
    ANXIOUS = "Anxious"
    EXHAUSTED = "Exhausted"

    @property
    def emoji(self) -> str:
        """Emoji shown next to the mood."""
        return _MOOD_EMOJI[self]

    @property
    def trend_value(self) -> int:
        """Numeric value used for trend analysis (Great=5 ... Exhausted=0)."""
        return _MOOD_VALUES[self]


_MOOD_EMOJI: dict[MoodType, str] = {
    MoodType.GREAT: "\U0001f604",
    MoodType.GOOD: "\U0001f642",
    MoodType.OKAY: "\U0001f610",
    MoodType.SAD: "\U0001f61e",
    MoodType.ANXIOUS: "\U0001f630",
    MoodType.EXHAUSTED: "\U0001f62b",
}

_MOOD_VALUES: dict[MoodType, int] = {
    MoodType.GREAT: 5,
    MoodType.GOOD: 4,
    MoodType.OKAY: 3,
    MoodType.SAD: 2,
    MoodType.ANXIOUS: 1,
    MoodType.EXHAUSTED: 0,
}


class MoodTrend(StrEnum):
    """Direction of the three most recent mood entries."""

    INSUFFICIENT_DATA = "insufficient_data"
    IMPROVING = "improving"
    DECLINING = "declining"
    FLUCTUATING = "fluctuating"

    @property
    def message(self) -> str:
        """User-facing summary of the trend."""
        return _TREND_MESSAGES[self]


_TREND_MESSAGES: dict[MoodTrend, str] = {
    MoodTrend.INSUFFICIENT_DATA: "Track your mood for a few more days to see trends",
    MoodTrend.IMPROVING: "Your mood appears to be improving",
    MoodTrend.DECLINING: "Your mood appears to be declining",
    MoodTrend.FLUCTUATING: "Your mood has been fluctuating",
}

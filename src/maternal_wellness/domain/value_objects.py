"""Immutable value objects for the Maternal Wellness domain.

Value objects are immutable (frozen) dataclasses that represent domain
concepts without identity. They are equal if all their attributes are equal.

All value objects use:
- frozen=True: Makes instances immutable
- slots=True: Optimizes memory usage
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from maternal_wellness.domain.enums import ColorTag


@dataclass(frozen=True, slots=True)
class Option:
    """One selectable answer to a question.

    The value is the option's final contribution to the total score;
    reverse-scored layouts are encoded directly in the question bank.
    """

    value: int
    """Points contributed when selected (0-3)."""

    label: str
    """Text shown to the respondent."""

    def __post_init__(self) -> None:
        """Validate option data.

        Raises:
            ValueError: If value is negative or label is blank.
        """
        if self.value < 0:
            raise ValueError(f"Option value must be non-negative, got {self.value}")
        if not self.label.strip():
            raise ValueError("Option label cannot be empty")


@dataclass(frozen=True, slots=True)
class Question:
    """A single questionnaire item with its ordered options."""

    id: int
    """1-based id, stable within the instrument."""

    text: str
    """Clinical item text, reproduced verbatim."""

    options: tuple[Option, ...]
    """Options in display order."""

    def __post_init__(self) -> None:
        """Validate question data.

        Raises:
            ValueError: If the id is not positive, options are missing,
                or two options share a value.
        """
        if self.id < 1:
            raise ValueError(f"Question id must be positive, got {self.id}")
        if not self.options:
            raise ValueError(f"Question {self.id} has no options")
        values = [option.value for option in self.options]
        if len(set(values)) != len(values):
            raise ValueError(f"Question {self.id} has duplicate option values")

    @property
    def option_values(self) -> frozenset[int]:
        """Set of values a valid answer may take."""
        return frozenset(option.value for option in self.options)

    @property
    def max_value(self) -> int:
        """Highest option value."""
        return max(option.value for option in self.options)

    def accepts(self, value: int) -> bool:
        """Check whether a value is one of this question's options.

        Only plain ints qualify; floats and bools are rejected even when
        they compare equal to an option value.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value in self.option_values

    def label_for(self, value: int) -> str | None:
        """Return the label of the option with the given value, if any."""
        for option in self.options:
            if option.value == value:
                return option.label
        return None


@dataclass(frozen=True, slots=True)
class Interpretation:
    """Clinical reading of a total score."""

    severity_label: str
    """Band name, e.g. "Possible Depression" or "Moderate"."""

    description: str
    """Human-readable explanation of the band."""

    color_tag: ColorTag
    """Display-priority tag."""


@dataclass(frozen=True, slots=True)
class SeverityBand:
    """An inclusive score range mapped to an interpretation."""

    low: int
    high: int
    interpretation: Interpretation

    def __post_init__(self) -> None:
        """Validate band bounds.

        Raises:
            ValueError: If the band is empty or starts below zero.
        """
        if self.low < 0 or self.high < self.low:
            raise ValueError(f"Invalid band bounds: {self.low}-{self.high}")

    def contains(self, score: int) -> bool:
        """Check whether the score falls inside the band."""
        return self.low <= score <= self.high


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """One assessment as plotted on a severity-over-time chart."""

    timestamp: datetime
    score: int
    severity_label: str
    color_tag: ColorTag

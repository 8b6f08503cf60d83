"""Tests for domain value objects."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from maternal_wellness.domain.enums import ColorTag
from maternal_wellness.domain.value_objects import Interpretation, Option, Question, SeverityBand

pytestmark = pytest.mark.unit


def _options(*values: int) -> tuple[Option, ...]:
    return tuple(Option(value=v, label=f"option {v}") for v in values)


class TestOption:
    """Tests for Option value object."""

    def test_negative_value_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Option(value=-1, label="Never")

    def test_blank_label_rejected(self) -> None:
        with pytest.raises(ValueError, match="label"):
            Option(value=0, label="  ")

    def test_immutable(self) -> None:
        option = Option(value=1, label="Sometimes")
        with pytest.raises(FrozenInstanceError):
            option.value = 2  # type: ignore[misc]


class TestQuestion:
    """Tests for Question value object."""

    def test_option_values_and_max(self) -> None:
        """Descending display order should not affect the value set."""
        question = Question(id=1, text="q", options=_options(3, 2, 1, 0))
        assert question.option_values == frozenset({0, 1, 2, 3})
        assert question.max_value == 3

    def test_accepts(self) -> None:
        question = Question(id=1, text="q", options=_options(0, 1, 2, 3))
        assert question.accepts(0)
        assert question.accepts(3)
        assert not question.accepts(4)
        assert not question.accepts(-1)

    @pytest.mark.parametrize("value", [1.0, 0.0, True, False, "1", None])
    def test_accepts_only_plain_ints(self, value: object) -> None:
        """Values equal to an option but not of type int are rejected."""
        question = Question(id=1, text="q", options=_options(0, 1, 2, 3))
        assert not question.accepts(value)  # type: ignore[arg-type]

    def test_label_for(self) -> None:
        question = Question(id=1, text="q", options=_options(0, 1))
        assert question.label_for(1) == "option 1"
        assert question.label_for(5) is None

    def test_invalid_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            Question(id=0, text="q", options=_options(0))

    def test_no_options_rejected(self) -> None:
        with pytest.raises(ValueError, match="no options"):
            Question(id=1, text="q", options=())

    def test_duplicate_values_rejected(self) -> None:
        with pytest.raises(ValueError, match="duplicate"):
            Question(id=1, text="q", options=_options(0, 1, 1))


class TestSeverityBand:
    """Tests for SeverityBand value object."""

    def test_contains_is_inclusive(self) -> None:
        band = SeverityBand(9, 12, Interpretation("Possible", "desc", ColorTag.YELLOW))
        assert band.contains(9)
        assert band.contains(12)
        assert not band.contains(8)
        assert not band.contains(13)

    def test_inverted_bounds_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid band"):
            SeverityBand(5, 4, Interpretation("x", "y", ColorTag.GREEN))

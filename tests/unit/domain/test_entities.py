"""Tests for domain entities."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime

import pytest

from maternal_wellness.domain.entities import (
    AssessmentResult,
    CarePlan,
    CarePlanItem,
    MoodEntry,
    new_id,
    utc_now,
)
from maternal_wellness.domain.enums import ColorTag, Instrument, MoodType
from maternal_wellness.domain.value_objects import Interpretation

pytestmark = pytest.mark.unit

_LOW = Interpretation("Minimal", "Your score suggests minimal depression symptoms", ColorTag.GREEN)


def _result(answers: dict[int, int]) -> AssessmentResult:
    return AssessmentResult(
        id="r1",
        user_id="user-1",
        instrument=Instrument.PHQ9,
        timestamp=datetime(2025, 1, 1, tzinfo=UTC),
        score=sum(answers.values()),
        interpretation=_LOW,
        answers=answers,
    )


class TestHelpers:
    """Tests for id and clock helpers."""

    def test_new_id_unique(self) -> None:
        assert new_id() != new_id()

    def test_utc_now_is_aware(self) -> None:
        assert utc_now().tzinfo is UTC


class TestAssessmentResult:
    """Tests for AssessmentResult entity."""

    def test_answers_are_copied_and_read_only(self, phq9_all_zero: dict[int, int]) -> None:
        """Mutating the source map must not change the stored answers."""
        result = _result(phq9_all_zero)
        phq9_all_zero[1] = 3

        assert result.answers[1] == 0
        with pytest.raises(TypeError):
            result.answers[1] = 3  # type: ignore[index]

    def test_frozen(self, phq9_all_zero: dict[int, int]) -> None:
        result = _result(phq9_all_zero)
        with pytest.raises(FrozenInstanceError):
            result.score = 5  # type: ignore[misc]

    def test_max_score_and_fraction(self, phq9_all_zero: dict[int, int]) -> None:
        result = _result(phq9_all_zero)
        assert result.max_score == 27
        assert result.score_fraction == 0.0

    def test_self_harm_risk_defaults_false(self, phq9_all_zero: dict[int, int]) -> None:
        assert _result(phq9_all_zero).self_harm_risk is False

    def test_hashable(self, phq9_all_zero: dict[int, int]) -> None:
        """Results can be collected in sets; answers do not take part in the hash."""
        first = _result(phq9_all_zero)
        same = _result(phq9_all_zero)

        assert hash(first) == hash(same)
        assert len({first, same}) == 1


class TestMoodEntry:
    """Tests for MoodEntry entity."""

    def test_defaults(self) -> None:
        entry = MoodEntry(user_id="u", mood=MoodType.OKAY)
        assert entry.id
        assert entry.notes is None
        assert entry.timestamp.tzinfo is UTC


class TestCarePlan:
    """Tests for CarePlan entity."""

    def test_professional_support_flag(self) -> None:
        therapy = CarePlanItem("Professional therapy", "Weekly sessions", "support")
        plan = CarePlan(
            user_id="u",
            source_assessment_id="r1",
            mind_and_emotions=(),
            body_and_rest=(),
            support_and_connection=(therapy,),
            goals=(),
        )
        assert plan.includes_professional_support

    def test_no_professional_support(self) -> None:
        plan = CarePlan(
            user_id="u",
            source_assessment_id="r1",
            mind_and_emotions=(),
            body_and_rest=(),
            support_and_connection=(),
            goals=(),
        )
        assert not plan.includes_professional_support

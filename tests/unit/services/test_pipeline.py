"""Tests for assessment result construction."""

from __future__ import annotations

from datetime import datetime

import pytest

from maternal_wellness.domain.enums import Instrument
from maternal_wellness.domain.exceptions import InvalidAnswerError, MissingAnswerError
from maternal_wellness.services.pipeline import AssessmentPipeline, build_result

pytestmark = pytest.mark.unit


class TestAssessmentPipeline:
    """Tests for AssessmentPipeline."""

    def test_build_result_uses_injected_id_and_clock(
        self, phq9_moderate: dict[int, int], fixed_time: datetime
    ) -> None:
        pipeline = AssessmentPipeline(id_factory=lambda: "fixed-id", clock=lambda: fixed_time)

        result = pipeline.build_result("user-1", Instrument.PHQ9, phq9_moderate)

        assert result.id == "fixed-id"
        assert result.timestamp == fixed_time
        assert result.user_id == "user-1"
        assert result.instrument is Instrument.PHQ9
        assert result.score == 12
        assert result.interpretation.severity_label == "Moderate"
        assert result.self_harm_risk is False
        assert dict(result.answers) == phq9_moderate

    def test_self_harm_flag_set(self, epds_all_zero: dict[int, int]) -> None:
        epds_all_zero[10] = 1
        assert build_result("u", Instrument.EPDS, epds_all_zero).self_harm_risk is True

    def test_invalid_value_rejected(self, epds_all_zero: dict[int, int]) -> None:
        epds_all_zero[3] = 4
        with pytest.raises(InvalidAnswerError):
            build_result("u", Instrument.EPDS, epds_all_zero)

    def test_extra_question_rejected(self, phq9_all_zero: dict[int, int]) -> None:
        """Answers to questions outside the instrument are invalid."""
        phq9_all_zero[10] = 0
        with pytest.raises(InvalidAnswerError):
            build_result("u", Instrument.PHQ9, phq9_all_zero)

    def test_incomplete_rejected(self) -> None:
        with pytest.raises(MissingAnswerError):
            build_result("u", Instrument.PHQ9, {1: 0})

    def test_each_result_gets_a_fresh_id(self, phq9_all_zero: dict[int, int]) -> None:
        first = build_result("u", Instrument.PHQ9, phq9_all_zero)
        second = build_result("u", Instrument.PHQ9, phq9_all_zero)
        assert first.id != second.id

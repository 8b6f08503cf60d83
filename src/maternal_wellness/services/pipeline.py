"""Assessment result construction.

Runs validation, scoring, interpretation, and risk escalation over a
finished answer map and assembles the immutable ``AssessmentResult``.
Nothing here writes to storage; the caller persists the returned value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from maternal_wellness.domain.entities import AssessmentResult, new_id, utc_now
from maternal_wellness.infrastructure.hashing import user_ref
from maternal_wellness.infrastructure.logging import get_logger
from maternal_wellness.services.scoring import (
    check_self_harm_risk,
    interpret,
    total_score,
    validate_answers,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from datetime import datetime

    from maternal_wellness.domain.enums import Instrument

logger = get_logger(__name__)


class AssessmentPipeline:
    """Builds assessment results from complete answer maps.

    The id factory and clock are injectable so tests can pin them.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the pipeline.

        Args:
            id_factory: Produces a fresh unique result id per call.
            clock: Returns the completion timestamp.
        """
        self._id_factory = id_factory
        self._clock = clock

    def build_result(
        self,
        user_id: str,
        instrument: Instrument,
        answers: Mapping[int, int],
    ) -> AssessmentResult:
        """Score and interpret a complete set of answers.

        Args:
            user_id: Opaque user reference supplied by the caller.
            instrument: Instrument the answers belong to.
            answers: Question id to selected option value.

        Returns:
            New AssessmentResult holding a copy of the answers.

        Raises:
            InvalidAnswerError: If an answer does not fit the question bank.
            MissingAnswerError: If any question is unanswered.
        """
        validate_answers(instrument, answers)
        score = total_score(instrument, answers)
        interpretation = interpret(instrument, score)
        risk = check_self_harm_risk(instrument, answers)

        result = AssessmentResult(
            id=self._id_factory(),
            user_id=user_id,
            instrument=instrument,
            timestamp=self._clock(),
            score=score,
            interpretation=interpretation,
            answers=answers,
            self_harm_risk=risk,
        )

        logger.info(
            "assessment_scored",
            assessment_id=result.id,
            user=user_ref(user_id),
            instrument=instrument.value,
            score=score,
            severity=interpretation.severity_label,
        )
        if risk:
            logger.warning(
                "self_harm_risk_flagged",
                assessment_id=result.id,
                user=user_ref(user_id),
                instrument=instrument.value,
            )
        return result


def build_result(
    user_id: str,
    instrument: Instrument,
    answers: Mapping[int, int],
) -> AssessmentResult:
    """Build a result with a fresh id and the current UTC time."""
    return AssessmentPipeline().build_result(user_id, instrument, answers)

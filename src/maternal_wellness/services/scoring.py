"""Scoring, interpretation, and self-harm escalation.

Pure functions over an instrument and its answer map:

- ``total_score``: unweighted sum of option values.
- ``interpret``: fixed clinical cut-points to severity band.
- ``check_self_harm_risk``: any non-zero answer to the self-harm item.

EPDS cut-points: 0-8 low likelihood, 9-12 possible, 13-30 probable depression.
PHQ-9 cut-points: 0-4 minimal, 5-9 mild, 10-14 moderate, 15-19 moderately
severe, 20-27 severe.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from maternal_wellness.domain.enums import ColorTag, Instrument
from maternal_wellness.domain.exceptions import InvalidAnswerError, MissingAnswerError
from maternal_wellness.domain.question_bank import get_questions, question_ids
from maternal_wellness.domain.value_objects import Interpretation, SeverityBand
from maternal_wellness.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)


def _band(low: int, high: int, label: str, description: str, color: ColorTag) -> SeverityBand:
    return SeverityBand(low, high, Interpretation(label, description, color))


SEVERITY_BANDS: Final[Mapping[Instrument, tuple[SeverityBand, ...]]] = MappingProxyType(
    {
        Instrument.EPDS: (
            _band(
                0,
                8,
                "Low Likelihood",
                "Your score suggests a low likelihood of depression",
                ColorTag.GREEN,
            ),
            _band(
                9,
                12,
                "Possible Depression",
                "Your score suggests possible depression",
                ColorTag.YELLOW,
            ),
            _band(
                13,
                30,
                "Probable Depression",
                "Your score suggests probable depression",
                ColorTag.RED,
            ),
        ),
        Instrument.PHQ9: (
            _band(
                0,
                4,
                "Minimal",
                "Your score suggests minimal depression symptoms",
                ColorTag.GREEN,
            ),
            _band(
                5,
                9,
                "Mild",
                "Your score suggests mild depression symptoms",
                ColorTag.LIGHTGREEN,
            ),
            _band(
                10,
                14,
                "Moderate",
                "Your score suggests moderate depression symptoms",
                ColorTag.YELLOW,
            ),
            _band(
                15,
                19,
                "Moderately Severe",
                "Your score suggests moderately severe depression symptoms",
                ColorTag.ORANGE,
            ),
            _band(
                20,
                27,
                "Severe",
                "Your score suggests severe depression symptoms",
                ColorTag.RED,
            ),
        ),
    }
)


def bands_for(instrument: Instrument) -> tuple[SeverityBand, ...]:
    """Return the ordered severity bands of an instrument."""
    return SEVERITY_BANDS[instrument]


def validate_answers(instrument: Instrument, answers: Mapping[int, int]) -> None:
    """Check every answer against the question bank.

    Completeness is not checked here; see ``total_score``.

    Args:
        instrument: Instrument the answers belong to.
        answers: Question id to option value.

    Raises:
        InvalidAnswerError: If an id is not an instrument question or a
            value is not one of that question's options.
    """
    questions = {question.id: question for question in get_questions(instrument)}
    for question_id, value in answers.items():
        question = questions.get(question_id)
        if question is None:
            raise InvalidAnswerError(
                question_id, value, f"not a {instrument.value} question"
            )
        if not question.accepts(value):
            allowed = ", ".join(str(v) for v in sorted(question.option_values))
            raise InvalidAnswerError(question_id, value, f"expected one of {allowed}")


def missing_answers(instrument: Instrument, answers: Mapping[int, int]) -> frozenset[int]:
    """Return the question ids of the instrument that have no answer."""
    return question_ids(instrument) - answers.keys()


def total_score(instrument: Instrument, answers: Mapping[int, int]) -> int:
    """Sum the option values of a complete answer map.

    No weighting or normalization is applied.

    Args:
        instrument: Instrument being scored.
        answers: Question id to option value.

    Returns:
        Total score in ``[0, instrument.max_score]`` for valid answers.

    Raises:
        MissingAnswerError: If any instrument question is unanswered.
    """
    missing = missing_answers(instrument, answers)
    if missing:
        raise MissingAnswerError(instrument, missing)
    ids = question_ids(instrument)
    return sum(value for question_id, value in answers.items() if question_id in ids)


def interpret(instrument: Instrument, score: int) -> Interpretation:
    """Map a total score to its severity band.

    Scores outside ``[0, max_score]`` cannot come from ``total_score``; if
    one arrives anyway it is clamped to the nearest band.

    Args:
        instrument: Instrument the score belongs to.
        score: Total score.

    Returns:
        Interpretation of the matching band.
    """
    clamped = max(0, min(instrument.max_score, score))
    if clamped != score:
        logger.warning(
            "Score outside instrument range, clamped",
            instrument=instrument.value,
            score=score,
            clamped=clamped,
        )

    match: Interpretation | None = None
    for band in SEVERITY_BANDS[instrument]:
        if band.contains(clamped):
            match = band.interpretation
    if match is None:  # pragma: no cover - bands cover [0, max_score]
        raise AssertionError(f"No {instrument.value} band covers score {clamped}")
    return match


def check_self_harm_risk(instrument: Instrument, answers: Mapping[int, int]) -> bool:
    """Check whether the self-harm item was endorsed.

    Evaluated independently of the total score: a low total with a
    non-zero self-harm answer still escalates. The option value, not its
    label, is the trigger.

    Args:
        instrument: Instrument the answers belong to.
        answers: Question id to option value.

    Returns:
        True if the self-harm item's value is above zero.

    Raises:
        MissingAnswerError: If the self-harm item has no answer.
    """
    question_id = instrument.self_harm_question_id
    if question_id not in answers:
        raise MissingAnswerError(instrument, [question_id])
    return answers[question_id] > 0

"""Static question bank for the EPDS and PHQ-9 instruments.

Item text and option labels are reproduced verbatim; do not edit them
without clinical review. Each option carries its final score contribution,
so EPDS items listed from "most" to "least" symptomatic need no runtime
reversal.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from maternal_wellness.domain.enums import Instrument
from maternal_wellness.domain.exceptions import UnknownQuestionError
from maternal_wellness.domain.value_objects import Option, Question

if TYPE_CHECKING:
    from collections.abc import Mapping


def _ascending(*labels: str) -> tuple[Option, ...]:
    return tuple(Option(value=i, label=label) for i, label in enumerate(labels))


def _descending(*labels: str) -> tuple[Option, ...]:
    top = len(labels) - 1
    return tuple(Option(value=top - i, label=label) for i, label in enumerate(labels))


EPDS_QUESTIONS: Final[tuple[Question, ...]] = (
    Question(
        id=1,
        text="I have been able to laugh and see the funny side of things",
        options=_ascending(
            "As much as I always could",
            "Not quite so much now",
            "Definitely not so much now",
            "Not at all",
        ),
    ),
    Question(
        id=2,
        text="I have looked forward with enjoyment to things",
        options=_ascending(
            "As much as I ever did",
            "Rather less than I used to",
            "Definitely less than I used to",
            "Hardly at all",
        ),
    ),
    Question(
        id=3,
        text="I have blamed myself unnecessarily when things went wrong",
        options=_descending(
            "Yes, most of the time",
            "Yes, some of the time",
            "Not very often",
            "No, never",
        ),
    ),
    Question(
        id=4,
        text="I have been anxious or worried for no good reason",
        options=_ascending(
            "No, not at all",
            "Hardly ever",
            "Yes, sometimes",
            "Yes, very often",
        ),
    ),
    Question(
        id=5,
        text="I have felt scared or panicky for no very good reason",
        options=_descending(
            "Yes, quite a lot",
            "Yes, sometimes",
            "No, not much",
            "No, not at all",
        ),
    ),
    Question(
        id=6,
        text="Things have been getting on top of me",
        options=_descending(
            "Yes, most of the time I haven't been able to cope at all",
            "Yes, sometimes I haven't been coping as well as usual",
            "No, most of the time I have coped quite well",
            "No, I have been coping as well as ever",
        ),
    ),
    Question(
        id=7,
        text="I have been so unhappy that I have had difficulty sleeping",
        options=_descending(
            "Yes, most of the time",
            "Yes, sometimes",
            "Not very often",
            "No, not at all",
        ),
    ),
    Question(
        id=8,
        text="I have felt sad or miserable",
        options=_descending(
            "Yes, most of the time",
            "Yes, quite often",
            "Not very often",
            "No, not at all",
        ),
    ),
    Question(
        id=9,
        text="I have been so unhappy that I have been crying",
        options=_descending(
            "Yes, most of the time",
            "Yes, quite often",
            "Only occasionally",
            "No, never",
        ),
    ),
    Question(
        id=10,
        text="The thought of harming myself has occurred to me",
        options=_descending(
            "Yes, quite often",
            "Sometimes",
            "Hardly ever",
            "Never",
        ),
    ),
)

_FREQUENCY_LABELS: Final[tuple[str, ...]] = (
    "Not at all",
    "Several days",
    "More than half the days",
    "Nearly every day",
)

_PHQ9_ITEMS: Final[tuple[str, ...]] = (
    "Little interest or pleasure in doing things",
    "Feeling down, depressed, or hopeless",
    "Trouble falling or staying asleep, or sleeping too much",
    "Feeling tired or having little energy",
    "Poor appetite or overeating",
    "Feeling bad about yourself — or that you are a failure or have let yourself "
    "or your family down",
    "Trouble concentrating on things, such as reading the newspaper or watching television",
    "Moving or speaking so slowly that other people could have noticed? Or the opposite "
    "— being so fidgety or restless that you have been moving around a lot more "
    "than usual",
    "Thoughts that you would be better off dead or of hurting yourself in some way",
)

PHQ9_QUESTIONS: Final[tuple[Question, ...]] = tuple(
    Question(id=i, text=text, options=_ascending(*_FREQUENCY_LABELS))
    for i, text in enumerate(_PHQ9_ITEMS, start=1)
)

QUESTION_BANK: Final[Mapping[Instrument, tuple[Question, ...]]] = MappingProxyType(
    {
        Instrument.EPDS: EPDS_QUESTIONS,
        Instrument.PHQ9: PHQ9_QUESTIONS,
    }
)


def get_questions(instrument: Instrument) -> tuple[Question, ...]:
    """Return the ordered questions of an instrument.

    Args:
        instrument: Instrument to look up.

    Returns:
        Immutable tuple of questions in presentation order.
    """
    return QUESTION_BANK[instrument]


def get_question(instrument: Instrument, question_id: int) -> Question:
    """Return one question by id.

    Args:
        instrument: Instrument the question belongs to.
        question_id: 1-based question id.

    Returns:
        The matching Question.

    Raises:
        UnknownQuestionError: If the instrument has no such question.
    """
    for question in QUESTION_BANK[instrument]:
        if question.id == question_id:
            return question
    raise UnknownQuestionError(instrument, question_id)


def question_ids(instrument: Instrument) -> frozenset[int]:
    """Return the set of question ids for an instrument."""
    return frozenset(question.id for question in QUESTION_BANK[instrument])

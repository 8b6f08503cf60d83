"""Domain models and entities for perinatal depression screening.

This module provides the core domain layer for Maternal Wellness,
containing pure Python objects with no external dependencies.

Modules:
    enums: Domain enumerations (Instrument, ColorTag, MoodType, etc.)
    value_objects: Immutable value types (Question, Option, Interpretation, etc.)
    entities: Identified records (AssessmentResult, MoodEntry, CarePlan)
    question_bank: Static EPDS and PHQ-9 item definitions
    exceptions: Domain-specific exceptions

Example:
    >>> from maternal_wellness.domain import Instrument, get_questions
    >>> len(get_questions(Instrument.EPDS))
    10
    >>> Instrument.PHQ9.self_harm_question_id
    9
"""

from maternal_wellness.domain.entities import (
    AssessmentResult,
    CarePlan,
    CarePlanItem,
    MoodEntry,
)
from maternal_wellness.domain.enums import (
    ColorTag,
    Instrument,
    MoodTrend,
    MoodType,
    SessionState,
)
from maternal_wellness.domain.exceptions import (
    AssessmentError,
    DomainError,
    IncompleteAssessmentError,
    InvalidAnswerError,
    MissingAnswerError,
    SessionStateError,
    UnknownQuestionError,
)
from maternal_wellness.domain.question_bank import get_question, get_questions, question_ids
from maternal_wellness.domain.value_objects import (
    Interpretation,
    Option,
    Question,
    SeverityBand,
    TrendPoint,
)

__all__ = [
    "AssessmentError",
    "AssessmentResult",
    "CarePlan",
    "CarePlanItem",
    "ColorTag",
    "DomainError",
    "IncompleteAssessmentError",
    "Instrument",
    "Interpretation",
    "InvalidAnswerError",
    "MissingAnswerError",
    "MoodEntry",
    "MoodTrend",
    "MoodType",
    "Option",
    "Question",
    "SessionState",
    "SessionStateError",
    "SeverityBand",
    "TrendPoint",
    "UnknownQuestionError",
    "get_question",
    "get_questions",
    "question_ids",
]

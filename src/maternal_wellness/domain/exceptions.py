"""Domain-specific exceptions for Maternal Wellness.

This module defines a hierarchical exception system for domain errors:

    DomainError (base)
    ├── UnknownQuestionError
    └── AssessmentError
        ├── InvalidAnswerError
        ├── IncompleteAssessmentError
        ├── MissingAnswerError
        └── SessionStateError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from maternal_wellness.domain.enums import Instrument, SessionState


class DomainError(Exception):
    """Base class for domain errors.

    All domain-specific exceptions should inherit from this class
    to allow for catching all domain errors with a single except clause.
    """


class UnknownQuestionError(DomainError):
    """Raised when a question id is not part of an instrument.

    The question bank is closed and static, so this indicates a
    programming error rather than a recoverable runtime condition.
    """

    def __init__(self, instrument: Instrument, question_id: int) -> None:
        """Initialize with the instrument and the missing id.

        Args:
            instrument: Instrument that was searched.
            question_id: Id that is not in the instrument.
        """
        self.instrument = instrument
        self.question_id = question_id
        super().__init__(f"{instrument.value} has no question {question_id}")


class AssessmentError(DomainError):
    """Errors while capturing or scoring a questionnaire."""


class InvalidAnswerError(AssessmentError):
    """Raised when an answer does not fit the question it targets.

    Either the question id is not in the active instrument or the value
    is not one of that question's option values.
    """

    def __init__(self, question_id: int, value: int, reason: str) -> None:
        """Initialize with the offending answer.

        Args:
            question_id: Question the answer was recorded against.
            value: The rejected option value.
            reason: Description of what went wrong.
        """
        self.question_id = question_id
        self.value = value
        super().__init__(f"Invalid answer {value} for question {question_id}: {reason}")


class IncompleteAssessmentError(AssessmentError):
    """Raised when completion is requested before every question is answered.

    Always recoverable: the caller continues answering.
    """

    def __init__(self, unanswered: Iterable[int]) -> None:
        """Initialize with the ids still awaiting an answer.

        Args:
            unanswered: Question ids without an answer.
        """
        self.unanswered = tuple(sorted(unanswered))
        ids = ", ".join(str(qid) for qid in self.unanswered)
        super().__init__(f"Assessment incomplete, unanswered questions: {ids}")


class MissingAnswerError(AssessmentError):
    """Raised when scoring is attempted on an incomplete answer map.

    Unreachable when callers gate on ``can_complete()``; scoring fails
    loudly instead of treating a missing item as zero.
    """

    def __init__(self, instrument: Instrument, missing: Iterable[int]) -> None:
        """Initialize with the instrument and the missing ids.

        Args:
            instrument: Instrument being scored.
            missing: Question ids absent from the answer map.
        """
        self.instrument = instrument
        self.missing = tuple(sorted(missing))
        ids = ", ".join(str(qid) for qid in self.missing)
        super().__init__(f"Cannot score {instrument.value}: missing answers for {ids}")


class SessionStateError(AssessmentError):
    """Raised when a session operation is not allowed in its current state."""

    def __init__(self, state: SessionState, operation: str) -> None:
        """Initialize with the current state and attempted operation.

        Args:
            state: State the session is in.
            operation: Name of the rejected operation.
        """
        self.state = state
        self.operation = operation
        super().__init__(f"Cannot {operation} while session is {state.value}")

"""Answer session state machine.

Tracks one in-progress questionnaire:

    NOT_STARTED --start()--> IN_PROGRESS --complete()--> COMPLETED
                              ^    ^                        |
                              +----+ start() (retake)       |
                              +-----------------------------+

A session is owned by a single caller and is not thread-safe. Abandoning
it before ``complete()`` needs no cleanup: nothing is persisted until a
result is returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from maternal_wellness.domain.enums import SessionState
from maternal_wellness.domain.exceptions import (
    IncompleteAssessmentError,
    InvalidAnswerError,
    SessionStateError,
)
from maternal_wellness.domain.question_bank import get_questions
from maternal_wellness.infrastructure.logging import get_logger
from maternal_wellness.services.pipeline import AssessmentPipeline

if TYPE_CHECKING:
    from collections.abc import Mapping

    from maternal_wellness.domain.entities import AssessmentResult
    from maternal_wellness.domain.enums import Instrument
    from maternal_wellness.domain.value_objects import Question

logger = get_logger(__name__)


class AnswerSession:
    """Mutable state of a questionnaire being answered.

    Answering does not move ``current_index``; navigation is driven by the
    caller through ``advance``, ``previous`` and ``go_to``.
    """

    def __init__(self, user_id: str, pipeline: AssessmentPipeline | None = None) -> None:
        """Initialize an unstarted session.

        Args:
            user_id: Opaque user reference the result will carry.
            pipeline: Builds the result on completion. Defaults to a
                pipeline with random ids and the system clock.
        """
        self.user_id = user_id
        self._pipeline = pipeline or AssessmentPipeline()
        self._state = SessionState.NOT_STARTED
        self._instrument: Instrument | None = None
        self._questions: tuple[Question, ...] = ()
        self._answers: dict[int, int] = {}
        self._current_index = 0
        self._result: AssessmentResult | None = None

    # --- State ---

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def instrument(self) -> Instrument | None:
        """Instrument being answered, None before ``start``."""
        return self._instrument

    @property
    def questions(self) -> tuple[Question, ...]:
        """Question snapshot taken at ``start``."""
        return self._questions

    @property
    def answers(self) -> Mapping[int, int]:
        """Copy of the captured answers."""
        return dict(self._answers)

    @property
    def current_index(self) -> int:
        """Index of the question being shown."""
        return self._current_index

    @property
    def is_complete(self) -> bool:
        """Whether ``complete()`` has succeeded."""
        return self._state is SessionState.COMPLETED

    @property
    def result(self) -> AssessmentResult | None:
        """Cached result once completed."""
        return self._result

    @property
    def current_question(self) -> Question:
        """Question at ``current_index``.

        Raises:
            SessionStateError: If the session has not been started.
        """
        self._require_started("read the current question")
        return self._questions[self._current_index]

    @property
    def answered_count(self) -> int:
        """Number of questions answered so far."""
        return len(self._answers)

    @property
    def progress(self) -> float:
        """Fraction of questions answered (0.0-1.0)."""
        if not self._questions:
            return 0.0
        return len(self._answers) / len(self._questions)

    # --- Transitions ---

    def start(self, instrument: Instrument) -> None:
        """Begin (or retake) the questionnaire for an instrument.

        Always succeeds. Discards any answers captured so far; on a
        completed session the cached result is released, since the
        caller already owns it. The restart log reports how many answers
        were held, whether or not they were already scored.
        """
        if self._state is not SessionState.NOT_STARTED:
            logger.debug(
                "session_restarted",
                previous_state=self._state.value,
                previous_instrument=self._instrument.value if self._instrument else None,
                discarded_answers=len(self._answers),
            )
        self._instrument = instrument
        self._questions = get_questions(instrument)
        self._answers = {}
        self._current_index = 0
        self._result = None
        self._state = SessionState.IN_PROGRESS

    def answer(self, question_id: int, value: int) -> None:
        """Record the selected option for a question.

        Args:
            question_id: Id of a question in the snapshot.
            value: One of that question's option values.

        Raises:
            SessionStateError: If the session is not in progress.
            InvalidAnswerError: If the id or value is not valid; the
                session is left unchanged.
        """
        self._require_in_progress("answer")
        question = self._find(question_id)
        if question is None:
            raise InvalidAnswerError(question_id, value, "question not in this assessment")
        if not question.accepts(value):
            allowed = ", ".join(str(v) for v in sorted(question.option_values))
            raise InvalidAnswerError(question_id, value, f"expected one of {allowed}")
        self._answers[question_id] = value

    def is_answered(self, question_id: int) -> bool:
        """Check whether a question has an answer."""
        return question_id in self._answers

    def unanswered(self) -> list[int]:
        """Return ids of unanswered questions, in question order."""
        return [q.id for q in self._questions if q.id not in self._answers]

    def can_complete(self) -> bool:
        """Check whether every question in the snapshot has an answer."""
        return self._state is not SessionState.NOT_STARTED and not self.unanswered()

    def complete(self) -> AssessmentResult:
        """Finish the questionnaire and build its result.

        Idempotent: later calls return the cached result.

        Returns:
            The AssessmentResult for this session.

        Raises:
            SessionStateError: If the session has not been started.
            IncompleteAssessmentError: If any question is unanswered.
        """
        if self._result is not None:
            return self._result
        self._require_started("complete")
        missing = self.unanswered()
        if missing:
            raise IncompleteAssessmentError(missing)

        assert self._instrument is not None
        self._result = self._pipeline.build_result(self.user_id, self._instrument, self._answers)
        self._state = SessionState.COMPLETED
        return self._result

    # --- Navigation ---

    def go_to(self, index: int) -> int:
        """Move to a question index, clamped to the snapshot bounds.

        Returns:
            The new current index.

        Raises:
            SessionStateError: If the session is not in progress.
        """
        self._require_in_progress("navigate")
        self._current_index = max(0, min(len(self._questions) - 1, index))
        return self._current_index

    def advance(self) -> int:
        """Move to the next question (stays on the last one)."""
        return self.go_to(self._current_index + 1)

    def previous(self) -> int:
        """Move to the previous question (stays on the first one)."""
        return self.go_to(self._current_index - 1)

    # --- Helpers ---

    def _find(self, question_id: int) -> Question | None:
        for question in self._questions:
            if question.id == question_id:
                return question
        return None

    def _require_started(self, operation: str) -> None:
        if self._state is SessionState.NOT_STARTED:
            raise SessionStateError(self._state, operation)

    def _require_in_progress(self, operation: str) -> None:
        if self._state is not SessionState.IN_PROGRESS:
            raise SessionStateError(self._state, operation)

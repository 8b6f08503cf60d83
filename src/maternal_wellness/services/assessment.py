"""Assessment service facade.

Single entry point used by every front-end adapter (HTTP, CLI):
start a questionnaire, record answers, complete it, and read back
recommendations and history. Persistence goes through the injected
AssessmentRepository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from maternal_wellness.config import CrisisSettings
from maternal_wellness.infrastructure.hashing import user_ref
from maternal_wellness.infrastructure.logging import get_logger
from maternal_wellness.services.care_plan import generate_care_plan
from maternal_wellness.services.history import HistoryFilter, latest, query_history
from maternal_wellness.services.pipeline import AssessmentPipeline
from maternal_wellness.services.recommendations import recommendations_for
from maternal_wellness.services.repository import (
    AssessmentRepository,
    InMemoryAssessmentRepository,
)
from maternal_wellness.services.session import AnswerSession

if TYPE_CHECKING:
    from maternal_wellness.domain.entities import AssessmentResult, CarePlan
    from maternal_wellness.domain.enums import Instrument

logger = get_logger(__name__)


class AssessmentService:
    """Coordinates sessions, scoring, and result storage."""

    def __init__(
        self,
        repository: AssessmentRepository | None = None,
        crisis_settings: CrisisSettings | None = None,
        pipeline: AssessmentPipeline | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Where completed results are appended.
            crisis_settings: Hotlines prepended on self-harm risk.
            pipeline: Result builder handed to new sessions.
        """
        self._repository = repository if repository is not None else InMemoryAssessmentRepository()
        self._crisis = crisis_settings or CrisisSettings()
        self._pipeline = pipeline or AssessmentPipeline()
        self._care_plans: dict[str, CarePlan] = {}

    @property
    def repository(self) -> AssessmentRepository:
        """Backing result store."""
        return self._repository

    def start_assessment(self, user_id: str, instrument: Instrument) -> AnswerSession:
        """Open a new session for a user and instrument."""
        session = AnswerSession(user_id, pipeline=self._pipeline)
        session.start(instrument)
        logger.info("assessment_started", user=user_ref(user_id), instrument=instrument.value)
        return session

    def record_answer(self, session: AnswerSession, question_id: int, value: int) -> None:
        """Record one answer on a session.

        Raises:
            InvalidAnswerError: If the answer does not fit the question.
            SessionStateError: If the session is not in progress.
        """
        session.answer(question_id, value)

    def complete_assessment(self, session: AnswerSession) -> AssessmentResult:
        """Complete a session and persist its result once.

        Repeated calls return the same result without storing it again.
        The user's first completed result also seeds their care plan.

        Raises:
            IncompleteAssessmentError: If questions remain unanswered.
        """
        if session.result is not None:
            return session.result
        result = session.complete()
        self._repository.append(result)
        if result.user_id not in self._care_plans:
            self._care_plans[result.user_id] = generate_care_plan(result)
        return result

    def get_recommendations(self, result: AssessmentResult) -> list[str]:
        """Derive ordered guidance for a result."""
        return recommendations_for(result, self._crisis)

    def query_history(
        self, user_id: str, history_filter: HistoryFilter | None = None
    ) -> list[AssessmentResult]:
        """Return a user's results matching the filter, newest first."""
        return query_history(self._repository.list_for_user(user_id), history_filter)

    def latest_result(self, user_id: str) -> AssessmentResult | None:
        """Return the user's most recent result."""
        return latest(self._repository.list_for_user(user_id))

    def care_plan_for(self, user_id: str) -> CarePlan | None:
        """Return the user's care plan, None before any result exists.

        The plan is created once and kept; later results do not replace
        it. A user whose results were stored by another service instance
        gets a plan built from their latest result on first read.
        """
        plan = self._care_plans.get(user_id)
        if plan is not None:
            return plan
        result = self.latest_result(user_id)
        if result is None:
            return None
        plan = generate_care_plan(result)
        self._care_plans[user_id] = plan
        return plan

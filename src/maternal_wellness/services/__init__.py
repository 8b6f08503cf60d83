"""Business logic services.

This module provides the screening engine built on the domain layer:
scoring and interpretation, self-harm escalation, recommendations,
answer sessions, history views, and the storage collaborators.

Public API:
- AssessmentService: Facade used by the HTTP and CLI adapters
- AnswerSession: Questionnaire state machine
- AssessmentPipeline: Builds results from complete answer maps
- HistoryFilter: Criteria for history queries
- InMemoryAssessmentRepository: Append-only result store
- InMemoryMoodJournal: Daily mood log with trend analysis
"""

from maternal_wellness.services.assessment import AssessmentService
from maternal_wellness.services.care_plan import generate_care_plan
from maternal_wellness.services.history import HistoryFilter, query_history
from maternal_wellness.services.mood_journal import InMemoryMoodJournal, MoodJournal
from maternal_wellness.services.pipeline import AssessmentPipeline, build_result
from maternal_wellness.services.recommendations import recommend, recommendations_for
from maternal_wellness.services.repository import (
    AssessmentRepository,
    InMemoryAssessmentRepository,
)
from maternal_wellness.services.scoring import check_self_harm_risk, interpret, total_score
from maternal_wellness.services.session import AnswerSession

__all__ = [
    "AnswerSession",
    "AssessmentPipeline",
    "AssessmentRepository",
    "AssessmentService",
    "HistoryFilter",
    "InMemoryAssessmentRepository",
    "InMemoryMoodJournal",
    "MoodJournal",
    "build_result",
    "check_self_harm_risk",
    "generate_care_plan",
    "interpret",
    "query_history",
    "recommend",
    "recommendations_for",
    "total_score",
]

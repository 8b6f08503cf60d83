"""Default care plan generation.

Every plan carries the same self-care baseline. Scores above
``PROFESSIONAL_SUPPORT_THRESHOLD`` add weekly professional therapy to the
support section.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from maternal_wellness.domain.entities import CarePlan, CarePlanItem

if TYPE_CHECKING:
    from maternal_wellness.domain.entities import AssessmentResult

PROFESSIONAL_SUPPORT_THRESHOLD: Final[int] = 15

MIND_AND_EMOTIONS: Final[tuple[CarePlanItem, ...]] = (
    CarePlanItem("Daily mindfulness practice", "5-10 minutes guided meditation", "mind"),
    CarePlanItem("Thought journal", "Track mood changes and identify triggers", "mind"),
)

BODY_AND_REST: Final[tuple[CarePlanItem, ...]] = (
    CarePlanItem("Sleep optimization", "Strategies to improve sleep quality", "body"),
    CarePlanItem("Gentle movement", "Postpartum-safe physical activities", "body"),
)

SUPPORT_AND_CONNECTION: Final[tuple[CarePlanItem, ...]] = (
    CarePlanItem("Weekly support group", "Virtual meetup with other mothers", "support"),
    CarePlanItem(
        "Communication templates",
        "Scripts for asking for help from loved ones",
        "support",
    ),
)

PROFESSIONAL_THERAPY: Final[CarePlanItem] = CarePlanItem(
    "Professional therapy",
    "Weekly sessions with a mental health professional",
    "support",
)

GOALS: Final[tuple[CarePlanItem, ...]] = (
    CarePlanItem("Take a 15-minute walk outside", "Fresh air and movement to boost mood"),
    CarePlanItem(
        "Practice deep breathing for 5 minutes",
        "Helps reduce anxiety and stress hormones",
    ),
    CarePlanItem(
        "Connect with a friend or family member",
        "Social support is crucial for mental health",
    ),
)


def generate_care_plan(result: AssessmentResult) -> CarePlan:
    """Build the default care plan for an assessment.

    Args:
        result: Completed assessment the plan is derived from.

    Returns:
        CarePlan for the result's user.
    """
    support = SUPPORT_AND_CONNECTION
    if result.score > PROFESSIONAL_SUPPORT_THRESHOLD:
        support = (*support, PROFESSIONAL_THERAPY)

    return CarePlan(
        user_id=result.user_id,
        source_assessment_id=result.id,
        mind_and_emotions=MIND_AND_EMOTIONS,
        body_and_rest=BODY_AND_REST,
        support_and_connection=support,
        goals=GOALS,
    )

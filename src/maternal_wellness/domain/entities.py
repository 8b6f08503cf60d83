"""Domain entities for Maternal Wellness.

Entities carry an identity (``id``) that outlives their attribute values:
two results with the same score are still different assessments.
Every entity here is immutable once created; callers persist them as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from collections.abc import Mapping

    from maternal_wellness.domain.enums import Instrument, MoodType
    from maternal_wellness.domain.value_objects import Interpretation


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid4())


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class AssessmentResult:
    """Record emitted when a questionnaire is completed.

    Created exactly once per completed session and never mutated.
    """

    id: str
    user_id: str
    instrument: Instrument
    timestamp: datetime
    score: int
    interpretation: Interpretation
    answers: Mapping[int, int] = field(hash=False)
    """Question id to selected option value (read-only copy)."""

    self_harm_risk: bool = False
    """True when the self-harm item was answered above zero."""

    def __post_init__(self) -> None:
        """Freeze the answer map.

        Note: Uses object.__setattr__ because the dataclass is frozen.
        """
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))

    @property
    def max_score(self) -> int:
        """Highest score attainable on this result's instrument."""
        return self.instrument.max_score

    @property
    def score_fraction(self) -> float:
        """Score as a fraction of the instrument maximum (0.0-1.0)."""
        return self.score / self.instrument.max_score


@dataclass(frozen=True, slots=True)
class MoodEntry:
    """A single mood journal entry."""

    user_id: str
    mood: MoodType
    timestamp: datetime = field(default_factory=utc_now)
    notes: str | None = None
    id: str = field(default_factory=new_id)


@dataclass(frozen=True, slots=True)
class CarePlanItem:
    """One activity or goal in a care plan."""

    title: str
    description: str
    category: str | None = None
    """Section tag (mind, body, support); None for goals."""


@dataclass(frozen=True, slots=True)
class CarePlan:
    """Default self-care plan derived from an assessment score."""

    user_id: str
    source_assessment_id: str
    mind_and_emotions: tuple[CarePlanItem, ...]
    body_and_rest: tuple[CarePlanItem, ...]
    support_and_connection: tuple[CarePlanItem, ...]
    goals: tuple[CarePlanItem, ...]
    created_at: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=new_id)

    @property
    def includes_professional_support(self) -> bool:
        """Check whether the plan recommends professional therapy."""
        return any(item.title == "Professional therapy" for item in self.support_and_connection)

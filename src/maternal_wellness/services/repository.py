"""Assessment storage collaborator.

The engine only needs an append-only log of results keyed by user.
``InMemoryAssessmentRepository`` backs the HTTP adapter and tests; it
starts empty and is never seeded with sample data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from maternal_wellness.infrastructure.hashing import user_ref
from maternal_wellness.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from maternal_wellness.domain.entities import AssessmentResult

logger = get_logger(__name__)


@runtime_checkable
class AssessmentRepository(Protocol):
    """Append-only store of assessment results."""

    def append(self, result: AssessmentResult) -> None:
        """Persist a completed result."""
        ...

    def list_for_user(self, user_id: str) -> list[AssessmentResult]:
        """Return a user's results in insertion order."""
        ...


class InMemoryAssessmentRepository:
    """Process-local AssessmentRepository."""

    def __init__(self) -> None:
        self._by_user: dict[str, list[AssessmentResult]] = {}
        self._ids: set[str] = set()

    def append(self, result: AssessmentResult) -> None:
        """Persist a result; a result id can only be stored once.

        Raises:
            ValueError: If a result with the same id was already stored.
        """
        if result.id in self._ids:
            raise ValueError(f"Assessment {result.id} already stored")
        self._ids.add(result.id)
        self._by_user.setdefault(result.user_id, []).append(result)
        logger.debug("assessment_stored", assessment_id=result.id, user=user_ref(result.user_id))

    def list_for_user(self, user_id: str) -> list[AssessmentResult]:
        """Return a copy of the user's results in insertion order."""
        return list(self._by_user.get(user_id, ()))

    def __len__(self) -> int:
        return len(self._ids)

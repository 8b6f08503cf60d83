"""Read-only views over a collection of past assessment results.

Every function takes a caller-supplied iterable and returns new lists;
the input is never mutated. Ordering uses the result timestamp, with
ties keeping the input (insertion) order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from maternal_wellness.domain.value_objects import TrendPoint

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from maternal_wellness.domain.entities import AssessmentResult
    from maternal_wellness.domain.enums import Instrument


@dataclass(frozen=True, slots=True)
class HistoryFilter:
    """Criteria for ``query_history``. Unset fields do not filter."""

    instrument: Instrument | None = None
    start: datetime | None = None
    end: datetime | None = None
    limit: int | None = None


def filter_by_instrument(
    results: Iterable[AssessmentResult], instrument: Instrument | None = None
) -> list[AssessmentResult]:
    """Keep results of one instrument (all results when None)."""
    if instrument is None:
        return list(results)
    return [r for r in results if r.instrument is instrument]


def filter_by_date_range(
    results: Iterable[AssessmentResult],
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[AssessmentResult]:
    """Keep results whose timestamp lies in ``[start, end]`` (inclusive)."""
    return [
        r
        for r in results
        if (start is None or r.timestamp >= start) and (end is None or r.timestamp <= end)
    ]


def newest_first(results: Iterable[AssessmentResult]) -> list[AssessmentResult]:
    """Sort by timestamp descending; equal timestamps keep input order."""
    return sorted(results, key=lambda r: r.timestamp, reverse=True)


def last_n(results: Iterable[AssessmentResult], n: int) -> list[AssessmentResult]:
    """Return the ``n`` most recent results, newest first."""
    if n <= 0:
        return []
    return newest_first(results)[:n]


def latest(results: Iterable[AssessmentResult]) -> AssessmentResult | None:
    """Return the most recent result, or None for an empty history."""
    recent = last_n(results, 1)
    return recent[0] if recent else None


def latest_by_instrument(
    results: Iterable[AssessmentResult], instrument: Instrument
) -> AssessmentResult | None:
    """Return the most recent result of one instrument."""
    return latest(filter_by_instrument(results, instrument))


def severity_trend(
    results: Iterable[AssessmentResult], instrument: Instrument
) -> list[TrendPoint]:
    """Return one instrument's scores over time, oldest first.

    Instruments are never mixed because their scales differ.
    """
    ordered = sorted(filter_by_instrument(results, instrument), key=lambda r: r.timestamp)
    return [
        TrendPoint(
            timestamp=r.timestamp,
            score=r.score,
            severity_label=r.interpretation.severity_label,
            color_tag=r.interpretation.color_tag,
        )
        for r in ordered
    ]


def score_change(results: Iterable[AssessmentResult], instrument: Instrument) -> int | None:
    """Return latest minus previous score for an instrument.

    Returns:
        Signed difference (negative means improvement), or None when
        fewer than two results exist.
    """
    recent = last_n(filter_by_instrument(results, instrument), 2)
    if len(recent) < 2:
        return None
    return recent[0].score - recent[1].score


def query_history(
    results: Iterable[AssessmentResult], history_filter: HistoryFilter | None = None
) -> list[AssessmentResult]:
    """Apply a HistoryFilter and return matches newest first."""
    criteria = history_filter or HistoryFilter()
    matches = filter_by_instrument(results, criteria.instrument)
    matches = filter_by_date_range(matches, criteria.start, criteria.end)
    if criteria.limit is not None:
        return last_n(matches, criteria.limit)
    return newest_first(matches)

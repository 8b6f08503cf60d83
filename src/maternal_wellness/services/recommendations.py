"""Recommendation generation for completed assessments.

Output order:
1. Crisis entries (hotlines then disclosure prompt) when self-harm risk
   is flagged. These always occupy the first positions.
2. Two general wellness recommendations.
3. Guidance for the instrument's severity band.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from maternal_wellness.config import CrisisSettings
from maternal_wellness.domain.enums import Instrument

if TYPE_CHECKING:
    from collections.abc import Mapping

    from maternal_wellness.domain.entities import AssessmentResult
    from maternal_wellness.domain.value_objects import Interpretation

GENERAL_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Continue to monitor your mood and emotional health regularly.",
    "Maintain healthy sleep, nutrition, and exercise habits.",
)

_SEEK_PROFESSIONAL_PHQ9: Final[tuple[str, ...]] = (
    "We strongly recommend speaking with a healthcare professional soon.",
    "Explore the support resources section for mental health services in Singapore.",
)

BAND_GUIDANCE: Final[Mapping[tuple[Instrument, str], tuple[str, ...]]] = MappingProxyType(
    {
        (Instrument.EPDS, "Possible Depression"): (
            "Consider discussing your feelings with a healthcare provider.",
            "Use the resources in this app to learn more about managing postpartum emotions.",
        ),
        (Instrument.EPDS, "Probable Depression"): (
            "We recommend speaking with a healthcare professional soon about your symptoms.",
            "Explore the support resources section of this app for local mental health "
            "services in Singapore.",
            "Share your feelings with someone you trust - you don't have to face this alone.",
        ),
        (Instrument.PHQ9, "Mild"): (
            "Practice stress-reduction techniques like deep breathing and mindfulness.",
            "Seek social support from friends and family.",
        ),
        (Instrument.PHQ9, "Moderate"): (
            "We recommend consulting with a healthcare provider about your symptoms.",
            "Regular physical activity can help improve mild to moderate depression symptoms.",
        ),
        (Instrument.PHQ9, "Moderately Severe"): _SEEK_PROFESSIONAL_PHQ9,
        (Instrument.PHQ9, "Severe"): _SEEK_PROFESSIONAL_PHQ9,
    }
)


def recommend(
    instrument: Instrument,
    score: int,
    interpretation: Interpretation,
    risk_flag: bool,
    crisis: CrisisSettings | None = None,
) -> list[str]:
    """Compose ordered guidance for an assessment outcome.

    Args:
        instrument: Instrument that was completed.
        score: Total score. Band selection goes through ``interpretation``;
            the score is accepted so callers can pass a result's fields as-is.
        interpretation: Severity band reading of the score.
        risk_flag: Whether the self-harm item was endorsed.
        crisis: Crisis resources to prepend. Defaults to ``CrisisSettings()``.

    Returns:
        Recommendations, crisis entries first when ``risk_flag`` is set.
    """
    recommendations = list(GENERAL_RECOMMENDATIONS)
    recommendations.extend(BAND_GUIDANCE.get((instrument, interpretation.severity_label), ()))

    if risk_flag:
        crisis = crisis if crisis is not None else CrisisSettings()
        recommendations[:0] = crisis.escalation_entries

    return recommendations


def recommendations_for(
    result: AssessmentResult, crisis: CrisisSettings | None = None
) -> list[str]:
    """Derive recommendations from a stored assessment result."""
    return recommend(
        result.instrument,
        result.score,
        result.interpretation,
        result.self_harm_risk,
        crisis,
    )

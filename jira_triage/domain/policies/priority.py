"""PriorityPolicy — the canonical weighted scoring law and recommendation bands."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from jira_triage.domain.value_objects.enums import (
    EFFORT_SCORES,
    EffortSize,
    PriorityRecommendation,
)

BUSINESS_IMPACT_WEIGHT = 0.35
STRATEGIC_FIT_WEIGHT = 0.25
CROSS_CLIENT_WEIGHT = 0.25
EFFORT_WEIGHT = 0.15

DEFAULT_EFFORT_SCORE = 50

FAST_TRACK_THRESHOLD = 80
STANDARD_THRESHOLD = 50
ON_HOLD_THRESHOLD = 25


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    # weights like 0.35 are not exact in binary; 84.4999999 must still count as 84.5
    value = round(value, 9)
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def effort_score_for(effort_size: Any) -> int:
    """Map an effort size label to its score, 50 when unknown."""
    try:
        size = EffortSize(str(effort_size).strip().upper())
    except ValueError:
        return DEFAULT_EFFORT_SCORE
    return EFFORT_SCORES[size]


def compute_overall(scores: Mapping[str, Any]) -> int:
    """Pure function: weighted overall priority in [0, 100].

    overall = 0.35·business_impact + 0.25·strategic_fit
            + 0.25·cross_client_value + 0.15·effort_score

    Missing scores count as 0, except effort_score, which falls back to the
    effort_size lookup (XS=100 … XL=20) and then to 50.
    """
    business = _as_number(scores.get("business_impact")) or 0.0
    strategic = _as_number(scores.get("strategic_fit")) or 0.0
    cross_client = _as_number(scores.get("cross_client_value")) or 0.0

    effort = _as_number(scores.get("effort_score"))
    if effort is None:
        effort = float(effort_score_for(scores.get("effort_size")))

    overall = (
        business * BUSINESS_IMPACT_WEIGHT
        + strategic * STRATEGIC_FIT_WEIGHT
        + cross_client * CROSS_CLIENT_WEIGHT
        + effort * EFFORT_WEIGHT
    )
    return max(0, min(100, round_half_up(overall)))


def recommendation_for(overall: int) -> PriorityRecommendation:
    """Banding rule: ≥80 Fast Track, ≥50 Standard, ≥25 On Hold, else Low."""
    if overall >= FAST_TRACK_THRESHOLD:
        return PriorityRecommendation.FAST_TRACK
    if overall >= STANDARD_THRESHOLD:
        return PriorityRecommendation.STANDARD
    if overall >= ON_HOLD_THRESHOLD:
        return PriorityRecommendation.ON_HOLD
    return PriorityRecommendation.LOW

from __future__ import annotations

from collections.abc import Sequence

from ..models.risk_level import RiskLevel

"""Risk tier scoring.

Two variants share the tier labels: attendance based (tracker) and
low-score share based (observation).
"""

__all__ = [
    "attendance_risk",
    "observation_risk",
    "low_score_percent",
    "LOW_SCORE_MAX",
]

# Inclusive upper bound of a low (warning) rubric score
LOW_SCORE_MAX = 2

ATTENDANCE_HIGH_BELOW = 40.0
ATTENDANCE_MEDIUM_MAX = 50.0
LOW_SCORE_HIGH_ABOVE = 40.0
LOW_SCORE_MEDIUM_ABOVE = 20.0


def attendance_risk(attendance_rate: float) -> RiskLevel:
    """Tier an attendance percentage; 40 and 50 are both Medium."""
    if attendance_rate < ATTENDANCE_HIGH_BELOW:
        return RiskLevel.HIGH
    if attendance_rate <= ATTENDANCE_MEDIUM_MAX:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def low_score_percent(scores: Sequence[int]) -> float:
    if not scores:
        return 0.0
    low = sum(1 for s in scores if s <= LOW_SCORE_MAX)
    return low / len(scores) * 100


def observation_risk(scores: Sequence[int]) -> tuple[float, RiskLevel]:
    """Return ``(average score, tier)`` for a fellow's rubric score history.

    An empty history yields ``(0.0, NO_DATA)``.
    """
    if not scores:
        return 0.0, RiskLevel.NO_DATA
    average = sum(scores) / len(scores)
    percent = low_score_percent(scores)
    if percent > LOW_SCORE_HIGH_ABOVE:
        return average, RiskLevel.HIGH
    if percent > LOW_SCORE_MEDIUM_ABOVE:
        return average, RiskLevel.MEDIUM
    return average, RiskLevel.LOW

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from typing import TypeVar

from ..models.analysis import CoachSummary, RiskCounts
from ..models.records import AttendanceRecord, ObservationRecord
from ..models.risk_level import RiskLevel
from .field_resolver import UNKNOWN

"""Fold per-fellow records into grouped counts and summary totals."""

__all__ = [
    "count_by",
    "risk_counts",
    "payment_issues",
    "coach_summaries",
    "multiple_warning_count",
]

T = TypeVar("T")


def count_by(
    records: Iterable[T],
    key: Callable[[T], str],
    seed: Iterable[str] = (),
    default: str = UNKNOWN,
) -> dict[str, int]:
    """Count records per categorical key; blank keys count under ``default``."""
    counts: Counter[str] = Counter({k: 0 for k in seed})
    for record in records:
        counts[key(record) or default] += 1
    return dict(counts)


def risk_counts(records: Iterable[AttendanceRecord | ObservationRecord]) -> RiskCounts:
    tiers = Counter(r.risk_level for r in records)
    return RiskCounts(
        high=tiers[RiskLevel.HIGH.value],
        medium=tiers[RiskLevel.MEDIUM.value],
        low=tiers[RiskLevel.LOW.value],
        no_data=tiers[RiskLevel.NO_DATA.value],
    )


def payment_issues(records: Iterable[AttendanceRecord]) -> int:
    """Fellows with at least one period whose payment is not cleared."""
    return sum(1 for r in records if r.has_payment_issue)


def coach_summaries(records: Iterable[AttendanceRecord]) -> dict[str, CoachSummary]:
    grouped: dict[str, list[AttendanceRecord]] = {}
    for record in records:
        grouped.setdefault(record.coach or UNKNOWN, []).append(record)
    return {
        coach: CoachSummary(
            name=coach,
            fellows=tuple(fellows),
            risk_distribution=risk_counts(fellows),
        )
        for coach, fellows in grouped.items()
    }


def multiple_warning_count(records: Iterable[ObservationRecord], minimum: int = 2) -> int:
    return sum(1 for r in records if r.warning_count >= minimum)

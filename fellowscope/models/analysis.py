from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .records import AttendanceRecord, ObservationRecord

"""Aggregate output structures handed to the presentation layer."""

__all__ = [
    "RiskCounts",
    "CoachSummary",
    "TrackerAnalysis",
    "ObservationAnalysis",
]


@dataclass(frozen=True)
class RiskCounts:
    high: int = 0
    medium: int = 0
    low: int = 0
    no_data: int = 0

    def to_dict(self, include_no_data: bool = False) -> dict[str, int]:
        out = {"high": self.high, "medium": self.medium, "low": self.low}
        if include_no_data:
            out["noData"] = self.no_data
        return out


@dataclass(frozen=True)
class CoachSummary:
    name: str
    fellows: tuple[AttendanceRecord, ...]
    risk_distribution: RiskCounts

    @property
    def total_fellows(self) -> int:
        return len(self.fellows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fellows": [f.to_dict() for f in self.fellows],
            "totalFellows": self.total_fellows,
            "riskDistribution": self.risk_distribution.to_dict(),
        }


@dataclass(frozen=True)
class TrackerAnalysis:
    """Result of folding the tracker matrix."""
    fellows: tuple[AttendanceRecord, ...]
    coaches: dict[str, CoachSummary]
    states: dict[str, int]
    schools: dict[str, int]
    fellowship_paths: dict[str, int]
    gender_count: dict[str, int]
    risk_counts: RiskCounts
    payment_issues: int

    @property
    def total_fellows(self) -> int:
        return len(self.fellows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fellows": [f.to_dict() for f in self.fellows],
            "coaches": {name: c.to_dict() for name, c in self.coaches.items()},
            "states": dict(self.states),
            "schools": dict(self.schools),
            "fellowshipPaths": dict(self.fellowship_paths),
            "genderCount": dict(self.gender_count),
            "totalFellows": self.total_fellows,
            "riskCounts": self.risk_counts.to_dict(),
            "paymentIssues": self.payment_issues,
        }


@dataclass(frozen=True)
class ObservationAnalysis:
    """Result of folding the observation log."""
    fellows: dict[str, ObservationRecord]
    observers: dict[str, int]
    regions: dict[str, int]
    class_ranges: dict[str, int]
    rubric_areas: tuple[str, ...]
    stakeholder_areas: tuple[str, ...]
    holistic_outcomes: dict[str, int]
    leadership_mindsets: dict[str, int]
    score_distributions: dict[str, dict[int, int]]
    risk_counts: RiskCounts
    fellows_with_multiple_warnings: int

    @property
    def all_areas(self) -> tuple[str, ...]:
        return self.rubric_areas + self.stakeholder_areas

    def to_dict(self) -> dict[str, Any]:
        return {
            "fellows": {name: f.to_dict() for name, f in self.fellows.items()},
            "observers": dict(self.observers),
            "regions": dict(self.regions),
            "classRanges": dict(self.class_ranges),
            "rubricAreas": list(self.rubric_areas),
            "stakeholderAreas": list(self.stakeholder_areas),
            "allAreas": list(self.all_areas),
            "holisticOutcomes": dict(self.holistic_outcomes),
            "leadershipMindsets": dict(self.leadership_mindsets),
            "scoreDistributions": {
                area: dict(dist) for area, dist in self.score_distributions.items()
            },
            "riskCounts": self.risk_counts.to_dict(include_no_data=True),
            "fellowsWithMultipleWarnings": self.fellows_with_multiple_warnings,
        }

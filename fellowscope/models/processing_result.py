from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .analysis import ObservationAnalysis, TrackerAnalysis

"""Processing result models for a CLI run over the uploaded source files."""

__all__ = [
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome."""
    file_name: str
    source: str  # tracker / observation
    status: str  # success / failed
    fellows: int  # records produced on success
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated outcome of one run, with the analyses that succeeded."""
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)
    tracker: TrackerAnalysis | None = None
    observation: ObservationAnalysis | None = None

    @property
    def success_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == "success")

    @property
    def failed_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == "failed")

    @property
    def total_files(self) -> int:
        return len(self.file_stats)

    @property
    def high_risk(self) -> int:
        total = 0
        if self.tracker is not None:
            total += self.tracker.risk_counts.high
        if self.observation is not None:
            total += self.observation.risk_counts.high
        return total

    def to_dict(self) -> dict[str, Any]:
        return {
            "tracker": self.tracker.to_dict() if self.tracker is not None else None,
            "observation": self.observation.to_dict() if self.observation is not None else None,
        }

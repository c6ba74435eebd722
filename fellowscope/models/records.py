from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Per-fellow records produced by the tracker and observation pipelines.

Field names follow Python conventions; ``to_dict()`` renders the camelCase
keys the dashboard switches on.
"""

__all__ = [
    "PeriodAttendance",
    "AttendanceRecord",
    "ObservationRecord",
]


@dataclass(frozen=True)
class PeriodAttendance:
    """One period block of the tracker matrix."""
    weekly_scores: tuple[int, ...]
    monthly_total: int
    monthly_average: float
    payment_cleared: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "weeklyScores": list(self.weekly_scores),
            "monthlyTotal": self.monthly_total,
            "monthlyAverage": self.monthly_average,
            "paymentCleared": self.payment_cleared,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """One identified fellow of the tracker source.

    Invariants: every period holds exactly ``weeks_per_period`` scores,
    ``total_sessions`` never exceeds the week-slot count and
    ``0 <= attendance_rate <= 100``.
    """
    id: int  # index of the row among data rows
    first_name: str
    surname: str
    full_name: str
    gender: str
    phone: str
    email: str
    fellowship_id: str
    unique_id: str
    fellowship_path: str
    cohort: str
    state: str
    school: str
    coach: str
    captured: str
    resumption_date: str
    status: str
    monthly_data: dict[str, PeriodAttendance]
    total_sessions: int
    average_score: float
    attendance_rate: float
    risk_level: str

    @property
    def payment_status(self) -> dict[str, bool]:
        return {period: data.payment_cleared for period, data in self.monthly_data.items()}

    @property
    def has_payment_issue(self) -> bool:
        return not all(self.payment_status.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "surname": self.surname,
            "fullName": self.full_name,
            "gender": self.gender,
            "phone": self.phone,
            "email": self.email,
            "fellowshipId": self.fellowship_id,
            "uniqueId": self.unique_id,
            "fellowshipPath": self.fellowship_path,
            "cohort": self.cohort,
            "state": self.state,
            "school": self.school,
            "coach": self.coach,
            "captured": self.captured,
            "resumptionDate": self.resumption_date,
            "status": self.status,
            "monthlyData": {p: d.to_dict() for p, d in self.monthly_data.items()},
            "totalSessions": self.total_sessions,
            "averageScore": self.average_score,
            "riskLevel": self.risk_level,
            "paymentStatus": self.payment_status,
            "attendanceRate": self.attendance_rate,
        }


@dataclass(frozen=True)
class ObservationRecord:
    """One observed fellow, folded across all of their session rows."""
    name: str
    region: str
    school: str
    subject: str
    observer: str
    class_range: str
    scores: tuple[int, ...]
    warning_details: tuple[str, ...]
    session_count: int
    dominant_mindset: str
    average_score: float
    risk_level: str
    warning_count: int = field(init=False)

    def __post_init__(self) -> None:
        # warnings are exactly the rubric scores <= 2
        object.__setattr__(self, "warning_count", len(self.warning_details))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "region": self.region,
            "school": self.school,
            "subject": self.subject,
            "observer": self.observer,
            "scores": list(self.scores),
            "warningCount": self.warning_count,
            "warningDetails": list(self.warning_details),
            "sessionCount": self.session_count,
            "dominantMindset": self.dominant_mindset,
            "classRange": self.class_range,
            "avgScore": self.average_score,
            "riskLevel": self.risk_level,
        }

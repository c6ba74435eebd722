from __future__ import annotations

from dataclasses import dataclass, field

"""Schema dataclasses for the two fellow data sources.

The tracker matrix has no header row the engine can rely on, so its layout is
described here as an explicit table of offsets. The observation log is header
keyed; its schema lists the rubric/stakeholder area headers and the accepted
aliases for identity and narrative columns.
"""

__all__ = [
    "TrackerSchema",
    "ObservationSchema",
    "AnalysisConfig",
    "DEFAULT_PERIODS",
    "DEFAULT_FIELD_OFFSETS",
    "RUBRIC_AREAS",
    "STAKEHOLDER_AREAS",
]

DEFAULT_PERIODS: tuple[str, ...] = (
    "September 2022", "October 2022", "November 2022", "December 2022",
    "January 2023", "February 2023", "March 2023", "April 2023",
    "May 2023", "June 2023", "July 2023", "August 2023", "September 2023",
)

# Column B..P of the "All Fellows" sheet
DEFAULT_FIELD_OFFSETS: dict[str, int] = {
    "first_name": 1,
    "surname": 2,
    "gender": 3,
    "phone": 4,
    "email": 5,
    "fellowship_id": 6,
    "unique_id": 7,
    "fellowship_path": 8,
    "cohort": 9,
    "state": 10,
    "school": 11,
    "coach": 12,
    "captured": 13,
    "resumption_date": 14,
    "status": 15,
}

RUBRIC_AREAS: tuple[str, ...] = (
    "Classroom Vision and Goals", "Planning of Lesson", "Challenge", "Captivate",
    "Confer", "Care", "Control", "Clarify", "Consolidate",
)

STAKEHOLDER_AREAS: tuple[str, ...] = (
    "Engage with Other Teachers", "Engage with School Head", "Engage with School Community",
    "Engage with parents",
    "Engage with PTA, SUBEB, SBMC and other education authority stakeholders",
    "Training/Retreat", "Other Engagements",
)

HOLISTIC_EVIDENCE_HEADER = (
    "What clear and observable evidence of student holistic outcomes (Growth Mindset, "
    "Self Awareness, Collaboration, Communication, Academic proficiency/mastery) do you see? "
    "What do you not see? Why do you think this is?"
)

LEADERSHIP_EVIDENCE_HEADER = (
    "What clear and observable evidence of the leadership mindsets (Students as leaders, "
    "Teachers as Learners, Community as Power, Our work as Systemic) have you seen exhibited? "
    "Which one(s) have you not seen? Why do you think this?"
)

DEFAULT_OBSERVATION_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("Select Fellows Name", "Fellow Name", "Name"),
    "observer": ("Observer", "Observer Name"),
    "region": ("Region",),
    "school": ("Name of School", "School"),
    "subject": ("Subject",),
    "class_range": ("Select the Class Range", "Class Range"),
    "holistic_evidence": (HOLISTIC_EVIDENCE_HEADER, "Holistic Outcomes"),
    "leadership_evidence": (LEADERSHIP_EVIDENCE_HEADER, "Leadership Mindsets"),
}


@dataclass(frozen=True)
class TrackerSchema:
    """Fixed layout of the tracker matrix.

    Each period occupies one block of ``weeks_per_period`` score cells followed
    by a single payment cell, starting at ``tracking_start``.
    """
    sheet_name: str = "All Fellows"
    header_rows: int = 3
    tracking_start: int = 16  # column Q
    weeks_per_period: int = 5
    period_names: tuple[str, ...] = DEFAULT_PERIODS
    field_offsets: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_FIELD_OFFSETS))

    @property
    def block_size(self) -> int:
        return self.weeks_per_period + 1

    @property
    def period_count(self) -> int:
        return len(self.period_names)

    @property
    def total_week_slots(self) -> int:
        return self.period_count * self.weeks_per_period

    def block_start(self, period_index: int) -> int:
        return self.tracking_start + period_index * self.block_size

    def payment_offset(self, period_index: int) -> int:
        return self.block_start(period_index) + self.weeks_per_period


@dataclass(frozen=True)
class ObservationSchema:
    """Header layout of the observation log."""
    rubric_areas: tuple[str, ...] = RUBRIC_AREAS
    stakeholder_areas: tuple[str, ...] = STAKEHOLDER_AREAS
    aliases: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_OBSERVATION_ALIASES)
    )

    @property
    def all_areas(self) -> tuple[str, ...]:
        return self.rubric_areas + self.stakeholder_areas


@dataclass(frozen=True)
class AnalysisConfig:
    """Root configuration: one schema per source."""
    tracker: TrackerSchema = field(default_factory=TrackerSchema)
    observation: ObservationSchema = field(default_factory=ObservationSchema)

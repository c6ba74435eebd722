from __future__ import annotations

import logging
import numbers
from collections.abc import Sequence
from typing import Any

from ..models.config_models import TrackerSchema
from ..models.records import AttendanceRecord, PeriodAttendance
from .field_resolver import FieldSpec, cell_text, parse_leading_int, resolve_field
from .risk import attendance_risk

"""Fixed-schema period extraction for the tracker matrix.

Walks the repeating period blocks of one matrix row (weekly score cells
followed by a payment cell) and builds the fellow's AttendanceRecord.
"""

__all__ = [
    "tracker_field_specs",
    "read_period",
    "is_payment_cleared",
    "extract_attendance",
]

logger = logging.getLogger(__name__)

# Fields that fall back to "Unknown" rather than an empty string
_CATEGORICAL_FIELDS = {"gender", "fellowship_path", "state", "school", "coach", "status"}


def tracker_field_specs(schema: TrackerSchema) -> dict[str, FieldSpec]:
    specs: dict[str, FieldSpec] = {}
    for name, offset in schema.field_offsets.items():
        if name in _CATEGORICAL_FIELDS:
            specs[name] = FieldSpec.categorical(name, offset)
        else:
            specs[name] = FieldSpec.text(name, offset)
    return specs


def is_payment_cleared(value: Any) -> bool:
    """``YES`` in any case, or the number 1, clears a period's payment."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, numbers.Real):
        return value == 1
    return cell_text(value).upper() == "YES"


def _cell(row: Sequence[Any], offset: int) -> Any:
    return row[offset] if 0 <= offset < len(row) else None


def read_period(row: Sequence[Any], schema: TrackerSchema, period_index: int) -> PeriodAttendance:
    start = schema.block_start(period_index)
    scores = tuple(
        parse_leading_int(_cell(row, start + week)) or 0
        for week in range(schema.weeks_per_period)
    )
    total = sum(scores)
    return PeriodAttendance(
        weekly_scores=scores,
        monthly_total=total,
        monthly_average=total / schema.weeks_per_period,
        payment_cleared=is_payment_cleared(_cell(row, schema.payment_offset(period_index))),
    )


def extract_attendance(
    row: Sequence[Any],
    schema: TrackerSchema,
    row_index: int,
    specs: dict[str, FieldSpec] | None = None,
) -> AttendanceRecord | None:
    """Build the AttendanceRecord of one matrix row.

    Returns None for a row whose first name is blank; such rows are excluded
    from every aggregate.
    """
    specs = specs if specs is not None else tracker_field_specs(schema)
    fields = {name: resolve_field(row, spec) for name, spec in specs.items()}
    if not fields.get("first_name"):
        logger.debug("tracker row %d skipped: blank first name", row_index)
        return None

    monthly: dict[str, PeriodAttendance] = {}
    score_sum = 0
    sessions = 0
    for i, period in enumerate(schema.period_names):
        data = read_period(row, schema, i)
        monthly[period] = data
        score_sum += data.monthly_total
        sessions += sum(1 for s in data.weekly_scores if s > 0)

    slots = schema.total_week_slots
    # zero-filled mean over every week slot, not only the attended ones
    average = score_sum / slots if slots else 0.0
    rate = sessions * 100 / slots if slots else 0.0

    return AttendanceRecord(
        id=row_index,
        first_name=fields["first_name"],
        surname=fields.get("surname", ""),
        full_name=f"{fields['first_name']} {fields.get('surname', '')}".strip(),
        gender=fields.get("gender", "Unknown"),
        phone=fields.get("phone", ""),
        email=fields.get("email", ""),
        fellowship_id=fields.get("fellowship_id", ""),
        unique_id=fields.get("unique_id", ""),
        fellowship_path=fields.get("fellowship_path", "Unknown"),
        cohort=fields.get("cohort", ""),
        state=fields.get("state", "Unknown"),
        school=fields.get("school", "Unknown"),
        coach=fields.get("coach", "Unknown"),
        captured=fields.get("captured", ""),
        resumption_date=fields.get("resumption_date", ""),
        status=fields.get("status", "Unknown"),
        monthly_data=monthly,
        total_sessions=sessions,
        average_score=average,
        attendance_rate=rate,
        risk_level=attendance_risk(rate).value,
    )

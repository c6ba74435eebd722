from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..logging.diagnostics import DiagnosticBuffer
from ..models.analysis import TrackerAnalysis
from ..models.config_models import TrackerSchema
from ..models.records import AttendanceRecord
from ..models.row_diagnostic import MISSING_IDENTITY, RowDiagnostic
from .aggregator import coach_summaries, count_by, payment_issues, risk_counts
from .errors import UnsupportedFormatError
from .period_extractor import extract_attendance, tracker_field_specs

"""Tracker pipeline: named-sheet workbook -> TrackerAnalysis.

The workbook is a mapping of sheet name to rows of cells. Only the schema's
sheet is read; its leading label rows are skipped before data begins.
"""

__all__ = [
    "GENDER_SEED",
    "tracker_rows",
    "analyze_tracker",
]

logger = logging.getLogger(__name__)

GENDER_SEED = ("Male", "Female", "Unknown")


def tracker_rows(workbook: Any, schema: TrackerSchema) -> Sequence[Sequence[Any]]:
    """Return the data rows of the tracker sheet.

    Raises:
        UnsupportedFormatError: input is not a named-sheet workbook, or lacks
            the tracker sheet
    """
    if not isinstance(workbook, Mapping):
        raise UnsupportedFormatError(
            "tracker input must be a workbook of named sheets, "
            f"got {type(workbook).__name__}"
        )
    sheet = workbook.get(schema.sheet_name)
    if sheet is None:
        raise UnsupportedFormatError(
            f"tracker workbook lacks required sheet '{schema.sheet_name}' "
            f"(found: {sorted(str(k) for k in workbook)})"
        )
    if isinstance(sheet, (str, bytes)) or not isinstance(sheet, Sequence):
        raise UnsupportedFormatError(
            f"sheet '{schema.sheet_name}' must be a sequence of rows"
        )
    return sheet[schema.header_rows:]


def analyze_tracker(
    workbook: Mapping[str, Sequence[Sequence[Any]]],
    schema: TrackerSchema | None = None,
    diagnostics: DiagnosticBuffer | None = None,
    file_name: str = "",
) -> TrackerAnalysis:
    schema = schema or TrackerSchema()
    rows = tracker_rows(workbook, schema)
    specs = tracker_field_specs(schema)

    fellows: list[AttendanceRecord] = []
    for index, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise UnsupportedFormatError(f"tracker row {index + 1} is not a sequence of cells")
        record = extract_attendance(row, schema, index, specs)
        if record is None:
            if diagnostics is not None:
                diagnostics.append(RowDiagnostic.create(
                    source="tracker",
                    file=file_name,
                    row=index + 1,
                    reason=MISSING_IDENTITY,
                    detail="blank first name",
                ))
            continue
        fellows.append(record)

    logger.debug("tracker: %d fellows from %d data rows", len(fellows), len(rows))

    return TrackerAnalysis(
        fellows=tuple(fellows),
        coaches=coach_summaries(fellows),
        states=count_by(fellows, lambda f: f.state),
        schools=count_by(fellows, lambda f: f.school),
        fellowship_paths=count_by(fellows, lambda f: f.fellowship_path),
        gender_count=count_by(fellows, lambda f: f.gender, seed=GENDER_SEED),
        risk_counts=risk_counts(fellows),
        payment_issues=payment_issues(fellows),
    )

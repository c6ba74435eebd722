from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..logging.diagnostics import DiagnosticBuffer
from ..models.analysis import ObservationAnalysis
from ..models.config_models import ObservationSchema
from ..models.records import ObservationRecord
from ..models.row_diagnostic import MISSING_IDENTITY, RowDiagnostic
from .aggregator import count_by, multiple_warning_count, risk_counts
from .errors import UnsupportedFormatError
from .field_resolver import UNKNOWN, FieldSpec, resolve_field
from .keyword_classifier import (
    BLANK,
    HOLISTIC_OUTCOMES,
    LEADERSHIP_MINDSETS,
    classify,
    new_counter,
    tally,
)
from .risk import observation_risk
from .rubric_scores import add_to_distributions, empty_distributions, score_session

"""Observation pipeline: header-keyed session rows -> ObservationAnalysis.

Rows are folded per distinct fellow name. Identity fields come from the
fellow's first row; scores, warnings and sessions accumulate across rows.
"""

__all__ = [
    "observation_field_specs",
    "analyze_observations",
]

logger = logging.getLogger(__name__)

_CATEGORICAL_FIELDS = ("name", "observer", "region", "school", "subject", "class_range")


def observation_field_specs(schema: ObservationSchema) -> dict[str, FieldSpec]:
    specs: dict[str, FieldSpec] = {}
    for name, aliases in schema.aliases.items():
        if name in _CATEGORICAL_FIELDS:
            specs[name] = FieldSpec.categorical(name, *aliases)
        else:
            specs[name] = FieldSpec.text(name, *aliases)
    # identity must stay blank when unresolved so the row can be excluded
    specs["name"] = FieldSpec.text("name", *schema.aliases.get("name", ()))
    return specs


class _FellowAccumulator:
    """Mutable per-run state of one fellow; frozen into an ObservationRecord at the end."""

    def __init__(self, name: str, fields: dict[str, str]) -> None:
        self.name = name
        self.fields = fields
        self.scores: list[int] = []
        self.warnings: list[str] = []
        self.session_count = 0
        self.dominant_mindset = BLANK

    def freeze(self) -> ObservationRecord:
        average, level = observation_risk(self.scores)
        return ObservationRecord(
            name=self.name,
            region=self.fields.get("region", UNKNOWN),
            school=self.fields.get("school", UNKNOWN),
            subject=self.fields.get("subject", UNKNOWN),
            observer=self.fields.get("observer", UNKNOWN),
            class_range=self.fields.get("class_range", UNKNOWN),
            scores=tuple(self.scores),
            warning_details=tuple(self.warnings),
            session_count=self.session_count,
            dominant_mindset=self.dominant_mindset,
            average_score=average,
            risk_level=level.value,
        )


def _check_rows(rows: Any) -> Sequence[Mapping[str, Any]]:
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Sequence):
        raise UnsupportedFormatError(
            "observation input must be a sequence of header-keyed rows, "
            f"got {type(rows).__name__}"
        )
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise UnsupportedFormatError(
                f"observation row {i + 1} is not keyed by column header"
            )
    return rows


def analyze_observations(
    rows: Sequence[Mapping[str, Any]],
    schema: ObservationSchema | None = None,
    diagnostics: DiagnosticBuffer | None = None,
    file_name: str = "",
) -> ObservationAnalysis:
    schema = schema or ObservationSchema()
    rows = _check_rows(rows)
    specs = observation_field_specs(schema)

    fellows: dict[str, _FellowAccumulator] = {}
    observers: list[str] = []
    regions: list[str] = []
    holistic = new_counter(HOLISTIC_OUTCOMES)
    mindsets = new_counter(LEADERSHIP_MINDSETS)
    distributions = empty_distributions(schema)

    for index, row in enumerate(rows):
        fields = {name: resolve_field(row, spec) for name, spec in specs.items()}
        name = fields["name"]
        if not name:
            logger.debug("observation row %d skipped: blank fellow name", index + 1)
            if diagnostics is not None:
                diagnostics.append(RowDiagnostic.create(
                    source="observation",
                    file=file_name,
                    row=index + 1,
                    reason=MISSING_IDENTITY,
                    detail="blank fellow name",
                ))
            continue

        fellow = fellows.get(name)
        if fellow is None:
            fellow = fellows[name] = _FellowAccumulator(name, fields)
        fellow.session_count += 1
        observers.append(fields.get("observer", ""))
        regions.append(fields.get("region", ""))

        tally(holistic, classify(fields.get("holistic_evidence"), HOLISTIC_OUTCOMES))
        mindset = classify(fields.get("leadership_evidence"), LEADERSHIP_MINDSETS)
        tally(mindsets, mindset)
        # first dominant tag wins for the whole run
        if fellow.dominant_mindset == BLANK and mindset.dominant is not None:
            fellow.dominant_mindset = mindset.dominant

        session = score_session(row, schema)
        add_to_distributions(distributions, session)
        if session.has_scores:
            fellow.scores.extend(session.rubric_scores)
            fellow.warnings.extend(session.warnings)

    records = {name: acc.freeze() for name, acc in fellows.items()}
    logger.debug("observation: %d fellows from %d rows", len(records), len(rows))

    return ObservationAnalysis(
        fellows=records,
        observers=count_by(observers, lambda o: o),
        regions=count_by(regions, lambda r: r),
        class_ranges=count_by(records.values(), lambda f: f.class_range),
        rubric_areas=schema.rubric_areas,
        stakeholder_areas=schema.stakeholder_areas,
        holistic_outcomes=dict(holistic),
        leadership_mindsets=dict(mindsets),
        score_distributions=distributions,
        risk_counts=risk_counts(records.values()),
        fellows_with_multiple_warnings=multiple_warning_count(records.values()),
    )

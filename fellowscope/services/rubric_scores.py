from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..models.config_models import ObservationSchema
from .field_resolver import parse_leading_int
from .risk import LOW_SCORE_MAX

"""Rubric score extraction for one observation row.

Rubric areas feed a fellow's score history and warnings. Stakeholder areas
only feed the per-area rating distributions.
"""

__all__ = [
    "RATINGS",
    "SessionScores",
    "parse_rating",
    "score_session",
    "empty_distributions",
    "add_to_distributions",
]

RATINGS = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class SessionScores:
    rubric_scores: tuple[int, ...]
    warnings: tuple[str, ...]  # "<area>: <score>"
    ratings: tuple[tuple[str, int], ...]  # every valid (area, rating), both area kinds

    @property
    def has_scores(self) -> bool:
        return bool(self.rubric_scores)


def parse_rating(value: Any) -> int | None:
    """Integer rating in 1..5, or None when the cell holds no valid rating."""
    score = parse_leading_int(value)
    if score is None or score not in RATINGS:
        return None
    return score


def score_session(row: Mapping[str, Any], schema: ObservationSchema) -> SessionScores:
    rubric = set(schema.rubric_areas)
    scores: list[int] = []
    warnings: list[str] = []
    ratings: list[tuple[str, int]] = []
    for area in schema.all_areas:
        score = parse_rating(row.get(area))
        if score is None:
            continue
        ratings.append((area, score))
        if area in rubric:
            scores.append(score)
            if score <= LOW_SCORE_MAX:
                warnings.append(f"{area}: {score}")
    return SessionScores(
        rubric_scores=tuple(scores),
        warnings=tuple(warnings),
        ratings=tuple(ratings),
    )


def empty_distributions(schema: ObservationSchema) -> dict[str, dict[int, int]]:
    return {area: {r: 0 for r in RATINGS} for area in schema.all_areas}


def add_to_distributions(distributions: dict[str, dict[int, int]], session: SessionScores) -> None:
    for area, score in session.ratings:
        distributions[area][score] += 1

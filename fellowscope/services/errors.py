from __future__ import annotations

"""Exceptions surfaced by the analysis engine.

Only a file-level format problem aborts an analysis; per-row and per-cell
problems are absorbed by the pipelines.
"""

__all__ = [
    "AnalysisError",
    "UnsupportedFormatError",
]


class AnalysisError(Exception):
    """Base exception for analysis failures."""


class UnsupportedFormatError(AnalysisError):
    """Raised when the decoded input matches neither accepted tabular shape."""

"""Fellow performance analytics.

Normalizes the fellows tracker matrix and the classroom observation log into
per-fellow records with risk tiers and categorical tags, and folds them into
the aggregate structures the dashboard renders.
"""

from .services.errors import AnalysisError, UnsupportedFormatError
from .services.observation import analyze_observations
from .services.orchestrator import analyze
from .services.tracker import analyze_tracker

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "UnsupportedFormatError",
    "analyze",
    "analyze_observations",
    "analyze_tracker",
]

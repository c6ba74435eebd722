"""Domain models for the fellow performance analytics engine.

Schema tables describing the two raw sources, the per-fellow records built
from them, the aggregate analyses, and the per-run processing result.
"""

from .analysis import CoachSummary, ObservationAnalysis, RiskCounts, TrackerAnalysis
from .config_models import AnalysisConfig, ObservationSchema, TrackerSchema
from .processing_result import FileStat, ProcessingResult
from .records import AttendanceRecord, ObservationRecord, PeriodAttendance
from .risk_level import RiskLevel
from .row_diagnostic import RowDiagnostic

__all__ = [
    # Configuration models
    "AnalysisConfig",
    "ObservationSchema",
    "TrackerSchema",
    # Records
    "AttendanceRecord",
    "ObservationRecord",
    "PeriodAttendance",
    "RiskLevel",
    # Aggregates
    "CoachSummary",
    "ObservationAnalysis",
    "RiskCounts",
    "TrackerAnalysis",
    # Processing
    "FileStat",
    "ProcessingResult",
    "RowDiagnostic",
]

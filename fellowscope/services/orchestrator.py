from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..excel.reader import read_observation_rows, read_tracker_workbook
from ..logging.diagnostics import DiagnosticBuffer
from ..models.analysis import ObservationAnalysis, TrackerAnalysis
from ..models.config_models import AnalysisConfig
from ..models.processing_result import FileStat, ProcessingResult
from ..models.row_diagnostic import UNSUPPORTED_FORMAT, RowDiagnostic
from .errors import UnsupportedFormatError
from .observation import analyze_observations
from .progress import ProgressTracker
from .tracker import analyze_tracker

"""Run orchestration over the uploaded source files.

Each file is decoded and analysed on its own: a failing file contributes one
failed FileStat with its message and never a partial analysis, while the
other file is still processed.
"""

__all__ = [
    "ProcessingError",
    "TRACKER",
    "OBSERVATION",
    "analyze",
    "process_sources",
]

logger = logging.getLogger(__name__)

TRACKER = "tracker"
OBSERVATION = "observation"


class ProcessingError(Exception):
    """Fatal error preventing a run from starting."""


def analyze(data: Any, config: AnalysisConfig | None = None) -> TrackerAnalysis | ObservationAnalysis:
    """Analyse already-decoded input, choosing the pipeline by its shape.

    A mapping of sheet names is a tracker workbook; a sequence of
    header-keyed rows is an observation log.

    Raises:
        UnsupportedFormatError: the input has neither shape
    """
    config = config or AnalysisConfig()
    if isinstance(data, Mapping):
        return analyze_tracker(data, config.tracker)
    if (
        isinstance(data, Sequence)
        and not isinstance(data, (str, bytes))
        and all(isinstance(row, Mapping) for row in data)
    ):
        return analyze_observations(data, config.observation)
    raise UnsupportedFormatError(
        f"unrecognised input of type {type(data).__name__}: expected a workbook "
        "of named sheets or a sequence of header-keyed rows"
    )


def _run_tracker(
    path: Path, config: AnalysisConfig, diagnostics: DiagnosticBuffer | None
) -> TrackerAnalysis:
    workbook = read_tracker_workbook(path)
    return analyze_tracker(workbook, config.tracker, diagnostics=diagnostics, file_name=path.name)


def _run_observation(
    path: Path, config: AnalysisConfig, diagnostics: DiagnosticBuffer | None
) -> ObservationAnalysis:
    rows = read_observation_rows(path)
    return analyze_observations(
        rows, config.observation, diagnostics=diagnostics, file_name=path.name
    )


_RUNNERS = {
    TRACKER: _run_tracker,
    OBSERVATION: _run_observation,
}


def _process_single_file(
    source: str,
    path: Path,
    config: AnalysisConfig,
    diagnostics: DiagnosticBuffer | None,
) -> tuple[FileStat, TrackerAnalysis | ObservationAnalysis | None]:
    start = datetime.now(UTC)
    analysis: TrackerAnalysis | ObservationAnalysis | None = None
    error: str | None = None
    try:
        if not path.exists():
            raise FileNotFoundError(f"file not found: {path}")
        analysis = _RUNNERS[source](path, config, diagnostics)
    except UnsupportedFormatError as e:
        error = str(e)
        if diagnostics is not None:
            diagnostics.append(RowDiagnostic.create(
                source=source, file=path.name, row=-1, reason=UNSUPPORTED_FORMAT, detail=error,
            ))
    except Exception as e:
        # decoder failures (corrupt workbook, ragged CSV) fail this file only
        error = f"Error processing {source} file: {e}"
    elapsed = (datetime.now(UTC) - start).total_seconds()

    if analysis is None:
        return FileStat(
            file_name=path.name,
            source=source,
            status="failed",
            fellows=0,
            elapsed_seconds=elapsed,
            error=error,
        ), None

    fellows = analysis.total_fellows if isinstance(analysis, TrackerAnalysis) else len(analysis.fellows)
    return FileStat(
        file_name=path.name,
        source=source,
        status="success",
        fellows=fellows,
        elapsed_seconds=elapsed,
    ), analysis


def process_sources(
    config: AnalysisConfig,
    tracker_path: Path | None = None,
    observation_path: Path | None = None,
    diagnostics: DiagnosticBuffer | None = None,
) -> ProcessingResult:
    """Analyse the given tracker and/or observation file.

    Raises:
        ProcessingError: neither file was given
    """
    jobs = [(s, p) for s, p in ((TRACKER, tracker_path), (OBSERVATION, observation_path)) if p is not None]
    if not jobs:
        raise ProcessingError("no input files given (expected a tracker and/or observation file)")

    start_time = datetime.now(UTC)
    file_stats: list[FileStat] = []
    results: dict[str, Any] = {}

    with ProgressTracker(len(jobs), description="Analysing files") as progress:
        for source, path in jobs:
            progress.start_file(path)
            stat, analysis = _process_single_file(source, path, config, diagnostics)
            file_stats.append(stat)
            if analysis is not None:
                results[source] = analysis
                logger.debug("%s: %s analysed (%d fellows)", source, path.name, stat.fellows)
            progress.set_postfix(
                success=sum(1 for s in file_stats if s.status == "success"),
                failed=sum(1 for s in file_stats if s.status == "failed"),
            )
            progress.finish_file(success=analysis is not None)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        tracker=results.get(TRACKER),
        observation=results.get(OBSERVATION),
    )

from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a CLI run."""

__all__ = [
    "format_number",
    "render_summary_line",
]


def format_number(value: float) -> str:
    """Render integers without a decimal point and tiny values without exponents."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed}
    fellows={tracker fellows} observed={observed fellows} high_risk={high} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2023, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(ProcessingResult(start_time=t, end_time=t, elapsed_seconds=2.0))
        'SUMMARY files=0/0 success=0 failed=0 fellows=0 observed=0 high_risk=0 elapsed_sec=2'
    """
    fellows = result.tracker.total_fellows if result.tracker is not None else 0
    observed = len(result.observation.fellows) if result.observation is not None else 0
    return (
        f"SUMMARY files={result.total_files}/{result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"fellows={fellows} "
        f"observed={observed} "
        f"high_risk={result.high_risk} "
        f"elapsed_sec={format_number(result.elapsed_seconds)}"
    )

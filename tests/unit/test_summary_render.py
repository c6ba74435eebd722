from __future__ import annotations

import re
from datetime import datetime, timezone

from fellowscope.models.processing_result import FileStat, ProcessingResult
from fellowscope.services.summary import format_number, render_summary_line
from fellowscope.services.tracker import analyze_tracker

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"fellows=([0-9]+)\s+observed=([0-9]+)\s+high_risk=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)

T0 = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
T1 = datetime(2023, 1, 1, 10, 0, 2, tzinfo=timezone.utc)


def _stat(status: str) -> FileStat:
    return FileStat(file_name="f.xlsx", source="tracker", status=status, fellows=0, elapsed_seconds=0.1)


def test_summary_with_tracker(tracker_row, workbook):
    tracker = analyze_tracker(workbook([tracker_row("Ada"), tracker_row("Bola", scores=[4] * 65)]))
    result = ProcessingResult(
        start_time=T0, end_time=T1, elapsed_seconds=2.0,
        file_stats=[_stat("success")], tracker=tracker,
    )
    line = render_summary_line(result)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.group(1) == "1"
    assert m.group(3) == "1"
    assert m.group(5) == "2"
    assert m.group(6) == "0"
    assert m.group(7) == "1"
    assert m.group(8) == "2"


def test_summary_partial_failure():
    result = ProcessingResult(
        start_time=T0, end_time=T1, elapsed_seconds=0.25,
        file_stats=[_stat("success"), _stat("failed")],
    )
    line = render_summary_line(result)
    assert SUMMARY_PATTERN.match(line)
    assert "files=2/2 success=1 failed=1" in line
    assert line.endswith("elapsed_sec=0.25")


def test_format_number():
    assert format_number(0) == "0"
    assert format_number(3.0) == "3"
    assert format_number(0.0012) == "0.0012"
    assert format_number(1.5) == "1.5"

from __future__ import annotations

import json
from pathlib import Path

from fellowscope.logging.diagnostics import DiagnosticBuffer
from fellowscope.models.row_diagnostic import RowDiagnostic

KEYS = {"timestamp", "source", "file", "row", "reason", "detail"}


def test_row_diagnostic_json_line():
    rec = RowDiagnostic.create("tracker", 4, "MISSING_IDENTITY", "blank first name", file="t.xlsx")
    data = json.loads(rec.to_json_line())
    assert set(data) == KEYS
    assert data["row"] == 4
    assert data["timestamp"].endswith("Z")


def test_flush_writes_json_lines(temp_workdir: Path):
    buf = DiagnosticBuffer()
    buf.append(RowDiagnostic.create("tracker", 1, "MISSING_IDENTITY", "blank first name"))
    buf.append(RowDiagnostic.create("observation", -1, "UNSUPPORTED_FORMAT", "bad file"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("logs")
    assert path.name.startswith("diagnostics-")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(set(json.loads(line)) == KEYS for line in lines)
    assert len(buf) == 0


def test_flush_appends_to_same_file(temp_workdir: Path):
    buf = DiagnosticBuffer()
    buf.append(RowDiagnostic.create("tracker", 1, "MISSING_IDENTITY", "x"))
    first = buf.flush()
    buf.append(RowDiagnostic.create("tracker", 2, "MISSING_IDENTITY", "y"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_flush_empty_buffer_writes_nothing(tmp_path: Path):
    buf = DiagnosticBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()

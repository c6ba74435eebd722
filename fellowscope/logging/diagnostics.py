from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.row_diagnostic import RowDiagnostic

"""Diagnostics log buffering.

Rows the engine absorbs (blank identity) and files that fail are buffered as
RowDiagnostic records and written as JSON Lines to
``logs/diagnostics-YYYYMMDD-HHMMSS.log`` (UTC) on flush. The analysis output
itself never carries them.
"""

__all__ = [
    "RowDiagnostic",
    "DiagnosticBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class DiagnosticBuffer:
    """In-memory buffer of RowDiagnostic records. Serial use only."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[RowDiagnostic] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"diagnostics-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> tuple[RowDiagnostic, ...]:
        return tuple(self._records)

    def append(self, record: RowDiagnostic) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp

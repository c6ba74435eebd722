from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""RowDiagnostic model for the optional diagnostics log.

A row that the engine absorbs instead of analysing (blank identity) is
recorded as one JSON Lines entry with a fixed key set. ``row=-1`` marks a
file-level entry where no single row applies.
"""

__all__ = [
    "RowDiagnostic",
    "MISSING_IDENTITY",
    "UNSUPPORTED_FORMAT",
]

MISSING_IDENTITY = "MISSING_IDENTITY"
UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"


@dataclass(frozen=True)
class RowDiagnostic:
    """Structured record of an absorbed row or a failed file.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: ``tracker`` or ``observation``
        file: File name, empty when the engine is called on in-memory rows
        row: 1-based data row number, -1 for file-level entries
        reason: Classification in UPPER_SNAKE_CASE format
        detail: Human readable description
    """
    timestamp: str
    source: str
    file: str
    row: int
    reason: str
    detail: str

    @staticmethod
    def create(source: str, row: int, reason: str, detail: str, file: str = "") -> RowDiagnostic:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return RowDiagnostic(
            timestamp=ts,
            source=source,
            file=file,
            row=row,
            reason=reason,
            detail=detail,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

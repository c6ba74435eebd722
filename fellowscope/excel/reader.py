from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..services.errors import UnsupportedFormatError

"""Workbook / CSV reader.

The tracker source is decoded into every sheet as rows of cells (no header
interpretation; the schema skips label rows itself). The observation source is
decoded from the first sheet, or the CSV, using the first row as header.
Blank cells become None so the engine sees one representation of "missing".
"""

__all__ = [
    "EXCEL_SUFFIXES",
    "CSV_SUFFIXES",
    "read_excel_file",
    "sheet_to_matrix",
    "sheet_to_records",
    "read_tracker_workbook",
    "read_observation_rows",
]

EXCEL_SUFFIXES = {".xlsx", ".xls"}
CSV_SUFFIXES = {".csv"}

UNSUPPORTED_MESSAGE = "Please upload an Excel (.xlsx) or CSV file"


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in EXCEL_SUFFIXES | CSV_SUFFIXES:
        raise UnsupportedFormatError(f"{UNSUPPORTED_MESSAGE}: {path.name}")
    return suffix


def read_excel_file(path: Path, header: int | None = None) -> dict[str, pd.DataFrame]:
    """Read an Excel file returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: Excel file path
    header: header row index passed to pandas (None keeps every row as data)
    """
    dfs: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(path) as xls:
        for name in xls.sheet_names:
            dfs[str(name)] = xls.parse(name, header=header)
    return dfs


def _clean(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if pd.isna(value):
        return None
    return value


def sheet_to_matrix(df: pd.DataFrame) -> list[list[Any]]:
    """Rows of cells in sheet order; fully blank rows are kept so offsets stay aligned."""
    rows: list[list[Any]] = []
    for raw in df.astype(object).itertuples(index=False, name=None):
        rows.append([_clean(v) for v in raw])
    return rows


def sheet_to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Header-keyed rows; fully blank rows are dropped."""
    columns = [str(c).strip() for c in df.columns]
    records: list[dict[str, Any]] = []
    for raw in df.astype(object).itertuples(index=False, name=None):
        row = {col: _clean(v) for col, v in zip(columns, raw, strict=False)}
        if all(v is None for v in row.values()):
            continue
        records.append(row)
    return records


def read_tracker_workbook(path: Path) -> dict[str, list[list[Any]]]:
    """Decode every sheet of a tracker workbook into rows of cells.

    A CSV decodes to a single sheet named after the file, which the tracker
    pipeline then rejects for lacking its required sheet.
    """
    suffix = _check_suffix(path)
    if suffix in CSV_SUFFIXES:
        df = pd.read_csv(
            path, header=None, dtype=object, keep_default_na=False, encoding_errors="replace"
        )
        return {path.stem: sheet_to_matrix(df)}
    return {name: sheet_to_matrix(df) for name, df in read_excel_file(path).items()}


def read_observation_rows(path: Path) -> list[dict[str, Any]]:
    """Decode the observation log (first sheet or CSV) into header-keyed rows."""
    suffix = _check_suffix(path)
    if suffix in CSV_SUFFIXES:
        df = pd.read_csv(
            path, dtype=object, keep_default_na=False, skip_blank_lines=True,
            encoding_errors="replace",
        )
        return sheet_to_records(df)
    with pd.ExcelFile(path) as xls:
        if not xls.sheet_names:
            return []
        df = xls.parse(xls.sheet_names[0], header=0)
    return sheet_to_records(df)

# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from fellowscope.logging.init import reset_logging
from fellowscope.models.config_models import RUBRIC_AREAS, STAKEHOLDER_AREAS, TrackerSchema

SCHEMA = TrackerSchema()
HOLISTIC_HEADER = "Holistic Outcomes"
LEADERSHIP_HEADER = "Leadership Mindsets"


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("FELLOWSCOPE_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """tracker:
  sheet: All Fellows
  header_rows: 3
  tracking_start: 16
  weeks_per_period: 5
observation:
  aliases:
    name: [Fellow, Select Fellows Name]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "fellowscope.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def build_tracker_row(
    first: Any = "Ada",
    surname: Any = "Okafor",
    *,
    gender: Any = "Female",
    fellowship_path: Any = "Teaching Fellow",
    state: Any = "Lagos",
    school: Any = "Ikeja Primary",
    coach: Any = "Coach Bello",
    scores: Sequence[Any] | None = None,
    payments: Sequence[Any] | None = None,
) -> list[Any]:
    """One tracker matrix row in the default layout (94 cells)."""
    slots = SCHEMA.total_week_slots
    scores = list(scores) if scores is not None else [0] * slots
    payments = list(payments) if payments is not None else ["YES"] * SCHEMA.period_count
    row: list[Any] = [None] * (SCHEMA.tracking_start + SCHEMA.period_count * SCHEMA.block_size)
    row[1], row[2], row[3] = first, surname, gender
    row[4], row[5] = "08030000000", "ada@example.org"
    row[6], row[7] = "TF-001", "U-001"
    row[8], row[9], row[10] = fellowship_path, "2022", state
    row[11], row[12] = school, coach
    row[13], row[14], row[15] = "Yes", "2022-09-05", "Active"
    for i in range(SCHEMA.period_count):
        start = SCHEMA.block_start(i)
        for w in range(SCHEMA.weeks_per_period):
            row[start + w] = scores[i * SCHEMA.weeks_per_period + w]
        row[SCHEMA.payment_offset(i)] = payments[i]
    return row


def build_workbook(rows: Sequence[list[Any]], sheet: str = "All Fellows") -> dict[str, list[list[Any]]]:
    header = [["Fellows Tracker"], ["", "First Name", "Surname"], ["", "", ""]]
    return {sheet: header + [list(r) for r in rows]}


def build_observation_row(
    name: Any = "Ada Okafor",
    *,
    observer: Any = "Mr. Eze",
    region: Any = "Lagos",
    school: Any = "Ikeja Primary",
    subject: Any = "Mathematics",
    class_range: Any = "20-30",
    holistic: Any = "",
    leadership: Any = "",
    scores: dict[str, Any] | None = None,
    name_header: str = "Select Fellows Name",
) -> dict[str, Any]:
    row: dict[str, Any] = {
        name_header: name,
        "Observer": observer,
        "Region": region,
        "Name of School": school,
        "Subject": subject,
        "Select the Class Range": class_range,
        HOLISTIC_HEADER: holistic,
        LEADERSHIP_HEADER: leadership,
    }
    for area in RUBRIC_AREAS + STAKEHOLDER_AREAS:
        row[area] = None
    row.update(scores or {})
    return row


@pytest.fixture()
def tracker_row() -> Callable[..., list[Any]]:
    return build_tracker_row


@pytest.fixture()
def workbook() -> Callable[..., dict[str, list[list[Any]]]]:
    return build_workbook


@pytest.fixture()
def observation_row() -> Callable[..., dict[str, Any]]:
    return build_observation_row


def write_tracker_xlsx(path: Path, rows: Sequence[list[Any]], sheet: str = "All Fellows") -> Path:
    wb = build_workbook(rows, sheet=sheet)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, data in wb.items():
            pd.DataFrame(data).to_excel(writer, sheet_name=name, header=False, index=False)
    return path


def write_observation_csv(path: Path, rows: Sequence[dict[str, Any]]) -> Path:
    pd.DataFrame(list(rows)).to_csv(path, index=False)
    return path


@pytest.fixture()
def tracker_xlsx() -> Callable[..., Path]:
    return write_tracker_xlsx


@pytest.fixture()
def observation_csv() -> Callable[..., Path]:
    return write_observation_csv

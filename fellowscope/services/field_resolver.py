from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

import pandas as pd

"""Field resolution over loosely typed raw rows.

A raw row is either a header-keyed mapping (observation log, CSV) or a
positional sequence of cells (tracker matrix). Every canonical field declares
an ordered alias list; the first alias holding a non-blank value wins and an
unresolved field falls back to the field's declared default.
"""

__all__ = [
    "RawRow",
    "FieldSpec",
    "UNKNOWN",
    "cell_text",
    "parse_leading_int",
    "resolve_field",
]

RawRow = Union[Mapping[str, Any], Sequence[Any]]
Alias = Union[str, int]

UNKNOWN = "Unknown"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class FieldSpec:
    """Canonical field with its accepted raw names or offsets, in precedence order."""
    name: str
    aliases: tuple[Alias, ...]
    default: str = ""

    @classmethod
    def categorical(cls, name: str, *aliases: Alias) -> FieldSpec:
        return cls(name=name, aliases=tuple(aliases), default=UNKNOWN)

    @classmethod
    def text(cls, name: str, *aliases: Alias) -> FieldSpec:
        return cls(name=name, aliases=tuple(aliases), default="")


def cell_text(value: Any) -> str:
    """Render a raw cell as stripped text; missing cells become ``""``."""
    if value is None or isinstance(value, bool):
        return "" if value is None else str(value)
    if not isinstance(value, str) and pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        # Excel hands whole numbers (phone numbers, ids) back as floats
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value).strip()


def parse_leading_int(value: Any) -> int | None:
    """Parse the leading integer of a cell (``"3.7"`` -> 3, ``"4 wks"`` -> 4).

    Returns None when the cell carries no integer at all.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    m = _LEADING_INT.match(cell_text(value))
    if m is None:
        return None
    return int(m.group(1))


def _lookup(row: RawRow, alias: Alias) -> Any:
    if isinstance(row, Mapping):
        return row.get(alias)
    if isinstance(alias, int) and 0 <= alias < len(row):
        return row[alias]
    return None


def resolve_field(row: RawRow, spec: FieldSpec) -> str:
    """Return the first non-blank value among ``spec.aliases`` or ``spec.default``."""
    for alias in spec.aliases:
        text = cell_text(_lookup(row, alias))
        if text:
            return text
    return spec.default

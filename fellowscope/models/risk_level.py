from __future__ import annotations

from enum import Enum

"""Risk tier labels shared by both sources.

The string values are reproduced verbatim in the output; the dashboard
switches on them.
"""


class RiskLevel(str, Enum):
    HIGH = "High Risk"
    MEDIUM = "Medium Risk"
    LOW = "Low Risk"
    NO_DATA = "No Data"

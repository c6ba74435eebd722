from __future__ import annotations

import pytest

from fellowscope.models.risk_level import RiskLevel
from fellowscope.services.risk import attendance_risk, low_score_percent, observation_risk


@pytest.mark.parametrize(
    "rate, level",
    [
        (0.0, RiskLevel.HIGH),
        (39.99, RiskLevel.HIGH),
        (40.0, RiskLevel.MEDIUM),
        (45.0, RiskLevel.MEDIUM),
        (50.0, RiskLevel.MEDIUM),
        (50.01, RiskLevel.LOW),
        (100.0, RiskLevel.LOW),
    ],
)
def test_attendance_boundaries(rate, level):
    assert attendance_risk(rate) is level


def test_observation_high_risk():
    average, level = observation_risk([1, 1, 5, 5])
    assert average == 3.0
    assert level is RiskLevel.HIGH
    assert low_score_percent([1, 1, 5, 5]) == 50


def test_observation_medium_and_low():
    # 1 of 4 low -> 25%
    assert observation_risk([2, 3, 4, 5])[1] is RiskLevel.MEDIUM
    # exactly 40% is not High
    assert observation_risk([1, 2, 3, 4, 5])[1] is RiskLevel.MEDIUM
    # exactly 20% is Low
    assert observation_risk([1, 3, 4, 5, 5])[1] is RiskLevel.LOW
    assert observation_risk([3, 4, 5])[1] is RiskLevel.LOW


def test_observation_no_data():
    assert observation_risk([]) == (0.0, RiskLevel.NO_DATA)


def test_risk_labels_are_contract_strings():
    assert [level.value for level in RiskLevel] == [
        "High Risk", "Medium Risk", "Low Risk", "No Data",
    ]

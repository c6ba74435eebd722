from __future__ import annotations

from pathlib import Path

import pytest

from fellowscope.config.loader import ConfigError, load_config
from fellowscope.models.config_models import DEFAULT_PERIODS, AnalysisConfig


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.tracker.sheet_name == "All Fellows"
    assert cfg.tracker.period_names == DEFAULT_PERIODS
    assert cfg.observation.aliases["name"] == ("Fellow", "Select Fellows Name")
    # untouched aliases keep their defaults
    assert cfg.observation.aliases["observer"] == ("Observer", "Observer Name")


def test_load_config_none_gives_defaults():
    assert load_config(None) == AnalysisConfig()


def test_load_config_empty_file(temp_workdir: Path):
    p = temp_workdir / "config" / "empty.yml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == AnalysisConfig()


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("tracker: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_wrong_type(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("header_rows: 3", "header_rows: three")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_fields_require_first_name(write_config: Path):
    write_config.write_text("tracker:\n  fields:\n    surname: 2\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_custom_layout(write_config: Path):
    write_config.write_text(
        "tracker:\n"
        "  sheet: Roster\n"
        "  tracking_start: 4\n"
        "  weeks_per_period: 4\n"
        "  periods: [Jan, Feb]\n"
        "  fields:\n"
        "    first_name: 0\n"
        "    coach: 1\n"
        "observation:\n"
        "  rubric_areas: [Care]\n"
        "  stakeholder_areas: []\n",
        encoding="utf-8",
    )
    cfg = load_config(write_config)
    assert cfg.tracker.sheet_name == "Roster"
    assert cfg.tracker.total_week_slots == 8
    assert cfg.tracker.block_start(1) == 9
    assert cfg.tracker.field_offsets == {"first_name": 0, "coach": 1}
    assert cfg.observation.all_areas == ("Care",)

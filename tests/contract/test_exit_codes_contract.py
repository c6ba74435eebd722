from __future__ import annotations

import re
from pathlib import Path
from unittest.mock import patch

from fellowscope.cli import main as cli_main
from fellowscope.services.errors import UnsupportedFormatError

"""Exit code contract: 0 all success, 1 fatal before analysis, 2 any file failed."""


def test_exit_code_fatal_no_inputs(temp_workdir: Path, capsys):
    code = cli_main([])
    assert code == 1
    assert "ERROR processing: no input files given" in capsys.readouterr().out


def test_exit_code_fatal_bad_config(temp_workdir: Path, write_config: Path, capsys):
    write_config.write_text("unknown_key: 1\n", encoding="utf-8")
    code = cli_main(["--observations", "whatever.csv"])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, tracker_row, workbook, observation_row, capsys):
    tracker = temp_workdir / "data" / "tracker.xlsx"
    obs = temp_workdir / "data" / "obs.xlsx"
    tracker.write_bytes(b"")
    obs.write_bytes(b"")
    with patch("fellowscope.services.orchestrator.read_tracker_workbook") as read_tracker, \
            patch("fellowscope.services.orchestrator.read_observation_rows") as read_obs:
        read_tracker.return_value = workbook([tracker_row()])
        read_obs.return_value = [observation_row(scores={"Care": 4})]
        code = cli_main(["--tracker", str(tracker), "--observations", str(obs)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2/2 success=2 failed=0" in out


def test_exit_code_partial_failure(temp_workdir: Path, observation_row, capsys):
    tracker = temp_workdir / "data" / "tracker.xlsx"
    obs = temp_workdir / "data" / "obs.xlsx"
    tracker.write_bytes(b"")
    obs.write_bytes(b"")
    with patch("fellowscope.services.orchestrator.read_tracker_workbook") as read_tracker, \
            patch("fellowscope.services.orchestrator.read_observation_rows") as read_obs:
        read_tracker.side_effect = UnsupportedFormatError("Please upload an Excel (.xlsx) or CSV file")
        read_obs.return_value = [observation_row(scores={"Care": 4})]
        code = cli_main(["--tracker", str(tracker), "--observations", str(obs)])
    out = capsys.readouterr().out
    assert code == 2
    match = re.search(r"failed=(\d+)", out)
    assert match is not None, f"No 'failed=' found in output: {out}"
    assert int(match.group(1)) == 1

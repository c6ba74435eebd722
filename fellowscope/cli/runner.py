from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from fellowscope.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from fellowscope.logging.diagnostics import DiagnosticBuffer
from fellowscope.logging.init import log_summary, setup_logging
from fellowscope.services.orchestrator import ProcessingError, process_sources
from fellowscope.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load ``.env`` (``FELLOWSCOPE_CONFIG`` may name the config file)
- Load config (``--config`` > env > ``config/fellowscope.yml`` when present > defaults)
- Analyse the tracker and/or observation file
- Log one ERROR line per failed file, then the SUMMARY line
- Optionally write the analysis JSON and the diagnostics log
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV = "FELLOWSCOPE_CONFIG"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="fellowscope",
        description="Fellow attendance and observation analytics",
    )
    p.add_argument("--tracker", type=Path, help="Fellows tracker workbook (.xlsx)")
    p.add_argument("--observations", type=Path, help="Observation log (.xlsx or .csv)")
    p.add_argument("--config", type=Path, help="YAML config overriding the source layouts")
    p.add_argument("--output", type=Path, help="Write the analysis as JSON to this path")
    p.add_argument("--diagnostics", action="store_true", help="Write skipped rows to logs/diagnostics-*.log")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet names & first rows then exit")
    return p.parse_args(argv)


def _resolve_config_path(arg: Path | None) -> Path | None:
    if arg is not None:
        return arg
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def _inspect_data(paths: list[Path]) -> int:
    from fellowscope.excel.reader import read_tracker_workbook

    for f in paths:
        print(f"FILE: {f.name}")
        try:
            sheets = read_tracker_workbook(f)
        except Exception as e:
            print(f"  read_error: {e}")
            continue
        for sname, rows in sheets.items():
            print(f"  SHEET: {sname} rows={len(rows)}")
            for r in rows[:3]:
                print("    ", [v.isoformat() if hasattr(v, "isoformat") else v for v in r])
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    load_dotenv(dotenv_path=Path(".env"), override=False)

    try:
        cfg = load_config(_resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data([p for p in (args.tracker, args.observations) if p is not None])

    diagnostics = DiagnosticBuffer() if args.diagnostics else None
    try:
        result = process_sources(
            cfg,
            tracker_path=args.tracker,
            observation_path=args.observations,
            diagnostics=diagnostics,
        )
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for stat in result.file_stats:
        if stat.status == "failed":
            logger.error(f"{stat.source}: {stat.file_name}: {stat.error}")
        else:
            logger.info(f"{stat.source}: {stat.file_name} fellows={stat.fellows}")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(
            json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
        )
        logger.info(f"analysis written to {args.output}")

    if diagnostics is not None:
        written = diagnostics.flush()
        if written is not None:
            logger.info(f"diagnostics written to {written}")

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL

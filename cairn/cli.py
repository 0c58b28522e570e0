"""CLI entry point: reads a JSON report on stdin, drives the engine, reports to stdout."""

import json
import sys

from .config import load_config
from .engine import run_engine
from .errors import CairnError
from .measures import MeasureRepository
from .report import parse_report
from .stats import RunStats


def main() -> None:
    report_text = sys.stdin.read()
    if not report_text.strip():
        print("cairn: no report provided on stdin", file=sys.stderr)
        sys.exit(1)

    config = load_config()
    repository = MeasureRepository()
    run_stats = RunStats()
    try:
        report = parse_report(report_text)
        lines = list(
            run_engine(report, config=config, repository=repository, stats=run_stats)
        )
    except CairnError as exc:
        print(f"cairn: {exc}", file=sys.stderr)
        sys.exit(1)

    if config.output_format == "json":
        print(json.dumps(repository.as_dict(report.root), indent=2))
        return
    if config.verbose:
        for line in lines:
            print(line)
    for line in run_stats.format_summary():
        print(line)

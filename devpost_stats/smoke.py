# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Smoke-test helpers.

Run via:

    python -m devpost_stats.smoke

This is intentionally lightweight: it validates the configuration and runs the
counting pipeline on a small built-in sample export (no input file needed).
"""

import argparse
from pathlib import Path

from devpost_stats.config import ConfigError, load_config
from devpost_stats.output import render_report
from devpost_stats.stats import aggregate
from devpost_stats.submissions import map_rows, parse_csv


SAMPLE_CSV = "\n".join(
    [
        '"Submission Title","Desired Prizes","College/Universities Of Team Members","Built With"',
        '"Plant Pal","Best UI, Best Hack","Ohio State University","React, Node"',
        '"Queue Less","Best Hack","Ohio State University, Kent State University","Python, Flask, React"',
        '"Late Entry","","Kent State University"',
        "",
    ]
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Devpost Stats smoke test")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to devpost-stats.yaml (default: built-in configuration)",
    )
    parser.add_argument(
        "--print-report",
        action="store_true",
        help="Print the full report JSON",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        cfg = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"CONFIG ERROR: {exc}")
        return 2

    # The built-in sample is always comma-delimited and double-quoted.
    rows = parse_csv(SAMPLE_CSV)
    submissions = map_rows(rows)
    report = aggregate(submissions, fields=cfg.fields, separator=cfg.separator)

    print(f"Config: {cfg.config_path or '(built-in defaults)'}")
    print(f"Submissions: {report.count}")
    for spec in cfg.fields:
        table = report.tables.get(spec.tag, {})
        print(f"{spec.tag}: {len(table)} distinct, {sum(table.values())} total")

    # Sanity checks on the invariants the report must satisfy.
    if report.count != len(submissions):
        print(f"INTERNAL ERROR: count {report.count} != {len(submissions)} submissions")
        return 3

    bad = [tag for tag, table in report.tables.items() if any(n < 1 or not k.strip() for k, n in table.items())]
    if bad:
        print(f"INTERNAL ERROR: invalid frequency tables: {bad}")
        return 3

    if bool(args.print_report):
        print(render_report(report, indent=cfg.indent))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

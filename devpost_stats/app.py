from __future__ import annotations

"""
CLI entrypoint for the Devpost statistics tool.

This module parses the command line, loads the optional configuration and runs
the read -> aggregate -> output pipeline. All pipeline errors are mapped to an
exit code and a single error line on stderr.
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from devpost_stats.config import ConfigError, find_config_path, load_config
from devpost_stats.errors import (
	AggregationError,
	ArgumentError,
	InputNotFoundError,
	ParseError,
	WriteError,
)
from devpost_stats.output import output_report
from devpost_stats.progress import ConsoleProgress, NullProgress, ProgressReporter
from devpost_stats.stats import build_stats


EXAMPLES = """\
examples:
  $ devpost-stats ../path/to.csv
    { ...someStats }

  $ devpost-stats ../path/to.csv -o ./path/to/output.json
    ✔ Statistics saved to file
"""


class _ArgumentParser(argparse.ArgumentParser):
	"""Argument parser that raises instead of exiting on invalid input."""

	def error(self, message: str) -> None:  # type: ignore[override]
		raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
	"""
	Build the argument parser.

	Returns:
		The configured ArgumentParser instance.
	"""
	parser = _ArgumentParser(
		prog="devpost-stats",
		description=(
			"Count desired prizes, team member schools and technologies in a Devpost submissions CSV export."
		),
		epilog=EXAMPLES,
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument("csv", help="Path to the Devpost submissions CSV export")
	parser.add_argument(
		"--output-file",
		"-o",
		help="Specify a path and JSON file to save the statistics to",
	)
	parser.add_argument(
		"--config",
		"-c",
		help=(
			"Path to a devpost-stats.yaml config. If omitted, $DEVPOST_STATS_CONFIG or "
			"./devpost-stats.yaml is used when present."
		),
	)
	parser.add_argument(
		"--indent",
		type=int,
		default=None,
		help="JSON indentation (0 for compact output, default from config: 2)",
	)
	parser.add_argument(
		"--quiet",
		"-q",
		action="store_true",
		help="Do not print progress messages",
	)
	return parser


def parse_arguments(parser: argparse.ArgumentParser, argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse and check the command line.

	Args:
		parser:
			Parser from `build_parser()`.
		argv:
			Argument list without program name. Defaults to sys.argv.

	Returns:
		The parsed arguments.

	Raises:
		ArgumentError:
			If the arguments are missing, superfluous or invalid.
	"""
	args = parser.parse_args(argv)

	if not isinstance(args.csv, str) or not args.csv.strip():
		raise ArgumentError("<csv> must be a non-empty path")
	if args.output_file is not None and not args.output_file.strip():
		raise ArgumentError("--output-file must be a non-empty path")
	if args.indent is not None and args.indent < 0:
		raise ArgumentError("--indent must be >= 0")

	return args


def main(argv: list[str] | None = None) -> int:
	"""
	Run the CLI.

	Args:
		argv:
			Optional argument list (without program name). If omitted, argparse
			reads from sys.argv.

	Returns:
		Process exit code. `0` on success or after `--help`, `1` if the input
		is missing, cannot be parsed or the report cannot be written, `2` on
		usage and configuration errors.
	"""
	load_dotenv()

	parser = build_parser()
	try:
		args = parse_arguments(parser, argv)
	except ArgumentError as exc:
		print(f"error: {exc}", file=sys.stderr)
		parser.print_help(sys.stderr)
		return 2
	except SystemExit as exc:
		# argparse exits after printing --help
		return exc.code if isinstance(exc.code, int) else 0

	progress: ProgressReporter = NullProgress() if args.quiet else ConsoleProgress()

	try:
		config = load_config(find_config_path(args.config))
		indent = args.indent if args.indent is not None else config.indent

		report = build_stats(Path(args.csv), config, progress)
		destination = Path(args.output_file) if args.output_file else None
		output_report(report, destination, indent=indent, progress=progress)
		return 0
	except ConfigError as exc:
		print(f"error: {exc}", file=sys.stderr)
		return 2
	except (InputNotFoundError, ParseError, AggregationError, WriteError) as exc:
		print(f"error: {exc}", file=sys.stderr)
		return 1


if __name__ == "__main__":
	raise SystemExit(main())

# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Statistics aggregation.

Every tracked field runs through the same pipeline: extract the tokens of the
column from all submissions, then count them. The pipelines only read the
shared submission list and each one writes its own frequency table, so their
order does not matter. The tables are merged into a single `StatsReport`
together with the submission count and the submissions themselves.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from devpost_stats.config import (
    DEFAULT_SEPARATOR,
    PRIZES_KEY,
    RESERVED_TAGS,
    SCHOOLS_KEY,
    TECHNOLOGIES_KEY,
    TRACKED_FIELDS,
    FieldSpec,
    StatsConfig,
)
from devpost_stats.counter import FrequencyTable, count_tokens
from devpost_stats.errors import AggregationError, InputNotFoundError
from devpost_stats.progress import NullProgress, ProgressReporter
from devpost_stats.submissions import Record, read_submissions
from devpost_stats.tokenizer import extract_tokens


__all__ = [
    "PRIZES_KEY",
    "SCHOOLS_KEY",
    "TECHNOLOGIES_KEY",
    "TRACKED_FIELDS",
    "StatsReport",
    "aggregate",
    "build_stats",
    "tally_field",
]


@dataclass(frozen=True)
class StatsReport:
    """
    Aggregated submission statistics.

    Attributes:
        count:
            Number of submissions.
        submissions:
            The submission records the statistics were computed from.
        tables:
            Frequency tables keyed by field tag, in tracked field order.
    """

    count: int
    submissions: list[Record]
    tables: dict[str, FrequencyTable] = field(default_factory=dict)

    # Holds lists and dicts, so instances compare by value but are unhashable.
    __hash__ = None  # type: ignore[assignment]

    @property
    def universities(self) -> FrequencyTable:
        return self.tables.get("universities", {})

    @property
    def technologies(self) -> FrequencyTable:
        return self.tables.get("technologies", {})

    @property
    def prizes(self) -> FrequencyTable:
        return self.tables.get("prizes", {})

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the report."""

        out: dict[str, Any] = {
            "count": self.count,
            "submissions": [dict(record) for record in self.submissions],
        }
        for tag, table in self.tables.items():
            out[tag] = dict(table)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatsReport:
        """Rebuild a report from the structure produced by `to_dict()`.

        Raises:
            ValueError:
                If `count` or `submissions` is missing or has the wrong type.
        """

        count = data.get("count")
        submissions = data.get("submissions")
        if not isinstance(count, int) or isinstance(count, bool):
            raise ValueError("Stats report 'count' must be an integer")
        if not isinstance(submissions, list):
            raise ValueError("Stats report 'submissions' must be a list")

        tables = {
            tag: {str(k): int(v) for k, v in table.items()}
            for tag, table in data.items()
            if tag not in RESERVED_TAGS and isinstance(table, dict)
        }

        return cls(
            count=count,
            submissions=[MappingProxyType(dict(record)) for record in submissions],
            tables=tables,
        )


def tally_field(
    submissions: Sequence[Record],
    spec: FieldSpec,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> FrequencyTable:
    """Count the tokens of a single tracked field."""

    return count_tokens(extract_tokens(submissions, spec.key, separator=separator))


def aggregate(
    submissions: Iterable[Record],
    *,
    fields: Sequence[FieldSpec] = TRACKED_FIELDS,
    separator: str = DEFAULT_SEPARATOR,
    progress: ProgressReporter | None = None,
) -> StatsReport:
    """
    Build the statistics report for a set of submissions.

    Args:
        submissions:
            Submission records.
        fields:
            Tracked fields. Each produces one frequency table under its tag.
        separator:
            Literal separator between values of a multi-valued cell.
        progress:
            Optional progress reporter.

    Returns:
        The finished report.

    Raises:
        AggregationError:
            If any field cannot be counted. No partial report is returned.
    """

    progress = progress or NullProgress()
    records = list(submissions)

    tables: dict[str, FrequencyTable] = {}
    for spec in fields:
        name = spec.display_name
        progress.start(f"Getting {name} from submissions")
        try:
            tables[spec.tag] = tally_field(records, spec, separator=separator)
        except AggregationError:
            progress.fail(f"Failed to get {name}")
            raise
        progress.succeed(f"{name[:1].upper()}{name[1:]} successful!")

    return StatsReport(count=len(records), submissions=records, tables=tables)


def build_stats(
    csv_path: Path,
    config: StatsConfig | None = None,
    progress: ProgressReporter | None = None,
) -> StatsReport:
    """
    Read a CSV export and aggregate its statistics.

    Args:
        csv_path:
            Path to the CSV file. Relative paths are resolved against the
            current directory.
        config:
            Run configuration. Defaults to the built-in configuration.
        progress:
            Optional progress reporter.

    Returns:
        The finished report.

    Raises:
        InputNotFoundError:
            If the CSV file does not exist.
        ParseError:
            If the CSV file cannot be read or parsed.
        AggregationError:
            If a field cannot be counted.
    """

    config = config or StatsConfig()
    progress = progress or NullProgress()

    path = csv_path.resolve()
    if not path.exists():
        raise InputNotFoundError(path)

    progress.start(f"Reading submissions from {path}")
    try:
        submissions = read_submissions(path, config.csv)
    except Exception:
        progress.fail("Failed to read submissions")
        raise
    progress.succeed(f"Read {len(submissions)} submission(s)")

    return aggregate(
        submissions,
        fields=config.fields,
        separator=config.separator,
        progress=progress,
    )

# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""CSV submission reader.

Rules:
- The first row holds the column headers.
- Every following row becomes one read-only record keyed by header.
- Column counts are relaxed: short rows leave trailing headers out of the
  record, surplus cells of long rows are dropped.
- Fully blank lines are ignored and do not count as submissions, so the
  submission count can be lower than the number of lines after the header.
- A quote character may only open a field. A stray quote inside an unquoted
  field (`The "Best" App`) is rejected like any other malformed quoting.

The reader only parses and maps rows. Which columns matter is decided by the
stats aggregator.
"""

import csv
import io
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

from devpost_stats.config import CsvDialect
from devpost_stats.errors import ParseError


Record = Mapping[str, str]


def parse_csv(text: str, *, delimiter: str = ",", quotechar: str = '"') -> list[list[str]]:
    """Split CSV text into rows of cell strings.

    Args:
        text:
            Complete CSV document.
        delimiter:
            Field delimiter.
        quotechar:
            Quote character.

    Returns:
        All non-blank rows, header row included.

    Raises:
        ParseError:
            If the quoting is malformed.
    """

    _check_quotes(text, delimiter=delimiter, quotechar=quotechar)

    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=delimiter,
        quotechar=quotechar,
        strict=True,
    )

    rows: list[list[str]] = []
    try:
        for row in reader:
            if not row:
                continue
            rows.append(row)
    except csv.Error as exc:
        raise ParseError(str(exc), line=reader.line_num) from exc

    return rows


def _check_quotes(text: str, *, delimiter: str, quotechar: str) -> None:
    """Reject quote characters that appear inside an unquoted field.

    The `csv` module keeps such quotes as literal text, even in strict mode.

    Raises:
        ParseError:
            On the first stray quote, with its line number.
    """

    line = 1
    field_start = True
    in_quotes = False
    idx = 0

    while idx < len(text):
        ch = text[idx]
        if in_quotes:
            if ch == quotechar:
                if text[idx + 1 : idx + 2] == quotechar:
                    # Escaped quote ("") inside a quoted field.
                    idx += 1
                else:
                    in_quotes = False
        elif ch == quotechar:
            if not field_start:
                raise ParseError("Invalid opening quote in unquoted field", line=line)
            in_quotes = True

        if ch == "\n":
            line += 1
        field_start = not in_quotes and ch in (delimiter, "\n", "\r")
        idx += 1


def map_rows(rows: Sequence[Sequence[str]]) -> list[Record]:
    """Zip data rows against the header row.

    Args:
        rows:
            Parsed rows; the first one is the header.

    Returns:
        One immutable record per data row, in file order. An empty input
        yields an empty list.
    """

    if not rows:
        return []

    headers = list(rows[0])
    # zip() stops at the shorter side, which gives the relaxed column count.
    return [MappingProxyType(dict(zip(headers, row))) for row in rows[1:]]


def read_submissions(path: Path, dialect: CsvDialect | None = None) -> list[Record]:
    """Read a CSV export into a list of submission records.

    Args:
        path:
            CSV file path.
        dialect:
            CSV options. Defaults to comma-delimited, double-quoted UTF-8.

    Returns:
        The submission records.

    Raises:
        ParseError:
            If the file cannot be read or decoded, or the CSV is malformed.
    """

    dialect = dialect or CsvDialect()

    try:
        text = path.read_text(encoding=dialect.encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise ParseError(f"Failed to read CSV file: {exc}", path=path) from exc

    try:
        rows = parse_csv(text, delimiter=dialect.delimiter, quotechar=dialect.quote)
    except ParseError as exc:
        raise ParseError(exc.message, path=path, line=exc.line) from exc

    return map_rows(rows)

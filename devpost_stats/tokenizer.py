# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Multi-value cell tokenizer."""

from collections.abc import Iterable, Mapping
from typing import Any

from devpost_stats.config import DEFAULT_SEPARATOR
from devpost_stats.errors import AggregationError


def split_cell(value: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split one cell into trimmed, non-empty tokens.

    Repeated values are kept, so `"A, A"` yields two tokens.
    """

    if not value.strip():
        return []

    return [piece.strip() for piece in value.split(separator) if piece.strip()]


def extract_tokens(
    records: Iterable[Mapping[str, Any]],
    field_key: str,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> list[str]:
    """Collect the tokens of one column across all records.

    Args:
        records:
            Submission records. They are only read.
        field_key:
            Column header to read.
        separator:
            Literal separator between values of a cell.

    Returns:
        Tokens in record order. Missing and blank cells contribute nothing.

    Raises:
        AggregationError:
            If a cell value is not a string.
    """

    tokens: list[str] = []
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise AggregationError(
                f"Submission {idx + 1} must be a mapping, got {type(record).__name__}"
            )

        value = record.get(field_key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise AggregationError(
                f"Field '{field_key}' of submission {idx + 1} must be a string, "
                f"got {type(value).__name__}"
            )
        tokens.extend(split_cell(value, separator))

    return tokens

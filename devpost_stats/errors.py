# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Error types raised by the statistics pipeline.

Each error maps to one failure class the CLI reports to the user. Configuration
errors live in `devpost_stats.config` next to the code that raises them.
"""

from dataclasses import dataclass
from pathlib import Path


class ArgumentError(ValueError):
    """Raised for invalid command line input (missing or extra arguments)."""

    pass


class InputNotFoundError(FileNotFoundError):
    """Raised when the CSV input file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'File "{path}" does not exist')

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class ParseError(RuntimeError):
    """Raised when the CSV input cannot be read or parsed."""

    message: str
    path: Path | None = None
    line: int | None = None

    def __str__(self) -> str:
        if self.path is not None:
            if self.line is not None:
                return f"{self.path}:{self.line}: {self.message}"
            return f"{self.path}: {self.message}"

        if self.line is not None:
            return f"line {self.line}: {self.message}"

        return self.message


class AggregationError(RuntimeError):
    """Raised when a field pipeline cannot produce its frequency table."""

    pass


class WriteError(RuntimeError):
    """Raised when the report cannot be saved to the output file.

    The message is always the same; the failing path and the underlying
    exception are kept as attributes (and as `__cause__` when raised with
    `raise ... from`).
    """

    MESSAGE = "Unable to save stats to file!"

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        self.message = self.MESSAGE
        self.path = path
        self.cause = cause
        super().__init__(self.MESSAGE)

    def __str__(self) -> str:
        if self.cause is None:
            return f"{self.message} ({self.path})"
        return f"{self.message} ({self.path}: {self.cause})"

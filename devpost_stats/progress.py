# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Progress reporting.

Pipeline steps announce what they are doing through a `ProgressReporter` that
is passed in by the caller. The default reporter is silent; the CLI uses a
console reporter that writes status lines to stderr so the JSON report on
stdout stays machine-readable.
"""

import sys
from typing import Protocol, TextIO


class ProgressReporter(Protocol):
    """
    Interface for step-wise progress output.

    Each step is announced with `start()` and finished with either `succeed()`
    or `fail()`.
    """

    def start(self, message: str) -> None:
        """Announce that a step has started."""

    def succeed(self, message: str) -> None:
        """Report that the current step finished successfully."""

    def fail(self, message: str) -> None:
        """Report that the current step failed."""


class NullProgress:
    """Progress reporter that discards all messages."""

    def start(self, message: str) -> None:
        _ = message

    def succeed(self, message: str) -> None:
        _ = message

    def fail(self, message: str) -> None:
        _ = message


class ConsoleProgress:
    """Write one status line per progress event.

    Args:
        stream:
            Target stream. Defaults to `sys.stderr` at the time of each write,
            so redirection (e.g. by test harnesses) is honored.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def start(self, message: str) -> None:
        self._write("-", message)

    def succeed(self, message: str) -> None:
        self._write("✔", message)

    def fail(self, message: str) -> None:
        self._write("✖", message)

    def _write(self, symbol: str, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        print(f"{symbol} {message}", file=stream, flush=True)

# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Report output.

The finished report is either printed to stdout or saved as a JSON file. Both
paths use the same JSON rendering, so a saved file and the printed output are
interchangeable.
"""

import json
import sys
from pathlib import Path
from typing import TextIO

from devpost_stats.errors import WriteError
from devpost_stats.progress import NullProgress, ProgressReporter
from devpost_stats.stats import StatsReport


def render_report(report: StatsReport, *, indent: int = 2) -> str:
    """
    Render a report as JSON text.

    Args:
        report:
            The finished report.
        indent:
            Indentation width. `0` renders compact JSON on a single line.

    Returns:
        The JSON document.
    """

    return json.dumps(
        report.to_dict(),
        ensure_ascii=False,
        indent=indent or None,
    )


def save_report(report: StatsReport, outfile: Path, *, indent: int = 2) -> Path:
    """
    Write a report to a JSON file.

    Missing parent directories are created. An existing file is overwritten.

    Args:
        report:
            The finished report.
        outfile:
            Destination path.
        indent:
            JSON indentation.

    Returns:
        The resolved destination path.

    Raises:
        WriteError:
            If the file cannot be written.
    """

    dest = outfile.resolve()
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(render_report(report, indent=indent) + "\n", encoding="utf-8")
    except OSError as exc:
        raise WriteError(dest, exc) from exc

    return dest


def output_report(
    report: StatsReport,
    destination: Path | None = None,
    *,
    indent: int = 2,
    progress: ProgressReporter | None = None,
    stream: TextIO | None = None,
) -> Path | None:
    """
    Deliver a report to its destination.

    Args:
        report:
            The finished report.
        destination:
            Output file path. If None, the report is printed instead.
        indent:
            JSON indentation.
        progress:
            Optional progress reporter (only used when writing a file).
        stream:
            Stream for printed output. Defaults to `sys.stdout`.

    Returns:
        The resolved output path, or None if the report was printed.

    Raises:
        WriteError:
            If the output file cannot be written.
    """

    if destination is None:
        print(render_report(report, indent=indent), file=stream if stream is not None else sys.stdout)
        return None

    progress = progress or NullProgress()
    progress.start("Writing statistics to file")
    try:
        dest = save_report(report, destination, indent=indent)
    except WriteError:
        progress.fail("Unable to save statistics")
        raise
    progress.succeed(f"Statistics saved to file: {dest}")
    return dest

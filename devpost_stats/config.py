# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

The tool runs fine without any configuration. An optional YAML file can adjust
the CSV dialect, the multi-value separator, the JSON indentation and the list
of tracked fields. This module reads that file and turns it into a typed,
validated `StatsConfig` object.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


CONFIG_ENV_VAR = "DEVPOST_STATS_CONFIG"
DEFAULT_CONFIG_NAME = "devpost-stats.yaml"

# Report keys that are not frequency tables and cannot be used as field tags.
RESERVED_TAGS = frozenset({"count", "submissions"})


@dataclass(frozen=True)
class FieldSpec:
    """
    A multi-valued CSV column whose tokens are counted.

    Attributes:
        key:
            CSV header name of the column.
        tag:
            Key of the frequency table in the stats report.
        label:
            Human-readable name used in progress messages.
    """

    key: str
    tag: str
    label: str = ""

    @property
    def display_name(self) -> str:
        return self.label or self.tag


# Devpost export column names.
PRIZES_KEY = "Desired Prizes"
SCHOOLS_KEY = "College/Universities Of Team Members"
TECHNOLOGIES_KEY = "Built With"

TRACKED_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(key=SCHOOLS_KEY, tag="universities", label="university count"),
    FieldSpec(key=TECHNOLOGIES_KEY, tag="technologies", label="technology count"),
    FieldSpec(key=PRIZES_KEY, tag="prizes", label="submissions per prize"),
)

DEFAULT_SEPARATOR = ", "


@dataclass(frozen=True)
class CsvDialect:
    """
    CSV reading options.

    Attributes:
        delimiter:
            Single-character field delimiter.
        quote:
            Single-character quote character.
        encoding:
            Text encoding of the input file. The default `utf-8-sig` also
            accepts plain UTF-8 without a byte order mark.
    """

    delimiter: str = ","
    quote: str = '"'
    encoding: str = "utf-8-sig"


@dataclass(frozen=True)
class StatsConfig:
    """
    Parsed configuration for a statistics run.

    Attributes:
        config_path:
            Path of the YAML file this config was loaded from, or None when the
            built-in defaults are used.
        fields:
            Tracked fields in report order.
        separator:
            Literal separator between values of a multi-valued cell.
        csv:
            CSV dialect options.
        indent:
            JSON indentation for the report. `0` means compact output.
    """

    config_path: Path | None = None
    fields: tuple[FieldSpec, ...] = TRACKED_FIELDS
    separator: str = DEFAULT_SEPARATOR
    csv: CsvDialect = field(default_factory=CsvDialect)
    indent: int = 2


class ConfigError(RuntimeError):
    """
    Raised when the YAML configuration is missing, invalid, or cannot be parsed.
    """

    pass


def find_config_path(cli_path: str | None) -> Path | None:
    """
    Determine which YAML config file to use.

    Lookup order: explicit command line path, the `DEVPOST_STATS_CONFIG`
    environment variable, then `./devpost-stats.yaml` if it exists.

    Args:
        cli_path:
            Optional config path provided on the command line.

    Returns:
        The config path, or None if the built-in defaults should be used.
    """

    if cli_path:
        return Path(cli_path)

    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path)

    candidate = Path.cwd() / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate

    return None


def load_config(path: Path | None) -> StatsConfig:
    """
    Load and validate a YAML configuration file.

    Args:
        path:
            Path to the YAML config file. None yields the defaults.

    Returns:
        A validated StatsConfig instance.

    Raises:
        ConfigError:
            If the file is missing, unreadable, cannot be parsed as YAML, or
            contains invalid values.
    """

    if path is None:
        return StatsConfig()

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    return parse_config(raw, config_path=path.resolve())


def parse_config(raw: dict[str, Any], *, config_path: Path | None = None) -> StatsConfig:
    """
    Validate an already parsed config mapping.

    Args:
        raw:
            Top-level YAML mapping.
        config_path:
            Source path, recorded on the result.

    Returns:
        A validated StatsConfig instance.

    Raises:
        ConfigError:
            If any value is invalid.
    """

    separator = raw.get("separator", DEFAULT_SEPARATOR)
    if not isinstance(separator, str) or not separator:
        raise ConfigError("'separator' must be a non-empty string")

    fields = _parse_fields(raw.get("fields"))
    csv_dialect = _parse_csv(raw.get("csv"))
    indent = _parse_indent(raw.get("output"))

    return StatsConfig(
        config_path=config_path,
        fields=fields,
        separator=separator,
        csv=csv_dialect,
        indent=indent,
    )


def _parse_fields(value: Any) -> tuple[FieldSpec, ...]:
    """
    Parse and validate the optional `fields` section.

    Supported entry formats:

    1) Short form:    - "Built With": technologies
    2) Expanded form: - key: "Built With"
                        tag: technologies
                        label: technology count   # optional

    Args:
        value:
            Raw YAML value.

    Returns:
        The tracked fields. The defaults are returned if the section is missing.

    Raises:
        ConfigError:
            If the structure does not match the expected schema.
    """

    if value is None:
        return TRACKED_FIELDS

    if not isinstance(value, list) or not value:
        raise ConfigError("'fields' must be a non-empty list if provided")

    fields: list[FieldSpec] = []
    seen_tags: set[str] = set()

    for idx, item in enumerate(value, start=1):
        if not isinstance(item, dict):
            raise ConfigError(f"Each item in 'fields' must be a mapping (problem at index {idx})")

        label: Any = ""
        if "key" in item or "tag" in item:
            key = item.get("key")
            tag = item.get("tag")
            label = item.get("label", "")
        elif len(item) == 1:
            (key, tag) = next(iter(item.items()))
        else:
            raise ConfigError(
                f"Field entry must be '{{column: tag}}' or have 'key' and 'tag' (problem at index {idx})"
            )

        if not isinstance(key, str) or not key.strip():
            raise ConfigError(f"Field key must be a non-empty string (problem at index {idx})")
        if not isinstance(tag, str) or not tag.strip():
            raise ConfigError(f"Field tag must be a non-empty string (problem at index {idx})")
        if not isinstance(label, str):
            raise ConfigError(f"Field label must be a string if provided (problem at index {idx})")

        tag = tag.strip()
        if tag in RESERVED_TAGS:
            raise ConfigError(f"Field tag '{tag}' is reserved (problem at index {idx})")
        if tag in seen_tags:
            raise ConfigError(f"Duplicate field tag '{tag}' (problem at index {idx})")
        seen_tags.add(tag)

        # Header names are matched verbatim, so the key is not stripped.
        fields.append(FieldSpec(key=key, tag=tag, label=label.strip()))

    return tuple(fields)


def _parse_csv(value: Any) -> CsvDialect:
    """
    Parse and validate the optional `csv` section.

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return CsvDialect()

    if not isinstance(value, dict):
        raise ConfigError("'csv' must be a mapping if provided")

    delimiter = value.get("delimiter", CsvDialect.delimiter)
    quote = value.get("quote", CsvDialect.quote)
    encoding = value.get("encoding", CsvDialect.encoding)

    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ConfigError("csv.delimiter must be a single character")
    if not isinstance(quote, str) or len(quote) != 1:
        raise ConfigError("csv.quote must be a single character")
    if delimiter == quote:
        raise ConfigError("csv.delimiter and csv.quote must differ")
    if not isinstance(encoding, str) or not encoding.strip():
        raise ConfigError("csv.encoding must be a non-empty string")

    return CsvDialect(delimiter=delimiter, quote=quote, encoding=encoding.strip())


def _parse_indent(value: Any) -> int:
    """
    Parse the optional `output` section and return the JSON indentation.

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return StatsConfig.indent

    if not isinstance(value, dict):
        raise ConfigError("'output' must be a mapping if provided")

    indent = value.get("indent", StatsConfig.indent)
    # bool is a subclass of int
    if not isinstance(indent, int) or isinstance(indent, bool):
        raise ConfigError("output.indent must be an integer")
    if indent < 0:
        raise ConfigError("output.indent must be >= 0")

    return indent

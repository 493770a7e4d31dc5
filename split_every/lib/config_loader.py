"""Declarative split configuration.

Lets a split be described in a mapping or a YAML file instead of code.

Example YAML (records.yaml):
    split:
      mode: text
      pattern: "\\n"
      n: 100

    # Or with the pattern taken from the environment
    split:
      mode: char
      pattern: "${FIELD_SEP}"
      n: 3

Usage:
    # Command line
    split-every data.txt --config records.yaml

    # Python API
    from split_every.lib.config_loader import build_splitter, load_split_config
    config = load_split_config("records.yaml")
    for chunk in build_splitter(text, config):
        ...
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from split_every.lib.api import (
    split_by_char,
    split_by_char_set,
    split_by_predicate,
    split_by_text,
    split_sequence,
)
from split_every.lib.chunker import SplitEvery
from split_every.lib.env import expand_config_values
from split_every.lib.errors import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    "SplitMode",
    "SplitConfig",
    "build_split_config_from_dict",
    "load_split_config",
    "build_splitter",
]

_ESCAPES = {"\\n": "\n", "\\t": "\t", "\\r": "\r", "\\0": "\0", "\\\\": "\\"}
_ESCAPE_RE = re.compile(r"\\[ntr0\\]")


class SplitMode(Enum):
    """Supported split modes."""

    TEXT = "text"
    CHAR = "char"
    CHAR_SET = "char_set"
    WHITESPACE = "whitespace"
    SEQUENCE = "sequence"


@dataclass
class SplitConfig:
    """Configuration for a split.

    Examples:
        # Every 3rd space
        config = SplitConfig(mode=SplitMode.TEXT, pattern=" ", n=3)

        # Every 2nd comma or semicolon
        config = SplitConfig(mode=SplitMode.CHAR_SET, pattern=",;", n=2)

        # Every whitespace character, splitting UTF-8 bytes
        config = SplitConfig(mode=SplitMode.WHITESPACE, binary=True)
    """

    mode: SplitMode = SplitMode.TEXT
    pattern: Any = None
    n: int = 1

    # Split the UTF-8 encoding of the input instead of the decoded text
    binary: bool = False


def _unescape(value: str) -> str:
    """Decode the backslash escapes people write for separators in YAML and shells."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], value)


def build_split_config_from_dict(options: Dict[str, Any]) -> SplitConfig:
    """Build SplitConfig from a dictionary of options.

    Expected keys:
        - mode: "text", "char", "char_set", "whitespace", "sequence" (default: "text")
        - pattern: Pattern string (or list for "sequence"); unused for "whitespace"
        - n: Occurrences per chunk (default: 1)
        - binary: Split UTF-8 bytes instead of text (default: False)

    Values are taken literally; see load_split_config for ${VAR} expansion.

    Raises:
        ConfigurationError: If a value is missing or invalid
    """
    options = dict(options)

    mode_name = str(options.get("mode", "text")).lower()
    try:
        mode = SplitMode(mode_name)
    except ValueError:
        raise ConfigurationError(
            f"Unsupported split mode: '{mode_name}'",
            field="mode",
            value=mode_name,
            suggestion="Use 'text', 'char', 'char_set', 'whitespace' or 'sequence'.",
        )

    pattern = options.get("pattern")
    if isinstance(pattern, str):
        pattern = _unescape(pattern)
    if mode is not SplitMode.WHITESPACE:
        if pattern is None or (isinstance(pattern, (str, list)) and not pattern):
            raise ConfigurationError(
                f"Split mode '{mode.value}' requires a non-empty pattern",
                field="pattern",
            )
        if mode is SplitMode.SEQUENCE:
            if not isinstance(pattern, (str, list)):
                raise ConfigurationError(
                    "Sequence pattern must be a string or a list",
                    field="pattern",
                    value=pattern,
                )
        elif not isinstance(pattern, str):
            raise ConfigurationError(
                f"Split mode '{mode.value}' requires a string pattern",
                field="pattern",
                value=pattern,
            )
        if mode is SplitMode.CHAR and len(pattern) != 1:
            raise ConfigurationError(
                "Split mode 'char' requires exactly one character",
                field="pattern",
                value=pattern,
                suggestion="Use mode 'text' for multi-character patterns.",
            )

    raw_n = options.get("n", 1)
    try:
        n = int(raw_n)
    except (TypeError, ValueError):
        raise ConfigurationError("n must be an integer", field="n", value=raw_n)
    if n < 1:
        raise ConfigurationError("n must be at least 1", field="n", value=n)

    return SplitConfig(
        mode=mode,
        pattern=pattern,
        n=n,
        binary=bool(options.get("binary", False)),
    )


def load_split_config(path: Union[str, Path]) -> SplitConfig:
    """Load a SplitConfig from a YAML file.

    The file may hold the options at top level or under a ``split:`` key.
    String values may reference environment variables as ${NAME} or
    ${NAME:-default}.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            field="path",
            value=str(config_path),
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid YAML in {config_path}",
            details={"cause": str(exc)},
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping",
            value=type(data).__name__,
        )

    section = data.get("split", data)
    if not isinstance(section, dict):
        raise ConfigurationError(
            "'split' section must be a mapping",
            field="split",
            value=type(section).__name__,
        )

    config = build_split_config_from_dict(expand_config_values(section))
    logger.debug("Loaded %s split config from %s", config.mode.value, config_path)
    return config


def build_splitter(source: Any, config: SplitConfig) -> SplitEvery[Any]:
    """Create the chunker described by ``config`` over ``source``."""
    if config.binary and isinstance(source, str):
        source = source.encode("utf-8")

    if config.mode is SplitMode.TEXT:
        return split_by_text(source, config.pattern, config.n)
    elif config.mode is SplitMode.CHAR:
        return split_by_char(source, config.pattern, config.n)
    elif config.mode is SplitMode.CHAR_SET:
        return split_by_char_set(source, config.pattern, config.n)
    elif config.mode is SplitMode.WHITESPACE:
        return split_by_predicate(source, str.isspace, config.n)

    pattern = config.pattern
    if isinstance(source, (bytes, bytearray)) and isinstance(pattern, str):
        pattern = pattern.encode("utf-8")
    return split_sequence(source, pattern, config.n)

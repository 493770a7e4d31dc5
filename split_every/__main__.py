"""CLI entry point for splitting text.

Usage:
    python -m split_every data.txt --text " " -n 3
    python -m split_every --char "," -n 10 < data.csv
    python -m split_every log.txt --text "\\n" -n 100 --format json
    python -m split_every data.txt --config split.yaml --env-file .env

Patterns accept the escapes \\n, \\t, \\r, \\0 and \\\\.
Chunks are written to stdout, one per record; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, TextIO, Union

from split_every.lib.config_loader import (
    SplitConfig,
    build_split_config_from_dict,
    build_splitter,
    load_split_config,
)
from split_every.lib.env import load_env_file
from split_every.lib.errors import SplitEveryError
from split_every.lib.logging import setup_logging

logger = logging.getLogger(__name__)

OUTPUT_SEPARATORS = {"lines": "\n", "null": "\0"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="split-every",
        description="Split input every N occurrences of a pattern.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input file (default: stdin)",
    )

    pattern = parser.add_mutually_exclusive_group(required=True)
    pattern.add_argument("--text", metavar="PATTERN", help="Split on a literal string")
    pattern.add_argument("--char", metavar="CHAR", help="Split on a single character")
    pattern.add_argument(
        "--chars", metavar="CHARS", help="Split on any one of these characters"
    )
    pattern.add_argument(
        "--whitespace", action="store_true", help="Split on any whitespace character"
    )
    pattern.add_argument("--config", metavar="YAML", help="Load the split from a YAML file")

    parser.add_argument(
        "-n",
        type=int,
        default=None,
        help="Occurrences per chunk (default: 1, or the config file's value)",
    )
    parser.add_argument(
        "--bytes",
        dest="binary",
        action="store_true",
        default=None,
        help="Address the input in UTF-8 bytes instead of characters",
    )
    parser.add_argument(
        "--format",
        choices=["lines", "json", "null"],
        default="lines",
        help="Output format: newline-separated, JSON strings, or NUL-separated",
    )
    parser.add_argument("--env-file", help="Load environment variables from this .env file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def resolve_config(args: argparse.Namespace) -> SplitConfig:
    """Turn parsed arguments into a SplitConfig.

    Command-line ``-n`` and ``--bytes`` override values from ``--config``.
    """
    if args.config:
        config = load_split_config(args.config)
        if args.n is not None:
            config = replace(config, n=args.n)
        if args.binary:
            config = replace(config, binary=True)
        return config

    options: Dict[str, Any] = {"n": 1 if args.n is None else args.n}
    if args.text is not None:
        options.update(mode="text", pattern=args.text)
    elif args.char is not None:
        options.update(mode="char", pattern=args.char)
    elif args.chars is not None:
        options.update(mode="char_set", pattern=args.chars)
    else:
        options["mode"] = "whitespace"
    options["binary"] = bool(args.binary)
    return build_split_config_from_dict(options)


def read_input(path: str, binary: bool) -> Union[str, bytes]:
    """Read the whole input from a file or stdin.

    Line endings are kept as they are so that "\\r\\n" and "\\r" patterns match.
    """
    if path == "-":
        data = sys.stdin.buffer.read()
        return data if binary else data.decode("utf-8")
    if binary:
        with open(path, "rb") as f:
            return f.read()
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_chunks(chunks: Iterable[Any], output_format: str, stream: TextIO) -> int:
    """Write chunks to ``stream`` and return how many were written."""
    count = 0
    for chunk in chunks:
        if isinstance(chunk, (bytes, bytearray)):
            chunk = chunk.decode("utf-8")
        if output_format == "json":
            stream.write(json.dumps(chunk, ensure_ascii=False))
            stream.write("\n")
        else:
            stream.write(chunk)
            stream.write(OUTPUT_SEPARATORS[output_format])
        count += 1
    return count


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, json_format=args.json_logs, log_file=args.log_file)

    if args.env_file and not load_env_file(args.env_file):
        logger.warning("No environment variables loaded from %s", args.env_file)

    try:
        config = resolve_config(args)
        source = read_input(args.input, config.binary)
        splitter = build_splitter(source, config)
        count = write_chunks(splitter, args.format, sys.stdout)
    except SplitEveryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as e:
        print(f"Error: {args.input} is not valid UTF-8: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 2

    logger.debug("Wrote %d chunk(s)", count, extra={"chunk_count": count})
    return 0


if __name__ == "__main__":
    sys.exit(main())

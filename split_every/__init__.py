"""Split a sequence every n occurrences of a pattern, lazily.

This package provides exclusive "split every n-th occurrence" iterators over
text, byte strings, arbitrary sequences and pull-based sources.

Usage:
    python -m split_every data.txt --text " " -n 3
    split-every --char "," -n 10 < data.csv

    >>> from split_every import split_by_text
    >>> list(split_by_text("oh oh oh oh oh", " ", 2))
    ['oh oh', 'oh oh', 'oh']
"""

from split_every.lib.api import (
    split_by_char,
    split_by_char_set,
    split_by_predicate,
    split_by_text,
    split_every,
    split_iterable,
    split_pull_source,
    split_pull_source_on_slice,
    split_sequence,
)
from split_every.lib.chunker import SplitEvery
from split_every.lib.errors import InvalidCountError, InvalidPatternError, SplitEveryError
from split_every.lib.pull import PullSplitEvery, PullSplitEveryOnSlice

__version__ = "1.0.0"

__all__ = [
    "split_by_char",
    "split_by_char_set",
    "split_by_predicate",
    "split_by_text",
    "split_every",
    "split_iterable",
    "split_pull_source",
    "split_pull_source_on_slice",
    "split_sequence",
    "SplitEvery",
    "PullSplitEvery",
    "PullSplitEveryOnSlice",
    "SplitEveryError",
    "InvalidCountError",
    "InvalidPatternError",
]

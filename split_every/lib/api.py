"""Construction entry points.

Each function pairs a source with the matcher suited to its pattern and
returns a lazy chunker. Text entry points accept ``str`` (split by code
point) or UTF-8 ``bytes``/``bytearray`` (split by byte); all validate
``n >= 1``. The pull-based entry points also accept ``n = 0``.

Example:
    >>> list(split_by_text("Oh hi there I don't really know what to say", " ", 3))
    ['Oh hi there', "I don't really", 'know what to', 'say']
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence, TypeVar, Union

from split_every.lib.chunker import SplitEvery
from split_every.lib.errors import SourceEncodingError
from split_every.lib.matchers import (
    CharMatcher,
    CharSetMatcher,
    PredicateMatcher,
    SubsequenceMatcher,
    TextMatcher,
)
from split_every.lib.pull import PullSplitEvery, PullSplitEveryOnSlice

logger = logging.getLogger(__name__)

__all__ = [
    "split_by_text",
    "split_by_char",
    "split_by_char_set",
    "split_by_predicate",
    "split_sequence",
    "split_pull_source",
    "split_pull_source_on_slice",
    "split_iterable",
    "split_every",
]

T = TypeVar("T")
TextT = TypeVar("TextT", str, bytes, bytearray)

_END = object()


def _check_text_source(source: Any) -> None:
    """Reject sources the text matchers cannot address."""
    if isinstance(source, str):
        return
    if isinstance(source, (bytes, bytearray)):
        try:
            bytes(source).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceEncodingError(
                f"Byte source is not valid UTF-8 at offset {exc.start}",
                cause=exc,
            ) from exc
        return
    raise TypeError(
        f"Text source must be str, bytes or bytearray, got {type(source).__name__}"
    )


def split_by_text(source: TextT, pattern: str, n: int) -> SplitEvery[TextT]:
    """Split text every ``n`` occurrences of a literal string.

    Args:
        source: Text to split
        pattern: Non-empty literal pattern
        n: Occurrences per chunk (>= 1)

    Returns:
        Lazy chunker yielding slices of ``source``
    """
    matcher = TextMatcher(pattern)
    _check_text_source(source)
    return SplitEvery(source, matcher, n)


def split_by_char(source: TextT, pattern: str, n: int) -> SplitEvery[TextT]:
    """Split text every ``n`` occurrences of a single character.

    Example:
        >>> list(split_by_char("oboooobobobobob", "o", 3))
        ['obo', 'oob', 'bobob', 'b']
    """
    matcher = CharMatcher(pattern)
    _check_text_source(source)
    return SplitEvery(source, matcher, n)


def split_by_char_set(
    source: TextT, pattern: Iterable[str], n: int
) -> SplitEvery[TextT]:
    """Split text every ``n`` occurrences of any character in ``pattern``.

    ``pattern`` may be a string of characters or any iterable of
    one-character strings.
    """
    matcher = CharSetMatcher(pattern)
    _check_text_source(source)
    return SplitEvery(source, matcher, n)


def split_by_predicate(
    source: TextT, predicate: Callable[[str], bool], n: int
) -> SplitEvery[TextT]:
    """Split text every ``n`` characters accepted by ``predicate``.

    Example:
        >>> list(split_by_predicate("a1b2c3d", str.isdigit, 2))
        ['a1b', 'c', 'd']
    """
    matcher = PredicateMatcher(predicate)
    _check_text_source(source)
    return SplitEvery(source, matcher, n)


def split_sequence(
    source: Sequence[T], pattern: Sequence[T], n: int
) -> SplitEvery[Sequence[T]]:
    """Split any sliceable sequence every ``n`` runs equal to ``pattern``.

    Example:
        >>> list(split_sequence([1, 0, 2, 0, 3], [0], 1))
        [[1], [2], [3]]
    """
    return SplitEvery(source, SubsequenceMatcher(pattern), n)


def split_pull_source(
    next_fn: Callable[[], Any],
    pattern: T,
    n: int,
    *,
    sentinel: Any = None,
) -> PullSplitEvery[T]:
    """Split a pull-based source every ``n`` elements equal to ``pattern``.

    Args:
        next_fn: Returns the next element, or ``sentinel`` once exhausted
        pattern: Element marking an occurrence
        n: Occurrences per chunk, or 0 to drain the source into one chunk
        sentinel: End-of-sequence marker (default None)
    """
    return PullSplitEvery(next_fn, pattern, n, sentinel=sentinel)


def split_pull_source_on_slice(
    next_fn: Callable[[], Any],
    pattern: Sequence[T],
    n: int,
    *,
    sentinel: Any = None,
) -> PullSplitEveryOnSlice[T]:
    """Split a pull-based source every ``n`` runs equal to ``pattern``."""
    return PullSplitEveryOnSlice(next_fn, pattern, n, sentinel=sentinel)


def split_iterable(iterable: Iterable[T], pattern: Any, n: int) -> PullSplitEvery[T]:
    """Split any iterable (generator, file, pipeline) through the pull chunker.

    A ``list`` or ``tuple`` pattern is matched as a run of consecutive
    elements; anything else, strings included, as a single element. To
    match a run of characters in a character stream use
    ``split_pull_source_on_slice``.

    Example:
        >>> list(split_iterable((x % 3 for x in range(7)), 0, 1))
        [[], [1, 2], [1, 2]]
        >>> list(split_iterable(["a", "--", "b"], "--", 1))
        [['a'], ['b']]
    """
    iterator = iter(iterable)

    def next_fn() -> Any:
        return next(iterator, _END)

    if isinstance(pattern, (list, tuple)):
        return PullSplitEveryOnSlice(next_fn, pattern, n, sentinel=_END)
    return PullSplitEvery(next_fn, pattern, n, sentinel=_END)


def split_every(
    source: Any, pattern: Any, n: int
) -> Union[SplitEvery[Any], PullSplitEvery[Any]]:
    """Split ``source`` choosing the matcher from the argument types.

    - text source and one-character ``str`` pattern: ``split_by_char``
    - text source and longer ``str`` pattern: ``split_by_text``
    - text source and callable pattern: ``split_by_predicate``
    - text source and set/frozenset pattern: ``split_by_char_set``
    - other sliceable sequence: ``split_sequence`` (a non-sequence pattern
      is treated as a single element)
    - any other iterable (generator, file, iterator): ``split_iterable``
    """
    if isinstance(source, (str, bytes, bytearray)):
        if isinstance(pattern, str):
            if len(pattern) == 1:
                return split_by_char(source, pattern, n)
            return split_by_text(source, pattern, n)
        if callable(pattern):
            return split_by_predicate(source, pattern, n)
        if isinstance(pattern, (set, frozenset)):
            return split_by_char_set(source, pattern, n)
        if isinstance(source, (bytes, bytearray)) and isinstance(
            pattern, (bytes, bytearray)
        ):
            return split_sequence(source, pattern, n)
        raise TypeError(
            f"Unsupported pattern type for text source: {type(pattern).__name__}"
        )

    if not isinstance(source, (Sequence, memoryview)):
        if not isinstance(source, Iterable):
            raise TypeError(
                f"Source must be a sequence or an iterable, got {type(source).__name__}"
            )
        logger.debug("Dispatching %s source to pull splitter", type(source).__name__)
        return split_iterable(source, pattern, n)

    if not isinstance(pattern, (Sequence, memoryview)) or isinstance(pattern, str):
        pattern = (pattern,)
    logger.debug("Dispatching %s source to sequence splitter", type(source).__name__)
    return split_sequence(source, pattern, n)

"""Chunker over randomly-accessible sources.

Splits a ``str``, ``bytes``, ``bytearray`` or any other sliceable sequence
after every ``n``-th occurrence of a pattern. The occurrence that closes a
chunk is consumed; occurrences inside a chunk are kept.

Example:
    >>> splitter = SplitEvery("oh oh oh oh oh", TextMatcher(" "), 2)
    >>> list(splitter)
    ['oh oh', 'oh oh', 'oh']

Chunks are ``source[start:stop]`` slices, so a ``memoryview`` source yields
zero-copy ``memoryview`` chunks.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterator, Optional, Sequence, TypeVar

from split_every.lib.errors import InvalidCountError
from split_every.lib.matchers import Matcher

logger = logging.getLogger(__name__)

__all__ = ["SplitEvery", "check_count"]

S = TypeVar("S", bound=Sequence[Any])


def check_count(n: Any, *, allow_zero: bool = False) -> int:
    """Validate an occurrence count.

    Args:
        n: Number of occurrences per chunk
        allow_zero: Accept 0 as "drain the whole source as one chunk"

    Returns:
        The validated count

    Raises:
        InvalidCountError: If n is not an int or is below the minimum
    """
    # bool is an int subclass but never a meaningful count
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidCountError(
            f"n must be an integer, got {type(n).__name__}",
            n=n,
            allow_zero=allow_zero,
        )
    minimum = 0 if allow_zero else 1
    if n < minimum:
        raise InvalidCountError(
            f"n must be greater than {minimum - 1}",
            n=n,
            allow_zero=allow_zero,
        )
    return n


class SplitEvery(Generic[S]):
    """Lazy iterator of chunks split every ``n`` occurrences of a pattern.

    The cursor only moves forward and each unit of the source is scanned at
    most once. Once the cursor reaches the end of the source the splitter is
    exhausted for good; create a new one to split again.
    """

    def __init__(self, source: S, matcher: Matcher, n: int) -> None:
        """Initialize the splitter.

        Args:
            source: Sequence to split; must not be mutated while splitting
            matcher: Pattern matcher understanding the source's addressing unit
            n: Occurrences per chunk (>= 1)

        Raises:
            InvalidCountError: If n < 1
        """
        self._n = check_count(n)
        self._source = source
        self._matcher = matcher
        self._cursor = 0

        logger.debug(
            "Splitting %d-unit %s every %d occurrence(s) of %s",
            len(source),
            type(source).__name__,
            self._n,
            matcher.describe(),
        )

    @property
    def n(self) -> int:
        """Occurrences consumed per chunk."""
        return self._n

    @property
    def matcher(self) -> Matcher:
        return self._matcher

    @property
    def cursor(self) -> int:
        """Absolute offset of the first unit not yet emitted or consumed."""
        return self._cursor

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._source)

    def next_chunk(self) -> Optional[S]:
        """Produce the next chunk.

        Returns:
            The next chunk (possibly empty), or None once the source is
            exhausted. None is permanent.
        """
        source = self._source
        end = len(source)
        start = self._cursor
        if start >= end:
            return None

        position = start
        last_len = 0
        for matched in range(self._n):
            index = self._matcher.find(source, position)
            if index is None:
                if matched == 0:
                    # No boundary left: the rest of the source is the last chunk
                    self._cursor = end
                    logger.debug("No occurrence after offset %d; emitting tail", start)
                    return source[start:end]  # type: ignore[return-value]
                break
            last_len = self._matcher.occurrence_len(source, index)
            position = index + last_len

        self._cursor = position
        return source[start : position - last_len]  # type: ignore[return-value]

    def __iter__(self) -> Iterator[S]:
        return self

    def __next__(self) -> S:
        chunk = self.next_chunk()
        if chunk is None:
            raise StopIteration
        return chunk

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} n={self._n} {self._matcher.describe()} "
            f"at {self._cursor}/{len(self._source)}>"
        )

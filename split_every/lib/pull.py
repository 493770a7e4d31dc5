"""Chunkers over pull-based sources.

A pull-based source is a zero-argument callable that returns the next
element, or a sentinel once the input is exhausted (and keeps returning the
sentinel afterwards). There is no lookahead and no random access, so every
chunk is an owned ``list`` of the pulled elements.

Matching is by value equality, either against a single element
(``PullSplitEvery``) or against a run of elements (``PullSplitEveryOnSlice``).
Besides counted boundaries (``n >= 1``) these chunkers accept ``n = 0``,
which drains everything that is left into a single chunk.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

from split_every.lib.chunker import check_count
from split_every.lib.errors import InvalidPatternError

logger = logging.getLogger(__name__)

__all__ = ["PullSplitEvery", "PullSplitEveryOnSlice"]

T = TypeVar("T")


class PullSplitEvery(Generic[T]):
    """Split a pull-based source after every ``n`` elements equal to ``pattern``.

    Example:
        >>> tokens = iter("a , b , c , d".split())
        >>> list(PullSplitEvery(lambda: next(tokens, None), ",", 2))
        [['a', ',', 'b'], ['c', ',', 'd']]
    """

    def __init__(
        self,
        next_fn: Callable[[], Any],
        pattern: Any,
        n: int,
        *,
        sentinel: Any = None,
    ) -> None:
        """Initialize the splitter.

        Args:
            next_fn: Returns the next element, or ``sentinel`` when exhausted
            pattern: Element value that marks an occurrence
            n: Occurrences per chunk, or 0 to drain into one chunk
            sentinel: End-of-sequence marker returned by ``next_fn``

        Raises:
            InvalidCountError: If n < 0
        """
        if not callable(next_fn):
            raise TypeError("next_fn must be callable")
        self._n = check_count(n, allow_zero=True)
        self._pull: Iterator[T] = iter(next_fn, sentinel)
        self._pattern = pattern
        self._position = 0
        self._exhausted = False

        logger.debug(
            "Pull-splitting every %d occurrence(s) of %r%s",
            self._n,
            pattern,
            " (drain)" if self._n == 0 else "",
        )

    @property
    def n(self) -> int:
        return self._n

    @property
    def pattern(self) -> Any:
        return self._pattern

    @property
    def cursor(self) -> int:
        """Number of elements pulled from the source so far."""
        return self._position

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def occurrence_len(self) -> int:
        return 1

    def _ends_with_occurrence(self, buffer: List[T], scan_from: int) -> bool:
        """Check whether the last element appended completes an occurrence.

        Occurrences must start at or after ``scan_from`` so that they never
        overlap the previous one.
        """
        return buffer[-1] == self._pattern

    def _finish(self, buffer: List[T]) -> Optional[List[T]]:
        self._exhausted = True
        logger.debug("Pull source exhausted after %d element(s)", self._position)
        # An empty buffer at end of input means there is nothing left to emit
        return buffer or None

    def next_chunk(self) -> Optional[List[T]]:
        """Produce the next chunk.

        Returns:
            A list of elements (possibly empty when two boundaries are
            adjacent), or None once the source is exhausted. None is permanent.
        """
        if self._exhausted:
            return None

        buffer: List[T] = []

        if self._n == 0:
            for element in self._pull:
                self._position += 1
                buffer.append(element)
            return self._finish(buffer)

        matched = 0
        scan_from = 0
        for element in self._pull:
            self._position += 1
            buffer.append(element)
            if not self._ends_with_occurrence(buffer, scan_from):
                continue
            matched += 1
            if matched == self._n:
                del buffer[len(buffer) - self.occurrence_len :]
                return buffer
            scan_from = len(buffer)

        return self._finish(buffer)

    def __iter__(self) -> Iterator[List[T]]:
        return self

    def __next__(self) -> List[T]:
        chunk = self.next_chunk()
        if chunk is None:
            raise StopIteration
        return chunk

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else f"pulled {self._position}"
        return f"<{self.__class__.__name__} n={self._n} pattern={self._pattern!r} {state}>"


class PullSplitEveryOnSlice(PullSplitEvery[T]):
    """Split a pull-based source after every ``n`` runs equal to ``pattern``.

    Matching uses a sliding window the length of the pattern. When fewer
    elements remain than the pattern is long, no further occurrence can be
    found and the rest is emitted as the final chunk.
    """

    def __init__(
        self,
        next_fn: Callable[[], Any],
        pattern: Sequence[Any],
        n: int,
        *,
        sentinel: Any = None,
    ) -> None:
        if len(pattern) == 0:
            raise InvalidPatternError(
                "Sequence pattern must contain at least one element",
                pattern=pattern,
            )
        self._window = list(pattern)
        super().__init__(next_fn, pattern, n, sentinel=sentinel)

    @property
    def occurrence_len(self) -> int:
        return len(self._window)

    def _ends_with_occurrence(self, buffer: List[T], scan_from: int) -> bool:
        width = len(self._window)
        if len(buffer) - width < scan_from:
            return False
        return buffer[-width:] == self._window

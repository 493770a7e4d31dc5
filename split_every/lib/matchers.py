"""Pattern matchers consumed by the chunkers.

A matcher answers two questions about a source: where is the next
occurrence at or after a given offset, and how long is the occurrence found
there. Offsets and lengths are expressed in the source's own addressing
unit:

- ``str`` sources are addressed in code points
- ``bytes``/``bytearray`` sources are addressed in UTF-8 bytes
- any other sequence is addressed in elements

Literal text and single characters have a constant occurrence length. The
character-set and predicate matchers measure each occurrence separately,
because the characters they match can have different UTF-8 widths.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, Iterable, Optional, Sequence, Union

from split_every.lib.errors import InvalidPatternError

__all__ = [
    "Text",
    "Matcher",
    "TextMatcher",
    "CharMatcher",
    "CharSetMatcher",
    "PredicateMatcher",
    "SubsequenceMatcher",
    "char_width",
    "utf8_width",
]

Text = Union[str, bytes, bytearray]

_BYTES_TYPES = (bytes, bytearray)


def utf8_width(lead: int) -> int:
    """Return the encoded width of the UTF-8 sequence starting with ``lead``.

    Example:
        >>> utf8_width("é".encode("utf-8")[0])
        2
    """
    if lead < 0x80:
        return 1
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    # Continuation byte; never a character boundary in a validated source.
    return 1


def char_width(haystack: Text, index: int) -> int:
    """Width of the character at ``index`` in the haystack's addressing unit."""
    if isinstance(haystack, str):
        return 1
    return utf8_width(haystack[index])


def _check_char(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a single character, got {type(value).__name__}")
    if len(value) != 1:
        raise InvalidPatternError(
            "Character pattern must be exactly one character",
            pattern=value,
        )
    return value


class Matcher(ABC):
    """Base class for pattern matchers.

    Matchers are stateless and may be shared between chunkers.
    """

    @abstractmethod
    def find(self, haystack: Any, start: int = 0) -> Optional[int]:
        """Locate the next occurrence at or after ``start``.

        Args:
            haystack: The full source being split
            start: Absolute offset where the search begins

        Returns:
            Absolute offset of the occurrence, or None if there is none
        """
        ...

    @abstractmethod
    def occurrence_len(self, haystack: Any, index: int) -> int:
        """Length of the occurrence located at ``index``.

        Always at least one addressing unit.
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description for logging."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.describe()}>"


class TextMatcher(Matcher):
    """Literal text matcher.

    Example:
        >>> TextMatcher(", ").find("a, b, c", 2)
        4
    """

    def __init__(self, pattern: str) -> None:
        if not isinstance(pattern, str):
            raise TypeError(f"Text pattern must be str, got {type(pattern).__name__}")
        if not pattern:
            raise InvalidPatternError(
                "Text pattern must not be empty",
                pattern=pattern,
                suggestion="An empty pattern never consumes input; pass at least one character.",
            )
        self.pattern = pattern
        self._encoded = pattern.encode("utf-8")

    def _needle(self, haystack: Text) -> Union[str, bytes]:
        return self.pattern if isinstance(haystack, str) else self._encoded

    def find(self, haystack: Text, start: int = 0) -> Optional[int]:
        index = haystack.find(self._needle(haystack), start)  # type: ignore[arg-type]
        return None if index < 0 else index

    def occurrence_len(self, haystack: Text, index: int) -> int:
        return len(self._needle(haystack))

    def describe(self) -> str:
        return f"text {self.pattern!r}"


class CharMatcher(TextMatcher):
    """Single character matcher."""

    def __init__(self, pattern: str) -> None:
        super().__init__(_check_char(pattern))

    def describe(self) -> str:
        return f"char {self.pattern!r}"


class CharSetMatcher(Matcher):
    """Matches any one character from a set.

    Each occurrence is exactly one character, so its length on a byte source
    is that character's own UTF-8 width.
    """

    def __init__(self, chars: Iterable[str]) -> None:
        members: FrozenSet[str] = frozenset(_check_char(c) for c in chars)
        if not members:
            raise InvalidPatternError(
                "Character set must contain at least one character",
                pattern="",
            )
        self.chars = members

        ordered = sorted(members)
        self._text_re = re.compile("|".join(re.escape(c) for c in ordered))
        self._bytes_re = re.compile(
            b"|".join(re.escape(c.encode("utf-8")) for c in ordered)
        )

    def find(self, haystack: Text, start: int = 0) -> Optional[int]:
        pattern = self._text_re if isinstance(haystack, str) else self._bytes_re
        match = pattern.search(haystack, start)  # type: ignore[arg-type]
        return match.start() if match else None

    def occurrence_len(self, haystack: Text, index: int) -> int:
        return char_width(haystack, index)

    def describe(self) -> str:
        return f"any of {''.join(sorted(self.chars))!r}"


class PredicateMatcher(Matcher):
    """Matches any single character accepted by a predicate.

    The predicate always receives a one-character ``str``; byte sources are
    decoded one character at a time while scanning.
    """

    def __init__(self, predicate: Callable[[str], bool]) -> None:
        if not callable(predicate):
            raise TypeError("Predicate must be callable")
        self.predicate = predicate

    def find(self, haystack: Text, start: int = 0) -> Optional[int]:
        if isinstance(haystack, str):
            for index in range(start, len(haystack)):
                if self.predicate(haystack[index]):
                    return index
            return None

        index = start
        end = len(haystack)
        while index < end:
            width = utf8_width(haystack[index])
            char = bytes(haystack[index : index + width]).decode("utf-8")
            if self.predicate(char):
                return index
            index += width
        return None

    def occurrence_len(self, haystack: Text, index: int) -> int:
        return char_width(haystack, index)

    def describe(self) -> str:
        name = getattr(self.predicate, "__name__", None) or repr(self.predicate)
        return f"predicate {name}"


class SubsequenceMatcher(Matcher):
    """Matches a run of elements equal to ``pattern``, element by element.

    Works on any indexable sequence (lists, tuples, memoryviews, ...).
    Occurrences never overlap.
    """

    def __init__(self, pattern: Sequence[Any]) -> None:
        if len(pattern) == 0:
            raise InvalidPatternError(
                "Sequence pattern must contain at least one element",
                pattern=pattern,
            )
        self.pattern = pattern
        self._elements = tuple(pattern)

    def _native_find(self, haystack: Sequence[Any]) -> bool:
        if isinstance(haystack, str):
            return isinstance(self.pattern, str)
        return isinstance(haystack, _BYTES_TYPES) and isinstance(
            self.pattern, _BYTES_TYPES
        )

    def find(self, haystack: Sequence[Any], start: int = 0) -> Optional[int]:
        if self._native_find(haystack):
            index = haystack.find(self.pattern, start)  # type: ignore[attr-defined]
            return None if index < 0 else index

        elements = self._elements
        width = len(elements)
        first = elements[0]
        for index in range(start, len(haystack) - width + 1):
            if haystack[index] != first:
                continue
            if all(haystack[index + k] == elements[k] for k in range(1, width)):
                return index
        return None

    def occurrence_len(self, haystack: Sequence[Any], index: int) -> int:
        return len(self._elements)

    def describe(self) -> str:
        return f"sequence {self.pattern!r}"

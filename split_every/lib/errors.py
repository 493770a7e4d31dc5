"""Structured exception hierarchy for split-every.

Construction misuse (bad counts, empty patterns, undecodable byte sources)
is reported immediately with rich context. Running out of matches and
running out of input are never errors; they are encoded in the chunk stream.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "SplitEveryError",
    "InvalidCountError",
    "InvalidPatternError",
    "SourceEncodingError",
    "ConfigurationError",
]


class SplitEveryError(Exception):
    """Base exception for all split-every errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class InvalidCountError(SplitEveryError, ValueError):
    """Occurrence count rejected at construction.

    Raised when ``n`` is not an integer, is negative, or is zero for a
    chunker that only supports counted boundaries.
    """

    def __init__(
        self,
        message: str,
        *,
        n: Any = None,
        allow_zero: bool = False,
        **kwargs: Any,
    ) -> None:
        self.n = n
        self.allow_zero = allow_zero

        details = kwargs.pop("details", {})
        details["n"] = repr(n)
        details["minimum"] = 0 if allow_zero else 1

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            if allow_zero:
                suggestion = "Pass n >= 1, or n = 0 to drain the source as one chunk."
            else:
                suggestion = (
                    "Pass n >= 1. Only the pull-based splitters accept n = 0."
                )

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)


class InvalidPatternError(SplitEveryError, ValueError):
    """Pattern rejected at construction.

    An empty pattern would match without consuming anything, so the
    chunker could never advance.
    """

    def __init__(
        self,
        message: str,
        *,
        pattern: Any = None,
        **kwargs: Any,
    ) -> None:
        self.pattern = pattern

        details = kwargs.pop("details", {})
        if pattern is not None:
            details["pattern"] = repr(pattern)

        super().__init__(message, details=details, **kwargs)


class SourceEncodingError(SplitEveryError, ValueError):
    """Byte source that cannot be decoded.

    Byte sources are addressed in UTF-8 code units and must decode cleanly.
    """

    def __init__(
        self,
        message: str,
        *,
        encoding: str = "utf-8",
        cause: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        self.encoding = encoding
        self.cause = cause

        details = kwargs.pop("details", {})
        details["encoding"] = encoding
        if cause:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = "Decode the input first and split the resulting str."

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)


class ConfigurationError(SplitEveryError):
    """Error in a declarative split configuration.

    Raised when a config mapping or YAML file is invalid or incomplete.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value

        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)

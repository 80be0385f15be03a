"""
sharedtext exceptions.

This module defines the exception hierarchy for sharedtext:

    SharedTextError (base)
    ├── ValidationError - Invalid input at an entry point (bad UTF-8, bad slice)
    └── InteropError - Source value of an unsupported type

A foreign candidate passed to ``derive()`` is not an error: it yields ``None``.

Usage:
    try:
        view = SharedText(b"\\xff")
    except sharedtext.ValidationError as e:
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")

See Also
--------
    SharedTextError : Base exception for all sharedtext errors.
"""

from typing import Any

__all__ = [
    # Base
    "SharedTextError",
    # Validation
    "ValidationError",
    # Interop
    "InteropError",
]


class SharedTextError(Exception):
    """
    Base exception for all sharedtext errors.

    All sharedtext-specific exceptions inherit from this class, enabling:
    - Catch-all handling: ``except sharedtext.SharedTextError``
    - Stable string-based error codes for programmatic handling
    - Structured details for debugging and logging

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "INVALID_UTF8").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"offset": 2, "nbytes": 5}).

    Example
    -------
    >>> try:
    ...     SharedText("héllo")[0:2]
    ... except sharedtext.SharedTextError as e:
    ...     print(f"Error code: {e.code}")
    ...     print(f"Details: {e.details}")
    Error code: NOT_CHAR_BOUNDARY
    Details: {'offset': 2}
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(SharedTextError, ValueError):
    """
    Invalid input value.

    Raised where text or slice bounds enter the system:
    - Bytes that are not valid UTF-8 (code="INVALID_UTF8")
    - A slice bound inside a multi-byte character (code="NOT_CHAR_BOUNDARY")
    - A slice with a step (code="SLICE_STEP_UNSUPPORTED")

    This exception inherits from both SharedTextError and ValueError, so both work::

        except sharedtext.SharedTextError:   # catches all sharedtext errors
        except ValueError:                   # catches validation errors (Pythonic)

    Example:
        >>> SharedText(b"\\xff\\xfe")
        ValidationError: Source is not valid UTF-8: invalid start byte at offset 0
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# Interop Errors
# =============================================================================


class InteropError(SharedTextError, TypeError):
    """
    Unsupported source type.

    Raised when a value cannot become a backing buffer. Accepted sources are
    str, bytes, bytearray, memoryview, TextBuffer and SharedText.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTEROP_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)

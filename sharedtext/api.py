"""
Module-level convenience functions.

Function-style spelling of the SharedText methods, for code that prefers
free functions over methods:

    >>> import sharedtext
    >>> text = sharedtext.new("  hello world  ")
    >>> word = sharedtext.derive(text, text.trim()[:5])
    >>> sharedtext.as_text(word)
    'hello'
    >>> sharedtext.derive(text, "hello") is None
    True
"""

from __future__ import annotations

from .view import SharedText, TextBuffer, TextSource

__all__ = [
    "new",
    "derive",
    "trim",
    "trim_start",
    "trim_end",
    "as_bytes",
    "as_text",
]


def new(source: TextSource | TextBuffer | SharedText) -> SharedText:
    """
    Create a root view over ``source``.

    Args:
        source: A ``str``, UTF-8 bytes, or an existing TextBuffer or SharedText.

    Raises
    ------
        ValidationError: If bytes are not valid UTF-8.
        InteropError: If ``source`` has an unsupported type.
    """
    return SharedText(source)


def derive(view: SharedText, candidate: object) -> SharedText | None:
    """Return a view of ``candidate`` if it lies in ``view``'s buffer, else None."""
    return view.derive(candidate)


def trim(view: SharedText) -> SharedText:
    return view.trim()


def trim_start(view: SharedText) -> SharedText:
    return view.trim_start()


def trim_end(view: SharedText) -> SharedText:
    return view.trim_end()


def as_bytes(view: SharedText) -> memoryview:
    return view.as_bytes()


def as_text(view: SharedText) -> str:
    return view.as_text()

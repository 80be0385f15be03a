"""
Shared text containers - TextBuffer and SharedText.

Provides immutable UTF-8 text with zero-copy substring views.

Memory Safety Contract:
- A TextBuffer holds immutable UTF-8 bytes; nothing writes to it after construction
- Every SharedText references its TextBuffer directly, never another view
- The buffer stays alive while any view references it and is freed with the last one
- ``as_bytes()`` returns a read-only memoryview into the buffer (zero-copy)

Offsets:
- ``start``/``stop``, ``len()``, slicing and search positions are UTF-8 byte
  offsets, not character indices
- Slice bounds must fall on character boundaries

Slicing:
- ``text[a:b]`` returns a *view* over the same buffer, not a copy
- ``derive(candidate)`` accepts only views over the same buffer; anything else
  yields None
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from functools import total_ordering
from typing import Any

from ._logging import scoped_logger
from .exceptions import InteropError, ValidationError

__all__ = ["TextBuffer", "SharedText"]

log = scoped_logger("view")

TextSource = str | bytes | bytearray | memoryview


def _is_char_boundary(data: bytes, offset: int) -> bool:
    """True if ``offset`` is not inside a multi-byte UTF-8 sequence."""
    if offset == 0 or offset == len(data):
        return True
    # Continuation bytes are 0b10xxxxxx
    return (data[offset] & 0xC0) != 0x80


def _utf8_len(text: str) -> int:
    if text.isascii():
        return len(text)
    return len(text.encode("utf-8"))


class TextBuffer:
    """
    Immutable UTF-8 backing storage shared by SharedText views.

    Built once from a text value. This is the only place text is copied or
    validated; every view afterwards points into ``data``.

    Attributes
    ----------
    data : bytes
        The UTF-8 encoded contents.
    text : str
        The decoded contents. For a buffer built from a ``str`` this is the
        original object.

    Example:
        >>> buffer = TextBuffer("hello world")
        >>> len(buffer)
        11
        >>> buffer.view()[6:]
        SharedText('world', start=6, len=5)
    """

    __slots__ = ("_data", "_text", "__weakref__")

    def __init__(self, source: TextSource):
        """
        Encode or validate ``source`` into an immutable buffer.

        Args:
            source: A ``str``, or UTF-8 encoded ``bytes``/``bytearray``/``memoryview``.

        Raises
        ------
            ValidationError: If bytes are not valid UTF-8, or a ``str`` holds
                lone surrogates (code="INVALID_UTF8").
            InteropError: If ``source`` has an unsupported type
                (code="UNSUPPORTED_SOURCE").
        """
        if isinstance(source, str):
            try:
                data = source.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise ValidationError(
                    f"Source cannot be encoded as UTF-8: {exc.reason} at index {exc.start}",
                    code="INVALID_UTF8",
                    details={"index": exc.start},
                ) from exc
            text = source
        elif isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ValidationError(
                    f"Source is not valid UTF-8: {exc.reason} at offset {exc.start}",
                    code="INVALID_UTF8",
                    details={"offset": exc.start},
                ) from exc
        else:
            raise InteropError(
                f"Cannot build a text buffer from {type(source).__name__}. "
                "Expected str, bytes, bytearray or memoryview.",
                code="UNSUPPORTED_SOURCE",
                details={"type": type(source).__name__},
            )

        self._data = data
        self._text = text

        if log.isEnabledFor(logging.DEBUG):
            log.debug("Allocated text buffer", extra={"nbytes": len(data)})

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._data)

    def view(self) -> SharedText:
        """Return the root view covering the whole buffer."""
        return SharedText(self)

    def __repr__(self) -> str:
        return f"TextBuffer(nbytes={len(self._data)})"


@total_ordering
class SharedText:
    """
    Read-only view of a byte range inside a shared TextBuffer.

    Behaves like a ``str`` for reading: comparison, hashing, ``in``,
    iteration over characters, and every non-mutating ``str`` method.
    Slicing and trimming return new views over the same buffer instead of
    copies.

    Key Features
    ------------

    **Zero-copy slicing** - Views share one buffer:

        >>> text = SharedText("hello world")
        >>> word = text[6:11]
        >>> word.buffer is text.buffer
        True

    **Validated derivation** - Only genuine sub-ranges are accepted:

        >>> text.derive(word)
        SharedText('world', start=6, len=5)
        >>> text.derive("world") is None  # unrelated str
        True

    **Byte offsets** - Lengths and positions count UTF-8 bytes:

        >>> emoji = SharedText("hi 🎉")
        >>> len(emoji)
        7
        >>> emoji.find("🎉")
        3

    Memory Management
    -----------------

    Each view holds a reference to its TextBuffer. Dropping the root view
    does not invalidate views derived from it:

        >>> root = SharedText("hello world")
        >>> tail = root[6:]
        >>> del root
        >>> str(tail)
        'world'

    See Also
    --------
    TextBuffer : The shared backing storage.
    """

    __slots__ = ("_buffer", "_start", "_stop", "_text")

    def __init__(self, source: TextSource | TextBuffer | SharedText):
        """
        Create a root view.

        Args:
            source: Text to share. A ``str`` or UTF-8 bytes allocate a new
                buffer. A TextBuffer is viewed in full. A SharedText is
                re-viewed over the same buffer and range.

        Raises
        ------
            ValidationError: If bytes are not valid UTF-8 (code="INVALID_UTF8").
            InteropError: If ``source`` has an unsupported type
                (code="UNSUPPORTED_SOURCE").
        """
        if isinstance(source, SharedText):
            self._buffer = source._buffer
            self._start = source._start
            self._stop = source._stop
            self._text = source._text
            return

        if not isinstance(source, TextBuffer):
            source = TextBuffer(source)
        self._buffer = source
        self._start = 0
        self._stop = len(source)
        self._text = source._text

    @classmethod
    def new(cls, source: TextSource | TextBuffer | SharedText) -> SharedText:
        """Create a root view. Same as calling the class."""
        return cls(source)

    @classmethod
    def _from_range(cls, buffer: TextBuffer, start: int, stop: int) -> SharedText:
        """Create a view without validation (internal helper).

        Callers guarantee ``0 <= start <= stop <= len(buffer)`` on character
        boundaries.
        """
        view = cls.__new__(cls)
        view._buffer = buffer
        view._start = start
        view._stop = stop
        view._text = None
        return view

    @classmethod
    def from_slice(cls, owner: SharedText, candidate: object) -> SharedText | None:
        """Derive a view of ``candidate`` from ``owner``. See ``derive()``."""
        return owner.derive(candidate)

    # =========================================================================
    # Derivation
    # =========================================================================

    def derive(self, candidate: object) -> SharedText | None:
        """
        Wrap ``candidate`` as a view if it lies inside this view's buffer.

        The candidate must come from this text's own slicing operations
        (``text[i:j]``, ``text.trim()``, ...) or from any other view over
        the same buffer. Containment is checked against the whole backing
        buffer, not against this view's range.

        Args:
            candidate: The claimed sub-range.

        Returns
        -------
            A new SharedText sharing this buffer, or None when ``candidate``
            is not a view into it (plain ``str``, another buffer, out of range).

        Example:
            >>> text = SharedText("hello world")
            >>> text.derive(text[3:6])
            SharedText('lo ', start=3, len=3)
            >>> text.derive("foo") is None
            True
            >>> text.derive(SharedText("hello world")) is None  # equal, but foreign
            True
        """
        if not isinstance(candidate, SharedText) or candidate._buffer is not self._buffer:
            self._log_rejected(candidate, "foreign buffer")
            return None

        buffer_end = len(self._buffer)
        start = candidate._start
        stop = candidate._stop
        if start < 0 or start > buffer_end:
            self._log_rejected(candidate, "start out of range")
            return None
        if stop < start or stop > buffer_end:
            self._log_rejected(candidate, "end out of range")
            return None

        view = self._from_range(self._buffer, start, stop)
        view._text = candidate._text
        return view

    sliced = derive

    def _log_rejected(self, candidate: object, reason: str) -> None:
        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                "Rejected derivation: %s",
                reason,
                extra={
                    "candidate_type": type(candidate).__name__,
                    "nbytes": len(self._buffer),
                },
            )

    # =========================================================================
    # Slicing
    # =========================================================================

    def __getitem__(self, key: slice) -> SharedText:
        """
        Slice by UTF-8 byte offsets relative to this view.

        ``None`` and negative bounds behave as for ``str``. The result is a
        view over the same buffer.

        Raises
        ------
            TypeError: If ``key`` is an integer. Use ``as_bytes()[i]``.
            ValidationError: If the slice has a step (code="SLICE_STEP_UNSUPPORTED")
                or a bound splits a character (code="NOT_CHAR_BOUNDARY").

        Example:
            >>> text = SharedText("hello world")
            >>> text[:5]
            SharedText('hello', start=0, len=5)
            >>> text[-5:]
            SharedText('world', start=6, len=5)
        """
        if not isinstance(key, slice):
            raise TypeError(
                "SharedText indices must be slices of byte offsets, "
                f"not {type(key).__name__}. Use as_bytes()[i] for a single byte."
            )
        if key.step is not None and key.step != 1:
            raise ValidationError(
                "SharedText does not support a step when slicing",
                code="SLICE_STEP_UNSUPPORTED",
                details={"step": key.step},
            )
        start, stop, _ = key.indices(len(self))
        return self._subview(start, max(start, stop))

    def slice_bytes(self, start: int | None = None, stop: int | None = None) -> SharedText:
        """Explicit form of ``text[start:stop]``."""
        return self[start:stop]

    def _subview(self, start: int, stop: int) -> SharedText:
        data = self._buffer._data
        for offset in (start, stop):
            if not _is_char_boundary(data, self._start + offset):
                raise ValidationError(
                    f"Byte offset {offset} is not on a character boundary",
                    code="NOT_CHAR_BOUNDARY",
                    details={"offset": offset},
                )
        return self._from_range(self._buffer, self._start + start, self._start + stop)

    # =========================================================================
    # Trimming
    # =========================================================================

    def trim(self, chars: str | None = None) -> SharedText:
        """
        Strip leading and trailing whitespace (or ``chars``), as ``str.strip``.

        Example:
            >>> SharedText("  hi  ").trim()
            SharedText('hi', start=2, len=2)
        """
        return self._trimmed(chars, leading=True, trailing=True)

    def trim_start(self, chars: str | None = None) -> SharedText:
        """Strip leading whitespace (or ``chars``), as ``str.lstrip``."""
        return self._trimmed(chars, leading=True, trailing=False)

    def trim_end(self, chars: str | None = None) -> SharedText:
        """Strip trailing whitespace (or ``chars``), as ``str.rstrip``."""
        return self._trimmed(chars, leading=False, trailing=True)

    strip = trim
    lstrip = trim_start
    rstrip = trim_end

    def _trimmed(self, chars: str | None, *, leading: bool, trailing: bool) -> SharedText:
        text = self.as_text()
        start = 0
        stop = len(self)
        if leading:
            kept = text.lstrip(chars)
            start = _utf8_len(text[: len(text) - len(kept)])
            text = kept
        if trailing:
            kept = text.rstrip(chars)
            stop -= _utf8_len(text[len(kept) :])
            text = kept

        candidate = self._from_range(self._buffer, self._start + start, self._start + stop)
        candidate._text = text
        derived = self.derive(candidate)
        # Trimming never leaves the buffer
        assert derived is not None
        return derived

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def buffer(self) -> TextBuffer:
        return self._buffer

    @property
    def start(self) -> int:
        """Start byte offset in the buffer (inclusive)."""
        return self._start

    @property
    def stop(self) -> int:
        """End byte offset in the buffer (exclusive)."""
        return self._stop

    @property
    def nbytes(self) -> int:
        return self._stop - self._start

    def __len__(self) -> int:
        """Return the length in UTF-8 bytes."""
        return self._stop - self._start

    def as_bytes(self) -> memoryview:
        """
        Return the view's bytes without copying.

        The memoryview is read-only and keeps the buffer alive while it exists.

        Example:
            >>> SharedText("hello world")[6:].as_bytes().tobytes()
            b'world'
        """
        return memoryview(self._buffer._data)[self._start : self._stop]

    def as_text(self) -> str:
        """
        Return the view's contents as ``str``.

        A root view built from a ``str`` returns that original object. Other
        views decode their range once and cache the result. The range is valid
        UTF-8 by construction, so decoding cannot fail.
        """
        text = self._text
        if text is None:
            text = str(self.as_bytes(), "utf-8")
            self._text = text
        return text

    def __str__(self) -> str:
        return self.as_text()

    def __bytes__(self) -> bytes:
        return self.as_bytes().tobytes()

    def __buffer__(self, flags: int) -> memoryview:
        """Buffer protocol (Python 3.12+): ``memoryview(text)`` is zero-copy."""
        return self.as_bytes().__buffer__(flags)

    def __copy__(self) -> SharedText:
        return self

    def __deepcopy__(self, memo: dict) -> SharedText:
        return self

    # =========================================================================
    # Text behavior
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SharedText):
            if (
                other._buffer is self._buffer
                and other._start == self._start
                and other._stop == self._stop
            ):
                return True
            return self.as_bytes() == other.as_bytes()
        if isinstance(other, str):
            return self.as_text() == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, SharedText):
            return self.as_text() < other.as_text()
        if isinstance(other, str):
            return self.as_text() < other
        return NotImplemented

    def __hash__(self) -> int:
        # Matches hash(str(self)) so views and str are interchangeable dict keys
        return hash(self.as_text())

    def __bool__(self) -> bool:
        return self._stop > self._start

    def __iter__(self) -> Iterator[str]:
        """Iterate over characters."""
        return iter(self.as_text())

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (str, SharedText)):
            raise TypeError(
                f"'in <SharedText>' requires str or SharedText as left operand, "
                f"not {type(item).__name__}"
            )
        return self._buffer._data.find(self._needle(item), self._start, self._stop) >= 0

    def _needle(self, sub: str | SharedText) -> bytes | memoryview:
        if isinstance(sub, SharedText):
            return sub.as_bytes()
        if isinstance(sub, str):
            return sub.encode("utf-8")
        raise TypeError(f"must be str or SharedText, not {type(sub).__name__}")

    def _bounds(self, start: int | None, end: int | None) -> tuple[int, int]:
        # Only the end is clamped to the view. A start past the end stays
        # inverted so the bytes search reports a miss, as str does.
        n = len(self)
        lo = 0 if start is None else start
        hi = n if end is None else end
        if lo < 0:
            lo = max(lo + n, 0)
        if hi < 0:
            hi = max(hi + n, 0)
        elif hi > n:
            hi = n
        return self._start + lo, self._start + hi

    def find(self, sub: str | SharedText, start: int | None = None, end: int | None = None) -> int:
        """
        Return the lowest byte offset of ``sub`` within this view, or -1.

        Searches the shared buffer in place. Offsets are relative to this view
        and can be passed straight back into slicing.

        Example:
            >>> text = SharedText("héllo world")
            >>> pos = text.find("world")
            >>> pos
            7
            >>> text[pos:]
            SharedText('world', start=7, len=5)
        """
        lo, hi = self._bounds(start, end)
        pos = self._buffer._data.find(self._needle(sub), lo, hi)
        return pos if pos < 0 else pos - self._start

    def rfind(self, sub: str | SharedText, start: int | None = None, end: int | None = None) -> int:
        """Return the highest byte offset of ``sub`` within this view, or -1."""
        lo, hi = self._bounds(start, end)
        pos = self._buffer._data.rfind(self._needle(sub), lo, hi)
        return pos if pos < 0 else pos - self._start

    def index(self, sub: str | SharedText, start: int | None = None, end: int | None = None) -> int:
        """Like ``find()`` but raise ValueError when ``sub`` is not found."""
        pos = self.find(sub, start, end)
        if pos < 0:
            raise ValueError("substring not found")
        return pos

    def rindex(self, sub: str | SharedText, start: int | None = None, end: int | None = None) -> int:
        """Like ``rfind()`` but raise ValueError when ``sub`` is not found."""
        pos = self.rfind(sub, start, end)
        if pos < 0:
            raise ValueError("substring not found")
        return pos

    def count(self, sub: str | SharedText, start: int | None = None, end: int | None = None) -> int:
        """Return the number of non-overlapping occurrences of ``sub``."""
        lo, hi = self._bounds(start, end)
        return self._buffer._data.count(self._needle(sub), lo, hi)

    def startswith(
        self,
        prefix: str | SharedText | tuple[str | SharedText, ...],
        start: int | None = None,
        end: int | None = None,
    ) -> bool:
        lo, hi = self._bounds(start, end)
        if isinstance(prefix, tuple):
            return self._buffer._data.startswith(tuple(map(self._as_bytes_needle, prefix)), lo, hi)
        return self._buffer._data.startswith(self._as_bytes_needle(prefix), lo, hi)

    def endswith(
        self,
        suffix: str | SharedText | tuple[str | SharedText, ...],
        start: int | None = None,
        end: int | None = None,
    ) -> bool:
        lo, hi = self._bounds(start, end)
        if isinstance(suffix, tuple):
            return self._buffer._data.endswith(tuple(map(self._as_bytes_needle, suffix)), lo, hi)
        return self._buffer._data.endswith(self._as_bytes_needle(suffix), lo, hi)

    def _as_bytes_needle(self, sub: str | SharedText) -> bytes:
        # bytes.startswith/endswith only take bytes (or a tuple of bytes)
        needle = self._needle(sub)
        return needle if isinstance(needle, bytes) else needle.tobytes()

    def __getattr__(self, name: str) -> Any:
        """Delegate remaining read-only ``str`` methods to ``as_text()``."""
        if name.startswith("_") or not hasattr(str, name):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute {name!r}")
        return getattr(self.as_text(), name)

    def __repr__(self) -> str:
        text = self.as_text()
        if len(text) > 60:
            text = text[:57] + "..."
        return f"{type(self).__name__}({text!r}, start={self._start}, len={len(self)})"

"""
Root view construction tests.

Tests for SharedText(...), SharedText.new(), sharedtext.new() and TextBuffer:
- Accepted source types and the single allocation point
- UTF-8 validation at entry
- Unsupported sources

Maps to: sharedtext/view.py, sharedtext/api.py
"""

import pytest

from sharedtext import SharedText, TextBuffer, new
from sharedtext.exceptions import InteropError, SharedTextError, ValidationError


class TestFromStr:
    """Root views built from str."""

    def test_covers_full_range(self):
        """A root view spans the whole buffer."""
        text = SharedText("hello world")

        assert text.start == 0
        assert text.stop == 11
        assert len(text.buffer) == 11

    def test_keeps_original_str(self):
        """as_text() on a root view returns the original str object."""
        source = "".join(["hello", " ", "world"])
        text = SharedText(source)

        assert text.as_text() is source

    def test_encodes_once(self):
        """The buffer holds the UTF-8 encoding."""
        text = SharedText("héllo")

        assert text.buffer.data == "héllo".encode("utf-8")
        assert len(text) == 6

    def test_empty(self):
        """The empty string makes an empty root view."""
        text = SharedText("")

        assert len(text) == 0
        assert text.as_text() == ""
        assert not text

    def test_lone_surrogate_rejected(self):
        """A str that cannot be UTF-8 encoded is rejected at entry."""
        with pytest.raises(ValidationError) as exc_info:
            SharedText("ab\ud800")

        assert exc_info.value.code == "INVALID_UTF8"
        assert exc_info.value.details == {"index": 2}


class TestFromBytes:
    """Root views built from UTF-8 bytes."""

    @pytest.mark.parametrize(
        "source",
        [b"hello", bytearray(b"hello"), memoryview(b"hello")],
        ids=["bytes", "bytearray", "memoryview"],
    )
    def test_bytes_like_sources(self, source):
        """bytes, bytearray and memoryview are accepted."""
        text = SharedText(source)

        assert text == "hello"
        assert isinstance(text.buffer.data, bytes)

    def test_bytes_not_copied(self):
        """A bytes source becomes the buffer without copying."""
        source = "日本語".encode("utf-8")
        text = SharedText(source)

        assert text.buffer.data is source

    def test_bytearray_snapshot(self):
        """Mutating a bytearray source afterwards does not change the view."""
        source = bytearray(b"hello")
        text = SharedText(source)
        source[0] = ord("j")

        assert text == "hello"

    def test_invalid_utf8(self):
        """Invalid UTF-8 raises ValidationError with the failing offset."""
        with pytest.raises(ValidationError) as exc_info:
            SharedText(b"ok\xff\xfe")

        err = exc_info.value
        assert err.code == "INVALID_UTF8"
        assert err.details == {"offset": 2}
        assert "offset 2" in str(err)

    def test_invalid_utf8_is_value_error(self):
        """ValidationError can be caught as ValueError or SharedTextError."""
        with pytest.raises(ValueError):
            SharedText(b"\xc3")
        with pytest.raises(SharedTextError):
            SharedText(b"\xc3")


class TestFromSharedStorage:
    """Root views over existing buffers and views."""

    def test_from_buffer(self):
        """A TextBuffer converts into a full-range view."""
        buffer = TextBuffer("hello world")
        text = SharedText(buffer)

        assert text.buffer is buffer
        assert (text.start, text.stop) == (0, 11)

    def test_buffer_view(self):
        """TextBuffer.view() is the root view."""
        buffer = TextBuffer("hello")
        assert buffer.view() == "hello"
        assert buffer.view().buffer is buffer

    def test_from_view_shares_range(self, hello):
        """SharedText(view) re-views the same buffer and range."""
        word = hello[6:]
        copy = SharedText(word)

        assert copy.buffer is hello.buffer
        assert (copy.start, copy.stop) == (6, 11)
        assert copy == "world"

    def test_buffer_text_and_repr(self):
        """TextBuffer exposes its text and byte count."""
        buffer = TextBuffer(b"hi \xf0\x9f\x8e\x89")

        assert buffer.text == "hi 🎉"
        assert repr(buffer) == "TextBuffer(nbytes=7)"


class TestConstructorSpellings:
    """Equivalent ways to build a root view."""

    def test_new_classmethod(self):
        """SharedText.new() matches the constructor."""
        assert SharedText.new("abc") == SharedText("abc")

    def test_module_new(self):
        """sharedtext.new() matches the constructor."""
        text = new("abc")
        assert isinstance(text, SharedText)
        assert text == "abc"


class TestUnsupportedSources:
    """Sources that cannot become text."""

    @pytest.mark.parametrize("source", [42, 3.5, None, ["a"], object()])
    def test_rejected(self, source):
        """Unsupported types raise InteropError."""
        with pytest.raises(InteropError) as exc_info:
            SharedText(source)

        assert exc_info.value.code == "UNSUPPORTED_SOURCE"
        assert exc_info.value.details["type"] == type(source).__name__

    def test_interop_error_is_type_error(self):
        """InteropError can be caught as TypeError."""
        with pytest.raises(TypeError):
            TextBuffer(42)

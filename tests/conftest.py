"""
Global pytest fixtures for sharedtext tests.

This module provides:
- The imported package
- Root views over the reference strings
- Test string collections (ASCII, multi-byte, whitespace)
"""

import pytest

HELLO = "hello world"
PADDED = "  hi  "

# Strings mixing 1-, 2-, 3- and 4-byte UTF-8 sequences
MULTIBYTE_STRINGS = [
    "héllo wörld",
    "日本語のテキスト",
    "hi 🎉 there",
    "Ünïcödé text",
    "a​b",
]

WHITESPACE_STRINGS = [
    "",
    " ",
    "\t\n",
    "  hi  ",
    "　全角　",
    " nbsp ",
    "no-padding",
]


@pytest.fixture
def sharedtext():
    """Import and return the sharedtext module."""
    import sharedtext

    return sharedtext


@pytest.fixture
def hello():
    """Root view over "hello world"."""
    from sharedtext import SharedText

    return SharedText(HELLO)


@pytest.fixture
def padded():
    """Root view over "  hi  "."""
    from sharedtext import SharedText

    return SharedText(PADDED)


@pytest.fixture(params=MULTIBYTE_STRINGS)
def multibyte(request):
    """Root view over each multi-byte test string."""
    from sharedtext import SharedText

    return SharedText(request.param)


@pytest.fixture
def restore_logger():
    """Restore the sharedtext logger's handlers and level after a test."""
    from sharedtext._logging import logger

    handlers = logger.handlers[:]
    level = logger.level
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def char_boundaries(text: str) -> list[int]:
    """Return every UTF-8 byte offset of ``text`` that starts a character, plus the end."""
    offsets = [0]
    for ch in text:
        offsets.append(offsets[-1] + len(ch.encode("utf-8")))
    return offsets

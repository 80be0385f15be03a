"""
sharedtext - Immutable text with zero-copy, validated substring views.

Build a text once, then slice it as often as needed. Every slice is a view
into the same immutable UTF-8 buffer; nothing is copied and the buffer lives
exactly as long as the last view that uses it.

Quick Start
-----------

    >>> from sharedtext import SharedText
    >>>
    >>> text = SharedText("  hello world  ")
    >>> body = text.trim()
    >>> body
    SharedText('hello world', start=2, len=11)
    >>> word = body[6:]
    >>> word == "world"
    True

Validated derivation:

    >>> text.derive(word)         # a genuine sub-range of text's buffer
    SharedText('world', start=8, len=5)
    >>> text.derive("world") is None   # an unrelated str
    True

Byte offsets, not character indices:

    >>> text = SharedText("héllo")
    >>> len(text)
    6
    >>> text[text.find("llo"):]
    SharedText('llo', start=3, len=3)


Core Classes
------------

- `SharedText` - The view. Reads like a ``str``.
- `TextBuffer` - The shared, immutable UTF-8 backing storage.

Functions:
- `new`, `derive`, `trim`, `trim_start`, `trim_end`, `as_bytes`, `as_text`


Logging
-------

sharedtext logs only at DEBUG. Enable it to see rejected derivations:

    >>> import sharedtext
    >>> sharedtext.setup_logging("debug", format="human")
"""

from sharedtext._logging import set_log_level as set_log_level
from sharedtext._logging import setup_logging as setup_logging
from sharedtext._version import __version__ as __version__

# Functions
from sharedtext.api import (
    as_bytes,
    as_text,
    derive,
    new,
    trim,
    trim_end,
    trim_start,
)

# Exceptions (all also available via sharedtext.exceptions)
from sharedtext.exceptions import (
    InteropError,
    SharedTextError,
    ValidationError,
)

# Views
from sharedtext.view import SharedText, TextBuffer

# =============================================================================
# Public API - Mapped 1:1 to Documentation
# =============================================================================
#
# Guidelines for maintainers:
#   - Only add symbols that deserve top-level documentation
#   - Use comments to group related exports into sections
#   - Other symbols remain importable via submodules
#
__all__ = [
    # Views
    "SharedText",
    "TextBuffer",
    # Functions
    "new",
    "derive",
    "trim",
    "trim_start",
    "trim_end",
    "as_bytes",
    "as_text",
    # Logging
    "setup_logging",
    "set_log_level",
    # Exceptions
    "SharedTextError",
    "ValidationError",
    "InteropError",
]

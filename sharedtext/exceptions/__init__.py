"""
sharedtext exceptions.

This module defines the exception hierarchy for sharedtext:

    SharedTextError (base)
    ├── ValidationError - Invalid input at an entry point (bad UTF-8, bad slice)
    └── InteropError - Source value of an unsupported type
"""

from .exceptions import (
    InteropError,
    SharedTextError,
    ValidationError,
)

# =============================================================================
# Public API - See sharedtext/__init__.py for documentation mapping guidelines
# =============================================================================
__all__ = [
    # Base
    "SharedTextError",
    # Validation
    "ValidationError",
    # Interop
    "InteropError",
]

"""
Root pytest configuration.

This file marks the pytest rootdir. pytest inserts the directory of a
rootdir-level conftest.py into sys.path, which is what lets test modules
import shared constants with ``from tests.conftest import ...``. It defines no
fixtures; those live in tests/conftest.py.
"""

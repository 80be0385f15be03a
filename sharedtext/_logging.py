"""
Structured logging for sharedtext.

sharedtext emits two kinds of records, both at DEBUG: a buffer allocation and
a rejected derivation. Each carries a ``scope`` and, where known, the buffer
size as ``nbytes``. Nothing is printed at the default level.

Environment::

    SHAREDTEXT_LOG_LEVEL=trace|debug|info|warn|error|fatal|off (default: warn)
    SHAREDTEXT_LOG_FORMAT=human|json (default: human)

JSON records follow the OpenTelemetry Logging Data Model.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import Any

from ._version import __version__

__all__ = ["logger", "setup_logging", "set_log_level", "scoped_logger"]

_OFF = logging.CRITICAL + 10

_NAME_TO_LEVEL = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "off": _OFF,
}

_DEFAULT_LEVEL = logging.WARNING

# Attributes copied from a record into the JSON output
_ATTRIBUTES = ("scope", "nbytes", "candidate_type")


def _parse_level(level: str | int) -> int:
    if isinstance(level, str):
        return _NAME_TO_LEVEL.get(level.lower(), _DEFAULT_LEVEL)
    return level


def _severity(record: logging.LogRecord) -> str:
    # OpenTelemetry spells these WARN and FATAL
    return {"WARNING": "WARN", "CRITICAL": "FATAL"}.get(record.levelname, record.levelname)


def _location(record: logging.LogRecord) -> str:
    """``view.py:42`` style location, relative to the package."""
    path = record.pathname.replace(os.sep, "/")
    marker = "sharedtext/"
    if marker in path:
        path = path[path.rindex(marker) + len(marker) :]
    return f"{path}:{record.lineno}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record (OpenTelemetry log data model)."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        attributes: dict[str, Any] = {"scope": "sharedtext"}
        for key in _ATTRIBUTES:
            value = getattr(record, key, None)
            if value is not None:
                attributes[key] = value
        filepath, _, lineno = _location(record).rpartition(":")
        attributes["code.filepath"] = filepath
        attributes["code.lineno"] = int(lineno)

        return json.dumps(
            {
                "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%f") + "000Z",
                "severityText": _severity(record),
                "body": record.getMessage(),
                "attributes": attributes,
                "resource": {"service.name": "sharedtext", "service.version": __version__},
            },
            separators=(",", ":"),
            default=str,
        )


class HumanFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL [scope] message (N bytes) [file:line]``"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line = (
            f"{created:%H:%M:%S} {_severity(record):<5} "
            f"[{getattr(record, 'scope', 'sharedtext')}] {record.getMessage()}"
        )
        nbytes = getattr(record, "nbytes", None)
        if nbytes is not None:
            line += f" ({nbytes} bytes)"
        return f"{line} [{_location(record)}]"


_FORMATTERS = {"json": JsonFormatter, "human": HumanFormatter}


def _get_log_level() -> int:
    """Level from SHAREDTEXT_LOG_LEVEL, or its alias SHAREDTEXT_LOG."""
    name = os.environ.get("SHAREDTEXT_LOG_LEVEL") or os.environ.get("SHAREDTEXT_LOG", "warn")
    return _parse_level(name)


def _get_log_format() -> str:
    return os.environ.get("SHAREDTEXT_LOG_FORMAT", "human").lower()


def _create_handler(format: str | None = None) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    formatter = _FORMATTERS.get((format or _get_log_format()).lower(), HumanFormatter)
    handler.setFormatter(formatter())
    return handler


logger = logging.getLogger("sharedtext")


def setup_logging(level: str | int = "WARN", format: str | None = None) -> None:
    """
    Configure sharedtext logging.

    Replaces any handlers on the ``sharedtext`` logger with one stderr handler.

    Parameters
    ----------
    level : str or int, default "WARN"
        A level name ("debug", "warn", "off", ...) or a ``logging`` constant.
    format : str, optional
        "json" or "human". Defaults to SHAREDTEXT_LOG_FORMAT, then "human".

    Examples
    --------
        >>> import sharedtext
        >>> sharedtext.setup_logging("DEBUG", format="json")
    """
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.addHandler(_create_handler(format))
    logger.setLevel(_parse_level(level))


def set_log_level(level: str | int) -> None:
    """Set logging verbosity without touching handlers.

    Unknown names fall back to 'warn'.

    Example:
        >>> import sharedtext
        >>> sharedtext.set_log_level('debug')  # Show rejected derivations
    """
    logger.setLevel(_parse_level(level))


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Adds the adapter's scope to the per-call ``extra``."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """Return an adapter over the package logger that stamps ``scope``."""
    return _ScopedLoggerAdapter(logger, {"scope": scope})


# User configuration wins over the environment
if not logger.handlers:
    logger.addHandler(_create_handler())
    logger.setLevel(_get_log_level())

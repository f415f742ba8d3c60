"""Logging for ``budget_report``.

Everything the package logs goes through loggers below ``"budget_report"``:
API fetch counts at INFO, watched groups missing from the budget at WARNING,
dropped transactions and table sizes at DEBUG.

The ``budget-report`` CLI calls :func:`configure_logging` once at startup to
send those records to stderr. When the package is imported as a library,
nothing is configured and the package logger only carries a ``NullHandler``,
so the host application's logging setup decides what is shown.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "budget_report"
_LEVEL_ENV_VAR = "BUDGET_REPORT_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from_str(value: str) -> int | None:
    # "10", "debug", "WARNING"...
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    numeric = getattr(logging, value, None)
    return numeric if isinstance(numeric, int) else None


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    for candidate in (level, os.getenv(_LEVEL_ENV_VAR)):
        if candidate:
            parsed = _level_from_str(candidate)
            if parsed is not None:
                return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Send ``budget_report`` log records to ``stream`` (stderr by default).

    Only the first call has an effect; later calls return the already
    configured logger unchanged.

    Parameters
    ----------
    level:
        ``logging`` level number or name. When omitted or unrecognized, the
        ``BUDGET_REPORT_LOG_LEVEL`` environment variable is consulted, then
        ``INFO``.
    fmt:
        Format string for the handler.
    stream:
        Destination stream; ``sys.stderr`` at call time when ``None``.
    """

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _CONFIGURED:
        return logger

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Report output goes to stdout; keep log lines off the root logger.
    logger.propagate = False

    _CONFIGURED = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a ``budget_report.<module>`` name."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]

"""Pytest configuration for test isolation.

The package reads its token, API base URL, config path, HTTP timeout and log
level from the environment, and the CLI may pull more of them in from a
``.env``. Tests must never see a developer's real YNAB credentials or hit the
live API, so every one of those variables is cleared per test.

``configure_logging`` is a process-wide, run-once switch that also turns off
propagation on the package logger, which would hide records from ``caplog``.
The package logger is restored after each test.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from budget_report import logging_setup

_ENV_VARS = (
    "YNAB_PERSONAL_ACCESS_TOKEN",
    "YNAB_API_BASE_URL",
    "BUDGET_REPORT_CONFIG",
    "BUDGET_REPORT_HTTP_TIMEOUT",
    "BUDGET_REPORT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    logger = logging.getLogger("budget_report")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate

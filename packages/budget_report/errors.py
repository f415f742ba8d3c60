"""Exception types raised by ``budget_report``.

"Not found" conditions (an unknown budget name, a watched group missing from
the budget) are not errors in the report core; they surface as ``None`` or
empty results and the caller decides whether they are fatal.
"""

from __future__ import annotations


class BudgetReportError(Exception):
    """Base class for all errors raised by this package."""


class MalformedInputError(BudgetReportError, ValueError):
    """A budget record cannot be normalized into tabular form."""


class InvalidDateError(BudgetReportError, ValueError):
    """A date cannot be constructed or parsed."""


class ConfigError(BudgetReportError):
    """The configuration file is missing, unreadable or invalid."""


class YnabApiError(BudgetReportError):
    """The YNAB API returned an error response or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "BudgetReportError",
    "ConfigError",
    "InvalidDateError",
    "MalformedInputError",
    "YnabApiError",
]

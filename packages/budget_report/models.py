"""Data models and table schemas for ``budget_report``.

Budget records (categories, transactions, budget summaries) arrive from the
YNAB API as JSON and are validated into pydantic models. Monetary fields on
these models are integers in milliunits (1/1000 of a currency unit); the
normalizers in :mod:`budget_report.normalizers` are the only place that scale
them to currency floats.

Derived tables (report rows, group totals) are ``pandas.DataFrame`` objects
whose column order is fixed by the ``*_COLUMNS`` tuples below.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# API records
# ---------------------------------------------------------------------------

# YNAB responses carry many more fields than the report needs; ignore them.
_RECORD_CONFIG = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    return v if v.strip() else None


class BudgetSummary(BaseModel):
    """Budget identity, used to resolve a configured budget name to an id."""

    model_config = _RECORD_CONFIG

    id: str
    name: str


class Category(BaseModel):
    """A budget category snapshot. Amounts are milliunits."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    category_group_name: str | None = None
    budgeted: int
    balance: int
    goal_cadence: int | None = None
    goal_target: int | None = None
    hidden: bool = False
    deleted: bool = False

    @field_validator("category_group_name")
    @classmethod
    def _normalize_group(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class CategoryGroup(BaseModel):
    """A category group with its categories in source (display) order."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    hidden: bool = False
    deleted: bool = False
    categories: list[Category] = Field(default_factory=list)


class SubTransaction(BaseModel):
    """One part of a split transaction. ``payee_name`` falls back to the parent's."""

    model_config = _RECORD_CONFIG

    amount: int
    payee_name: str | None = None
    category_name: str | None = None
    deleted: bool = False

    @field_validator("payee_name", "category_name")
    @classmethod
    def _normalize_names(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class Transaction(BaseModel):
    """A transaction; negative ``amount`` is an outflow.

    For split transactions YNAB reports ``category_name == "Split"`` on the
    parent and the real categories on ``subtransactions``.
    """

    model_config = _RECORD_CONFIG

    id: str
    date: datetime.date
    amount: int
    payee_name: str | None = None
    category_name: str | None = None
    subtransactions: list[SubTransaction] = Field(default_factory=list)
    deleted: bool = False

    @field_validator("payee_name", "category_name")
    @classmethod
    def _normalize_names(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


# Ordered mapping of category group name -> display color. Order only matters
# for rendering; the report core treats it as a set of keys.
type WatchList = Mapping[str, str]


# ---------------------------------------------------------------------------
# Reporting week
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReportingWeek:
    """A month-relative reporting week.

    Attributes
    ----------
    week_start:
        First day of the week; always day ``1 + 7k`` of its month.
    week_end:
        Last day of the week (inclusive). Clamped to the end of the month, so
        the final week of a month may be shorter than seven days.
    week_number:
        1-based position of the week within its calendar month.
    """

    week_start: date
    week_end: date
    week_number: int

    def __post_init__(self) -> None:
        if self.week_end < self.week_start:
            raise ValueError("ReportingWeek.week_end must not precede week_start")
        if (self.week_start.year, self.week_start.month) != (
            self.week_end.year,
            self.week_end.month,
        ):
            raise ValueError("ReportingWeek must not span two months")
        if self.week_number < 1:
            raise ValueError("ReportingWeek.week_number must be a positive integer")

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.week_start <= day <= self.week_end


# ---------------------------------------------------------------------------
# Table schemas
# ---------------------------------------------------------------------------

CATEGORY_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "category_group_name",
    "budgeted",
    "balance",
    "goal_cadence",
    "goal_target",
    "hidden",
)

TRANSACTION_COLUMNS: tuple[str, ...] = (
    "id",
    "date",
    "amount",
    "payee_name",
    "category_name",
)

REPORT_COLUMNS: tuple[str, ...] = (
    "category_name",
    "category_group_name",
    "budgeted",
    "balance",
    "spent",
    "goal_cadence",
    "goal_target",
)

GROUP_TOTALS_COLUMNS: tuple[str, ...] = (
    "category_group_name",
    "budgeted",
    "spent",
    "balance",
)


__all__ = [
    "BudgetSummary",
    "Category",
    "CategoryGroup",
    "SubTransaction",
    "Transaction",
    "WatchList",
    "ReportingWeek",
    "CATEGORY_COLUMNS",
    "TRANSACTION_COLUMNS",
    "REPORT_COLUMNS",
    "GROUP_TOTALS_COLUMNS",
]

"""Weekly report tables: date filtering, category join and group totals.

All functions take and return ``pandas.DataFrame`` objects and never mutate
their inputs. Monetary columns are already in currency units (see
:mod:`budget_report.normalizers`).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

import pandas as pd

from .logging_setup import get_logger
from .models import GROUP_TOTALS_COLUMNS, REPORT_COLUMNS

# Bucket name for report rows whose category has no group.
UNGROUPED_LABEL = "Ungrouped"

_SUMMED_COLUMNS = ["budgeted", "spent", "balance"]

_logger = get_logger("budget_report.report")


def relevant_transactions(frame: pd.DataFrame, start: date, end: date) -> pd.DataFrame:
    """Keep spend events dated within ``[start, end]`` (inclusive).

    An inverted range (``start > end``) yields an empty frame with the same
    columns.
    """

    if start > end:
        return frame.iloc[0:0].copy()

    # The date column holds datetime.date values; compare them as-is.
    mask = frame["date"].between(start, end)
    return frame.loc[mask].reset_index(drop=True)


def build_report_table(
    categories: pd.DataFrame,
    transactions: pd.DataFrame,
    allowed_category_names: Iterable[str],
) -> pd.DataFrame:
    """Join categories against their spending, one row per allowed category.

    Only categories named in ``allowed_category_names`` are kept, in their
    original relative order. ``spent`` is the negated sum of the category's
    transaction amounts (outflows are negative, so spending is positive) and
    defaults to ``0.0`` when nothing was spent. Spending on categories outside
    the allowed set never reaches the report.

    Columns: see :data:`~budget_report.models.REPORT_COLUMNS`.
    """

    allowed = set(allowed_category_names)
    kept = categories.loc[categories["name"].isin(allowed)]

    in_scope = transactions.loc[transactions["category_name"].isin(allowed)]
    totals = in_scope.groupby("category_name", sort=False)["amount"].sum()
    # 0.0 - x rather than -x so a zero total never prints as -0.0
    spent = (0.0 - totals).rename("spent").rename_axis("name").reset_index()

    report = kept.merge(spent, how="left", on="name")
    report["spent"] = report["spent"].fillna(0.0).astype("float64")
    report = report.rename(columns={"name": "category_name"})

    _logger.debug(
        "report table: %d categories, %d with spending",
        len(report),
        int((report["spent"] != 0).sum()),
    )
    return report.loc[:, list(REPORT_COLUMNS)].reset_index(drop=True)


def build_category_group_totals_table(
    report: pd.DataFrame,
    *,
    ungrouped_label: str | None = UNGROUPED_LABEL,
) -> pd.DataFrame:
    """Sum ``budgeted``, ``spent`` and ``balance`` per category group.

    Every group with at least one report row is present, whether or not it
    had spending. Rows without a group name are collected under
    ``ungrouped_label``; pass ``None`` to leave them out. Groups appear in
    the order they are first seen in ``report``.

    Columns: see :data:`~budget_report.models.GROUP_TOTALS_COLUMNS`.
    """

    groups = report["category_group_name"]
    if ungrouped_label is None:
        rows = report.loc[groups.notna()]
    else:
        rows = report.assign(category_group_name=groups.fillna(ungrouped_label))

    totals = (
        rows.groupby("category_group_name", sort=False)[_SUMMED_COLUMNS]
        .sum()
        .reset_index()
    )
    return totals.reindex(columns=list(GROUP_TOTALS_COLUMNS))


def rows_with_spending(report: pd.DataFrame) -> pd.DataFrame:
    """Drop report rows whose ``spent`` is exactly zero."""

    return report.loc[report["spent"] != 0.0].reset_index(drop=True)


__all__ = [
    "UNGROUPED_LABEL",
    "build_category_group_totals_table",
    "build_report_table",
    "relevant_transactions",
    "rows_with_spending",
]

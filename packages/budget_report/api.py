"""Public API and orchestration for the weekly budget report.

:func:`build_weekly_report` runs the pure report pipeline over records that
are already in memory. :func:`run_report` adds the I/O around it: it resolves
the configured budget, fetches categories and transactions through a
:class:`~budget_report.ynab.YnabClient` and then delegates to
:func:`build_weekly_report`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

import pandas as pd

from .calendar_weeks import month_week_for_date, week_header, week_short_label
from .config import Config
from .errors import ConfigError
from .logging_setup import get_logger
from .models import CategoryGroup, ReportingWeek, Transaction, WatchList
from .normalizers import categories_to_frame, transactions_to_frame
from .report import (
    UNGROUPED_LABEL,
    build_category_group_totals_table,
    build_report_table,
    relevant_transactions,
    rows_with_spending,
)
from .watch_list import get_budget_id, get_categories_to_watch, get_missing_category_groups
from .ynab import YnabClient

_logger = get_logger("budget_report.api")


@dataclass(frozen=True, slots=True)
class WeeklyReport:
    """Everything a renderer needs for one reporting week.

    ``report_table`` holds every watched category; ``display_table`` is the
    same table after the show-all-rows filter. ``group_totals`` is always
    computed from the full table.
    """

    week: ReportingWeek
    header: str
    short_label: str
    report_table: pd.DataFrame
    display_table: pd.DataFrame
    group_totals: pd.DataFrame
    missing_groups: frozenset[str]


def build_weekly_report(
    category_groups: Sequence[CategoryGroup],
    transactions: Iterable[Transaction],
    watch_list: WatchList,
    *,
    resolution_date: date,
    show_all_rows: bool = False,
    ungrouped_label: str | None = UNGROUPED_LABEL,
) -> WeeklyReport:
    """Build the report for the week containing ``resolution_date``.

    Only categories of watched groups appear. Watched groups that the budget
    no longer has are logged as warnings and returned on the result.
    """

    week = month_week_for_date(resolution_date)

    missing = get_missing_category_groups(category_groups, watch_list)
    for name in sorted(missing):
        _logger.warning("watched category group %r not found in budget", name)

    watched = get_categories_to_watch(category_groups, watch_list)
    all_categories = [c for g in category_groups for c in g.categories]

    categories_frame = categories_to_frame(all_categories)
    spend = relevant_transactions(
        transactions_to_frame(transactions), week.week_start, week.week_end
    )
    report_table = build_report_table(categories_frame, spend, {c.name for c in watched})
    totals = build_category_group_totals_table(report_table, ungrouped_label=ungrouped_label)
    display = report_table if show_all_rows else rows_with_spending(report_table)

    _logger.debug(
        "week %s..%s: %d report rows, %d displayed, %d groups",
        week.week_start,
        week.week_end,
        len(report_table),
        len(display),
        len(totals),
    )
    return WeeklyReport(
        week=week,
        header=week_header(week),
        short_label=week_short_label(week),
        report_table=report_table,
        display_table=display,
        group_totals=totals,
        missing_groups=frozenset(missing),
    )


def run_report(
    config: Config,
    *,
    client: YnabClient | None = None,
    today: date | None = None,
) -> WeeklyReport:
    """Fetch the configured budget and build its weekly report.

    The resolution date is ``config.resolution_date`` when set, else
    ``today`` (defaulting to the current local date). An unknown budget name
    raises :class:`~budget_report.errors.ConfigError`.
    """

    client = client if client is not None else YnabClient(config.personal_access_token)
    resolution_date = config.resolution_date or today or date.today()
    week = month_week_for_date(resolution_date)

    budget_id = get_budget_id(client.get_budgets(), config.budget_name)
    if budget_id is None:
        raise ConfigError(f"budget {config.budget_name!r} not found")

    groups = client.get_category_groups(budget_id)
    transactions = client.get_transactions(budget_id, since_date=week.week_start)

    return build_weekly_report(
        groups,
        transactions,
        config.category_group_watch_list,
        resolution_date=resolution_date,
        show_all_rows=config.show_all_rows,
    )


__all__ = ["WeeklyReport", "build_weekly_report", "run_report"]

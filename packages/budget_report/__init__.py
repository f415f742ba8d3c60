"""Public interface for the ``budget_report`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import WeeklyReport, build_weekly_report, run_report
from .calendar_weeks import (
    month_week_for_date,
    month_weeks,
    parse_date,
    week_header,
    week_short_label,
)
from .errors import (
    BudgetReportError,
    ConfigError,
    InvalidDateError,
    MalformedInputError,
    YnabApiError,
)
from .models import (
    BudgetSummary,
    Category,
    CategoryGroup,
    ReportingWeek,
    SubTransaction,
    Transaction,
    WatchList,
)
from .normalizers import categories_to_frame, transactions_to_frame
from .report import (
    UNGROUPED_LABEL,
    build_category_group_totals_table,
    build_report_table,
    relevant_transactions,
)
from .watch_list import get_budget_id, get_categories_to_watch, get_missing_category_groups

__all__ = [
    # API
    "WeeklyReport",
    "build_weekly_report",
    "run_report",
    # Calendar weeks
    "month_week_for_date",
    "month_weeks",
    "parse_date",
    "week_header",
    "week_short_label",
    # Report core
    "UNGROUPED_LABEL",
    "categories_to_frame",
    "transactions_to_frame",
    "relevant_transactions",
    "build_report_table",
    "build_category_group_totals_table",
    "get_budget_id",
    "get_missing_category_groups",
    "get_categories_to_watch",
    # Models / types
    "BudgetSummary",
    "Category",
    "CategoryGroup",
    "SubTransaction",
    "Transaction",
    "ReportingWeek",
    "WatchList",
    # Errors
    "BudgetReportError",
    "ConfigError",
    "InvalidDateError",
    "MalformedInputError",
    "YnabApiError",
]

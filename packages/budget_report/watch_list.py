"""Budget lookup and watch-list checks against the budget's category groups.

None of these treat "not found" as an error: an unknown budget name yields
``None`` and missing watched groups come back as a set, leaving it to the
caller to decide whether that is fatal.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import BudgetSummary, Category, CategoryGroup, WatchList


def get_budget_id(summaries: Iterable[BudgetSummary], name: str) -> str | None:
    """Return the id of the first budget named exactly ``name``."""

    for summary in summaries:
        if summary.name == name:
            return summary.id
    return None


def get_missing_category_groups(
    groups: Iterable[CategoryGroup], watch_list: WatchList
) -> set[str]:
    """Return watch-list group names that no category group carries."""

    present = {g.name for g in groups}
    return {name for name in watch_list if name not in present}


def get_categories_to_watch(
    groups: Sequence[CategoryGroup], watch_list: WatchList
) -> list[Category]:
    """Flatten the categories of watched groups in group-then-category order."""

    return [c for g in groups if g.name in watch_list for c in g.categories]


__all__ = [
    "get_budget_id",
    "get_categories_to_watch",
    "get_missing_category_groups",
]

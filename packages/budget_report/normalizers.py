"""Budget records → report-ready DataFrames.

This is the only layer that converts milliunit integers into currency-unit
floats (``MILLIUNITS_PER_UNIT``). Conversion is exact division; sums of many
converted values carry ordinary binary floating point error, which the report
accepts.

- :func:`categories_to_frame` keeps every category (hidden ones included).
- :func:`transactions_to_frame` emits one row per spend event attributable to
  a category. Split transactions are flattened into one row per categorized
  subtransaction; transactions with no resolvable category are dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from .errors import MalformedInputError
from .logging_setup import get_logger
from .models import CATEGORY_COLUMNS, TRANSACTION_COLUMNS, Category, Transaction

MILLIUNITS_PER_UNIT = 1000

# Category name YNAB puts on the parent of a split transaction.
SPLIT_CATEGORY_NAME = "Split"

_logger = get_logger("budget_report.normalizers")

_M = TypeVar("_M", bound=BaseModel)


def _coerce(model: type[_M], item: _M | Mapping[str, Any], *, kind: str, pos: int) -> _M:
    if isinstance(item, model):
        return item
    if not isinstance(item, Mapping):
        raise MalformedInputError(
            f"{kind} #{pos}: expected {model.__name__} or mapping, got {type(item).__name__}"
        )
    try:
        return model.model_validate(item)
    except ValidationError as exc:
        raise MalformedInputError(f"{kind} #{pos}: {exc}") from exc


def to_currency(milliunits: int | None) -> float | None:
    """Scale a milliunit integer to currency units (``None`` passes through)."""

    if milliunits is None:
        return None
    return milliunits / MILLIUNITS_PER_UNIT


def _is_split_sentinel(category_name: str) -> bool:
    return category_name.strip().casefold() == SPLIT_CATEGORY_NAME.casefold()


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def categories_to_frame(categories: Iterable[Category | Mapping[str, Any]]) -> pd.DataFrame:
    """Return one row per category with amounts in currency units.

    Columns: see :data:`~budget_report.models.CATEGORY_COLUMNS`.
    """

    rows: list[dict[str, Any]] = []
    for pos, raw in enumerate(categories):
        c = _coerce(Category, raw, kind="category", pos=pos)
        rows.append(
            {
                "id": c.id,
                "name": c.name,
                "category_group_name": c.category_group_name,
                "budgeted": to_currency(c.budgeted),
                "balance": to_currency(c.balance),
                "goal_cadence": c.goal_cadence,
                "goal_target": to_currency(c.goal_target),
                "hidden": c.hidden,
            }
        )

    frame = pd.DataFrame(rows, columns=list(CATEGORY_COLUMNS))
    return frame.astype(
        {
            "budgeted": "float64",
            "balance": "float64",
            "goal_cadence": "Int64",
            "goal_target": "float64",
            "hidden": "bool",
        }
    )


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def _spend_events(tx: Transaction) -> Iterator[dict[str, Any]]:
    if tx.deleted:
        return

    if tx.subtransactions:
        # The parent's own category ("Split") and amount are never attributed.
        for sub in tx.subtransactions:
            if sub.deleted or sub.category_name is None:
                continue
            yield {
                "id": tx.id,
                "date": tx.date,
                "amount": to_currency(sub.amount),
                "payee_name": sub.payee_name if sub.payee_name is not None else tx.payee_name,
                "category_name": sub.category_name,
            }
        return

    if tx.category_name is None or _is_split_sentinel(tx.category_name):
        return

    yield {
        "id": tx.id,
        "date": tx.date,
        "amount": to_currency(tx.amount),
        "payee_name": tx.payee_name,
        "category_name": tx.category_name,
    }


def transactions_to_frame(
    transactions: Iterable[Transaction | Mapping[str, Any]],
) -> pd.DataFrame:
    """Flatten transactions into per-category spend events.

    Row order follows the input; a split transaction's rows follow its
    subtransaction order. Columns: see
    :data:`~budget_report.models.TRANSACTION_COLUMNS`. The ``date`` column
    holds :class:`datetime.date` values.
    """

    rows: list[dict[str, Any]] = []
    dropped = 0
    for pos, raw in enumerate(transactions):
        tx = _coerce(Transaction, raw, kind="transaction", pos=pos)
        events = list(_spend_events(tx))
        if not events:
            dropped += 1
            _logger.debug("dropping transaction %s: no resolvable category", tx.id)
        rows.extend(events)

    _logger.debug("normalized %d spend events (%d transactions dropped)", len(rows), dropped)
    frame = pd.DataFrame(rows, columns=list(TRANSACTION_COLUMNS))
    return frame.astype({"amount": "float64"})


__all__ = [
    "MILLIUNITS_PER_UNIT",
    "SPLIT_CATEGORY_NAME",
    "categories_to_frame",
    "to_currency",
    "transactions_to_frame",
]

"""Minimal read-only client for the YNAB REST API.

Only the three endpoints the weekly report needs are wrapped:

- ``GET /budgets`` → :class:`~budget_report.models.BudgetSummary`
- ``GET /budgets/{id}/categories`` → :class:`~budget_report.models.CategoryGroup`
- ``GET /budgets/{id}/transactions`` → :class:`~budget_report.models.Transaction`

Deleted groups, categories and transactions are filtered out here so the
report core never sees them. Responses are validated with pydantic; a payload
that does not match raises :class:`~budget_report.errors.MalformedInputError`.
The client never retries.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .config import api_base_url, http_timeout
from .errors import MalformedInputError, YnabApiError
from .logging_setup import get_logger
from .models import BudgetSummary, CategoryGroup, Transaction

_logger = get_logger("budget_report.ynab")

_M = TypeVar("_M", bound=BaseModel)


def _error_detail(response: requests.Response) -> str:
    # YNAB errors look like {"error": {"id": "401", "name": "...", "detail": "..."}}
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "unknown error"
    err = body.get("error") if isinstance(body, Mapping) else None
    if isinstance(err, Mapping):
        return str(err.get("detail") or err.get("name") or "unknown error")
    return "unknown error"


def _validate_list(model: type[_M], items: Any, *, kind: str) -> list[_M]:
    if not isinstance(items, list):
        raise MalformedInputError(f"expected a list of {kind}, got {type(items).__name__}")
    out: list[_M] = []
    for pos, item in enumerate(items):
        try:
            out.append(model.model_validate(item))
        except ValidationError as exc:
            raise MalformedInputError(f"{kind} #{pos}: {exc}") from exc
    return out


class YnabClient:
    """Authenticated YNAB API client.

    Parameters
    ----------
    token:
        Personal access token.
    base_url:
        API root; defaults to :func:`budget_report.config.api_base_url`.
    timeout:
        Per-request timeout in seconds; defaults to
        :func:`budget_report.config.http_timeout`.
    session:
        Optional pre-built ``requests.Session`` (tests pass a stub).
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = (base_url or api_base_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else http_timeout()
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        )

    def _get(self, path: str, params: Mapping[str, str] | None = None) -> Mapping[str, Any]:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise YnabApiError(f"GET {path} failed: {exc}") from exc

        if not response.ok:
            raise YnabApiError(
                f"GET {path} returned {response.status_code}: {_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedInputError(f"GET {path}: response is not JSON") from exc
        data = body.get("data") if isinstance(body, Mapping) else None
        if not isinstance(data, Mapping):
            raise MalformedInputError(f"GET {path}: response has no 'data' object")
        return data

    def get_budgets(self) -> list[BudgetSummary]:
        data = self._get("budgets")
        budgets = _validate_list(BudgetSummary, data.get("budgets"), kind="budget")
        _logger.info("fetched %d budgets", len(budgets))
        return budgets

    def get_category_groups(self, budget_id: str) -> list[CategoryGroup]:
        """Return non-deleted category groups with their non-deleted categories."""

        data = self._get(f"budgets/{budget_id}/categories")
        groups = _validate_list(CategoryGroup, data.get("category_groups"), kind="category group")
        live = [
            g.model_copy(update={"categories": [c for c in g.categories if not c.deleted]})
            for g in groups
            if not g.deleted
        ]
        _logger.info("fetched %d category groups", len(live))
        return live

    def get_transactions(
        self, budget_id: str, *, since_date: date | None = None
    ) -> list[Transaction]:
        """Return non-deleted transactions, optionally on or after ``since_date``."""

        params = {"since_date": since_date.isoformat()} if since_date is not None else None
        data = self._get(f"budgets/{budget_id}/transactions", params=params)
        transactions = _validate_list(Transaction, data.get("transactions"), kind="transaction")
        live = [t for t in transactions if not t.deleted]
        _logger.info("fetched %d transactions (since %s)", len(live), since_date or "start")
        return live


__all__ = ["YnabClient"]

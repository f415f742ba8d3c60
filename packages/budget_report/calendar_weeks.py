"""Month-relative reporting weeks.

Reporting weeks are not ISO weeks. Each calendar month is cut into
consecutive seven-day spans starting on the 1st: days 1-7 are week 1, days
8-14 week 2, and so on. The last span is clamped at the end of the month, so
it is one to seven days long and never reaches into the next month.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime

from .errors import InvalidDateError
from .models import ReportingWeek

_DAYS_PER_WEEK = 7


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def month_week_for_date(day: date) -> ReportingWeek:
    """Return the reporting week containing ``day``.

    ``datetime`` values are reduced to their date. Anything that is not a
    date raises :class:`InvalidDateError`.
    """

    if isinstance(day, datetime):
        day = day.date()
    if not isinstance(day, date):
        raise InvalidDateError(f"expected a date, got {type(day).__name__}: {day!r}")

    week_index = (day.day - 1) // _DAYS_PER_WEEK
    start_day = 1 + _DAYS_PER_WEEK * week_index
    # Day-number arithmetic; date + 6 days overflows past date.max in 9999-12.
    end_day = min(start_day + _DAYS_PER_WEEK - 1, _last_day_of_month(day.year, day.month).day)
    week_start = day.replace(day=start_day)
    week_end = day.replace(day=end_day)
    return ReportingWeek(week_start=week_start, week_end=week_end, week_number=week_index + 1)


def month_weeks(year: int, month: int) -> list[ReportingWeek]:
    """Return every reporting week of ``year``/``month`` in order."""

    try:
        first = date(year, month, 1)
    except (TypeError, ValueError) as exc:
        raise InvalidDateError(f"invalid year/month: {year!r}-{month!r}") from exc

    last = _last_day_of_month(year, month)
    return [
        month_week_for_date(first.replace(day=start_day))
        for start_day in range(1, last.day + 1, _DAYS_PER_WEEK)
    ]


def parse_date(text: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string."""

    s = (text or "").strip()
    try:
        return date.fromisoformat(s)
    except ValueError as exc:
        raise InvalidDateError(f"invalid date (expected YYYY-MM-DD): {text!r}") from exc


def week_header(week: ReportingWeek) -> str:
    """Long label, e.g. ``Week 2 of 2024, starting on Friday 2024-03-08 and ...``."""

    start_label = week.week_start.strftime("%A %Y-%m-%d")
    end_label = week.week_end.strftime("%A %Y-%m-%d")
    return (
        f"Week {week.week_number} of {week.week_start.year}, "
        f"starting on {start_label} and ending on {end_label}"
    )


def _short_date(day: date) -> str:
    # "%b %d" zero-pads the day; strip it so "Mar 08" reads "Mar 8".
    return f"{day.strftime('%b')} {day.day}"


def week_short_label(week: ReportingWeek) -> str:
    """Compact label, e.g. ``Week 2 (Mar 8 - Mar 14)``."""

    return (
        f"Week {week.week_number} "
        f"({_short_date(week.week_start)} - {_short_date(week.week_end)})"
    )


__all__ = [
    "month_week_for_date",
    "month_weeks",
    "parse_date",
    "week_header",
    "week_short_label",
]

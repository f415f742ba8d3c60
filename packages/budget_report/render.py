"""Render a :class:`~budget_report.api.WeeklyReport` as text, CSV or HTML.

Renderers keep the row order the report builder produced and print
``spent == 0.0`` rows like any other.
"""

from __future__ import annotations

import html
import os
from pathlib import Path

import pandas as pd

from .api import WeeklyReport
from .logging_setup import get_logger
from .models import WatchList

_logger = get_logger("budget_report.render")

_VISUAL_COLUMNS = ["category_name", "budgeted", "spent", "balance"]


def _money(value: float) -> str:
    return f"{value:,.2f}"


def render_console(report: WeeklyReport) -> str:
    """Plain-text tables: header, report rows, then group totals."""

    table = report.display_table.to_string(index=False, float_format=_money, na_rep="")
    totals = report.group_totals.to_string(index=False, float_format=_money, na_rep="")
    return f"{report.header}\n{table}\nCategory group totals\n{totals}\n"


def render_csv(report: WeeklyReport) -> str:
    """Header line, report CSV, a ``category_group_totals`` marker, totals CSV."""

    table = report.display_table.to_csv(index=False, lineterminator="\n")
    totals = report.group_totals.to_csv(index=False, lineterminator="\n")
    return f"{report.header}\n{table}category_group_totals\n{totals}"


def write_csv_files(
    report: WeeklyReport,
    report_path: str | os.PathLike[str],
    totals_path: str | os.PathLike[str],
) -> None:
    """Write the report rows and group totals to two CSV files."""

    for frame, path in ((report.display_table, report_path), (report.group_totals, totals_path)):
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(p, index=False, lineterminator="\n")
        _logger.info("wrote %d rows to %s", len(frame), p)


def _table_html(frame: pd.DataFrame) -> str:
    return frame.to_html(
        index=False,
        float_format=_money,
        na_rep="",
        border=0,
        classes="report-table",
    )


def render_visual_html(report: WeeklyReport, watch_list: WatchList) -> str:
    """Standalone HTML page with one colored section per watched group.

    Sections follow the watch list's order and use each group's color as
    their background.
    """

    title = f"{report.short_label}, {report.week.week_start.year}"
    rows = report.display_table

    sections: list[str] = []
    for group_name, color in watch_list.items():
        group_rows = rows.loc[rows["category_group_name"] == group_name, _VISUAL_COLUMNS]
        body = (
            _table_html(group_rows)
            if not group_rows.empty
            else '<p class="empty">No spending this week.</p>'
        )
        sections.append(
            f'<section class="group" style="background-color: {html.escape(color, quote=True)}">'
            f"<h2>{html.escape(group_name)}</h2>{body}</section>"
        )

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        "<style>\n"
        "body { font-family: sans-serif; margin: 2em; }\n"
        ".group { padding: 0.5em 1em; margin-bottom: 1em; border-radius: 6px; }\n"
        ".report-table { border-collapse: collapse; width: 100%; }\n"
        ".report-table th, .report-table td { padding: 0.2em 0.6em; text-align: right; }\n"
        ".report-table th:first-child, .report-table td:first-child { text-align: left; }\n"
        "</style>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{html.escape(title)}</h1>\n"
        f"<p>{html.escape(report.header)}</p>\n"
        + "\n".join(sections)
        + "\n<h2>Category group totals</h2>\n"
        + _table_html(report.group_totals)
        + "\n</body>\n</html>\n"
    )


def write_visual_html(
    report: WeeklyReport, watch_list: WatchList, path: str | os.PathLike[str]
) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_visual_html(report, watch_list), encoding="utf-8")
    _logger.info("wrote visual report to %s", p)


__all__ = [
    "render_console",
    "render_csv",
    "render_visual_html",
    "write_csv_files",
    "write_visual_html",
]

from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from budget_report.api import WeeklyReport, build_weekly_report
from budget_report.render import (
    render_console,
    render_csv,
    render_visual_html,
    write_csv_files,
    write_visual_html,
)

from tests.helpers.budget_data import make_category_groups, make_transactions

WATCH = {"Essentials": "#dfe7f5", "Fun": "#f4dccb"}


@pytest.fixture()
def report() -> WeeklyReport:
    return build_weekly_report(
        make_category_groups(), make_transactions(), WATCH, resolution_date=date(2024, 3, 13)
    )


def test_render_console(report: WeeklyReport) -> None:
    out = render_console(report)
    lines = out.splitlines()

    assert lines[0] == report.header
    assert "category_name" in lines[1]
    assert "Groceries" in out and "18.50" in out
    assert "Games" not in out
    assert "Category group totals" in lines
    assert "150.00" in out
    assert out.endswith("\n")


def test_render_csv(report: WeeklyReport) -> None:
    out = render_csv(report)
    lines = out.splitlines()

    assert lines[0] == report.header
    assert lines[1] == (
        "category_name,category_group_name,budgeted,balance,spent,goal_cadence,goal_target"
    )
    assert lines[2] == "Groceries,Essentials,50.0,31.5,18.5,1,60.0"
    assert lines[4] == "Books,Fun,10.0,6.0,4.0,1,"
    assert lines[5] == "category_group_totals"
    assert lines[6] == "category_group_name,budgeted,spent,balance"
    assert lines[7:] == ["Essentials,150.0,43.5,106.5", "Fun,30.0,4.0,23.0"]


def test_write_csv_files(report: WeeklyReport, tmp_path: Path) -> None:
    report_path = tmp_path / "out" / "report.csv"
    totals_path = tmp_path / "out" / "totals.csv"

    write_csv_files(report, report_path, totals_path)

    rows = pd.read_csv(report_path)
    assert list(rows["category_name"]) == ["Groceries", "Rent", "Books"]
    totals = pd.read_csv(totals_path)
    assert list(totals["spent"]) == [43.5, 4.0]


def test_render_visual_html(report: WeeklyReport) -> None:
    page = render_visual_html(report, WATCH)

    assert "<title>Week 2 (Mar 8 - Mar 14), 2024</title>" in page
    assert page.index("<h2>Essentials</h2>") < page.index("<h2>Fun</h2>")
    assert 'style="background-color: #dfe7f5"' in page
    assert "Groceries" in page and "18.50" in page
    assert "Category group totals" in page


def test_render_visual_html_empty_group() -> None:
    report = build_weekly_report(
        make_category_groups(), make_transactions(), WATCH, resolution_date=date(2024, 3, 15)
    )
    page = render_visual_html(report, WATCH)
    essentials = page[page.index("<h2>Essentials</h2>") : page.index("<h2>Fun</h2>")]
    assert "No spending this week." in essentials


def test_render_visual_html_escapes_names(report: WeeklyReport) -> None:
    page = render_visual_html(report, {"<Fun & Games>": "red"})
    assert "<h2>&lt;Fun &amp; Games&gt;</h2>" in page


def test_write_visual_html(report: WeeklyReport, tmp_path: Path) -> None:
    path = tmp_path / "site" / "report.html"
    write_visual_html(report, WATCH, path)
    assert path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

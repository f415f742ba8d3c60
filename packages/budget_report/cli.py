# ruff: noqa: I001
"""CLI for the ``budget_report`` package.

This module exposes plain command handlers (``cmd_report``, ``cmd_week``,
``cmd_check_config``) that return process exit codes, and a Typer-based
console interface that wraps them. Environment variables (notably
``YNAB_PERSONAL_ACCESS_TOKEN``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to command logic. Report logic lives in
``budget_report.api`` and related modules.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .calendar_weeks import month_week_for_date, parse_date, week_header
from .config import Config, OutputFormat, load_config, with_overrides
from .errors import BudgetReportError, ConfigError
from .logging_setup import configure_logging


# ---- Small module-level helpers used by CLI commands -------------------------


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _emit(cfg: Config, report) -> None:
    """Write ``report`` in the configured output format."""

    # Local import keeps pandas out of `week` command startup
    from . import render

    fmt = cfg.output_format
    if fmt is OutputFormat.CONSOLE:
        print(render.render_console(report), end="")
    elif fmt is OutputFormat.CSV_PRINT:
        print(render.render_csv(report), end="")
    elif fmt is OutputFormat.CSV_OUTPUT:
        if cfg.csv_output is None:
            raise ConfigError("output_format 'csv_output' requires a [csv_output] table")
        render.write_csv_files(report, cfg.csv_output.report_path, cfg.csv_output.totals_path)
        print(report.header)
    elif fmt is OutputFormat.VISUAL:
        if cfg.visual_output is None:
            raise ConfigError("output_format 'visual' requires a [visual_output] table")
        render.write_visual_html(report, cfg.category_group_watch_list, cfg.visual_output.path)
        print(report.header)


def cmd_report(
    config_path: str | Path | None = None,
    *,
    resolution_date: str | None = None,
    show_all_rows: bool | None = None,
    output_format: OutputFormat | str | None = None,
) -> int:
    """Fetch the configured budget and print or write its weekly report.

    Command-line values override the config file: ``resolution_date``
    (``YYYY-MM-DD``), ``show_all_rows`` and ``output_format``. Errors are
    written to stderr and the function returns ``1``; on success it returns
    ``0``.
    """

    # Load .env here as well so the handler works when called directly.
    load_dotenv(override=False)

    from .api import run_report
    from .ynab import YnabClient

    try:
        cfg = with_overrides(
            load_config(config_path),
            resolution_date=parse_date(resolution_date) if resolution_date else None,
            show_all_rows=show_all_rows,
            output_format=output_format,
        )
        client = YnabClient(cfg.personal_access_token)
        report = run_report(cfg, client=client)
        _emit(cfg, report)
    except BudgetReportError as e:
        return _error(str(e))
    except OSError as e:
        return _error(f"failed to write output: {e}")

    return 0


def cmd_week(resolution_date: str | None = None, *, today: date | None = None) -> int:
    """Print the reporting-week header for a date (default: today)."""

    try:
        day = parse_date(resolution_date) if resolution_date else (today or date.today())
        week = month_week_for_date(day)
    except BudgetReportError as e:
        return _error(str(e))

    print(week_header(week))
    return 0


def cmd_check_config(config_path: str | Path | None = None) -> int:
    """Validate the config against the live budget.

    Returns ``1`` when the budget cannot be found or any watched category
    group is missing from it.
    """

    load_dotenv(override=False)

    from .watch_list import get_budget_id, get_missing_category_groups
    from .ynab import YnabClient

    try:
        cfg = load_config(config_path)
        client = YnabClient(cfg.personal_access_token)
        budget_id = get_budget_id(client.get_budgets(), cfg.budget_name)
        if budget_id is None:
            return _error(f"budget {cfg.budget_name!r} not found")
        missing = get_missing_category_groups(
            client.get_category_groups(budget_id), cfg.category_group_watch_list
        )
    except BudgetReportError as e:
        return _error(str(e))

    if missing:
        for name in sorted(missing):
            print(f"Missing category group: {name}", file=sys.stderr)
        return 1

    print(f"OK: budget {cfg.budget_name!r}, {len(cfg.category_group_watch_list)} watched groups")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Weekly YNAB spending report for watched category groups. "
        "Loads YNAB_PERSONAL_ACCESS_TOKEN from a local .env before running."
    ),
)


# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults). Typer inspects these when used as default values below.
CONFIG_PATH_OPTION: OptionInfo = typer.Option(
    None,
    "--config",
    help="Path to the TOML config (default: $BUDGET_REPORT_CONFIG or ./budget_report.toml).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)

DATE_OPTION: OptionInfo = typer.Option(
    None,
    "--date",
    help="Report on the week containing this date (YYYY-MM-DD).",
)


@app.command("report")
def report_cmd(
    config_path: Path | None = CONFIG_PATH_OPTION,
    resolution_date: str | None = DATE_OPTION,
    show_all_rows: bool | None = typer.Option(
        None,
        "--show-all/--only-spent",
        help="Show every watched category, or only those with spending (overrides config).",
    ),
    output_format: OutputFormat | None = typer.Option(
        None,
        "--format",
        case_sensitive=False,
        help="Output format (overrides config).",
    ),
) -> None:
    """Build and output the weekly report."""

    code = cmd_report(
        config_path,
        resolution_date=resolution_date,
        show_all_rows=show_all_rows,
        output_format=output_format,
    )
    raise typer.Exit(code)


@app.command("week")
def week_cmd(resolution_date: str | None = DATE_OPTION) -> None:
    """Print the reporting week for a date without contacting YNAB."""

    raise typer.Exit(cmd_week(resolution_date))


@app.command("check-config")
def check_config_cmd(config_path: Path | None = CONFIG_PATH_OPTION) -> None:
    """Check that the budget and every watched category group exist."""

    raise typer.Exit(cmd_check_config(config_path))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:  # pragma: no cover - console script entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

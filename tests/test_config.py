from __future__ import annotations

import textwrap
from datetime import date
from pathlib import Path

import pytest

from budget_report.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    OutputFormat,
    api_base_url,
    default_config_path,
    http_timeout,
    load_config,
    parse_config,
    with_overrides,
)
from budget_report.errors import ConfigError

_BASIC = """
budget_name = "Budget A"
personal_access_token = "file-token"
resolution_date = 2024-03-13
show_all_rows = true

[category_group_watch_list]
"Fun" = "#f4dccb"
"Essentials" = "#dfe7f5"
"""


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "budget_report.toml"
    p.write_text(textwrap.dedent(text), encoding="utf-8")
    return p


def test_load_config(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, _BASIC))

    assert cfg.budget_name == "Budget A"
    assert cfg.personal_access_token == "file-token"
    assert cfg.resolution_date == date(2024, 3, 13)
    assert cfg.show_all_rows is True
    assert cfg.output_format is OutputFormat.CONSOLE
    # TOML table order is preserved
    assert list(cfg.category_group_watch_list) == ["Fun", "Essentials"]


def test_token_is_hidden_from_repr(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, _BASIC))
    assert "file-token" not in repr(cfg)


def test_token_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YNAB_PERSONAL_ACCESS_TOKEN", "env-token")
    cfg = parse_config({"budget_name": "B", "category_group_watch_list": {"Fun": "#fff"}})
    assert cfg.personal_access_token == "env-token"
    assert cfg.resolution_date is None
    assert cfg.show_all_rows is False


def test_missing_token_is_a_config_error() -> None:
    with pytest.raises(ConfigError, match="YNAB_PERSONAL_ACCESS_TOKEN"):
        parse_config({"budget_name": "B", "category_group_watch_list": {"Fun": "#fff"}})


@pytest.mark.parametrize(
    "data",
    [
        {"budget_name": "B", "category_group_watch_list": {}},
        {"budget_name": "", "category_group_watch_list": {"Fun": "#fff"}},
        {"budget_name": "B", "category_group_watch_list": {"Fun": "#fff"}, "unknown": 1},
        {"budget_name": "B", "category_group_watch_list": {"Fun": "#fff"}, "output_format": "pdf"},
        {
            "budget_name": "B",
            "category_group_watch_list": {"Fun": "#fff"},
            "output_format": "visual",
        },
        {
            "budget_name": "B",
            "category_group_watch_list": {"Fun": "#fff"},
            "output_format": "csv_output",
        },
    ],
)
def test_invalid_config(data: dict) -> None:
    with pytest.raises(ConfigError):
        parse_config({"personal_access_token": "t", **data})


def test_output_targets(tmp_path: Path) -> None:
    text = _BASIC + """
[csv_output]
report_path = "out/report.csv"
totals_path = "out/totals.csv"

[visual_output]
path = "out/report.html"
"""
    cfg = load_config(_write(tmp_path, text))
    assert cfg.csv_output is not None
    assert cfg.csv_output.report_path == Path("out/report.csv")
    assert cfg.visual_output is not None
    assert cfg.visual_output.path == Path("out/report.html")

    csv_cfg = with_overrides(cfg, output_format="csv_output")
    assert csv_cfg.output_format is OutputFormat.CSV_OUTPUT


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.toml")


def test_invalid_toml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not valid TOML"):
        load_config(_write(tmp_path, "budget_name = \n"))


def test_default_config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert default_config_path() == tmp_path / "budget_report.toml"

    monkeypatch.setenv("BUDGET_REPORT_CONFIG", str(tmp_path / "other.toml"))
    assert default_config_path() == tmp_path / "other.toml"


def test_load_config_uses_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, _BASIC)
    monkeypatch.chdir(tmp_path)
    assert load_config().budget_name == "Budget A"


def test_with_overrides(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, _BASIC))

    assert with_overrides(cfg) is cfg
    assert with_overrides(cfg, show_all_rows=None) is cfg

    changed = with_overrides(cfg, show_all_rows=False, resolution_date=date(2024, 4, 1))
    assert changed.show_all_rows is False
    assert changed.resolution_date == date(2024, 4, 1)
    assert changed.personal_access_token == "file-token"
    assert cfg.show_all_rows is True


def test_with_overrides_revalidates(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, _BASIC))
    with pytest.raises(ConfigError):
        with_overrides(cfg, output_format="visual")


def test_api_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    assert api_base_url() == DEFAULT_BASE_URL
    monkeypatch.setenv("YNAB_API_BASE_URL", " http://localhost:8080/v1/ ")
    assert api_base_url() == "http://localhost:8080/v1"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, DEFAULT_TIMEOUT_SECONDS), ("5", 5.0), ("abc", DEFAULT_TIMEOUT_SECONDS), ("-1", 30.0)],
)
def test_http_timeout(raw: str | None, expected: float, monkeypatch: pytest.MonkeyPatch) -> None:
    if raw is not None:
        monkeypatch.setenv("BUDGET_REPORT_HTTP_TIMEOUT", raw)
    assert http_timeout() == expected

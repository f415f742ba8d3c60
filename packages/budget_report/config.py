"""Configuration for the weekly budget report.

Configuration lives in a TOML file (default ``./budget_report.toml``, or the
path in ``BUDGET_REPORT_CONFIG``)::

    budget_name = "My Budget"
    resolution_date = 2024-03-13     # optional; defaults to today
    show_all_rows = false
    output_format = "console"        # console | csv_print | csv_output | visual

    [category_group_watch_list]      # group name -> display color, in display order
    "Essentials" = "#dfe7f5"
    "Fun" = "#f4dccb"

    [csv_output]                     # required for output_format = "csv_output"
    report_path = "report.csv"
    totals_path = "totals.csv"

    [visual_output]                  # required for output_format = "visual"
    path = "report.html"

The YNAB personal access token may be set in the file as
``personal_access_token``; when absent it is read from the
``YNAB_PERSONAL_ACCESS_TOKEN`` environment variable (which the CLI loads from
a local ``.env`` via ``python-dotenv``).
"""

from __future__ import annotations

import os
import tomllib
from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

CONFIG_PATH_ENV_VAR = "BUDGET_REPORT_CONFIG"
TOKEN_ENV_VAR = "YNAB_PERSONAL_ACCESS_TOKEN"
BASE_URL_ENV_VAR = "YNAB_API_BASE_URL"
TIMEOUT_ENV_VAR = "BUDGET_REPORT_HTTP_TIMEOUT"

DEFAULT_CONFIG_FILENAME = "budget_report.toml"
DEFAULT_BASE_URL = "https://api.ynab.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0


class OutputFormat(StrEnum):
    CONSOLE = "console"
    CSV_PRINT = "csv_print"
    CSV_OUTPUT = "csv_output"
    VISUAL = "visual"


class CsvOutput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    report_path: Path
    totals_path: Path


class VisualOutput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path


class Config(BaseModel):
    """Validated report configuration."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, frozen=True)

    budget_name: str = Field(min_length=1)
    personal_access_token: str = Field(min_length=1, repr=False)
    # dict keeps TOML table order, which drives rendering order downstream.
    category_group_watch_list: dict[str, str]
    resolution_date: date | None = None
    show_all_rows: bool = False
    output_format: OutputFormat = OutputFormat.CONSOLE
    csv_output: CsvOutput | None = None
    visual_output: VisualOutput | None = None

    @field_validator("category_group_watch_list")
    @classmethod
    def _watch_list_non_empty(cls, v: dict[str, str]) -> dict[str, str]:
        if not v:
            raise ValueError("category_group_watch_list must name at least one group")
        return v

    @model_validator(mode="after")
    def _output_target_present(self) -> Config:
        if self.output_format is OutputFormat.CSV_OUTPUT and self.csv_output is None:
            raise ValueError("output_format 'csv_output' requires a [csv_output] table")
        if self.output_format is OutputFormat.VISUAL and self.visual_output is None:
            raise ValueError("output_format 'visual' requires a [visual_output] table")
        return self


def default_config_path() -> Path:
    """Return ``$BUDGET_REPORT_CONFIG`` or ``./budget_report.toml``."""

    env_path = os.getenv(CONFIG_PATH_ENV_VAR)
    if env_path and env_path.strip():
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def parse_config(data: dict[str, Any]) -> Config:
    """Validate a parsed TOML mapping, filling the token from the environment."""

    payload = dict(data)
    if not payload.get("personal_access_token"):
        token = os.getenv(TOKEN_ENV_VAR)
        if not token:
            raise ConfigError(
                f"personal_access_token is not set in the config file and {TOKEN_ENV_VAR} "
                "is not set in the environment"
            )
        payload["personal_access_token"] = token

    try:
        return Config.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


def load_config(path: str | os.PathLike[str] | None = None) -> Config:
    """Read and validate the TOML configuration file at ``path``."""

    p = Path(path) if path is not None else default_config_path()
    try:
        with p.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"config file not found: {p}") from exc
    except PermissionError as exc:
        raise ConfigError(f"permission denied reading config file: {p}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"config file {p} is not valid TOML: {exc}") from exc
    return parse_config(data)


def with_overrides(config: Config, **updates: Any) -> Config:
    """Return ``config`` with non-``None`` ``updates`` applied and re-validated."""

    values = {k: v for k, v in updates.items() if v is not None}
    if not values:
        return config
    try:
        return Config.model_validate({**config.model_dump(), **values})
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration override: {exc}") from exc


def api_base_url() -> str:
    """YNAB API base URL, overridable via ``YNAB_API_BASE_URL``."""

    url = os.getenv(BASE_URL_ENV_VAR)
    return (url.strip() if url and url.strip() else DEFAULT_BASE_URL).rstrip("/")


def http_timeout() -> float:
    """HTTP timeout in seconds, overridable via ``BUDGET_REPORT_HTTP_TIMEOUT``."""

    raw = os.getenv(TIMEOUT_ENV_VAR)
    try:
        value = float(raw) if raw else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        value = DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


__all__ = [
    "Config",
    "CsvOutput",
    "OutputFormat",
    "VisualOutput",
    "api_base_url",
    "default_config_path",
    "http_timeout",
    "load_config",
    "parse_config",
    "with_overrides",
]

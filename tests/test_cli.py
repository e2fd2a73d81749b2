"""Mini README: Tests for the Typer entry point's ``summary`` command."""

from __future__ import annotations

from datetime import date
from pathlib import Path
import logging
from typing import Any, Dict, Iterator

import pytest
from typer.testing import CliRunner

from categorybook.configuration import get_settings
from categorybook.finance import Entry
from categorybook.storage import FileBlobStore
from categorybook.store import DataStore
import main_categorybook
from main_categorybook import cli

runner = CliRunner()


@pytest.fixture()
def data_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    monkeypatch.setenv("CATEGORYBOOK_DATA_DIRECTORY", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def test_summary_without_data(data_directory: Path) -> None:
    result = runner.invoke(cli, ["summary"])

    assert result.exit_code == 0
    assert "No categories yet." in result.stdout


def test_summary_prints_totals(data_directory: Path) -> None:
    store = DataStore(FileBlobStore(data_directory))
    category = store.add_category("Groceries")
    store.add_entry(category.id, Entry(name="Milk", income=0.0, expense=3.5, date=date(2024, 1, 1)))
    store.save()

    result = runner.invoke(cli, ["summary"])

    assert result.exit_code == 0
    assert "Groceries: 1 entries, income 0.00, expense 3.50, profit -3.50" in result.stdout


def test_summary_reports_unreadable_data(data_directory: Path) -> None:
    (data_directory / "categories.json").write_text("not json")

    result = runner.invoke(cli, ["summary"])

    assert result.exit_code == 1


@pytest.fixture()
def served(monkeypatch: pytest.MonkeyPatch) -> Iterator[Dict[str, Any]]:
    """Capture uvicorn arguments instead of starting a server."""

    calls: Dict[str, Any] = {}
    previous_level = logging.getLogger().level
    monkeypatch.setattr(main_categorybook.uvicorn, "run", lambda app, **kwargs: calls.update(kwargs, app=app))
    yield calls
    logging.getLogger().setLevel(previous_level)


def test_run_reloads_outside_production(data_directory: Path, served: Dict[str, Any]) -> None:
    result = runner.invoke(cli, ["run", "--port", "9000"])

    assert result.exit_code == 0
    assert served["reload"] is True
    assert served["port"] == 9000
    assert served["app"] == "categorybook.interface.web_app:create_application"


def test_run_defaults_from_environment_and_log_level(
    data_directory: Path,
    served: Dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CATEGORYBOOK_ENVIRONMENT", "Production")
    monkeypatch.setenv("CATEGORYBOOK_LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()

    result = runner.invoke(cli, ["run"])

    assert result.exit_code == 0
    assert served["reload"] is False
    assert logging.getLogger().level == logging.DEBUG


def test_run_development_flag_overrides_environment(
    data_directory: Path,
    served: Dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CATEGORYBOOK_ENVIRONMENT", "production")
    get_settings.cache_clear()

    result = runner.invoke(cli, ["run", "--development"])

    assert result.exit_code == 0
    assert served["reload"] is True

"""Shared fixtures: temporary databases and XDG directories."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from cashboard.domain.models import Money
from cashboard.log import LOGGER_NAME
from cashboard.store.queries import get_all_categories, insert_transaction
from cashboard.store.schema import init_database, seed_default_categories


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """An initialized database with the default categories."""
    path = tmp_path / "cashboard.db"
    init_database(path)
    seed_default_categories(path)
    return path


@pytest.fixture
def category_ids(db_path: Path) -> dict[str, int]:
    """Map of default category name to id."""
    return {row["name"]: row["id"] for row in get_all_categories(db_path)}


@pytest.fixture
def sample_db(db_path: Path, category_ids: dict[str, int]) -> Path:
    """Database with a handful of transactions across 2023-2024."""
    rows = [
        ("2024-03-05", "March salary", 10000, "Salary"),
        ("2024-03-20", "Groceries", 4000, "Food & Groceries"),
        ("2024-03-31", "Bus pass", 6550, "Transport"),
        ("2024-04-01", "April rent", 95000, "Housing"),
        ("2023-11-11", "Dividend", 1234, "Investments"),
    ]
    for txn_date, description, amount, category in rows:
        insert_transaction(txn_date, description, Money(amount), category_ids[category], db_path)
    return db_path


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Point XDG config and data homes at temporary directories."""
    config_home = tmp_path / "config"
    data_home = tmp_path / "data"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    return config_home, data_home


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers configured by a CLI run so they don't outlive its streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

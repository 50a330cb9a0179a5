"""Pytest configuration and fixtures for importbox tests."""

import os
from collections.abc import Generator

import pytest

from importbox.config.settings import reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Load settings from defaults only: no config files, no IMPORTBOX_ env vars."""
    for name in list(os.environ):
        if name.startswith("IMPORTBOX_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "importbox.config.loader.get_config_search_paths",
        lambda: [tmp_path / "config.toml"],
    )
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def bank_csv() -> str:
    """A small bank statement export."""
    return (
        "Date,Description,Amount\n"
        "2024-01-15,Amazon Purchase,-42.50\n"
        "01/16/2024,Salary,\"$3,000.00\"\n"
        "2024-01-17,Coffee Shop,(4.25)\n"
    )


@pytest.fixture
def existing_transactions() -> list[dict]:
    """Stored transactions as returned by the persistence layer."""
    return [
        {"id": "t1", "date": "2024-01-15", "amount": -42.5, "description": "AMAZON PURCHASE"},
        {"id": "t2", "date": "2024-01-10", "amount": 12.0, "description": "Bookshop"},
    ]


@pytest.fixture
def existing_leads() -> list[dict]:
    """Stored leads as returned by the persistence layer."""
    return [
        {"id": "l1", "name": "Acme Inc", "website": "https://acme.com"},
        {"id": "l2", "name": "Gamma LLC", "website": None},
        {"id": "l3", "name": "Initech Systems", "website": "initech.io"},
    ]

"""Pytest fixtures for bibfetchers tests."""

import os

import pytest
from typer.testing import CliRunner

from bibfetchers.config.settings import ApiKeySettings, Settings
from bibfetchers.model import BibEntry, StandardField


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own BIBFETCHERS_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("BIBFETCHERS_"):
            monkeypatch.delenv(name)


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> Settings:
    """Settings with no API keys configured."""
    return Settings(api_keys=ApiKeySettings())


@pytest.fixture
def keyed_settings() -> Settings:
    """Settings with every API key filled in."""
    return Settings(
        api_keys=ApiKeySettings(
            springer="springer-key",
            ieee="ieee-key",
            astrophysics_data_system="ads-token",
            elsevier="elsevier-key",
        )
    )


@pytest.fixture
def doi_entry() -> BibEntry:
    """Entry known only by DOI and title."""
    return BibEntry(
        fields={
            StandardField.DOI: "10.1016/j.cell.2020.01.001",
            StandardField.TITLE: "A Test Article",
        }
    )

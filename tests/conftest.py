import os

import pytest
from typer.testing import CliRunner

from cfprovider.infrastructure.config.settings import OsEnvironmentLookup


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Removes any provider variables from the real environment so tests
    only see what they set themselves.
    """
    for name in list(os.environ):
        if name.startswith("CLOUDFLARE_") or name.startswith("CFPROVIDER_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_env():
    """Factory for an EnvironmentLookup backed by a plain dict."""
    def factory(**values: str) -> OsEnvironmentLookup:
        return OsEnvironmentLookup(values)
    return factory


@pytest.fixture
def valid_token() -> str:
    return "A" * 40


@pytest.fixture
def valid_api_key() -> str:
    return "f" * 37

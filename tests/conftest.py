"""Mini README: Shared fixtures for the POS ledger test-suite.

Every test gets its own data directory so stores and PDF exports never leak
between tests or into the working tree.
"""

from __future__ import annotations

import pytest

from posledger.configuration import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the data directory at a temp folder and reset cached settings."""

    monkeypatch.setenv("POSLEDGER_DATA_DIRECTORY", str(tmp_path / "data"))
    monkeypatch.setenv("POSLEDGER_CURRENCY_SYMBOL", "NGN ")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()

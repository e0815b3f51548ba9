"""Mini README: Tests for environment driven settings and logging setup."""

from __future__ import annotations

import logging

from posledger.configuration import PosLedgerSettings, get_settings
from posledger.logging_utils import configure_root_logger, get_logger


def test_settings_read_prefixed_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("POSLEDGER_DATA_DIRECTORY", str(tmp_path / "till"))
    monkeypatch.setenv("POSLEDGER_STORAGE_KEY", "till_one")
    monkeypatch.setenv("POSLEDGER_INTERFACE_PORT", "9100")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.data_directory == (tmp_path / "till").resolve()
    assert settings.data_directory.is_dir()
    assert settings.storage_key == "till_one"
    assert settings.interface_port == 9100
    assert settings.store_path == settings.data_directory / "pos_ledger.json"
    assert settings.reports_path == settings.data_directory / "reports"


def test_report_directory_override(tmp_path) -> None:
    settings = PosLedgerSettings(data_directory=tmp_path, report_directory=tmp_path / "exports")

    assert settings.reports_path == tmp_path / "exports"


def test_configure_root_logger_installs_single_handler() -> None:
    root = logging.getLogger()
    get_logger(__name__)
    handlers_before = len(root.handlers)
    level_before = root.level

    try:
        configure_root_logger("debug")
        configure_root_logger(logging.WARNING)

        assert len(root.handlers) == handlers_before
        assert root.level == logging.WARNING
    finally:
        root.setLevel(level_before)

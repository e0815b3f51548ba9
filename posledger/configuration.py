"""Mini README: Centralised configuration models and helpers for the POS ledger.

Structure:
    * PosLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``POSLEDGER_``), locate the ledger store on disk, and pick the currency
    symbol used in reports. The configuration is cached so validation runs
    only once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class PosLedgerSettings(BaseSettings):
    """Runtime configuration for the POS ledger."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the ledger store and generated reports.",
    )
    store_filename: str = Field(
        "pos_ledger.json",
        description="Name of the JSON document backing the key-value store.",
    )
    storage_key: str = Field(
        "pos_transactions",
        description="Key under which the serialised transaction log is stored.",
    )
    currency_symbol: str = Field(
        "₦",
        description="Symbol prefixed to every formatted amount.",
    )
    report_directory: Optional[Path] = Field(
        None,
        description="Where PDF summaries are written. Defaults to <data_directory>/reports.",
    )
    report_font_path: Optional[Path] = Field(
        None,
        description="TrueType font for PDF reports; defaults to a system DejaVu Sans.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level name.")

    class Config:
        env_prefix = "POSLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def store_path(self) -> Path:
        """Full path of the JSON document used as the durable store."""

        return self.data_directory / self.store_filename

    @property
    def reports_path(self) -> Path:
        """Directory receiving exported reports."""

        if self.report_directory is not None:
            return Path(self.report_directory).expanduser()
        return self.data_directory / "reports"


@lru_cache()
def get_settings() -> PosLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PosLedgerSettings()

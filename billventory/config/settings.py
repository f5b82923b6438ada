"""
Environment-driven configuration.

Every group reads its own prefix (``STORAGE_``, ``LEDGER_``, ``REPORT_``,
``API_``); top-level fields read unprefixed names such as ``LOG_LEVEL``.
A ``.env`` file in the working directory is honoured.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "billventory.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0, description="SQLite busy timeout in ms")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class LedgerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    recompute_on_edit: bool = Field(
        default=False,
        description="Re-derive inventory from every transaction when an id is re-submitted",
    )
    total_tolerance: float = Field(
        default=0.01,
        description="Allowed gap between totalAmount and the item sum; negative turns it off",
    )


class ReportSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="REPORT_")

    low_stock_threshold: float = 5.0
    well_stocked_threshold: float = 20.0
    top_customers: int = Field(default=5, ge=0)
    recent_limit: int = Field(default=8, ge=0)


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Billventory"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    seed_demo_data: bool = False

    storage: StorageSettings = Field(default_factory=StorageSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    api: APISettings = Field(default_factory=APISettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings read once per process; ``reset_settings`` forces a re-read."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None

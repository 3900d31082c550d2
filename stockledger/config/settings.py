"""
Service configuration.

Each section reads its own environment prefix (``STORAGE_``, ``CATALOG_``,
``ALERTS_``, ``LEDGER_``, ``API_``, ``PDF_``); top-level values and a local
``.env`` file are read by ``Settings``.
"""

from datetime import tzinfo
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the ledger database lives."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stockledger.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class CatalogSettings(BaseSettings):
    """Remote product catalog configuration."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_")

    base_url: str = "http://localhost:8080/api/v1"
    products_path: str = "/products"
    timeout: float = 15.0


class AlertSettings(BaseSettings):
    """Low-stock alert thresholds."""

    model_config = SettingsConfigDict(env_prefix="ALERTS_")

    # Used when a product has no threshold (or a zero threshold)
    default_threshold: int = 10
    # Critical band, as a percentage of the threshold
    critical_percent: int = Field(default=30, ge=0, le=100)


class LedgerSettings(BaseSettings):
    """Ledger write behaviour."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    # What to do with an appended movement when the catalog update fails
    reconciliation_policy: Literal["rollback", "flag"] = "rollback"


class APISettings(BaseSettings):
    """HTTP server and CORS."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class PdfSettings(BaseSettings):
    """PDF report branding."""

    model_config = SettingsConfigDict(env_prefix="PDF_")

    company_name: str = "VIRUNGA - Chocolat du Kivu"
    subtitle: str = "Product Service Management"
    footer_text: str = "Stock Ledger"


class Settings(BaseSettings):
    """Root settings object handed to ``build_services``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stock Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # IANA zone for calendar-day windows; empty means the host's local time
    timezone: str = ""

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    alerts: AlertSettings = Field(default_factory=AlertSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    api: APISettings = Field(default_factory=APISettings)
    pdf: PdfSettings = Field(default_factory=PdfSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tz(self) -> tzinfo | None:
        """Configured zone, or None for host-local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings loaded once from the environment."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the loaded settings so the next call re-reads the environment."""
    global _settings
    _settings = None

"""Configuration module."""

from stockledger.config.logging import configure_logging, get_logger
from stockledger.config.settings import (
    AlertSettings,
    APISettings,
    CatalogSettings,
    LedgerSettings,
    PdfSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "CatalogSettings",
    "AlertSettings",
    "LedgerSettings",
    "APISettings",
    "PdfSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]

"""Configuration, logging setup, and startup checks."""

from __future__ import annotations

from docmind.core.config import (
    AppSettings,
    CatalogConfig,
    ObservabilityConfig,
    PersistenceConfig,
)
from docmind.core.logging_config import setup_logging
from docmind.core.startup_checks import validate_settings

__all__ = [
    "AppSettings",
    "CatalogConfig",
    "ObservabilityConfig",
    "PersistenceConfig",
    "setup_logging",
    "validate_settings",
]

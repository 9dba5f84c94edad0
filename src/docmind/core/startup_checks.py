"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docmind.core.config import AppSettings

log = logging.getLogger(__name__)

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_catalog(settings)
    _check_persistence(settings)
    _check_log_level(settings)


def _check_catalog(settings: AppSettings) -> None:
    """Both catalog backends load from an existing YAML or JSON file."""
    path = settings.catalog.path
    if not path.is_file():
        raise ValueError(
            f"DOCMIND_CATALOG_PATH={path} does not exist. "
            "Point it at a catalog YAML/JSON file."
        )
    if path.suffix not in (".yaml", ".yml", ".json"):
        raise ValueError(f"DOCMIND_CATALOG_PATH={path} must be a .yaml, .yml, or .json file")


def _check_persistence(settings: AppSettings) -> None:
    """Warn about file persistence in containerized environments."""
    is_container = bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
    )
    if is_container and settings.persistence.backend == "file":
        log.warning(
            "DOCMIND_PERSISTENCE_BACKEND=file in a container environment. "
            "Conditions and document records will be lost on container restart "
            "unless DOCMIND_PERSISTENCE_STORE_PATH is on a mounted volume."
        )


def _check_log_level(settings: AppSettings) -> None:
    level = settings.observability.log_level.upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"DOCMIND_OBSERVABILITY_LOG_LEVEL={settings.observability.log_level!r} is not a valid level. "
            f"Use one of: {', '.join(sorted(_LOG_LEVELS))}."
        )

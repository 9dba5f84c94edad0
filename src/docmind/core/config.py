"""Nested pydantic-settings configuration for docmind.

Each sub-config reads its own ``DOCMIND_<GROUP>_*`` env vars::

    export DOCMIND_CATALOG_PATH=/etc/docmind/catalog.yaml
    export DOCMIND_PERSISTENCE_STORE_PATH=/var/lib/docmind
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "catalog" / "default_catalog.yaml"


class CatalogConfig(BaseSettings):
    """Rule catalog configuration.

    Env vars use ``DOCMIND_CATALOG_`` prefix.  ``strict_weights`` rejects a
    catalog whose scoring weights do not leave exactly 25 points for the
    ready-to-close bonus.  The ``memory`` backend is seeded from ``path`` at
    startup and never writes back.
    """

    model_config = {"env_prefix": "DOCMIND_CATALOG_"}

    backend: Literal["file", "memory"] = "file"
    path: Path = DEFAULT_CATALOG_PATH
    strict_weights: bool = False


class PersistenceConfig(BaseSettings):
    """Persistence configuration for conditions and loan records.

    Env vars use ``DOCMIND_PERSISTENCE_`` prefix.
    """

    model_config = {"env_prefix": "DOCMIND_PERSISTENCE_"}

    backend: Literal["file"] = "file"
    store_path: Path = Path("./data")


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``DOCMIND_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "DOCMIND_OBSERVABILITY_"}

    service_name: str = "docmind"
    log_level: str = "INFO"
    json_logs: bool | None = None


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    catalog: CatalogConfig = CatalogConfig()
    persistence: PersistenceConfig = PersistenceConfig()
    observability: ObservabilityConfig = ObservabilityConfig()

"""Record persistence for loans and conditions.

Factory function::

    from docmind.persistence import create_persistence_backend
    backend = create_persistence_backend(settings)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docmind.persistence.file_backend import FilePersistenceBackend
from docmind.persistence.protocols import IPersistenceBackend, RecordKind, record_ids, record_key

if TYPE_CHECKING:
    from docmind.core.config import AppSettings


def create_persistence_backend(settings: AppSettings) -> IPersistenceBackend:
    """Create the backend selected by ``settings.persistence.backend``."""
    backend_type = settings.persistence.backend

    if backend_type == "file":
        return FilePersistenceBackend(settings.persistence.store_path)

    raise ValueError(f"Unknown persistence backend: {backend_type!r}")


__all__ = [
    "FilePersistenceBackend",
    "IPersistenceBackend",
    "RecordKind",
    "create_persistence_backend",
    "record_ids",
    "record_key",
]

"""Catalog backends (file, memory)."""

from __future__ import annotations

from docmind.catalog.backends.file_backend import FileCatalogBackend
from docmind.catalog.backends.memory_backend import MemoryCatalogBackend
from docmind.catalog.backends.protocol import ICatalogBackend

__all__ = ["ICatalogBackend", "FileCatalogBackend", "MemoryCatalogBackend"]

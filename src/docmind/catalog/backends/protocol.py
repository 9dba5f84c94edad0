"""Catalog backend protocol: defines the contract all backends implement."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from docmind.catalog.models import DocumentTypeDefinition, RuleCatalog


@runtime_checkable
class ICatalogBackend(Protocol):
    """Protocol for rule catalog sources (file, memory)."""

    def get_catalog(self) -> RuleCatalog:
        """Return the current catalog. Raises CatalogError if it cannot be loaded."""
        ...

    def get_document_type(self, document_type: str) -> DocumentTypeDefinition:
        """Get one document type. Raises UnknownDocumentTypeError if absent."""
        ...

    def list_document_types(self) -> list[dict[str, Any]]:
        """Return id/name/category/required/conditions summaries."""
        ...

    def get_version(self) -> str:
        """Return the catalog version string."""
        ...

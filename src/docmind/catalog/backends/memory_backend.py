"""In-memory catalog backend for tests and embedded use."""

from __future__ import annotations

from typing import Any

from docmind.catalog.models import DocumentTypeDefinition, RuleCatalog
from docmind.exceptions import UnknownDocumentTypeError


class MemoryCatalogBackend:
    """Serves a ``RuleCatalog`` held in memory."""

    def __init__(self, catalog: RuleCatalog | None = None) -> None:
        self._catalog = catalog or RuleCatalog()

    def get_catalog(self) -> RuleCatalog:
        return self._catalog

    def get_document_type(self, document_type: str) -> DocumentTypeDefinition:
        doc_type = self._catalog.find(document_type)
        if doc_type is None:
            raise UnknownDocumentTypeError(document_type)
        return doc_type

    def list_document_types(self) -> list[dict[str, Any]]:
        return [dt.summary() for dt in self._catalog.document_types]

    def get_version(self) -> str:
        return self._catalog.version

    def replace(self, catalog: RuleCatalog) -> None:
        """Swap in a new catalog; subsequent validations see the new rules."""
        self._catalog = catalog

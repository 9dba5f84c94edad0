"""Rule catalog: document types, field rules, document rules, scoring weights.

Factory function::

    from docmind.catalog import create_catalog_backend
    backend = create_catalog_backend(settings)
    paystub = backend.get_document_type("paystub")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docmind.catalog.backends.protocol import ICatalogBackend
from docmind.catalog.models import (
    DataType,
    DocumentRule,
    DocumentTypeDefinition,
    FieldRule,
    FieldValidatorId,
    LoanTypeRule,
    Operator,
    RequirementCondition,
    RuleCatalog,
    ScoringWeights,
    Severity,
)
from docmind.catalog.parser import parse_catalog

if TYPE_CHECKING:
    from docmind.core.config import AppSettings


def create_catalog_backend(settings: AppSettings) -> ICatalogBackend:
    """Create the catalog backend selected by ``settings.catalog.backend``."""
    backend_type = settings.catalog.backend

    if backend_type not in ("file", "memory"):
        raise ValueError(f"Unknown catalog backend: {backend_type!r}")

    from docmind.catalog.backends.file_backend import FileCatalogBackend

    file_backend = FileCatalogBackend(
        settings.catalog.path,
        strict_weights=settings.catalog.strict_weights,
    )
    if backend_type == "file":
        return file_backend

    from docmind.catalog.backends.memory_backend import MemoryCatalogBackend

    # Seeded once from the catalog file; later replace() calls never touch disk
    return MemoryCatalogBackend(file_backend.get_catalog())


__all__ = [
    "DataType",
    "DocumentRule",
    "DocumentTypeDefinition",
    "FieldRule",
    "FieldValidatorId",
    "ICatalogBackend",
    "LoanTypeRule",
    "Operator",
    "RequirementCondition",
    "RuleCatalog",
    "ScoringWeights",
    "Severity",
    "create_catalog_backend",
    "parse_catalog",
]

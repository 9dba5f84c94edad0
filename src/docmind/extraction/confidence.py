"""Extraction confidence: share of required fields the extractor found."""

from __future__ import annotations

from typing import Any, Mapping

from docmind.catalog.models import DocumentTypeDefinition
from docmind.validation.parsing import round_half_up


def calculate_confidence(data: Mapping[str, Any], doc_type: DocumentTypeDefinition) -> int:
    """Percentage (0-100) of required fields whose value is not None.

    A document type with no required fields scores 100.
    """
    required = [f for f in doc_type.fields if f.required]
    if not required:
        return 100
    found = sum(1 for f in required if data.get(f.name) is not None)
    return round_half_up(100 * found / len(required))

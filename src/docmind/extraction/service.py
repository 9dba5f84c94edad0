"""Run an extraction provider for a catalog document type."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from docmind.extraction.confidence import calculate_confidence
from docmind.extraction.prompt import build_extraction_prompt
from docmind.validation.models import ExtractedDocument

if TYPE_CHECKING:
    from docmind.catalog.backends.protocol import ICatalogBackend
    from docmind.extraction.protocols import IExtractionProvider

log = logging.getLogger(__name__)


async def extract_document(
    provider: IExtractionProvider,
    catalog_backend: ICatalogBackend,
    document_type: str,
    document_text: str,
) -> ExtractedDocument:
    """Extract ``document_text`` as ``document_type`` and score the result.

    Raises UnknownDocumentTypeError before calling the provider when the
    type is not in the catalog.  Provider errors propagate unchanged.
    """
    doc_type = catalog_backend.get_document_type(document_type)
    prompt = build_extraction_prompt(doc_type, document_text)

    data = await provider.extract(prompt, document_type=document_type)
    confidence = calculate_confidence(data, doc_type)
    log.info("Extracted %s: %d field(s), confidence %d", document_type, len(data), confidence)

    return ExtractedDocument(
        document_type=document_type,
        extracted_at=datetime.now(timezone.utc),
        confidence=confidence,
        data=data,
    )

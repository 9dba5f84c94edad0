"""Extraction provider protocol: the opaque OCR/LLM collaborator."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IExtractionProvider(Protocol):
    """Turns document text into a field map.

    Providers own any long-running or remote work; the validation core only
    ever sees the finished field map.
    """

    async def extract(self, prompt: str, *, document_type: str) -> dict[str, Any]:
        """Run extraction for one document.

        Args:
            prompt: Fully rendered extraction prompt (see ``build_extraction_prompt``).
            document_type: Catalog id of the document type being extracted.

        Returns:
            Field name to value mapping; fields that were not found map to None.
        """
        ...

"""Extraction support: provider protocol, prompt rendering, confidence scoring."""

from __future__ import annotations

from docmind.extraction.confidence import calculate_confidence
from docmind.extraction.prompt import SYSTEM_PROMPT, build_extraction_prompt
from docmind.extraction.protocols import IExtractionProvider
from docmind.extraction.service import extract_document

__all__ = [
    "IExtractionProvider",
    "SYSTEM_PROMPT",
    "build_extraction_prompt",
    "calculate_confidence",
    "extract_document",
]

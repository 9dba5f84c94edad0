"""Application services composing the validation core with storage."""

from __future__ import annotations

from docmind.services.review_service import ReviewService, create_review_service

__all__ = ["ReviewService", "create_review_service"]

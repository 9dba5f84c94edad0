"""docmind: mortgage document validation, underwriting conditions, and loan readiness scoring.

Typical use::

    from docmind import AppSettings, ExtractedDocument, create_review_service

    service = create_review_service(AppSettings())
    service.loans.save_loan(loan_record)
    record = service.process_document("LN-1001", ExtractedDocument(documentType="w2", data=fields))
    card = service.scorecard("LN-1001")
"""

from __future__ import annotations

from docmind.catalog import create_catalog_backend
from docmind.conditions import Condition, ConditionService, ConditionStats, ConditionStatus
from docmind.core.config import AppSettings
from docmind.exceptions import DocMindError
from docmind.loans import DocumentRecord, LoanStore
from docmind.persistence import create_persistence_backend
from docmind.requirements import required_documents
from docmind.scoring import Scorecard, ScorecardBuilder
from docmind.services import ReviewService, create_review_service
from docmind.validation import DocumentValidator, ExtractedDocument, LoanContext, ValidationResult

__version__ = "0.1.0"

__all__ = [
    "AppSettings",
    "Condition",
    "ConditionService",
    "ConditionStats",
    "ConditionStatus",
    "DocMindError",
    "DocumentRecord",
    "DocumentValidator",
    "ExtractedDocument",
    "LoanContext",
    "LoanStore",
    "ReviewService",
    "Scorecard",
    "ScorecardBuilder",
    "ValidationResult",
    "create_catalog_backend",
    "create_persistence_backend",
    "create_review_service",
    "required_documents",
]

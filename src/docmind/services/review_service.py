"""Review service: validate, raise conditions, record, and score a loan's documents."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from docmind.conditions.models import Condition, ConditionStats
from docmind.conditions.service import ConditionService
from docmind.extraction.service import extract_document
from docmind.loans.models import DocumentRecord, DocumentStatus
from docmind.loans.store import LoanStore
from docmind.scoring.scorecard import Scorecard, ScorecardBuilder
from docmind.validation.engine import DocumentValidator
from docmind.validation.models import ExtractedDocument, LoanContext, ValidationResult

if TYPE_CHECKING:
    from docmind.catalog.backends.protocol import ICatalogBackend
    from docmind.core.config import AppSettings
    from docmind.extraction.protocols import IExtractionProvider
    from docmind.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)


def _new_document_id() -> str:
    return uuid.uuid4().hex


class ReviewService:
    """End-to-end document review for a loan.

    ``process_document`` runs the full flow for one extracted document:
    validation, condition generation, and a stored ``DocumentRecord`` whose
    status is ``approved`` when the document validated cleanly and
    ``needs-review`` otherwise.
    """

    def __init__(
        self,
        catalog_backend: ICatalogBackend,
        persistence_backend: IPersistenceBackend,
        *,
        validator: Optional[DocumentValidator] = None,
        conditions: Optional[ConditionService] = None,
        extraction_provider: Optional[IExtractionProvider] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._catalog = catalog_backend
        self._loans = LoanStore(persistence_backend)
        self._validator = validator or DocumentValidator(catalog_backend, clock=today)
        self._conditions = conditions or ConditionService(persistence_backend)
        self._scorer = ScorecardBuilder(catalog_backend)
        self._extractor = extraction_provider

    @property
    def loans(self) -> LoanStore:
        return self._loans

    @property
    def conditions(self) -> ConditionService:
        return self._conditions

    def validate(
        self,
        loan_id: str,
        extracted: ExtractedDocument | Mapping[str, Any],
        document_type: Optional[str] = None,
    ) -> ValidationResult:
        """Validate against a stored loan without recording anything."""
        loan = self._loans.get_loan_context(loan_id)
        return self._validator.validate_document(extracted, document_type, loan)

    def process_document(
        self,
        loan_id: str,
        extracted: ExtractedDocument,
        file_name: str = "",
    ) -> DocumentRecord:
        """Validate ``extracted``, generate its conditions, and store the record."""
        loan = self._loans.get_loan_context(loan_id)
        result = self._validator.validate_document(extracted, loan=loan)
        conditions = self._conditions.generate_conditions(result, extracted.document_type, loan)

        record = DocumentRecord(
            id=_new_document_id(),
            loan_id=loan_id,
            document_type=extracted.document_type,
            file_name=file_name,
            confidence=extracted.confidence,
            extracted_data=dict(extracted.data),
            validation_results=result.to_dict(),
            condition_ids=[c.id for c in conditions],
            status=DocumentStatus.APPROVED if result.is_valid else DocumentStatus.NEEDS_REVIEW,
        )
        self._loans.save_document_record(loan_id, record)
        log.info(
            "Processed %s for loan %s: %s (%d condition(s))",
            extracted.document_type,
            loan_id,
            record.status.value,
            len(conditions),
        )
        return record

    async def ingest_document(
        self,
        loan_id: str,
        document_type: str,
        document_text: str,
        file_name: str = "",
    ) -> DocumentRecord:
        """Extract text with the configured provider, then :meth:`process_document`."""
        if self._extractor is None:
            raise RuntimeError("No extraction provider configured")
        # Fail on an unknown loan before paying for extraction
        self._loans.get_loan(loan_id)
        extracted = await extract_document(self._extractor, self._catalog, document_type, document_text)
        return self.process_document(loan_id, extracted, file_name)

    def latest_documents(self, loan_id: str) -> list[DocumentRecord]:
        """Most recent record per document type, in first-upload order."""
        latest: dict[str, DocumentRecord] = {}
        for record in self._loans.get_documents_for_loan(loan_id):
            latest[record.document_type] = record
        return list(latest.values())

    def scorecard(self, loan_id: str) -> Scorecard:
        """Score every uploaded document, superseded uploads included."""
        loan = self._loans.get_loan_context(loan_id)
        documents = self._loans.get_documents_for_loan(loan_id)
        conditions: list[Condition] = self._conditions.get_conditions_for_loan(loan_id)
        return self._scorer.build_scorecard(loan, documents, conditions)

    def condition_stats(self, loan_id: str) -> ConditionStats:
        return self._conditions.get_condition_stats(loan_id)


def create_review_service(settings: AppSettings) -> ReviewService:
    """Wire a ReviewService from settings-selected catalog and persistence backends."""
    from docmind.catalog import create_catalog_backend
    from docmind.persistence import create_persistence_backend

    return ReviewService(
        create_catalog_backend(settings),
        create_persistence_backend(settings),
    )

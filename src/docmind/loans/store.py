"""Loan store: loan application records and their processed documents.

A loan record is the raw nested mapping (borrower, mismo, ratios, ...) with
a ``documents`` array of serialized :class:`DocumentRecord` entries, stored
under ``loan-<loanId>``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping

from docmind.exceptions import DocumentNotFoundError, LoanNotFoundError
from docmind.loans.models import DocumentRecord, DocumentStatus, LoanSummary
from docmind.persistence.protocols import RecordKind, record_ids, record_key
from docmind.validation.models import LoanContext

if TYPE_CHECKING:
    from docmind.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)


class LoanStore:
    """Loan records over an :class:`IPersistenceBackend`."""

    def __init__(self, backend: IPersistenceBackend) -> None:
        self._backend = backend

    @staticmethod
    def key_for(loan_id: str) -> str:
        return record_key(RecordKind.LOAN, loan_id)

    # ── Loans ────────────────────────────────────────────────────

    def get_loan(self, loan_id: str) -> dict[str, Any]:
        """Return the raw loan record. Raises LoanNotFoundError."""
        try:
            raw = self._backend.load(self.key_for(loan_id))
        except KeyError:
            raise LoanNotFoundError(loan_id) from None
        return json.loads(raw)

    def get_loan_context(self, loan_id: str) -> LoanContext:
        return LoanContext(self.get_loan(loan_id))

    def save_loan(self, loan: Mapping[str, Any]) -> str:
        """Store a loan record keyed by its ``loanId`` and return that id."""
        loan_id = loan.get("loanId")
        if not loan_id:
            raise ValueError("Loan record has no loanId")
        self._backend.save(self.key_for(loan_id), json.dumps(loan, indent=2, default=str))
        log.debug("Saved loan %s", loan_id)
        return loan_id

    def list_loans(self) -> list[LoanSummary]:
        summaries = []
        for loan_id in record_ids(self._backend, RecordKind.LOAN):
            loan = self.get_loan(loan_id)
            borrower = loan.get("borrower") or {}
            mismo = loan.get("mismo") or {}
            processing = loan.get("processingStatus") or {}
            summaries.append(
                LoanSummary(
                    loan_id=loan.get("loanId", loan_id),
                    loan_number=loan.get("loanNumber"),
                    borrower_name=f"{borrower.get('firstName', '')} {borrower.get('lastName', '')}".strip(),
                    loan_amount=mismo.get("loanAmountRequested"),
                    property_address=mismo.get("propertyAddress"),
                    status=processing.get("stage"),
                    last_updated=processing.get("lastUpdated"),
                )
            )
        return summaries

    # ── Documents ────────────────────────────────────────────────

    def save_document_record(self, loan_id: str, record: DocumentRecord) -> None:
        loan = self.get_loan(loan_id)
        documents = loan.setdefault("documents", [])
        documents.append(record.model_dump(mode="json", by_alias=True))
        self.save_loan(loan)
        log.info("Document %s (%s) saved to loan %s", record.id, record.document_type, loan_id)

    def get_documents_for_loan(self, loan_id: str) -> list[DocumentRecord]:
        loan = self.get_loan(loan_id)
        return [DocumentRecord.model_validate(d) for d in loan.get("documents") or []]

    def get_document(self, document_id: str) -> DocumentRecord:
        """Find a document record by id across all loans. Raises DocumentNotFoundError."""
        for loan_id in record_ids(self._backend, RecordKind.LOAN):
            for doc in self.get_loan(loan_id).get("documents") or []:
                if doc.get("id") == document_id:
                    return DocumentRecord.model_validate(doc)
        raise DocumentNotFoundError(document_id)

    def update_document_status(
        self,
        loan_id: str,
        document_id: str,
        status: DocumentStatus | str,
    ) -> DocumentRecord:
        loan = self.get_loan(loan_id)
        for i, doc in enumerate(loan.get("documents") or []):
            if doc.get("id") != document_id:
                continue
            record = DocumentRecord.model_validate(doc).model_copy(
                update={
                    "status": DocumentStatus(status),
                    "last_updated": datetime.now(timezone.utc),
                }
            )
            loan["documents"][i] = record.model_dump(mode="json", by_alias=True)
            self.save_loan(loan)
            log.info("Document %s status updated to %s", document_id, record.status.value)
            return record
        raise DocumentNotFoundError(document_id)

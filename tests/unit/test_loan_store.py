"""Tests for the loan store."""

from __future__ import annotations

import pytest

from docmind.exceptions import DocumentNotFoundError, LoanNotFoundError
from docmind.loans import DocumentRecord, DocumentStatus, LoanStore
from tests.fakes.fake_persistence import FakePersistenceBackend


@pytest.fixture
def backend() -> FakePersistenceBackend:
    return FakePersistenceBackend()


@pytest.fixture
def store(backend, loan_data) -> LoanStore:
    store = LoanStore(backend)
    store.save_loan(loan_data)
    return store


def _record(doc_id: str = "doc-1", document_type: str = "paystub") -> DocumentRecord:
    return DocumentRecord(id=doc_id, loan_id="LN-1001", document_type=document_type, file_name="stub.pdf")


class TestLoans:
    def test_round_trip_under_loan_key(self, store, backend, loan_data):
        assert backend.writes == ["loan-LN-1001"]
        assert store.get_loan("LN-1001") == loan_data

    def test_context_exposes_borrower(self, store):
        assert store.get_loan_context("LN-1001").borrower_full_name == "Jane Smith"

    def test_unknown_loan(self, store):
        with pytest.raises(LoanNotFoundError, match="LN-404"):
            store.get_loan("LN-404")

    def test_loan_without_id_rejected(self, store):
        with pytest.raises(ValueError):
            store.save_loan({"borrower": {}})

    def test_list_loans(self, store):
        (summary,) = store.list_loans()
        assert summary.loan_id == "LN-1001"
        assert summary.borrower_name == "Jane Smith"
        assert summary.loan_amount == 300000
        assert summary.status == "processing"
        assert summary.model_dump(by_alias=True)["loanNumber"] == "2025-1001"


class TestDocuments:
    def test_records_appended_in_order(self, store):
        store.save_document_record("LN-1001", _record("doc-1"))
        store.save_document_record("LN-1001", _record("doc-2", "w2"))

        records = store.get_documents_for_loan("LN-1001")
        assert [r.id for r in records] == ["doc-1", "doc-2"]
        assert records[0].file_name == "stub.pdf"
        assert records[0].validation is None

    def test_stored_camel_case(self, store, backend):
        store.save_document_record("LN-1001", _record())
        assert '"documentType": "paystub"' in backend.load("loan-LN-1001")

    def test_saving_to_unknown_loan(self, store):
        with pytest.raises(LoanNotFoundError):
            store.save_document_record("LN-404", _record())

    def test_get_document_across_loans(self, store):
        store.save_document_record("LN-1001", _record("doc-7"))
        assert store.get_document("doc-7").loan_id == "LN-1001"
        with pytest.raises(DocumentNotFoundError):
            store.get_document("doc-missing")

    def test_update_status(self, store):
        store.save_document_record("LN-1001", _record())
        updated = store.update_document_status("LN-1001", "doc-1", "approved")

        assert updated.status == DocumentStatus.APPROVED
        assert updated.last_updated is not None
        assert store.get_documents_for_loan("LN-1001")[0].status == DocumentStatus.APPROVED

    def test_update_unknown_document(self, store):
        with pytest.raises(DocumentNotFoundError):
            store.update_document_status("LN-1001", "doc-missing", DocumentStatus.APPROVED)

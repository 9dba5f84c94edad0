"""Loan records and processed document records."""

from __future__ import annotations

from docmind.loans.models import DocumentRecord, DocumentStatus, LoanSummary
from docmind.loans.store import LoanStore

__all__ = ["DocumentRecord", "DocumentStatus", "LoanStore", "LoanSummary"]

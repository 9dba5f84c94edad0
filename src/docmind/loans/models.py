"""Loan-side records: processed document records and loan listing summaries."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from docmind.validation.models import ValidationResult

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class DocumentStatus(str, Enum):
    APPROVED = "approved"
    NEEDS_REVIEW = "needs-review"


class DocumentRecord(BaseModel):
    """One processed upload: what was extracted and how it validated.

    ``validation_results`` keeps the camelCase ``ValidationResult.to_dict()``
    shape; :attr:`validation` rebuilds the dataclass.
    """

    model_config = _CAMEL

    id: str
    loan_id: str
    document_type: str
    file_name: str = ""
    upload_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    confidence: float = 0
    extracted_data: dict[str, Any] = Field(default_factory=dict)
    validation_results: dict[str, Any] = Field(default_factory=dict)
    condition_ids: list[str] = Field(default_factory=list)
    status: DocumentStatus = DocumentStatus.NEEDS_REVIEW
    last_updated: Optional[datetime] = None

    @property
    def validation(self) -> Optional[ValidationResult]:
        if not self.validation_results:
            return None
        return ValidationResult.from_dict(self.validation_results)


class LoanSummary(BaseModel):
    """Listing view of a loan record."""

    model_config = _CAMEL

    loan_id: str
    loan_number: Optional[str] = None
    borrower_name: str = ""
    loan_amount: Any = None
    property_address: Optional[str] = None
    status: Optional[str] = None
    last_updated: Optional[str] = None

"""Exception hierarchy for docmind.

Domain violations found while validating a document are reported as data
(issues and warnings on a ``ValidationResult``).  Only structural failures
(unknown document type, missing record, bad catalog) are raised.
"""

from __future__ import annotations


class DocMindError(Exception):
    """Base exception for all docmind errors."""


class CatalogError(DocMindError):
    """Raised when the rule catalog cannot be loaded or is malformed."""


class UnknownDocumentTypeError(DocMindError):
    """Raised when a document type id is not present in the catalog."""

    def __init__(self, document_type: str) -> None:
        super().__init__(f"Unknown document type: {document_type}")
        self.document_type = document_type


class ConditionNotFoundError(DocMindError):
    """Raised when a condition id does not exist in the store."""

    def __init__(self, condition_id: str) -> None:
        super().__init__(f"Condition not found: {condition_id}")
        self.condition_id = condition_id


class InvalidConditionTransitionError(DocMindError):
    """Raised when a lifecycle operation is not allowed from the current status."""

    def __init__(self, condition_id: str, current: str, target: str) -> None:
        super().__init__(
            f"Condition {condition_id} cannot move from '{current}' to '{target}'"
        )
        self.condition_id = condition_id
        self.current = current
        self.target = target


class LoanNotFoundError(DocMindError):
    """Raised when a loan record does not exist in the store."""

    def __init__(self, loan_id: str) -> None:
        super().__init__(f"Loan not found: {loan_id}")
        self.loan_id = loan_id


class DocumentNotFoundError(DocMindError):
    """Raised when a document record does not exist for a loan."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id


class PersistenceError(DocMindError):
    """Raised when a persistence backend operation fails."""


__all__ = [
    "DocMindError",
    "CatalogError",
    "UnknownDocumentTypeError",
    "ConditionNotFoundError",
    "InvalidConditionTransitionError",
    "LoanNotFoundError",
    "DocumentNotFoundError",
    "PersistenceError",
]

"""Document validation: field rules, declarative document rules, and deep checks.

Usage::

    from docmind.validation import DocumentValidator
    validator = DocumentValidator(catalog_backend)
    result = validator.validate_document(extracted, loan=loan_record)
"""

from __future__ import annotations

from docmind.validation.checks import Check, CheckRegistry, default_check_registry
from docmind.validation.engine import DocumentValidator
from docmind.validation.field_validator import validate_field
from docmind.validation.models import (
    ABSENT,
    ExtractedDocument,
    FieldValidation,
    Issue,
    LoanContext,
    ValidationResult,
    resolve_path,
)

__all__ = [
    "ABSENT",
    "Check",
    "CheckRegistry",
    "DocumentValidator",
    "ExtractedDocument",
    "FieldValidation",
    "Issue",
    "LoanContext",
    "ValidationResult",
    "default_check_registry",
    "resolve_path",
    "validate_field",
]

"""Document validator: field rules, declarative document rules, then deep checks."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Mapping

from docmind.catalog.models import Severity
from docmind.validation.checks import CheckRegistry, default_check_registry
from docmind.validation.document_rules import evaluate_document_rule
from docmind.validation.field_validator import validate_field
from docmind.validation.models import (
    ExtractedDocument,
    Issue,
    LoanContext,
    ValidationResult,
)

if TYPE_CHECKING:
    from docmind.catalog.backends.protocol import ICatalogBackend

log = logging.getLogger(__name__)


class DocumentValidator:
    """Validates one extracted document against the catalog and its deep checks.

    Validation is pure computation over already-resolved inputs.  Domain
    violations are returned as issues on the result; only an unknown document
    type is raised (``UnknownDocumentTypeError`` from the catalog backend).
    """

    def __init__(
        self,
        catalog_backend: ICatalogBackend,
        check_registry: CheckRegistry | None = None,
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._catalog = catalog_backend
        self._checks = check_registry if check_registry is not None else default_check_registry()
        self._clock = clock

    def validate_document(
        self,
        extracted: ExtractedDocument | Mapping[str, Any],
        document_type: str | None = None,
        loan: LoanContext | Mapping[str, Any] | None = None,
    ) -> ValidationResult:
        """Validate ``extracted`` as ``document_type`` for the given loan.

        ``extracted`` may be an :class:`ExtractedDocument` or a plain field map.
        When ``document_type`` is omitted it is taken from the extracted document.
        """
        data, document_type = _unpack(extracted, document_type)
        loan_ctx = loan if isinstance(loan, LoanContext) else LoanContext(loan or {})

        doc_def = self._catalog.get_document_type(document_type)
        catalog = self._catalog.get_catalog()
        today = self._clock()

        result = ValidationResult(document_type=document_type)

        # 1. Field rules
        for rule in doc_def.fields:
            validation = validate_field(rule, data.get(rule.name), loan_ctx, today=today)
            result.field_validations[rule.name] = validation
            if not validation.is_valid:
                result.add(
                    Issue(
                        severity=Severity.CRITICAL,
                        field=rule.name,
                        message=validation.message or f"Field '{rule.name}' is invalid",
                    )
                )

        # 2. Declarative document rules
        for doc_rule in doc_def.document_rules:
            if evaluate_document_rule(doc_rule.rule, data, loan_ctx, catalog, today):
                continue
            result.add(
                Issue(severity=doc_rule.severity, rule=doc_rule.rule, message=doc_rule.message)
            )

        # 3. Document-type-specific deep checks
        for check in self._checks.checks_for(document_type):
            result.extend(check(data, loan_ctx, today))

        log.info(
            "Validated %s: %d issue(s), %d warning(s), %d info",
            document_type,
            len(result.issues),
            len(result.warnings),
            len(result.info),
        )
        return result


def _unpack(
    extracted: ExtractedDocument | Mapping[str, Any],
    document_type: str | None,
) -> tuple[Mapping[str, Any], str]:
    if isinstance(extracted, Mapping) and "data" in extracted and (
        "documentType" in extracted or "document_type" in extracted
    ):
        extracted = ExtractedDocument.model_validate(extracted)
    if isinstance(extracted, ExtractedDocument):
        return extracted.data, document_type or extracted.document_type
    if document_type is None:
        raise ValueError("document_type is required when validating a plain field map")
    return extracted, document_type

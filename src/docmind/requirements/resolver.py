"""Requirement resolver: which document types a loan needs.

A document type is required when it is flagged ``required`` and carries no
conditions, or when every one of its conditions holds against the loan
record (AND semantics).  Paths that do not resolve yield :data:`ABSENT`, and
every operator is false against it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from docmind.catalog.models import DocumentTypeDefinition, Operator, RequirementCondition, RuleCatalog
from docmind.validation.models import ABSENT, LoanContext, resolve_path

log = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strict_equals(left: Any, right: Any) -> bool:
    # Booleans never equal numbers: ``selfEmployed == 0`` must not match ``false``.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def _ordered(left: Any, right: Any) -> bool:
    return (_is_number(left) and _is_number(right)) or (
        isinstance(left, str) and isinstance(right, str)
    )


def evaluate_condition(condition: RequirementCondition, loan: LoanContext | Mapping[str, Any]) -> bool:
    """Evaluate one requirement condition against the loan record."""
    data = loan.data if isinstance(loan, LoanContext) else loan
    value = resolve_path(data, condition.field)
    if value is ABSENT:
        return False

    op = condition.operator
    expected = condition.value

    if op == Operator.EQUALS:
        return _strict_equals(value, expected)
    if op == Operator.GREATER_THAN:
        return _ordered(value, expected) and value > expected
    if op == Operator.LESS_THAN:
        return _ordered(value, expected) and value < expected
    if op == Operator.IN:
        return isinstance(expected, (list, tuple)) and any(_strict_equals(value, v) for v in expected)
    if op == Operator.CONTAINS:
        if value is None:
            return False
        return str(expected).lower() in str(value).lower()
    return False


def is_required(doc_type: DocumentTypeDefinition, loan: LoanContext | Mapping[str, Any]) -> bool:
    """Return True when ``doc_type`` must be collected for this loan."""
    if not doc_type.conditions:
        return doc_type.required
    return all(evaluate_condition(c, loan) for c in doc_type.conditions)


def required_documents(
    loan: LoanContext | Mapping[str, Any],
    catalog: RuleCatalog,
) -> list[DocumentTypeDefinition]:
    """Return the catalog's document types this loan requires, in catalog order."""
    required = [dt for dt in catalog.document_types if is_required(dt, loan)]
    log.debug("Resolved %d required document type(s)", len(required))
    return required

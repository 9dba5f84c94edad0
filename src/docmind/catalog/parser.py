"""Parse a raw catalog blob (decoded YAML/JSON) into a ``RuleCatalog``.

The blob keeps the camelCase layout of the catalog files::

    version: "2.1"
    documentTypes:
      - id: paystub
        name: Pay Stub
        required: true
        conditions: []
        extractionRules:
          fields: [{name: grossPay, dataType: currency, required: true}]
          documentValidations: [{rule: nameMatches, severity: critical, message: ...}]
        aiPrompt: ...
    scoringRules:
      documentCompleteness: {weight: 30}
    conditionalLogic:
      loanTypeRules: {FHA: {maxLTV: 96.5}}
"""

from __future__ import annotations

import logging
from typing import Any

from docmind.catalog.models import (
    EXPECTED_WEIGHT_TOTAL,
    DataType,
    DocumentRule,
    DocumentTypeDefinition,
    FieldRule,
    FieldValidatorId,
    LoanTypeRule,
    Operator,
    RequirementCondition,
    RuleCatalog,
    ScoringWeights,
    Severity,
)
from docmind.exceptions import CatalogError

log = logging.getLogger(__name__)


def parse_catalog(data: dict[str, Any], *, strict_weights: bool = False) -> RuleCatalog:
    """Build a ``RuleCatalog`` from a decoded catalog blob.

    Raises:
        CatalogError: On missing keys, unknown enum values, duplicate ids, or
            (with ``strict_weights``) weights that do not sum to 75.
    """
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog must be a mapping, got {type(data).__name__}")

    try:
        document_types = tuple(_parse_document_type(raw) for raw in data.get("documentTypes", []))
        weights = _parse_weights(data.get("scoringRules") or {})
        loan_type_rules = _parse_loan_type_rules(data.get("conditionalLogic") or {})
    except (KeyError, ValueError, TypeError) as exc:
        raise CatalogError(f"Malformed catalog: {exc}") from exc

    seen: set[str] = set()
    for doc_type in document_types:
        if doc_type.id in seen:
            raise CatalogError(f"Duplicate document type id: {doc_type.id!r}")
        seen.add(doc_type.id)

    if weights.total != EXPECTED_WEIGHT_TOTAL:
        if strict_weights:
            raise CatalogError(
                f"Scoring weights sum to {weights.total:g}, expected {EXPECTED_WEIGHT_TOTAL}"
            )
        log.warning(
            "Scoring weights sum to %g (expected %d); overall scores may leave [0, 100]",
            weights.total,
            EXPECTED_WEIGHT_TOTAL,
        )

    return RuleCatalog(
        version=str(data.get("version", "1")),
        document_types=document_types,
        scoring_weights=weights,
        loan_type_rules=loan_type_rules,
    )


def _parse_document_type(raw: dict[str, Any]) -> DocumentTypeDefinition:
    extraction = raw.get("extractionRules") or {}

    fields: list[FieldRule] = []
    names: set[str] = set()
    for field_raw in extraction.get("fields", []):
        rule = _parse_field(field_raw)
        if rule.name in names:
            raise ValueError(f"duplicate field {rule.name!r} in document type {raw['id']!r}")
        names.add(rule.name)
        fields.append(rule)

    return DocumentTypeDefinition(
        id=raw["id"],
        name=raw.get("name", raw["id"]),
        category=raw.get("category", ""),
        required=bool(raw.get("required", False)),
        conditions=tuple(_parse_condition(c) for c in raw.get("conditions") or []),
        fields=tuple(fields),
        document_rules=tuple(
            DocumentRule(
                rule=v["rule"],
                severity=Severity(v.get("severity", "warning")),
                message=v.get("message", ""),
            )
            for v in extraction.get("documentValidations", [])
        ),
        ai_prompt=raw.get("aiPrompt", ""),
    )


def _parse_field(raw: dict[str, Any]) -> FieldRule:
    validator = raw.get("validationRule")
    return FieldRule(
        name=raw["name"],
        data_type=DataType(raw.get("dataType", "string")),
        required=bool(raw.get("required", False)),
        validator=FieldValidatorId(validator) if validator else None,
        description=raw.get("description", ""),
    )


def _parse_condition(raw: dict[str, Any]) -> RequirementCondition:
    return RequirementCondition(
        field=raw["field"],
        operator=Operator(raw["operator"]),
        value=raw.get("value"),
    )


def _parse_weights(raw: dict[str, Any]) -> ScoringWeights:
    defaults = ScoringWeights()

    def _weight(key: str, default: float) -> float:
        entry = raw.get(key)
        if entry is None:
            return default
        return float(entry["weight"])

    return ScoringWeights(
        document_completeness=_weight("documentCompleteness", defaults.document_completeness),
        data_accuracy=_weight("dataAccuracy", defaults.data_accuracy),
        compliance_issues=_weight("complianceIssues", defaults.compliance_issues),
    )


def _parse_loan_type_rules(raw: dict[str, Any]) -> dict[str, LoanTypeRule]:
    rules: dict[str, LoanTypeRule] = {}
    for product_type, entry in (raw.get("loanTypeRules") or {}).items():
        max_ltv = entry.get("maxLTV")
        rules[product_type] = LoanTypeRule(max_ltv=float(max_ltv) if max_ltv is not None else None)
    return rules

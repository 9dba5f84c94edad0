"""Rule catalog data models: document types, field rules, and scoring weights.

The catalog is immutable at evaluation time.  Backends parse the raw
configuration blob into these frozen dataclasses once per load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity of a validation finding."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class DataType(str, Enum):
    """Semantic type of an extracted field."""

    STRING = "string"
    DATE = "date"
    CURRENCY = "currency"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"


class FieldValidatorId(str, Enum):
    """Named validators a field rule may reference."""

    MUST_MATCH_BORROWER_NAME = "mustMatchBorrowerName"
    MUST_MATCH_BORROWER_DOB = "mustMatchBorrowerDOB"
    MUST_NOT_BE_EXPIRED = "mustNotBeExpired"
    WITHIN_30_DAYS = "within30Days"
    WITHIN_60_DAYS = "within60Days"
    MUST_MATCH_SUBJECT_PROPERTY = "mustMatchSubjectProperty"
    MUST_MATCH_LOAN_APPLICATION = "mustMatchLoanApplication"


class Operator(str, Enum):
    """Comparison operators for requirement conditions."""

    EQUALS = "equals"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    IN = "in"
    CONTAINS = "contains"


@dataclass(frozen=True)
class FieldRule:
    """Extraction and validation rule for a single field of a document type."""

    name: str
    data_type: DataType = DataType.STRING
    required: bool = False
    validator: FieldValidatorId | None = None
    description: str = ""


@dataclass(frozen=True)
class DocumentRule:
    """Document-level rule, resolved by ``rule`` id at validation time."""

    rule: str
    severity: Severity = Severity.WARNING
    message: str = ""


@dataclass(frozen=True)
class RequirementCondition:
    """One predicate of a "document is required when..." clause."""

    field: str
    operator: Operator
    value: Any = None


@dataclass(frozen=True)
class DocumentTypeDefinition:
    """A document category with its extraction and validation rules."""

    id: str
    name: str
    category: str = ""
    required: bool = False
    conditions: tuple[RequirementCondition, ...] = ()
    fields: tuple[FieldRule, ...] = ()
    document_rules: tuple[DocumentRule, ...] = ()
    ai_prompt: str = ""

    def summary(self) -> dict[str, Any]:
        """Return the id/name/category/required/conditions view used by listings."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "required": self.required,
            "conditions": [
                {"field": c.field, "operator": c.operator.value, "value": c.value}
                for c in self.conditions
            ],
        }


@dataclass(frozen=True)
class ScoringWeights:
    """Per-dimension weights for the readiness score.

    Under a sane configuration the three weights sum to 75, leaving 25 points
    for the ready-to-close bonus.
    """

    document_completeness: float = 30.0
    data_accuracy: float = 25.0
    compliance_issues: float = 20.0

    @property
    def total(self) -> float:
        return self.document_completeness + self.data_accuracy + self.compliance_issues


@dataclass(frozen=True)
class LoanTypeRule:
    """Program-level limits for a loan product type."""

    max_ltv: float | None = None


DEFAULT_MAX_LTV = 97.0
READY_TO_CLOSE_BONUS = 25
EXPECTED_WEIGHT_TOTAL = 100 - READY_TO_CLOSE_BONUS


@dataclass(frozen=True)
class RuleCatalog:
    """Versioned, immutable rule configuration."""

    version: str = "1"
    document_types: tuple[DocumentTypeDefinition, ...] = ()
    scoring_weights: ScoringWeights = field(default_factory=ScoringWeights)
    loan_type_rules: dict[str, LoanTypeRule] = field(default_factory=dict)

    def find(self, document_type: str) -> DocumentTypeDefinition | None:
        """Return the definition with the given id, or None."""
        for doc_type in self.document_types:
            if doc_type.id == document_type:
                return doc_type
        return None

    def max_ltv_for(self, product_type: Any) -> float:
        """Return the configured max LTV for a product type (default 97)."""
        rule = self.loan_type_rules.get(product_type) if isinstance(product_type, str) else None
        if rule is None or not rule.max_ltv:
            return DEFAULT_MAX_LTV
        return rule.max_ltv

"""Validation data models: extracted documents, loan context, issues, and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from docmind.catalog.models import Severity


class ExtractedDocument(BaseModel):
    """Output of the extraction collaborator for one uploaded document."""

    document_type: str = Field(alias="documentType")
    extracted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="extractedAt"
    )
    confidence: float = Field(default=0, ge=0, le=100)
    data: dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}


class _Absent:
    """Marker for a path that does not resolve in the loan record."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


def resolve_path(data: Any, path: str) -> Any:
    """Walk a dot-separated path through nested mappings.

    Returns :data:`ABSENT` as soon as a segment is missing or the current value
    is not a mapping.  An explicit ``None`` stored at the final segment is
    returned as ``None``.
    """
    current = data
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return ABSENT
        current = current[key]
    return current


class LoanContext:
    """Read-only view over a loan application record.

    The raw nested record is kept for dot-path lookups; the properties below
    name the values the validators need.  Missing values come back as None.
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def get(self, path: str, default: Any = None) -> Any:
        """Return the value at ``path`` or ``default`` when it is absent or None."""
        value = resolve_path(self._data, path)
        if value is ABSENT or value is None:
            return default
        return value

    # ── Identity ──────────────────────────────────────────────────

    @property
    def loan_id(self) -> str | None:
        return self.get("loanId")

    @property
    def has_borrower(self) -> bool:
        return isinstance(self._data.get("borrower"), Mapping)

    @property
    def borrower_first_name(self) -> str:
        return str(self.get("borrower.firstName", ""))

    @property
    def borrower_last_name(self) -> str:
        return str(self.get("borrower.lastName", ""))

    @property
    def borrower_full_name(self) -> str:
        return f"{self.borrower_first_name} {self.borrower_last_name}".strip()

    @property
    def borrower_dob(self) -> str | None:
        return self.get("borrower.dateOfBirth")

    @property
    def borrower_ssn(self) -> str | None:
        return self.get("borrower.ssn")

    # ── Employment / income ───────────────────────────────────────

    @property
    def employer_name(self) -> str | None:
        return self.get("borrower.employment.current.employerName")

    @property
    def base_income(self) -> Any:
        return self.get("borrower.employment.current.baseIncome")

    @property
    def gross_monthly_income(self) -> Any:
        return self.get("ratios.grossMonthlyIncome")

    # ── Property / loan terms ─────────────────────────────────────

    @property
    def property_address(self) -> str | None:
        return self.get("propertyDetails.address") or self.get("mismo.propertyAddress")

    @property
    def loan_amount_requested(self) -> Any:
        return self.get("mismo.loanAmountRequested")

    @property
    def product_type(self) -> str | None:
        return self.get("mismo.productType")

    @property
    def monthly_payment(self) -> Any:
        return self.get("mismo.monthlyPayment")

    @property
    def property_state(self) -> str | None:
        return self.get("mismo.state")

    @property
    def cash_to_close(self) -> Any:
        return self.get("transactions.cashToClose")


@dataclass
class Issue:
    """A single finding produced by a field rule, document rule, or deep check."""

    severity: Severity
    message: str
    rule: Optional[str] = None
    field: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"severity": self.severity.value, "message": self.message}
        if self.rule is not None:
            out["rule"] = self.rule
        if self.field is not None:
            out["field"] = self.field
        return out

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Issue:
        return cls(
            severity=Severity(raw.get("severity", "warning")),
            message=raw.get("message", ""),
            rule=raw.get("rule"),
            field=raw.get("field"),
        )


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of validating one extracted field against its rule."""

    is_valid: bool = True
    message: Optional[str] = None


@dataclass
class ValidationResult:
    """Aggregated outcome of validating one extracted document.

    ``is_valid`` is derived from ``issues``; it cannot disagree with them.
    """

    document_type: str
    issues: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    info: list[Issue] = field(default_factory=list)
    field_validations: dict[str, FieldValidation] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0

    def add(self, issue: Issue) -> None:
        """Route an issue into the bucket matching its severity."""
        if issue.severity == Severity.CRITICAL:
            self.issues.append(issue)
        elif issue.severity == Severity.WARNING:
            self.warnings.append(issue)
        else:
            self.info.append(issue)

    def extend(self, issues: list[Issue]) -> None:
        for issue in issues:
            self.add(issue)

    def rule_ids(self) -> set[str]:
        """Return the rule ids of all findings, across every bucket."""
        return {i.rule for i in (*self.issues, *self.warnings, *self.info) if i.rule}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape stored on document records."""
        return {
            "documentType": self.document_type,
            "isValid": self.is_valid,
            "issues": [i.to_dict() for i in self.issues],
            "warnings": [i.to_dict() for i in self.warnings],
            "info": [i.to_dict() for i in self.info],
            "fieldValidations": {
                name: {"isValid": fv.is_valid, "message": fv.message}
                for name, fv in self.field_validations.items()
            },
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ValidationResult:
        return cls(
            document_type=raw.get("documentType", ""),
            issues=[Issue.from_dict(i) for i in raw.get("issues", [])],
            warnings=[Issue.from_dict(i) for i in raw.get("warnings", [])],
            info=[Issue.from_dict(i) for i in raw.get("info", [])],
            field_validations={
                name: FieldValidation(is_valid=fv.get("isValid", True), message=fv.get("message"))
                for name, fv in (raw.get("fieldValidations") or {}).items()
            },
        )

"""Loan readiness scorecard.

Three weighted dimensions plus a fixed bonus when the loan is ready to close::

    completeness = round(100 * received / required)          (100 if nothing required)
    accuracy     = round(100 * valid / total)                (0 with no documents)
    compliance   = max(0, 100 - 10 * critical - 5 * warnings)
    overall      = round(c * wC/100 + a * wA/100 + i * wI/100 + (25 if ready))

Rounding is half-up.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Sequence

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from docmind.catalog.models import READY_TO_CLOSE_BONUS
from docmind.conditions.models import Condition, ConditionStatus
from docmind.requirements.resolver import required_documents
from docmind.validation.models import LoanContext, ValidationResult
from docmind.validation.parsing import round_half_up

if TYPE_CHECKING:
    from docmind.catalog.backends.protocol import ICatalogBackend

log = logging.getLogger(__name__)

CRITICAL_PENALTY = 10
WARNING_PENALTY = 5

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class DimensionScore(BaseModel):
    model_config = _CAMEL

    score: int
    weight: float
    details: dict[str, int] = Field(default_factory=dict)


class ScoreBreakdown(BaseModel):
    model_config = _CAMEL

    document_completeness: DimensionScore
    data_accuracy: DimensionScore
    compliance: DimensionScore


class MissingDocument(BaseModel):
    model_config = _CAMEL

    id: str
    name: str
    category: str = ""


class Scorecard(BaseModel):
    """Aggregate readiness report for a loan; computed on demand, never stored."""

    model_config = _CAMEL

    loan_id: Optional[str] = None
    overall_score: int
    ready_to_close: bool
    scores: ScoreBreakdown
    missing_documents: list[MissingDocument] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def _document_view(document: Any) -> tuple[str, Optional[ValidationResult]]:
    """Return (document type, last validation result) for a record or mapping."""
    if isinstance(document, Mapping):
        raw = document.get("validationResults")
        result = ValidationResult.from_dict(raw) if raw else None
        return document.get("documentType", ""), result
    validation = getattr(document, "validation", None)
    return document.document_type, validation


class ScorecardBuilder:
    """Combines validation outcomes, conditions, and requirements into a Scorecard."""

    def __init__(self, catalog_backend: ICatalogBackend) -> None:
        self._catalog = catalog_backend

    def build_scorecard(
        self,
        loan: LoanContext | Mapping[str, Any],
        documents: Sequence[Any],
        conditions: Iterable[Condition],
    ) -> Scorecard:
        """Score a loan.

        ``documents`` holds one entry per received document, each a
        ``DocumentRecord`` (or its camelCase mapping) carrying the document's
        last validation result.
        """
        loan_ctx = loan if isinstance(loan, LoanContext) else LoanContext(loan)
        catalog = self._catalog.get_catalog()
        weights = catalog.scoring_weights

        views = [_document_view(d) for d in documents]
        received_types = {doc_type for doc_type, _ in views}

        required = required_documents(loan_ctx, catalog)
        missing = [dt for dt in required if dt.id not in received_types]
        received_count = len(required) - len(missing)
        if required:
            completeness = round_half_up(100 * received_count / len(required))
        else:
            completeness = 100

        results = [r for _, r in views if r is not None]
        valid_count = sum(1 for r in results if r.is_valid)
        accuracy = round_half_up(100 * valid_count / len(views)) if views else 0

        critical_issues = sum(len(r.issues) for r in results)
        warning_issues = sum(len(r.warnings) for r in results)
        compliance = max(0, 100 - CRITICAL_PENALTY * critical_issues - WARNING_PENALTY * warning_issues)

        unresolved = [c for c in conditions if c.status != ConditionStatus.CLEARED]
        ready = not missing and critical_issues == 0 and not unresolved

        overall = round_half_up(
            completeness * weights.document_completeness / 100
            + accuracy * weights.data_accuracy / 100
            + compliance * weights.compliance_issues / 100
            + (READY_TO_CLOSE_BONUS if ready else 0)
        )

        log.info(
            "Scorecard for loan %s: overall=%d ready=%s missing=%d",
            loan_ctx.loan_id,
            overall,
            ready,
            len(missing),
        )
        return Scorecard(
            loan_id=loan_ctx.loan_id,
            overall_score=overall,
            ready_to_close=ready,
            scores=ScoreBreakdown(
                document_completeness=DimensionScore(
                    score=completeness,
                    weight=weights.document_completeness,
                    details={
                        "total": len(required),
                        "received": received_count,
                        "missing": len(missing),
                    },
                ),
                data_accuracy=DimensionScore(
                    score=accuracy,
                    weight=weights.data_accuracy,
                    details={
                        "total": len(views),
                        "valid": valid_count,
                        "invalid": len(views) - valid_count,
                    },
                ),
                compliance=DimensionScore(
                    score=compliance,
                    weight=weights.compliance_issues,
                    details={
                        "criticalIssues": critical_issues,
                        "warningIssues": warning_issues,
                        "totalIssues": critical_issues + warning_issues,
                    },
                ),
            ),
            missing_documents=[
                MissingDocument(id=dt.id, name=dt.name, category=dt.category) for dt in missing
            ],
            conditions=unresolved,
        )

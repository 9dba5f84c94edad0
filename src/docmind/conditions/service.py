"""Condition generation and lifecycle.

Critical issues become ``document-issue`` conditions, warnings become
``needs-clarification`` conditions; info findings are never escalated.
Allowed transitions::

    open ──────────────► cleared
    open ──► pending-document ──► cleared

Nothing leaves ``cleared``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Mapping

from docmind.conditions.models import (
    Condition,
    ConditionCategory,
    ConditionStats,
    ConditionStatus,
    ConditionType,
)
from docmind.conditions.remedies import requires_new_document, suggested_action
from docmind.conditions.store import ConditionStore
from docmind.exceptions import ConditionNotFoundError, InvalidConditionTransitionError
from docmind.validation.models import Issue, LoanContext, ValidationResult

if TYPE_CHECKING:
    from docmind.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_condition_id() -> str:
    return f"cond-{uuid.uuid4().hex[:12]}"


class ConditionService:
    """Creates conditions from validation results and drives their lifecycle."""

    def __init__(
        self,
        backend: IPersistenceBackend,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_condition_id,
    ) -> None:
        self._store = ConditionStore(backend)
        self._clock = clock
        self._new_id = id_factory

    # ── Generation ───────────────────────────────────────────────

    def generate_conditions(
        self,
        result: ValidationResult,
        document_type: str,
        loan: LoanContext | Mapping[str, Any],
    ) -> list[Condition]:
        """Create and persist one condition per issue and per warning."""
        loan_ctx = loan if isinstance(loan, LoanContext) else LoanContext(loan)
        loan_id = loan_ctx.loan_id or ""

        conditions = [
            self._build(issue, document_type, loan_id, ConditionType.CRITICAL)
            for issue in result.issues
        ]
        conditions.extend(
            self._build(warning, document_type, loan_id, ConditionType.WARNING)
            for warning in result.warnings
        )

        self._store.append(loan_id, conditions)
        if conditions:
            log.info(
                "Generated %d condition(s) for loan %s from %s",
                len(conditions),
                loan_id,
                document_type,
            )
        return conditions

    def _build(
        self,
        issue: Issue,
        document_type: str,
        loan_id: str,
        condition_type: ConditionType,
    ) -> Condition:
        if condition_type == ConditionType.CRITICAL:
            category = ConditionCategory.DOCUMENT_ISSUE
            description = f"Critical issue found in {document_type}: {issue.message}"
            new_document = requires_new_document(issue.rule)
        else:
            category = ConditionCategory.NEEDS_CLARIFICATION
            description = f"Warning found in {document_type}: {issue.message}"
            new_document = False

        return Condition(
            id=self._new_id(),
            loan_id=loan_id,
            document_type=document_type,
            type=condition_type,
            category=category,
            title=issue.message,
            description=description,
            field=issue.field,
            rule=issue.rule,
            severity=issue.severity,
            status=ConditionStatus.OPEN,
            suggested_action=suggested_action(issue.rule, document_type),
            requires_new_document=new_document,
            created_at=self._clock(),
        )

    # ── Queries ──────────────────────────────────────────────────

    def get_conditions_for_loan(self, loan_id: str) -> list[Condition]:
        return self._store.load_for_loan(loan_id)

    def get_unresolved_conditions(self, loan_id: str) -> list[Condition]:
        return [c for c in self._store.load_for_loan(loan_id) if not c.is_resolved]

    def get_condition(self, condition_id: str) -> Condition:
        """Return a condition by id. Raises ConditionNotFoundError."""
        condition = self._store.find(condition_id)
        if condition is None:
            raise ConditionNotFoundError(condition_id)
        return condition

    def get_condition_stats(self, loan_id: str) -> ConditionStats:
        conditions = self._store.load_for_loan(loan_id)
        return ConditionStats(
            total=len(conditions),
            open=sum(1 for c in conditions if c.status == ConditionStatus.OPEN),
            cleared=sum(1 for c in conditions if c.status == ConditionStatus.CLEARED),
            pending_document=sum(
                1 for c in conditions if c.status == ConditionStatus.PENDING_DOCUMENT
            ),
            critical=sum(1 for c in conditions if c.type == ConditionType.CRITICAL),
            warnings=sum(1 for c in conditions if c.type == ConditionType.WARNING),
        )

    # ── Lifecycle ────────────────────────────────────────────────

    def clear_condition(self, condition_id: str, notes: str = "") -> Condition:
        """Mark a condition resolved, recording notes and a timestamp."""
        condition = self.get_condition(condition_id)
        if condition.status == ConditionStatus.CLEARED:
            raise InvalidConditionTransitionError(
                condition_id, condition.status.value, ConditionStatus.CLEARED.value
            )

        updated = condition.model_copy(
            update={
                "status": ConditionStatus.CLEARED,
                "cleared_at": self._clock(),
                "resolution_notes": notes,
            }
        )
        self._store.replace(updated)
        log.info("Condition %s cleared", condition_id)
        return updated

    def request_document(self, condition_id: str, document_type: str, notes: str = "") -> Condition:
        """Ask the borrower for a replacement document; only open conditions qualify."""
        condition = self.get_condition(condition_id)
        if condition.status != ConditionStatus.OPEN:
            raise InvalidConditionTransitionError(
                condition_id, condition.status.value, ConditionStatus.PENDING_DOCUMENT.value
            )

        updated = condition.model_copy(
            update={
                "status": ConditionStatus.PENDING_DOCUMENT,
                "requested_document": document_type,
                "request_notes": notes,
                "requested_at": self._clock(),
            }
        )
        self._store.replace(updated)
        log.info("Document %s requested for condition %s", document_type, condition_id)
        return updated

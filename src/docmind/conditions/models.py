"""Condition models: persisted underwriting action items and their statistics."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from docmind.catalog.models import Severity


class ConditionStatus(str, Enum):
    """Lifecycle state of a condition."""

    OPEN = "open"
    PENDING_DOCUMENT = "pending-document"
    CLEARED = "cleared"


class ConditionType(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


class ConditionCategory(str, Enum):
    DOCUMENT_ISSUE = "document-issue"
    NEEDS_CLARIFICATION = "needs-clarification"


_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class Condition(BaseModel):
    """An underwriting action item generated from a validation finding.

    Serialized with camelCase keys (``model_dump(by_alias=True)``) so stored
    records keep the layout the review front end reads.
    """

    model_config = _CAMEL

    id: str
    loan_id: str
    document_type: str
    type: ConditionType
    category: ConditionCategory
    title: str
    description: str = ""
    field: Optional[str] = None
    rule: Optional[str] = None
    severity: Severity
    status: ConditionStatus = ConditionStatus.OPEN
    suggested_action: str = ""
    requires_new_document: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Set by clear_condition
    cleared_at: Optional[datetime] = None
    resolution_notes: Optional[str] = None

    # Set by request_document
    requested_document: Optional[str] = None
    request_notes: Optional[str] = None
    requested_at: Optional[datetime] = None

    @property
    def is_resolved(self) -> bool:
        return self.status == ConditionStatus.CLEARED


class ConditionStats(BaseModel):
    """Counts of a loan's conditions by status and type."""

    model_config = _CAMEL

    total: int = 0
    open: int = 0
    cleared: int = 0
    pending_document: int = 0
    critical: int = 0
    warnings: int = 0

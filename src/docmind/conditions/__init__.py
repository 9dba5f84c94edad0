"""Underwriting conditions: generation from validation results and lifecycle."""

from __future__ import annotations

from docmind.conditions.models import (
    Condition,
    ConditionCategory,
    ConditionStats,
    ConditionStatus,
    ConditionType,
)
from docmind.conditions.remedies import GENERIC_REMEDY, requires_new_document, suggested_action
from docmind.conditions.service import ConditionService
from docmind.conditions.store import ConditionStore

__all__ = [
    "Condition",
    "ConditionCategory",
    "ConditionService",
    "ConditionStats",
    "ConditionStatus",
    "ConditionStore",
    "ConditionType",
    "GENERIC_REMEDY",
    "requires_new_document",
    "suggested_action",
]

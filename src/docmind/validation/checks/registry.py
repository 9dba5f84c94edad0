"""Registry of document-type-specific deep checks.

A check is any callable ``(data, loan, today) -> list[Issue]``.  Checks are
registered per document-type id and run in registration order, after the
catalog's declarative rules::

    registry = CheckRegistry()
    registry.register("paystub", check_federal_tax_withheld)
    for check in registry.checks_for("paystub"):
        issues.extend(check(data, loan, today))
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Protocol

from docmind.validation.models import Issue, LoanContext

log = logging.getLogger(__name__)


class Check(Protocol):
    """A deep check comparing extracted values to each other and to the loan."""

    def __call__(self, data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]: ...


class CheckRegistry:
    """Maps document-type id to an ordered list of checks."""

    def __init__(self) -> None:
        self._checks: dict[str, list[Check]] = {}

    def register(self, document_type: str, *checks: Check) -> None:
        """Append checks for a document type, preserving order."""
        self._checks.setdefault(document_type, []).extend(checks)
        log.debug("Registered %d check(s) for %s", len(checks), document_type)

    def checks_for(self, document_type: str) -> list[Check]:
        """Return the checks for a document type (empty when none registered)."""
        return list(self._checks.get(document_type, []))

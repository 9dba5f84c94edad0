"""Helpers shared by the deep-check modules."""

from __future__ import annotations

from typing import Any

from docmind.catalog.models import Severity
from docmind.validation.models import Issue
from docmind.validation.parsing import first_token, parse_number


def critical(rule: str, field: str | None, message: str) -> Issue:
    return Issue(severity=Severity.CRITICAL, rule=rule, field=field, message=message)


def warning(rule: str, field: str | None, message: str) -> Issue:
    return Issue(severity=Severity.WARNING, rule=rule, field=field, message=message)


def employer_names_match(extracted: Any, application: Any) -> bool:
    """Token-level employer comparison.

    Matches when either lower-cased name contains the other's first word,
    e.g. "Acme Corp" vs "ACME Corporation Inc".
    """
    ext = str(extracted).lower().strip()
    app = str(application).lower().strip()
    return first_token(app) in ext or first_token(ext) in app


def sum_amounts(entries: list[Any]) -> float:
    """Sum the ``amount`` of each entry, skipping entries without a numeric amount."""
    total = 0.0
    for entry in entries:
        raw = entry.get("amount") if isinstance(entry, dict) else entry
        amount = parse_number(raw)
        if amount is not None:
            total += amount
    return total

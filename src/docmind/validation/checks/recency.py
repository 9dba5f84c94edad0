"""Statement recency check, independent of the per-type battery.

Stricter than the 60-day staleness check on ``statementEndDate``; both run
for bank statements.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Mapping

from docmind.validation.checks.common import critical
from docmind.validation.models import Issue, LoanContext
from docmind.validation.parsing import parse_date

MAX_STATEMENT_RECENCY_DAYS = 45


def check_statement_recency(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    raw = data.get("statementDate")
    statement = parse_date(raw)
    if statement is None or statement >= today - timedelta(days=MAX_STATEMENT_RECENCY_DAYS):
        return []
    return [
        critical(
            "statementRecencyRequired",
            "statementDate",
            f"Bank statement dated {raw} is older than 45 days - current statement required",
        )
    ]

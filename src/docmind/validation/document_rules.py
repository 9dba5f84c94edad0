"""Declarative document-level rules, resolved by rule id.

Each evaluator answers "did the document pass?".  The catalog entry supplies
severity and message; a failing rule is bucketed by that severity.  Rule ids
with no evaluator pass.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, Mapping

from docmind.catalog.models import RuleCatalog
from docmind.validation.field_validator import name_matches
from docmind.validation.models import LoanContext
from docmind.validation.parsing import parse_date, parse_number

log = logging.getLogger(__name__)

RuleEvaluator = Callable[[Mapping[str, Any], LoanContext, RuleCatalog, date], bool]

_NAME_FIELDS = ("fullName", "employeeName", "taxpayerName")


def _document_not_expired(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    expires = parse_date(data.get("expirationDate"))
    return not (expires is not None and expires < today)


def _name_matches(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    name = next((data[f] for f in _NAME_FIELDS if data.get(f)), None)
    if name is None or not loan.has_borrower:
        return True
    return name_matches(name, loan.borrower_first_name, loan.borrower_last_name)


def _statement_not_too_old(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    statement = parse_date(data.get("statementDate"))
    return not (statement is not None and statement < today - timedelta(days=60))


def _large_deposits_need_sourcing(
    data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date
) -> bool:
    deposits = data.get("largeDeposits")
    return not (isinstance(deposits, list) and len(deposits) > 0)


def _nsf_fees_present(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    return data.get("nsfOrOverdrafts") is not True


def _two_years_required(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    # Needs the loan's full document set; not evaluated per document yet.
    return True


def _coverage_adequate(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    coverage = parse_number(data.get("coverageAmount"))
    requested = parse_number(loan.loan_amount_requested)
    if coverage is None or requested is None:
        return True
    return coverage >= requested


def _value_supports_loan(data: Mapping[str, Any], loan: LoanContext, catalog: RuleCatalog, today: date) -> bool:
    appraised = parse_number(data.get("appraisedValue"))
    requested = parse_number(loan.loan_amount_requested)
    if not appraised or requested is None:
        return True
    ltv = requested / appraised * 100
    return ltv <= catalog.max_ltv_for(loan.product_type)


DOCUMENT_RULES: dict[str, RuleEvaluator] = {
    "documentNotExpired": _document_not_expired,
    "nameMatches": _name_matches,
    "statementNotTooOld": _statement_not_too_old,
    "largeDepositsNeedSourcing": _large_deposits_need_sourcing,
    "nsfFeesPresent": _nsf_fees_present,
    "twoYearsRequired": _two_years_required,
    "coverageAdequate": _coverage_adequate,
    "valueSupportsLoan": _value_supports_loan,
}


def evaluate_document_rule(
    rule_id: str,
    data: Mapping[str, Any],
    loan: LoanContext,
    catalog: RuleCatalog,
    today: date,
) -> bool:
    """Return True when the document passes ``rule_id`` (unknown ids pass)."""
    evaluator = DOCUMENT_RULES.get(rule_id)
    if evaluator is None:
        log.debug("No evaluator for document rule %r, treating as passed", rule_id)
        return True
    return evaluator(data, loan, catalog, today)

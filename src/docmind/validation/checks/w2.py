"""W2 deep checks: identity, income variance, employer, tax year, withholding, state."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping

from docmind.validation.checks.common import critical, employer_names_match, warning
from docmind.validation.models import Issue, LoanContext
from docmind.validation.parsing import format_amount, parse_number

MAX_INCOME_VARIANCE_PCT = 15.0
MIN_EFFECTIVE_TAX_RATE_PCT = 5.0
# Month in which the prior year's W2 becomes the expected one
W2_ROLLOVER_MONTH = 4

_NON_DIGIT = re.compile(r"\D")


def check_ssn(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    if not data.get("employeeSSN") or not loan.borrower_ssn:
        return []
    w2_ssn = _NON_DIGIT.sub("", str(data["employeeSSN"]))
    app_ssn = _NON_DIGIT.sub("", str(loan.borrower_ssn))
    if w2_ssn == app_ssn:
        return []
    return [
        critical(
            "ssnMismatch",
            "employeeSSN",
            f"SSN on W2 (***-**-{w2_ssn[-4:]}) does not match loan application SSN "
            f"(***-**-{app_ssn[-4:]}). This is a critical identity verification failure that "
            "must be resolved immediately.",
        )
    ]


def check_income_variance(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    if not data.get("wages") or not loan.base_income:
        return []
    wages = parse_number(data["wages"])
    stated = parse_number(loan.base_income)
    if wages is None or not stated:
        return []

    variance = abs((wages - stated) / stated) * 100
    if variance <= MAX_INCOME_VARIANCE_PCT:
        return []
    return [
        critical(
            "incomeVariance",
            "wages",
            f"W2 reported wages of ${format_amount(wages)} differ by {variance:.1f}% from stated annual "
            f"income of ${format_amount(stated)} on loan application. Variance exceeds acceptable 15% "
            "threshold and requires income re-verification.",
        )
    ]


def check_employer(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    extracted = data.get("employerName")
    application = loan.employer_name
    if not extracted or not application:
        return []
    if employer_names_match(extracted, application):
        return []
    return [
        critical(
            "employerMismatch",
            "employerName",
            f'Employer name on W2 "{extracted}" does not match loan application employer '
            f'"{application}". This discrepancy requires immediate employment verification.',
        )
    ]


def expected_w2_year(today: date) -> int:
    """Most recent tax year a borrower can be expected to hold a W2 for."""
    if today.month < W2_ROLLOVER_MONTH:
        return today.year - 2
    return today.year - 1


def check_tax_year(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """The W2 must be from the most recent completed year; the cutoff rolls forward in April."""
    if not data.get("taxYear"):
        return []
    year_number = parse_number(data["taxYear"])
    if year_number is None:
        return []
    w2_year = int(year_number)

    expected = expected_w2_year(today)
    if w2_year >= expected:
        return []
    return [
        critical(
            "outdatedTaxYear",
            "taxYear",
            f"W2 is from tax year {w2_year}, but most recent W2 (year {expected}) is required for "
            "income verification. Outdated tax documents cannot be used for current loan qualification.",
        )
    ]


def check_box12(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    if data.get("box12Codes"):
        return []
    return [
        warning(
            "missingRetirementInfo",
            "box12Codes",
            "Box 12 is empty - no retirement plan contributions reported. If borrower has 401k or "
            "retirement deductions, this may indicate incomplete W2 or data extraction error.",
        )
    ]


def check_tax_withholding(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    if not data.get("federalTaxWithheld") or not data.get("wages"):
        return []
    federal = parse_number(data["federalTaxWithheld"])
    wages = parse_number(data["wages"])
    if federal is None or not wages:
        return []

    rate = federal / wages * 100
    if rate >= MIN_EFFECTIVE_TAX_RATE_PCT:
        return []
    return [
        warning(
            "lowTaxWithholding",
            "federalTaxWithheld",
            f"Federal tax withholding of ${format_amount(federal)} represents only {rate:.1f}% of wages "
            f"(${format_amount(wages)}). This is unusually low and may indicate incorrect withholding "
            "elections or potential W2 data issues.",
        )
    ]


def check_state(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    w2_state = data.get("state")
    property_state = loan.property_state
    if not w2_state or not property_state or w2_state == property_state:
        return []
    return [
        warning(
            "stateMismatch",
            "state",
            f"W2 shows state as {w2_state}, but property is in {property_state}. Verify borrower's "
            "employment location and residency status for proper income documentation.",
        )
    ]


W2_CHECKS = (
    check_ssn,
    check_income_variance,
    check_employer,
    check_tax_year,
    check_box12,
    check_tax_withholding,
    check_state,
)

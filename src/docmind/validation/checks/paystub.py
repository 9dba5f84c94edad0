"""Paystub deep checks: YTD arithmetic, withholding, net/gross ratio, employer, income pace."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from docmind.validation.checks.common import critical, employer_names_match, warning
from docmind.validation.models import Issue, LoanContext
from docmind.validation.parsing import parse_date, parse_number

# Biweekly schedule assumed for the YTD plausibility check
PAY_PERIODS_PER_YEAR = 26
YTD_TOLERANCE = 0.10
MAX_TAKE_HOME_PCT = 85.0
MAX_YTD_SHORTFALL_PCT = 20.0


def check_income_calculation(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """Warn when YTD income is far from gross pay × 26."""
    if not data.get("grossPay") or not data.get("ytdGrossIncome"):
        return []
    gross = parse_number(data["grossPay"])
    actual = parse_number(data["ytdGrossIncome"])
    if gross is None or not actual:
        return []

    expected = gross * PAY_PERIODS_PER_YEAR
    if abs(expected - actual) / actual <= YTD_TOLERANCE:
        return []
    return [
        warning(
            "incomeCalculationCheck",
            "grossPayYTD",
            "YTD income calculation appears inconsistent with stated gross pay. "
            f"Expected ~${expected:.2f} but found ${actual:.2f}",
        )
    ]


def check_specialist_advisories(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """Fixed advisories that route every paystub to format and consistency review."""
    return [
        warning(
            "formatConsistencyCheck",
            "document",
            "Document contains mixed font styles which may indicate alterations - requires format analysis",
        ),
        warning(
            "crossDocumentConsistency",
            "employerName",
            "Employer name formatting differs from previous paystubs - requires consistency verification",
        ),
    ]


def check_federal_tax_withheld(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """Missing or zero federal withholding is critical."""
    raw = data.get("federalTaxWithheld")
    if raw and parse_number(raw) != 0:
        return []
    return [
        critical(
            "federalTaxRequired",
            "federalTaxWithheld",
            "Federal tax withholding is missing or zero - this is required for all W2 employees "
            "and may indicate fraudulent documentation",
        )
    ]


def check_net_pay_ratio(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """Net pay above 85% of gross suggests missing deductions."""
    if not data.get("netPay") or not data.get("grossPayCurrent"):
        return []
    net = parse_number(data["netPay"])
    gross = parse_number(data["grossPayCurrent"])
    if net is None or not gross:
        return []

    take_home = net / gross * 100
    if take_home <= MAX_TAKE_HOME_PCT:
        return []
    return [
        critical(
            "netPaySuspicious",
            "netPay",
            f"Net pay is {take_home:.1f}% of gross pay ({net:.2f} / {gross:.2f}), which is unusually high. "
            "Normal deductions should reduce net pay to 55-75% of gross. This may indicate document "
            "tampering or missing tax withholdings.",
        )
    ]


def check_employer_name(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    extracted = data.get("employerName")
    application = loan.employer_name
    if not extracted or not application:
        return []
    if employer_names_match(extracted, application):
        return []
    return [
        critical(
            "employerNameMismatch",
            "employerName",
            f'Employer name on paystub "{extracted}" does not match loan application employer '
            f'"{application}". This requires immediate verification.',
        )
    ]


def check_ytd_income_pace(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """YTD more than 20% below annual income pro-rated to the period end date."""
    if not data.get("grossPayYTD") or not data.get("payPeriodEnd") or not loan.base_income:
        return []
    ytd = parse_number(data["grossPayYTD"])
    annual = parse_number(loan.base_income)
    period_end = parse_date(data["payPeriodEnd"])
    if ytd is None or annual is None or period_end is None:
        return []

    day_of_year = period_end.timetuple().tm_yday
    expected = annual / 365 * day_of_year
    if not expected:
        return []
    variance = (expected - ytd) / expected * 100
    if variance <= MAX_YTD_SHORTFALL_PCT:
        return []
    return [
        critical(
            "ytdIncomeLow",
            "grossPayYTD",
            f"Year-to-date income of ${ytd:.2f} is {variance:.1f}% lower than expected based on stated "
            f"annual income of ${annual:.2f}. Expected YTD: ~${expected:.2f}. This significant "
            "discrepancy requires immediate income re-verification.",
        )
    ]


PAYSTUB_CHECKS = (
    check_income_calculation,
    check_specialist_advisories,
    check_federal_tax_withheld,
    check_net_pay_ratio,
    check_employer_name,
    check_ytd_income_pace,
)

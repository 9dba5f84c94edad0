"""Bank statement deep checks: sourcing, NSF, funds to close, staleness, ownership, usage."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Mapping

from docmind.validation.checks.common import critical, sum_amounts, warning
from docmind.validation.models import Issue, LoanContext
from docmind.validation.parsing import format_amount, parse_date, parse_number

RESERVE_MONTHS = 2
MAX_STATEMENT_AGE_DAYS = 60
MIN_AVG_BALANCE_PCT = 10.0
MAX_PERSONAL_TRANSACTIONS = 100


def check_large_deposits(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    deposits = data.get("largeDeposits")
    if not isinstance(deposits, list) or not deposits:
        return []
    total = sum_amounts(deposits)
    monthly_income = parse_number(loan.gross_monthly_income) or 0.0
    return [
        critical(
            "largeDepositSourcing",
            "largeDeposits",
            f"Found {len(deposits)} large deposit(s) totaling ${format_amount(total)}. Deposits exceeding "
            f"50% of monthly income (${format_amount(monthly_income * 0.5)}) require sourcing "
            "documentation. Provide deposit letters or documentation explaining origin of funds.",
        )
    ]


def check_nsf_fees(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    fees = data.get("nsfFees")
    if not isinstance(fees, list) or not fees:
        return []
    total = sum_amounts(fees)
    return [
        critical(
            "nsfFeesPresent",
            "nsfFees",
            f"Account shows {len(fees)} NSF/overdraft fee(s) totaling ${total:.2f} during statement "
            "period. This indicates insufficient funds management and may affect loan qualification. "
            "Underwriter review required.",
        )
    ]


def check_funds_to_close(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    """Ending balance must cover cash to close plus two months of payments."""
    if not data.get("endingBalance") or not loan.cash_to_close:
        return []
    ending = parse_number(data["endingBalance"])
    cash_to_close = parse_number(loan.cash_to_close)
    if ending is None or cash_to_close is None:
        return []

    reserves = (parse_number(loan.monthly_payment) or 0.0) * RESERVE_MONTHS
    required = cash_to_close + reserves
    if ending >= required:
        return []
    return [
        critical(
            "insufficientFunds",
            "endingBalance",
            f"Ending balance of ${format_amount(ending)} is insufficient for cash to close "
            f"(${format_amount(cash_to_close)}) plus required reserves (${format_amount(reserves)}). "
            f"Total needed: ${format_amount(required)}. Shortfall: ${format_amount(required - ending)}.",
        )
    ]


def check_statement_age(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    raw = data.get("statementEndDate")
    end = parse_date(raw)
    if end is None or end >= today - timedelta(days=MAX_STATEMENT_AGE_DAYS):
        return []
    return [
        critical(
            "statementTooOld",
            "statementEndDate",
            f"Statement ending {raw} is older than 60 days. Most recent bank statements (within 60 days) "
            "are required for asset verification. Request updated statement.",
        )
    ]


def check_negative_balance(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    events = parse_number(data.get("negativeBalanceEvents"))
    if not events or events <= 0:
        return []
    return [
        critical(
            "negativeBalance",
            "negativeBalanceEvents",
            f"Account went negative {format_amount(events)} time(s) during statement period. Negative "
            "balances indicate cash flow problems and financial instability that may disqualify borrower.",
        )
    ]


def check_account_holder(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    holder = data.get("accountHolderName")
    if not holder or not loan.has_borrower:
        return []
    name = str(holder).lower().strip()
    first = loan.borrower_first_name.lower()
    last = loan.borrower_last_name.lower()
    if first in name and last in name:
        return []
    return [
        warning(
            "nameDiscrepancy",
            "accountHolderName",
            f'Account holder name "{holder}" may not match borrower "{loan.borrower_first_name} '
            f'{loan.borrower_last_name}". Verify account ownership or provide documentation if joint account.',
        )
    ]


def check_average_balance(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    if not data.get("averageBalance") or not loan.gross_monthly_income:
        return []
    average = parse_number(data["averageBalance"])
    monthly_income = parse_number(loan.gross_monthly_income)
    if average is None or not monthly_income:
        return []

    ratio = average / monthly_income * 100
    if ratio >= MIN_AVG_BALANCE_PCT:
        return []
    return [
        warning(
            "lowAverageBalance",
            "averageBalance",
            f"Average balance of ${format_amount(average)} represents only {ratio:.1f}% of monthly income "
            f"(${format_amount(monthly_income)}). Low balance relative to income may indicate tight cash "
            "flow situation.",
        )
    ]


def check_transaction_volume(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    count = parse_number(data.get("transactionCount"))
    if count is None or count <= MAX_PERSONAL_TRANSACTIONS:
        return []
    return [
        warning(
            "highTransactionVolume",
            "transactionCount",
            f"Account shows {format_amount(count)} transactions during statement period. High transaction "
            "volume may indicate business use of personal account. Verify account is for personal use only.",
        )
    ]


def check_irregular_deposits(data: Mapping[str, Any], loan: LoanContext, today: date) -> list[Issue]:
    if data.get("irregularDeposits") is not True:
        return []
    return [
        warning(
            "irregularDeposits",
            "deposits",
            "Deposit pattern shows irregular timing and amounts, which may indicate variable income from "
            "gig economy or commission-based work. Additional income documentation may be required for "
            "qualification.",
        )
    ]


BANK_STATEMENT_CHECKS = (
    check_large_deposits,
    check_nsf_fees,
    check_funds_to_close,
    check_statement_age,
    check_negative_balance,
    check_account_holder,
    check_average_balance,
    check_transaction_volume,
    check_irregular_deposits,
)

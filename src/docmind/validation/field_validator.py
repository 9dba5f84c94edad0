"""Field-level validation: one extracted value against one ``FieldRule``."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Any, Callable

from docmind.catalog.models import FieldRule, FieldValidatorId
from docmind.validation.models import FieldValidation, LoanContext
from docmind.validation.parsing import first_token, parse_date

_ADDRESS_NOISE = re.compile(r"[.,\s]")


def name_matches(value: Any, first_name: str, last_name: str) -> bool:
    """Case-insensitive check that ``value`` contains both name parts.

    Each part is matched independently so middle names, initials, and
    suffixes do not cause a mismatch.
    """
    text = str(value).lower()
    return first_name.lower() in text and last_name.lower() in text


def normalize_address(value: Any) -> str:
    """Lower-case and strip periods, commas, and whitespace."""
    return _ADDRESS_NOISE.sub("", str(value).lower())


def address_matches(address1: Any, address2: Any) -> bool:
    """Fuzzy address comparison; either side must contain the other's leading token."""
    addr1 = normalize_address(address1)
    addr2 = normalize_address(address2)
    return first_token(addr2) in addr1 or first_token(addr1) in addr2


def _invalid(message: str) -> FieldValidation:
    return FieldValidation(is_valid=False, message=message)


def _check_borrower_name(value: Any, loan: LoanContext, today: date) -> FieldValidation:
    first, last = loan.borrower_first_name, loan.borrower_last_name
    if not (first or last):
        return FieldValidation()
    if not name_matches(value, first, last):
        return _invalid(f"Name does not match borrower: {first} {last}")
    return FieldValidation()


def _check_borrower_dob(value: Any, loan: LoanContext, today: date) -> FieldValidation:
    if loan.borrower_dob is None:
        return FieldValidation()
    if str(value) != str(loan.borrower_dob):
        return _invalid("Date of birth does not match loan application")
    return FieldValidation()


def _check_not_expired(value: Any, loan: LoanContext, today: date) -> FieldValidation:
    parsed = parse_date(value)
    if parsed is not None and parsed < today:
        return _invalid("Document is expired")
    return FieldValidation()


def _within_days(days: int) -> Callable[[Any, LoanContext, date], FieldValidation]:
    def _check(value: Any, loan: LoanContext, today: date) -> FieldValidation:
        parsed = parse_date(value)
        if parsed is not None and parsed < today - timedelta(days=days):
            return _invalid(f"Date is older than {days} days")
        return FieldValidation()

    return _check


def _check_subject_property(value: Any, loan: LoanContext, today: date) -> FieldValidation:
    subject = loan.property_address
    if subject is None:
        return FieldValidation()
    if not address_matches(value, subject):
        return _invalid("Address does not match subject property")
    return FieldValidation()


def _not_yet_enforced(value: Any, loan: LoanContext, today: date) -> FieldValidation:
    # Loan-application cross-check is not implemented; always passes.
    return FieldValidation()


FIELD_VALIDATORS: dict[FieldValidatorId, Callable[[Any, LoanContext, date], FieldValidation]] = {
    FieldValidatorId.MUST_MATCH_BORROWER_NAME: _check_borrower_name,
    FieldValidatorId.MUST_MATCH_BORROWER_DOB: _check_borrower_dob,
    FieldValidatorId.MUST_NOT_BE_EXPIRED: _check_not_expired,
    FieldValidatorId.WITHIN_30_DAYS: _within_days(30),
    FieldValidatorId.WITHIN_60_DAYS: _within_days(60),
    FieldValidatorId.MUST_MATCH_SUBJECT_PROPERTY: _check_subject_property,
    FieldValidatorId.MUST_MATCH_LOAN_APPLICATION: _not_yet_enforced,
}


def validate_field(
    rule: FieldRule,
    value: Any,
    loan: LoanContext,
    *,
    today: date | None = None,
) -> FieldValidation:
    """Validate one extracted value.

    A required field with a None value is invalid.  A named validator runs
    only when the value is truthy.  No side effects.
    """
    if rule.required and value is None:
        return _invalid(f"Required field '{rule.name}' is missing")

    if rule.validator is None or not value:
        return FieldValidation()

    check = FIELD_VALIDATORS[rule.validator]
    return check(value, loan, today or date.today())

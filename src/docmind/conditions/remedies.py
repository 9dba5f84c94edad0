"""Suggested remedies per rule id, and which rules force a new document."""

from __future__ import annotations

from typing import Optional

GENERIC_REMEDY = "Please review and address this issue"

_REMEDIES: dict[str, str] = {
    "documentNotExpired": "Request updated document that is not expired",
    "nameMatches": "Verify borrower name matches loan application or obtain corrected document",
    "statementNotTooOld": "Request more recent bank statement (within 60 days)",
    "largeDepositsNeedSourcing": (
        "Request documentation for large deposits (gift letter, transfer confirmation, etc.)"
    ),
    "nsfFeesPresent": "Request letter of explanation for NSF/overdraft fees",
    "coverageAdequate": "Request insurance quote with adequate coverage amount",
    "valueSupportsLoan": (
        "Loan amount exceeds maximum LTV - reduce loan amount or request higher appraisal"
    ),
    "employmentActive": "Verify current employment status with employer",
    "verificationRecent": "Request updated verification of employment",
    "ytdIncomeConsistent": "Request explanation for income variance",
    "incomeDecline": "Request explanation for income decline year-over-year",
    "mustBeSigned": "Request signed copy of document",
    "publicRecordsFound": "Request explanation for public records found on credit report",
    "collectionsFound": "Provide proof of payment or explanation for collection accounts",
    "licenseActive": "Request current/renewed business license",
    "seasoningPeriodMet": "Verify bankruptcy seasoning period meets program guidelines",
}

# Rules whose remedy is collecting a replacement document, not an explanation
NEW_DOCUMENT_RULES = frozenset(
    {
        "documentNotExpired",
        "statementNotTooOld",
        "paystubRecent",
        "twoYearsRequired",
        "verificationRecent",
        "mustBeSigned",
        "licenseActive",
    }
)


def suggested_action(rule: Optional[str], document_type: str) -> str:
    """Return the remedy text for ``rule`` (generic when the rule is unknown)."""
    if rule == "twoYearsRequired":
        return f"Request additional {document_type} to meet 2-year requirement"
    if rule is None:
        return GENERIC_REMEDY
    return _REMEDIES.get(rule, GENERIC_REMEDY)


def requires_new_document(rule: Optional[str]) -> bool:
    return rule in NEW_DOCUMENT_RULES

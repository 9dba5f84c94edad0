"""Shared fixtures for docmind tests."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from docmind.catalog.backends.file_backend import FileCatalogBackend
from docmind.catalog.models import RuleCatalog
from docmind.core.config import DEFAULT_CATALOG_PATH
from docmind.validation.engine import DocumentValidator
from docmind.validation.models import LoanContext

TODAY = date(2025, 6, 15)


@pytest.fixture
def today() -> date:
    """Fixed evaluation date for all date-sensitive checks."""
    return TODAY


@pytest.fixture
def catalog_backend() -> FileCatalogBackend:
    """The bundled default catalog."""
    return FileCatalogBackend(DEFAULT_CATALOG_PATH)


@pytest.fixture
def catalog(catalog_backend: FileCatalogBackend) -> RuleCatalog:
    return catalog_backend.get_catalog()


@pytest.fixture
def loan_data() -> dict[str, Any]:
    """Conventional purchase loan for a salaried borrower."""
    return {
        "loanId": "LN-1001",
        "loanNumber": "2025-1001",
        "borrower": {
            "firstName": "Jane",
            "lastName": "Smith",
            "dateOfBirth": "1985-04-12",
            "ssn": "123-45-6789",
            "employment": {
                "current": {
                    "employerName": "Acme Corporation",
                    "baseIncome": 78000,
                    "selfEmployed": False,
                }
            },
        },
        "propertyDetails": {"address": "123 Main St, Springfield, IL 62701"},
        "mismo": {
            "loanAmountRequested": 300000,
            "productType": "Conventional",
            "monthlyPayment": 2000,
            "state": "IL",
            "loanPurpose": "Purchase",
            "propertyAddress": "123 Main St, Springfield, IL 62701",
        },
        "ratios": {"grossMonthlyIncome": 6500},
        "transactions": {"cashToClose": 20000, "giftFunds": 0},
        "processingStatus": {"stage": "processing", "lastUpdated": "2025-06-01T00:00:00Z"},
    }


@pytest.fixture
def loan(loan_data: dict[str, Any]) -> LoanContext:
    return LoanContext(loan_data)


@pytest.fixture
def validator(catalog_backend: FileCatalogBackend) -> DocumentValidator:
    return DocumentValidator(catalog_backend, clock=lambda: TODAY)


@pytest.fixture
def clean_paystub() -> dict[str, Any]:
    """Paystub that passes every rule for ``loan_data`` on ``TODAY``."""
    return {
        "employeeName": "Jane Smith",
        "employerName": "Acme Corp",
        "payPeriodStart": "2025-05-24",
        "payPeriodEnd": "2025-06-06",
        "payDate": "2025-06-10",
        "grossPay": 3000,
        "grossPayCurrent": 3000,
        "grossPayYTD": 33000,
        "netPay": 2250,
        "federalTaxWithheld": 360,
    }


@pytest.fixture
def clean_w2() -> dict[str, Any]:
    return {
        "employeeName": "Jane Smith",
        "employeeSSN": "123-45-6789",
        "employerName": "Acme Corporation",
        "taxYear": "2024",
        "wages": 78000,
        "federalTaxWithheld": 9000,
        "state": "IL",
        "box12Codes": [{"code": "D", "amount": 5000}],
    }


@pytest.fixture
def clean_bank_statement() -> dict[str, Any]:
    return {
        "accountHolderName": "Jane Smith",
        "bankName": "First Bank",
        "statementDate": "2025-06-01",
        "statementEndDate": "2025-05-31",
        "endingBalance": 50000,
        "averageBalance": 30000,
        "transactionCount": 40,
        "nsfOrOverdrafts": False,
    }

"""Document-type-specific deep checks and their registry."""

from __future__ import annotations

from docmind.validation.checks.bank_statement import BANK_STATEMENT_CHECKS
from docmind.validation.checks.paystub import PAYSTUB_CHECKS
from docmind.validation.checks.recency import check_statement_recency
from docmind.validation.checks.registry import Check, CheckRegistry
from docmind.validation.checks.w2 import W2_CHECKS


def default_check_registry() -> CheckRegistry:
    """Registry with the built-in paystub, W2, and bank statement batteries."""
    registry = CheckRegistry()
    registry.register("paystub", *PAYSTUB_CHECKS)
    registry.register("w2", *W2_CHECKS)
    registry.register("bankStatement", check_statement_recency, *BANK_STATEMENT_CHECKS)
    return registry


__all__ = ["Check", "CheckRegistry", "default_check_registry"]

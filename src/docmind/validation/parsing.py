"""Lenient coercion of extracted values.

Extraction output is loosely typed: currency may arrive as ``"1,250.00"``,
dates in several layouts.  Every helper returns None instead of raising, so a
check that cannot read its inputs is skipped rather than failed.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser


def parse_number(value: Any) -> float | None:
    """Coerce ``value`` to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace("$", "").replace(",", "")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_date(value: Any) -> date | None:
    """Coerce ``value`` to a calendar date, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.parse(value.strip()).date()
    except (ValueError, OverflowError, TypeError):
        return None


def first_token(text: str) -> str:
    """Return the first whitespace-delimited token of ``text`` ('' when blank)."""
    parts = text.split()
    return parts[0] if parts else ""


def format_amount(amount: float) -> str:
    """Render an amount with thousands separators, dropping ``.00`` on whole numbers."""
    if float(amount).is_integer():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values."""
    return math.floor(value + 0.5)

"""Deterministic validators and sanitizers used by the intake and workflow services."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

PHONE_PATTERN = re.compile(r"[0-9]{10}")
INVOICE_PATTERN = re.compile(r"[A-Za-z0-9]{3,}")


def sanitize_text(value: Any, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def is_valid_phone(value: Any) -> bool:
    """Exactly ten ASCII digits, nothing else."""
    if not isinstance(value, str):
        return False
    return PHONE_PATTERN.fullmatch(value) is not None


def is_valid_invoice_no(value: str) -> bool:
    return INVOICE_PATTERN.fullmatch(value) is not None


def parse_number(value: Any) -> Decimal | None:
    """Parse a user-supplied amount; None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def parse_rating(value: Any) -> int | None:
    """Parse a 1-5 star rating given as int or digit string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        rating = value
    elif isinstance(value, str) and value.strip().isdigit():
        rating = int(value.strip())
    else:
        return None
    return rating if 1 <= rating <= 5 else None


MONEY_INTEGER_DIGITS = 10
MONEY_DECIMAL_PLACES = 2
_MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)


def parse_money(value: Any) -> Decimal | None:
    """Parse an amount that fits ``Numeric(12, 2)`` exactly; None otherwise.

    Amounts with more than two decimal places or more than ten integer
    digits are rejected rather than rounded or overflowed by the store.
    """
    number = parse_number(value)
    if number is None:
        return None
    if abs(number) >= Decimal(10) ** MONEY_INTEGER_DIGITS:
        return None
    if number != number.quantize(_MONEY_QUANTUM):
        return None
    return number

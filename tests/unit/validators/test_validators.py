from __future__ import annotations

from decimal import Decimal

import pytest

from leadflow.utils.validators import (
    is_valid_invoice_no,
    is_valid_phone,
    parse_money,
    parse_number,
    parse_rating,
    sanitize_text,
)


def test_sanitize_text_trims_and_strips_nulls():
    assert sanitize_text("  Bravia\x00 X90  ") == "Bravia X90"
    assert sanitize_text(None) == ""
    assert sanitize_text("abcdef", max_len=3) == "abc"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("9876543210", True),
        ("987654321", False),
        ("98765432100", False),
        ("98765 43210", False),
        ("९८७६५४३२१०", False),
        (9876543210, False),
        (None, False),
    ],
)
def test_phone_is_exactly_ten_ascii_digits(value, expected):
    assert is_valid_phone(value) is expected


def test_invoice_numbers_are_alphanumeric():
    assert is_valid_invoice_no("INV001")
    assert not is_valid_invoice_no("IN")
    assert not is_valid_invoice_no("INV/001")


def test_parse_number():
    assert parse_number("1500.50") == Decimal("1500.50")
    assert parse_number(2000) == Decimal("2000")
    assert parse_number(" ") is None
    assert parse_number("NaN") is None
    assert parse_number("Infinity") is None
    assert parse_number(True) is None
    assert parse_number("ten") is None


def test_parse_rating():
    assert parse_rating(5) == 5
    assert parse_rating("3") == 3
    assert parse_rating(0) is None
    assert parse_rating("4.5") is None
    assert parse_rating(False) is None


def test_parse_money_fits_two_decimal_column():
    assert parse_money("0.01") == Decimal("0.01")
    assert parse_money("1500.50") == Decimal("1500.50")
    assert parse_money("9999999999.99") == Decimal("9999999999.99")
    assert parse_money("0.001") is None
    assert parse_money("12.345") is None
    assert parse_money("10000000000") is None
    assert parse_money("abc") is None

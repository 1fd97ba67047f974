"""Tests for amount parsing utilities."""

from decimal import Decimal

import pytest

from postledger.utils.amount_parser import parse_amount, parse_entry_spec


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("€ 10", Decimal("10")),
        ("£0.5", Decimal("0.5")),
        (" 42 ", Decimal("42")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "-5", "(5.00)", "0", "+3"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_entry_spec():
    assert parse_entry_spec("Rent Expense=1,200") == ("Rent Expense", Decimal("1200"))
    assert parse_entry_spec("expense:Rent=5") == ("expense:Rent", Decimal("5"))


def test_parse_entry_spec_splits_on_last_equals():
    assert parse_entry_spec("A=B=7.25") == ("A=B", Decimal("7.25"))


@pytest.mark.parametrize("spec", ["Rent Expense", "=10", "Cash=", "Cash=abc"])
def test_parse_entry_spec_invalid(spec):
    with pytest.raises(ValueError):
        parse_entry_spec(spec)

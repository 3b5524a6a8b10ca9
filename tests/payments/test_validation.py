from datetime import datetime, timezone

import pytest

from domain.payment.contracts import CREDIT_CARD_CONTRACT, UPI_CONTRACT
from domain.payment.validation import (
    card_type,
    luhn_valid,
    validate_card_fields,
    validate_card_number,
    validate_contract_fields,
    validate_cvv,
    validate_expiry,
    validate_vpa,
)


NOW = datetime(2025, 1, 15, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "number, expected",
    [
        ("4242424242424242", "visa"),
        ("5555555555554444", "mastercard"),
        ("378282246310005", "amex"),
        ("6011111111111117", "discover"),
        ("9999", "unknown"),
    ],
)
def test_card_type(number, expected):
    assert card_type(number) == expected


def test_luhn():
    assert luhn_valid("4242424242424242")
    assert not luhn_valid("4242424242424241")


def test_card_number_errors():
    assert validate_card_number("4242 4242 4242 4242") is None
    assert validate_card_number("") == "Card number is required"
    assert validate_card_number("4242-abcd") == "Card number must contain only digits"
    assert validate_card_number("424242424242") == "Invalid visa card number length"
    assert validate_card_number("4242424242424241") == "Card number is invalid"


def test_expiry():
    assert validate_expiry("01/25", NOW) is None
    assert validate_expiry("12/24", NOW) == "Card has expired"
    assert validate_expiry("13/25", NOW) == "Enter month and year (e.g., 12/25)"


def test_cvv_and_vpa():
    assert validate_cvv("123") is None
    assert validate_cvv("12") == "CVV must be 3 or 4 digits"
    assert validate_vpa("user.name@okbank") is None
    assert validate_vpa("user@") == "Invalid UPI ID format"


def test_card_fields_presence_checked_first():
    assert validate_card_fields({"cardNumber": "1"}, NOW) == "Missing required card information"
    fields = {"cardNumber": "4242424242424242", "expiry": "12/30", "cvv": "1", "cardholder": "Jane"}
    assert validate_card_fields(fields, NOW) == "CVV must be 3 or 4 digits"


def test_contract_fields():
    errors = validate_contract_fields(CREDIT_CARD_CONTRACT, {"cardNumber": "4242 4242 4242 4242", "cvv": "12a"})
    assert set(errors) == {"expiry", "cvv", "cardholder"}
    assert errors["expiry"] == "Expiry (MM/YY) is required"
    assert validate_contract_fields(UPI_CONTRACT, {"vpa": "user@bank"}) == {}


@pytest.mark.parametrize(
    "field, value",
    [("cardNumber", 4242424242424242), ("expiry", 1230), ("cvv", 123), ("cardholder", 42)],
)
def test_card_fields_reject_non_string_values(field, value):
    fields = {"cardNumber": "4242424242424242", "expiry": "12/30", "cvv": "123", "cardholder": "Jane Doe"}
    fields[field] = value
    assert validate_card_fields(fields, NOW) is not None


def test_card_number_rejects_non_ascii_digits():
    assert validate_card_number("424242424242424²") == "Card number must contain only digits"
    assert validate_card_number(4242424242424242) == "Card number must be a string of digits"
    assert validate_cvv(123) == "CVV must be 3 or 4 digits"
    assert validate_expiry(1230, NOW) == "Enter month and year (e.g., 12/25)"


@pytest.mark.parametrize("vpa", ["user@bank\n", "üser@bänk", "user@bank@x", 42])
def test_vpa_is_ascii_and_fully_matched(vpa):
    assert validate_vpa(vpa) == "Invalid UPI ID format"


def test_contract_pattern_is_ascii_and_fully_matched():
    assert validate_contract_fields(UPI_CONTRACT, {"vpa": "üser@bänk"}) == {"vpa": "UPI ID (VPA) is invalid"}
    assert validate_contract_fields(UPI_CONTRACT, {"vpa": "user@bank x"}) == {"vpa": "UPI ID (VPA) is invalid"}

"""
Checkout field validation rules.

Each validator returns a human-readable error message, or None when the value
is acceptable. Providers turn these messages into declined results.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

from domain.payment.contracts import VPA_PATTERN, PaymentField, PaymentFieldType, PaymentMethodContract


_VPA_RE = re.compile(VPA_PATTERN, re.ASCII)
_EXPIRY_RE = re.compile(r"(0[1-9]|1[0-2])/([0-9]{2})")
_DIGITS_RE = re.compile(r"[0-9]+")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[0-9 ()-]{7,20}$")

CARD_LENGTHS = {
    "visa": (13, 16, 19),
    "mastercard": (16,),
    "amex": (15,),
    "discover": (16,),
    "diners": (14,),
    "jcb": (15, 16),
    "unionpay": (16, 17, 18, 19),
}


def card_type(digits: str) -> str:
    if digits.startswith("4"):
        return "visa"
    if re.match(r"^(5[1-5]|2[2-7])", digits):
        return "mastercard"
    if re.match(r"^3[47]", digits):
        return "amex"
    if re.match(r"^6(011|5)", digits):
        return "discover"
    if re.match(r"^3[068]", digits):
        return "diners"
    if digits.startswith("35"):
        return "jcb"
    if digits.startswith("62"):
        return "unionpay"
    return "unknown"


def luhn_valid(digits: str) -> bool:
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def validate_card_number(value: Any) -> Optional[str]:
    if not value:
        return "Card number is required"
    if not isinstance(value, str):
        return "Card number must be a string of digits"
    digits = re.sub(r"\s", "", value)
    if not _DIGITS_RE.fullmatch(digits):
        return "Card number must contain only digits"
    kind = card_type(digits)
    if kind != "unknown" and len(digits) not in CARD_LENGTHS[kind]:
        return f"Invalid {kind} card number length"
    if not luhn_valid(digits):
        return "Card number is invalid"
    return None


def validate_expiry(value: Any, now: datetime) -> Optional[str]:
    if not value:
        return "Expiry date is required"
    match = _EXPIRY_RE.fullmatch(value.strip()) if isinstance(value, str) else None
    if not match:
        return "Enter month and year (e.g., 12/25)"
    month, year = int(match.group(1)), 2000 + int(match.group(2))
    if (year, month) < (now.year, now.month):
        return "Card has expired"
    return None


def validate_cvv(value: Any) -> Optional[str]:
    digits = re.sub(r"[^0-9]", "", value) if isinstance(value, str) else ""
    if len(digits) < 3 or len(digits) > 4:
        return "CVV must be 3 or 4 digits"
    return None


def validate_cardholder(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return "Cardholder name is required"
    if len(value.strip()) < 2:
        return "Cardholder name must be at least 2 characters"
    return None


def validate_vpa(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not _VPA_RE.fullmatch(value):
        return "Invalid UPI ID format"
    return None


def validate_card_fields(fields: dict, now: datetime) -> Optional[str]:
    """First card error found, checking presence before format."""
    required = ("cardNumber", "expiry", "cvv", "cardholder")
    if any(not fields.get(name) for name in required):
        return "Missing required card information"
    return (
        validate_card_number(fields.get("cardNumber"))
        or validate_expiry(fields.get("expiry"), now)
        or validate_cvv(fields.get("cvv"))
        or validate_cardholder(fields.get("cardholder"))
    )


def validate_field(spec: PaymentField, value: Optional[str]) -> Optional[str]:
    text = (value or "").strip() if isinstance(value, str) else ("" if value is None else str(value))
    if not text:
        return f"{spec.label} is required" if spec.required else None
    if spec.min_length is not None and len(text) < spec.min_length:
        return f"{spec.label} must be at least {spec.min_length} characters"
    if spec.max_length is not None and len(text) > spec.max_length:
        return f"{spec.label} must be at most {spec.max_length} characters"
    if spec.pattern and not re.fullmatch(spec.pattern, text, re.ASCII):
        return f"{spec.label} is invalid"
    if spec.type is PaymentFieldType.EMAIL and not _EMAIL_RE.match(text):
        return f"{spec.label} must be a valid email address"
    if spec.type is PaymentFieldType.PHONE and not _PHONE_RE.match(text):
        return f"{spec.label} must be a valid phone number"
    if spec.type is PaymentFieldType.NUMBER:
        try:
            float(text)
        except ValueError:
            return f"{spec.label} must be a number"
    return None


def validate_contract_fields(contract: PaymentMethodContract, fields: dict) -> dict[str, str]:
    """Map of field name -> error for every field of the contract that fails."""
    errors: dict[str, str] = {}
    for spec in contract.fields:
        message = validate_field(spec, fields.get(spec.name))
        if message:
            errors[spec.name] = message
    return errors

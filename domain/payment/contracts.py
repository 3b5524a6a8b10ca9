"""
Payment method contracts.

A method advertises what it needs at checkout: its identifier, display
metadata and the fields a customer must fill in. Kept UI-agnostic: only
types, names and constraints.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class PaymentMethodId(str, Enum):
    CREDIT_CARD = "credit_card"
    CASH_ON_DELIVERY = "cash_on_delivery"
    UPI = "upi"
    APPLE_PAY = "apple_pay"
    GOOGLE_PAY = "google_pay"
    PAYPAL = "paypal"
    STRIPE = "stripe"


class PaymentFieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    SELECT = "select"
    HIDDEN = "hidden"
    EMAIL = "email"
    PHONE = "phone"
    PASSWORD = "password"


@dataclass(frozen=True)
class PaymentField:
    name: str
    type: PaymentFieldType
    label: str
    required: bool = True
    mask: Optional[str] = None
    options: Optional[tuple[dict, ...]] = None
    pattern: Optional[str] = None
    placeholder: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "label": self.label,
            "required": self.required,
            "mask": self.mask,
            "options": list(self.options) if self.options else None,
            "pattern": self.pattern,
            "placeholder": self.placeholder,
            "minLength": self.min_length,
            "maxLength": self.max_length,
        }


@dataclass(frozen=True)
class PaymentMethodContract:
    id: str
    display_name: str
    fields: tuple[PaymentField, ...] = field(default_factory=tuple)
    description: str = ""
    icon: Optional[str] = None
    requires_online_auth: bool = True
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "description": self.description,
            "icon": self.icon,
            "requiresOnlineAuth": self.requires_online_auth,
            "enabled": self.enabled,
            "fields": [f.to_dict() for f in self.fields],
        }


VPA_PATTERN = r"^[\w.-]+@[\w.-]+$"

CREDIT_CARD_CONTRACT = PaymentMethodContract(
    id=PaymentMethodId.CREDIT_CARD.value,
    display_name="Credit/Debit Card",
    description="Pay with your credit or debit card",
    icon="credit-card",
    requires_online_auth=True,
    fields=(
        PaymentField(
            name="cardNumber",
            type=PaymentFieldType.STRING,
            label="Card Number",
            pattern=r"^[0-9 ]{12,19}$",
            placeholder="1234 5678 9012 3456",
            mask="#### #### #### ####",
        ),
        PaymentField(
            name="expiry",
            type=PaymentFieldType.STRING,
            label="Expiry (MM/YY)",
            pattern=r"^(0[1-9]|1[0-2])\/\d{2}$",
            placeholder="MM/YY",
            mask="##/##",
        ),
        PaymentField(
            name="cvv",
            type=PaymentFieldType.STRING,
            label="CVV",
            pattern=r"^\d{3,4}$",
            placeholder="123",
            mask="###",
        ),
        PaymentField(
            name="cardholder",
            type=PaymentFieldType.STRING,
            label="Cardholder Name",
            placeholder="John Doe",
        ),
    ),
)

COD_CONTRACT = PaymentMethodContract(
    id=PaymentMethodId.CASH_ON_DELIVERY.value,
    display_name="Cash on Delivery",
    description="Pay when your order arrives",
    icon="truck",
    requires_online_auth=False,
)

UPI_CONTRACT = PaymentMethodContract(
    id=PaymentMethodId.UPI.value,
    display_name="UPI",
    description="Pay using UPI ID",
    icon="smartphone",
    requires_online_auth=True,
    fields=(
        PaymentField(
            name="vpa",
            type=PaymentFieldType.STRING,
            label="UPI ID (VPA)",
            pattern=VPA_PATTERN,
            placeholder="yourname@upi",
        ),
    ),
)

PAYPAL_CONTRACT = PaymentMethodContract(
    id=PaymentMethodId.PAYPAL.value,
    display_name="PayPal",
    description="Pay securely with PayPal",
    icon="paypal",
    requires_online_auth=True,
    fields=(
        PaymentField(
            name="email",
            type=PaymentFieldType.EMAIL,
            label="PayPal Email",
            pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$",
            placeholder="your@email.com",
        ),
    ),
)

# Wallets handle authentication on their side
APPLE_PAY_CONTRACT = PaymentMethodContract(
    id=PaymentMethodId.APPLE_PAY.value,
    display_name="Apple Pay",
    description="Pay with Apple Pay",
    icon="apple",
)

GOOGLE_PAY_CONTRACT = PaymentMethodContract(
    id=PaymentMethodId.GOOGLE_PAY.value,
    display_name="Google Pay",
    description="Pay with Google Pay",
    icon="google",
)

DEFAULT_PAYMENT_CONTRACTS: tuple[PaymentMethodContract, ...] = (
    CREDIT_CARD_CONTRACT,
    COD_CONTRACT,
    UPI_CONTRACT,
    PAYPAL_CONTRACT,
    APPLE_PAY_CONTRACT,
    GOOGLE_PAY_CONTRACT,
)

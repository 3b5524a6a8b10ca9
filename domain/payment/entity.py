"""
Payment domain entities - payment intent aggregate and result value object.

The domain never reads the wall clock: every timestamp is passed in by the
use-case from the injected Clock.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from domain.payment.exceptions import ValidationError


class PaymentStatus(str, Enum):
    """Statuses a PaymentResult may report."""
    PENDING = "pending"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    FAILED = "failed"
    REFUNDED = "refunded"


class IntentStatus(str, Enum):
    """Lifecycle of a persisted payment intent."""
    CREATED = "created"
    PENDING = "pending"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELED = "canceled"


FINAL_INTENT_STATUSES = frozenset({IntentStatus.FAILED, IntentStatus.REFUNDED, IntentStatus.CANCELED})


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_decimal(value: Any, *, field_name: str = "amount") -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}", field=field_name)
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"Invalid {field_name}: {value!r}", field=field_name) from None


def normalize_currency(currency: Optional[str]) -> str:
    code = (currency or "").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError(f"Invalid currency code: {currency}", field="currency")
    return code


@dataclass(frozen=True)
class PaymentResult:
    """Uniform, immutable outcome of a provider or use-case operation."""

    status: PaymentStatus
    external_id: Optional[str] = None
    receipt_url: Optional[str] = None
    error: Optional[str] = None
    intent_id: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            status = PaymentStatus(self.status)
        except ValueError:
            raise ValidationError(f"Invalid payment status: {self.status}", field="status") from None
        object.__setattr__(self, "status", status)

    @classmethod
    def failed(cls, error: str, *, external_id: Optional[str] = None) -> "PaymentResult":
        return cls(status=PaymentStatus.FAILED, external_id=external_id, error=error)

    def is_success(self) -> bool:
        return self.status in (PaymentStatus.AUTHORIZED, PaymentStatus.CAPTURED, PaymentStatus.REFUNDED)

    def is_pending(self) -> bool:
        return self.status is PaymentStatus.PENDING

    def is_failed(self) -> bool:
        return self.status is PaymentStatus.FAILED

    def with_intent(self, intent_id: str) -> "PaymentResult":
        return replace(self, intent_id=intent_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "externalId": self.external_id,
            "receiptUrl": self.receipt_url,
            "error": self.error,
            "intentId": self.intent_id,
        }


@dataclass
class PaymentIntent:
    """
    Payment intent aggregate - one attempted payment for an order.

    Business rules:
    1. amount must be greater than 0
    2. currency is an ISO-4217 alpha-3 code
    3. status changes follow the transition table below
    4. a capture settles at most the amount; cumulative refunds never exceed what was captured

        created -> pending | authorized | failed | canceled
        pending -> authorized | failed | canceled
        authorized -> captured | failed | canceled
        captured -> refunded (once fully refunded)
    """

    id: str
    order_id: str
    method_id: str
    provider: str
    amount: Decimal
    currency: str
    created_at: datetime
    updated_at: datetime
    customer_id: Optional[str] = None
    status: IntentStatus = IntentStatus.CREATED
    external_id: Optional[str] = None
    receipt_url: Optional[str] = None
    error: Optional[str] = None
    captured_amount: Optional[Decimal] = None
    refunded_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    metadata: dict = field(default_factory=dict)
    version: int = 0

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)
        if self.amount <= 0:
            raise ValidationError(f"Payment amount must be greater than 0: {self.amount}", field="amount")
        self.currency = normalize_currency(self.currency)
        if not self.order_id:
            raise ValidationError("Order ID is required", field="order_id")
        if not self.method_id:
            raise ValidationError("Payment method ID is required", field="method_id")
        self.status = IntentStatus(self.status)
        self.refunded_amount = to_decimal(self.refunded_amount, field_name="refunded_amount")
        if self.captured_amount is not None:
            self.captured_amount = to_decimal(self.captured_amount, field_name="captured_amount")
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)
        if self.metadata is None:
            self.metadata = {}

    def _transition(self, allowed: tuple[IntentStatus, ...], target: IntentStatus, now: datetime) -> None:
        if self.status not in allowed:
            raise ValidationError(
                f"Cannot transition payment intent from {self.status.value} to {target.value}",
                field="status",
                details={"intent_id": self.id, "from": self.status.value, "to": target.value},
            )
        self.status = target
        self.updated_at = _ensure_utc(now)

    def mark_pending(self, external_id: Optional[str], now: datetime) -> None:
        self._transition((IntentStatus.CREATED,), IntentStatus.PENDING, now)
        self.external_id = external_id

    def authorize(self, external_id: Optional[str], now: datetime, receipt_url: Optional[str] = None) -> None:
        self._transition((IntentStatus.CREATED, IntentStatus.PENDING), IntentStatus.AUTHORIZED, now)
        self.external_id = external_id
        if receipt_url:
            self.receipt_url = receipt_url
        self.error = None

    def capture(self, now: datetime, receipt_url: Optional[str] = None, *, amount: Optional[Decimal] = None) -> None:
        """Capture `amount` (default: the full amount); only that much can later be refunded."""
        captured = self.amount if amount is None else to_decimal(amount)
        if captured <= 0 or captured > self.amount:
            raise ValidationError(
                "Capture amount must be greater than 0 and cannot exceed the authorized amount",
                field="amount",
                details={"requested": str(captured), "authorized": str(self.amount)},
            )
        self._transition((IntentStatus.AUTHORIZED,), IntentStatus.CAPTURED, now)
        self.captured_amount = captured
        if receipt_url:
            self.receipt_url = receipt_url

    def fail(self, error: Optional[str], now: datetime) -> None:
        if self.status in FINAL_INTENT_STATUSES or self.status is IntentStatus.CAPTURED:
            raise ValidationError(
                f"Cannot fail payment intent in status {self.status.value}",
                field="status",
            )
        self.status = IntentStatus.FAILED
        self.error = error
        self.updated_at = _ensure_utc(now)

    def cancel(self, now: datetime) -> None:
        self._transition(
            (IntentStatus.CREATED, IntentStatus.PENDING, IntentStatus.AUTHORIZED),
            IntentStatus.CANCELED,
            now,
        )

    def settled_amount(self) -> Decimal:
        return self.amount if self.captured_amount is None else self.captured_amount

    def refundable_amount(self) -> Decimal:
        return self.settled_amount() - self.refunded_amount

    def apply_refund(self, amount: Decimal, now: datetime) -> None:
        if self.status is not IntentStatus.CAPTURED:
            raise ValidationError("Only captured payments can be refunded", field="status")
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError(f"Refund amount must be greater than 0: {amount}", field="amount")
        if amount > self.refundable_amount():
            raise ValidationError(
                "Refund amount cannot exceed the captured amount",
                field="amount",
                details={"requested": str(amount), "refundable": str(self.refundable_amount())},
            )
        self.refunded_amount += amount
        self.updated_at = _ensure_utc(now)
        if self.refunded_amount >= self.settled_amount():
            self.status = IntentStatus.REFUNDED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "customerId": self.customer_id,
            "methodId": self.method_id,
            "provider": self.provider,
            "amount": str(self.amount),
            "currency": self.currency,
            "status": self.status.value,
            "externalId": self.external_id,
            "receiptUrl": self.receipt_url,
            "error": self.error,
            "capturedAmount": str(self.captured_amount) if self.captured_amount is not None else None,
            "refundedAmount": str(self.refunded_amount),
            "metadata": dict(self.metadata),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "version": self.version,
        }


@dataclass
class StoredPaymentMethod:
    """A payment method a customer saved for later checkouts."""

    id: str
    customer_id: str
    method_id: str
    created_at: datetime
    updated_at: datetime
    label: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.customer_id:
            raise ValidationError("Customer ID is required", field="customer_id")
        if not self.method_id:
            raise ValidationError("Payment method ID is required", field="method_id")
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)
        if self.details is None:
            self.details = {}

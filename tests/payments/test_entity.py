from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.payment.entity import IntentStatus, PaymentIntent, PaymentResult, PaymentStatus
from domain.payment.exceptions import ValidationError


NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _intent(**overrides) -> PaymentIntent:
    data = dict(
        id="pi_1",
        order_id="o1",
        method_id="credit_card",
        provider="stripe",
        amount=Decimal("100.00"),
        currency="usd",
        created_at=NOW,
        updated_at=NOW,
    )
    data.update(overrides)
    return PaymentIntent(**data)


def test_result_status_is_coerced_and_validated():
    assert PaymentResult(status="authorized").status is PaymentStatus.AUTHORIZED
    with pytest.raises(ValidationError):
        PaymentResult(status="settled")


def test_result_helpers_and_dict():
    failed = PaymentResult.failed("declined", external_id="stripe_1")
    assert failed.is_failed() and not failed.is_success()
    assert PaymentResult(status=PaymentStatus.PENDING).is_pending()
    attached = failed.with_intent("pi_1")
    assert failed.intent_id is None
    assert attached.to_dict() == {
        "status": "failed",
        "externalId": "stripe_1",
        "receiptUrl": None,
        "error": "declined",
        "intentId": "pi_1",
    }


@pytest.mark.parametrize("amount", [0, -1, "abc"])
def test_intent_rejects_bad_amount(amount):
    with pytest.raises(ValidationError):
        _intent(amount=amount)


def test_intent_normalizes_currency_and_requires_order():
    assert _intent().currency == "USD"
    with pytest.raises(ValidationError):
        _intent(currency="dollars")
    with pytest.raises(ValidationError):
        _intent(order_id="")


def test_authorize_then_capture():
    intent = _intent()
    intent.authorize("stripe_1", NOW, receipt_url="https://r/1")
    intent.capture(NOW)
    assert intent.status is IntentStatus.CAPTURED
    assert intent.external_id == "stripe_1"
    assert intent.receipt_url == "https://r/1"


def test_capture_requires_authorized():
    intent = _intent()
    with pytest.raises(ValidationError):
        intent.capture(NOW)
    intent.mark_pending("cod_1", NOW)
    with pytest.raises(ValidationError):
        intent.capture(NOW)


def test_failed_intent_is_final():
    intent = _intent()
    intent.fail("declined", NOW)
    assert intent.status is IntentStatus.FAILED
    with pytest.raises(ValidationError):
        intent.authorize("stripe_1", NOW)
    with pytest.raises(ValidationError):
        intent.fail("again", NOW)


def test_partial_then_full_refund():
    intent = _intent()
    intent.authorize("stripe_1", NOW)
    intent.capture(NOW)

    intent.apply_refund(Decimal("30"), NOW)
    assert intent.status is IntentStatus.CAPTURED
    assert intent.refundable_amount() == Decimal("70.00")

    with pytest.raises(ValidationError):
        intent.apply_refund(Decimal("70.01"), NOW)

    intent.apply_refund(Decimal("70"), NOW)
    assert intent.status is IntentStatus.REFUNDED
    assert intent.refunded_amount == Decimal("100.00")


def test_cancel_from_authorized():
    intent = _intent()
    intent.authorize("stripe_1", NOW)
    intent.cancel(NOW)
    assert intent.status is IntentStatus.CANCELED


def test_intent_dict_uses_camel_case():
    data = _intent(customer_id="c1").to_dict()
    assert data["orderId"] == "o1"
    assert data["customerId"] == "c1"
    assert data["amount"] == "100.00"
    assert data["status"] == "created"
    assert data["refundedAmount"] == "0"
    assert data["capturedAmount"] is None


def test_partial_capture_limits_refunds():
    intent = _intent()
    intent.authorize("stripe_1", NOW)
    intent.capture(NOW, amount=Decimal("30"))
    assert intent.captured_amount == Decimal("30")
    assert intent.refundable_amount() == Decimal("30")
    assert intent.to_dict()["capturedAmount"] == "30"

    with pytest.raises(ValidationError):
        intent.apply_refund(Decimal("100"), NOW)
    assert intent.status is IntentStatus.CAPTURED

    intent.apply_refund(Decimal("30"), NOW)
    assert intent.status is IntentStatus.REFUNDED


@pytest.mark.parametrize("amount", ["0", "100.01"])
def test_capture_amount_must_fit_the_authorization(amount):
    intent = _intent()
    intent.authorize("stripe_1", NOW)
    with pytest.raises(ValidationError):
        intent.capture(NOW, amount=Decimal(amount))
    assert intent.status is IntentStatus.AUTHORIZED

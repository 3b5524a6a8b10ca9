from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.payment.entity import IntentStatus, PaymentIntent, StoredPaymentMethod
from domain.payment.exceptions import ConflictError, NotFoundError, ValidationError
from infrastructure.repositories.payment_intent_repository import InMemoryPaymentIntentRepository
from shared.codes.payment_codes import PaymentErrorKind


NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _intent(intent_id="pi_1", order_id="o1", customer_id="c1") -> PaymentIntent:
    return PaymentIntent(
        id=intent_id,
        order_id=order_id,
        customer_id=customer_id,
        method_id="upi",
        provider="upi",
        amount=Decimal("100"),
        currency="USD",
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.mark.asyncio
async def test_create_sets_first_version_and_stores_copy():
    repo = InMemoryPaymentIntentRepository()
    intent = _intent()
    saved = await repo.create(intent)
    assert saved.version == 1
    assert saved is not intent

    saved.metadata["mutated"] = True
    stored = await repo.get_by_id("pi_1")
    assert "mutated" not in stored.metadata


@pytest.mark.asyncio
async def test_create_rejects_duplicate_id():
    repo = InMemoryPaymentIntentRepository()
    await repo.create(_intent())
    with pytest.raises(ValidationError):
        await repo.create(_intent())


@pytest.mark.asyncio
async def test_update_bumps_version():
    repo = InMemoryPaymentIntentRepository()
    intent = await repo.create(_intent())
    intent.authorize("upi_1", NOW)
    saved = await repo.update(intent)
    assert saved.version == 2
    assert intent.version == 2
    assert (await repo.get_by_id("pi_1")).status is IntentStatus.AUTHORIZED


@pytest.mark.asyncio
async def test_stale_update_raises_conflict():
    repo = InMemoryPaymentIntentRepository()
    await repo.create(_intent())
    first = await repo.get_by_id("pi_1")
    second = await repo.get_by_id("pi_1")

    first.authorize("upi_1", NOW)
    await repo.update(first)

    second.fail("late writer", NOW)
    with pytest.raises(ConflictError) as exc_info:
        await repo.update(second)
    assert exc_info.value.kind is PaymentErrorKind.CONFLICT
    assert exc_info.value.details["expected_version"] == 1
    assert exc_info.value.details["actual_version"] == 2
    assert (await repo.get_by_id("pi_1")).status is IntentStatus.AUTHORIZED


@pytest.mark.asyncio
async def test_update_missing_intent_raises_not_found():
    repo = InMemoryPaymentIntentRepository()
    with pytest.raises(NotFoundError):
        await repo.update(_intent())


@pytest.mark.asyncio
async def test_lookups():
    repo = InMemoryPaymentIntentRepository()
    a = await repo.create(_intent("pi_1", order_id="o1", customer_id="c1"))
    await repo.create(_intent("pi_2", order_id="o1", customer_id="c2"))
    await repo.create(_intent("pi_3", order_id="o2", customer_id="c1"))
    a.authorize("upi_abc", NOW)
    await repo.update(a)

    assert (await repo.get_by_external_id("upi_abc")).id == "pi_1"
    assert await repo.get_by_external_id("upi_missing") is None
    assert {i.id for i in await repo.list_by_order_id("o1")} == {"pi_1", "pi_2"}
    assert {i.id for i in await repo.list_by_customer_id("c1")} == {"pi_1", "pi_3"}
    assert [i.id for i in await repo.list_by_status(IntentStatus.AUTHORIZED)] == ["pi_1"]
    assert await repo.delete("pi_2") is True
    assert await repo.delete("pi_2") is False
    assert await repo.get_by_id("pi_2") is None


@pytest.mark.asyncio
async def test_stored_payment_methods():
    repo = InMemoryPaymentIntentRepository()
    method = StoredPaymentMethod(
        id="pm_1",
        customer_id="c1",
        method_id="upi",
        created_at=NOW,
        updated_at=NOW,
        label="Personal UPI",
        details={"vpa": "user@bank"},
    )
    await repo.create_payment_method(method)
    with pytest.raises(ValidationError):
        await repo.create_payment_method(method)

    method.label = "Work UPI"
    await repo.update_payment_method(method)
    assert (await repo.get_payment_method("pm_1")).label == "Work UPI"
    assert [m.id for m in await repo.list_payment_methods_by_customer("c1")] == ["pm_1"]
    assert await repo.list_payment_methods_by_customer("c2") == []

    assert await repo.delete_payment_method("pm_1") is True
    assert await repo.get_payment_method("pm_1") is None
    with pytest.raises(NotFoundError):
        await repo.update_payment_method(method)

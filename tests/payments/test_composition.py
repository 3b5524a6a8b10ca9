import pytest

from api.composition import PaymentComposition, PaymentContext, build_payment_composition
from core.settings import PaymentSettings
from domain.payment.exceptions import ConfigurationError
from infrastructure.external.payments import CashOnDeliveryProvider, StripeProvider, UPIProvider
from infrastructure.registries.payment_method_registry import InMemoryPaymentMethodRegistry
from infrastructure.repositories.payment_intent_repository import InMemoryPaymentIntentRepository


def test_provider_table(composition):
    assert isinstance(composition.provider_for("credit_card"), StripeProvider)
    assert isinstance(composition.provider_for("stripe"), StripeProvider)
    assert isinstance(composition.provider_for("upi"), UPIProvider)
    assert isinstance(composition.provider_for("cash_on_delivery"), CashOnDeliveryProvider)


@pytest.mark.parametrize("method_id", ["paypal", "apple_pay", "bitcoin"])
def test_unserved_method_is_configuration_error(composition, method_id):
    with pytest.raises(ConfigurationError) as exc_info:
        composition.make_process_payment_use_case(method_id)
    assert exc_info.value.message == f"No provider found for payment method: {method_id}"
    with pytest.raises(ConfigurationError):
        composition.make_capture_payment_use_case(method_id)
    with pytest.raises(ConfigurationError):
        composition.make_refund_payment_use_case(method_id)


def test_first_provider_declaring_a_method_wins(clock, ids):
    class OtherUPI(UPIProvider):
        name = "other_upi"

    context = PaymentContext(
        repository=InMemoryPaymentIntentRepository(),
        registry=InMemoryPaymentMethodRegistry(),
        clock=clock,
        ids=ids,
    )
    first = UPIProvider("k", clock=clock, ids=ids)
    composition = PaymentComposition(context, [first, OtherUPI("k", clock=clock, ids=ids)])
    assert composition.provider_for("upi") is first


def test_default_settings_disable_unserved_wallets(composition):
    ids = [c.id for c in composition.list_contracts()]
    assert ids == ["credit_card", "cash_on_delivery", "upi"]
    assert composition.get_contract("paypal").enabled is False


def test_settings_flow_into_composition(clock, ids):
    settings = PaymentSettings(
        disabled_methods="upi",
        provider_call_timeout=0,
        default_currency="INR",
    )
    composition = build_payment_composition(settings, clock=clock, ids=ids)
    assert "upi" not in [c.id for c in composition.list_contracts()]
    assert "paypal" in [c.id for c in composition.list_contracts()]
    assert composition.call_timeout is None
    assert composition.default_currency == "INR"


def test_compositions_do_not_share_state(payment_settings, clock, ids):
    a = build_payment_composition(payment_settings, clock=clock, ids=ids)
    b = build_payment_composition(payment_settings, clock=clock, ids=ids)
    assert a.context.repository is not b.context.repository
    assert a.context.registry is not b.context.registry


@pytest.mark.asyncio
async def test_find_intent_by_id_or_external_id(composition):
    from application.dtos.payments import ProcessPayment

    result = await composition.make_process_payment_use_case("upi").execute(
        ProcessPayment(method_id="upi", amount="12.50", order_id="o1", fields={"vpa": "a@b"})
    )
    assert (await composition.find_intent(result.intent_id)).id == result.intent_id
    assert (await composition.find_intent(result.external_id)).id == result.intent_id
    assert await composition.find_intent("nope") is None

"""
Stripe card provider (simulated).

Flow: authorize on checkout, capture on fulfilment, refund on request. Card
fields are checked locally before the (simulated) authorization; an invalid
card is a decline, reported as a failed result.
"""
from __future__ import annotations

from typing import Optional

from application.ports.clock import Clock, IdGenerator
from application.ports.payment_provider import (
    AuthorizeParams,
    CaptureParams,
    ProviderCapabilities,
    RefundParams,
)
from domain.payment.contracts import PaymentMethodId
from domain.payment.entity import PaymentResult, PaymentStatus
from domain.payment.validation import validate_card_fields
from infrastructure.external.payments.base import BasePaymentProvider


class StripeProvider(BasePaymentProvider):
    name = "stripe"
    method_ids = frozenset({PaymentMethodId.CREDIT_CARD.value, PaymentMethodId.STRIPE.value})
    capabilities = ProviderCapabilities(authorize=True, capture=True, refund=True, mark_pending=False)
    id_prefix = "stripe"
    receipt_base_url = "https://stripe.com/receipts"

    def __init__(
        self,
        api_key: str,
        *,
        clock: Clock,
        ids: IdGenerator,
        receipt_base_url: Optional[str] = None,
    ) -> None:
        super().__init__(clock=clock, ids=ids, receipt_base_url=receipt_base_url)
        self.api_key = api_key

    async def authorize(self, params: AuthorizeParams) -> PaymentResult:
        error = validate_card_fields(params.fields or {}, self._clock.now())
        if error:
            self._log("payment_authorize_declined", order_id=params.order_id, error=error)
            return PaymentResult.failed(error)

        external_id = self._new_external_id()
        self._log("payment_authorized", order_id=params.order_id, external_id=external_id)
        return PaymentResult(
            status=PaymentStatus.AUTHORIZED,
            external_id=external_id,
            receipt_url=self._receipt_url(external_id),
        )

    async def capture(self, params: CaptureParams) -> PaymentResult:
        declined = self._ownership_error("capture", params.external_id)
        if declined:
            return declined
        self._log("payment_captured", external_id=params.external_id, amount=str(params.amount))
        return PaymentResult(
            status=PaymentStatus.CAPTURED,
            external_id=params.external_id,
            receipt_url=self._receipt_url(params.external_id),
        )

    async def refund(self, params: RefundParams) -> PaymentResult:
        declined = self._ownership_error("refund", params.external_id)
        if declined:
            return declined
        refund_id = f"re_{self._ids.new_id()}"
        self._log("payment_refunded", external_id=params.external_id, refund_id=refund_id, amount=str(params.amount))
        return PaymentResult(
            status=PaymentStatus.REFUNDED,
            external_id=params.external_id,
            receipt_url=self._receipt_url(refund_id),
        )

"""
Cash on Delivery provider.

Nothing is authorized online: every payment stays pending until the courier
collects cash. Capture and refund are not available.
"""
from __future__ import annotations

from application.ports.payment_provider import AuthorizeParams, PendingParams, ProviderCapabilities
from domain.payment.contracts import PaymentMethodId
from domain.payment.entity import PaymentResult, PaymentStatus
from infrastructure.external.payments.base import BasePaymentProvider


class CashOnDeliveryProvider(BasePaymentProvider):
    name = "cash_on_delivery"
    method_ids = frozenset({PaymentMethodId.CASH_ON_DELIVERY.value})
    capabilities = ProviderCapabilities(
        authorize=True,
        capture=False,
        refund=False,
        mark_pending=True,
        deferred_settlement=True,
    )
    id_prefix = "cod"

    def _pending(self, order_id: str) -> PaymentResult:
        external_id = self._new_external_id()
        self._log("payment_marked_pending", order_id=order_id, external_id=external_id)
        return PaymentResult(status=PaymentStatus.PENDING, external_id=external_id)

    async def authorize(self, params: AuthorizeParams) -> PaymentResult:
        return self._pending(params.order_id)

    async def mark_pending(self, params: PendingParams) -> PaymentResult:
        return self._pending(params.order_id)

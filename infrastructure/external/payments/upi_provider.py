"""
UPI provider (simulated): VPA-validated authorize, then capture.
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
from domain.payment.validation import validate_vpa
from infrastructure.external.payments.base import BasePaymentProvider


class UPIProvider(BasePaymentProvider):
    name = "upi"
    method_ids = frozenset({PaymentMethodId.UPI.value})
    capabilities = ProviderCapabilities(authorize=True, capture=True, refund=True, mark_pending=False)
    id_prefix = "upi"
    receipt_base_url = "https://upi.com/receipts"

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
        vpa = (params.fields or {}).get("vpa")
        error = validate_vpa(vpa)
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
        self._log("payment_refunded", external_id=params.external_id, amount=str(params.amount))
        return PaymentResult(status=PaymentStatus.REFUNDED, external_id=params.external_id)

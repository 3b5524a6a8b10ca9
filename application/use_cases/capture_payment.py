"""
Capture a previously authorized payment intent.
"""
from __future__ import annotations

from application.dtos.payments import CapturePayment
from application.ports.payment_provider import CaptureParams
from application.use_cases.base import PaymentUseCase
from core.logging_config import get_logger
from domain.payment.entity import IntentStatus, PaymentResult, normalize_currency
from domain.payment.exceptions import PaymentIntentNotFoundError, ProviderError, ValidationError


logger = get_logger(__name__)


class CapturePaymentUseCase(PaymentUseCase):
    async def execute(self, req: CapturePayment) -> PaymentResult:
        intent = await self.repository.get_by_id(req.intent_id)
        if intent is None:
            raise PaymentIntentNotFoundError(req.intent_id)
        self._ensure_owner(intent)

        if intent.status is not IntentStatus.AUTHORIZED:
            raise ValidationError(
                "Payment intent must be authorized to capture",
                field="status",
                details={"intent_id": intent.id, "status": intent.status.value},
            )

        amount = req.amount if req.amount is not None else intent.amount
        currency = normalize_currency(req.currency) if req.currency else intent.currency
        if currency != intent.currency:
            raise ValidationError("Capture currency must match the payment currency", field="currency")
        if amount > intent.amount:
            raise ValidationError("Capture amount cannot exceed the authorized amount", field="amount")

        logger.info("payment_capture_request", intent_id=intent.id, provider=self.provider.name, amount=str(amount))
        try:
            result = await self._call_provider(
                "capture",
                self.provider.capture(CaptureParams(external_id=intent.external_id, amount=amount, currency=currency)),
            )
        except ProviderError as exc:
            logger.error("payment_capture_provider_error", intent_id=intent.id, error=exc.message)
            return PaymentResult.failed(exc.message, external_id=intent.external_id).with_intent(intent.id)

        if result.is_success():
            intent.capture(self.clock.now(), receipt_url=result.receipt_url, amount=amount)
            await self.repository.update(intent)

        logger.info("payment_capture_response", intent_id=intent.id, status=result.status.value)
        return result.with_intent(intent.id)

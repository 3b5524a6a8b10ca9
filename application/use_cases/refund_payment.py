"""
Refund a captured payment, fully or partially.
"""
from __future__ import annotations

from application.dtos.payments import RefundPayment
from application.ports.payment_provider import RefundParams
from application.use_cases.base import PaymentUseCase
from core.logging_config import get_logger
from domain.payment.entity import IntentStatus, PaymentIntent, PaymentResult, normalize_currency
from domain.payment.exceptions import PaymentIntentNotFoundError, ProviderError, ValidationError


logger = get_logger(__name__)


class RefundPaymentUseCase(PaymentUseCase):
    async def _resolve(self, payment_id: str) -> PaymentIntent:
        # Callers usually hold the provider's payment id; the intent id works too
        intent = await self.repository.get_by_external_id(payment_id)
        if intent is None:
            intent = await self.repository.get_by_id(payment_id)
        if intent is None:
            raise PaymentIntentNotFoundError(payment_id)
        return intent

    async def execute(self, req: RefundPayment) -> PaymentResult:
        intent = await self._resolve(req.payment_id)
        self._ensure_owner(intent)

        if intent.status is not IntentStatus.CAPTURED:
            raise ValidationError(
                "Only captured payments can be refunded",
                field="status",
                details={"intent_id": intent.id, "status": intent.status.value},
            )
        currency = normalize_currency(req.currency) if req.currency else intent.currency
        if currency != intent.currency:
            raise ValidationError("Refund currency must match the payment currency", field="currency")
        if req.amount > intent.refundable_amount():
            raise ValidationError(
                "Refund amount cannot exceed the captured amount",
                field="amount",
                details={"requested": str(req.amount), "refundable": str(intent.refundable_amount())},
            )

        logger.info(
            "payment_refund_request",
            intent_id=intent.id,
            provider=self.provider.name,
            amount=str(req.amount),
            reason=req.reason,
        )
        try:
            result = await self._call_provider(
                "refund",
                self.provider.refund(
                    RefundParams(
                        external_id=intent.external_id,
                        amount=req.amount,
                        currency=currency,
                        reason=req.reason,
                    )
                ),
            )
        except ProviderError as exc:
            logger.error("payment_refund_provider_error", intent_id=intent.id, error=exc.message)
            return PaymentResult.failed(exc.message, external_id=intent.external_id).with_intent(intent.id)

        if result.is_success():
            intent.apply_refund(req.amount, self.clock.now())
            await self.repository.update(intent)

        logger.info("payment_refund_response", intent_id=intent.id, status=result.status.value)
        return result.with_intent(intent.id)

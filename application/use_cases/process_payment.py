"""
Process a checkout payment: authorize online methods, mark deferred ones pending.
"""
from __future__ import annotations

from typing import Optional

from application.dtos.payments import ProcessPayment
from application.ports.clock import Clock, IdGenerator
from application.ports.payment_provider import AuthorizeParams, PaymentProvider, PendingParams
from application.use_cases.base import PaymentUseCase
from core.logging_config import get_logger
from domain.payment.entity import PaymentIntent, PaymentResult
from domain.payment.exceptions import ConfigurationError, ProviderError, ValidationError
from domain.payment.registry import PaymentMethodRegistry
from domain.payment.repository import PaymentIntentRepository


logger = get_logger(__name__)


def ensure_method_available(registry: PaymentMethodRegistry, method_id: str) -> None:
    """Unknown and disabled methods are caller errors, checked before any provider lookup."""
    contract = registry.get_contract(method_id)
    if contract is None:
        raise ValidationError(
            f"Unsupported payment method: {method_id}",
            field="method_id",
            details={"method_id": method_id},
        )
    if not contract.enabled:
        raise ValidationError(
            f"Payment method is disabled: {method_id}",
            field="method_id",
            details={"method_id": method_id},
        )


class ProcessPaymentUseCase(PaymentUseCase):
    def __init__(
        self,
        *,
        provider: PaymentProvider,
        registry: PaymentMethodRegistry,
        repository: PaymentIntentRepository,
        clock: Clock,
        ids: IdGenerator,
        call_timeout: Optional[float] = None,
        default_currency: str = "USD",
    ) -> None:
        super().__init__(provider=provider, repository=repository, clock=clock, call_timeout=call_timeout)
        self.registry = registry
        self.ids = ids
        self.default_currency = default_currency

    def _validate_method(self, method_id: str) -> None:
        ensure_method_available(self.registry, method_id)
        if not self.provider.supports(method_id):
            raise ConfigurationError(
                f"No provider found for payment method: {method_id}",
                details={"method_id": method_id, "provider": self.provider.name},
            )

    async def execute(self, req: ProcessPayment) -> PaymentResult:
        self._validate_method(req.method_id)

        now = self.clock.now()
        intent = PaymentIntent(
            id=self.ids.new_id(),
            order_id=req.order_id,
            customer_id=req.customer_id,
            method_id=req.method_id,
            provider=self.provider.name,
            amount=req.amount,
            currency=req.currency or self.default_currency,
            metadata=dict(req.metadata or {}),
            created_at=now,
            updated_at=now,
        )
        intent = await self.repository.create(intent)
        logger.info(
            "payment_process_request",
            intent_id=intent.id,
            order_id=intent.order_id,
            method_id=intent.method_id,
            provider=self.provider.name,
            amount=str(intent.amount),
            currency=intent.currency,
        )

        try:
            if self.provider.capabilities.deferred_settlement:
                result = await self._call_provider(
                    "mark_pending",
                    self.provider.mark_pending(
                        PendingParams(
                            amount=intent.amount,
                            currency=intent.currency,
                            order_id=intent.order_id,
                            metadata=intent.metadata,
                        )
                    ),
                )
            else:
                result = await self._call_provider(
                    "authorize",
                    self.provider.authorize(
                        AuthorizeParams(
                            amount=intent.amount,
                            currency=intent.currency,
                            order_id=intent.order_id,
                            fields=dict(req.fields or {}),
                            customer_id=intent.customer_id,
                            metadata=intent.metadata,
                        )
                    ),
                )
        except ProviderError as exc:
            logger.error("payment_process_provider_error", intent_id=intent.id, provider=self.provider.name, error=exc.message)
            intent.fail(exc.message, self.clock.now())
            await self.repository.update(intent)
            return PaymentResult.failed(exc.message).with_intent(intent.id)
        except Exception as exc:
            # Unexpected provider fault: close the intent, then surface the error
            logger.error(
                "payment_process_unexpected_error",
                intent_id=intent.id,
                provider=self.provider.name,
                error=str(exc),
                exc_info=True,
            )
            intent.fail("Unexpected provider error", self.clock.now())
            await self.repository.update(intent)
            raise

        now = self.clock.now()
        if result.is_success():
            intent.authorize(result.external_id, now, receipt_url=result.receipt_url)
        elif result.is_pending():
            intent.mark_pending(result.external_id, now)
        else:
            intent.fail(result.error, now)
        await self.repository.update(intent)

        logger.info(
            "payment_process_response",
            intent_id=intent.id,
            order_id=intent.order_id,
            status=result.status.value,
            external_id=result.external_id,
        )
        return result.with_intent(intent.id)

"""
Shared plumbing for the payment use-cases.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Optional

from application.ports.clock import Clock
from application.ports.payment_provider import PaymentProvider
from core.logging_config import get_logger
from domain.payment.entity import PaymentIntent, PaymentResult
from domain.payment.exceptions import ConfigurationError, ProviderTimeoutError
from domain.payment.repository import PaymentIntentRepository


logger = get_logger(__name__)


class PaymentUseCase:
    """Holds collaborators only; no state survives between executions."""

    def __init__(
        self,
        *,
        provider: PaymentProvider,
        repository: PaymentIntentRepository,
        clock: Clock,
        call_timeout: Optional[float] = None,
    ) -> None:
        self.provider = provider
        self.repository = repository
        self.clock = clock
        self.call_timeout = call_timeout

    async def _call_provider(self, operation: str, call: Awaitable[PaymentResult]) -> PaymentResult:
        """Await a provider call, bounded by `call_timeout` when set."""
        try:
            if self.call_timeout is None:
                return await call
            return await asyncio.wait_for(call, timeout=self.call_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "payment_provider_timeout",
                provider=self.provider.name,
                operation=operation,
                timeout=self.call_timeout,
            )
            raise ProviderTimeoutError(operation, provider=self.provider.name, timeout=self.call_timeout) from None

    def _ensure_owner(self, intent: PaymentIntent) -> None:
        if intent.provider != self.provider.name:
            raise ConfigurationError(
                "Payment intent belongs to a different provider",
                details={"intent_id": intent.id, "intent_provider": intent.provider, "provider": self.provider.name},
            )

"""
Payment composition root.

Wires settings, providers, registry, repository, clock and id generator into
use-cases. One `PaymentComposition` is built per process and kept on
`app.state`; tests build their own.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from application.ports.clock import Clock, IdGenerator
from application.ports.payment_provider import PaymentProvider
from application.use_cases import (
    CapturePaymentUseCase,
    ProcessPaymentUseCase,
    RefundPaymentUseCase,
)
from core.logging_config import get_logger
from core.settings import PaymentSettings, payment_settings
from domain.payment.contracts import PaymentMethodContract
from domain.payment.entity import PaymentIntent
from domain.payment.exceptions import ConfigurationError
from domain.payment.registry import PaymentMethodRegistry
from domain.payment.repository import PaymentIntentRepository
from infrastructure.clock import SystemClock, UuidGenerator
from infrastructure.external.payments import build_payment_providers
from infrastructure.registries.payment_method_registry import InMemoryPaymentMethodRegistry
from infrastructure.repositories.payment_intent_repository import InMemoryPaymentIntentRepository


logger = get_logger(__name__)


@dataclass
class PaymentContext:
    """Process-wide collaborators shared by every use-case."""

    repository: PaymentIntentRepository
    registry: PaymentMethodRegistry
    clock: Clock
    ids: IdGenerator


class PaymentComposition:
    def __init__(
        self,
        context: PaymentContext,
        providers: Iterable[PaymentProvider],
        *,
        call_timeout: Optional[float] = None,
        default_currency: str = "USD",
    ) -> None:
        self.context = context
        self.providers: List[PaymentProvider] = list(providers)
        self.call_timeout = call_timeout
        self.default_currency = default_currency
        # First provider declaring a method wins
        self._by_method: dict[str, PaymentProvider] = {}
        for provider in self.providers:
            for method_id in sorted(provider.method_ids):
                self._by_method.setdefault(method_id, provider)
        logger.info(
            "payment_composition_ready",
            providers=[p.name for p in self.providers],
            methods={m: p.name for m, p in self._by_method.items()},
        )

    def provider_for(self, method_id: str) -> PaymentProvider:
        provider = self._by_method.get(method_id)
        if provider is None:
            raise ConfigurationError(
                f"No provider found for payment method: {method_id}",
                details={"method_id": method_id},
            )
        return provider

    def make_process_payment_use_case(self, method_id: str) -> ProcessPaymentUseCase:
        return ProcessPaymentUseCase(
            provider=self.provider_for(method_id),
            registry=self.context.registry,
            repository=self.context.repository,
            clock=self.context.clock,
            ids=self.context.ids,
            call_timeout=self.call_timeout,
            default_currency=self.default_currency,
        )

    def make_capture_payment_use_case(self, method_id: str) -> CapturePaymentUseCase:
        return CapturePaymentUseCase(
            provider=self.provider_for(method_id),
            repository=self.context.repository,
            clock=self.context.clock,
            call_timeout=self.call_timeout,
        )

    def make_refund_payment_use_case(self, method_id: str) -> RefundPaymentUseCase:
        return RefundPaymentUseCase(
            provider=self.provider_for(method_id),
            repository=self.context.repository,
            clock=self.context.clock,
            call_timeout=self.call_timeout,
        )

    def list_contracts(self) -> List[PaymentMethodContract]:
        return self.context.registry.list_enabled_contracts()

    def get_contract(self, method_id: str) -> Optional[PaymentMethodContract]:
        return self.context.registry.get_contract(method_id)

    async def find_intent(self, reference: str) -> Optional[PaymentIntent]:
        """Look an intent up by its id, then by the provider's external id."""
        repository = self.context.repository
        intent = await repository.get_by_id(reference)
        if intent is None:
            intent = await repository.get_by_external_id(reference)
        return intent


def build_payment_composition(
    settings: PaymentSettings = payment_settings,
    *,
    clock: Optional[Clock] = None,
    ids: Optional[IdGenerator] = None,
    repository: Optional[PaymentIntentRepository] = None,
    registry: Optional[PaymentMethodRegistry] = None,
    providers: Optional[Iterable[PaymentProvider]] = None,
) -> PaymentComposition:
    clock = clock or SystemClock()
    ids = ids or UuidGenerator()
    context = PaymentContext(
        repository=repository or InMemoryPaymentIntentRepository(),
        registry=registry or InMemoryPaymentMethodRegistry(disabled=settings.disabled_method_ids),
        clock=clock,
        ids=ids,
    )
    if providers is None:
        providers = build_payment_providers(settings, clock=clock, ids=ids)
    return PaymentComposition(
        context,
        providers,
        call_timeout=settings.call_timeout,
        default_currency=settings.default_currency,
    )

"""
Payment provider adapters and their factory.
"""
from __future__ import annotations

from application.ports.clock import Clock, IdGenerator
from application.ports.payment_provider import PaymentProvider
from core.settings import PaymentSettings

from .base import BasePaymentProvider
from .cod_provider import CashOnDeliveryProvider
from .stripe_provider import StripeProvider
from .upi_provider import UPIProvider


def build_payment_providers(settings: PaymentSettings, *, clock: Clock, ids: IdGenerator) -> list[PaymentProvider]:
    """Providers in dispatch priority order; credentials come from settings."""
    return [
        StripeProvider(
            settings.stripe.secret_key,
            clock=clock,
            ids=ids,
            receipt_base_url=settings.stripe.receipt_base_url,
        ),
        CashOnDeliveryProvider(clock=clock, ids=ids),
        UPIProvider(
            settings.upi.api_key,
            clock=clock,
            ids=ids,
            receipt_base_url=settings.upi.receipt_base_url,
        ),
    ]


__all__ = [
    "BasePaymentProvider",
    "CashOnDeliveryProvider",
    "StripeProvider",
    "UPIProvider",
    "build_payment_providers",
]

"""
Payment provider port (application/ports) exposing a replaceable protocol.

Use-cases depend on this Protocol; infrastructure implements the adapters.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Protocol, runtime_checkable

from domain.payment.entity import PaymentResult


@dataclass(frozen=True)
class ProviderCapabilities:
    """Statically known operation set of a provider.

    `deferred_settlement` marks providers that settle outside the checkout
    (e.g. cash on delivery): they are asked to mark payments pending instead
    of authorizing them.
    """

    authorize: bool = True
    capture: bool = True
    refund: bool = True
    mark_pending: bool = False
    deferred_settlement: bool = False


@dataclass(frozen=True)
class AuthorizeParams:
    amount: Decimal
    currency: str
    order_id: str
    fields: dict[str, Any]
    customer_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class CaptureParams:
    external_id: Optional[str]
    amount: Decimal
    currency: str


@dataclass(frozen=True)
class RefundParams:
    external_id: Optional[str]
    amount: Decimal
    currency: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class PendingParams:
    amount: Decimal
    currency: str
    order_id: str
    metadata: Optional[dict[str, Any]] = None


@runtime_checkable
class PaymentProvider(Protocol):
    """Adapter for one payment network.

    Operations a provider does not implement raise UnsupportedOperationError.
    Business-level declines come back as a failed PaymentResult.
    """

    name: str
    method_ids: frozenset[str]
    capabilities: ProviderCapabilities

    def supports(self, method_id: str) -> bool: ...

    async def authorize(self, params: AuthorizeParams) -> PaymentResult: ...

    async def capture(self, params: CaptureParams) -> PaymentResult: ...

    async def refund(self, params: RefundParams) -> PaymentResult: ...

    async def mark_pending(self, params: PendingParams) -> PaymentResult: ...

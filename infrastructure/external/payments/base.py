"""
Base payment provider implementing shared concerns: id minting, ownership
checks, logging and the unsupported-operation defaults.

Concrete providers subclass and override the operations they support.
Network calls are simulated; a real adapter would call the provider API in
the overridden methods.
"""
from __future__ import annotations

from typing import Optional

from application.ports.clock import Clock, IdGenerator
from application.ports.payment_provider import (
    AuthorizeParams,
    CaptureParams,
    PaymentProvider,
    PendingParams,
    ProviderCapabilities,
    RefundParams,
)
from core.logging_config import get_logger
from domain.payment.entity import PaymentResult
from domain.payment.exceptions import UnsupportedOperationError


logger = get_logger(__name__)


class BasePaymentProvider(PaymentProvider):
    name: str = "base"
    method_ids: frozenset[str] = frozenset()
    capabilities: ProviderCapabilities = ProviderCapabilities(
        authorize=False, capture=False, refund=False, mark_pending=False
    )
    id_prefix: str = "base"
    receipt_base_url: str = ""

    def __init__(self, *, clock: Clock, ids: IdGenerator, receipt_base_url: Optional[str] = None) -> None:
        self._clock = clock
        self._ids = ids
        if receipt_base_url:
            self.receipt_base_url = receipt_base_url.rstrip("/")

    def supports(self, method_id: str) -> bool:
        return method_id in self.method_ids

    # Default implementations raise to force override where supported
    async def authorize(self, params: AuthorizeParams) -> PaymentResult:
        raise UnsupportedOperationError("authorize", provider=self.name)

    async def capture(self, params: CaptureParams) -> PaymentResult:
        raise UnsupportedOperationError("capture", provider=self.name)

    async def refund(self, params: RefundParams) -> PaymentResult:
        raise UnsupportedOperationError("refund", provider=self.name)

    async def mark_pending(self, params: PendingParams) -> PaymentResult:
        raise UnsupportedOperationError("mark_pending", provider=self.name)

    # Helpers
    def _new_external_id(self) -> str:
        return f"{self.id_prefix}_{self._ids.new_id()}"

    def _receipt_url(self, reference: str) -> Optional[str]:
        if not self.receipt_base_url:
            return None
        return f"{self.receipt_base_url}/{reference}"

    def _owns(self, external_id: Optional[str]) -> bool:
        return bool(external_id) and external_id.startswith(f"{self.id_prefix}_")

    def _ownership_error(self, operation: str, external_id: Optional[str]) -> Optional[PaymentResult]:
        """Failed result when `external_id` was not issued by this provider."""
        if not external_id:
            return PaymentResult.failed(f"Intent ID is required for {operation}")
        if not self._owns(external_id):
            self._log("payment_provider_foreign_reference", operation=operation, external_id=external_id)
            return PaymentResult.failed(
                f"Payment reference {external_id} was not issued by {self.name}",
                external_id=external_id,
            )
        return None

    def _log(self, event: str, **kwargs) -> None:
        logger.info(
            event,
            provider=self.name,
            **kwargs,
        )

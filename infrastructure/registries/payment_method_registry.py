"""
In-memory payment method registry, populated at construction.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional

from core.logging_config import get_logger
from domain.payment.contracts import DEFAULT_PAYMENT_CONTRACTS, PaymentMethodContract
from domain.payment.exceptions import ValidationError
from domain.payment.registry import PaymentMethodRegistry


logger = get_logger(__name__)


class InMemoryPaymentMethodRegistry(PaymentMethodRegistry):
    """Registry backed by an insertion-ordered dict; lives for the process."""

    def __init__(
        self,
        contracts: Iterable[PaymentMethodContract] = DEFAULT_PAYMENT_CONTRACTS,
        *,
        disabled: Iterable[str] = (),
    ) -> None:
        disabled_ids = set(disabled)
        self._contracts: dict[str, PaymentMethodContract] = {}
        for contract in contracts:
            if contract.id in disabled_ids:
                contract = replace(contract, enabled=False)
            self.register(contract)

    def list_contracts(self) -> List[PaymentMethodContract]:
        return list(self._contracts.values())

    def list_enabled_contracts(self) -> List[PaymentMethodContract]:
        return [c for c in self._contracts.values() if c.enabled]

    def get_contract(self, method_id: str) -> Optional[PaymentMethodContract]:
        return self._contracts.get(method_id)

    def is_available(self, method_id: str) -> bool:
        contract = self._contracts.get(method_id)
        return contract.enabled if contract else False

    def register(self, contract: PaymentMethodContract) -> None:
        if contract is None or not contract.id:
            raise ValidationError("Contract must have an id", field="id")
        self._contracts[contract.id] = contract
        logger.debug("payment_method_registered", method_id=contract.id, enabled=contract.enabled)

    def unregister(self, method_id: str) -> None:
        self._contracts.pop(method_id, None)

    def list_online_auth_contracts(self) -> List[PaymentMethodContract]:
        return [c for c in self._contracts.values() if c.enabled and c.requires_online_auth]

    def list_offline_auth_contracts(self) -> List[PaymentMethodContract]:
        """Enabled methods settled offline, such as cash on delivery."""
        return [c for c in self._contracts.values() if c.enabled and not c.requires_online_auth]

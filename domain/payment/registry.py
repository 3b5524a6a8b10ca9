"""
Payment method registry interface.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from .contracts import PaymentMethodContract


class PaymentMethodRegistry(ABC):
    """Lookup of the payment methods offered at checkout."""

    @abstractmethod
    def list_contracts(self) -> List[PaymentMethodContract]:
        pass

    @abstractmethod
    def list_enabled_contracts(self) -> List[PaymentMethodContract]:
        """Enabled contracts, in registration order"""

    @abstractmethod
    def get_contract(self, method_id: str) -> Optional[PaymentMethodContract]:
        pass

    @abstractmethod
    def is_available(self, method_id: str) -> bool:
        pass

    @abstractmethod
    def register(self, contract: PaymentMethodContract) -> None:
        pass

    @abstractmethod
    def unregister(self, method_id: str) -> None:
        pass

    @abstractmethod
    def list_online_auth_contracts(self) -> List[PaymentMethodContract]:
        """Enabled contracts authorized at checkout"""

    @abstractmethod
    def list_offline_auth_contracts(self) -> List[PaymentMethodContract]:
        """Enabled contracts settled later (e.g. cash on delivery)"""

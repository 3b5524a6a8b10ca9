"""
Payment repository interfaces - what the payment core needs from storage.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from .entity import IntentStatus, PaymentIntent, StoredPaymentMethod


class PaymentIntentRepository(ABC):
    """Persistence of payment intents and customers' stored payment methods.

    `update` is an optimistic compare-and-set: it succeeds only when the
    caller's `version` matches the stored one, and bumps it.
    """

    @abstractmethod
    async def create(self, intent: PaymentIntent) -> PaymentIntent:
        """Persist a new intent"""

    @abstractmethod
    async def update(self, intent: PaymentIntent) -> PaymentIntent:
        """Persist changes; raises ConflictError on a stale version"""

    @abstractmethod
    async def get_by_id(self, intent_id: str) -> Optional[PaymentIntent]:
        pass

    @abstractmethod
    async def get_by_external_id(self, external_id: str) -> Optional[PaymentIntent]:
        pass

    @abstractmethod
    async def list_by_order_id(self, order_id: str) -> List[PaymentIntent]:
        pass

    @abstractmethod
    async def list_by_customer_id(self, customer_id: str) -> List[PaymentIntent]:
        pass

    @abstractmethod
    async def list_by_status(self, status: IntentStatus) -> List[PaymentIntent]:
        pass

    @abstractmethod
    async def delete(self, intent_id: str) -> bool:
        pass

    # Stored payment methods
    @abstractmethod
    async def create_payment_method(self, method: StoredPaymentMethod) -> StoredPaymentMethod:
        pass

    @abstractmethod
    async def update_payment_method(self, method: StoredPaymentMethod) -> StoredPaymentMethod:
        pass

    @abstractmethod
    async def get_payment_method(self, method_id: str) -> Optional[StoredPaymentMethod]:
        pass

    @abstractmethod
    async def list_payment_methods_by_customer(self, customer_id: str) -> List[StoredPaymentMethod]:
        pass

    @abstractmethod
    async def delete_payment_method(self, method_id: str) -> bool:
        pass

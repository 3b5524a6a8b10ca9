"""
In-memory payment intent repository.

Stores deep copies so callers never alias stored state. Updates are
optimistic: the caller's `version` must match the stored one, checked and
bumped under a lock.
"""
from __future__ import annotations

import asyncio
import copy
from typing import List, Optional

from core.logging_config import get_logger
from domain.payment.entity import IntentStatus, PaymentIntent, StoredPaymentMethod
from domain.payment.exceptions import ConflictError, NotFoundError, ValidationError
from domain.payment.repository import PaymentIntentRepository


logger = get_logger(__name__)


class InMemoryPaymentIntentRepository(PaymentIntentRepository):
    def __init__(self) -> None:
        self._intents: dict[str, PaymentIntent] = {}
        self._methods: dict[str, StoredPaymentMethod] = {}
        self._lock = asyncio.Lock()

    async def create(self, intent: PaymentIntent) -> PaymentIntent:
        async with self._lock:
            if intent.id in self._intents:
                raise ValidationError(f"Payment intent {intent.id} already exists", field="id")
            intent.version = 1
            self._intents[intent.id] = copy.deepcopy(intent)
        logger.info(
            "payment_intent_created",
            intent_id=intent.id,
            order_id=intent.order_id,
            method_id=intent.method_id,
        )
        return copy.deepcopy(intent)

    async def update(self, intent: PaymentIntent) -> PaymentIntent:
        async with self._lock:
            stored = self._intents.get(intent.id)
            if stored is None:
                raise NotFoundError("Payment intent not found", details={"reference": intent.id})
            if stored.version != intent.version:
                logger.warning(
                    "payment_intent_version_conflict",
                    intent_id=intent.id,
                    expected=intent.version,
                    actual=stored.version,
                )
                raise ConflictError(intent.id, expected=intent.version, actual=stored.version)
            intent.version += 1
            self._intents[intent.id] = copy.deepcopy(intent)
        logger.info("payment_intent_updated", intent_id=intent.id, status=intent.status.value, version=intent.version)
        return copy.deepcopy(intent)

    async def get_by_id(self, intent_id: str) -> Optional[PaymentIntent]:
        intent = self._intents.get(intent_id)
        return copy.deepcopy(intent) if intent else None

    async def get_by_external_id(self, external_id: str) -> Optional[PaymentIntent]:
        for intent in self._intents.values():
            if intent.external_id == external_id:
                return copy.deepcopy(intent)
        return None

    async def list_by_order_id(self, order_id: str) -> List[PaymentIntent]:
        return [copy.deepcopy(i) for i in self._intents.values() if i.order_id == order_id]

    async def list_by_customer_id(self, customer_id: str) -> List[PaymentIntent]:
        return [copy.deepcopy(i) for i in self._intents.values() if i.customer_id == customer_id]

    async def list_by_status(self, status: IntentStatus) -> List[PaymentIntent]:
        return [copy.deepcopy(i) for i in self._intents.values() if i.status is IntentStatus(status)]

    async def delete(self, intent_id: str) -> bool:
        async with self._lock:
            return self._intents.pop(intent_id, None) is not None

    async def create_payment_method(self, method: StoredPaymentMethod) -> StoredPaymentMethod:
        async with self._lock:
            if method.id in self._methods:
                raise ValidationError(f"Payment method {method.id} already exists", field="id")
            self._methods[method.id] = copy.deepcopy(method)
        return copy.deepcopy(method)

    async def update_payment_method(self, method: StoredPaymentMethod) -> StoredPaymentMethod:
        async with self._lock:
            if method.id not in self._methods:
                raise NotFoundError("Stored payment method not found", details={"reference": method.id})
            self._methods[method.id] = copy.deepcopy(method)
        return copy.deepcopy(method)

    async def get_payment_method(self, method_id: str) -> Optional[StoredPaymentMethod]:
        method = self._methods.get(method_id)
        return copy.deepcopy(method) if method else None

    async def list_payment_methods_by_customer(self, customer_id: str) -> List[StoredPaymentMethod]:
        return [copy.deepcopy(m) for m in self._methods.values() if m.customer_id == customer_id]

    async def delete_payment_method(self, method_id: str) -> bool:
        async with self._lock:
            return self._methods.pop(method_id, None) is not None

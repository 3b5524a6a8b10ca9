"""Pytest fixtures shared by the payment tests.

Every test gets a fresh composition wired to a fixed clock and a sequential
id generator, so ids and timestamps are deterministic.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.composition import build_payment_composition
from core.settings import PaymentSettings


class FakeClock:
    def __init__(self, start: datetime = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def timestamp(self) -> int:
        return int(self.current.timestamp() * 1000)

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class SequentialIdGenerator:
    def __init__(self) -> None:
        self.counter = 0

    def new_id(self) -> str:
        self.counter += 1
        return f"{self.counter:04d}"


VALID_CARD = {
    "cardNumber": "4242 4242 4242 4242",
    "expiry": "12/30",
    "cvv": "123",
    "cardholder": "Jane Doe",
}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def payment_settings() -> PaymentSettings:
    return PaymentSettings(provider_call_timeout=1.0)


@pytest.fixture
def composition(payment_settings, clock, ids):
    return build_payment_composition(payment_settings, clock=clock, ids=ids)


@pytest.fixture
def client(composition):
    from main import create_app

    with TestClient(create_app(composition)) as c:
        yield c


@pytest.fixture
def card_fields() -> dict:
    return dict(VALID_CARD)

"""
Clock and id-generator ports.

The payment core never calls datetime.now() or uuid4() itself; both are
injected so business logic stays deterministic under test.
"""
from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime:
        """Current time, timezone-aware UTC"""
        ...

    def timestamp(self) -> int:
        """Milliseconds since the epoch"""
        ...


@runtime_checkable
class IdGenerator(Protocol):
    def new_id(self) -> str: ...

"""
System clock and uuid-based id generator, the production implementations of
the Clock and IdGenerator ports.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def timestamp(self) -> int:
        return int(self.now().timestamp() * 1000)


class UuidGenerator:
    def new_id(self) -> str:
        return uuid.uuid4().hex

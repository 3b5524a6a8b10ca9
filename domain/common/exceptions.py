"""Business exception base shared by domain and infrastructure.

The core layer only maps these to HTTP responses; the domain never imports
from core.
"""
from __future__ import annotations

from typing import Optional


class BusinessException(Exception):
    """Base class for every expected, caller-visible failure."""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)

"""
Business codes shared by the core and API layers.

Generic codes live here as `BusinessCode`; payment failures carry the more
specific codes in `shared.codes.payment_codes`.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Codes for failures raised outside the payment domain (request parsing, HTTP, crashes)."""

    PARAM_ERROR = 10000
    PARAM_VALIDATION_ERROR = 10003
    NOT_FOUND = 20006
    CONFLICT = 20007
    SYSTEM_ERROR = 40000
    SERVICE_UNAVAILABLE = 40003


__all__ = ["BusinessCode"]

"""
Payment specific codes and error kinds.
"""
from __future__ import annotations

from enum import Enum, IntEnum


class PaymentCode(IntEnum):
    # Generic success
    SUCCESS = 0

    # Payment input/state errors (6xxxx)
    VALIDATION_ERROR = 60000
    INTENT_NOT_FOUND = 60001
    METHOD_NOT_FOUND = 60002
    UNSUPPORTED_OPERATION = 60003
    CONFIGURATION_ERROR = 60004
    VERSION_CONFLICT = 60005

    # Provider/Network errors (61xxx)
    PROVIDER_ERROR = 61000
    PROVIDER_RECOVERABLE = 61001
    PROVIDER_TIMEOUT = 61002


class PaymentErrorKind(str, Enum):
    """Closed set of failure kinds callers can branch on."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    CONFIGURATION = "configuration"
    PROVIDER = "provider"
    CONFLICT = "conflict"


# Error kind -> HTTP status used by the API exception handler
KIND_TO_HTTP_STATUS = {
    PaymentErrorKind.VALIDATION: 400,
    PaymentErrorKind.NOT_FOUND: 404,
    PaymentErrorKind.UNSUPPORTED_OPERATION: 422,
    PaymentErrorKind.CONFIGURATION: 400,
    PaymentErrorKind.PROVIDER: 502,
    PaymentErrorKind.CONFLICT: 409,
}

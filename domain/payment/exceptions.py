"""
Payment error taxonomy.

Every error carries a `kind` from PaymentErrorKind so callers can branch on
the failure category instead of matching message text.
"""
from __future__ import annotations

from typing import Optional

from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode, PaymentErrorKind


class PaymentError(BusinessException):
    kind: PaymentErrorKind = PaymentErrorKind.VALIDATION


class ValidationError(PaymentError):
    """Bad or missing input, or an operation invalid for the current state."""

    kind = PaymentErrorKind.VALIDATION

    def __init__(self, message: str, *, field: str | None = None, details: Optional[dict] = None):
        super().__init__(
            code=PaymentCode.VALIDATION_ERROR,
            message=message,
            error_type="ValidationError",
            details=details,
            field=field,
        )


class NotFoundError(PaymentError):
    kind = PaymentErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str,
        *,
        code: int = PaymentCode.INTENT_NOT_FOUND,
        details: Optional[dict] = None,
    ):
        super().__init__(code=code, message=message, error_type="NotFoundError", details=details)


class PaymentIntentNotFoundError(NotFoundError):
    def __init__(self, reference: str):
        super().__init__(
            "Payment intent not found",
            code=PaymentCode.INTENT_NOT_FOUND,
            details={"reference": reference},
        )


class PaymentMethodNotFoundError(NotFoundError):
    def __init__(self, method_id: str):
        super().__init__(
            "Payment method not found",
            code=PaymentCode.METHOD_NOT_FOUND,
            details={"method_id": method_id},
        )


class UnsupportedOperationError(PaymentError):
    """A provider was asked for an operation it does not implement."""

    kind = PaymentErrorKind.UNSUPPORTED_OPERATION

    def __init__(self, operation: str, *, provider: str):
        super().__init__(
            code=PaymentCode.UNSUPPORTED_OPERATION,
            message=f"Unsupported operation '{operation}' for provider '{provider}'",
            error_type="UnsupportedOperationError",
            details={"operation": operation, "provider": provider},
        )
        self.operation = operation
        self.provider = provider


class ConfigurationError(PaymentError):
    kind = PaymentErrorKind.CONFIGURATION

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(
            code=PaymentCode.CONFIGURATION_ERROR,
            message=message,
            error_type="ConfigurationError",
            details=details,
        )


class ProviderError(PaymentError):
    """Wraps a provider-specific failure and keeps its original message."""

    kind = PaymentErrorKind.PROVIDER

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        recoverable: bool = False,
        provider_code: str | None = None,
        details: Optional[dict] = None,
        code: int | None = None,
    ):
        full_details = {"provider": provider, "provider_code": provider_code, "recoverable": recoverable}
        if details:
            full_details.update(details)
        super().__init__(
            code=code or (PaymentCode.PROVIDER_RECOVERABLE if recoverable else PaymentCode.PROVIDER_ERROR),
            message=message,
            error_type="ProviderError",
            details=full_details,
        )
        self.provider = provider
        self.recoverable = recoverable


class ProviderTimeoutError(ProviderError):
    def __init__(self, operation: str, *, provider: str, timeout: float):
        super().__init__(
            f"Provider call '{operation}' timed out after {timeout}s",
            provider=provider,
            recoverable=True,
            details={"operation": operation, "timeout": timeout},
            code=PaymentCode.PROVIDER_TIMEOUT,
        )


class ConflictError(PaymentError):
    """Optimistic concurrency check failed on a payment intent update."""

    kind = PaymentErrorKind.CONFLICT

    def __init__(self, intent_id: str, *, expected: int, actual: int):
        super().__init__(
            code=PaymentCode.VERSION_CONFLICT,
            message="Payment intent was modified concurrently",
            error_type="ConflictError",
            details={"intent_id": intent_id, "expected_version": expected, "actual_version": actual},
        )

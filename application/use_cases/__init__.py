from .capture_payment import CapturePaymentUseCase
from .process_payment import ProcessPaymentUseCase
from .refund_payment import RefundPaymentUseCase

__all__ = [
    "ProcessPaymentUseCase",
    "CapturePaymentUseCase",
    "RefundPaymentUseCase",
]

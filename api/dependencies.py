"""
API dependencies - access to the payment composition root
"""
from fastapi import Request

from api.composition import PaymentComposition


async def get_payment_composition(request: Request) -> PaymentComposition:
    """The process-wide composition stored on `app.state` by `create_app`."""
    return request.app.state.payments

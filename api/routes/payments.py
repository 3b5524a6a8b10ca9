"""
Payments API routes.

Thin layer over the use-cases: resolve the provider through the composition
root, run the use-case and wrap the result in the response envelope.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.composition import PaymentComposition
from api.dependencies import get_payment_composition
from application.dtos.payments import (
    CapturePayment,
    ProcessPayment,
    RefundPayment,
    ValidateFields,
)
from application.use_cases.process_payment import ensure_method_available
from core.logging_config import get_logger
from core.response import success_response
from domain.payment.exceptions import PaymentIntentNotFoundError, PaymentMethodNotFoundError
from domain.payment.validation import validate_contract_fields


router = APIRouter(prefix="/payments", tags=["Payments"])
logger = get_logger(__name__)


@router.get("/methods")
async def list_payment_methods(payments: PaymentComposition = Depends(get_payment_composition)):
    """Enabled payment methods with their checkout fields."""
    methods = [contract.to_dict() for contract in payments.list_contracts()]
    return success_response(data={"methods": methods}, count=len(methods))


@router.get("/methods/{method_id}")
async def get_payment_method(method_id: str, payments: PaymentComposition = Depends(get_payment_composition)):
    contract = payments.get_contract(method_id)
    if contract is None:
        raise PaymentMethodNotFoundError(method_id)
    return success_response(data={"contract": contract.to_dict()})


@router.post("/methods/{method_id}/validate")
async def validate_payment_fields(
    method_id: str,
    req: ValidateFields,
    payments: PaymentComposition = Depends(get_payment_composition),
):
    """Check checkout fields against the method's field rules without charging."""
    contract = payments.get_contract(method_id)
    if contract is None:
        raise PaymentMethodNotFoundError(method_id)
    errors = validate_contract_fields(contract, req.fields)
    return success_response(data={"valid": not errors, "errors": errors})


@router.post("/process")
async def process_payment(req: ProcessPayment, payments: PaymentComposition = Depends(get_payment_composition)):
    ensure_method_available(payments.context.registry, req.method_id)
    use_case = payments.make_process_payment_use_case(req.method_id)
    result = await use_case.execute(req)
    return success_response(data={"result": result.to_dict()})


@router.post("/capture")
async def capture_payment(req: CapturePayment, payments: PaymentComposition = Depends(get_payment_composition)):
    intent = await payments.find_intent(req.intent_id)
    if intent is None:
        raise PaymentIntentNotFoundError(req.intent_id)
    use_case = payments.make_capture_payment_use_case(intent.method_id)
    result = await use_case.execute(req.model_copy(update={"intent_id": intent.id}))
    return success_response(data={"result": result.to_dict()})


@router.post("/refund")
async def refund_payment(req: RefundPayment, payments: PaymentComposition = Depends(get_payment_composition)):
    intent = await payments.find_intent(req.payment_id)
    if intent is None:
        raise PaymentIntentNotFoundError(req.payment_id)
    use_case = payments.make_refund_payment_use_case(intent.method_id)
    result = await use_case.execute(req)
    return success_response(data={"result": result.to_dict()})


@router.get("/intents/{intent_id}")
async def get_payment_intent(intent_id: str, payments: PaymentComposition = Depends(get_payment_composition)):
    intent = await payments.find_intent(intent_id)
    if intent is None:
        raise PaymentIntentNotFoundError(intent_id)
    return success_response(data={"intent": intent.to_dict()})

"""
Exception to HTTP mapping and global exception handlers
"""
import traceback
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status as http_status
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging_config import get_logger
from domain.common.exceptions import BusinessException
from domain.payment.exceptions import PaymentError
from shared.codes import BusinessCode
from shared.codes.payment_codes import KIND_TO_HTTP_STATUS

from .response import error_response


logger = get_logger(__name__)


_HTTP_STATUS_TO_BUSINESS_CODE = {
    400: BusinessCode.PARAM_ERROR,
    404: BusinessCode.NOT_FOUND,
    409: BusinessCode.CONFLICT,
    500: BusinessCode.SYSTEM_ERROR,
    503: BusinessCode.SERVICE_UNAVAILABLE,
}


def http_status_for(exc: BusinessException) -> int:
    """Payment errors map by kind; any other business error is a 400."""
    if isinstance(exc, PaymentError):
        return KIND_TO_HTTP_STATUS.get(exc.kind, http_status.HTTP_400_BAD_REQUEST)
    return http_status.HTTP_400_BAD_REQUEST


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def register_exception_handlers(app: FastAPI):
    """
    Register the global exception handlers

    Args:
        app: FastAPI application
    """

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """Business errors"""
        status_code = http_status_for(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "business_exception",
            error_type=exc.error_type,
            code=int(exc.code),
            status_code=status_code,
            error=exc.message,
        )
        content = error_response(
            code=exc.code,
            message=exc.message,
            error_type=exc.error_type,
            details=exc.details,
            field=exc.field,
            request_id=_request_id(request),
        )
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Request validation errors"""
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        # loc starts with body/query/path
        field = ".".join(str(loc) for loc in first_error.get("loc", [])[1:]) or None
        content = error_response(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=f"Validation failed: {first_error.get('msg', 'unknown')}",
            error_type="ValidationError",
            details={"errors": [
                {"loc": [str(p) for p in e.get("loc", [])], "msg": e.get("msg"), "type": e.get("type")}
                for e in errors
            ]},
            field=field,
            request_id=_request_id(request),
        )
        return JSONResponse(status_code=http_status.HTTP_400_BAD_REQUEST, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP errors"""
        content = error_response(
            code=_HTTP_STATUS_TO_BUSINESS_CODE.get(exc.status_code, BusinessCode.SYSTEM_ERROR),
            message=str(exc.detail),
            error_type="HTTPError",
            details={"status_code": exc.status_code},
            request_id=_request_id(request),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Anything not handled above"""
        request_id = _request_id(request)
        details = None
        if app.debug:
            details = {"exception": str(exc), "traceback": traceback.format_exc()}

        logger.error("unhandled_exception", request_id=request_id, error=str(exc), exc_info=True)

        content = error_response(
            code=BusinessCode.SYSTEM_ERROR,
            message="Internal server error",
            error_type="SystemError",
            details=details,
            request_id=request_id,
        )
        return JSONResponse(status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

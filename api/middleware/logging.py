"""
Request/response logging middleware.
Logs every HTTP request and response with its duration; payment secrets are masked.
"""
import json
import time
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.config import settings
from core.logging_config import get_logger


logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware

    Logs request start and completion with duration. JSON bodies are logged
    only when enabled, truncated and with payment credentials masked.
    """

    SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

    # Masked in logged bodies (compared lowercase)
    SENSITIVE_FIELDS = {
        "cvv",
        "vpa",
        "expiry",
        "secret",
        "secret_key",
        "secretkey",
        "api_key",
        "apikey",
        "token",
    }
    # Only the last four digits survive
    PARTIAL_FIELDS = {"cardnumber", "card_number"}

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.enable_body_log_default: bool = settings.LOG_REQUEST_BODY_ENABLE_BY_DEFAULT
        self.max_body_log_bytes: int = settings.LOG_REQUEST_BODY_MAX_BYTES

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        request_info = await self._get_request_info(request)
        logger.info("request_started", **request_info)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request_failed",
                duration=time.perf_counter() - start_time,
                error=str(exc),
                error_type=type(exc).__name__,
                **request_info,
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - start_time
        self._log_response(response, duration, request_info)
        response.headers["X-Process-Time"] = f"{duration:.3f}"
        return response

    async def _get_request_info(self, request: Request) -> dict:
        info = {
            "http_method": request.method,
            "http_path": request.url.path,
            "query_params": dict(request.query_params),
        }
        if request.method in ("POST", "PUT", "PATCH") and self._should_log_body(request):
            body_snippet = await self._extract_and_sanitize_body(request)
            if body_snippet is not None:
                info["body"] = body_snippet
            else:
                info["has_body"] = True

        user_agent = request.headers.get("User-Agent")
        if user_agent:
            info["user_agent"] = user_agent
        return info

    def _should_log_body(self, request: Request) -> bool:
        # X-Log-Body: true/false overrides the default
        header = (request.headers.get("X-Log-Body") or "").lower()
        if header in {"true", "1", "yes"}:
            return True
        if header in {"false", "0", "no"}:
            return False
        return bool(self.enable_body_log_default and settings.DEBUG)

    async def _extract_and_sanitize_body(self, request: Request) -> Any:
        body = await request.body()
        if not body:
            return None

        content_type = request.headers.get("content-type", "").lower()
        if "application/json" not in content_type:
            return None

        snippet = body[: self.max_body_log_bytes].decode("utf-8", errors="ignore")
        try:
            parsed = json.loads(snippet)
        except ValueError:
            # Truncated or malformed; never log raw text that may hold card data
            return {"truncated": len(body) > self.max_body_log_bytes}
        return self.sanitize(parsed)

    @classmethod
    def sanitize(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: cls._mask(k, v) for k, v in data.items()}
        if isinstance(data, list):
            return [cls.sanitize(v) for v in data]
        return data

    @classmethod
    def _mask(cls, key: str, value: Any) -> Any:
        lowered = str(key).lower()
        if lowered in cls.SENSITIVE_FIELDS:
            return "***"
        if lowered in cls.PARTIAL_FIELDS:
            digits = "".join(ch for ch in str(value) if ch.isdigit())
            return f"****{digits[-4:]}" if len(digits) >= 4 else "***"
        return cls.sanitize(value)

    def _log_response(self, response: Response, duration: float, request_info: dict):
        status_code = response.status_code
        log_data = {"status_code": status_code, "duration": duration, **request_info}
        if status_code < 400:
            logger.info("request_completed", **log_data)
        elif status_code < 500:
            logger.warning("request_client_error", **log_data)
        else:
            logger.error("request_server_error", **log_data)

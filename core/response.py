"""
Response envelope shared by every endpoint
"""
from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, field_serializer


T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Error payload of a failed response"""
    type: str
    message: str
    code: int
    field: Optional[str] = None
    details: Optional[dict] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime) -> str:
        """UTC ISO8601 with a trailing Z"""
        ts = timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        else:
            ts = ts.astimezone(timezone.utc)
        return ts.isoformat().replace("+00:00", "Z")


class Response(BaseModel, Generic[T]):
    """Response envelope"""
    success: bool
    data: Optional[T] = None
    count: Optional[int] = None
    error: Optional[ErrorDetail] = None

    def render(self) -> dict:
        """JSON-ready dict; absent top-level members are left out."""
        payload = self.model_dump(mode="json")
        return {k: v for k, v in payload.items() if v is not None or (k == "data" and self.success)}


def success_response(data: Any = None, count: Optional[int] = None) -> dict:
    """
    Build a success envelope

    Args:
        data: payload
        count: number of items for list responses
    """
    return Response(success=True, data=data, count=count).render()


def error_response(
    code: int,
    message: str,
    error_type: str = "BusinessError",
    details: Optional[dict] = None,
    field: Optional[str] = None,
    request_id: Optional[str] = None,
) -> dict:
    """
    Build an error envelope

    Args:
        code: business code
        message: error message
        error_type: error class name
        details: extra context
        field: offending field, if any
        request_id: request id
    """
    return Response(
        success=False,
        error=ErrorDetail(
            type=error_type,
            message=message,
            code=int(code),
            details=details,
            field=field,
            request_id=request_id,
        ),
    ).render()

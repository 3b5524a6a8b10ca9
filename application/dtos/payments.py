"""
Payment DTOs (Pydantic v2) used at application boundaries.

Payloads arrive in camelCase (`methodId`, `orderId`); snake_case names are
accepted as well.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.types import condecimal


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _upper_currency(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    u = v.strip().upper()
    if len(u) != 3 or not u.isalpha():
        raise ValueError("currency must be ISO-4217 alpha-3")
    return u


class ProcessPayment(_CamelModel):
    method_id: str = Field(min_length=1)
    amount: condecimal(gt=0)  # type: ignore[valid-type]
    # Falls back to the configured default currency when omitted
    currency: Optional[str] = None
    fields: dict[str, Any] = Field(default_factory=dict)
    order_id: str = Field(min_length=1)
    customer_id: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, v: Optional[str]) -> Optional[str]:
        return _upper_currency(v)


class CapturePayment(_CamelModel):
    intent_id: str = Field(min_length=1)
    amount: Optional[condecimal(gt=0)] = None  # type: ignore[valid-type]
    currency: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, v: Optional[str]) -> Optional[str]:
        return _upper_currency(v)


class RefundPayment(_CamelModel):
    payment_id: str = Field(min_length=1)
    amount: condecimal(gt=0)  # type: ignore[valid-type]
    currency: Optional[str] = None
    reason: Optional[str] = "Refund requested"

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, v: Optional[str]) -> Optional[str]:
        return _upper_currency(v)


class ValidateFields(_CamelModel):
    fields: dict[str, Any] = Field(default_factory=dict)

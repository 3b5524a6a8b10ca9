"""
Payment-related settings using pydantic-settings v2 with nested env keys.

Only the composition root reads these; providers receive credentials through
their constructors.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StripeSettings(BaseModel):
    secret_key: str = "sk_test_mock"
    receipt_base_url: str = "https://stripe.com/receipts"


class UpiSettings(BaseModel):
    api_key: str = "upi_mock_key"
    receipt_base_url: str = "https://upi.com/receipts"


class PaymentSettings(BaseSettings):
    default_currency: str = Field(default="USD", validation_alias="PAYMENT__DEFAULT_CURRENCY")
    # Comma separated method ids registered as disabled
    disabled_methods: str = Field(
        default="paypal,apple_pay,google_pay",
        validation_alias="PAYMENT__DISABLED_METHODS",
    )
    # Upper bound for a single provider operation in seconds; 0 disables it
    provider_call_timeout: float = Field(default=5.0, validation_alias="PAYMENT__PROVIDER_CALL_TIMEOUT")

    stripe: StripeSettings = Field(default_factory=StripeSettings)
    upi: UpiSettings = Field(default_factory=UpiSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    @property
    def disabled_method_ids(self) -> frozenset[str]:
        return frozenset(item.strip() for item in self.disabled_methods.split(",") if item.strip())

    @property
    def call_timeout(self) -> Optional[float]:
        return self.provider_call_timeout if self.provider_call_timeout > 0 else None


payment_settings = PaymentSettings()

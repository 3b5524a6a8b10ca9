"""
Application settings
"""
import json
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings, read from the environment and .env."""

    # Basics
    PROJECT_NAME: str = Field(default="Grocery Payments API")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    API_PREFIX: str = Field(default="/api/v1")

    # CORS
    CORS_ORIGINS: list = Field(default=["http://localhost:3000", "http://localhost:8000"])

    # Logging and request body capture
    LOG_LEVEL: Optional[str] = Field(default=None, description="Overrides the DEBUG derived level")
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = Field(default=True)
    LOG_REQUEST_BODY_MAX_BYTES: int = Field(default=2048)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """Accept either a JSON list or a comma separated string."""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                try:
                    arr = json.loads(s)
                except ValueError:
                    arr = None
                if isinstance(arr, list):
                    return arr
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s] if s else []
        return v


settings = Settings()

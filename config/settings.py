from __future__ import annotations

from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Core
    ENVIRONMENT: str = Field(default="production")
    LOG_LEVEL: str = Field(default="INFO")
    FIRESTORE_PROJECT_ID: str = Field(default="")

    # Where provider accounts come from: "env" (this file) | "firestore" (integrations collection)
    ACCOUNT_STORE: str = Field(default="env")

    # Twilio account (used when ACCOUNT_STORE=env)
    TWILIO_ENABLED: bool = Field(default=False)
    TWILIO_ACCOUNT_SID: str = Field(default="")
    TWILIO_AUTH_TOKEN: str = Field(default="")
    TWILIO_ACCOUNT_API_BASE_URL: Optional[str] = Field(default=None)

    # Default sender for the HTTP surface when the request omits one
    TWILIO_FROM_NUMBER: str = Field(default="")

    # Process-level overrides (None = fall through to built-in defaults)
    TWILIO_API_BASE_URL: Optional[str] = Field(default=None)
    TWILIO_SMS_SEND_TIMEOUT: Optional[float] = Field(default=None)


class SettingsConfig:
    """Key/value view over Settings; the process config the sender reads overrides from."""

    def __init__(self, source: Optional[Settings] = None):
        self.source = source or settings

    def get(self, key: str, default: Any = None) -> Any:
        value = getattr(self.source, key, None)
        return default if value is None else value


settings = Settings()

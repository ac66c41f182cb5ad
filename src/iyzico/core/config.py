"""Configuration loaders for the iyzico client.

Leverages pydantic-settings to hydrate credentials and transport options from
environment variables (``IYZICO_*``), an optional ``.env`` file, or defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SANDBOX_BASE_URL = "https://sandbox-api.iyzipay.com"
PRODUCTION_BASE_URL = "https://api.iyzipay.com"


class IyzicoSettings(BaseSettings):
    """Credentials and transport options for talking to iyzico."""

    model_config = SettingsConfigDict(
        env_prefix="iyzico_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = ""
    secret_key: str = Field(default="", repr=False)
    base_url: str = SANDBOX_BASE_URL
    timeout_seconds: float = Field(default=30.0, ge=0.1)
    merchant_id: str | None = None
    log_level: str = "INFO"

    @property
    def is_sandbox(self) -> bool:
        return "sandbox" in self.base_url

    @classmethod
    def load(cls, **kwargs: Any) -> IyzicoSettings:
        """Helper factory that mirrors BaseSettings semantics."""

        return cls(**kwargs)

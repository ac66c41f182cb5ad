"""Configuration, errors and logging shared by the iyzico client."""

from . import config, errors
from .config import PRODUCTION_BASE_URL, SANDBOX_BASE_URL, IyzicoSettings
from .errors import (
    IyzicoConnectionError,
    IyzicoError,
    IyzicoParseError,
    IyzicoTimeoutError,
    SignatureComputationError,
    WebhookPayloadError,
)
from .logging import configure_logging, get_logger

__all__ = [
    "config",
    "errors",
    "configure_logging",
    "get_logger",
    "IyzicoSettings",
    "SANDBOX_BASE_URL",
    "PRODUCTION_BASE_URL",
    "IyzicoError",
    "IyzicoConnectionError",
    "IyzicoTimeoutError",
    "IyzicoParseError",
    "SignatureComputationError",
    "WebhookPayloadError",
]

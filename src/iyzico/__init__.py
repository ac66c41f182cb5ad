"""Python client for the iyzico payment API.

Outbound requests are signed with the ``IYZWSv2`` authorization scheme;
responses and webhook deliveries can be checked against their HMAC-SHA256
signatures with the helpers in :mod:`iyzico.signing`.
"""

from __future__ import annotations

from .core import (
    IyzicoConnectionError,
    IyzicoError,
    IyzicoParseError,
    IyzicoSettings,
    IyzicoTimeoutError,
    SignatureComputationError,
    WebhookPayloadError,
)
from .client import IyzicoClient
from .signing import (
    build_auth_header,
    format_price,
    generate_test_signature,
    strip_trailing_zeros,
    verify_callback_signature,
    verify_checkout_form_init_signature,
    verify_checkout_form_retrieve_signature,
    verify_payment_signature,
    verify_refund_signature,
    verify_three_ds_auth_signature,
    verify_three_ds_init_signature,
    verify_webhook,
)

__all__ = [
    "__version__",
    "IyzicoClient",
    "IyzicoSettings",
    "IyzicoError",
    "IyzicoConnectionError",
    "IyzicoTimeoutError",
    "IyzicoParseError",
    "SignatureComputationError",
    "WebhookPayloadError",
    "build_auth_header",
    "format_price",
    "strip_trailing_zeros",
    "verify_payment_signature",
    "verify_three_ds_auth_signature",
    "verify_three_ds_init_signature",
    "verify_callback_signature",
    "verify_checkout_form_init_signature",
    "verify_checkout_form_retrieve_signature",
    "verify_refund_signature",
    "verify_webhook",
    "generate_test_signature",
]

__version__ = "0.1.0"

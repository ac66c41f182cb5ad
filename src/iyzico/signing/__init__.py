"""Request signing and signature verification for the iyzico API."""

from .amounts import (
    PRICE_FIELDS,
    format_price,
    format_request_prices,
    render_decimal,
    strip_trailing_zeros,
)
from .auth import (
    AUTHORIZATION_HEADER,
    AUTHORIZATION_SCHEME,
    RANDOM_KEY_HEADER,
    RequestSigner,
    build_auth_header,
    extract_uri_path,
    generate_random_key,
)
from .crypto import constant_time_equal, hmac_hex
from .responses import (
    CALLBACK_FIELDS,
    CHECKOUT_FORM_INIT_FIELDS,
    CHECKOUT_FORM_RETRIEVE_FIELDS,
    PAYMENT_FIELDS,
    REFUND_FIELDS,
    THREE_DS_INIT_FIELDS,
    SignedFields,
    build_signature_message,
    compute_response_signature,
    verify_callback_signature,
    verify_checkout_form_init_signature,
    verify_checkout_form_retrieve_signature,
    verify_payment_signature,
    verify_refund_signature,
    verify_response_signature,
    verify_three_ds_auth_signature,
    verify_three_ds_init_signature,
)
from .webhooks import (
    WEBHOOK_SIGNATURE_HEADER,
    DirectWebhookPayload,
    HostedPageWebhookPayload,
    SubscriptionWebhookPayload,
    WebhookPayload,
    WebhookPayloadBase,
    WebhookShape,
    generate_test_signature,
    parse_webhook_payload,
    verify_webhook,
)

__all__ = [
    "hmac_hex",
    "constant_time_equal",
    "render_decimal",
    "format_price",
    "strip_trailing_zeros",
    "format_request_prices",
    "PRICE_FIELDS",
    "AUTHORIZATION_HEADER",
    "AUTHORIZATION_SCHEME",
    "RANDOM_KEY_HEADER",
    "RequestSigner",
    "build_auth_header",
    "extract_uri_path",
    "generate_random_key",
    "SignedFields",
    "PAYMENT_FIELDS",
    "THREE_DS_INIT_FIELDS",
    "CALLBACK_FIELDS",
    "CHECKOUT_FORM_INIT_FIELDS",
    "CHECKOUT_FORM_RETRIEVE_FIELDS",
    "REFUND_FIELDS",
    "build_signature_message",
    "compute_response_signature",
    "verify_response_signature",
    "verify_payment_signature",
    "verify_three_ds_auth_signature",
    "verify_three_ds_init_signature",
    "verify_callback_signature",
    "verify_checkout_form_init_signature",
    "verify_checkout_form_retrieve_signature",
    "verify_refund_signature",
    "WEBHOOK_SIGNATURE_HEADER",
    "WebhookShape",
    "WebhookPayload",
    "WebhookPayloadBase",
    "DirectWebhookPayload",
    "HostedPageWebhookPayload",
    "SubscriptionWebhookPayload",
    "parse_webhook_payload",
    "verify_webhook",
    "generate_test_signature",
]

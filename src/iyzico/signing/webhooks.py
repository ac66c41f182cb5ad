"""Signature verification for iyzico webhook deliveries.

iyzico posts three payload shapes with no explicit discriminator:

* direct payments (non-3DS and 3DS),
* hosted payment pages (checkout form, pay with iyzico), carrying ``token``,
* subscription events, carrying ``subscriptionReferenceCode``.

The ``X-IYZ-SIGNATURE-V3`` header holds the hex HMAC of a plain concatenation
of payload fields. Unlike response signatures there is no separator, and the
secret key is itself part of the message.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from iyzico.core.errors import WebhookPayloadError

from .amounts import render_decimal
from .crypto import constant_time_equal, hmac_hex

logger = logging.getLogger(__name__)

WEBHOOK_SIGNATURE_HEADER = "X-IYZ-SIGNATURE-V3"


class WebhookShape(str, Enum):
    """Webhook payload families, each with its own signing rule."""

    DIRECT = "direct"
    HOSTED_PAGE = "hosted_page"
    SUBSCRIPTION = "subscription"


class WebhookPayloadBase(BaseModel):
    """Fields shared by every webhook shape."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    shape: ClassVar[WebhookShape]

    iyzi_event_type: str

    @field_validator("*", mode="before")
    @classmethod
    def render_numeric_ids(cls, value: Any) -> Any:
        if isinstance(value, int | float | Decimal) and not isinstance(value, bool):
            return render_decimal(value)
        return value

    @abstractmethod
    def signing_message(self, secret_key: str, merchant_id: str | None = None) -> str | None:
        """Return the signed message, or ``None`` when it cannot be built."""


class DirectWebhookPayload(WebhookPayloadBase):
    shape: ClassVar[WebhookShape] = WebhookShape.DIRECT

    payment_id: str
    payment_conversation_id: str
    status: str
    merchant_id: str | None = None

    def signing_message(self, secret_key: str, merchant_id: str | None = None) -> str | None:
        return (
            secret_key
            + self.iyzi_event_type
            + self.payment_id
            + self.payment_conversation_id
            + self.status
        )


class HostedPageWebhookPayload(WebhookPayloadBase):
    shape: ClassVar[WebhookShape] = WebhookShape.HOSTED_PAGE

    iyzi_payment_id: str
    token: str
    payment_conversation_id: str
    status: str
    merchant_id: str | None = None

    def signing_message(self, secret_key: str, merchant_id: str | None = None) -> str | None:
        return (
            secret_key
            + self.iyzi_event_type
            + self.iyzi_payment_id
            + self.token
            + self.payment_conversation_id
            + self.status
        )


class SubscriptionWebhookPayload(WebhookPayloadBase):
    """Subscription event; the merchant id is signed but never delivered in the body."""

    shape: ClassVar[WebhookShape] = WebhookShape.SUBSCRIPTION

    subscription_reference_code: str
    order_reference_code: str
    customer_reference_code: str

    def signing_message(self, secret_key: str, merchant_id: str | None = None) -> str | None:
        if not merchant_id:
            return None
        return (
            merchant_id
            + secret_key
            + self.iyzi_event_type
            + self.subscription_reference_code
            + self.order_reference_code
            + self.customer_reference_code
        )


def _detect_shape(raw: Any) -> str:
    if isinstance(raw, WebhookPayloadBase):
        return raw.shape.value
    keys = raw.keys() if isinstance(raw, Mapping) else ()
    if "subscriptionReferenceCode" in keys or "subscription_reference_code" in keys:
        return WebhookShape.SUBSCRIPTION.value
    if "token" in keys:
        return WebhookShape.HOSTED_PAGE.value
    return WebhookShape.DIRECT.value


WebhookPayload = Annotated[
    Union[
        Annotated[DirectWebhookPayload, Tag(WebhookShape.DIRECT.value)],
        Annotated[HostedPageWebhookPayload, Tag(WebhookShape.HOSTED_PAGE.value)],
        Annotated[SubscriptionWebhookPayload, Tag(WebhookShape.SUBSCRIPTION.value)],
    ],
    Discriminator(_detect_shape),
]

_payload_adapter: TypeAdapter[WebhookPayloadBase] = TypeAdapter(WebhookPayload)


def parse_webhook_payload(raw: Mapping[str, Any] | WebhookPayloadBase) -> WebhookPayloadBase:
    """Parse a webhook body into exactly one of the three payload models."""

    if isinstance(raw, WebhookPayloadBase):
        return raw
    if not isinstance(raw, Mapping):
        raise WebhookPayloadError(
            "webhook payload must be a JSON object",
            details={"type": type(raw).__name__},
        )
    try:
        return _payload_adapter.validate_python(dict(raw))
    except ValidationError as exc:
        raise WebhookPayloadError(
            "webhook payload does not match any known shape",
            details={
                "shape": _detect_shape(raw),
                "missing": sorted(
                    str(error["loc"][-1]) for error in exc.errors() if error["type"] == "missing"
                ),
            },
        ) from exc


def _build_message(
    secret_key: str,
    payload: Mapping[str, Any] | WebhookPayloadBase,
    merchant_id: str | None,
) -> str | None:
    try:
        parsed = parse_webhook_payload(payload)
    except WebhookPayloadError as exc:
        logger.warning("rejecting unrecognised webhook payload", extra={"details": exc.details})
        return None

    message = parsed.signing_message(secret_key, merchant_id)
    if message is None:
        logger.warning(
            "merchant id required to verify webhook",
            extra={"shape": parsed.shape.value, "event_type": parsed.iyzi_event_type},
        )
    return message


def verify_webhook(
    secret_key: str,
    payload: Mapping[str, Any] | WebhookPayloadBase,
    signature: str | None,
    merchant_id: str | None = None,
) -> bool:
    """Verify the ``X-IYZ-SIGNATURE-V3`` header of a webhook delivery.

    Args:
        secret_key: Merchant secret key.
        payload: Parsed JSON body (or an already parsed payload model).
        signature: Raw header value.
        merchant_id: Required for subscription webhooks only.

    Returns:
        ``True`` only if the signature matches the payload.
    """

    if not signature:
        return False

    message = _build_message(secret_key, payload, merchant_id)
    if message is None:
        return False

    expected = hmac_hex(secret_key, message)
    return constant_time_equal(expected, signature)


def generate_test_signature(
    secret_key: str,
    payload: Mapping[str, Any] | WebhookPayloadBase,
    merchant_id: str | None = None,
) -> str:
    """Return the signature :func:`verify_webhook` accepts for ``payload``.

    Meant for simulating webhook deliveries in tests. Returns ``""`` when the
    payload cannot be classified (including subscription payloads without
    ``merchant_id``).
    """

    message = _build_message(secret_key, payload, merchant_id)
    if message is None:
        return ""
    return hmac_hex(secret_key, message)

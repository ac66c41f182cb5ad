"""Signature verification for iyzico API responses.

iyzico signs selected response fields joined with ``:`` in a fixed order.
Amount fields are signed with trailing zeros removed, so ``10.50`` and
``10.5`` produce the same message.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .amounts import render_decimal, strip_trailing_zeros
from .crypto import constant_time_equal, hmac_hex

logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = ":"
SIGNATURE_FIELD = "signature"


@dataclass(frozen=True, slots=True)
class SignedFields:
    """Ordered response fields that take part in a family's signature."""

    name: str
    fields: tuple[str, ...]
    amount_fields: frozenset[str] = frozenset()


PAYMENT_FIELDS = SignedFields(
    name="payment",
    fields=("paymentId", "currency", "basketId", "conversationId", "paidPrice", "price"),
    amount_fields=frozenset({"paidPrice", "price"}),
)
THREE_DS_INIT_FIELDS = SignedFields(
    name="three_ds_initialize",
    fields=("paymentId", "conversationId"),
)
CALLBACK_FIELDS = SignedFields(
    name="three_ds_callback",
    fields=("conversationData", "conversationId", "mdStatus", "paymentId", "status"),
)
CHECKOUT_FORM_INIT_FIELDS = SignedFields(
    name="checkout_form_initialize",
    fields=("conversationId", "token"),
)
CHECKOUT_FORM_RETRIEVE_FIELDS = SignedFields(
    name="checkout_form_retrieve",
    fields=(
        "paymentStatus",
        "paymentId",
        "currency",
        "basketId",
        "conversationId",
        "paidPrice",
        "price",
        "token",
    ),
    amount_fields=frozenset({"paidPrice", "price"}),
)
REFUND_FIELDS = SignedFields(
    name="refund",
    fields=("paymentId", "price", "currency", "conversationId"),
    amount_fields=frozenset({"price"}),
)


def _render_field(value: Any, *, amount: bool) -> str:
    if value is None:
        return ""
    if amount:
        return strip_trailing_zeros(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float | Decimal):
        return render_decimal(value)
    return str(value)


def build_signature_message(signed_fields: SignedFields, response: Mapping[str, Any]) -> str:
    """Return the ``:``-joined message iyzico signed for ``response``."""

    return MESSAGE_SEPARATOR.join(
        _render_field(response.get(name), amount=name in signed_fields.amount_fields)
        for name in signed_fields.fields
    )


def compute_response_signature(
    secret_key: str, signed_fields: SignedFields, response: Mapping[str, Any]
) -> str:
    return hmac_hex(secret_key, build_signature_message(signed_fields, response))


def verify_response_signature(
    secret_key: str, signed_fields: SignedFields, response: Mapping[str, Any]
) -> bool:
    """Check the ``signature`` field of ``response`` against its signed fields."""

    signature = response.get(SIGNATURE_FIELD)
    if not isinstance(signature, str) or not signature:
        return False
    try:
        expected = compute_response_signature(secret_key, signed_fields, response)
    except (TypeError, ValueError) as exc:
        logger.warning(
            "rejecting response with unrenderable signed field",
            extra={"family": signed_fields.name, "error": str(exc)},
        )
        return False
    return constant_time_equal(expected, signature)


def verify_payment_signature(secret_key: str, response: Mapping[str, Any]) -> bool:
    """Verify a non-3DS payment, pre-auth or post-auth response."""

    return verify_response_signature(secret_key, PAYMENT_FIELDS, response)


# 3DS auth (complete) responses sign exactly the payment fields.
verify_three_ds_auth_signature = verify_payment_signature


def verify_three_ds_init_signature(secret_key: str, response: Mapping[str, Any]) -> bool:
    return verify_response_signature(secret_key, THREE_DS_INIT_FIELDS, response)


def verify_callback_signature(secret_key: str, callback: Mapping[str, Any]) -> bool:
    """Verify the form fields POSTed to the merchant's 3DS callback URL."""

    return verify_response_signature(secret_key, CALLBACK_FIELDS, callback)


def verify_checkout_form_init_signature(secret_key: str, response: Mapping[str, Any]) -> bool:
    return verify_response_signature(secret_key, CHECKOUT_FORM_INIT_FIELDS, response)


def verify_checkout_form_retrieve_signature(
    secret_key: str, response: Mapping[str, Any]
) -> bool:
    return verify_response_signature(secret_key, CHECKOUT_FORM_RETRIEVE_FIELDS, response)


def verify_refund_signature(secret_key: str, response: Mapping[str, Any]) -> bool:
    """Verify an item-based (V1) or amount-based (V2) refund response."""

    return verify_response_signature(secret_key, REFUND_FIELDS, response)

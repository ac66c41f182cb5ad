from __future__ import annotations

import json
from decimal import Decimal

import pytest

from iyzico.signing.crypto import hmac_hex
from iyzico.signing.responses import (
    CALLBACK_FIELDS,
    CHECKOUT_FORM_RETRIEVE_FIELDS,
    PAYMENT_FIELDS,
    REFUND_FIELDS,
    build_signature_message,
    compute_response_signature,
    verify_callback_signature,
    verify_checkout_form_init_signature,
    verify_checkout_form_retrieve_signature,
    verify_payment_signature,
    verify_refund_signature,
    verify_three_ds_auth_signature,
    verify_three_ds_init_signature,
)

pytestmark = pytest.mark.unit

SECRET_KEY = "sandbox-qaIiLIxhjMgx3LSKIVvp6j17NunHOFtD"
DOCUMENTED_SIGNATURE = "836c3a6c8db86c81043f2ca74edb13518b54a813f454f8dd762f0dd658610173"


def _payment_response(**overrides):
    response = {
        "status": "success",
        "paymentId": "22416032",
        "currency": "TRY",
        "basketId": "basketId",
        "conversationId": "conversationId",
        "paidPrice": 10.5,
        "price": 10.5,
        "signature": DOCUMENTED_SIGNATURE,
    }
    response.update(overrides)
    return response


def test_documented_payment_vector() -> None:
    message = build_signature_message(PAYMENT_FIELDS, _payment_response())

    assert message == "22416032:TRY:basketId:conversationId:10.5:10.5"
    assert hmac_hex(SECRET_KEY, message) == DOCUMENTED_SIGNATURE


def test_verify_payment_signature_accepts_valid_signature() -> None:
    assert verify_payment_signature(SECRET_KEY, _payment_response()) is True


@pytest.mark.parametrize("position", [0, 17, 63])
def test_verify_payment_signature_rejects_any_flipped_character(position: int) -> None:
    original = DOCUMENTED_SIGNATURE[position]
    replacement = "0" if original != "0" else "1"
    tampered = DOCUMENTED_SIGNATURE[:position] + replacement + DOCUMENTED_SIGNATURE[position + 1 :]

    assert verify_payment_signature(SECRET_KEY, _payment_response(signature=tampered)) is False


def test_trailing_zero_amounts_verify_against_same_signature() -> None:
    assert verify_payment_signature(SECRET_KEY, _payment_response(paidPrice="10.50", price="10.50"))
    assert verify_payment_signature(
        SECRET_KEY, _payment_response(paidPrice=Decimal("10.500"), price=Decimal("10.50"))
    )


def test_changed_amount_invalidates_signature() -> None:
    assert verify_payment_signature(SECRET_KEY, _payment_response(paidPrice=10.6)) is False


def test_missing_or_empty_signature_is_rejected() -> None:
    response = _payment_response()
    del response["signature"]

    assert verify_payment_signature(SECRET_KEY, response) is False
    assert verify_payment_signature(SECRET_KEY, _payment_response(signature="")) is False
    assert verify_payment_signature(SECRET_KEY, _payment_response(signature=None)) is False


def test_optional_fields_render_as_empty_strings() -> None:
    response = _payment_response(basketId=None)
    del response["conversationId"]

    message = build_signature_message(PAYMENT_FIELDS, response)

    assert message == "22416032:TRY:::10.5:10.5"
    response["signature"] = hmac_hex(SECRET_KEY, message)
    assert verify_payment_signature(SECRET_KEY, response) is True


def test_three_ds_auth_is_payment_verification() -> None:
    assert verify_three_ds_auth_signature is verify_payment_signature
    assert verify_three_ds_auth_signature(SECRET_KEY, _payment_response()) is True


def test_integral_amounts_drop_decimal_point() -> None:
    response = _payment_response(paidPrice=10.0, price="10.00")

    assert build_signature_message(PAYMENT_FIELDS, response).endswith(":10:10")


def test_three_ds_init_signature() -> None:
    response = {"paymentId": "123", "conversationId": "conv-1"}
    response["signature"] = hmac_hex(SECRET_KEY, "123:conv-1")

    assert verify_three_ds_init_signature(SECRET_KEY, response) is True
    assert verify_three_ds_init_signature(SECRET_KEY, {**response, "paymentId": "124"}) is False


def test_callback_signature_field_order() -> None:
    callback = {
        "conversationData": "data",
        "conversationId": "conv-1",
        "mdStatus": "1",
        "paymentId": "123",
        "status": "success",
    }

    assert build_signature_message(CALLBACK_FIELDS, callback) == "data:conv-1:1:123:success"
    callback["signature"] = compute_response_signature(SECRET_KEY, CALLBACK_FIELDS, callback)
    assert verify_callback_signature(SECRET_KEY, callback) is True
    assert verify_callback_signature(SECRET_KEY, {**callback, "mdStatus": "0"}) is False


def test_callback_numeric_md_status_matches_string_form() -> None:
    callback = {"conversationId": "conv-1", "mdStatus": 1, "paymentId": 123, "status": "success"}

    assert build_signature_message(CALLBACK_FIELDS, callback) == ":conv-1:1:123:success"


def test_checkout_form_init_signature() -> None:
    response = {"conversationId": "conv-1", "token": "tok-abc"}
    response["signature"] = hmac_hex(SECRET_KEY, "conv-1:tok-abc")

    assert verify_checkout_form_init_signature(SECRET_KEY, response) is True
    assert verify_checkout_form_init_signature(SECRET_KEY, {**response, "token": "tok-x"}) is False


def test_checkout_form_retrieve_signature() -> None:
    response = {
        "paymentStatus": "SUCCESS",
        "paymentId": "22416032",
        "currency": "TRY",
        "basketId": "B67832",
        "conversationId": "conv-1",
        "paidPrice": "1.20",
        "price": 1.0,
        "token": "tok-abc",
    }

    message = build_signature_message(CHECKOUT_FORM_RETRIEVE_FIELDS, response)

    assert message == "SUCCESS:22416032:TRY:B67832:conv-1:1.2:1:tok-abc"
    response["signature"] = hmac_hex(SECRET_KEY, message)
    assert verify_checkout_form_retrieve_signature(SECRET_KEY, response) is True
    assert verify_checkout_form_retrieve_signature(SECRET_KEY, {**response, "paidPrice": "1.3"}) is False


def test_refund_signature_strips_price_only() -> None:
    response = {
        "paymentId": "22416032",
        "price": "50.00",
        "currency": "TRY",
        "conversationId": "10.50",
    }

    message = build_signature_message(REFUND_FIELDS, response)

    assert message == "22416032:50:TRY:10.50"
    response["signature"] = hmac_hex(SECRET_KEY, message)
    assert verify_refund_signature(SECRET_KEY, response) is True
    assert verify_refund_signature(SECRET_KEY, {**response, "price": 50}) is True
    assert verify_refund_signature(SECRET_KEY, {**response, "currency": "USD"}) is False


def test_signature_under_other_secret_is_rejected() -> None:
    assert verify_payment_signature("another-secret", _payment_response()) is False


@pytest.mark.parametrize("amount", [json.loads("NaN"), float("inf"), True, [1], {"a": 1}])
def test_unrenderable_amount_fails_verification_without_raising(amount) -> None:
    response = _payment_response(paidPrice=amount, price=amount)

    assert verify_payment_signature(SECRET_KEY, response) is False


def test_unrenderable_non_amount_field_fails_verification_without_raising() -> None:
    response = {"paymentId": float("nan"), "conversationId": "conv-1", "signature": "0" * 64}

    assert verify_three_ds_init_signature(SECRET_KEY, response) is False

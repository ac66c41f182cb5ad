"""Decimal-string canonicalisation for monetary amounts.

iyzico applies two different rules to amounts:

* request bodies carry prices with at least one fractional digit
  (:func:`format_price`, ``"22" -> "22.0"``);
* response signatures are computed over prices with every trailing zero
  removed, including a bare decimal point (:func:`strip_trailing_zeros`,
  ``"10.0" -> "10"``).

Both rules operate on strings. Numbers are first rendered without exponent
notation by :func:`render_decimal`.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

Amount = str | int | float | Decimal

PRICE_FIELDS: frozenset[str] = frozenset({"price", "paidPrice", "subMerchantPrice"})


def render_decimal(value: Amount) -> str:
    """Render ``value`` as a plain decimal string.

    Floats follow JSON number rendering (``10.0 -> "10"``, ``1e-07 ->
    "0.0000001"``); decimals keep their scale (``Decimal("10.50") ->
    "10.50"``); strings pass through untouched.
    """

    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not amounts")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"cannot render non-finite amount {value!r}")
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"cannot render non-finite amount {value!r}")
        return format(value, "f")
    raise TypeError(f"unsupported amount type: {type(value).__name__}")


def format_price(value: Amount) -> str:
    """Normalise a price for an outbound request body.

    >>> format_price("22.00")
    '22.0'
    >>> format_price("15.340000")
    '15.34'
    """

    price = render_decimal(value)
    if "." not in price:
        return f"{price}.0"

    stripped = price.rstrip("0")
    if stripped.endswith("."):
        return f"{stripped}0"
    return stripped


def strip_trailing_zeros(value: Amount) -> str:
    """Normalise a price for a signature message.

    >>> strip_trailing_zeros("10.50")
    '10.5'
    >>> strip_trailing_zeros("10.0")
    '10'
    """

    price = render_decimal(value)
    if "." not in price:
        return price

    stripped = price.rstrip("0")
    if stripped.endswith("."):
        return stripped[:-1]
    return stripped


def format_request_prices(body: Any, fields: Iterable[str] = PRICE_FIELDS) -> Any:
    """Return a copy of a JSON request body with price keys run through :func:`format_price`.

    Nested objects and arrays (basket items, sub-merchant splits) are walked
    recursively; ``None`` and non-numeric values are left alone.
    """

    keys = frozenset(fields)
    if isinstance(body, Mapping):
        formatted: dict[str, Any] = {}
        for key, value in body.items():
            if key in keys and _is_amount(value):
                formatted[key] = format_price(value)
            else:
                formatted[key] = format_request_prices(value, keys)
        return formatted
    if isinstance(body, list | tuple):
        return [format_request_prices(item, keys) for item in body]
    return body


def _is_amount(value: Any) -> bool:
    return isinstance(value, str | int | float | Decimal) and not isinstance(value, bool)

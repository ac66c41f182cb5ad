"""Query string helpers for list and lookup endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any
from urllib.parse import urlencode

from iyzico.signing.amounts import render_decimal


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float | Decimal):
        return render_decimal(value)
    return str(value)


def build_query_string(params: Mapping[str, Any] | None = None) -> str:
    """Return ``?key=value&...`` for the non-``None`` entries of ``params``."""

    if not params:
        return ""
    pairs = [(key, _render(value)) for key, value in params.items() if value is not None]
    if not pairs:
        return ""
    return f"?{urlencode(pairs)}"

"""HMAC-SHA256 digest and constant-time comparison primitives."""

from __future__ import annotations

import hashlib
import hmac

from iyzico.core.errors import SignatureComputationError


def hmac_hex(secret: str, message: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``message`` keyed by ``secret``.

    Both values are encoded as UTF-8. A hash provider that refuses SHA-256
    (for example under a restrictive FIPS policy) raises
    :class:`SignatureComputationError` rather than producing a result.
    """

    key = secret.encode("utf-8")
    data = message.encode("utf-8")
    try:
        digest = hmac.new(key, data, hashlib.sha256)
    except ValueError as exc:
        raise SignatureComputationError(f"HMAC-SHA256 unavailable: {exc}") from exc
    return digest.hexdigest()


def constant_time_equal(a: str, b: str) -> bool:
    """Compare two signature strings without exiting on the first mismatch.

    Differing lengths return ``False`` straight away; length is not secret.
    Equal-length inputs go through :func:`hmac.compare_digest`, which scans the
    full input. This is best-effort under CPython, not a cryptographic
    guarantee.
    """

    if len(a) != len(b):
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))

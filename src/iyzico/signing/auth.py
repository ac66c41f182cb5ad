"""IYZWSv2 authorization header construction for outbound requests."""

from __future__ import annotations

import base64
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .crypto import hmac_hex

AUTHORIZATION_SCHEME = "IYZWSv2"
AUTHORIZATION_HEADER = "Authorization"
RANDOM_KEY_HEADER = "x-iyzi-rnd"

RandomKeyFactory = Callable[[], str]

_system_random = random.SystemRandom()


def generate_random_key(rng: random.Random | None = None) -> str:
    """Return a per-request nonce built from two random 32-bit integers."""

    source = rng or _system_random
    return f"{source.getrandbits(32)}{source.getrandbits(32)}"


def extract_uri_path(url: str) -> str:
    """Return the path portion iyzico signs for ``url``.

    Versioned endpoints are signed from their ``/v2`` segment onwards (query
    string excluded); everything else is signed by its URL path.
    """

    v2_index = url.find("/v2")
    if v2_index != -1:
        query_index = url.find("?", v2_index)
        return url[v2_index:] if query_index == -1 else url[v2_index:query_index]
    return urlsplit(url).path or "/"


def build_auth_header(
    api_key: str,
    secret_key: str,
    random_key: str,
    uri_path: str,
    body: str | None = None,
) -> str:
    """Build the ``Authorization`` header value for a single request.

    signature = hex(HMAC-SHA256(secret_key, random_key + uri_path + body))
    header    = "IYZWSv2 " + base64("apiKey:..&randomKey:..&signature:..")
    """

    for name, value in (
        ("api_key", api_key),
        ("secret_key", secret_key),
        ("random_key", random_key),
        ("uri_path", uri_path),
    ):
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    if body is not None and not isinstance(body, str):
        raise TypeError(f"body must be a serialized string, got {type(body).__name__}")

    signature = hmac_hex(secret_key, random_key + uri_path + (body or ""))
    auth_string = f"apiKey:{api_key}&randomKey:{random_key}&signature:{signature}"
    encoded = base64.b64encode(auth_string.encode("utf-8")).decode("ascii")
    return f"{AUTHORIZATION_SCHEME} {encoded}"


@dataclass(slots=True, frozen=True)
class RequestSigner:
    """Produce signed headers for outbound requests with a fresh nonce each time."""

    api_key: str
    secret_key: str = field(repr=False)
    random_key_factory: RandomKeyFactory = generate_random_key

    def sign(self, url: str, body: str | None = None) -> dict[str, str]:
        random_key = self.random_key_factory()
        authorization = build_auth_header(
            self.api_key,
            self.secret_key,
            random_key,
            extract_uri_path(url),
            body,
        )
        return {
            AUTHORIZATION_HEADER: authorization,
            RANDOM_KEY_HEADER: random_key,
        }

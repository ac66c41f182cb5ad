"""Async HTTP client that signs every request for the iyzico API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Literal

import httpx

from iyzico.core.config import SANDBOX_BASE_URL, IyzicoSettings
from iyzico.core.errors import IyzicoConnectionError, IyzicoParseError, IyzicoTimeoutError
from iyzico.signing.auth import RandomKeyFactory, RequestSigner, generate_random_key
from iyzico.utils.query_string import build_query_string
from iyzico.utils.tracing import get_tracer

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

DEFAULT_TIMEOUT = 30.0


def serialize_body(body: Any) -> str:
    """Serialise a request body exactly as it is signed and sent."""

    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


class IyzicoClient:
    """Send signed JSON requests to iyzico and decode JSON responses.

    API-level failures (``"status": "failure"``) are returned to the caller
    unchanged; only transport and decoding problems raise.
    """

    def __init__(
        self,
        *,
        api_key: str,
        secret_key: str,
        base_url: str = SANDBOX_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        random_key_factory: RandomKeyFactory = generate_random_key,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._signer = RequestSigner(
            api_key=api_key,
            secret_key=secret_key,
            random_key_factory=random_key_factory,
        )
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: IyzicoSettings | None = None, **kwargs: Any
    ) -> IyzicoClient:
        settings = settings or IyzicoSettings()
        return cls(
            api_key=settings.api_key,
            secret_key=settings.secret_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> IyzicoClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> dict[str, Any]:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: Any = None) -> dict[str, Any]:
        return await self.request("PUT", path, body)

    async def delete(
        self, path: str, body: Any = None, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        return await self.request("DELETE", path, body, params=params)

    async def patch(
        self, path: str, body: Any = None, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        return await self.request("PATCH", path, body, params=params)

    async def request(
        self,
        method: HttpMethod,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        path = f"{path}{build_query_string(params)}"
        url = self._base_url + path
        content = serialize_body(body) if body is not None else None

        headers = {"Accept": "application/json", **self._signer.sign(url, content)}
        if content:
            headers["Content-Type"] = "application/json"

        with get_tracer().start_as_current_span(
            "iyzico.request",
            attributes={"http.request.method": method, "url.path": path},
        ):
            response = await self._send(method, url, path, headers, content)
            return self._parse(path, response)

    async def _send(
        self,
        method: str,
        url: str,
        path: str,
        headers: dict[str, str],
        content: str | None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method,
                url,
                headers=headers,
                content=content.encode("utf-8") if content is not None else None,
            )
        except httpx.TimeoutException as exc:
            logger.warning("iyzico request timed out", extra={"path": path, "timeout": self._timeout})
            raise IyzicoTimeoutError(self._timeout, path) from exc
        except httpx.HTTPError as exc:
            logger.exception("failed to reach iyzico", extra={"path": path})
            raise IyzicoConnectionError(path, exc) from exc

    def _parse(self, path: str, response: httpx.Response) -> dict[str, Any]:
        text = response.text
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error(
                "iyzico returned a non-JSON body",
                extra={"path": path, "status": response.status_code},
            )
            raise IyzicoParseError(response.status_code, path, text) from exc

        if isinstance(payload, dict) and payload.get("status") == "failure":
            logger.info(
                "iyzico reported a failure",
                extra={"path": path, "error_code": payload.get("errorCode")},
            )
        return payload

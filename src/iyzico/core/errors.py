"""Shared exception hierarchy for the iyzico client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class IyzicoError(Exception):
    """Base exception capturing problem details."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "iyzico_error",
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation of the error."""

        payload: dict[str, Any] = {
            "title": self.message,
            "code": self.code,
        }
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class IyzicoConnectionError(IyzicoError):
    """Raised when the request never produced a readable response."""

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(
            f"connection to iyzico failed for {path}{reason}",
            code="connection_error",
            details={"path": path},
        )
        self.path = path
        self.__cause__ = cause


class IyzicoTimeoutError(IyzicoError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(self, timeout: float, path: str) -> None:
        super().__init__(
            f"request to {path} timed out after {timeout}s",
            code="timeout",
            details={"path": path, "timeout": timeout},
        )
        self.timeout = timeout
        self.path = path


class IyzicoParseError(IyzicoError):
    """Raised when the response body is not valid JSON."""

    def __init__(self, status_code: int, path: str, body: str) -> None:
        super().__init__(
            f"could not parse response from {path} (HTTP {status_code})",
            code="parse_error",
            details={"path": path, "status": status_code, "body": body},
        )
        self.status_code = status_code
        self.path = path
        self.body = body


class SignatureComputationError(IyzicoError):
    """Raised when the HMAC primitive itself cannot run.

    Distinct from a failed verification, which is reported as ``False``.
    """

    def __init__(self, message: str = "HMAC-SHA256 computation failed") -> None:
        super().__init__(message, code="signature_computation_error")


class WebhookPayloadError(IyzicoError):
    """Raised when a webhook body matches none of the known payload shapes."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, code="invalid_webhook_payload", details=details)

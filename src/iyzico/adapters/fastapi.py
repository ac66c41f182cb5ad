"""FastAPI dependency guarding iyzico webhook endpoints."""

from __future__ import annotations

import json
import logging

from fastapi import HTTPException, Request, status

from iyzico.core.errors import WebhookPayloadError
from iyzico.signing.webhooks import (
    WEBHOOK_SIGNATURE_HEADER,
    WebhookPayloadBase,
    parse_webhook_payload,
    verify_webhook,
)

logger = logging.getLogger(__name__)


class WebhookSignatureGuard:
    """Verify the signature header and return the parsed webhook payload.

    Usage::

        guard = WebhookSignatureGuard(settings.secret_key, merchant_id=settings.merchant_id)

        @router.post("/iyzico/webhook")
        async def webhook(payload: Annotated[WebhookPayloadBase, Depends(guard)]) -> dict[str, str]:
            ...
    """

    def __init__(
        self,
        secret_key: str,
        *,
        merchant_id: str | None = None,
        header_name: str = WEBHOOK_SIGNATURE_HEADER,
    ) -> None:
        self._secret_key = secret_key
        self._merchant_id = merchant_id
        self._header_name = header_name

    async def __call__(self, request: Request) -> WebhookPayloadBase:
        raw_body = await request.body()
        signature = request.headers.get(self._header_name, "")

        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="invalid JSON payload"
            ) from exc

        if not isinstance(payload, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="webhook payload must be an object"
            )

        try:
            parsed = parse_webhook_payload(payload)
        except WebhookPayloadError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc

        if not verify_webhook(self._secret_key, parsed, signature, self._merchant_id):
            logger.warning(
                "webhook signature rejected",
                extra={"shape": parsed.shape.value, "event_type": parsed.iyzi_event_type},
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid webhook signature"
            )

        return parsed

"""Command line helpers for signing requests and checking webhook signatures."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from iyzico.core.config import IyzicoSettings
from iyzico.core.logging import configure_logging, get_logger
from iyzico.signing.auth import RequestSigner
from iyzico.signing.webhooks import generate_test_signature, verify_webhook


def _load_payload(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iyzico",
        description="Signing and webhook verification helpers for the iyzico API.",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="API key (default: IYZICO_API_KEY).",
    )
    parser.add_argument(
        "--secret-key",
        default=None,
        help="Secret key (default: IYZICO_SECRET_KEY).",
    )
    parser.add_argument(
        "--merchant-id",
        default=None,
        help="Merchant id for subscription webhooks (default: IYZICO_MERCHANT_ID).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    auth = sub.add_parser("auth-header", help="Print the signed headers for a request.")
    auth.add_argument("--url", required=True, help="Full request URL including query string.")
    auth.add_argument("--body", default=None, help="Serialized JSON body, exactly as sent.")

    signature = sub.add_parser(
        "webhook-signature", help="Print a test signature for a webhook payload."
    )
    signature.add_argument("payload", help="Path to a JSON payload, or - for stdin.")

    verify = sub.add_parser("verify-webhook", help="Verify a webhook payload signature.")
    verify.add_argument("payload", help="Path to a JSON payload, or - for stdin.")
    verify.add_argument("--signature", required=True, help="X-IYZ-SIGNATURE-V3 header value.")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = IyzicoSettings()
    configure_logging(settings.log_level)
    logger = get_logger("iyzico.cli")

    secret_key = args.secret_key or settings.secret_key
    merchant_id = args.merchant_id or settings.merchant_id
    if not secret_key:
        parser.error("a secret key is required (--secret-key or IYZICO_SECRET_KEY)")

    if args.command == "auth-header":
        api_key = args.api_key or settings.api_key
        if not api_key:
            parser.error("an API key is required (--api-key or IYZICO_API_KEY)")
        headers = RequestSigner(api_key=api_key, secret_key=secret_key).sign(args.url, args.body)
        print(json.dumps(headers, indent=2))
        return 0

    try:
        payload = _load_payload(args.payload)
    except OSError as exc:
        parser.error(f"cannot read payload {args.payload}: {exc.strerror}")
    except json.JSONDecodeError as exc:
        parser.error(f"payload {args.payload} is not valid JSON: {exc.msg}")

    if args.command == "webhook-signature":
        signature = generate_test_signature(secret_key, payload, merchant_id)
        if not signature:
            logger.error("cannot sign webhook payload", payload=args.payload)
            return 1
        print(signature)
        return 0

    valid = verify_webhook(secret_key, payload, args.signature, merchant_id)
    logger.info("webhook verified", payload=args.payload, valid=valid)
    print("valid" if valid else "invalid")
    return 0 if valid else 1


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    raise SystemExit(main())

from __future__ import annotations

import json
from pathlib import Path

import pytest

from iyzico.cli import build_parser, main
from iyzico.signing.webhooks import generate_test_signature

pytestmark = pytest.mark.unit

SECRET_KEY = "sandbox-qaIiLIxhjMgx3LSKIVvp6j17NunHOFtD"

DIRECT_PAYLOAD = {
    "paymentId": "pay123",
    "paymentConversationId": "conv456",
    "status": "SUCCESS",
    "iyziEventType": "CREDIT_PAYMENT_AUTH",
}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("IYZICO_API_KEY", "IYZICO_SECRET_KEY", "IYZICO_MERCHANT_ID"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(DIRECT_PAYLOAD), encoding="utf-8")
    return path


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_auth_header_prints_signed_headers(capsys) -> None:
    exit_code = main(
        [
            "--api-key",
            "ak",
            "--secret-key",
            "sk",
            "auth-header",
            "--url",
            "https://sandbox-api.iyzipay.com/payment/auth",
            "--body",
            "{}",
        ]
    )

    assert exit_code == 0
    headers = json.loads(capsys.readouterr().out)
    assert headers["Authorization"].startswith("IYZWSv2 ")
    assert headers["x-iyzi-rnd"].isdigit()


def test_auth_header_requires_api_key(monkeypatch) -> None:
    monkeypatch.setenv("IYZICO_SECRET_KEY", "sk")

    with pytest.raises(SystemExit):
        main(["auth-header", "--url", "https://sandbox-api.iyzipay.com/payment/auth"])


def test_webhook_signature_reads_secret_from_environment(monkeypatch, capsys, payload_file: Path) -> None:
    monkeypatch.setenv("IYZICO_SECRET_KEY", SECRET_KEY)

    exit_code = main(["webhook-signature", str(payload_file)])

    assert exit_code == 0
    output = capsys.readouterr().out.strip().splitlines()
    assert output[-1] == generate_test_signature(SECRET_KEY, DIRECT_PAYLOAD)


def test_verify_webhook_reports_result(capsys, payload_file: Path) -> None:
    signature = generate_test_signature(SECRET_KEY, DIRECT_PAYLOAD)

    valid_code = main(["--secret-key", SECRET_KEY, "verify-webhook", str(payload_file), "--signature", signature])
    valid_output = capsys.readouterr().out.strip().splitlines()
    invalid_code = main(
        ["--secret-key", SECRET_KEY, "verify-webhook", str(payload_file), "--signature", "0" * 64]
    )
    invalid_output = capsys.readouterr().out.strip().splitlines()

    assert (valid_code, valid_output[-1]) == (0, "valid")
    assert (invalid_code, invalid_output[-1]) == (1, "invalid")


def test_missing_secret_key_is_an_error(payload_file: Path) -> None:
    with pytest.raises(SystemExit):
        main(["webhook-signature", str(payload_file)])


def test_invalid_json_payload_is_a_usage_error(tmp_path: Path, capsys) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["--secret-key", SECRET_KEY, "webhook-signature", str(broken)])

    assert exc_info.value.code == 2
    assert "not valid JSON" in capsys.readouterr().err


def test_missing_payload_file_is_a_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--secret-key", SECRET_KEY, "verify-webhook", str(tmp_path / "absent.json"), "--signature", "x"])

    assert exc_info.value.code == 2

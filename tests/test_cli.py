import pytest

from liqpay_client import LiqPayClient
from liqpay_client import cli

from .conftest import RecordingTransport

EXAMPLE_DATA = "eyJhbW91bnQiOiIxMDAiLCJjdXJyZW5jeSI6IlVTRCIsIm9yZGVyX2lkIjoiT1JEMSJ9"
EXAMPLE_SIGNATURE = "rODSnmrJ1gq5DYNyDZ/SvkS+Vhs="


@pytest.fixture
def base_args(tmp_path, monkeypatch):
    for key in ("LIQPAY_PUBLIC_KEY", "LIQPAY_PRIVATE_KEY", "LIQPAY_SANDBOX", "LIQPAY_SIGNATURE_ALGORITHM"):
        monkeypatch.delenv(key, raising=False)
    return [
        "--env-file",
        str(tmp_path / "absent.env"),
        "--set",
        "LIQPAY_PUBLIC_KEY=sandbox_i00000000",
        "--set",
        "LIQPAY_PRIVATE_KEY=sekret",
    ]


def test_sign_prints_fields(base_args, capsys):
    code = cli.run_cli(
        base_args
        + ["sign", "--param", "amount=100", "--param", "currency=USD", "--param", "order_id=ORD1"]
    )
    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [f"data={EXAMPLE_DATA}", f"signature={EXAMPLE_SIGNATURE}"]


def test_sign_without_params_fails(base_args):
    assert cli.run_cli(base_args + ["sign"]) == 1


def test_verify_accepts_valid_pair(base_args):
    code = cli.run_cli(base_args + ["verify", "--data", EXAMPLE_DATA, "--signature", EXAMPLE_SIGNATURE])
    assert code == 0


def test_verify_rejects_tampered_signature(base_args):
    tampered = EXAMPLE_SIGNATURE[:-2] + "A="
    code = cli.run_cli(base_args + ["verify", "--data", EXAMPLE_DATA, "--signature", tampered])
    assert code == 1


def test_missing_credentials(tmp_path, monkeypatch):
    monkeypatch.delenv("LIQPAY_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("LIQPAY_PRIVATE_KEY", raising=False)
    code = cli.run_cli(["--env-file", str(tmp_path / "absent.env"), "sign", "--param", "a=b"])
    assert code == 1


def test_status_reports_outcome(base_args, monkeypatch):
    transports = []

    def fake_create_client(*, config):
        transport = RecordingTransport(body=b'{"result":"ok","status":"success","order_id":"ORD1"}')
        transports.append(transport)
        return LiqPayClient(config, transport=transport)

    monkeypatch.setattr(cli, "create_client", fake_create_client)
    assert cli.run_cli(base_args + ["status", "--order-id", "ORD1"]) == 0
    assert len(transports[0].sent) == 1


def test_status_reports_provider_error(base_args, monkeypatch):
    def fake_create_client(*, config):
        body = b'{"result":"error","status":"error","err_code":"order_not_found"}'
        return LiqPayClient(config, transport=RecordingTransport(body=body))

    monkeypatch.setattr(cli, "create_client", fake_create_client)
    assert cli.run_cli(base_args + ["status", "--order-id", "ORD1"]) == 1


def test_status_reports_transport_error(base_args, monkeypatch):
    def fake_create_client(*, config):
        return LiqPayClient(config, transport=RecordingTransport(status=503, body=b"down"))

    monkeypatch.setattr(cli, "create_client", fake_create_client)
    assert cli.run_cli(base_args + ["status", "--order-id", "ORD1"]) == 1


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])

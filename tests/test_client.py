import json
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from liqpay_client import (
    ClientConfig,
    HoldCompletionRequest,
    HttpTransport,
    LiqPayClient,
    LiqPayError,
    RefundRequest,
    ResponseStatus,
    SignatureAlgorithm,
    StatusRequest,
    TransportError,
    VerificationFailure,
    encode,
    send_request,
    verify,
)
from liqpay_client.core.encoding import decode, from_transport
from liqpay_client.core.signing import sign

from .conftest import RecordingTransport


def test_send_signs_typed_request(config, transport):
    client = LiqPayClient(config, transport=transport)
    client.send(StatusRequest(order_id="ORD1"))

    (envelope,) = transport.sent
    payload = from_transport(envelope.data)
    assert decode(payload) == {
        "action": "status",
        "order_id": "ORD1",
        "public_key": "sandbox_i00000000",
        "version": 7,
    }
    assert envelope.public_key == "sandbox_i00000000"
    assert verify(payload, envelope.signature, config.credentials, algorithm="sha3_256").ok


def test_status_envelope_is_signed_with_sha3(config):
    envelope = LiqPayClient(config, transport=RecordingTransport()).build_envelope(
        StatusRequest(order_id="ORD1")
    )
    assert envelope.data == (
        "eyJhY3Rpb24iOiJzdGF0dXMiLCJvcmRlcl9pZCI6Ik9SRDEiLCJwdWJsaWNfa2V5Ijoic2Fu"
        "ZGJveF9pMDAwMDAwMDAiLCJ2ZXJzaW9uIjo3fQ=="
    )
    assert envelope.signature == "kl0FzyW0IMiHBeFTYf1xTxt9kWeJbK8z+lIvNlzcnk0="


def test_send_parses_reply(config):
    body = json.dumps(
        {
            "result": "ok",
            "status": "success",
            "action": "pay",
            "order_id": "ORD1",
            "payment_id": 123456,
            "amount": 100.0,
            "currency": "USD",
        }
    ).encode("utf-8")
    client = LiqPayClient(config, transport=RecordingTransport(body=body))
    response = client.send(StatusRequest(order_id="ORD1"))
    assert response.ok
    assert response.known_status is ResponseStatus.SUCCESS
    assert response.payment_id == 123456
    assert response.amount == 100.0
    assert response.raw["currency"] == "USD"
    assert response.raise_for_result() is response


def test_error_reply(config):
    body = b'{"result":"error","status":"error","err_code":"order_not_found","err_description":"Order not found"}'
    client = LiqPayClient(config, transport=RecordingTransport(body=body))
    response = client.send(StatusRequest(order_id="missing"))
    assert not response.ok
    with pytest.raises(LiqPayError) as excinfo:
        response.raise_for_result()
    assert excinfo.value.code == "order_not_found"


def test_unknown_status_is_kept_raw(config):
    client = LiqPayClient(
        config, transport=RecordingTransport(body=b'{"result":"ok","status":"brand_new"}')
    )
    response = client.send(StatusRequest(order_id="ORD1"))
    assert response.ok
    assert response.status == "brand_new"
    assert response.known_status is None


def test_sandbox_flag_is_added(transport):
    config = ClientConfig(public_key="pk", private_key="sk", sandbox=True)
    LiqPayClient(config, transport=transport).send(RefundRequest(order_id="1", amount=10))
    params = decode(from_transport(transport.sent[0].data))
    assert params["sandbox"] == "1"
    assert params["action"] == "refund"


def test_configured_algorithm_overrides_request_default(transport):
    config = ClientConfig(
        public_key="pk", private_key="sk", signature_algorithm=SignatureAlgorithm.SHA1
    )
    client = LiqPayClient(config, transport=transport)
    request = StatusRequest(order_id="1")
    assert client.signature_algorithm_for(request) is SignatureAlgorithm.SHA1
    expected = sign(
        encode(client.build_params(request)), config.credentials, algorithm="sha1"
    )
    assert client.build_envelope(request) == expected


def test_hold_completion_is_sent(config, transport):
    client = LiqPayClient(config, transport=transport)
    client.send(HoldCompletionRequest(order_id="ORD1", amount="40.50"))
    (envelope,) = transport.sent
    payload = from_transport(envelope.data)
    assert decode(payload)["action"] == "hold_completion"
    assert decode(payload)["amount"] == "40.50"
    assert verify(payload, envelope.signature, config.credentials, algorithm="sha3_256").ok


def test_callbacks_default_to_sha1(config):
    callback = {"status": "success", "order_id": "ORD1"}
    client = LiqPayClient(config, transport=RecordingTransport())
    sha1 = sign(encode(callback), config.credentials)
    sha3 = sign(encode(callback), config.credentials, algorithm="sha3_256")
    assert client.verify_callback(sha1.data, sha1.signature).ok
    assert not client.verify_callback(sha3.data, sha3.signature).ok


@pytest.mark.parametrize(
    "status, body",
    [
        (500, b"Internal Server Error"),
        (404, b'{"result":"error"}'),
        (200, b"<html>maintenance</html>"),
        (200, b"[1, 2, 3]"),
    ],
)
def test_unusable_replies_raise_transport_error(config, status, body):
    client = LiqPayClient(config, transport=RecordingTransport(status=status, body=body))
    with pytest.raises(TransportError):
        client.send(StatusRequest(order_id="ORD1"))


def test_http_status_is_kept_on_error(config):
    client = LiqPayClient(config, transport=RecordingTransport(status=502, body=b"bad gateway"))
    with pytest.raises(TransportError) as excinfo:
        client.send(StatusRequest(order_id="ORD1"))
    assert excinfo.value.status == 502


def test_checkout_url(config):
    client = LiqPayClient(config, transport=RecordingTransport())
    url = client.checkout_url(StatusRequest(order_id="ORD1"))
    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == config.checkout_url
    query = parse_qs(parts.query)
    envelope = client.build_envelope(StatusRequest(order_id="ORD1"))
    assert query == {"data": [envelope.data], "signature": [envelope.signature]}


def test_parse_callback(config):
    callback = {"action": "pay", "status": "success", "order_id": "ORD1", "amount": 100}
    envelope = sign(encode(callback), config.credentials)
    client = LiqPayClient(config, transport=RecordingTransport())
    assert client.parse_callback(envelope.data, envelope.signature) == callback


def test_parse_callback_rejects_forgery(config):
    forged = sign(
        encode({"status": "success", "order_id": "ORD1"}),
        ClientConfig(public_key="sandbox_i00000000", private_key="guess").credentials,
    )
    client = LiqPayClient(config, transport=RecordingTransport())
    assert not client.verify_callback(forged.data, forged.signature).ok
    with pytest.raises(VerificationFailure):
        client.parse_callback(forged.data, forged.signature)


def test_send_request_helper(config, transport):
    response = send_request(StatusRequest(order_id="ORD1"), config=config, transport=transport)
    assert response.ok
    assert len(transport.sent) == 1


def test_transport_and_session_are_exclusive(config, transport):
    with pytest.raises(ValueError):
        LiqPayClient(config, transport=transport, session=requests.Session())


class _FakeResponse:
    def __init__(self, status_code, content):
        self.status_code = status_code
        self.content = content


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def test_http_transport_posts_form(credentials):
    session = _FakeSession(response=_FakeResponse(200, b'{"result":"ok"}'))
    transport = HttpTransport("https://example.test/api/request", session=session, timeout=7)
    envelope = sign(encode({"action": "status"}), credentials)

    assert transport.send(envelope) == (200, b'{"result":"ok"}')
    url, kwargs = session.calls[0]
    assert url == "https://example.test/api/request"
    assert kwargs == {"data": envelope.as_form(), "timeout": 7}


def test_http_transport_wraps_network_errors(credentials):
    session = _FakeSession(error=requests.ConnectionError("connection refused"))
    transport = HttpTransport("https://example.test/api/request", session=session)
    envelope = sign(encode({"action": "status"}), credentials)
    with pytest.raises(TransportError):
        transport.send(envelope)


def test_client_uses_session_through_http_transport(config):
    session = _FakeSession(response=_FakeResponse(200, b'{"result":"ok","status":"success"}'))
    client = LiqPayClient(config, session=session)
    assert client.send(StatusRequest(order_id="ORD1")).ok
    url, kwargs = session.calls[0]
    assert url == config.api_url
    assert kwargs["timeout"] == config.timeout_seconds
    assert set(kwargs["data"]) == {"data", "signature"}

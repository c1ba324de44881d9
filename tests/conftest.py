"""Shared fixtures: example credentials and a recording transport."""

from typing import List, Tuple

import pytest

from liqpay_client import ClientConfig, Credentials, SignedEnvelope


class RecordingTransport:
    """Stands in for the HTTP transport and replays a canned reply."""

    def __init__(self, status: int = 200, body: bytes = b'{"result":"ok","status":"success"}'):
        self.status = status
        self.body = body
        self.sent: List[SignedEnvelope] = []

    def send(self, envelope: SignedEnvelope) -> Tuple[int, bytes]:
        self.sent.append(envelope)
        return self.status, self.body


@pytest.fixture
def credentials():
    return Credentials(public_key="sandbox_i00000000", private_key="sekret")


@pytest.fixture
def config():
    return ClientConfig(public_key="sandbox_i00000000", private_key="sekret")


@pytest.fixture
def transport():
    return RecordingTransport()

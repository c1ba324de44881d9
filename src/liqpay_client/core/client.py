"""
HTTP client helpers for the LiqPay API.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Protocol, Tuple
from urllib.parse import urlencode

import requests

from .config import ClientConfig
from .encoding import ParameterValue, decode, encode, from_transport
from .errors import TransportError, VerificationFailure, VerificationFailureReason
from .operations import OperationRequest
from .responses import LiqPayResponse
from .signing import SignatureAlgorithm, SignedEnvelope, sign
from .verification import VerificationResult, verify_callback

__all__ = [
    "HttpTransport",
    "LiqPayClient",
    "Transport",
    "send_request",
]


class Transport(Protocol):
    def send(self, envelope: SignedEnvelope) -> Tuple[int, bytes]:
        ...


class HttpTransport:
    """
    Posts signed envelopes to the LiqPay API as a urlencoded form.
    """

    def __init__(
        self,
        url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, envelope: SignedEnvelope) -> Tuple[int, bytes]:
        try:
            response = self.session.post(
                self.url, data=envelope.as_form(), timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request to {self.url} failed: {exc}") from exc
        return response.status_code, response.content


def _parse_reply(status: int, body: bytes, url: str) -> Dict[str, Any]:
    text = body.decode("utf-8", errors="replace")
    if status >= 400:
        raise TransportError(f"LiqPay responded with {status}: {text}", status=status)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TransportError(
            f"Failed to parse JSON from LiqPay at {url}: {text}", status=status
        ) from exc
    if not isinstance(payload, dict):
        raise TransportError(
            f"Unexpected reply from LiqPay at {url}: {text}", status=status
        )
    return payload


class LiqPayClient:
    """
    Signs typed requests with the configured keys and hands them to a transport.

    The configuration is immutable; a client can be shared between threads as
    long as its transport can.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[Transport] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Provide either a transport or a session, not both.")
        self.config = config
        self.transport: Transport = transport or HttpTransport(
            config.api_url, session=session, timeout=config.timeout_seconds
        )

    def build_params(self, request: OperationRequest) -> Dict[str, ParameterValue]:
        params = request.to_params(
            self.config.public_key, version=self.config.api_version
        )
        if self.config.sandbox:
            params["sandbox"] = "1"
        return params

    def signature_algorithm_for(self, request: OperationRequest) -> SignatureAlgorithm:
        return self.config.signature_algorithm or request.SIGNATURE_ALGORITHM

    def build_envelope(self, request: OperationRequest) -> SignedEnvelope:
        return sign(
            encode(self.build_params(request)),
            self.config.credentials,
            algorithm=self.signature_algorithm_for(request),
        )

    def checkout_url(self, request: OperationRequest) -> str:
        """
        Return a LiqPay checkout link for ``request``.

        The payer is redirected to this URL to complete the payment on the
        LiqPay page.
        """
        envelope = self.build_envelope(request)
        return f"{self.config.checkout_url}?{urlencode(envelope.as_form())}"

    def send(self, request: OperationRequest) -> LiqPayResponse:
        envelope = self.build_envelope(request)
        logging.info(
            "Submitting LiqPay %s request to %s", request.ACTION.value, self.config.api_url
        )
        status, body = self.transport.send(envelope)
        payload = _parse_reply(status, body, self.config.api_url)
        response = LiqPayResponse.from_response(payload)
        logging.info(
            "LiqPay answered %s request with result=%s status=%s",
            request.ACTION.value,
            response.result,
            response.status,
        )
        return response

    def verify_callback(self, data: str, signature: str) -> VerificationResult:
        """Server callbacks are signed with SHA-1 unless configured otherwise."""
        return verify_callback(
            data,
            signature,
            self.config.credentials,
            algorithm=self.config.signature_algorithm or SignatureAlgorithm.SHA1,
        )

    def parse_callback(self, data: str, signature: str) -> Dict[str, Any]:
        """
        Verify a server callback and return its decoded parameters.

        Raises :class:`VerificationFailure` when the signature does not match.
        """
        self.verify_callback(data, signature).raise_for_failure()
        try:
            return decode(from_transport(data))
        except ValueError as exc:
            raise VerificationFailure(
                VerificationFailureReason.MALFORMED_INPUT, str(exc)
            ) from exc


def send_request(
    config: ClientConfig,
    request: OperationRequest,
    *,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
) -> LiqPayResponse:
    """
    One-shot helper that signs and sends ``request`` with ``config``.
    """
    client = LiqPayClient(config, transport=transport, session=session)
    return client.send(request)

"""
Verification of signed payloads received from LiqPay.

Verification fails closed: malformed input is reported as a failed
:class:`VerificationResult`, never as an exception the caller could forget to
handle.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .encoding import decode, from_transport, to_transport
from .errors import EncodingError, VerificationFailure, VerificationFailureReason
from .signing import Credentials, SignatureAlgorithm, compute_signature

__all__ = [
    "VerificationResult",
    "verify",
    "verify_callback",
]


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    reason: Optional[VerificationFailureReason] = None

    @classmethod
    def success(cls) -> "VerificationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: VerificationFailureReason) -> "VerificationResult":
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_failure(self) -> None:
        if not self.ok:
            raise VerificationFailure(
                self.reason or VerificationFailureReason.SIGNATURE_MISMATCH
            )


def _signature_is_well_formed(signature: object, algorithm: SignatureAlgorithm) -> bool:
    if not isinstance(signature, str):
        return False
    try:
        raw = base64.b64decode(signature.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error, ValueError):
        return False
    return len(raw) == algorithm.digest_size


def _payload_is_well_formed(payload: object) -> bool:
    if not isinstance(payload, (bytes, bytearray)):
        return False
    try:
        decode(bytes(payload))
    except EncodingError:
        return False
    return True


def _check(
    data: str,
    payload: object,
    provided_signature: object,
    credentials: Credentials,
    algorithm: SignatureAlgorithm,
) -> VerificationResult:
    if not _signature_is_well_formed(provided_signature, algorithm):
        logging.warning(
            "Rejecting response: signature is not a valid %s digest", algorithm.value
        )
        return VerificationResult.failure(VerificationFailureReason.MALFORMED_INPUT)
    if not _payload_is_well_formed(payload):
        logging.warning("Rejecting response: payload is not a JSON object")
        return VerificationResult.failure(VerificationFailureReason.MALFORMED_INPUT)

    expected = compute_signature(data, credentials.private_key, algorithm=algorithm)
    if not hmac.compare_digest(expected.encode("ascii"), provided_signature.encode("ascii")):
        logging.warning("Rejecting response: signature mismatch")
        return VerificationResult.failure(VerificationFailureReason.SIGNATURE_MISMATCH)
    return VerificationResult.success()


def verify(
    response_payload: bytes,
    provided_signature: str,
    credentials: Credentials,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.SHA1,
) -> VerificationResult:
    """
    Check ``provided_signature`` against the canonical ``response_payload``.

    The expected signature is computed over the base64 transport form of the
    payload and compared in constant time.
    """
    credentials.validate()
    algo = SignatureAlgorithm.parse(algorithm)
    if not isinstance(response_payload, (bytes, bytearray)):
        return VerificationResult.failure(VerificationFailureReason.MALFORMED_INPUT)
    payload = bytes(response_payload)
    return _check(to_transport(payload), payload, provided_signature, credentials, algo)


def verify_callback(
    data: Union[str, bytes, bytearray],
    signature: str,
    credentials: Credentials,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.SHA1,
) -> VerificationResult:
    """
    Verify a ``data``/``signature`` pair as posted by a LiqPay callback.

    The signature is checked over ``data`` exactly as received.
    """
    credentials.validate()
    algo = SignatureAlgorithm.parse(algorithm)
    try:
        payload = from_transport(data)
        text = data if isinstance(data, str) else bytes(data).decode("ascii")
    except (EncodingError, UnicodeDecodeError):
        logging.warning("Rejecting callback: data field is not valid base64")
        return VerificationResult.failure(VerificationFailureReason.MALFORMED_INPUT)
    return _check(text, payload, signature, credentials, algo)

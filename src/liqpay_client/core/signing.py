"""
Signing of canonical payloads with the merchant's LiqPay keys.
"""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .encoding import RequestParameters, encode, to_transport
from .errors import CredentialsError

__all__ = [
    "Credentials",
    "SignatureAlgorithm",
    "SignedEnvelope",
    "compute_signature",
    "sign",
    "sign_params",
]


class SignatureAlgorithm(str, Enum):
    SHA1 = "sha1"
    SHA3_256 = "sha3_256"

    @classmethod
    def parse(cls, value: "SignatureAlgorithm | str") -> "SignatureAlgorithm":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            supported = ", ".join(item.value for item in cls)
            raise ValueError(
                f"Unsupported signature algorithm '{value}' (expected one of: {supported})"
            ) from exc

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.value).digest_size

    def digest(self, data: bytes) -> bytes:
        return hashlib.new(self.value, data).digest()


def _check_key(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise CredentialsError(f"{name} must be a string")
    if not value:
        raise CredentialsError(f"{name} must not be empty")
    if any(char.isspace() for char in value):
        raise CredentialsError(f"{name} must not contain whitespace")
    return value


@dataclass(frozen=True)
class Credentials:
    """
    The merchant's key pair.

    The private key is kept out of ``repr()`` so credentials can be logged or
    shown in tracebacks without leaking the secret.
    """

    public_key: str
    private_key: str = field(repr=False)

    def validate(self) -> "Credentials":
        _check_key(self.public_key, "public_key")
        _check_key(self.private_key, "private_key")
        return self


@dataclass(frozen=True)
class SignedEnvelope:
    """The outbound unit sent to LiqPay."""

    public_key: str
    data: str
    signature: str

    def as_form(self) -> Dict[str, str]:
        """Return the form fields posted to the API."""
        return {"data": self.data, "signature": self.signature}


def compute_signature(
    data: str,
    private_key: str,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.SHA1,
) -> str:
    """
    Compute ``base64(digest(private_key + data + private_key))``.

    ``data`` is the base64 transport form of the payload, exactly as it is
    posted or received.
    """
    _check_key(private_key, "private_key")
    algo = SignatureAlgorithm.parse(algorithm)
    material = f"{private_key}{data}{private_key}".encode("utf-8")
    return base64.b64encode(algo.digest(material)).decode("ascii")


def sign(
    payload: bytes,
    credentials: Credentials,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.SHA1,
) -> SignedEnvelope:
    """
    Produce the signed envelope for a canonical ``payload``.

    Signing is deterministic: the same payload and credentials always give
    the same envelope.
    """
    credentials.validate()
    data = to_transport(payload)
    signature = compute_signature(data, credentials.private_key, algorithm=algorithm)
    return SignedEnvelope(
        public_key=credentials.public_key,
        data=data,
        signature=signature,
    )


def sign_params(
    params: RequestParameters,
    credentials: Credentials,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.SHA1,
) -> SignedEnvelope:
    """Shortcut for ``sign(encode(params), credentials)``."""
    return sign(encode(params), credentials, algorithm=algorithm)

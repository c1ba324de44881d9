"""
Exception hierarchy shared by the LiqPay client helpers.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

__all__ = [
    "ConfigError",
    "CredentialsError",
    "EncodingError",
    "LiqPayClientError",
    "LiqPayError",
    "TransportError",
    "VerificationFailure",
    "VerificationFailureReason",
]


class LiqPayClientError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(LiqPayClientError):
    """Raised when the supplied configuration is invalid."""


class EncodingError(LiqPayClientError, ValueError):
    """Raised when request parameters cannot be canonically encoded."""


class CredentialsError(LiqPayClientError, ValueError):
    """Raised when the public or private key is missing or malformed."""


class VerificationFailureReason(str, Enum):
    SIGNATURE_MISMATCH = "signature_mismatch"
    MALFORMED_INPUT = "malformed_input"


class VerificationFailure(LiqPayClientError):
    """Raised when a signed response does not verify."""

    def __init__(self, reason: VerificationFailureReason, detail: str = "") -> None:
        message = f"Response verification failed: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


class TransportError(LiqPayClientError, RuntimeError):
    """Raised when the HTTP exchange with LiqPay does not produce a usable reply."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class LiqPayError(LiqPayClientError):
    """Raised when LiqPay answers a request with ``result=error``."""

    def __init__(
        self,
        code: Optional[str],
        description: Optional[str],
        raw: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(f"LiqPay error {code or 'unknown'}: {description or 'no description'}")
        self.code = code
        self.description = description
        self.raw = dict(raw or {})

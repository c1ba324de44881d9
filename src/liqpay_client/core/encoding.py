"""
Canonical encoding of request parameters.

The canonical payload is the UTF-8 JSON rendering of the parameters with keys
sorted lexicographically and no insignificant whitespace, so the same logical
parameter set always produces the same bytes. LiqPay transports the payload as
standard base64 in the ``data`` form field.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
from decimal import Decimal
from typing import Any, Dict, Mapping, Union

from .errors import EncodingError

__all__ = [
    "ParameterValue",
    "RequestParameters",
    "decode",
    "encode",
    "from_transport",
    "to_transport",
]

ParameterValue = Union[str, int, float, bool, Decimal]
RequestParameters = Mapping[str, ParameterValue]


def _normalize_value(key: str, value: Any) -> Union[str, int, float, bool]:
    # bool is a subclass of int, so it is accepted by the int branch as-is.
    if isinstance(value, (str, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodingError(f"Parameter '{key}' must be a finite number")
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise EncodingError(f"Parameter '{key}' must be a finite number")
        return format(value, "f")
    if value is None:
        raise EncodingError(f"Parameter '{key}' must not be None")
    raise EncodingError(
        f"Parameter '{key}' has unsupported type {type(value).__name__}; "
        "only strings, numbers and booleans are allowed"
    )


def encode(params: RequestParameters) -> bytes:
    """
    Serialize ``params`` into the canonical payload.

    Nested structures, ``None`` values and non-string or empty keys are
    rejected with :class:`EncodingError`.
    """
    if not isinstance(params, Mapping):
        raise EncodingError(
            f"Request parameters must be a mapping, got {type(params).__name__}"
        )

    normalized: Dict[str, Union[str, int, float, bool]] = {}
    for key, value in params.items():
        if not isinstance(key, str):
            raise EncodingError(f"Parameter keys must be strings, got {key!r}")
        if not key:
            raise EncodingError("Parameter keys must not be empty")
        normalized[key] = _normalize_value(key, value)

    text = json.dumps(
        normalized,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def to_transport(payload: bytes) -> str:
    """Return the base64 ``data`` field for ``payload``."""
    return base64.b64encode(payload).decode("ascii")


def from_transport(data: Union[str, bytes]) -> bytes:
    """
    Decode a base64 ``data`` field back into payload bytes.

    Only the standard alphabet with correct padding is accepted.
    """
    try:
        raw = data.encode("ascii") if isinstance(data, str) else bytes(data)
        return base64.b64decode(raw, validate=True)
    except (UnicodeEncodeError, binascii.Error, TypeError, ValueError) as exc:
        raise EncodingError("Transport data is not valid base64") from exc


def decode(payload: bytes) -> Dict[str, Any]:
    """Parse a payload into a dictionary."""
    try:
        value = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EncodingError("Payload is not valid UTF-8 JSON") from exc
    if not isinstance(value, dict):
        raise EncodingError("Payload must be a JSON object")
    return value

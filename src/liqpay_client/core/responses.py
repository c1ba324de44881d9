"""
Parsed view of LiqPay API replies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import LiqPayError

__all__ = ["LiqPayResponse", "ResponseStatus"]


class ResponseStatus(str, Enum):
    ERROR = "error"
    FAILURE = "failure"
    REVERSED = "reversed"
    SUCCESS = "success"
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"
    HOLD_WAIT = "hold_wait"
    INVOICE_WAIT = "invoice_wait"
    CASH_WAIT = "cash_wait"
    PREPARED = "prepared"
    PROCESSING = "processing"
    WAIT_ACCEPT = "wait_accept"
    WAIT_SECURE = "wait_secure"
    WAIT_RESERVE = "wait_reserve"
    WAIT_COMPENSATION = "wait_compensation"
    TRY_AGAIN = "try_again"
    VERIFY_3DS = "3ds_verify"
    VERIFY_OTP = "otp_verify"
    VERIFY_CVV = "cvv_verify"


_FAILED_STATUSES = {ResponseStatus.ERROR.value, ResponseStatus.FAILURE.value}


@dataclass(frozen=True)
class LiqPayResponse:
    result: Optional[str]
    status: Optional[str]
    action: Optional[str]
    order_id: Optional[str]
    payment_id: Optional[int]
    amount: Optional[float]
    currency: Optional[str]
    err_code: Optional[str]
    err_description: Optional[str]
    raw: Dict[str, Any]

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "LiqPayResponse":
        return cls(
            result=payload.get("result"),
            status=payload.get("status"),
            action=payload.get("action"),
            order_id=payload.get("order_id"),
            payment_id=payload.get("payment_id"),
            amount=payload.get("amount"),
            currency=payload.get("currency"),
            err_code=payload.get("err_code"),
            err_description=payload.get("err_description"),
            raw=payload,
        )

    @property
    def ok(self) -> bool:
        if self.result == "error":
            return False
        return self.status not in _FAILED_STATUSES

    @property
    def known_status(self) -> Optional[ResponseStatus]:
        """The status as a :class:`ResponseStatus`, or ``None`` if unrecognised."""
        try:
            return ResponseStatus(self.status)
        except ValueError:
            return None

    def raise_for_result(self) -> "LiqPayResponse":
        if not self.ok:
            raise LiqPayError(self.err_code, self.err_description, self.raw)
        return self

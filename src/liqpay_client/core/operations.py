"""
Typed request variants for the LiqPay operations supported by the client.

Each variant is a frozen dataclass bound to one ``action``. Optional fields
left as ``None`` are omitted from the request; enums are lowered to their wire
values. The untyped parameter mapping only appears at the encoding boundary,
in :meth:`OperationRequest.to_params`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union

from .encoding import ParameterValue
from .signing import SignatureAlgorithm

__all__ = [
    "API_VERSION",
    "Action",
    "AddDataRequest",
    "ArchiveRequest",
    "CancelInvoiceRequest",
    "CancelSubscriptionRequest",
    "CardPaymentRequest",
    "Currency",
    "HoldCompletionRequest",
    "HoldRequest",
    "Language",
    "OperationRequest",
    "PayType",
    "RefundRequest",
    "ReportFormat",
    "SendInvoiceRequest",
    "SendReceiptRequest",
    "StatusRequest",
    "SubscribePeriodicity",
    "SubscribeRequest",
    "UpdateSubscriptionRequest",
]

API_VERSION = 7

Amount = Union[Decimal, int, float, str]


class Action(str, Enum):
    PAY = "pay"
    HOLD = "hold"
    HOLD_COMPLETION = "hold_completion"
    REFUND = "refund"
    STATUS = "status"
    INVOICE_SEND = "invoice_send"
    INVOICE_CANCEL = "invoice_cancel"
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"
    SUBSCRIBE_UPDATE = "subscribe_update"
    REPORTS = "reports"
    DATA = "data"
    TICKET = "ticket"


class Currency(str, Enum):
    UAH = "UAH"
    EUR = "EUR"
    USD = "USD"


class Language(str, Enum):
    EN = "en"
    UK = "uk"


class PayType(str, Enum):
    CARD = "card"
    LIQPAY = "liqpay"
    PRIVAT24 = "privat24"
    MASTERPASS = "masterpass"
    MOMENT_PART = "moment_part"
    PAYPART = "paypart"
    CASH = "cash"
    INVOICE = "invoice"
    QR = "qr"
    APPLE_PAY = "apay"
    GOOGLE_PAY = "gpay"


class SubscribePeriodicity(str, Enum):
    MONTH = "month"
    YEAR = "year"


class ReportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    XML = "xml"


def _wire(name: str, *, flag: bool = False) -> Dict[str, Any]:
    return {"wire": name, "flag": flag}


def _lower(value: Any) -> ParameterValue:
    if isinstance(value, Enum):
        return value.value
    return value


# LiqPay flags are the string "1" when set and absent otherwise.
def _lower_flag(value: bool) -> Optional[str]:
    return "1" if value else None


@dataclass(frozen=True)
class OperationRequest:
    """
    Base class for typed requests.

    Subclasses set :attr:`ACTION` and declare their fields; a field's wire name
    defaults to the attribute name and can be overridden with ``metadata``.
    Requests are signed with SHA3-256 unless the client configuration names
    another algorithm.
    """

    ACTION: ClassVar[Action]
    SIGNATURE_ALGORITHM: ClassVar[SignatureAlgorithm] = SignatureAlgorithm.SHA3_256

    def to_params(
        self,
        public_key: str,
        *,
        version: int = API_VERSION,
    ) -> Dict[str, ParameterValue]:
        params: Dict[str, ParameterValue] = {
            "version": version,
            "public_key": public_key,
            "action": self.ACTION.value,
        }
        for item in fields(self):
            value = getattr(self, item.name)
            if item.metadata.get("flag"):
                value = _lower_flag(value)
            if value is None:
                continue
            params[item.metadata.get("wire", item.name)] = _lower(value)
        return params


@dataclass(frozen=True)
class StatusRequest(OperationRequest):
    ACTION: ClassVar[Action] = Action.STATUS

    order_id: str


@dataclass(frozen=True)
class RefundRequest(OperationRequest):
    ACTION: ClassVar[Action] = Action.REFUND

    order_id: str
    amount: Amount


@dataclass(frozen=True)
class CardPaymentRequest(OperationRequest):
    """One-step card payment (``action=pay``)."""

    ACTION: ClassVar[Action] = Action.PAY

    amount: Amount
    currency: Currency
    card: str
    card_exp_month: str
    card_exp_year: str
    order_id: str
    description: str
    card_cvv: Optional[str] = None
    ip: Optional[str] = None
    phone: Optional[str] = None
    pay_type: Optional[PayType] = field(default=None, metadata=_wire("paytype"))
    language: Optional[Language] = None
    result_url: Optional[str] = None
    server_url: Optional[str] = None
    recurring_by_token: Optional[bool] = field(
        default=None, metadata=_wire("recurringbytoken", flag=True)
    )
    sender_first_name: Optional[str] = None
    sender_last_name: Optional[str] = None
    sender_email: Optional[str] = None
    sender_country_code: Optional[str] = None
    sender_city: Optional[str] = None
    sender_address: Optional[str] = None
    sender_postal_code: Optional[str] = None
    customer: Optional[str] = None
    detail_addenda: Optional[str] = field(default=None, metadata=_wire("dae"))
    info: Optional[str] = None
    product_category: Optional[str] = None
    product_description: Optional[str] = None
    product_name: Optional[str] = None
    product_url: Optional[str] = None


@dataclass(frozen=True)
class HoldRequest(OperationRequest):
    """Two-stage payment: block funds on the payer's card (``action=hold``)."""

    ACTION: ClassVar[Action] = Action.HOLD

    amount: Amount
    currency: Currency
    card: str
    card_exp_month: str
    card_exp_year: str
    order_id: str
    description: str
    card_cvv: Optional[str] = None
    ip: Optional[str] = None
    phone: Optional[str] = None
    language: Optional[Language] = None
    server_url: Optional[str] = None
    sender_first_name: Optional[str] = None
    sender_last_name: Optional[str] = None
    sender_email: Optional[str] = None
    customer: Optional[str] = None
    info: Optional[str] = None


@dataclass(frozen=True)
class HoldCompletionRequest(OperationRequest):
    """
    Charge funds blocked by an earlier :class:`HoldRequest`.

    Leaving ``amount`` unset completes the hold for the full blocked amount.
    """

    ACTION: ClassVar[Action] = Action.HOLD_COMPLETION

    order_id: str
    amount: Optional[Amount] = None


@dataclass(frozen=True)
class SendInvoiceRequest(OperationRequest):
    ACTION: ClassVar[Action] = Action.INVOICE_SEND

    amount: Amount
    currency: Currency
    order_id: str
    email: str
    description: Optional[str] = None
    phone: Optional[str] = None
    expiration_date: Optional[str] = field(default=None, metadata=_wire("expired_date"))
    goods: Optional[str] = None
    language: Optional[Language] = None
    result_url: Optional[str] = None
    server_url: Optional[str] = None


@dataclass(frozen=True)
class CancelInvoiceRequest(OperationRequest):
    ACTION: ClassVar[Action] = Action.INVOICE_CANCEL

    order_id: str


@dataclass(frozen=True)
class SubscribeRequest(OperationRequest):
    """Regular card payment (``action=subscribe``)."""

    ACTION: ClassVar[Action] = Action.SUBSCRIBE

    amount: Amount
    currency: Currency
    card: str
    card_exp_month: str
    card_exp_year: str
    order_id: str
    description: str
    subscribe_date_start: str
    subscribe_periodicity: SubscribePeriodicity
    card_cvv: Optional[str] = None
    ip: Optional[str] = None
    phone: Optional[str] = None
    language: Optional[Language] = None
    server_url: Optional[str] = None
    sender_first_name: Optional[str] = None
    sender_last_name: Optional[str] = None
    customer: Optional[str] = None
    info: Optional[str] = None


@dataclass(frozen=True)
class CancelSubscriptionRequest(OperationRequest):
    ACTION: ClassVar[Action] = Action.UNSUBSCRIBE

    order_id: str


@dataclass(frozen=True)
class UpdateSubscriptionRequest(OperationRequest):
    ACTION: ClassVar[Action] = Action.SUBSCRIBE_UPDATE

    amount: Amount
    currency: Currency
    order_id: str
    description: str


@dataclass(frozen=True)
class ArchiveRequest(OperationRequest):
    """
    Archive of received payments between two dates.

    Dates are passed through untouched; LiqPay expects millisecond UTC
    timestamps or ``YYYY-MM-DD HH:MM:SS`` strings.
    """

    ACTION: ClassVar[Action] = Action.REPORTS

    date_from: Union[str, int]
    date_to: Union[str, int]
    response_format: ReportFormat = field(
        default=ReportFormat.JSON, metadata=_wire("resp_format")
    )


@dataclass(frozen=True)
class AddDataRequest(OperationRequest):
    """Attach free-form ``info`` to an existing payment."""

    ACTION: ClassVar[Action] = Action.DATA

    order_id: str
    info: str


@dataclass(frozen=True)
class SendReceiptRequest(OperationRequest):
    """E-mail a payment receipt (``action=ticket``)."""

    ACTION: ClassVar[Action] = Action.TICKET

    email: str
    order_id: str
    payment_id: Optional[str] = None
    language: Optional[Language] = None

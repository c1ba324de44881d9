"""
Public facade for the LiqPay client package.

The most useful pieces are re-exported here so integrators can
``from liqpay_client import ...`` without navigating the package.
"""

from .api import create_client, send_request
from .core import (
    Action,
    AddDataRequest,
    ArchiveRequest,
    CancelInvoiceRequest,
    CancelSubscriptionRequest,
    CardPaymentRequest,
    ClientConfig,
    ClientParameters,
    ConfigError,
    Credentials,
    CredentialsError,
    Currency,
    EncodingError,
    HoldCompletionRequest,
    HoldRequest,
    HttpTransport,
    Language,
    LiqPayClient,
    LiqPayClientError,
    LiqPayError,
    LiqPayResponse,
    OperationRequest,
    PayType,
    RefundRequest,
    ReportFormat,
    ResponseStatus,
    SendInvoiceRequest,
    SendReceiptRequest,
    SignatureAlgorithm,
    SignedEnvelope,
    StatusRequest,
    SubscribePeriodicity,
    SubscribeRequest,
    TransportError,
    UpdateSubscriptionRequest,
    VerificationFailure,
    VerificationFailureReason,
    VerificationResult,
    encode,
    load_client_config,
    sign,
    verify,
    verify_callback,
)

__all__ = (
    "Action",
    "AddDataRequest",
    "ArchiveRequest",
    "CancelInvoiceRequest",
    "CancelSubscriptionRequest",
    "CardPaymentRequest",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "Credentials",
    "CredentialsError",
    "Currency",
    "EncodingError",
    "HoldCompletionRequest",
    "HoldRequest",
    "HttpTransport",
    "Language",
    "LiqPayClient",
    "LiqPayClientError",
    "LiqPayError",
    "LiqPayResponse",
    "OperationRequest",
    "PayType",
    "RefundRequest",
    "ReportFormat",
    "ResponseStatus",
    "SendInvoiceRequest",
    "SendReceiptRequest",
    "SignatureAlgorithm",
    "SignedEnvelope",
    "StatusRequest",
    "SubscribePeriodicity",
    "SubscribeRequest",
    "TransportError",
    "UpdateSubscriptionRequest",
    "VerificationFailure",
    "VerificationFailureReason",
    "VerificationResult",
    "create_client",
    "encode",
    "load_client_config",
    "send_request",
    "sign",
    "verify",
    "verify_callback",
)

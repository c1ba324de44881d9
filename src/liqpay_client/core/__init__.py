"""
Core primitives: canonical encoding, signing, verification and transport.
"""

from .client import HttpTransport, LiqPayClient, Transport, send_request
from .config import (
    ClientConfig,
    ClientParameters,
    load_client_config,
)
from .encoding import decode, encode, from_transport, to_transport
from .environment import ClientEnvironment, SettingSource, build_environment
from .errors import (
    ConfigError,
    CredentialsError,
    EncodingError,
    LiqPayClientError,
    LiqPayError,
    TransportError,
    VerificationFailure,
    VerificationFailureReason,
)
from .operations import (
    API_VERSION,
    Action,
    AddDataRequest,
    ArchiveRequest,
    CancelInvoiceRequest,
    CancelSubscriptionRequest,
    CardPaymentRequest,
    Currency,
    HoldCompletionRequest,
    HoldRequest,
    Language,
    OperationRequest,
    PayType,
    RefundRequest,
    ReportFormat,
    SendInvoiceRequest,
    SendReceiptRequest,
    StatusRequest,
    SubscribePeriodicity,
    SubscribeRequest,
    UpdateSubscriptionRequest,
)
from .responses import LiqPayResponse, ResponseStatus
from .signing import (
    Credentials,
    SignatureAlgorithm,
    SignedEnvelope,
    compute_signature,
    sign,
    sign_params,
)
from .verification import VerificationResult, verify, verify_callback

__all__ = [
    "API_VERSION",
    "Action",
    "AddDataRequest",
    "ArchiveRequest",
    "CancelInvoiceRequest",
    "CancelSubscriptionRequest",
    "CardPaymentRequest",
    "ClientConfig",
    "ClientEnvironment",
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
    "SettingSource",
    "SignatureAlgorithm",
    "SignedEnvelope",
    "StatusRequest",
    "SubscribePeriodicity",
    "SubscribeRequest",
    "Transport",
    "TransportError",
    "UpdateSubscriptionRequest",
    "VerificationFailure",
    "VerificationFailureReason",
    "VerificationResult",
    "build_environment",
    "compute_signature",
    "decode",
    "encode",
    "from_transport",
    "load_client_config",
    "send_request",
    "sign",
    "sign_params",
    "to_transport",
    "verify",
    "verify_callback",
]

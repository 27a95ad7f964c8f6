"""
payOS Python SDK

Client for the payOS merchant API: payment links, invoices, payouts and
webhooks, with request signing, response verification and automatic
retries.
"""
import logging as _logging

from ._version import __version__
from .client import AsyncPayOS, PayOS
from .crypto import CryptoProvider, HmacCryptoProvider, PortableCryptoProvider, create_crypto_provider
from .errors import (
    APIConnectionError,
    APIError,
    BadRequestError,
    ConfigurationError,
    ConnectionTimeoutError,
    ForbiddenError,
    InternalServerError,
    InvalidArgumentError,
    InvalidSignatureError,
    NotFoundError,
    PayOSError,
    RateLimitError,
    UnauthorizedError,
    UserAbortError,
    WebhookError,
)
from .models import (
    ConfirmWebhookResponse,
    CreatePaymentLinkRequest,
    CreatePaymentLinkResponse,
    EstimateCredit,
    Invoice,
    InvoiceRequest,
    InvoicesInfo,
    PaymentLink,
    PaymentLinkItem,
    PaymentLinkStatus,
    Payout,
    PayoutAccountInfo,
    PayoutApprovalState,
    PayoutBatchItem,
    PayoutBatchRequest,
    PayoutRequest,
    PayoutTransaction,
    PayoutTransactionState,
    Transaction,
    Webhook,
    WebhookData,
)
from .options import (
    FileDownload,
    RequestOptions,
    RequestSignatureMode,
    ResponseSignatureMode,
    SignatureOptions,
)
from .pagination import AsyncPage, Page, Pagination

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    "__version__",
    # Clients
    "AsyncPayOS",
    "PayOS",
    # Request descriptors
    "RequestOptions",
    "SignatureOptions",
    "RequestSignatureMode",
    "ResponseSignatureMode",
    "FileDownload",
    # Crypto
    "CryptoProvider",
    "HmacCryptoProvider",
    "PortableCryptoProvider",
    "create_crypto_provider",
    # Errors
    "PayOSError",
    "ConfigurationError",
    "InvalidArgumentError",
    "InvalidSignatureError",
    "WebhookError",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "InternalServerError",
    "APIConnectionError",
    "ConnectionTimeoutError",
    "UserAbortError",
    # Pagination
    "Page",
    "AsyncPage",
    "Pagination",
    # Models
    "CreatePaymentLinkRequest",
    "CreatePaymentLinkResponse",
    "PaymentLink",
    "PaymentLinkItem",
    "PaymentLinkStatus",
    "InvoiceRequest",
    "Transaction",
    "Invoice",
    "InvoicesInfo",
    "Payout",
    "PayoutRequest",
    "PayoutBatchItem",
    "PayoutBatchRequest",
    "PayoutTransaction",
    "PayoutTransactionState",
    "PayoutApprovalState",
    "EstimateCredit",
    "PayoutAccountInfo",
    "ConfirmWebhookResponse",
    "Webhook",
    "WebhookData",
]

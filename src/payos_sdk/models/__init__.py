"""payOS SDK models."""
from .base import PayOSModel
from .invoice import Invoice, InvoicesInfo
from .payment_request import (
    CreatePaymentLinkRequest,
    CreatePaymentLinkResponse,
    InvoiceRequest,
    PaymentLink,
    PaymentLinkItem,
    PaymentLinkStatus,
    TaxPercentage,
    Transaction,
)
from .payout import (
    EstimateCredit,
    Payout,
    PayoutAccountInfo,
    PayoutApprovalState,
    PayoutBatchItem,
    PayoutBatchRequest,
    PayoutRequest,
    PayoutTransaction,
    PayoutTransactionState,
)
from .webhook import ConfirmWebhookResponse, Webhook, WebhookData

__all__ = [
    "PayOSModel",
    "Invoice",
    "InvoicesInfo",
    "CreatePaymentLinkRequest",
    "CreatePaymentLinkResponse",
    "InvoiceRequest",
    "PaymentLink",
    "PaymentLinkItem",
    "PaymentLinkStatus",
    "TaxPercentage",
    "Transaction",
    "EstimateCredit",
    "Payout",
    "PayoutAccountInfo",
    "PayoutApprovalState",
    "PayoutBatchItem",
    "PayoutBatchRequest",
    "PayoutRequest",
    "PayoutTransaction",
    "PayoutTransactionState",
    "ConfirmWebhookResponse",
    "Webhook",
    "WebhookData",
]

"""payOS SDK resources."""
from .base import AsyncBaseResource, SyncBaseResource
from .batch import AsyncBatchResource, BatchResource
from .invoices import AsyncInvoicesResource, InvoicesResource
from .payment_requests import AsyncPaymentRequestsResource, PaymentRequestsResource
from .payouts import AsyncPayoutsResource, PayoutsResource
from .payouts_account import AsyncPayoutsAccountResource, PayoutsAccountResource
from .webhooks import AsyncWebhooksResource, WebhooksResource, verify_webhook

__all__ = [
    "AsyncBaseResource",
    "SyncBaseResource",
    "AsyncBatchResource",
    "BatchResource",
    "AsyncInvoicesResource",
    "InvoicesResource",
    "AsyncPaymentRequestsResource",
    "PaymentRequestsResource",
    "AsyncPayoutsResource",
    "PayoutsResource",
    "AsyncPayoutsAccountResource",
    "PayoutsAccountResource",
    "AsyncWebhooksResource",
    "WebhooksResource",
    "verify_webhook",
]

"""
Tests for WebhooksResource
"""
import httpx
import pytest
from pydantic import ValidationError

from payos_sdk import Webhook, WebhookError

from .conftest import BASE_URL, envelope, sign_body

WEBHOOK_DATA = {
    "orderCode": 123,
    "amount": 2000,
    "description": "Order 123",
    "accountNumber": "113366668888",
    "reference": "FT24001",
    "transactionDateTime": "2024-01-01 10:05:00",
    "currency": "VND",
    "paymentLinkId": "0a2b3c4d",
    "code": "00",
    "desc": "success",
    "counterAccountBankId": "",
    "counterAccountBankName": "",
    "counterAccountName": None,
    "counterAccountNumber": None,
    "virtualAccountName": "",
    "virtualAccountNumber": "",
}


def webhook_payload(data=None, signature=None):
    data = dict(WEBHOOK_DATA) if data is None else data
    return {
        "code": "00",
        "desc": "success",
        "success": True,
        "data": data,
        "signature": sign_body(data) if signature is None else signature,
    }


class TestVerifyWebhook:
    """Tests for webhook verification."""

    def test_verify_valid_payload(self, sync_client):
        data = sync_client.webhooks.verify(webhook_payload())

        assert data.order_code == 123
        assert data.payment_link_id == "0a2b3c4d"
        assert data.counter_account_name is None

    async def test_verify_with_async_client(self, client):
        data = client.webhooks.verify(Webhook.model_validate(webhook_payload()))

        assert data.reference == "FT24001"

    def test_keep_unknown_fields(self, sync_client):
        extended = {**WEBHOOK_DATA, "newField": "value"}

        data = sync_client.webhooks.verify(webhook_payload(extended))

        assert data.model_extra == {"newField": "value"}

    def test_reject_tampered_amount(self, sync_client):
        payload = webhook_payload()
        payload["data"] = {**payload["data"], "amount": 1}

        with pytest.raises(WebhookError, match="Data not integrity"):
            sync_client.webhooks.verify(payload)

    def test_reject_missing_data(self, sync_client):
        with pytest.raises(WebhookError, match="Invalid webhook data"):
            sync_client.webhooks.verify({"signature": "abc"})

    def test_reject_missing_signature(self, sync_client):
        payload = webhook_payload()
        del payload["signature"]

        with pytest.raises(WebhookError, match="Invalid signature"):
            sync_client.webhooks.verify(payload)

    def test_reject_signed_data_missing_fields(self, sync_client):
        partial = {"orderCode": 1, "amount": 2000}

        with pytest.raises(WebhookError, match="Invalid webhook data") as exc_info:
            sync_client.webhooks.verify(webhook_payload(partial))

        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.parametrize("data", ["garbage", [1, 2], 42])
    def test_reject_non_object_data(self, sync_client, data):
        with pytest.raises(WebhookError, match="Invalid webhook data"):
            sync_client.webhooks.verify({"data": data, "signature": "abc"})

    @pytest.mark.parametrize("payload", ["garbage", None, [WEBHOOK_DATA]])
    def test_reject_non_object_payload(self, sync_client, payload):
        with pytest.raises(WebhookError, match="Invalid webhook data"):
            sync_client.webhooks.verify(payload)

    def test_verify_nested_data_in_any_key_order(self, sync_client):
        data = {**WEBHOOK_DATA, "extra": {"outer": {"b": 2, "a": [{"y": 1, "x": 2}]}}}
        reordered = {**WEBHOOK_DATA, "extra": {"outer": {"a": [{"x": 2, "y": 1}], "b": 2}}}

        verified = sync_client.webhooks.verify(webhook_payload(reordered, signature=sign_body(data)))

        assert verified.model_extra == {"extra": reordered["extra"]}


class TestConfirmWebhook:
    """Tests for webhook URL registration."""

    async def test_confirm(self, client, server):
        server.add(
            envelope(
                {
                    "webhookUrl": "https://example.com/hook",
                    "accountName": "CONG TY ABC",
                    "accountNumber": "113366668888",
                    "name": "ABC",
                    "shortName": "ABC",
                }
            )
        )

        result = await client.webhooks.confirm("https://example.com/hook")

        assert str(server.last_request.url) == f"{BASE_URL}/confirm-webhook"
        assert server.last_json() == {"webhookUrl": "https://example.com/hook"}
        assert result.short_name == "ABC"

    async def test_reject_empty_url(self, client, server):
        with pytest.raises(WebhookError, match="Webhook URL invalid."):
            await client.webhooks.confirm("")
        assert server.requests == []

    async def test_wrap_api_errors(self, client, server):
        server.add(httpx.Response(400, json={"code": "20", "desc": "Webhook unreachable"}))

        with pytest.raises(WebhookError, match="Webhook validation failed: .*Webhook unreachable"):
            await client.webhooks.confirm("https://example.com/hook")

    def test_sync_confirm(self, sync_client, server):
        server.add(envelope({"webhookUrl": "https://example.com/hook"}))

        assert sync_client.webhooks.confirm("https://example.com/hook").webhook_url == (
            "https://example.com/hook"
        )

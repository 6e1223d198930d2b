"""Tests for transactional email."""

import json
from unittest.mock import patch

import httpx
import pytest

from tailordesk.core import email as email_module
from tailordesk.core.email import (
    BREVO_API_URL,
    PASSWORD_RESET_SUBJECT,
    EmailService,
    init_email,
)
from tailordesk.core.errors import EmailDeliveryError


def make_service(handler) -> EmailService:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return EmailService(
        api_key="xkeysib-test",
        sender_email="studio@example.com",
        sender_name="Stitch Studio",
        http_client=http_client,
    )


class TestInitEmail:
    """Test building the service from the environment."""

    def test_missing_api_key_warns_and_disables(self):
        with patch.object(email_module, "logger") as logger:
            service = init_email()

        assert service is None
        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "email.disabled"

    def test_configured_from_environment(self, monkeypatch):
        monkeypatch.setenv("BREVO_API_KEY", "xkeysib-test")
        monkeypatch.setenv("BREVO_SENDER_EMAIL", "studio@example.com")
        monkeypatch.setenv("BREVO_SENDER_NAME", "Stitch Studio")

        service = init_email()

        assert service.api_key == "xkeysib-test"
        assert service.sender_email == "studio@example.com"
        assert service.sender_name == "Stitch Studio"


class TestEmailService:
    """Test sending through the provider API."""

    @pytest.mark.asyncio
    async def test_send_posts_payload(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={"messageId": "<abc@brevo>"})

        service = make_service(handler)

        message_id = await service.send(
            "Grace@Example.com", "Your fitting", "<p>See you at 3pm</p>", to_name="Grace"
        )

        assert message_id == "<abc@brevo>"
        assert captured["url"] == BREVO_API_URL
        assert captured["headers"]["api-key"] == "xkeysib-test"
        assert captured["body"] == {
            "sender": {"email": "studio@example.com", "name": "Stitch Studio"},
            "to": [{"email": "grace@example.com", "name": "Grace"}],
            "subject": "Your fitting",
            "htmlContent": "<p>See you at 3pm</p>",
        }

    @pytest.mark.asyncio
    async def test_provider_error_raises(self):
        service = make_service(lambda request: httpx.Response(401, text="Key not found"))

        with pytest.raises(EmailDeliveryError) as exc_info:
            await service.send("grace@example.com", "Hi", "<p>Hi</p>")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Key not found"

    @pytest.mark.asyncio
    async def test_bad_recipient_never_hits_provider(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(201, json={})

        service = make_service(handler)

        with pytest.raises(ValueError, match="Invalid email format"):
            await service.send("not-an-address", "Hi", "<p>Hi</p>")

        assert calls == []

    @pytest.mark.asyncio
    async def test_password_reset_email(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={"messageId": "<reset@brevo>"})

        service = make_service(handler)

        await service.send_password_reset(
            "grace@example.com",
            "https://app.test/auth/reset-password?token=abc&x=1",
            to_name="Grace <Hemline>",
        )

        body = captured["body"]
        assert body["subject"] == PASSWORD_RESET_SUBJECT
        assert body["to"] == [{"email": "grace@example.com", "name": "Grace <Hemline>"}]
        assert "Hi Grace &lt;Hemline&gt;," in body["htmlContent"]
        link = 'href="https://app.test/auth/reset-password?token=abc&amp;x=1"'
        assert link in body["htmlContent"]
        assert "Stitch Studio" in body["htmlContent"]

    @pytest.mark.asyncio
    async def test_password_reset_email_without_name(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={})

        await make_service(handler).send_password_reset("grace@example.com", "https://app.test/r")

        assert captured["body"]["htmlContent"].startswith("<p>Hi,</p>")
        assert captured["body"]["to"] == [{"email": "grace@example.com"}]

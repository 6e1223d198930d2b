"""Transactional email through the Brevo HTTP API."""

import html
import os
from typing import Optional

import httpx

from tailordesk.core.errors import EmailDeliveryError
from tailordesk.core.logging import get_logger
from tailordesk.core.validators import validate_email

logger = get_logger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"
DEFAULT_SENDER_NAME = "TailorDesk"
DEFAULT_SENDER_EMAIL = "no-reply@tailordesk.app"
PASSWORD_RESET_SUBJECT = "Reset your password"


class EmailService:
    """Send transactional email with a Brevo API key."""

    def __init__(
        self,
        api_key: str,
        sender_email: str = DEFAULT_SENDER_EMAIL,
        sender_name: str = DEFAULT_SENDER_NAME,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name
        self._http_client = http_client
        self._timeout = timeout

    async def send(
        self,
        to: str,
        subject: str,
        html_content: str,
        to_name: Optional[str] = None,
    ) -> Optional[str]:
        """
        Send one transactional email.

        Returns:
            The provider message id, if the provider returned one

        Raises:
            ValueError: If the recipient address is malformed
            EmailDeliveryError: If the provider rejects the request
        """
        recipient = {"email": validate_email(to)}
        if to_name:
            recipient["name"] = to_name

        payload = {
            "sender": {"email": self.sender_email, "name": self.sender_name},
            "to": [recipient],
            "subject": subject,
            "htmlContent": html_content,
        }
        headers = {"api-key": self.api_key, "accept": "application/json"}

        if self._http_client is not None:
            response = await self._http_client.post(BREVO_API_URL, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(BREVO_API_URL, json=payload, headers=headers)

        if response.is_error:
            logger.error(
                "email.send_failed",
                status_code=response.status_code,
                subject=subject,
            )
            raise EmailDeliveryError(response.status_code, response.text)

        message_id = response.json().get("messageId")
        logger.info("email.sent", subject=subject, message_id=message_id)
        return message_id

    async def send_password_reset(
        self, to: str, reset_url: str, to_name: Optional[str] = None
    ) -> Optional[str]:
        """Send the reset link produced by /api/auth/forgot-password."""
        greeting = f"Hi {html.escape(to_name)}," if to_name else "Hi,"
        link = html.escape(reset_url, quote=True)
        html_content = (
            f"<p>{greeting}</p>"
            f"<p>We received a request to reset your {html.escape(self.sender_name)} password. "
            f'<a href="{link}">Choose a new password</a>. The link expires in one hour.</p>'
            "<p>If you did not ask for this, you can ignore this email.</p>"
        )
        return await self.send(to, PASSWORD_RESET_SUBJECT, html_content, to_name=to_name)


def init_email() -> Optional[EmailService]:
    """
    Build the email service from the environment.

    A missing BREVO_API_KEY only logs a warning: the app starts without email.
    """
    api_key = os.getenv("BREVO_API_KEY", "").strip()
    if not api_key:
        logger.warning(
            "email.disabled",
            message="BREVO_API_KEY is not configured. Email sending will not work.",
        )
        return None

    service = EmailService(
        api_key=api_key,
        sender_email=os.getenv("BREVO_SENDER_EMAIL", DEFAULT_SENDER_EMAIL),
        sender_name=os.getenv("BREVO_SENDER_NAME", DEFAULT_SENDER_NAME),
    )
    logger.info("email.initialized", sender=service.sender_email)
    return service

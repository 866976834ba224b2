"""Resend email API client.

API docs: https://resend.com/docs/api-reference/emails/send-email
"""

import logging

import httpx

from artistshield.core.config import ConfigurationError, Settings

logger = logging.getLogger(__name__)

SEND_PATH = "/emails"
DEFAULT_BASE_URL = "https://api.resend.com"
REQUEST_TIMEOUT = 15.0


class MailerError(Exception):
    """Resend rejected a message."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResendMailer:
    def __init__(self, api_key: str, sender: str, base_url: str = DEFAULT_BASE_URL):
        if not api_key:
            raise ConfigurationError("Email delivery not configured")
        self._api_key = api_key
        self.sender = sender
        self.base_url = base_url.rstrip("/")

    async def send(self, to: str, subject: str, html: str) -> dict:
        """Send one HTML email. Returns Resend's response body (contains the message id)."""
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
            response = await client.post(
                f"{self.base_url}{SEND_PATH}",
                json={"from": self.sender, "to": [to], "subject": subject, "html": html},
                headers={"Authorization": f"Bearer {self._api_key}"},
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            message = data.get("message") or f"Email provider error (HTTP {response.status_code})"
            logger.error("Resend rejected email: HTTP %s", response.status_code)
            raise MailerError(message, status_code=response.status_code)

        logger.info("Email sent: %s", data.get("id"))
        return data


def build_mailer(settings: Settings) -> ResendMailer:
    """Raises ConfigurationError when RESEND_API_KEY is not set."""
    return ResendMailer(
        settings.resend_api_key,
        sender=settings.split_sheet_sender,
        base_url=settings.resend_api_url,
    )

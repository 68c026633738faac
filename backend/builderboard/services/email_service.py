"""Transactional email delivery through the Resend HTTP API."""

import logging

import httpx

from builderboard.config import get_settings
from builderboard.exceptions import NotificationDeliveryException

logger = logging.getLogger(__name__)
settings = get_settings()


class EmailSender:
    """
    Thin client for Resend's ``POST /emails`` endpoint.

    Without an API key the sender runs as a development backend: messages are
    logged and nothing leaves the process.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        from_address: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.api_url = api_url or settings.resend_api_url
        self.from_address = from_address or settings.email_from
        self.timeout = timeout or settings.email_timeout

    async def send(self, to: str | list[str], subject: str, html: str) -> str | None:
        """Send one message. Returns the provider message id when known.

        Raises NotificationDeliveryException on transport errors and non-2xx
        responses.
        """
        recipients = [to] if isinstance(to, str) else list(to)

        if not self.api_key:
            logger.info(f"Email delivery disabled; '{subject}' to {', '.join(recipients)} logged only")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json={
                        "from": self.from_address,
                        "to": recipients,
                        "subject": subject,
                        "html": html,
                    },
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise NotificationDeliveryException(f"Email '{subject}' to {', '.join(recipients)} failed: {e}") from e

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        logger.info(f"Email '{subject}' sent to {', '.join(recipients)} (id={message_id})")
        return message_id


def get_email_sender() -> EmailSender:
    """FastAPI dependency; overridden in tests."""
    return EmailSender()

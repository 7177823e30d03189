"""Transactional email via the Resend HTTP API."""

import logging

import httpx

from app.errors import NotificationError

logger = logging.getLogger(__name__)


class EmailService:
    """Send HTML email through Resend."""

    def __init__(self, api_key: str, sender: str, api_url: str = "https://api.resend.com/emails") -> None:
        self._api_key = api_key
        self._sender = sender
        self._api_url = api_url

    async def send(self, to: str, subject: str, html: str) -> None:
        """Deliver one message. Raises NotificationError on any failure."""
        payload = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise NotificationError(f"Email timed out: {subject}") from e
        except httpx.HTTPError as e:
            raise NotificationError(f"Email transport error: {e}") from e

        if response.status_code >= 300:
            raise NotificationError(f"Resend returned {response.status_code}: {response.text[:200]}")

        logger.info("Email sent: %s", subject)

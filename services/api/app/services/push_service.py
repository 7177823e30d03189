"""Web Push delivery with VAPID signing."""

import asyncio
import json
import logging
from typing import Any

from pywebpush import WebPushException, webpush

from app.errors import NotificationError

logger = logging.getLogger(__name__)

PUSH_ICON = "/icon-192.png"
PUSH_URL = "/history"


def build_payload(title: str, body: str, url: str = PUSH_URL) -> dict[str, Any]:
    return {
        "title": title,
        "body": body,
        "icon": PUSH_ICON,
        "badge": PUSH_ICON,
        "data": {"url": url},
    }


class PushService:
    """Send notifications to browser push subscriptions."""

    def __init__(self, vapid_private_key: str, vapid_subject: str) -> None:
        self._vapid_private_key = vapid_private_key
        self._vapid_subject = vapid_subject

    def _send_sync(self, subscription: dict[str, Any], data: str) -> None:
        webpush(
            subscription_info=subscription,
            data=data,
            vapid_private_key=self._vapid_private_key,
            # pywebpush fills in aud/exp on the dict it is given
            vapid_claims={"sub": self._vapid_subject},
        )

    async def send(self, subscription: dict[str, Any], title: str, body: str) -> None:
        """Deliver one push message. Raises NotificationError on failure."""
        data = json.dumps(build_payload(title, body))
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._send_sync, subscription, data)
        except WebPushException as e:
            status = e.response.status_code if e.response is not None else None
            raise NotificationError(f"Web push rejected (status={status}): {e}") from e
        except (TypeError, ValueError) as e:
            raise NotificationError(f"Invalid push subscription: {e}") from e

        endpoint = str(subscription.get("endpoint", ""))
        logger.info("Web push sent to endpoint=%s...", endpoint[:40])

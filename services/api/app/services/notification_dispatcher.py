"""Best-effort fan-out of lifecycle notices to email and web push."""

import asyncio
import logging
from typing import Any

from app.config import Settings
from app.metrics import notifications_sent_total
from app.models.user import User
from app.services.channels import ChannelConfig, get_channel_config
from app.services.email_service import EmailService
from app.services.notification_templates import Notice
from app.services.push_service import PushService

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Sends a notice to a user on every channel they can be reached on.

    Channels are independent: a failure on one is logged and never affects
    the other or the caller.
    """

    def __init__(
        self,
        channels: ChannelConfig,
        email_service: EmailService,
        push_service: PushService,
    ) -> None:
        self._channels = channels
        self._email = email_service
        self._push = push_service

    async def _send_email(self, user: User, notice: Notice) -> bool:
        try:
            await self._email.send(to=user.email, subject=notice.subject, html=notice.html)
        except Exception as e:
            logger.error("Email failed for user %s: %s", user.id, e)
            notifications_sent_total.labels(channel="email", outcome="failed").inc()
            return False
        notifications_sent_total.labels(channel="email", outcome="sent").inc()
        return True

    async def _send_push(self, user: User, notice: Notice) -> bool:
        try:
            await self._push.send(user.push_subscription, title=notice.push_title, body=notice.push_body)
        except Exception as e:
            logger.error("Push notification failed for user %s: %s", user.id, e)
            notifications_sent_total.labels(channel="push", outcome="failed").inc()
            return False
        notifications_sent_total.labels(channel="push", outcome="sent").inc()
        return True

    async def dispatch(self, user: User | None, notice: Notice) -> dict[str, Any]:
        """Send ``notice`` to ``user``.

        Returns a summary of what happened per channel; ``None`` means the
        channel was skipped (disabled or no address for this user):
            {"email_sent": bool | None, "push_sent": bool | None}
        """
        result: dict[str, Any] = {"email_sent": None, "push_sent": None}
        if user is None:
            return result

        tasks: dict[str, Any] = {}
        if self._channels.email_enabled and user.email:
            tasks["email_sent"] = self._send_email(user, notice)
        if self._channels.push_enabled and user.push_subscription:
            tasks["push_sent"] = self._send_push(user, notice)

        if tasks:
            outcomes = await asyncio.gather(*tasks.values())
            result.update(zip(tasks.keys(), outcomes))
        return result


def get_notification_dispatcher(settings: Settings) -> NotificationDispatcher:
    """Factory that wires up a NotificationDispatcher with its channels."""
    channels = get_channel_config(settings)
    return NotificationDispatcher(
        channels=channels,
        email_service=EmailService(
            api_key=channels.resend_api_key,
            sender=channels.email_from,
            api_url=channels.resend_api_url,
        ),
        push_service=PushService(
            vapid_private_key=channels.vapid_private_key,
            vapid_subject=channels.vapid_subject,
        ),
    )

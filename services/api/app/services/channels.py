"""Process-wide notification channel configuration.

Built once at startup from settings and read-only afterwards.
"""

import logging
from dataclasses import dataclass

from app.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelConfig:
    email_enabled: bool
    push_enabled: bool
    email_from: str = ""
    resend_api_key: str = ""
    resend_api_url: str = ""
    vapid_public_key: str = ""
    vapid_private_key: str = ""
    vapid_subject: str = ""


def load_channel_config(settings: Settings) -> ChannelConfig:
    resend_key = settings.resend_api_key.get_secret_value().strip()
    vapid_private = settings.vapid_private_key.get_secret_value().strip()
    vapid_public = settings.vapid_public_key.strip()

    email_enabled = bool(resend_key)
    push_enabled = bool(vapid_private and vapid_public)

    if not email_enabled:
        logger.warning("RESEND_API_KEY not configured; email notifications disabled")
    if not push_enabled:
        logger.warning("VAPID keys not configured; web push notifications disabled")

    return ChannelConfig(
        email_enabled=email_enabled,
        push_enabled=push_enabled,
        email_from=settings.email_from,
        resend_api_key=resend_key,
        resend_api_url=settings.resend_api_url,
        vapid_public_key=vapid_public,
        vapid_private_key=vapid_private,
        vapid_subject=settings.vapid_subject,
    )


_channel_config: ChannelConfig | None = None


def init_channels(settings: Settings) -> ChannelConfig:
    """Build the channel configuration. Called from lifespan."""
    global _channel_config
    _channel_config = load_channel_config(settings)
    logger.info(
        "Notification channels: email=%s push=%s",
        _channel_config.email_enabled,
        _channel_config.push_enabled,
    )
    return _channel_config


def get_channel_config(settings: Settings) -> ChannelConfig:
    if _channel_config is None:
        return init_channels(settings)
    return _channel_config

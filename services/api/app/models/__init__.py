"""CarBlock database models."""

from app.models.alert import Alert, AlertStatus
from app.models.user import User

__all__ = [
    "User",
    "Alert",
    "AlertStatus",
]

"""User model: identity, contact details and the car plate they own."""

from typing import Any

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True, index=True)
    # Canonical dashed form, e.g. "12-345-67"
    car_plate: Mapped[str | None] = mapped_column(String(16), unique=True, nullable=True, index=True)
    # Browser PushSubscription JSON: {"endpoint": ..., "keys": {"p256dh": ..., "auth": ...}}
    push_subscription: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.id} plate={self.car_plate}>"

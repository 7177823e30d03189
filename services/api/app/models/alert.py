"""Alert model: one report that a plate is blocking someone."""

import enum
import uuid

from sqlalchemy import Boolean, Enum, Float, Index, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class AlertStatus(str, enum.Enum):
    ACTIVE = "active"
    LEAVING_SOON = "leaving_soon"
    LEAVING_NOW = "leaving_now"
    RESOLVED = "resolved"


class Alert(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "alerts"
    __table_args__ = (
        # At most one open alert per plate
        Index(
            "uq_alerts_open_plate",
            "detected_plate",
            unique=True,
            postgresql_where=text("status != 'resolved'"),
        ),
    )

    # sender_id / receiver_id are lookup-only references into users; no FK.
    sender_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True, index=True)
    receiver_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    detected_plate: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    manual_correction: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    ocr_confidence: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[AlertStatus] = mapped_column(
        Enum(
            AlertStatus,
            name="alert_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        default=AlertStatus.ACTIVE,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Alert {self.id} plate={self.detected_plate} status={self.status}>"

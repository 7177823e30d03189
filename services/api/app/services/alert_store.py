"""Durable CRUD over Alert rows."""

import logging
import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import StorageError
from app.models.alert import Alert, AlertStatus
from app.models.base import utcnow

logger = logging.getLogger(__name__)


class ActiveAlertExists(Exception):
    """The open-plate unique index rejected an insert."""


class AlertStore:
    """Alert persistence. Writes are committed before returning."""

    def __init__(self, db: AsyncSession, history_limit: int = 50) -> None:
        self._db = db
        self._history_limit = history_limit

    async def create(
        self,
        sender_id: uuid.UUID | None,
        receiver_id: uuid.UUID,
        plate: str,
        manual_correction: bool,
        confidence: float | None,
    ) -> Alert:
        alert = Alert(
            sender_id=sender_id,
            receiver_id=receiver_id,
            detected_plate=plate,
            manual_correction=manual_correction,
            ocr_confidence=confidence,
            status=AlertStatus.ACTIVE,
        )
        try:
            self._db.add(alert)
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise ActiveAlertExists(plate) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Alert insert failed for plate=%s: %s", plate, e)
            raise StorageError("Failed to save alert") from e
        return alert

    async def get(self, alert_id: uuid.UUID) -> Alert | None:
        return await self._db.get(Alert, alert_id)

    async def find_active_for_plate(self, plate: str) -> Alert | None:
        result = await self._db.execute(
            select(Alert)
            .where(Alert.detected_plate == plate, Alert.status != AlertStatus.RESOLVED)
            .order_by(Alert.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def set_status(self, alert: Alert, status: AlertStatus) -> Alert:
        alert.status = status
        alert.updated_at = utcnow()
        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Alert %s status update failed: %s", alert.id, e)
            raise StorageError("Failed to update alert") from e
        return alert

    async def list_for_user(self, user_id: uuid.UUID) -> tuple[list[Alert], list[Alert]]:
        """Return (sent, received), each newest first and capped."""
        sent = await self._db.execute(
            select(Alert)
            .where(Alert.sender_id == user_id)
            .order_by(Alert.created_at.desc())
            .limit(self._history_limit)
        )
        received = await self._db.execute(
            select(Alert)
            .where(Alert.receiver_id == user_id)
            .order_by(Alert.created_at.desc())
            .limit(self._history_limit)
        )
        return list(sent.scalars().all()), list(received.scalars().all())

    async def count_recent_by_sender(self, sender_id: uuid.UUID, since: datetime) -> int:
        result = await self._db.execute(
            select(func.count(Alert.id)).where(Alert.sender_id == sender_id, Alert.created_at >= since)
        )
        return result.scalar_one()

"""Alert lifecycle: creation, permission-gated status transitions and the
notifications each step triggers.

States only move forward: active -> leaving_soon -> leaving_now -> resolved.
``resolved`` is terminal and reachable from every other state. Only the
receiver (the plate owner) may move an alert to ``leaving_soon`` or
``leaving_now``; either party may resolve it.

The one-open-alert-per-plate rule is checked before insert and backed by a
partial unique index, so a lost race is resolved through the same rules.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from app.errors import (
    AlreadyBlocked,
    Forbidden,
    InvalidPlate,
    InvalidStatus,
    InvalidTransition,
    NotFound,
    PlateNotRegistered,
    RateLimited,
    SelfAlert,
    SenderUnknown,
    StorageError,
)
from app.metrics import alert_transitions_total, alerts_created_total, alerts_rejected_total
from app.models.alert import Alert, AlertStatus
from app.models.base import utcnow
from app.models.user import User
from app.services.alert_store import ActiveAlertExists, AlertStore
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.notification_templates import blocking_notice, leaving_notice, resolved_notice
from app.services.plate_directory import PlateDirectory
from app.services.plates import normalize_plate

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[AlertStatus, frozenset[AlertStatus]] = {
    AlertStatus.ACTIVE: frozenset({AlertStatus.LEAVING_SOON, AlertStatus.RESOLVED}),
    AlertStatus.LEAVING_SOON: frozenset({AlertStatus.LEAVING_NOW, AlertStatus.RESOLVED}),
    AlertStatus.LEAVING_NOW: frozenset({AlertStatus.RESOLVED}),
    AlertStatus.RESOLVED: frozenset(),
}

RECEIVER_ONLY = frozenset({AlertStatus.LEAVING_SOON, AlertStatus.LEAVING_NOW})


@dataclass
class SubmitOutcome:
    alert: Alert
    owner: User
    already_blocking: bool = False


class AlertLifecycle:
    """Drives alerts through their lifecycle."""

    def __init__(
        self,
        directory: PlateDirectory,
        store: AlertStore,
        dispatcher: NotificationDispatcher,
        enable_leaving_now: bool = True,
        rate_limit: int = 3,
        rate_window_seconds: int = 60,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._directory = directory
        self._store = store
        self._dispatcher = dispatcher
        self._enable_leaving_now = enable_leaving_now
        self._rate_limit = rate_limit
        self._rate_window = timedelta(seconds=rate_window_seconds)
        self._clock = clock

    @property
    def target_statuses(self) -> frozenset[AlertStatus]:
        """Statuses a caller may request."""
        statuses = {AlertStatus.LEAVING_SOON, AlertStatus.RESOLVED}
        if self._enable_leaving_now:
            statuses.add(AlertStatus.LEAVING_NOW)
        return frozenset(statuses)

    def _reject(self, reason: str, error: Exception) -> Exception:
        alerts_rejected_total.labels(reason=reason).inc()
        return error

    async def _resolve_sender(self, sender_id: uuid.UUID | None, sender_email: str | None) -> User:
        sender = None
        if sender_id is not None:
            sender = await self._directory.get(sender_id)
        if sender is None and sender_email:
            sender = await self._directory.lookup_by_contact(email=sender_email)
        if sender is None:
            raise self._reject("sender_unknown", SenderUnknown())
        return sender

    def _existing_outcome(self, existing: Alert, sender: User, owner: User) -> SubmitOutcome:
        if existing.sender_id == sender.id:
            logger.info("Sender %s already blocking plate=%s (alert %s)", sender.id, existing.detected_plate, existing.id)
            return SubmitOutcome(alert=existing, owner=owner, already_blocking=True)
        raise self._reject("already_blocked", AlreadyBlocked())

    async def submit_alert(
        self,
        plate: str,
        sender_id: uuid.UUID | None = None,
        sender_email: str | None = None,
        manual_correction: bool = False,
        confidence: float | None = None,
    ) -> SubmitOutcome:
        """Report ``plate`` as blocking the sender and notify its owner.

        Re-submitting an open alert by the same sender is a no-op that
        returns the existing alert with ``already_blocking=True``.
        """
        try:
            normalized = normalize_plate(plate)
        except InvalidPlate as e:
            raise self._reject("invalid_plate", e)

        sender = await self._resolve_sender(sender_id, sender_email)

        since = self._clock() - self._rate_window
        recent = await self._store.count_recent_by_sender(sender.id, since)
        if recent >= self._rate_limit:
            raise self._reject(
                "rate_limited",
                RateLimited(f"Rate limit: Max {self._rate_limit} alerts per minute"),
            )

        owner = await self._directory.lookup_owner(normalized)
        if owner is None:
            raise self._reject("not_registered", PlateNotRegistered())

        if owner.id == sender.id:
            raise self._reject("self_alert", SelfAlert())

        existing = await self._store.find_active_for_plate(normalized)
        if existing is not None:
            return self._existing_outcome(existing, sender, owner)

        try:
            alert = await self._store.create(
                sender_id=sender.id,
                receiver_id=owner.id,
                plate=normalized,
                manual_correction=manual_correction,
                confidence=confidence,
            )
        except ActiveAlertExists:
            # Another request opened an alert for this plate between check and insert
            existing = await self._store.find_active_for_plate(normalized)
            if existing is None:
                raise StorageError("Failed to save alert")
            return self._existing_outcome(existing, sender, owner)

        alerts_created_total.inc()
        logger.info("Alert %s created: plate=%s sender=%s receiver=%s", alert.id, normalized, sender.id, owner.id)

        await self._dispatcher.dispatch(owner, blocking_notice(normalized))
        return SubmitOutcome(alert=alert, owner=owner)

    def _parse_target(self, target_status: str | AlertStatus) -> AlertStatus:
        try:
            status = AlertStatus(target_status)
        except ValueError:
            raise InvalidStatus(f"Invalid status: {target_status}")
        if status not in self.target_statuses:
            raise InvalidStatus(f"Invalid status: {status.value}")
        return status

    async def update_status(
        self,
        alert_id: uuid.UUID,
        target_status: str | AlertStatus,
        acting_user_id: uuid.UUID,
    ) -> Alert:
        """Move an alert to ``target_status`` on behalf of ``acting_user_id``."""
        status = self._parse_target(target_status)

        alert = await self._store.get(alert_id)
        if alert is None:
            raise NotFound("Alert not found")

        if status in RECEIVER_ONLY:
            allowed = acting_user_id == alert.receiver_id
        else:
            allowed = acting_user_id in (alert.sender_id, alert.receiver_id)
        if not allowed:
            raise Forbidden()

        current = AlertStatus(alert.status)
        if status not in ALLOWED_TRANSITIONS[current]:
            raise InvalidTransition(f"Alert is {current.value}; cannot move to {status.value}")

        await self._store.set_status(alert, status)
        alert_transitions_total.labels(status=status.value).inc()
        logger.info("Alert %s: %s -> %s by %s", alert.id, current.value, status.value, acting_user_id)

        await self._notify_transition(alert, status, acting_user_id)
        return alert

    async def _notify_transition(self, alert: Alert, status: AlertStatus, acting_user_id: uuid.UUID) -> None:
        if status == AlertStatus.RESOLVED and acting_user_id != alert.sender_id:
            return

        # The status is already committed; a failed notice must not fail the request
        try:
            await self._send_transition_notice(alert, status)
        except Exception as e:
            logger.error("Alert %s: %s notice failed: %s", alert.id, status.value, e)

    async def _send_transition_notice(self, alert: Alert, status: AlertStatus) -> None:
        ids = {i for i in (alert.sender_id, alert.receiver_id) if i is not None}
        users = await self._directory.get_many(ids)
        sender = users.get(alert.sender_id) if alert.sender_id else None
        receiver = users.get(alert.receiver_id)

        if status in RECEIVER_ONLY:
            notice = leaving_notice(
                alert.detected_plate,
                owner_name=receiver.name if receiver else None,
                owner_phone=receiver.phone if receiver else None,
                urgent=status == AlertStatus.LEAVING_NOW,
            )
            await self._dispatcher.dispatch(sender, notice)
        else:
            notice = resolved_notice(alert.detected_plate, blocker_name=sender.name if sender else None)
            await self._dispatcher.dispatch(receiver, notice)

"""Shared test fixtures: in-memory directory and alert store."""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from app.models.alert import Alert, AlertStatus
from app.models.user import User
from app.services.alert_lifecycle import AlertLifecycle
from app.services.alert_store import ActiveAlertExists
from app.services.notification_dispatcher import NotificationDispatcher

OWNER_ID = uuid.UUID("aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa")
SENDER_ID = uuid.UUID("bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb")
OTHER_ID = uuid.UUID("cccccccc-cccc-cccc-cccc-cccccccccccc")

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_user(user_id=None, name=None, email=None, phone=None, car_plate=None, push_subscription=None) -> User:
    return User(
        id=user_id or uuid.uuid4(),
        name=name,
        email=email,
        phone=phone,
        car_plate=car_plate,
        push_subscription=push_subscription,
    )


class FakeDirectory:
    def __init__(self, users=()):
        self.users = {u.id: u for u in users}

    def add(self, user: User) -> User:
        self.users[user.id] = user
        return user

    async def lookup_owner(self, plate):
        return next((u for u in self.users.values() if u.car_plate == plate), None)

    async def lookup_by_contact(self, email=None, phone=None):
        for u in self.users.values():
            if email and u.email == email:
                return u
            if phone and u.phone == phone:
                return u
        return None

    async def get(self, user_id):
        return self.users.get(user_id)

    async def get_many(self, user_ids):
        return {i: self.users[i] for i in user_ids if i in self.users}


class FakeAlertStore:
    """Alert store kept in a list; ``clock`` stamps created_at."""

    def __init__(self, clock=lambda: NOW):
        self.alerts: list[Alert] = []
        self.clock = clock
        self.fail_next_create: Exception | None = None

    async def create(self, sender_id, receiver_id, plate, manual_correction, confidence):
        if self.fail_next_create is not None:
            error, self.fail_next_create = self.fail_next_create, None
            raise error
        if any(a.detected_plate == plate and a.status != AlertStatus.RESOLVED for a in self.alerts):
            raise ActiveAlertExists(plate)
        now = self.clock()
        alert = Alert(
            id=uuid.uuid4(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            detected_plate=plate,
            manual_correction=manual_correction,
            ocr_confidence=confidence,
            status=AlertStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        self.alerts.append(alert)
        return alert

    async def get(self, alert_id):
        return next((a for a in self.alerts if a.id == alert_id), None)

    async def find_active_for_plate(self, plate):
        open_alerts = [a for a in self.alerts if a.detected_plate == plate and a.status != AlertStatus.RESOLVED]
        return max(open_alerts, key=lambda a: a.created_at, default=None)

    async def set_status(self, alert, status):
        alert.status = status
        alert.updated_at = self.clock()
        return alert

    async def list_for_user(self, user_id):
        ordered = sorted(self.alerts, key=lambda a: a.created_at, reverse=True)
        return (
            [a for a in ordered if a.sender_id == user_id][:50],
            [a for a in ordered if a.receiver_id == user_id][:50],
        )

    async def count_recent_by_sender(self, sender_id, since):
        return sum(1 for a in self.alerts if a.sender_id == sender_id and a.created_at >= since)


class Clock:
    def __init__(self, start=NOW):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def owner() -> User:
    return make_user(OWNER_ID, name="Dana", email="o@x.com", phone="0501234567", car_plate="12-345-67")


@pytest.fixture
def sender() -> User:
    return make_user(SENDER_ID, name="Sam", email="s@x.com", phone="0527654321")


@pytest.fixture
def other_sender() -> User:
    return make_user(OTHER_ID, name="Olive", email="other@x.com", phone="0539999999")


@pytest.fixture
def directory(owner, sender, other_sender) -> FakeDirectory:
    return FakeDirectory([owner, sender, other_sender])


@pytest.fixture
def store(clock) -> FakeAlertStore:
    return FakeAlertStore(clock=clock)


@pytest.fixture
def dispatcher() -> AsyncMock:
    mock = AsyncMock(spec=NotificationDispatcher)
    mock.dispatch.return_value = {"email_sent": True, "push_sent": None}
    return mock


@pytest.fixture
def lifecycle(directory, store, dispatcher, clock) -> AlertLifecycle:
    return AlertLifecycle(
        directory=directory,
        store=store,
        dispatcher=dispatcher,
        enable_leaving_now=True,
        rate_limit=3,
        rate_window_seconds=60,
        clock=clock,
    )

"""Seed script: populates dev DB with a plate owner, a sender and one resolved alert."""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.config import get_settings
from app.models.alert import Alert, AlertStatus
from app.models.user import User

OWNER_ID = uuid.UUID("aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee")
SENDER_ID = uuid.UUID("bbbbbbbb-cccc-dddd-eeee-ffffffffffff")
OWNER_EMAIL = "owner@example.com"


async def seed():
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as db:
        result = await db.execute(text("SELECT id FROM users WHERE email = :email"), {"email": OWNER_EMAIL})
        if result.scalar():
            print(f"Seed user {OWNER_EMAIL} already exists, skipping.")
            await engine.dispose()
            return

        now = datetime.now(timezone.utc)

        owner = User(id=OWNER_ID, name="Dana Owner", email=OWNER_EMAIL, phone="0501234567", car_plate="12-345-67")
        sender = User(id=SENDER_ID, name="Sam Sender", email="sender@example.com", phone="0527654321", car_plate="123-45-678")
        db.add_all([owner, sender])
        await db.flush()

        db.add(
            Alert(
                sender_id=SENDER_ID,
                receiver_id=OWNER_ID,
                detected_plate=owner.car_plate,
                manual_correction=False,
                ocr_confidence=0.85,
                status=AlertStatus.RESOLVED,
                created_at=now - timedelta(days=1),
                updated_at=now - timedelta(days=1) + timedelta(minutes=12),
            )
        )

        await db.commit()
        print(f"Seeded: owner={OWNER_EMAIL} plate={owner.car_plate}, sender plate={sender.car_plate}, 1 alert")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())

"""User profile upserts with contact and plate uniqueness checks."""

import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ContactConflict, StorageError
from app.models.base import utcnow
from app.models.user import User
from app.services.plate_directory import PlateDirectory, normalize_phone
from app.services.plates import normalize_plate

logger = logging.getLogger(__name__)

# Field -> label used in conflict messages
_UNIQUE_FIELDS = {
    "email": "Email",
    "phone": "Phone number",
    "car_plate": "Car plate",
}


class ProfileService:
    def __init__(self, db: AsyncSession, directory: PlateDirectory) -> None:
        self._db = db
        self._directory = directory

    async def _find_existing(
        self, user_id: uuid.UUID | None, email: str | None, phone: str | None
    ) -> User | None:
        if user_id is not None:
            user = await self._directory.get(user_id)
            if user is not None:
                return user
        return await self._directory.lookup_by_contact(email=email, phone=phone)

    async def _check_unique(self, field: str, value: str, own_id: uuid.UUID | None) -> None:
        column = getattr(User, field)
        query = select(User.id).where(column == value)
        if own_id is not None:
            query = query.where(User.id != own_id)
        result = await self._db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise ContactConflict(f"{_UNIQUE_FIELDS[field]} already registered to another user")

    async def save_profile(
        self,
        user_id: uuid.UUID | None = None,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        car_plate: str | None = None,
    ) -> User:
        """Create or update a user.

        Fields left as ``None`` are not touched on update; an empty
        ``car_plate`` clears the plate. Phones are stored without separators.
        """
        updates: dict[str, Any] = {}
        if name is not None:
            updates["name"] = name.strip() or None
        if email is not None:
            updates["email"] = email.strip().lower() or None
        if phone is not None:
            updates["phone"] = normalize_phone(phone.strip()) or None
        if car_plate is not None:
            updates["car_plate"] = normalize_plate(car_plate) if car_plate.strip() else None

        user = await self._find_existing(user_id, updates.get("email"), updates.get("phone"))
        own_id = user.id if user is not None else None

        for field in _UNIQUE_FIELDS:
            value = updates.get(field)
            if value:
                await self._check_unique(field, value, own_id)

        if user is None:
            user = User(id=user_id or uuid.uuid4(), **updates)
            self._db.add(user)
            action = "created"
        else:
            for field, value in updates.items():
                setattr(user, field, value)
            user.updated_at = utcnow()
            action = "updated"

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise ContactConflict() from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Profile save failed: %s", e)
            raise StorageError("Failed to save profile") from e

        logger.info("Profile %s: user=%s plate=%s", action, user.id, user.car_plate)
        return user

    async def save_push_subscription(self, user_id: uuid.UUID, subscription: dict[str, Any]) -> bool:
        """Attach a push subscription to an existing user.

        Returns False when no such user exists.
        """
        user = await self._directory.get(user_id)
        if user is None:
            logger.info("No user %s; push subscription not stored", user_id)
            return False

        user.push_subscription = subscription
        user.updated_at = utcnow()
        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StorageError("Failed to save subscription") from e
        return True

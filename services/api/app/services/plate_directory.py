"""Read-only lookups of registered users by plate, contact or id."""

import re
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User

_PHONE_SEPARATORS = re.compile(r"[-\s]")


def normalize_phone(phone: str) -> str:
    return _PHONE_SEPARATORS.sub("", phone)


class PlateDirectory:
    """Resolves plates and contact details to registered users."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def lookup_owner(self, plate: str) -> User | None:
        """Exact match on an already-normalized plate."""
        result = await self._db.execute(select(User).where(User.car_plate == plate))
        return result.scalar_one_or_none()

    async def lookup_by_contact(self, email: str | None = None, phone: str | None = None) -> User | None:
        if email:
            result = await self._db.execute(select(User).where(User.email == email.strip().lower()))
            user = result.scalar_one_or_none()
            if user is not None:
                return user
        if phone:
            # Stored numbers may or may not carry separators
            for candidate in dict.fromkeys([phone, normalize_phone(phone)]):
                result = await self._db.execute(select(User).where(User.phone == candidate))
                user = result.scalar_one_or_none()
                if user is not None:
                    return user
        return None

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._db.get(User, user_id)

    async def get_many(self, user_ids: set[uuid.UUID]) -> dict[uuid.UUID, User]:
        if not user_ids:
            return {}
        result = await self._db.execute(select(User).where(User.id.in_(user_ids)))
        return {u.id: u for u in result.scalars().all()}

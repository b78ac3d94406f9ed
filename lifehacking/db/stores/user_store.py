from __future__ import annotations

from uuid import UUID

from lifehacking.db.collections import CollectionNames
from lifehacking.db.stores.base import SoftDeleteCollection
from lifehacking.entities import User


class UserStore(SoftDeleteCollection):
    """Existence checks for favorites owners; deleted accounts read as missing."""

    base_name = CollectionNames.USERS

    async def get_by_id(self, user_id: UUID) -> User | None:
        data = await self._read_active(user_id)
        if data is None:
            return None
        return User(
            id=UUID(data["id"]),
            email=data["email"],
            name=data["name"],
            is_deleted=bool(data.get("is_deleted", False)),
        )

    async def save(self, user: User) -> User:
        await self._write(
            user.id,
            {
                "id": str(user.id),
                "email": user.email,
                "name": user.name,
                "is_deleted": user.is_deleted,
            },
        )
        return user


__all__ = ["UserStore"]

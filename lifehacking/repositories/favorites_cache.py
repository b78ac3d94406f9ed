"""Caching of per-user favorite records."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from lifehacking.cache import CacheClient, favorites_user_key
from lifehacking.entities import FavoriteRecord


def favorites_generation_key(user_id: UUID) -> str:
    return f"{favorites_user_key(str(user_id))}:generation"


class FavoritesCache:
    """Cache a user's favorite records, never the tip content they point at.

    Tip details are always re-read so edits to a tip are visible immediately;
    only the ``(tip_id, added_at)`` list is kept, and every write path for the
    user invalidates it.

    Each listing is stored with the user's generation marker as it was before
    the store was read. :meth:`invalidate` replaces the marker, so a listing
    read before a concurrent write is never served afterwards, even when it
    reaches the cache after the invalidation.
    """

    def __init__(self, client: CacheClient, *, ttl_seconds: int | None = None) -> None:
        self._client = client
        self._ttl_seconds = ttl_seconds

    async def generation(self, user_id: UUID) -> str | None:
        """Return the current generation marker; read it before reading the store."""

        value = await self._client.get_json(favorites_generation_key(user_id))
        return value if isinstance(value, str) else None

    async def read_records(
        self, user_id: UUID, generation: str | None
    ) -> list[FavoriteRecord] | None:
        cached = await self._client.get_json(favorites_user_key(str(user_id)))
        if not isinstance(cached, dict) or cached.get("generation") != generation:
            return None
        return [
            FavoriteRecord(
                user_id=user_id,
                tip_id=UUID(item["tip_id"]),
                added_at=datetime.fromisoformat(item["added_at"]),
            )
            for item in cached["records"]
        ]

    async def write_records(
        self, user_id: UUID, records: list[FavoriteRecord], generation: str | None
    ) -> None:
        payload = {
            "generation": generation,
            "records": [
                {"tip_id": str(record.tip_id), "added_at": record.added_at.isoformat()}
                for record in records
            ],
        }
        await self._client.set_json(
            favorites_user_key(str(user_id)), payload, ttl=self._ttl_seconds
        )

    async def invalidate(self, user_id: UUID) -> None:
        # new marker first; a listing written later with the old one is ignored
        await self._client.set_json(favorites_generation_key(user_id), uuid4().hex)
        await self._client.delete(favorites_user_key(str(user_id)))


__all__ = ["FavoritesCache", "favorites_generation_key"]

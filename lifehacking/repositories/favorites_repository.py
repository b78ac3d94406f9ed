"""Favorites repository joining stored favorites with catalog tips.

The document store cannot join collections or filter favorites by tip
attributes, so searches load every favorite of the user, resolve their tips in
one batched lookup, and filter, sort and page the joined rows in memory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import UUID

from lifehacking.db.stores.favorite_store import FavoriteStore
from lifehacking.entities import FavoriteRecord
from lifehacking.protocols import TipLookup
from lifehacking.repositories.favorites_cache import FavoritesCache
from lifehacking.repositories.filters import (
    FavoriteTip,
    filter_favorite_tips,
    normalize_tip_filters,
    paginate_favorite_tips,
    sort_favorite_tips,
)
from lifehacking.schemas.favorites import TipQueryCriteria

logger = logging.getLogger(__name__)


class FavoritesRepository:
    def __init__(
        self,
        store: FavoriteStore,
        tips: TipLookup,
        *,
        cache: FavoritesCache | None = None,
    ) -> None:
        self._store = store
        self._tips = tips
        self._cache = cache

    async def get(self, user_id: UUID, tip_id: UUID) -> FavoriteRecord | None:
        return await self._store.get(user_id, tip_id)

    async def exists(self, user_id: UUID, tip_id: UUID) -> bool:
        return await self._store.exists(user_id, tip_id)

    async def existing_subset(self, user_id: UUID, tip_ids: Iterable[UUID]) -> set[UUID]:
        return await self._store.existing_subset(user_id, tip_ids)

    async def add(self, record: FavoriteRecord) -> FavoriteRecord:
        saved = await self._store.add(record)
        await self._invalidate(record.user_id)
        return saved

    async def add_batch(self, user_id: UUID, tip_ids: Iterable[UUID]) -> list[FavoriteRecord]:
        try:
            return await self._store.add_batch(user_id, tip_ids)
        finally:
            # earlier chunks may be committed even when a later one fails
            await self._invalidate(user_id)

    async def remove(self, user_id: UUID, tip_id: UUID) -> bool:
        removed = await self._store.remove(user_id, tip_id)
        if removed:
            await self._invalidate(user_id)
        return removed

    async def remove_all_for_user(self, user_id: UUID) -> int:
        try:
            return await self._store.remove_all_for_user(user_id)
        finally:
            await self._invalidate(user_id)

    async def search_user_favorites(
        self, user_id: UUID, criteria: TipQueryCriteria
    ) -> tuple[list[FavoriteTip], int]:
        """Return one page of ``(favorite, tip)`` pairs and the filtered total.

        Favorites whose tip no longer exists (or was soft-deleted) are left out
        of both the page and the total.
        """

        records = await self._records_for(user_id)
        if not records:
            return [], 0

        tips = await self._tips.get_by_ids([record.tip_id for record in records])
        joined = [
            (record, tips[record.tip_id]) for record in records if record.tip_id in tips
        ]
        dropped = len(records) - len(joined)
        if dropped:
            logger.info(
                "Skipping %d favorites of user %s whose tips are unavailable",
                dropped,
                user_id,
            )

        filtered = filter_favorite_tips(joined, filters=normalize_tip_filters(criteria))
        ordered = sort_favorite_tips(
            filtered, field=criteria.sort_field, direction=criteria.sort_direction
        )
        page = paginate_favorite_tips(
            ordered, page_number=criteria.page_number, page_size=criteria.page_size
        )
        return page, len(ordered)

    async def _records_for(self, user_id: UUID) -> list[FavoriteRecord]:
        """Return the user's favorites, most recently added first."""

        if self._cache is None:
            return await self._store.list_for_user(user_id, descending=True)

        generation = await self._cache.generation(user_id)
        cached = await self._cache.read_records(user_id, generation)
        if cached is not None:
            return cached

        records = await self._store.list_for_user(user_id, descending=True)
        await self._cache.write_records(user_id, records, generation)
        return records

    async def _invalidate(self, user_id: UUID) -> None:
        if self._cache is not None:
            await self._cache.invalidate(user_id)


__all__ = ["FavoritesRepository"]

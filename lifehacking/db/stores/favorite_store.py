"""Favorite documents keyed by ``<user_id>_<tip_id>``.

The composite key makes every write of a pair an overwrite, so a user can never
hold two records for the same tip regardless of how often the pair is written.
Bulk operations are split to honour the store limits: existence checks issue
one ``in`` query per group of :data:`MAX_IN_QUERY_VALUES` ids and bulk writes
commit one batch per group of :data:`MAX_BATCH_OPERATIONS` records. Groups run
sequentially; when one fails, the groups committed before it stay committed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any
from uuid import UUID

from lifehacking.db.chunking import chunked, unique_in_order
from lifehacking.db.collections import CollectionNameProvider, CollectionNames
from lifehacking.db.document_store import (
    MAX_BATCH_OPERATIONS,
    MAX_IN_QUERY_VALUES,
    DocumentStore,
)
from lifehacking.db.stores.base import format_datetime, parse_datetime
from lifehacking.entities import FavoriteRecord, favorite_key, utcnow
from lifehacking.schemas.favorites import SortDirection, TipQueryCriteria

logger = logging.getLogger(__name__)


def favorite_to_document(record: FavoriteRecord) -> dict[str, Any]:
    return {
        "user_id": str(record.user_id),
        "tip_id": str(record.tip_id),
        "added_at": format_datetime(record.added_at),
    }


def favorite_from_document(data: dict[str, Any]) -> FavoriteRecord:
    return FavoriteRecord(
        user_id=UUID(data["user_id"]),
        tip_id=UUID(data["tip_id"]),
        added_at=parse_datetime(data["added_at"]),
    )


class FavoriteStore:
    """CRUD and bulk operations over the favorites collection."""

    def __init__(self, store: DocumentStore, collections: CollectionNameProvider) -> None:
        self._store = store
        self.collection = collections.get(CollectionNames.FAVORITES)

    async def get(self, user_id: UUID, tip_id: UUID) -> FavoriteRecord | None:
        snapshot = await self._store.get(self.collection, favorite_key(user_id, tip_id))
        return favorite_from_document(snapshot.data) if snapshot is not None else None

    async def add(self, record: FavoriteRecord) -> FavoriteRecord:
        """Write ``record``; writing an existing pair overwrites it in place."""

        await self._store.set(self.collection, record.key, favorite_to_document(record))
        return record

    async def remove(self, user_id: UUID, tip_id: UUID) -> bool:
        """Delete the pair's record. Returns ``False`` when there was none."""

        key = favorite_key(user_id, tip_id)
        if await self._store.get(self.collection, key) is None:
            return False
        await self._store.delete(self.collection, key)
        return True

    async def exists(self, user_id: UUID, tip_id: UUID) -> bool:
        return await self.get(user_id, tip_id) is not None

    async def list_for_user(
        self, user_id: UUID, *, descending: bool = True
    ) -> list[FavoriteRecord]:
        """Return every favorite of ``user_id`` ordered by ``added_at``."""

        snapshots = await self._store.where_equal(
            self.collection, {"user_id": str(user_id)}
        )
        records = [favorite_from_document(snapshot.data) for snapshot in snapshots]
        records.sort(key=lambda record: record.added_at, reverse=descending)
        return records

    async def search(
        self, user_id: UUID, criteria: TipQueryCriteria
    ) -> tuple[list[UUID], int]:
        """Return one page of tip ids ordered by ``added_at`` and the total count.

        Only pagination and sort direction apply here; content filters need the
        tips themselves and are handled by the repository.
        """

        records = await self.list_for_user(
            user_id, descending=criteria.sort_direction is SortDirection.DESC
        )
        page = records[criteria.offset : criteria.offset + criteria.page_size]
        return [record.tip_id for record in page], len(records)

    async def existing_subset(self, user_id: UUID, tip_ids: Iterable[UUID]) -> set[UUID]:
        """Return which of ``tip_ids`` the user has already favorited."""

        candidates = [str(tip_id) for tip_id in unique_in_order(tip_ids)]
        existing: set[UUID] = set()
        queries = 0
        for chunk in chunked(candidates, MAX_IN_QUERY_VALUES):
            snapshots = await self._store.where_in(
                self.collection, "tip_id", chunk, filters={"user_id": str(user_id)}
            )
            queries += 1
            existing.update(UUID(snapshot.data["tip_id"]) for snapshot in snapshots)
        logger.debug(
            "Existence check for user %s: %d of %d already favorited (%d queries)",
            user_id,
            len(existing),
            len(candidates),
            queries,
        )
        return existing

    async def add_batch(self, user_id: UUID, tip_ids: Iterable[UUID]) -> list[FavoriteRecord]:
        """Persist a favorite for every id, one atomic batch per chunk.

        All records written by one call share a single ``added_at`` timestamp.
        """

        added_at = utcnow()
        records = [
            FavoriteRecord(user_id=user_id, tip_id=tip_id, added_at=added_at)
            for tip_id in tip_ids
        ]
        batches = 0
        for chunk in chunked(records, MAX_BATCH_OPERATIONS):
            batch = self._store.batch()
            for record in chunk:
                batch.set(self.collection, record.key, favorite_to_document(record))
            await batch.commit()
            batches += 1
        logger.debug(
            "Wrote %d favorites for user %s in %d batches", len(records), user_id, batches
        )
        return records

    async def remove_all_for_user(self, user_id: UUID) -> int:
        """Delete every favorite owned by ``user_id`` and return how many were removed."""

        records = await self.list_for_user(user_id)
        for chunk in chunked(records, MAX_BATCH_OPERATIONS):
            batch = self._store.batch()
            for record in chunk:
                batch.delete(self.collection, record.key)
            await batch.commit()
        logger.debug("Removed %d favorites for user %s", len(records), user_id)
        return len(records)


__all__ = ["FavoriteStore", "favorite_from_document", "favorite_to_document"]

"""Shared plumbing for collection-scoped readers over the document store."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID

from lifehacking.db.chunking import chunked, unique_in_order
from lifehacking.db.collections import CollectionNameProvider
from lifehacking.db.document_store import (
    DOCUMENT_ID,
    MAX_IN_QUERY_VALUES,
    DocumentStore,
)

logger = logging.getLogger(__name__)


def parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class SoftDeleteCollection:
    """Reads documents of one collection, treating ``is_deleted`` ones as absent."""

    base_name: str

    def __init__(self, store: DocumentStore, collections: CollectionNameProvider) -> None:
        self._store = store
        self.collection = collections.get(self.base_name)

    async def _read_active(self, entity_id: UUID) -> dict[str, Any] | None:
        snapshot = await self._store.get(self.collection, str(entity_id))
        if snapshot is None or snapshot.data.get("is_deleted", False):
            return None
        return snapshot.data

    async def _read_many_active(self, entity_ids: Iterable[UUID]) -> list[dict[str, Any]]:
        """Fetch documents by id in groups of at most ``MAX_IN_QUERY_VALUES``."""

        ids = [str(entity_id) for entity_id in unique_in_order(entity_ids)]
        found: list[dict[str, Any]] = []
        queries = 0
        for chunk in chunked(ids, MAX_IN_QUERY_VALUES):
            snapshots = await self._store.where_in(self.collection, DOCUMENT_ID, chunk)
            queries += 1
            found.extend(
                snapshot.data
                for snapshot in snapshots
                if not snapshot.data.get("is_deleted", False)
            )
        logger.debug(
            "Resolved %d of %d %s documents in %d queries",
            len(found),
            len(ids),
            self.base_name,
            queries,
        )
        return found

    async def _write(self, entity_id: UUID, data: dict[str, Any]) -> None:
        await self._store.set(self.collection, str(entity_id), data)


__all__ = ["SoftDeleteCollection", "format_datetime", "parse_datetime"]

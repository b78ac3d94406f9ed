"""Business logic powering the favorites API endpoints.

:class:`FavoritesService` is a thin facade over the four use cases in
:mod:`lifehacking.services.favorites`:

* ``add_favorite`` bookmarks one tip, rejecting duplicates.
* ``remove_favorite`` deletes one bookmark, rejecting unknown ones.
* ``search_favorites`` filters, sorts and pages favorites like the catalog.
* ``merge_favorites`` bulk-imports a client-side list, classifying every id.

:meth:`FavoritesService.from_store` wires the use cases onto a document store,
which is how both the FastAPI dependency and the tests build the service.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from fastapi import Depends

from lifehacking.cache import CacheClient, get_cache_client
from lifehacking.db.collections import CollectionNameProvider
from lifehacking.db.document_store import DocumentStore
from lifehacking.db.stores import CategoryStore, FavoriteStore, TipStore, UserStore
from lifehacking.protocols import CategoryLookup, TipLookup, UserLookup
from lifehacking.repositories import FavoritesCache, FavoritesRepository
from lifehacking.schemas.favorites import (
    FavoriteResponse,
    MergeFavoritesResponse,
    PagedFavoritesResponse,
    TipQueryCriteria,
)
from lifehacking.services.dependencies import get_collection_names, get_document_store
from lifehacking.services.favorites import (
    AddFavorite,
    MergeFavorites,
    RemoveFavorite,
    SearchFavorites,
)
from lifehacking.settings import get_settings


class FavoritesService:
    """Coordinates the favorites use cases behind one object."""

    def __init__(
        self,
        *,
        repository: FavoritesRepository,
        users: UserLookup,
        tips: TipLookup,
        categories: CategoryLookup,
    ) -> None:
        self._add = AddFavorite(
            favorites=repository, users=users, tips=tips, categories=categories
        )
        self._remove = RemoveFavorite(favorites=repository, users=users)
        self._search = SearchFavorites(
            favorites=repository, users=users, categories=categories
        )
        self._merge = MergeFavorites(favorites=repository, users=users, tips=tips)

    @classmethod
    def from_store(
        cls,
        store: DocumentStore,
        collections: CollectionNameProvider,
        *,
        cache: FavoritesCache | None = None,
        tips: TipLookup | None = None,
        categories: CategoryLookup | None = None,
        users: UserLookup | None = None,
    ) -> FavoritesService:
        """Build the service on ``store``; lookups may be swapped for test doubles."""

        tips = tips or TipStore(store, collections)
        repository = FavoritesRepository(
            FavoriteStore(store, collections), tips, cache=cache
        )
        return cls(
            repository=repository,
            users=users or UserStore(store, collections),
            tips=tips,
            categories=categories or CategoryStore(store, collections),
        )

    async def add_favorite(self, user_id: UUID, tip_id: UUID) -> FavoriteResponse:
        return await self._add.execute(user_id, tip_id)

    async def remove_favorite(self, user_id: UUID, tip_id: UUID) -> bool:
        return await self._remove.execute(user_id, tip_id)

    async def search_favorites(
        self, user_id: UUID, criteria: TipQueryCriteria
    ) -> PagedFavoritesResponse:
        return await self._search.execute(user_id, criteria)

    async def merge_favorites(
        self, user_id: UUID, tip_ids: Sequence[UUID]
    ) -> MergeFavoritesResponse:
        return await self._merge.execute(user_id, tip_ids)


async def get_favorites_service(
    store: DocumentStore = Depends(get_document_store),
    collections: CollectionNameProvider = Depends(get_collection_names),
    cache_client: CacheClient = Depends(get_cache_client),
) -> FavoritesService:
    """FastAPI dependency that wires the service together."""

    cache = FavoritesCache(
        cache_client, ttl_seconds=get_settings().favorites_cache_ttl_seconds
    )
    return FavoritesService.from_store(store, collections, cache=cache)


__all__ = ["FavoritesService", "get_favorites_service"]

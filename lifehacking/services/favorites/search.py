from __future__ import annotations

import math
from uuid import UUID

from lifehacking.exceptions import NotFoundError
from lifehacking.protocols import CategoryLookup, UserLookup
from lifehacking.repositories.favorites_repository import FavoritesRepository
from lifehacking.schemas.favorites import (
    PagedFavoritesResponse,
    PaginationMetadata,
    TipQueryCriteria,
)
from lifehacking.services.favorites.errors import storage_errors
from lifehacking.services.favorites.presentation import (
    category_name,
    to_favorite_response,
)


def total_pages(total_items: int, page_size: int) -> int:
    return math.ceil(total_items / page_size) if total_items else 0


class SearchFavorites:
    """Filter, sort and page a user's favorites with catalog search semantics."""

    def __init__(
        self,
        *,
        favorites: FavoritesRepository,
        users: UserLookup,
        categories: CategoryLookup,
    ) -> None:
        self._favorites = favorites
        self._users = users
        self._categories = categories

    async def execute(
        self, user_id: UUID, criteria: TipQueryCriteria
    ) -> PagedFavoritesResponse:
        with storage_errors("searching favorites"):
            if await self._users.get_by_id(user_id) is None:
                raise NotFoundError(f"User with ID '{user_id}' not found.")

            page, total = await self._favorites.search_user_favorites(user_id, criteria)

            # one lookup for every category on the page
            category_ids = list(dict.fromkeys(tip.category_id for _, tip in page))
            categories = await self._categories.get_by_ids(category_ids) if page else {}

        return PagedFavoritesResponse(
            favorites=[
                to_favorite_response(
                    record, tip, category_name=category_name(categories, tip.category_id)
                )
                for record, tip in page
            ],
            metadata=PaginationMetadata(
                total_items=total,
                page_number=criteria.page_number,
                page_size=criteria.page_size,
                total_pages=total_pages(total, criteria.page_size),
            ),
        )

from __future__ import annotations

import logging
from uuid import UUID

from lifehacking.entities import FavoriteRecord
from lifehacking.exceptions import ConflictError, NotFoundError
from lifehacking.protocols import CategoryLookup, TipLookup, UserLookup
from lifehacking.repositories.favorites_repository import FavoritesRepository
from lifehacking.schemas.favorites import FavoriteResponse
from lifehacking.services.favorites.errors import storage_errors
from lifehacking.services.favorites.presentation import (
    category_name,
    to_favorite_response,
)

logger = logging.getLogger(__name__)


class AddFavorite:
    """Bookmark a single tip for a user."""

    def __init__(
        self,
        *,
        favorites: FavoritesRepository,
        users: UserLookup,
        tips: TipLookup,
        categories: CategoryLookup,
    ) -> None:
        self._favorites = favorites
        self._users = users
        self._tips = tips
        self._categories = categories

    async def execute(self, user_id: UUID, tip_id: UUID) -> FavoriteResponse:
        """Create the favorite and return it with the tip's full detail.

        Raises :class:`NotFoundError` for an unknown user or tip and
        :class:`ConflictError` when the tip is already a favorite.
        """

        with storage_errors("adding the favorite"):
            if await self._users.get_by_id(user_id) is None:
                raise NotFoundError(f"User with ID '{user_id}' not found.")

            tip = await self._tips.get_by_id(tip_id)
            if tip is None:
                raise NotFoundError(f"Tip with ID '{tip_id}' not found.")

            if await self._favorites.exists(user_id, tip_id):
                raise ConflictError(f"Tip '{tip_id}' is already in user's favorites.")

            # nothing is written unless the category lookup succeeded
            categories = await self._categories.get_by_ids([tip.category_id])
            record = await self._favorites.add(FavoriteRecord.create(user_id, tip_id))

        logger.info("User %s added tip %s to favorites", user_id, tip_id)
        return to_favorite_response(
            record, tip, category_name=category_name(categories, tip.category_id)
        )

from __future__ import annotations

import logging
from uuid import UUID

from lifehacking.exceptions import NotFoundError
from lifehacking.protocols import UserLookup
from lifehacking.repositories.favorites_repository import FavoritesRepository
from lifehacking.services.favorites.errors import storage_errors

logger = logging.getLogger(__name__)


class RemoveFavorite:
    def __init__(self, *, favorites: FavoritesRepository, users: UserLookup) -> None:
        self._favorites = favorites
        self._users = users

    async def execute(self, user_id: UUID, tip_id: UUID) -> bool:
        """Delete the user's favorite; a missing favorite raises :class:`NotFoundError`."""

        with storage_errors("removing the favorite"):
            if await self._users.get_by_id(user_id) is None:
                raise NotFoundError(f"User with ID '{user_id}' not found.")

            # the store deletes only after finding the record
            if not await self._favorites.remove(user_id, tip_id):
                raise NotFoundError(f"Tip '{tip_id}' not found in user's favorites.")

        logger.info("User %s removed tip %s from favorites", user_id, tip_id)
        return True

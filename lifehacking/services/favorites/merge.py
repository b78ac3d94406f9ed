"""Reconcile a client-side favorites list into server storage.

Each candidate id is classified as added, skipped (already a favorite) or
failed (the tip does not exist). A bad id never aborts the merge. Merging is
idempotent: repeating a merge adds nothing and skips every valid id, so a
merge interrupted after some batches committed can simply be retried.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from lifehacking.db.chunking import unique_in_order
from lifehacking.exceptions import NotFoundError
from lifehacking.protocols import TipLookup, UserLookup
from lifehacking.repositories.favorites_repository import FavoritesRepository
from lifehacking.schemas.favorites import FailedTip, MergeFavoritesResponse
from lifehacking.services.favorites.errors import storage_errors

logger = logging.getLogger(__name__)

TIP_NOT_FOUND = "Tip not found"


class MergeFavorites:
    def __init__(
        self,
        *,
        favorites: FavoritesRepository,
        users: UserLookup,
        tips: TipLookup,
    ) -> None:
        self._favorites = favorites
        self._users = users
        self._tips = tips

    async def execute(
        self, user_id: UUID, tip_ids: Sequence[UUID]
    ) -> MergeFavoritesResponse:
        with storage_errors("merging favorites"):
            if await self._users.get_by_id(user_id) is None:
                raise NotFoundError(f"User with ID '{user_id}' not found.")

            total_received = len(tip_ids)
            candidates = unique_in_order(tip_ids)
            if not candidates:
                return MergeFavoritesResponse(total_received=total_received)

            found = await self._tips.get_by_ids(candidates)
            valid = [tip_id for tip_id in candidates if tip_id in found]
            failed = [
                FailedTip(tip_id=str(tip_id), error_message=TIP_NOT_FOUND)
                for tip_id in candidates
                if tip_id not in found
            ]

            existing: set[UUID] = set()
            to_add: list[UUID] = []
            if valid:
                existing = await self._favorites.existing_subset(user_id, valid)
                to_add = [tip_id for tip_id in valid if tip_id not in existing]
            if to_add:
                await self._favorites.add_batch(user_id, to_add)

        logger.info(
            "Merged favorites for user %s: received=%d added=%d skipped=%d failed=%d",
            user_id,
            total_received,
            len(to_add),
            len(existing),
            len(failed),
        )
        return MergeFavoritesResponse(
            total_received=total_received,
            added=len(to_add),
            skipped=len(existing),
            failed=failed,
        )

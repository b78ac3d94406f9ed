"""Read contracts the favorites engine consumes from the catalog engines."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable
from uuid import UUID

from lifehacking.entities import Category, Tip, User


@runtime_checkable
class UserLookup(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None:
        """Return the user, or ``None`` when it does not exist or was deleted."""


@runtime_checkable
class TipLookup(Protocol):
    """Tip reads; soft-deleted tips are reported as missing."""

    async def get_by_id(self, tip_id: UUID) -> Tip | None:
        """Return a single tip or ``None``."""

    async def get_by_ids(self, tip_ids: Iterable[UUID]) -> dict[UUID, Tip]:
        """Return found tips keyed by id. Missing ids are absent from the mapping."""


@runtime_checkable
class CategoryLookup(Protocol):
    async def get_by_ids(self, category_ids: Iterable[UUID]) -> dict[UUID, Category]:
        """Return found categories keyed by id."""


__all__ = ["CategoryLookup", "TipLookup", "UserLookup"]

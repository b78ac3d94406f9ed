from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from lifehacking.db.collections import CollectionNames
from lifehacking.db.stores.base import SoftDeleteCollection
from lifehacking.entities import Category


def _category_from_document(data: dict[str, Any]) -> Category:
    return Category(
        id=UUID(data["id"]),
        name=data["name"],
        is_deleted=bool(data.get("is_deleted", False)),
    )


class CategoryStore(SoftDeleteCollection):
    base_name = CollectionNames.CATEGORIES

    async def get_by_id(self, category_id: UUID) -> Category | None:
        data = await self._read_active(category_id)
        return _category_from_document(data) if data is not None else None

    async def get_by_ids(self, category_ids: Iterable[UUID]) -> dict[UUID, Category]:
        categories = [
            _category_from_document(data)
            for data in await self._read_many_active(category_ids)
        ]
        return {category.id: category for category in categories}

    async def save(self, category: Category) -> Category:
        await self._write(
            category.id,
            {
                "id": str(category.id),
                "name": category.name,
                "is_deleted": category.is_deleted,
            },
        )
        return category


__all__ = ["CategoryStore"]

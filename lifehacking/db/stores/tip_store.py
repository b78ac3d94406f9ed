"""Read-side access to catalog tips stored as documents."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from lifehacking.db.collections import CollectionNames
from lifehacking.db.stores.base import (
    SoftDeleteCollection,
    format_datetime,
    parse_datetime,
)
from lifehacking.entities import Tip, TipStep


def tip_to_document(tip: Tip) -> dict[str, Any]:
    return {
        "id": str(tip.id),
        "title": tip.title,
        "description": tip.description,
        "steps": [
            {"step_number": step.step_number, "description": step.description}
            for step in tip.steps
        ],
        "category_id": str(tip.category_id),
        "tags": list(tip.tags),
        "video_url": tip.video_url,
        "created_at": format_datetime(tip.created_at),
        "updated_at": format_datetime(tip.updated_at),
        "is_deleted": tip.is_deleted,
    }


def tip_from_document(data: dict[str, Any]) -> Tip:
    steps = sorted(
        (
            TipStep(step_number=int(step["step_number"]), description=step["description"])
            for step in data.get("steps") or []
        ),
        key=lambda step: step.step_number,
    )
    return Tip(
        id=UUID(data["id"]),
        title=data["title"],
        description=data.get("description", ""),
        category_id=UUID(data["category_id"]),
        created_at=parse_datetime(data["created_at"]),
        steps=tuple(steps),
        tags=tuple(data.get("tags") or ()),
        video_url=data.get("video_url"),
        updated_at=parse_datetime(data.get("updated_at")),
        is_deleted=bool(data.get("is_deleted", False)),
    )


class TipStore(SoftDeleteCollection):
    """Tip lookups; soft-deleted tips read as missing."""

    base_name = CollectionNames.TIPS

    async def get_by_id(self, tip_id: UUID) -> Tip | None:
        data = await self._read_active(tip_id)
        return tip_from_document(data) if data is not None else None

    async def get_by_ids(self, tip_ids: Iterable[UUID]) -> dict[UUID, Tip]:
        """Return the found, non-deleted tips keyed by id. Missing ids are omitted."""

        tips = [tip_from_document(data) for data in await self._read_many_active(tip_ids)]
        return {tip.id: tip for tip in tips}

    async def save(self, tip: Tip) -> Tip:
        await self._write(tip.id, tip_to_document(tip))
        return tip


__all__ = ["TipStore", "tip_from_document", "tip_to_document"]

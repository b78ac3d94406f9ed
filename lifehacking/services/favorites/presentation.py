"""Conversions from joined favorite/tip read models to API schemas."""

from __future__ import annotations

from collections.abc import Mapping
from uuid import UUID

from lifehacking.entities import Category, FavoriteRecord, Tip
from lifehacking.schemas.favorites import (
    UNKNOWN_CATEGORY_NAME,
    FavoriteResponse,
    TipDetail,
    TipStepDetail,
)


def category_name(categories: Mapping[UUID, Category], category_id: UUID) -> str:
    category = categories.get(category_id)
    return category.name if category is not None else UNKNOWN_CATEGORY_NAME


def to_tip_detail(tip: Tip, *, category_name: str) -> TipDetail:
    return TipDetail(
        id=tip.id,
        title=tip.title,
        description=tip.description,
        steps=[
            TipStepDetail(step_number=step.step_number, description=step.description)
            for step in tip.steps
        ],
        category_id=tip.category_id,
        category_name=category_name,
        tags=list(tip.tags),
        video_url=tip.video_url,
        created_at=tip.created_at,
        updated_at=tip.updated_at,
    )


def to_favorite_response(
    record: FavoriteRecord, tip: Tip, *, category_name: str
) -> FavoriteResponse:
    """``added_at`` is the favorite's own timestamp, not the tip's."""

    return FavoriteResponse(
        tip_id=record.tip_id,
        added_at=record.added_at,
        tip_details=to_tip_detail(tip, category_name=category_name),
    )


__all__ = ["category_name", "to_favorite_response", "to_tip_detail"]

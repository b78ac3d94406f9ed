"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
UNKNOWN_CATEGORY_NAME = "Unknown Category"


class TipSortField(str, Enum):
    TITLE = "title"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TipQueryCriteria(BaseModel):
    """Filter, sort and pagination options shared with the catalog search."""

    search_term: str | None = Field(
        None,
        description="Case-insensitive substring matched against title and description.",
    )
    category_id: UUID | None = Field(None, description="Only tips in this category.")
    tags: list[str] = Field(
        default_factory=list,
        description="Keep tips carrying at least one of these tags (case-insensitive).",
    )
    sort_field: TipSortField = TipSortField.CREATED_AT
    sort_direction: SortDirection = SortDirection.DESC
    page_number: int = Field(1, ge=1, description="1-based page index.")
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("search_term")
    @classmethod
    def _blank_term_means_no_filter(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("tags")
    @classmethod
    def _drop_blank_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value if tag.strip()]

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


class TipStepDetail(BaseModel):
    step_number: int
    description: str


class TipDetail(BaseModel):
    """Full tip content embedded in favorite responses."""

    id: UUID
    title: str
    description: str
    steps: list[TipStepDetail] = Field(default_factory=list)
    category_id: UUID
    category_name: str = Field(
        ...,
        description=f"Resolved category name, or '{UNKNOWN_CATEGORY_NAME}' when unavailable.",
    )
    tags: list[str] = Field(default_factory=list)
    video_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class FavoriteResponse(BaseModel):
    tip_id: UUID
    added_at: datetime = Field(
        ..., description="When the user bookmarked the tip (not when the tip was written)."
    )
    tip_details: TipDetail


class PaginationMetadata(BaseModel):
    total_items: int = Field(..., ge=0)
    page_number: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class PagedFavoritesResponse(BaseModel):
    favorites: list[FavoriteResponse] = Field(default_factory=list)
    metadata: PaginationMetadata


class MergeFavoritesRequest(BaseModel):
    """Client-side favorites uploaded on first login.

    Ids stay raw strings here so a malformed entry is reported per item
    instead of rejecting the whole payload.
    """

    tip_ids: list[str] = Field(default_factory=list)


class FailedTip(BaseModel):
    tip_id: str
    error_message: str


class MergeFavoritesResponse(BaseModel):
    total_received: int = Field(..., ge=0, description="Ids received before de-duplication.")
    added: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0, description="Ids that were already favorites.")
    failed: list[FailedTip] = Field(default_factory=list)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FailedTip",
    "FavoriteResponse",
    "MAX_PAGE_SIZE",
    "MergeFavoritesRequest",
    "MergeFavoritesResponse",
    "PagedFavoritesResponse",
    "PaginationMetadata",
    "SortDirection",
    "TipDetail",
    "TipQueryCriteria",
    "TipSortField",
    "TipStepDetail",
    "UNKNOWN_CATEGORY_NAME",
]

"""FastAPI router exposing the current user's favorites."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status

from lifehacking.schemas.favorites import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    FailedTip,
    FavoriteResponse,
    MergeFavoritesRequest,
    MergeFavoritesResponse,
    PagedFavoritesResponse,
    SortDirection,
    TipQueryCriteria,
    TipSortField,
)
from lifehacking.services.favorites_service import FavoritesService, get_favorites_service

logger = logging.getLogger(__name__)

INVALID_TIP_ID = "Invalid tip ID format"

router = APIRouter()


def get_current_user_id(
    x_user_id: str | None = Header(
        default=None,
        description="Internal id of the authenticated caller, set by the auth gateway.",
    ),
) -> UUID:
    """Resolve the caller; requests without a valid ``X-User-Id`` are rejected."""

    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user identity"
        ) from exc


def _parse_tip_ids(raw_ids: list[str]) -> tuple[list[UUID], list[FailedTip]]:
    valid: list[UUID] = []
    invalid: list[FailedTip] = []
    for raw in raw_ids:
        try:
            valid.append(UUID(raw))
        except ValueError:
            invalid.append(FailedTip(tip_id=raw, error_message=INVALID_TIP_ID))
    return valid, invalid


@router.get("", response_model=PagedFavoritesResponse)
async def list_favorites(
    q: str | None = Query(None, description="Search term for title and description"),
    category_id: UUID | None = Query(None),
    tags: list[str] | None = Query(None),
    order_by: TipSortField = Query(TipSortField.CREATED_AT),
    sort_direction: SortDirection = Query(SortDirection.DESC),
    page_number: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user_id: UUID = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> PagedFavoritesResponse:
    """Search the caller's favorites with catalog filter and sort semantics."""

    criteria = TipQueryCriteria(
        search_term=q,
        category_id=category_id,
        tags=tags or [],
        sort_field=order_by,
        sort_direction=sort_direction,
        page_number=page_number,
        page_size=page_size,
    )
    return await service.search_favorites(user_id, criteria)


@router.post("/merge", response_model=MergeFavoritesResponse)
async def merge_favorites(
    payload: MergeFavoritesRequest,
    user_id: UUID = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> MergeFavoritesResponse:
    """Import a client-side favorites list; malformed ids are reported, not rejected."""

    tip_ids, invalid = _parse_tip_ids(payload.tip_ids)
    if invalid:
        logger.warning(
            "Merge for user %s contained %d malformed tip ids", user_id, len(invalid)
        )

    result = await service.merge_favorites(user_id, tip_ids)
    if not invalid:
        return result
    return result.model_copy(
        update={
            "total_received": len(payload.tip_ids),
            "failed": [*result.failed, *invalid],
        }
    )


@router.post(
    "/{tip_id}",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_favorite(
    tip_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteResponse:
    return await service.add_favorite(user_id, tip_id)


@router.delete("/{tip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    tip_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    await service.remove_favorite(user_id, tip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

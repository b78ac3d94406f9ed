"""Pydantic schemas for API requests and responses."""

from lifehacking.schemas.error import (  # noqa: F401
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from lifehacking.schemas.favorites import (  # noqa: F401
    FailedTip,
    FavoriteResponse,
    MergeFavoritesRequest,
    MergeFavoritesResponse,
    PagedFavoritesResponse,
    PaginationMetadata,
    SortDirection,
    TipDetail,
    TipQueryCriteria,
    TipSortField,
    TipStepDetail,
)

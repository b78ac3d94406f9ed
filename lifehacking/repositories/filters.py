"""In-memory filtering, sorting and paging of a user's favorited tips."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID

from lifehacking.entities import FavoriteRecord, Tip
from lifehacking.schemas.favorites import SortDirection, TipQueryCriteria, TipSortField

FavoriteTip = tuple[FavoriteRecord, Tip]


@dataclass(frozen=True, slots=True)
class TipSearchFilters:
    """Normalised content filters; ``None`` or empty means no filtering."""

    search_term: str | None = None
    category_id: UUID | None = None
    tags: frozenset[str] = frozenset()


def normalize_tip_filters(criteria: TipQueryCriteria) -> TipSearchFilters:
    term = (criteria.search_term or "").strip().lower()
    return TipSearchFilters(
        search_term=term or None,
        category_id=criteria.category_id,
        tags=frozenset(tag.strip().lower() for tag in criteria.tags if tag.strip()),
    )


def _matches(tip: Tip, filters: TipSearchFilters) -> bool:
    if filters.search_term:
        haystack = f"{tip.title}\n{tip.description}".lower()
        if filters.search_term not in haystack:
            return False

    if filters.category_id is not None and tip.category_id != filters.category_id:
        return False

    if filters.tags:
        tip_tags = {tag.lower() for tag in tip.tags}
        if tip_tags.isdisjoint(filters.tags):
            return False

    return True


def filter_favorite_tips(
    entries: Iterable[FavoriteTip], *, filters: TipSearchFilters
) -> list[FavoriteTip]:
    return [entry for entry in entries if _matches(entry[1], filters)]


def _sort_key(field: TipSortField):
    if field is TipSortField.TITLE:
        return lambda entry: entry[1].title.casefold()
    if field is TipSortField.UPDATED_AT:
        return lambda entry: entry[1].last_modified
    return lambda entry: entry[1].created_at


def sort_favorite_tips(
    entries: Iterable[FavoriteTip],
    *,
    field: TipSortField,
    direction: SortDirection,
) -> list[FavoriteTip]:
    """Sort by a tip attribute. Ties keep their incoming order."""

    return sorted(
        entries, key=_sort_key(field), reverse=direction is SortDirection.DESC
    )


def paginate_favorite_tips(
    entries: Sequence[FavoriteTip], *, page_number: int, page_size: int
) -> list[FavoriteTip]:
    start_index = (page_number - 1) * page_size
    return list(entries[start_index : start_index + page_size])


__all__ = [
    "FavoriteTip",
    "TipSearchFilters",
    "filter_favorite_tips",
    "normalize_tip_filters",
    "paginate_favorite_tips",
    "sort_favorite_tips",
]

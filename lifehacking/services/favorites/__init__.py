"""Favorites use cases, one module per operation.

Each use case checks its preconditions through the read-side lookups, talks to
storage only through :class:`~lifehacking.repositories.FavoritesRepository`,
and converts unexpected storage failures into
:class:`~lifehacking.exceptions.InfrastructureError`.
"""

from .add import AddFavorite
from .merge import MergeFavorites
from .remove import RemoveFavorite
from .search import SearchFavorites

__all__ = [
    "AddFavorite",
    "MergeFavorites",
    "RemoveFavorite",
    "SearchFavorites",
]

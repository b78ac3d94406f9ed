"""Repositories composing the document stores into query-capable views."""

from lifehacking.repositories.favorites_cache import FavoritesCache
from lifehacking.repositories.favorites_repository import FavoritesRepository

__all__ = ["FavoritesCache", "FavoritesRepository"]

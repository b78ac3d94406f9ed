"""Collection-scoped stores built on :class:`~lifehacking.db.document_store.DocumentStore`."""

from lifehacking.db.stores.category_store import CategoryStore
from lifehacking.db.stores.favorite_store import FavoriteStore
from lifehacking.db.stores.tip_store import TipStore
from lifehacking.db.stores.user_store import UserStore

__all__ = [
    "CategoryStore",
    "FavoriteStore",
    "TipStore",
    "UserStore",
]

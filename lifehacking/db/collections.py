"""Collection naming for the document store.

Production code addresses fixed collection names. Test runs resolve the same
base names through :class:`TestCollectionNameProvider`, which appends a random
suffix per provider instance so concurrent suites never read each other's
documents.
"""

from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from lifehacking.settings import CollectionNamespace


class CollectionNames:
    FAVORITES = "favorites"
    TIPS = "tips"
    CATEGORIES = "categories"
    USERS = "users"


def _require_base_name(base_name: str) -> str:
    if base_name is None:
        raise TypeError("Base collection name is required")
    if not base_name.strip():
        raise ValueError("Base collection name cannot be empty or whitespace.")
    return base_name


@runtime_checkable
class CollectionNameProvider(Protocol):
    def get(self, base_name: str) -> str: ...


class ProductionCollectionNameProvider:
    """Return base collection names unchanged."""

    def get(self, base_name: str) -> str:
        return _require_base_name(base_name)


class TestCollectionNameProvider:
    """Suffix every base name with an 8-character identifier fixed per instance."""

    __test__ = False  # keep pytest from collecting this as a test class

    def __init__(self, suffix: str | None = None) -> None:
        self.suffix = suffix or uuid.uuid4().hex[:8]

    def get(self, base_name: str) -> str:
        return f"{_require_base_name(base_name)}_{self.suffix}"


def provider_for_namespace(namespace: CollectionNamespace) -> CollectionNameProvider:
    if namespace == "test":
        return TestCollectionNameProvider()
    return ProductionCollectionNameProvider()


__all__ = [
    "CollectionNameProvider",
    "CollectionNames",
    "ProductionCollectionNameProvider",
    "TestCollectionNameProvider",
    "provider_for_namespace",
]

from __future__ import annotations

import pytest

from lifehacking.db.collections import (
    CollectionNameProvider,
    CollectionNames,
    ProductionCollectionNameProvider,
    TestCollectionNameProvider,
    provider_for_namespace,
)


def test_production_names_are_unchanged() -> None:
    provider = ProductionCollectionNameProvider()

    assert provider.get(CollectionNames.FAVORITES) == "favorites"


def test_test_provider_suffix_is_stable_per_instance() -> None:
    provider = TestCollectionNameProvider()

    favorites = provider.get(CollectionNames.FAVORITES)
    tips = provider.get(CollectionNames.TIPS)

    assert favorites.startswith("favorites_")
    assert len(favorites.rsplit("_", 1)[1]) == 8
    assert favorites.rsplit("_", 1)[1] == tips.rsplit("_", 1)[1]


def test_test_providers_use_disjoint_namespaces() -> None:
    first = TestCollectionNameProvider()
    second = TestCollectionNameProvider()

    assert first.get("tips") != second.get("tips")


@pytest.mark.parametrize(
    "provider", [ProductionCollectionNameProvider(), TestCollectionNameProvider()]
)
@pytest.mark.parametrize("name", ["", "   "])
def test_blank_base_names_are_rejected(provider: CollectionNameProvider, name: str) -> None:
    with pytest.raises(ValueError):
        provider.get(name)


def test_provider_for_namespace() -> None:
    assert isinstance(provider_for_namespace("production"), ProductionCollectionNameProvider)
    assert isinstance(provider_for_namespace("test"), TestCollectionNameProvider)

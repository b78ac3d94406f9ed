"""Tests for the read-side tip, category and user stores."""

from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

import pytest

from lifehacking.entities import User
from tests.support.factories import make_tip


@pytest.mark.asyncio
async def test_tip_round_trip_keeps_steps_and_tags(catalog, tip_store) -> None:
    avocado = catalog.tip("avocado")

    loaded = await tip_store.get_by_id(avocado.id)

    assert loaded == avocado
    assert [step.step_number for step in loaded.steps] == [1, 2]


@pytest.mark.asyncio
async def test_soft_deleted_tip_reads_as_missing(catalog, tip_store) -> None:
    bread = catalog.tip("bread")
    await tip_store.save(replace(bread, is_deleted=True))

    assert await tip_store.get_by_id(bread.id) is None
    assert bread.id not in await tip_store.get_by_ids([bread.id])


@pytest.mark.asyncio
async def test_get_by_ids_chunks_into_groups_of_ten(
    catalog, tip_store, document_store
) -> None:
    extra = [make_tip(f"Tip {index}", category=catalog.kitchen) for index in range(19)]
    for tip in extra:
        await tip_store.save(tip)
    document_store.reset()

    wanted = [tip.id for tip in extra] + [catalog.tip("grout").id, uuid4()]
    found = await tip_store.get_by_ids(wanted)

    assert set(found) == {tip.id for tip in extra} | {catalog.tip("grout").id}
    assert [size for _, _, size in document_store.in_queries] == [10, 10, 1]


@pytest.mark.asyncio
async def test_get_by_ids_deduplicates_and_handles_empty_input(
    catalog, tip_store, document_store
) -> None:
    grout = catalog.tip("grout")

    assert await tip_store.get_by_ids([]) == {}
    assert list(await tip_store.get_by_ids([grout.id, grout.id])) == [grout.id]
    assert [size for _, _, size in document_store.in_queries] == [1]


@pytest.mark.asyncio
async def test_category_lookup_skips_deleted_categories(catalog, category_store) -> None:
    await category_store.save(replace(catalog.cleaning, is_deleted=True))

    found = await category_store.get_by_ids([catalog.kitchen.id, catalog.cleaning.id])

    assert list(found) == [catalog.kitchen.id]
    assert found[catalog.kitchen.id].name == "Kitchen"
    assert await category_store.get_by_id(catalog.cleaning.id) is None


@pytest.mark.asyncio
async def test_user_lookup(catalog, user_store) -> None:
    assert await user_store.get_by_id(catalog.user.id) == catalog.user
    assert await user_store.get_by_id(uuid4()) is None

    gone = await user_store.save(
        User(id=uuid4(), email="gone@example.com", name="Gone", is_deleted=True)
    )
    assert await user_store.get_by_id(gone.id) is None

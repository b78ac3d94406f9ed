from __future__ import annotations

import pytest

from lifehacking.exceptions import NotFoundError


@pytest.mark.asyncio
async def test_remove_existing_favorite(service, catalog, favorite_store) -> None:
    zipper = catalog.tip("zipper")
    await service.add_favorite(catalog.user.id, zipper.id)

    assert await service.remove_favorite(catalog.user.id, zipper.id) is True
    assert not await favorite_store.exists(catalog.user.id, zipper.id)


@pytest.mark.asyncio
async def test_removing_absent_favorite_is_not_found(
    service, catalog, document_store
) -> None:
    with pytest.raises(NotFoundError, match="not found in user's favorites"):
        await service.remove_favorite(catalog.user.id, catalog.tip("zipper").id)

    assert document_store.commits == []


@pytest.mark.asyncio
async def test_remove_for_unknown_user(service, catalog, unknown_id) -> None:
    with pytest.raises(NotFoundError, match="User"):
        await service.remove_favorite(unknown_id, catalog.tip("zipper").id)


@pytest.mark.asyncio
async def test_remove_leaves_other_favorites(service, catalog, favorite_store) -> None:
    await service.add_favorite(catalog.user.id, catalog.tip("zipper").id)
    await service.add_favorite(catalog.user.id, catalog.tip("grout").id)

    await service.remove_favorite(catalog.user.id, catalog.tip("zipper").id)

    remaining = await favorite_store.list_for_user(catalog.user.id)
    assert [record.tip_id for record in remaining] == [catalog.tip("grout").id]


@pytest.mark.asyncio
async def test_remove_reads_the_favorite_once(
    service, catalog, favorite_store, document_store
) -> None:
    grout = catalog.tip("grout")
    await service.add_favorite(catalog.user.id, grout.id)
    document_store.reset()

    await service.remove_favorite(catalog.user.id, grout.id)

    favorite_reads = [
        key for collection, key in document_store.gets if collection == favorite_store.collection
    ]
    assert favorite_reads == [f"{catalog.user.id}_{grout.id}"]
    assert document_store.commits == [1]

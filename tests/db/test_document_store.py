"""Tests for the limit-enforcing document store primitives."""

from __future__ import annotations

import pytest

from lifehacking.db.document_store import (
    DOCUMENT_ID,
    MAX_BATCH_OPERATIONS,
    MAX_IN_QUERY_VALUES,
    DocumentStoreLimitError,
)


@pytest.mark.asyncio
async def test_set_get_and_overwrite(document_store) -> None:
    await document_store.set("notes", "a", {"title": "first"})
    await document_store.set("notes", "a", {"title": "second"})

    snapshot = await document_store.get("notes", "a")

    assert snapshot is not None
    assert snapshot.id == "a"
    assert snapshot.data == {"title": "second"}


@pytest.mark.asyncio
async def test_get_missing_document_returns_none(document_store) -> None:
    assert await document_store.get("notes", "missing") is None


@pytest.mark.asyncio
async def test_collections_are_isolated(document_store) -> None:
    await document_store.set("notes_a", "same-id", {"owner": "a"})
    await document_store.set("notes_b", "same-id", {"owner": "b"})

    assert (await document_store.get("notes_a", "same-id")).data["owner"] == "a"
    assert (await document_store.where_equal("notes_b", {"owner": "a"})) == []


@pytest.mark.asyncio
async def test_delete_is_a_noop_for_missing_documents(document_store) -> None:
    await document_store.set("notes", "a", {"title": "x"})

    await document_store.delete("notes", "a")
    await document_store.delete("notes", "a")

    assert await document_store.get("notes", "a") is None


@pytest.mark.asyncio
async def test_where_equal_matches_strings_and_booleans(document_store) -> None:
    await document_store.set("tips", "1", {"owner": "u1", "is_deleted": False})
    await document_store.set("tips", "2", {"owner": "u1", "is_deleted": True})
    await document_store.set("tips", "3", {"owner": "u2", "is_deleted": False})

    owned = await document_store.where_equal("tips", {"owner": "u1"})
    active = await document_store.where_equal(
        "tips", {"owner": "u1", "is_deleted": False}
    )

    assert [snapshot.id for snapshot in owned] == ["1", "2"]
    assert [snapshot.id for snapshot in active] == ["1"]


@pytest.mark.asyncio
async def test_where_in_by_field_and_by_document_id(document_store) -> None:
    for index in range(5):
        await document_store.set(
            "tips", f"doc-{index}", {"tag": f"t{index}", "owner": "u1" if index % 2 else "u2"}
        )

    by_field = await document_store.where_in(
        "tips", "tag", ["t1", "t2", "t3"], filters={"owner": "u1"}
    )
    by_id = await document_store.where_in("tips", DOCUMENT_ID, ["doc-0", "doc-4", "nope"])

    assert [snapshot.id for snapshot in by_field] == ["doc-1", "doc-3"]
    assert [snapshot.id for snapshot in by_id] == ["doc-0", "doc-4"]


@pytest.mark.asyncio
async def test_where_in_rejects_more_than_ten_values(document_store) -> None:
    values = [f"v{index}" for index in range(MAX_IN_QUERY_VALUES + 1)]

    with pytest.raises(DocumentStoreLimitError):
        await document_store.where_in("tips", "tag", values)

    assert await document_store.where_in("tips", "tag", values[:MAX_IN_QUERY_VALUES]) == []


@pytest.mark.asyncio
async def test_where_in_with_no_values_returns_nothing(document_store) -> None:
    await document_store.set("tips", "a", {"tag": "x"})

    assert await document_store.where_in("tips", "tag", []) == []


@pytest.mark.asyncio
async def test_batch_commits_all_operations_together(document_store) -> None:
    await document_store.set("notes", "stale", {"v": 0})

    batch = document_store.batch()
    batch.set("notes", "a", {"v": 1})
    batch.set("notes", "b", {"v": 2})
    batch.delete("notes", "stale")
    assert len(batch) == 3
    await batch.commit()

    remaining = await document_store.where_in("notes", DOCUMENT_ID, ["a", "b", "stale"])
    assert [snapshot.id for snapshot in remaining] == ["a", "b"]


@pytest.mark.asyncio
async def test_batch_rejects_operation_beyond_limit(document_store) -> None:
    batch = document_store.batch()
    for index in range(MAX_BATCH_OPERATIONS):
        batch.set("notes", str(index), {})

    with pytest.raises(DocumentStoreLimitError):
        batch.set("notes", "one-too-many", {})

    assert len(batch) == MAX_BATCH_OPERATIONS


@pytest.mark.asyncio
async def test_batch_cannot_be_committed_twice(document_store) -> None:
    batch = document_store.batch()
    batch.set("notes", "a", {})
    await batch.commit()

    with pytest.raises(RuntimeError):
        await batch.commit()
    with pytest.raises(RuntimeError):
        batch.set("notes", "b", {})


@pytest.mark.asyncio
async def test_rows_are_stamped_with_the_shared_clock(
    document_store, session_factory
) -> None:
    from lifehacking import entities
    from lifehacking.db import models

    assert models.utcnow is entities.utcnow
    before = entities.utcnow().replace(tzinfo=None)

    await document_store.set("notes", "stamped", {"title": "x"})

    async with session_factory() as session:
        row = await session.get(models.DocumentRow, ("notes", "stamped"))
    assert row.updated_at.replace(tzinfo=None) >= before

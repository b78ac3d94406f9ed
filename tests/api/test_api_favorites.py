"""HTTP-level tests for the ``/api/me/favorites`` router."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from lifehacking.main import app
from lifehacking.services.favorites_service import get_favorites_service

BASE = "/api/me/favorites"


@pytest_asyncio.fixture
async def client(service) -> AsyncIterator[httpx.AsyncClient]:
    """Client bound to the app with the favorites service backed by the test store."""

    app.dependency_overrides[get_favorites_service] = lambda: service
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
    finally:
        app.dependency_overrides.pop(get_favorites_service, None)


def _auth(catalog) -> dict[str, str]:
    return {"X-User-Id": str(catalog.user.id)}


@pytest.mark.asyncio
async def test_requests_without_identity_are_rejected(client, catalog) -> None:
    response = await client.get(BASE)
    assert response.status_code == 401

    response = await client.get(BASE, headers={"X-User-Id": "not-a-uuid"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_add_then_list_then_remove(client, catalog) -> None:
    tip = catalog.tip("bread")

    created = await client.post(f"{BASE}/{tip.id}", headers=_auth(catalog))
    assert created.status_code == 201
    body = created.json()
    assert body["tip_id"] == str(tip.id)
    assert body["tip_details"]["category_name"] == "Kitchen"

    listed = await client.get(BASE, headers=_auth(catalog))
    assert listed.status_code == 200
    assert [item["tip_id"] for item in listed.json()["favorites"]] == [str(tip.id)]
    assert listed.json()["metadata"]["total_pages"] == 1

    removed = await client.delete(f"{BASE}/{tip.id}", headers=_auth(catalog))
    assert removed.status_code == 204
    assert removed.content == b""


@pytest.mark.asyncio
async def test_duplicate_add_returns_conflict_payload(client, catalog) -> None:
    tip = catalog.tip("zipper")
    await client.post(f"{BASE}/{tip.id}", headers=_auth(catalog))

    response = await client.post(
        f"{BASE}/{tip.id}", headers={**_auth(catalog), "X-Request-ID": "req-42"}
    )

    assert response.status_code == 409
    payload = response.json()
    assert payload["error_type"] == "conflict"
    assert payload["status_code"] == 409
    assert payload["request_id"] == "req-42"
    assert payload["path"] == f"{BASE}/{tip.id}"
    assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.asyncio
async def test_unknown_tip_and_missing_favorite_are_not_found(
    client, catalog, unknown_id
) -> None:
    assert (await client.post(f"{BASE}/{unknown_id}", headers=_auth(catalog))).status_code == 404
    removal = await client.delete(f"{BASE}/{catalog.tip('grout').id}", headers=_auth(catalog))
    assert removal.status_code == 404
    assert removal.json()["error_type"] == "not_found"


@pytest.mark.asyncio
async def test_unknown_user_is_not_found(client, catalog, unknown_id) -> None:
    response = await client.get(BASE, headers={"X-User-Id": str(unknown_id)})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_merge_reports_malformed_ids_individually(client, catalog, unknown_id) -> None:
    bread = str(catalog.tip("bread").id)

    response = await client.post(
        f"{BASE}/merge",
        json={"tip_ids": [bread, "not-a-uuid", str(unknown_id), bread]},
        headers=_auth(catalog),
    )

    assert response.status_code == 200
    assert response.json() == {
        "total_received": 4,
        "added": 1,
        "skipped": 0,
        "failed": [
            {"tip_id": str(unknown_id), "error_message": "Tip not found"},
            {"tip_id": "not-a-uuid", "error_message": "Invalid tip ID format"},
        ],
    }


@pytest.mark.asyncio
async def test_list_applies_query_parameters(client, catalog) -> None:
    await client.post(
        f"{BASE}/merge",
        json={"tip_ids": [str(tip.id) for tip in catalog.tips.values()]},
        headers=_auth(catalog),
    )

    response = await client.get(
        BASE,
        params={
            "q": "BAKING",
            "order_by": "title",
            "sort_direction": "asc",
            "page_size": 5,
        },
        headers=_auth(catalog),
    )

    assert response.status_code == 200
    titles = [item["tip_details"]["title"] for item in response.json()["favorites"]]
    assert titles == ["Clean grout with baking soda"]
    assert response.json()["metadata"]["total_items"] == 1


@pytest.mark.asyncio
async def test_page_size_above_limit_is_rejected(client, catalog) -> None:
    response = await client.get(BASE, params={"page_size": 101}, headers=_auth(catalog))

    assert response.status_code == 422
    payload = response.json()
    assert payload["error_type"] == "validation_error"
    assert any("page_size" in error["field"] for error in payload["errors"])


@pytest.mark.asyncio
async def test_storage_failure_returns_generic_500(client, catalog, document_store) -> None:
    document_store.fail_on_commit = 0

    response = await client.post(f"{BASE}/{catalog.tip('bread').id}", headers=_auth(catalog))

    assert response.status_code == 500
    payload = response.json()
    assert payload["error_type"] == "infrastructure_error"
    assert payload["detail"] == "An error occurred while adding the favorite."
    assert "simulated" not in response.text


@pytest.mark.asyncio
async def test_health(client) -> None:
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}

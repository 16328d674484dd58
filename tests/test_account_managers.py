"""
Account manager API tests.
"""

import pytest


@pytest.mark.asyncio
async def test_add_and_list_account_managers(test_client, user_headers):
    await test_client.post(
        "/api/v1/account-managers",
        json={"id": "am-2", "name": "Brian", "email": "brian@example.com"},
        headers=user_headers,
    )
    response = await test_client.post(
        "/api/v1/account-managers",
        json={"id": "am-1", "name": "Alice"},
        headers=user_headers,
    )
    assert response.status_code == 201
    assert response.json()["email"] is None

    listing = await test_client.get("/api/v1/account-managers", headers=user_headers)
    data = listing.json()
    assert data["total"] == 2
    assert [m["id"] for m in data["items"]] == ["am-1", "am-2"]


@pytest.mark.asyncio
async def test_replace_account_managers(test_client, user_headers):
    await test_client.post("/api/v1/account-managers", json={"id": "old", "name": "Old"}, headers=user_headers)

    response = await test_client.put(
        "/api/v1/account-managers",
        json={"managers": [{"id": "new", "name": "New"}]},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert [m["id"] for m in response.json()["items"]] == ["new"]


@pytest.mark.asyncio
async def test_update_account_manager(test_client, user_headers):
    await test_client.post("/api/v1/account-managers", json={"id": "am-1", "name": "Alice"}, headers=user_headers)

    response = await test_client.put(
        "/api/v1/account-managers/am-1",
        json={"name": "Alice K", "email": "alice@example.com"},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"id": "am-1", "name": "Alice K", "email": "alice@example.com"}


@pytest.mark.asyncio
async def test_delete_account_manager(test_client, user_headers):
    await test_client.post("/api/v1/account-managers", json={"id": "am-1", "name": "Alice"}, headers=user_headers)

    response = await test_client.delete("/api/v1/account-managers/am-1", headers=user_headers)
    assert response.status_code == 204

    missing = await test_client.get("/api/v1/account-managers/am-1", headers=user_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_delete_unknown_account_manager_is_404(test_client, user_headers):
    response = await test_client.delete("/api/v1/account-managers/ghost", headers=user_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_blank_name_is_rejected(test_client, user_headers):
    response = await test_client.post("/api/v1/account-managers", json={"id": "x", "name": ""}, headers=user_headers)

    assert response.status_code == 422

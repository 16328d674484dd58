"""
Authentication, roles and user profile tests.
"""

from datetime import timedelta

import pytest

from quotegen.core.security import create_access_token

ADMIN_PRINCIPAL = "admin-principal"
USER_PRINCIPAL = "user-principal"


@pytest.mark.asyncio
async def test_missing_token_is_401(test_client):
    response = await test_client.get("/api/v1/rate-card")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_token_is_401(test_client):
    response = await test_client.get("/api/v1/rate-card", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_is_401(test_client):
    token = create_access_token({"sub": USER_PRINCIPAL}, expires_delta=timedelta(minutes=-1))

    response = await test_client.get("/api/v1/rate-card", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_guest_is_forbidden(test_client, guest_headers):
    response = await test_client.get("/api/v1/rate-card", headers=guest_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_role_lookup(test_client, admin_headers, user_headers, guest_headers):
    admin = await test_client.get("/api/v1/access-control/role", headers=admin_headers)
    user = await test_client.get("/api/v1/access-control/role", headers=user_headers)
    guest = await test_client.get("/api/v1/access-control/role", headers=guest_headers)

    assert admin.json() == {"role": "admin"}
    assert user.json() == {"role": "user"}
    assert guest.json() == {"role": "guest"}

    is_admin = await test_client.get("/api/v1/access-control/is-admin", headers=admin_headers)
    assert is_admin.json() == {"is_admin": True}
    is_admin = await test_client.get("/api/v1/access-control/is-admin", headers=user_headers)
    assert is_admin.json() == {"is_admin": False}


@pytest.mark.asyncio
async def test_initialize_registers_new_principal_as_user(test_client, headers_for):
    headers = headers_for("newcomer")

    response = await test_client.post("/api/v1/access-control/initialize", headers=headers)
    assert response.json() == {"role": "user"}

    # a second call leaves the registration alone
    response = await test_client.post("/api/v1/access-control/initialize", headers=headers)
    assert response.json() == {"role": "user"}

    rate_card = await test_client.get("/api/v1/rate-card", headers=headers)
    assert rate_card.status_code == 200


@pytest.mark.asyncio
async def test_first_initializer_becomes_admin(test_db_session):
    from quotegen.models.user import UserRole
    from quotegen.services.access_control_service import AccessControlService

    service = AccessControlService(test_db_session)

    assert await service.initialize("first") == UserRole.ADMIN
    assert await service.initialize("second") == UserRole.USER
    assert await service.get_role("first") == UserRole.ADMIN
    assert await service.get_role("stranger") == UserRole.GUEST


@pytest.mark.asyncio
async def test_admin_assigns_roles(test_client, admin_headers, guest_headers):
    response = await test_client.put(
        "/api/v1/access-control/roles/guest-principal",
        json={"role": "user"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    rate_card = await test_client.get("/api/v1/rate-card", headers=guest_headers)
    assert rate_card.status_code == 200


@pytest.mark.asyncio
async def test_non_admin_cannot_assign_roles(test_client, user_headers):
    response = await test_client.put(
        f"/api/v1/access-control/roles/{USER_PRINCIPAL}",
        json={"role": "admin"},
        headers=user_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_profile_round_trip(test_client, user_headers):
    missing = await test_client.get("/api/v1/access-control/profile", headers=user_headers)
    assert missing.status_code == 404

    profile = {"name": "Sam", "email": "sam@example.com", "account_manager_id": "am-1", "phone": "0700"}
    saved = await test_client.put("/api/v1/access-control/profile", json=profile, headers=user_headers)
    assert saved.status_code == 200
    assert saved.json() == {**profile, "id": USER_PRINCIPAL}

    fetched = await test_client.get("/api/v1/access-control/profile", headers=user_headers)
    assert fetched.json()["name"] == "Sam"


@pytest.mark.asyncio
async def test_profile_visibility(test_client, user_headers, admin_headers):
    await test_client.put("/api/v1/access-control/profile", json={"name": "Sam"}, headers=user_headers)
    await test_client.put("/api/v1/access-control/profile", json={"name": "Root"}, headers=admin_headers)

    own = await test_client.get(f"/api/v1/access-control/profiles/{USER_PRINCIPAL}", headers=user_headers)
    assert own.status_code == 200

    other = await test_client.get(f"/api/v1/access-control/profiles/{ADMIN_PRINCIPAL}", headers=user_headers)
    assert other.status_code == 403

    by_admin = await test_client.get(f"/api/v1/access-control/profiles/{USER_PRINCIPAL}", headers=admin_headers)
    assert by_admin.json()["name"] == "Sam"

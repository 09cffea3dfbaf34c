from datetime import timedelta

import pytest

from conftest import PASSWORD, bearer
from identity.domain.value_objects.role import Role


async def login(client, email, password=PASSWORD):
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
async def world(app_seed, clock):
    tenant = await app_seed.tenant("Acme", "REG-1")
    app_a = await app_seed.application("App A", "https://a.acme.com")
    app_b = await app_seed.application("App B", "https://b.acme.com")
    await app_seed.license(tenant, app_a)
    await app_seed.license(tenant, app_b, expires_at=clock() - timedelta(days=1))
    root = await app_seed.identity("root@platform.io", Role.SUPER_ADMIN)
    admin = await app_seed.identity("admin@acme.com", Role.TENANT_ADMIN, tenant)
    operator = await app_seed.identity("op@acme.com", Role.TENANT_OPERATOR, tenant)
    await app_seed.assign(operator, app_a, app_b)
    return {"tenant": tenant, "app_a": app_a, "app_b": app_b, "root": root, "admin": admin, "operator": operator}


async def test_login_me_and_refresh(client, world):
    body = await login(client, "OP@acme.com")
    assert body["token_type"] == "Bearer"
    assert body["user"]["email"] == "op@acme.com"
    assert body["user"]["role"] == "TENANT_OPERATOR"

    me = await client.get("/api/auth/me", headers=bearer(body["access_token"]))
    assert me.status_code == 200
    assert me.json()["id"] == str(world["operator"].id)

    refreshed = await client.post("/api/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert refreshed.status_code == 200
    assert "refresh_token" not in refreshed.json()

    me_again = await client.get("/api/auth/me", headers=bearer(refreshed.json()["access_token"]))
    assert me_again.status_code == 200


async def test_bad_credentials(client, world):
    response = await client.post("/api/auth/login", json={"email": "op@acme.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["code"] == "invalid_credentials"


async def test_logout_revokes_refresh_token(client, world):
    body = await login(client, "op@acme.com")
    headers = bearer(body["access_token"])

    response = await client.post("/api/auth/logout", json={"refresh_token": body["refresh_token"]}, headers=headers)
    assert response.status_code == 204

    refreshed = await client.post("/api/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert refreshed.status_code == 401
    assert refreshed.json()["code"] == "revoked_or_unknown"


async def test_logout_after_access_token_expiry_still_revokes(client, world, clock):
    body = await login(client, "op@acme.com")
    clock.advance(minutes=16)

    expired = await client.get("/api/auth/me", headers=bearer(body["access_token"]))
    assert expired.json()["code"] == "token_expired"

    response = await client.post(
        "/api/auth/logout",
        json={"refresh_token": body["refresh_token"]},
        headers=bearer(body["access_token"]),
    )
    assert response.status_code == 204

    refreshed = await client.post("/api/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert refreshed.status_code == 401
    assert refreshed.json()["code"] == "revoked_or_unknown"


async def test_logout_without_bearer_header(client, world):
    body = await login(client, "op@acme.com")

    response = await client.post("/api/auth/logout", json={"refresh_token": body["refresh_token"]})
    assert response.status_code == 204


async def test_available_apps_and_access_grant(client, world):
    headers = bearer((await login(client, "op@acme.com"))["access_token"])

    apps = await client.get("/api/apps", headers=headers)
    assert apps.status_code == 200
    assert [a["name"] for a in apps.json()] == ["App A"]
    assert "api_key" not in apps.json()[0]

    granted = await client.post(f"/api/apps/{world['app_a'].id}/access", headers=headers)
    assert granted.status_code == 200
    assert granted.json()["url"] == "https://a.acme.com"

    denied = await client.post(f"/api/apps/{world['app_b'].id}/access", headers=headers)
    assert denied.status_code == 403
    assert denied.json()["code"] == "no_access"


async def test_external_validation_with_api_key(client, world):
    headers = bearer((await login(client, "op@acme.com"))["access_token"])

    ok = await client.post("/api/auth/validate", headers={**headers, "X-API-Key": world["app_a"].api_key})
    assert ok.status_code == 200
    assert ok.json()["valid"] is True
    assert ok.json()["application_id"] == str(world["app_a"].id)

    bad_key = await client.post("/api/auth/validate", headers={**headers, "X-API-Key": "sk_nope"})
    assert bad_key.status_code == 401
    assert bad_key.json()["code"] == "invalid_api_key"


async def test_team_sync_assignments(client, world, app_seed):
    app_c = await app_seed.application("App C", "https://c.acme.com")
    await app_seed.license(world["tenant"], app_c)
    headers = bearer((await login(client, "admin@acme.com"))["access_token"])
    url = f"/api/team/members/{world['operator'].id}/applications"

    synced = await client.put(
        url,
        json={"assignments": [{"application_id": str(app_c.id), "app_role": "TENANT_COORDINATOR"}]},
        headers=headers,
    )
    assert synced.status_code == 200
    assert [(a["application_id"], a["app_role"]) for a in synced.json()] == [(str(app_c.id), "TENANT_COORDINATOR")]

    rejected = await client.put(
        url,
        json={"assignments": [{"application_id": str(world["app_b"].id)}]},
        headers=headers,
    )
    assert rejected.status_code == 400
    assert rejected.json()["code"] == "invalid_applications"

    listed = await client.get(url, headers=headers)
    assert [a["application_id"] for a in listed.json()] == [str(app_c.id)]


async def test_team_member_lifecycle(client, world):
    headers = bearer((await login(client, "admin@acme.com"))["access_token"])

    created = await client.post(
        "/api/team/members",
        json={"email": "new@acme.com", "name": "New", "password": PASSWORD, "role": "TENANT_SUPERVISOR"},
        headers=headers,
    )
    assert created.status_code == 201, created.text
    assert created.json()["tenant_id"] == str(world["tenant"].id)
    member_id = created.json()["id"]

    members = await client.get("/api/team/members", headers=headers)
    assert {m["email"] for m in members.json()} == {"admin@acme.com", "op@acme.com", "new@acme.com"}

    deactivated = await client.post(f"/api/team/members/{member_id}/deactivate", headers=headers)
    assert deactivated.status_code == 200
    assert deactivated.json()["active"] is False

    self_deactivate = await client.post(f"/api/team/members/{world['admin'].id}/deactivate", headers=headers)
    assert self_deactivate.status_code == 403
    assert self_deactivate.json()["code"] == "cannot_deactivate_self"


async def test_member_and_user_updates(client, world):
    admin_headers = bearer((await login(client, "admin@acme.com"))["access_token"])
    root_headers = bearer((await login(client, "root@platform.io"))["access_token"])
    operator_id = world["operator"].id

    renamed = await client.patch(
        f"/api/team/members/{operator_id}",
        json={"name": "Operator One", "email": "op1@acme.com"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200, renamed.text
    assert renamed.json()["email"] == "op1@acme.com"
    assert renamed.json()["name"] == "Operator One"

    taken = await client.patch(
        f"/api/team/members/{operator_id}",
        json={"email": "admin@acme.com"},
        headers=admin_headers,
    )
    assert taken.status_code == 409
    assert taken.json()["code"] == "email_already_exists"

    by_root = await client.patch(f"/api/admin/users/{world['admin'].id}", json={"name": "Chief"}, headers=root_headers)
    assert by_root.status_code == 200
    assert by_root.json()["name"] == "Chief"

    not_root = await client.patch(f"/api/admin/users/{operator_id}", json={"name": "X"}, headers=admin_headers)
    assert not_root.status_code == 403


async def test_operator_cannot_manage_team(client, world):
    headers = bearer((await login(client, "op@acme.com"))["access_token"])

    response = await client.get("/api/team/members", headers=headers)
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


async def test_admin_routes_require_super_admin(client, world):
    headers = bearer((await login(client, "admin@acme.com"))["access_token"])

    response = await client.get("/api/admin/tenants", headers=headers)
    assert response.status_code == 403


async def test_tenant_deactivation_ends_sessions(client, world):
    operator_token = (await login(client, "op@acme.com"))["access_token"]
    root_headers = bearer((await login(client, "root@platform.io"))["access_token"])

    response = await client.post(f"/api/admin/tenants/{world['tenant'].id}/deactivate", headers=root_headers)
    assert response.status_code == 200
    assert response.json()["active"] is False

    me = await client.get("/api/auth/me", headers=bearer(operator_token))
    assert me.status_code == 401
    assert me.json()["code"] == "identity_inactive_or_missing"


async def test_admin_catalogue_and_licenses(client, world):
    headers = bearer((await login(client, "root@platform.io"))["access_token"])

    created = await client.post(
        "/api/admin/applications",
        json={"name": "CRM", "url": "https://crm.acme.com"},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["api_key"].startswith("sk_")
    application_id = created.json()["id"]

    linked = await client.post(
        f"/api/admin/tenants/{world['tenant'].id}/licenses",
        json={"application_id": application_id},
        headers=headers,
    )
    assert linked.status_code == 201

    unlinked = await client.delete(
        f"/api/admin/tenants/{world['tenant'].id}/licenses/{application_id}", headers=headers
    )
    assert unlinked.status_code == 200
    assert unlinked.json()["active"] is False

    again = await client.delete(f"/api/admin/tenants/{world['tenant'].id}/licenses/{application_id}", headers=headers)
    assert again.status_code == 404
    assert again.json()["code"] == "license_not_found"


async def test_admin_user_listing_resolves_audit_names(client, world):
    headers = bearer((await login(client, "root@platform.io"))["access_token"])

    created = await client.post(
        "/api/admin/users",
        json={
            "email": "admin2@acme.com",
            "name": "Second Admin",
            "password": PASSWORD,
            "role": "TENANT_ADMIN",
            "tenant_id": str(world["tenant"].id),
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text

    listed = await client.get("/api/admin/users", params={"role": "TENANT_ADMIN"}, headers=headers)
    assert listed.status_code == 200
    second = next(u for u in listed.json() if u["email"] == "admin2@acme.com")
    assert second["audit_names"] == {str(world["root"].id): "root"}


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["ok"] is True

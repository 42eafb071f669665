from __future__ import annotations


def test_login_and_refresh_issue_tokens(client, seed, password):
    _tenant, user = seed.tenant("acme")

    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": password})
    assert response.status_code == 200
    tokens = response.json()
    assert tokens["token_type"] == "bearer"
    assert tokens["tenant_id"] == user.tenant_id
    assert tokens["role"] == "owner"
    assert tokens["expires_in"] > 0

    dashboard = client.get("/api/v1/dashboard", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert dashboard.status_code == 200

    refreshed = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["access_token"]


def test_login_rejects_bad_password(client, seed):
    _tenant, user = seed.tenant("acme")

    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": "wrong-password"})

    assert response.status_code == 401


def test_login_normalizes_email_and_rejects_malformed_ones(client, seed, password):
    seed.tenant("acme")

    response = client.post("/api/v1/auth/login", json={"email": "  OWNER@Acme.Example.com ", "password": password})
    assert response.status_code == 200

    malformed = client.post("/api/v1/auth/login", json={"email": "owner-acme", "password": password})
    assert malformed.status_code == 422


def test_refresh_rejects_access_token(client, seed, bearer_for):
    _tenant, user = seed.tenant("acme")
    access_token = bearer_for(user)["Authorization"].split(" ", 1)[1]

    response = client.post("/api/v1/auth/refresh", json={"refresh_token": access_token})

    assert response.status_code == 401


def test_protected_routes_require_bearer_token(client, seed):
    seed.tenant("acme")

    assert client.get("/api/v1/dashboard").status_code == 401
    assert client.get("/api/v1/dashboard", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/api/v1/dashboard", headers={"Authorization": "Bearer abc.def.ghi"}).status_code == 401


def test_viewer_cannot_export_or_edit_settings(client, seed, bearer_for):
    tenant, _owner = seed.tenant("acme")
    viewer = seed.user(tenant, "viewer")
    headers = bearer_for(viewer)

    assert client.get("/api/v1/invoices/export", headers=headers).status_code == 403
    assert client.put("/api/v1/settings", json={"firm_name": "X"}, headers=headers).status_code == 403
    assert client.get("/api/v1/settings", headers=headers).status_code == 200


def test_health_and_root(client):
    health = client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json()["database"] == "ok"
    assert client.get("/").json()["api_prefix"] == "/api/v1"

from __future__ import annotations


def test_estate_crud(client, seed, bearer_for):
    _tenant, user = seed.tenant("acme")
    headers = bearer_for(user)

    created = client.post("/api/v1/estates", json={"case_name": "In re Jones", "court_state": "tx"}, headers=headers)
    assert created.status_code == 201
    estate = created.json()
    assert estate["label"] == "In re Jones"
    assert estate["court_state"] == "TX"

    assert client.get(f"/api/v1/estates/{estate['id']}", headers=headers).status_code == 200
    assert client.get("/api/v1/estates", headers=headers).json()["total"] == 1
    assert client.get("/api/v1/estates/999", headers=headers).status_code == 404
    assert client.post("/api/v1/estates", json={}, headers=headers).status_code == 422


def test_time_entries_and_summary(client, seed, bearer_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    headers = bearer_for(user)
    base = f"/api/v1/estates/{estate.id}/time"

    created = client.post(base, json={"entry_date": "2026-10-02", "hours": 1.5, "description": "Call"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["duration_minutes"] == 90
    client.post(base, json={"entry_date": "2026-10-03", "duration_minutes": 30, "billable": False}, headers=headers)

    listed = client.get(base, params={"start": "2026-10-01", "end": "2026-10-31"}, headers=headers).json()
    assert listed["total"] == 2

    summary = client.get(f"{base}/summary", headers=headers).json()
    assert summary["total_minutes"] == 120
    assert summary["billable_hours"] == 1.5
    assert summary["non_billable_hours"] == 0.5

    bad_range = client.get(f"{base}/summary", params={"start": "2026-10-10", "end": "2026-10-01"}, headers=headers)
    assert bad_range.status_code == 422


def test_mark_time_billed_requires_invoice(client, seed, bearer_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    invoice = seed.invoice(estate, status="SENT", amount_cents=100)
    entry = seed.time_entry(estate, duration_minutes=30)
    headers = bearer_for(user)
    url = f"/api/v1/estates/{estate.id}/time/{entry.id}/billed"

    assert client.post(url, json={"billed": True}, headers=headers).status_code == 422
    billed = client.post(url, json={"billed": True, "invoice_id": invoice.id}, headers=headers)
    assert billed.status_code == 200
    assert billed.json()["billed_invoice_id"] == invoice.id


def test_settings_roundtrip(client, seed, bearer_for):
    _tenant, user = seed.tenant("acme")
    headers = bearer_for(user)

    defaults = client.get("/api/v1/settings", headers=headers).json()
    assert defaults["default_currency"] == "USD"
    assert defaults["default_invoice_terms"] == "NET_30"

    updated = client.put(
        "/api/v1/settings",
        json={"default_currency": "gbp", "default_hourly_rate_cents": 30000},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["default_currency"] == "GBP"
    assert client.get("/api/v1/settings", headers=headers).json()["default_hourly_rate_cents"] == 30000

    assert client.put("/api/v1/settings", json={"default_invoice_terms": "NET_7"}, headers=headers).status_code == 422

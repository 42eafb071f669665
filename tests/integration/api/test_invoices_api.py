from __future__ import annotations

from datetime import datetime, timedelta, timezone

from legatepro.models import TimeEntry


def test_create_list_and_transition_invoice(client, seed, bearer_for, db_session):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    entry = seed.time_entry(estate, duration_minutes=90, hourly_rate_cents=20000)
    headers = bearer_for(user)

    created = client.post(
        f"/api/v1/estates/{estate.id}/invoices",
        json={
            "line_items": [
                {"item_type": "TIME", "label": "Hearing prep", "quantity": "1.5", "rate_cents": 20000,
                 "source_time_entry_id": entry.id},
                {"item_type": "EXPENSE", "label": "Filing fee", "amount_cents": 43500},
            ],
            "issue_date": "2026-10-01",
            "invoice_number": "INV-100",
        },
        headers=headers,
    )
    assert created.status_code == 201
    invoice = created.json()
    assert invoice["status"] == "DRAFT"
    assert invoice["amount_cents"] == 73500
    assert invoice["amount_formatted"] == "$735.00"
    assert len(invoice["line_items"]) == 2

    db_session.expire_all()
    assert db_session.get(TimeEntry, entry.id).billed_invoice_id == invoice["id"]

    listed = client.get(f"/api/v1/estates/{estate.id}/invoices", headers=headers).json()
    assert listed["total"] == 1

    sent = client.patch(
        f"/api/v1/estates/{estate.id}/invoices/{invoice['id']}/status", json={"status": "SENT"}, headers=headers
    )
    assert sent.status_code == 200
    assert sent.json()["status"] == "SENT"

    backwards = client.patch(
        f"/api/v1/estates/{estate.id}/invoices/{invoice['id']}/status", json={"status": "DRAFT"}, headers=headers
    )
    assert backwards.status_code == 409


def test_create_invoice_validation_errors(client, seed, bearer_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    headers = bearer_for(user)
    url = f"/api/v1/estates/{estate.id}/invoices"

    assert client.post(url, json={"line_items": []}, headers=headers).status_code == 422
    bad_dates = client.post(
        url,
        json={
            "line_items": [{"item_type": "EXPENSE", "label": "Fee", "amount_cents": 100}],
            "issue_date": "2026-10-05",
            "due_date": "2026-10-01",
        },
        headers=headers,
    )
    assert bad_dates.status_code == 422
    assert client.post("/api/v1/estates/999/invoices", json={"line_items": [{"label": "x"}]}, headers=headers).status_code == 404


def test_unshared_estate_invoices_are_hidden(client, seed, bearer_for):
    owner, _ = seed.tenant("owner-firm")
    _partner, partner_user = seed.tenant("partner")
    estate = seed.estate(owner, display_name="Private")

    response = client.get(f"/api/v1/estates/{estate.id}/invoices", headers=bearer_for(partner_user))

    assert response.status_code == 404


def test_aging_report_groups_invoices_by_band(client, seed, bearer_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    seed.settings(tenant, default_currency="EUR")
    now = datetime.now(timezone.utc)
    seed.invoice(estate, status="SENT", amount_cents=5000, invoice_number="A", due_date=now - timedelta(days=45))
    seed.invoice(estate, status="UNPAID", amount_cents=1000, invoice_number="B", due_date=now + timedelta(days=10))

    body = client.get("/api/v1/invoices/aging", headers=bearer_for(user)).json()

    assert body["currency"] == "EUR"
    assert body["outstanding"] == {"cents": 6000, "formatted": "€60.00"}
    bands = {band["band"]: band for band in body["bands"]}
    assert [item["invoice_number"] for item in bands["AGE_31_60"]["invoices"]] == ["A"]
    assert bands["AGE_31_60"]["invoices"][0]["estate_label"] == "Smith"
    assert bands["CURRENT"]["invoice_count"] == 1
    assert bands["AGE_90_PLUS"]["invoices"] == []


def test_export_returns_csv(client, seed, bearer_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    seed.invoice(estate, status="PAID", amount_cents=4200, invoice_number="INV-7")

    response = client.get("/api/v1/invoices/export", headers=bearer_for(user))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    header, row = response.text.strip().splitlines()
    assert header.split(",")[:4] == ["invoice_id", "invoice_number", "estate_id", "estate_label"]
    assert "INV-7" in row
    assert ",4200," in row

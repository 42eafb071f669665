from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from legatepro.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from legatepro.services.time_entry_service import TimeEntryService

START = datetime(2026, 10, 3, 9, 0, tzinfo=timezone.utc)


def test_create_entry_from_start_and_stop(db_session, seed, context_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")

    entry = TimeEntryService(db=db_session).create_entry(
        context_for(user),
        estate.id,
        started_at=START,
        stopped_at=START.replace(hour=10, minute=30),
        description="  Inventory review ",
        hourly_rate_cents=18000,
    )

    assert entry.entry_date == date(2026, 10, 3)
    assert entry.description == "Inventory review"
    assert entry.duration_minutes is None
    assert entry.billable is True


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({}, "duration_minutes or both"),
        ({"duration_minutes": 0}, "must be positive"),
        ({"started_at": START, "stopped_at": START}, "after started_at"),
        ({"duration_minutes": 30, "hourly_rate_cents": -1}, "hourly_rate_cents"),
    ],
)
def test_create_entry_rejects_invalid_input(db_session, seed, context_for, kwargs, message):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")

    with pytest.raises(ValidationError, match=message):
        TimeEntryService(db=db_session).create_entry(context_for(user), estate.id, **kwargs)


def test_viewer_collaborator_cannot_log_time(db_session, seed, context_for):
    owner, _ = seed.tenant("owner-firm")
    partner, partner_user = seed.tenant("partner")
    estate = seed.estate(owner, display_name="Shared")
    seed.share(estate, partner, role="VIEWER")

    with pytest.raises(AuthorizationError):
        TimeEntryService(db=db_session).create_entry(context_for(partner_user), estate.id, duration_minutes=30)


def test_editor_collaborator_can_log_time(db_session, seed, context_for):
    owner, _ = seed.tenant("owner-firm")
    partner, partner_user = seed.tenant("partner")
    estate = seed.estate(owner, display_name="Shared")
    seed.share(estate, partner, role="EDITOR")

    entry = TimeEntryService(db=db_session).create_entry(
        context_for(partner_user), estate.id, duration_minutes=30, entry_date=date(2026, 10, 4)
    )

    assert entry.tenant_id == owner.id


def test_set_billed_links_and_unlinks_invoice(db_session, seed, context_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    invoice = seed.invoice(estate, status="SENT", amount_cents=100)
    entry = seed.time_entry(estate, duration_minutes=60)
    service = TimeEntryService(db=db_session)

    billed = service.set_billed(context_for(user), estate.id, entry.id, billed=True, invoice_id=invoice.id)
    assert billed.billed_invoice_id == invoice.id

    unbilled = service.set_billed(context_for(user), estate.id, entry.id, billed=False)
    assert unbilled.billed_invoice_id is None


def test_set_billed_requires_invoice_from_same_estate(db_session, seed, context_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    other = seed.estate(tenant, display_name="Jones")
    foreign_invoice = seed.invoice(other, status="SENT", amount_cents=100)
    entry = seed.time_entry(estate, duration_minutes=60)
    service = TimeEntryService(db=db_session)

    with pytest.raises(ValidationError):
        service.set_billed(context_for(user), estate.id, entry.id, billed=True)
    with pytest.raises(NotFoundError):
        service.set_billed(context_for(user), estate.id, entry.id, billed=True, invoice_id=foreign_invoice.id)
    with pytest.raises(NotFoundError):
        service.set_billed(context_for(user), estate.id, 999, billed=False)


def test_summarize_splits_minutes_by_billing_state(db_session, seed, context_for):
    tenant, user = seed.tenant("acme")
    estate = seed.estate(tenant, display_name="Smith")
    invoice = seed.invoice(estate, status="SENT", amount_cents=100)
    seed.time_entry(estate, duration_minutes=90)
    seed.time_entry(estate, duration_minutes=30, billable=False)
    seed.time_entry(estate, duration_minutes=60, billed_invoice_id=invoice.id)
    seed.time_entry(estate, started_at=START, stopped_at=START.replace(minute=45))
    seed.time_entry(estate, duration_minutes=600, entry_date=date(2026, 8, 1))

    summary = TimeEntryService(db=db_session).summarize(
        context_for(user), estate.id, start=date(2026, 9, 1), end=date(2026, 10, 31)
    )

    assert summary.total_entries == 4
    assert summary.total_minutes == 225
    assert summary.billable_minutes == 195
    assert summary.non_billable_minutes == 30
    assert summary.billed_minutes == 60
    assert summary.unbilled_billable_minutes == 135
    assert summary.hours()["total_hours"] == 3.75

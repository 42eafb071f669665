from __future__ import annotations

from legatepro.billing.records import InvoiceRecord, invoice_record_from, normalize_status
from legatepro.billing.rollup import RollupTotals, rollup_invoices
from legatepro.models.enums import InvoiceStatus


def _invoice(estate_id, status, cents):
    return InvoiceRecord(invoice_id=None, estate_id=estate_id, status=InvoiceStatus(status), amount_cents=cents)


def test_rollup_partitions_by_status():
    invoices = [
        _invoice(1, "PAID", 10000),
        _invoice(1, "SENT", 4000),
        _invoice(2, "UNPAID", 3000),
        _invoice(2, "PARTIAL", 3000),
        _invoice(2, "DRAFT", 400),
        _invoice(3, "VOID", 700),
    ]

    rollup = rollup_invoices(invoices)

    assert rollup.totals.total_invoiced_cents == 21100
    assert rollup.totals.collected_cents == 10000
    assert rollup.totals.outstanding_cents == 10000
    assert rollup.totals.voided_cents == 700
    assert rollup.totals.invoice_count == 6
    assert rollup.totals.collection_rate == 47


def test_rollup_groups_per_estate():
    rollup = rollup_invoices([_invoice(1, "PAID", 500), _invoice(2, "SENT", 300), _invoice(1, "SENT", 100)])

    assert set(rollup.by_estate) == {1, 2}
    assert rollup.by_estate[1].total_invoiced_cents == 600
    assert rollup.by_estate[1].collected_cents == 500
    assert rollup.by_estate[2].outstanding_cents == 300


def test_invoice_without_estate_counts_only_globally():
    rollup = rollup_invoices([_invoice(None, "PAID", 500)])
    assert rollup.totals.collected_cents == 500
    assert rollup.by_estate == {}


def test_empty_rollup_has_zero_collection_rate():
    assert rollup_invoices([]).totals.collection_rate == 0


def test_clamped_floors_negative_sums():
    totals = RollupTotals(total_invoiced_cents=-5, collected_cents=10).clamped()
    assert totals.total_invoiced_cents == 0
    assert totals.collected_cents == 10


def test_unknown_status_is_treated_as_draft():
    assert normalize_status(" paid ") is InvoiceStatus.PAID
    assert normalize_status("ARCHIVED") is InvoiceStatus.DRAFT
    assert normalize_status(None) is InvoiceStatus.DRAFT

    record = invoice_record_from({"id": 1, "estate_id": 1, "status": "bogus", "amount_cents": 900})
    rollup = rollup_invoices([record])
    assert rollup.totals.total_invoiced_cents == 900
    assert rollup.totals.outstanding_cents == 0


def _partition_sum(totals):
    return totals.collected_cents + totals.outstanding_cents + totals.voided_cents


def test_partitions_cover_total_when_every_invoice_is_issued():
    invoices = [
        _invoice(1, "PAID", 100),
        _invoice(1, "SENT", 200),
        _invoice(2, "UNPAID", 50),
        _invoice(2, "PARTIAL", 25),
        _invoice(3, "VOID", 10),
    ]

    totals = rollup_invoices(invoices).totals

    assert _partition_sum(totals) == totals.total_invoiced_cents == 385


def test_drafts_and_unknown_statuses_leave_a_gap_in_partitions():
    invoices = [
        _invoice(1, "PAID", 100),
        _invoice(1, "SENT", 200),
        _invoice(2, "VOID", 10),
        _invoice(2, "DRAFT", 40),
        invoice_record_from({"id": 9, "estate_id": 2, "status": "ON_HOLD", "amount_cents": 60}),
    ]

    rollup = rollup_invoices(invoices)

    assert rollup.totals.total_invoiced_cents == 410
    assert _partition_sum(rollup.totals) == 310
    assert _partition_sum(rollup.totals) < rollup.totals.total_invoiced_cents
    assert _partition_sum(rollup.by_estate[1]) == rollup.by_estate[1].total_invoiced_cents
    assert _partition_sum(rollup.by_estate[2]) == rollup.by_estate[2].total_invoiced_cents - 100

from __future__ import annotations

from datetime import datetime, timezone

from legatepro.billing.records import InvoiceRecord
from legatepro.billing.trend import build_monthly_trend, month_window, shift_month
from legatepro.models.enums import InvoiceStatus

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _invoice(status, cents, issued=None, created=None):
    return InvoiceRecord(
        invoice_id=None,
        estate_id=1,
        status=InvoiceStatus(status),
        amount_cents=cents,
        issue_date=issued,
        created_at=created,
    )


def test_window_covers_six_months_ending_with_current():
    buckets = build_monthly_trend([], NOW)
    assert [bucket.key for bucket in buckets] == ["2026-05", "2026-06", "2026-07", "2026-08", "2026-09", "2026-10"]
    assert buckets[-1].label == "Oct 26"
    assert all(bucket.invoiced_cents == 0 for bucket in buckets)


def test_buckets_accumulate_by_effective_date():
    invoices = [
        _invoice("PAID", 1000, issued=datetime(2026, 10, 2, tzinfo=timezone.utc)),
        _invoice("SENT", 300, created=datetime(2026, 10, 5, tzinfo=timezone.utc)),
        _invoice("VOID", 999, issued=datetime(2026, 9, 30, tzinfo=timezone.utc)),
        _invoice("PAID", 5000, issued=datetime(2026, 4, 30, 23, 59, tzinfo=timezone.utc)),
    ]

    buckets = {bucket.key: bucket for bucket in build_monthly_trend(invoices, NOW)}

    october = buckets["2026-10"]
    assert october.invoiced_cents == 1300
    assert october.collected_cents == 1000
    assert october.outstanding_cents == 300
    assert october.collection_rate == 77
    assert buckets["2026-09"].invoiced_cents == 999
    assert buckets["2026-09"].collected_cents == 0
    assert sum(bucket.invoiced_cents for bucket in buckets.values()) == 2299


def test_undated_invoices_are_skipped():
    buckets = build_monthly_trend([_invoice("PAID", 100)], NOW)
    assert sum(bucket.invoiced_cents for bucket in buckets) == 0


def test_window_wraps_across_year_end():
    keys = [f"{year}-{month:02d}" for year, month in month_window(datetime(2026, 2, 3, tzinfo=timezone.utc))]
    assert keys == ["2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02"]
    assert shift_month(2026, 1, -1) == (2025, 12)


def test_evaluation_day_within_month_does_not_move_boundaries():
    first = build_monthly_trend([], datetime(2026, 10, 1, tzinfo=timezone.utc))
    last = build_monthly_trend([], datetime(2026, 10, 31, 23, 59, tzinfo=timezone.utc))
    assert [bucket.key for bucket in first] == [bucket.key for bucket in last]

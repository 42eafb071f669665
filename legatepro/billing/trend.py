"""Six-month invoicing and collection trend."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from legatepro.billing.money import percent
from legatepro.billing.records import InvoiceRecord, as_utc
from legatepro.models.enums import InvoiceStatus

TREND_MONTHS = 6
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class MonthlyBucket:
    year: int
    month: int  # 1-12
    invoiced_cents: int = 0
    collected_cents: int = 0
    outstanding_cents: int = 0

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        return f"{MONTH_ABBREVIATIONS[self.month - 1]} {self.year % 100:02d}"

    @property
    def collection_rate(self) -> int:
        return percent(self.collected_cents, self.invoiced_cents)


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_window(now: datetime, months: int = TREND_MONTHS) -> list[tuple[int, int]]:
    """(year, month) pairs ending with the month of `now`, oldest first."""
    anchor = as_utc(now) or datetime.now(timezone.utc)
    return [shift_month(anchor.year, anchor.month, -offset) for offset in range(months - 1, -1, -1)]


def window_start(now: datetime, months: int = TREND_MONTHS) -> datetime:
    year, month = month_window(now, months)[0]
    return datetime(year, month, 1, tzinfo=timezone.utc)


def build_monthly_trend(
    invoices: Iterable[InvoiceRecord],
    now: datetime,
    months: int = TREND_MONTHS,
) -> list[MonthlyBucket]:
    """Zero-filled calendar-month buckets for `now`'s month and the previous ones.

    Boundaries depend only on the calendar month of `now`, so any evaluation
    day within a month yields the same buckets.
    """
    buckets = [MonthlyBucket(year=year, month=month) for year, month in month_window(now, months)]
    by_key = {(bucket.year, bucket.month): bucket for bucket in buckets}
    start = window_start(now, months)

    for invoice in invoices:
        effective = invoice.effective_date
        if effective is None or effective < start:
            continue
        bucket = by_key.get((effective.year, effective.month))
        if bucket is None:
            continue
        bucket.invoiced_cents += invoice.amount_cents
        if invoice.status is InvoiceStatus.PAID:
            bucket.collected_cents += invoice.amount_cents
        elif invoice.is_outstanding:
            bucket.outstanding_cents += invoice.amount_cents
    return buckets

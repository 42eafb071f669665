"""Accounts-receivable aging by days past due."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from legatepro.billing.money import percent
from legatepro.billing.records import InvoiceRecord, as_utc

SECONDS_PER_DAY = 86_400


class AgingBand(str, enum.Enum):
    CURRENT = "CURRENT"
    AGE_0_30 = "AGE_0_30"
    AGE_31_60 = "AGE_31_60"
    AGE_61_90 = "AGE_61_90"
    AGE_90_PLUS = "AGE_90_PLUS"


@dataclass(frozen=True)
class AgingBandSpec:
    band: AgingBand
    label: str
    max_days: int | None  # inclusive upper bound; None is open-ended


AGING_BANDS: tuple[AgingBandSpec, ...] = (
    AgingBandSpec(AgingBand.CURRENT, "Current (not yet due)", 0),
    AgingBandSpec(AgingBand.AGE_0_30, "0-30 days past due", 30),
    AgingBandSpec(AgingBand.AGE_31_60, "31-60 days past due", 60),
    AgingBandSpec(AgingBand.AGE_61_90, "61-90 days past due", 90),
    AgingBandSpec(AgingBand.AGE_90_PLUS, "90+ days past due", None),
)


def days_past_due(basis: datetime | None, now: datetime) -> int | None:
    """Whole days elapsed since `basis`, floored; negative when not yet due."""
    if basis is None:
        return None
    elapsed = (as_utc(now) - as_utc(basis)).total_seconds()
    return int(elapsed // SECONDS_PER_DAY)


def classify_days(days: int | None) -> AgingBand:
    if days is None:
        return AgingBand.CURRENT
    for band_spec in AGING_BANDS:
        if band_spec.max_days is None or days <= band_spec.max_days:
            return band_spec.band
    return AgingBand.AGE_90_PLUS


def is_agable(invoice: InvoiceRecord) -> bool:
    return invoice.is_outstanding and invoice.amount_cents > 0


@dataclass
class AgingBucket:
    band: AgingBand
    label: str
    total_cents: int = 0
    invoice_count: int = 0
    share: int = 0


@dataclass(frozen=True)
class AgedInvoice:
    invoice: InvoiceRecord
    band: AgingBand
    days_past_due: int | None


def age_invoices(invoices: Iterable[InvoiceRecord], now: datetime) -> list[AgedInvoice]:
    """Band every outstanding invoice with a positive amount, oldest due first."""
    aged = []
    for invoice in invoices:
        if not is_agable(invoice):
            continue
        days = days_past_due(invoice.due_basis, now)
        aged.append(AgedInvoice(invoice=invoice, band=classify_days(days), days_past_due=days))
    aged.sort(key=lambda item: item.days_past_due if item.days_past_due is not None else float("-inf"), reverse=True)
    return aged


def build_aging(invoices: Iterable[InvoiceRecord], now: datetime) -> list[AgingBucket]:
    """Five zero-filled bands in fixed order.

    Band totals sum to the outstanding total of the same invoices.
    """
    buckets = {band_spec.band: AgingBucket(band=band_spec.band, label=band_spec.label) for band_spec in AGING_BANDS}
    for aged in age_invoices(invoices, now):
        bucket = buckets[aged.band]
        bucket.total_cents += aged.invoice.amount_cents
        bucket.invoice_count += 1

    outstanding = sum(bucket.total_cents for bucket in buckets.values())
    for bucket in buckets.values():
        bucket.share = percent(bucket.total_cents, outstanding)
    return [buckets[band_spec.band] for band_spec in AGING_BANDS]

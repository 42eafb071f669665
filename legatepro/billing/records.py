"""Canonical invoice and time-entry records consumed by the billing engine.

Stored rows carry optional and legacy fields. Everything downstream of this
module works on these frozen records only, so the defaulting rules live in
one place: unknown status becomes DRAFT, missing amounts become 0 cents and
naive timestamps are read as UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

from legatepro.billing.money import LEGACY_CENTS_THRESHOLD, normalize_amount, read_field, to_decimal
from legatepro.models.enums import OUTSTANDING_STATUSES, InvoiceStatus


def normalize_status(raw: Any) -> InvoiceStatus:
    if isinstance(raw, InvoiceStatus):
        return raw
    if not isinstance(raw, str):
        return InvoiceStatus.DRAFT
    try:
        return InvoiceStatus(raw.strip().upper())
    except ValueError:
        return InvoiceStatus.DRAFT


def as_utc(value: Any) -> datetime | None:
    """Coerce a stored date/datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return None


def _as_id(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class InvoiceRecord:
    invoice_id: int | None
    estate_id: int | None
    status: InvoiceStatus
    amount_cents: int
    currency: str | None = None
    invoice_number: str | None = None
    issue_date: datetime | None = None
    due_date: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_outstanding(self) -> bool:
        return self.status in OUTSTANDING_STATUSES

    @property
    def effective_date(self) -> datetime | None:
        """Date used for monthly bucketing."""
        return self.issue_date or self.created_at

    @property
    def due_basis(self) -> datetime | None:
        """Date aging is measured from."""
        return self.due_date or self.issue_date or self.created_at


@dataclass(frozen=True)
class TimeEntryRecord:
    entry_id: int | None
    estate_id: int | None
    duration_minutes: float | None = None
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    hourly_rate_cents: int | None = None
    billable: bool = True


def invoice_record_from(source: Any, threshold: int = LEGACY_CENTS_THRESHOLD) -> InvoiceRecord:
    """Build an InvoiceRecord from an ORM row or a plain mapping."""
    currency = read_field(source, "currency")
    return InvoiceRecord(
        invoice_id=_as_id(read_field(source, "id")),
        estate_id=_as_id(read_field(source, "estate_id")),
        status=normalize_status(read_field(source, "status")),
        amount_cents=normalize_amount(source, threshold=threshold),
        currency=currency.strip().upper() if isinstance(currency, str) and currency.strip() else None,
        invoice_number=read_field(source, "invoice_number"),
        issue_date=as_utc(read_field(source, "issue_date")),
        due_date=as_utc(read_field(source, "due_date")),
        created_at=as_utc(read_field(source, "created_at")),
    )


def time_entry_record_from(source: Any) -> TimeEntryRecord:
    """Build a TimeEntryRecord from an ORM row or a plain mapping."""
    duration = to_decimal(read_field(source, "duration_minutes"))
    rate = to_decimal(read_field(source, "hourly_rate_cents"))
    billable = read_field(source, "billable")
    return TimeEntryRecord(
        entry_id=_as_id(read_field(source, "id")),
        estate_id=_as_id(read_field(source, "estate_id")),
        duration_minutes=float(duration) if duration is not None else None,
        started_at=as_utc(read_field(source, "started_at")),
        stopped_at=as_utc(read_field(source, "stopped_at")),
        hourly_rate_cents=int(rate) if rate is not None else None,
        billable=True if billable is None else bool(billable),
    )

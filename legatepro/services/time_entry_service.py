"""Time entry tracking per estate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from legatepro.auth.tenant_context import TenantContext
from legatepro.billing.formatting import minutes_to_hours
from legatepro.billing.records import as_utc, time_entry_record_from
from legatepro.billing.time_valuation import resolve_minutes
from legatepro.core.exceptions import NotFoundError, ValidationError
from legatepro.models import Invoice, TimeEntry
from legatepro.services.base_service import BaseService
from legatepro.services.estate_service import EstateService

logger = logging.getLogger(__name__)


@dataclass
class TimeSummary:
    start: date | None
    end: date | None
    total_entries: int = 0
    total_minutes: float = 0.0
    billable_minutes: float = 0.0
    non_billable_minutes: float = 0.0
    billed_minutes: float = 0.0
    unbilled_billable_minutes: float = 0.0

    def hours(self) -> dict[str, float]:
        return {
            "total_hours": minutes_to_hours(self.total_minutes),
            "billable_hours": minutes_to_hours(self.billable_minutes),
            "non_billable_hours": minutes_to_hours(self.non_billable_minutes),
            "billed_hours": minutes_to_hours(self.billed_minutes),
            "unbilled_billable_hours": minutes_to_hours(self.unbilled_billable_minutes),
        }


class TimeEntryService(BaseService):
    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.estates = EstateService(self.db)

    def list_entries(
        self,
        context: TenantContext,
        estate_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[TimeEntry]:
        self.estates.require_access(context, estate_id)
        query = self.db.query(TimeEntry).filter(TimeEntry.estate_id == estate_id, TimeEntry.not_deleted())
        if start is not None:
            query = query.filter(TimeEntry.entry_date >= start)
        if end is not None:
            query = query.filter(TimeEntry.entry_date <= end)
        return query.order_by(TimeEntry.entry_date.desc(), TimeEntry.id.desc()).all()

    def create_entry(
        self,
        context: TenantContext,
        estate_id: int,
        entry_date: date | None = None,
        duration_minutes: int | None = None,
        started_at: datetime | None = None,
        stopped_at: datetime | None = None,
        description: str = "",
        category: str | None = None,
        hourly_rate_cents: int | None = None,
        billable: bool = True,
    ) -> TimeEntry:
        """Record time either as a duration or as a start/stop pair."""
        estate = self.estates.require_access(context, estate_id, write=True)
        started = as_utc(started_at)
        stopped = as_utc(stopped_at)
        if duration_minutes is None and (started is None or stopped is None):
            raise ValidationError("Provide duration_minutes or both started_at and stopped_at.")
        if duration_minutes is not None and duration_minutes <= 0:
            raise ValidationError("duration_minutes must be positive.")
        if started is not None and stopped is not None and stopped <= started:
            raise ValidationError("stopped_at must be after started_at.")
        if hourly_rate_cents is not None and hourly_rate_cents < 0:
            raise ValidationError("hourly_rate_cents must be >= 0.")

        entry = TimeEntry(
            tenant_id=estate.tenant_id,
            estate_id=estate.id,
            entry_date=entry_date or (started.date() if started else datetime.now(timezone.utc).date()),
            description=description.strip(),
            category=category,
            duration_minutes=duration_minutes,
            started_at=started,
            stopped_at=stopped,
            hourly_rate_cents=hourly_rate_cents,
            billable=billable,
        )
        self.db.add(entry)
        self.commit()
        self.db.refresh(entry)
        logger.info(
            "time_entry.created",
            extra={
                "event": "time_entry.created",
                "tenant_id": context.tenant_id,
                "estate_id": estate_id,
                "time_entry_id": entry.id,
            },
        )
        return entry

    def set_billed(
        self,
        context: TenantContext,
        estate_id: int,
        entry_id: int,
        billed: bool,
        invoice_id: int | None = None,
    ) -> TimeEntry:
        """Attach the entry to an invoice of the same estate, or detach it."""
        self.estates.require_access(context, estate_id, write=True)
        entry = (
            self.db.query(TimeEntry)
            .filter(TimeEntry.id == entry_id, TimeEntry.estate_id == estate_id, TimeEntry.not_deleted())
            .first()
        )
        if entry is None:
            raise NotFoundError(f"Time entry not found: {entry_id}")

        if billed:
            if invoice_id is None:
                raise ValidationError("invoice_id is required when marking time billed.")
            invoice = (
                self.db.query(Invoice)
                .filter(Invoice.id == invoice_id, Invoice.estate_id == estate_id, Invoice.not_deleted())
                .first()
            )
            if invoice is None:
                raise NotFoundError(f"Invoice not found: {invoice_id}")
            entry.billed_invoice_id = invoice.id
        else:
            entry.billed_invoice_id = None

        self.commit()
        self.db.refresh(entry)
        logger.info(
            "time_entry.billed_changed",
            extra={
                "event": "time_entry.billed_changed",
                "tenant_id": context.tenant_id,
                "time_entry_id": entry.id,
                "billed_invoice_id": entry.billed_invoice_id,
            },
        )
        return entry

    def summarize(
        self,
        context: TenantContext,
        estate_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> TimeSummary:
        summary = TimeSummary(start=start, end=end)
        for entry in self.list_entries(context, estate_id, start=start, end=end):
            minutes = resolve_minutes(time_entry_record_from(entry))
            summary.total_entries += 1
            summary.total_minutes += minutes
            if entry.billable:
                summary.billable_minutes += minutes
            else:
                summary.non_billable_minutes += minutes
            if entry.billed_invoice_id is not None:
                summary.billed_minutes += minutes
            elif entry.billable and not entry.is_archived:
                summary.unbilled_billable_minutes += minutes
        return summary

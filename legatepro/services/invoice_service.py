"""Invoice creation, status transitions, aging detail and export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pandas as pd
from sqlalchemy.orm import Session

from legatepro.auth.tenant_context import TenantContext
from legatepro.billing.aging import AgedInvoice, AgingBucket, age_invoices, build_aging, days_past_due
from legatepro.billing.formatting import normalize_currency
from legatepro.billing.money import round_half_up
from legatepro.billing.records import as_utc, invoice_record_from, normalize_status
from legatepro.billing.transitions import invoice_state_machine
from legatepro.core.config import Config, get_config
from legatepro.core.exceptions import NotFoundError, ValidationError
from legatepro.models import (
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    InvoiceStatusAudit,
    InvoiceTerms,
    LineItemType,
    TimeEntry,
)
from legatepro.services.base_service import BaseService
from legatepro.services.billing_repository import BillingRepository
from legatepro.services.dashboard_service import estate_label
from legatepro.services.estate_service import EstateService
from legatepro.utils.export import rows_to_frame

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    "invoice_id",
    "invoice_number",
    "estate_id",
    "estate_label",
    "status",
    "currency",
    "amount_cents",
    "issue_date",
    "due_date",
    "days_past_due",
)


@dataclass(frozen=True)
class LineItemInput:
    item_type: str
    label: str
    quantity: Decimal = Decimal("1")
    rate_cents: int = 0
    amount_cents: int | None = None
    source_time_entry_id: int | None = None

    def resolved_amount_cents(self) -> int:
        if self.amount_cents is not None:
            return int(self.amount_cents)
        return round_half_up(Decimal(self.quantity) * Decimal(self.rate_cents))


@dataclass
class AgingReport:
    buckets: list[AgingBucket]
    invoices: list[AgedInvoice]
    labels: dict[int, str]


def _as_datetime(value: date | datetime | None) -> datetime | None:
    return as_utc(value) if value is not None else None


class InvoiceService(BaseService):
    def __init__(self, db: Session | None = None, config: Config | None = None) -> None:
        super().__init__(db)
        self.config = config or get_config()
        self.repository = BillingRepository(self.db)
        self.estates = EstateService(self.db)

    def list_invoices(self, context: TenantContext, estate_id: int) -> list[Invoice]:
        self.estates.require_access(context, estate_id)
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        invoices = self.repository.list_invoices(context.tenant_id, estate_id=estate_id)
        return sorted(invoices, key=lambda invoice: as_utc(invoice.issue_date) or oldest, reverse=True)

    def get_invoice(self, context: TenantContext, estate_id: int, invoice_id: int, write: bool = False) -> Invoice:
        self.estates.require_access(context, estate_id, write=write)
        invoice = (
            self.db.query(Invoice)
            .filter(Invoice.id == invoice_id, Invoice.estate_id == estate_id, Invoice.not_deleted())
            .first()
        )
        if invoice is None:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        return invoice

    def create_invoice(
        self,
        context: TenantContext,
        estate_id: int,
        line_items: list[LineItemInput],
        issue_date: date | datetime | None = None,
        due_date: date | datetime | None = None,
        currency: str | None = None,
        tax_rate: Decimal | None = None,
        invoice_number: str | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> Invoice:
        """Create a DRAFT invoice whose amount is derived from its line items.

        `due_date` defaults to the issue date plus the workspace's invoice terms.
        TIME lines that reference a time entry mark that entry billed.
        """
        estate = self.estates.require_access(context, estate_id, write=True)
        if not line_items:
            raise ValidationError("An invoice needs at least one line item.")

        rate = Decimal(tax_rate) if tax_rate is not None else Decimal("0")
        if rate < 0 or rate > 1:
            raise ValidationError("tax_rate must be between 0 and 1.")

        settings = self.repository.get_settings(context.tenant_id)
        terms = InvoiceTerms(settings.default_invoice_terms) if settings else InvoiceTerms.NET_30
        issued = _as_datetime(issue_date) or now or datetime.now(timezone.utc)
        due = _as_datetime(due_date) or issued + timedelta(days=terms.days)
        if due.date() < issued.date():
            raise ValidationError("due_date cannot be before issue_date.")

        items = []
        for line in line_items:
            try:
                item_type = LineItemType(line.item_type.upper()).value
            except ValueError as exc:
                raise ValidationError(f"Unknown line item type: {line.item_type}") from exc
            if item_type != LineItemType.ADJUSTMENT.value and line.resolved_amount_cents() < 0:
                raise ValidationError("Only adjustment lines may be negative.")
            items.append(
                InvoiceLineItem(
                    item_type=item_type,
                    label=line.label,
                    source_time_entry_id=line.source_time_entry_id,
                    quantity=Decimal(line.quantity),
                    rate_cents=line.rate_cents,
                    amount_cents=line.resolved_amount_cents(),
                )
            )

        subtotal = sum(item.amount_cents for item in items)
        tax = round_half_up(Decimal(subtotal) * rate)
        invoice = Invoice(
            tenant_id=estate.tenant_id,
            estate_id=estate.id,
            invoice_number=invoice_number.strip() if invoice_number and invoice_number.strip() else None,
            status=InvoiceStatus.DRAFT.value,
            currency=normalize_currency(
                currency or (settings.default_currency if settings else None),
                fallback=self.config.DEFAULT_CURRENCY,
            ),
            issue_date=issued,
            due_date=due,
            notes=notes,
            subtotal_cents=subtotal,
            tax_rate=rate,
            tax_cents=tax,
            amount_cents=max(subtotal + tax, 0),
            line_items=items,
        )
        self.db.add(invoice)
        self.flush()
        self._mark_time_billed(invoice, items)
        self.commit()
        self.db.refresh(invoice)
        logger.info(
            "invoice.created",
            extra={
                "event": "invoice.created",
                "tenant_id": context.tenant_id,
                "estate_id": estate_id,
                "invoice_id": invoice.id,
                "amount_cents": invoice.amount_cents,
            },
        )
        return invoice

    def _mark_time_billed(self, invoice: Invoice, items: list[InvoiceLineItem]) -> None:
        entry_ids = [item.source_time_entry_id for item in items if item.source_time_entry_id is not None]
        if not entry_ids:
            return
        entries = (
            self.db.query(TimeEntry)
            .filter(TimeEntry.id.in_(entry_ids), TimeEntry.estate_id == invoice.estate_id)
            .all()
        )
        found = {entry.id: entry for entry in entries}
        for entry_id in entry_ids:
            entry = found.get(entry_id)
            if entry is None:
                self.rollback()
                raise ValidationError(f"Time entry {entry_id} does not belong to this estate.")
            if entry.billed_invoice_id is not None:
                self.rollback()
                raise ValidationError(f"Time entry {entry_id} is already billed.")
            entry.billed_invoice_id = invoice.id

    def change_status(
        self,
        context: TenantContext,
        estate_id: int,
        invoice_id: int,
        target: str,
        actor: str | None = None,
        now: datetime | None = None,
    ) -> Invoice:
        """Move an invoice to `target`, journaling the change.

        Moving to the current status is a no-op. PAID stamps `paid_at`.
        """
        invoice = self.get_invoice(context, estate_id, invoice_id, write=True)
        try:
            new_status = InvoiceStatus(str(target).strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown invoice status: {target}") from exc

        current = normalize_status(invoice.status)
        if current is new_status:
            return invoice
        invoice_state_machine.assert_transition(current.value, new_status.value)

        changed_at = now or datetime.now(timezone.utc)
        invoice.status = new_status.value
        if new_status is InvoiceStatus.PAID:
            invoice.paid_at = changed_at
        self.db.add(
            InvoiceStatusAudit(
                tenant_id=invoice.tenant_id,
                invoice_id=invoice.id,
                old_status=current.value,
                new_status=new_status.value,
                actor=actor or f"user:{context.user_id}",
                changed_at=changed_at,
            )
        )
        self.commit()
        self.db.refresh(invoice)
        logger.info(
            "invoice.status_changed",
            extra={
                "event": "invoice.status_changed",
                "tenant_id": context.tenant_id,
                "invoice_id": invoice.id,
                "old_status": current.value,
                "new_status": new_status.value,
            },
        )
        return invoice

    def _labels(self, tenant_id: int) -> dict[int, str]:
        return {
            estate.id: estate_label(estate.id, estate.display_name, estate.case_name)
            for estate in self.repository.list_estates(tenant_id)
        }

    def aging_report(self, context: TenantContext, now: datetime | None = None) -> AgingReport:
        now = now or datetime.now(timezone.utc)
        records = [
            invoice_record_from(row, threshold=self.config.LEGACY_CENTS_THRESHOLD)
            for row in self.repository.list_invoices(context.tenant_id)
        ]
        return AgingReport(
            buckets=build_aging(records, now),
            invoices=age_invoices(records, now),
            labels=self._labels(context.tenant_id),
        )

    def export_frame(self, context: TenantContext, now: datetime | None = None) -> pd.DataFrame:
        """All of the tenant's invoices with normalized amounts, one row each."""
        now = now or datetime.now(timezone.utc)
        labels = self._labels(context.tenant_id)
        rows = []
        for row in self.repository.list_invoices(context.tenant_id):
            record = invoice_record_from(row, threshold=self.config.LEGACY_CENTS_THRESHOLD)
            rows.append(
                {
                    "invoice_id": record.invoice_id,
                    "invoice_number": record.invoice_number,
                    "estate_id": record.estate_id,
                    "estate_label": labels.get(record.estate_id) or estate_label(record.estate_id),
                    "status": record.status.value,
                    "currency": record.currency or self.config.DEFAULT_CURRENCY,
                    "amount_cents": record.amount_cents,
                    "issue_date": record.issue_date.date().isoformat() if record.issue_date else None,
                    "due_date": record.due_date.date().isoformat() if record.due_date else None,
                    "days_past_due": days_past_due(record.due_basis, now) if record.is_outstanding else None,
                }
            )
        return rows_to_frame(rows, EXPORT_COLUMNS)

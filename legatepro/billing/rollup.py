"""Invoice totals by status partition, globally and per estate."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from legatepro.billing.money import percent
from legatepro.billing.records import InvoiceRecord
from legatepro.models.enums import InvoiceStatus


@dataclass
class RollupTotals:
    total_invoiced_cents: int = 0
    collected_cents: int = 0
    outstanding_cents: int = 0
    voided_cents: int = 0
    invoice_count: int = 0

    def add(self, invoice: InvoiceRecord) -> None:
        # DRAFT lands in total_invoiced only; drafts are not yet receivable.
        amount = invoice.amount_cents
        self.total_invoiced_cents += amount
        self.invoice_count += 1
        if invoice.status is InvoiceStatus.PAID:
            self.collected_cents += amount
        elif invoice.status is InvoiceStatus.VOID:
            self.voided_cents += amount
        elif invoice.is_outstanding:
            self.outstanding_cents += amount

    def clamped(self) -> "RollupTotals":
        """Copy with negative sums floored at zero, for display."""
        return replace(
            self,
            total_invoiced_cents=max(self.total_invoiced_cents, 0),
            collected_cents=max(self.collected_cents, 0),
            outstanding_cents=max(self.outstanding_cents, 0),
            voided_cents=max(self.voided_cents, 0),
        )

    @property
    def collection_rate(self) -> int:
        return percent(max(self.collected_cents, 0), max(self.total_invoiced_cents, 0))


@dataclass
class InvoiceRollup:
    totals: RollupTotals = field(default_factory=RollupTotals)
    by_estate: dict[int, RollupTotals] = field(default_factory=dict)


def rollup_invoices(invoices: Iterable[InvoiceRecord]) -> InvoiceRollup:
    rollup = InvoiceRollup()
    for invoice in invoices:
        rollup.totals.add(invoice)
        if invoice.estate_id is None:
            continue
        rollup.by_estate.setdefault(invoice.estate_id, RollupTotals()).add(invoice)
    return rollup

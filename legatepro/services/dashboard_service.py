"""Billing overview for one tenant's dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from legatepro.billing.aging import AgingBucket, build_aging, days_past_due
from legatepro.billing.formatting import normalize_currency
from legatepro.billing.records import InvoiceRecord, invoice_record_from, time_entry_record_from
from legatepro.billing.rollup import RollupTotals, rollup_invoices
from legatepro.billing.time_valuation import UnbilledTotals, summarize_unbilled_time
from legatepro.billing.trend import MonthlyBucket, build_monthly_trend
from legatepro.core.config import Config, get_config
from legatepro.core.exceptions import DatabaseError
from legatepro.core.logging import LogContext, build_log_event
from legatepro.models import Estate
from legatepro.services.base_service import BaseService
from legatepro.services.billing_repository import BillingRepository

logger = logging.getLogger(__name__)


def estate_label(estate_id: int | str, display_name: str | None = None, case_name: str | None = None) -> str:
    for candidate in (display_name, case_name):
        if candidate and candidate.strip():
            return candidate.strip()
    return f"Estate {str(estate_id)[-6:].upper()}"


@dataclass
class EstateBillingRow:
    estate_id: int
    label: str
    invoiced_cents: int = 0
    collected_cents: int = 0
    outstanding_cents: int = 0
    voided_cents: int = 0
    unbilled_minutes: float = 0.0
    unbilled_value_cents: int = 0

    @property
    def collection_rate(self) -> int:
        return RollupTotals(
            total_invoiced_cents=self.invoiced_cents,
            collected_cents=self.collected_cents,
        ).collection_rate


@dataclass(frozen=True)
class RecentInvoice:
    invoice_id: int | None
    invoice_number: str | None
    estate_id: int | None
    estate_label: str
    status: str
    amount_cents: int
    issue_date: datetime | None
    due_date: datetime | None
    days_past_due: int | None


@dataclass
class DashboardSummary:
    tenant_id: int
    currency: str
    generated_at: datetime
    totals: RollupTotals
    unbilled: UnbilledTotals
    unvalued_minutes: float
    trend: list[MonthlyBucket]
    aging: list[AgingBucket]
    estates: list[EstateBillingRow] = field(default_factory=list)
    recent_invoices: list[RecentInvoice] = field(default_factory=list)
    estate_count: int = 0
    show_onboarding: bool = False

    @property
    def collection_rate(self) -> int:
        return self.totals.collection_rate


class DashboardService(BaseService):
    """Loads one tenant's billing data and runs the aggregation engine over it."""

    def __init__(self, db: Session | None = None, config: Config | None = None) -> None:
        super().__init__(db)
        self.config = config or get_config()
        self.repository = BillingRepository(self.db)

    def build_summary(self, tenant_id: int, now: datetime | None = None) -> DashboardSummary:
        """Compute the overview at `now` (defaults to the current UTC time).

        Failures loading invoices, time entries or settings propagate as
        DatabaseError. A failure loading estates only degrades labels.
        """
        now = now or datetime.now(timezone.utc)
        threshold = self.config.LEGACY_CENTS_THRESHOLD

        invoices = [
            invoice_record_from(row, threshold=threshold) for row in self.repository.list_invoices(tenant_id)
        ]
        entries = [time_entry_record_from(row) for row in self.repository.list_unbilled_time_entries(tenant_id)]
        settings = self.repository.get_settings(tenant_id)
        default_rate = settings.default_hourly_rate_cents if settings else None
        currency = normalize_currency(
            settings.default_currency if settings else None,
            fallback=self.config.DEFAULT_CURRENCY,
        )

        rollup = rollup_invoices(invoices)
        unbilled = summarize_unbilled_time(entries, default_rate_cents=default_rate)
        trend = build_monthly_trend(invoices, now)
        aging = build_aging(invoices, now)

        estates = self._load_estates(tenant_id)
        labels = {
            estate.id: estate_label(estate.id, estate.display_name, estate.case_name) for estate in estates or []
        }

        rows: dict[int, EstateBillingRow] = {}

        def row_for(estate_id: int) -> EstateBillingRow:
            if estate_id not in rows:
                rows[estate_id] = EstateBillingRow(
                    estate_id=estate_id,
                    label=labels.get(estate_id) or estate_label(estate_id),
                )
            return rows[estate_id]

        for estate_id, totals in rollup.by_estate.items():
            row = row_for(estate_id)
            clamped = totals.clamped()
            row.invoiced_cents = clamped.total_invoiced_cents
            row.collected_cents = clamped.collected_cents
            row.outstanding_cents = clamped.outstanding_cents
            row.voided_cents = clamped.voided_cents
        for estate_id, time_totals in unbilled.by_estate.items():
            row = row_for(estate_id)
            row.unbilled_minutes = time_totals.minutes
            row.unbilled_value_cents = time_totals.value_cents

        estate_rows = sorted(rows.values(), key=lambda row: (-row.invoiced_cents, row.estate_id))
        recent = self._recent_invoices(invoices, labels, now)
        show_onboarding = bool(estates) and not invoices and unbilled.totals.minutes == 0

        summary = DashboardSummary(
            tenant_id=tenant_id,
            currency=currency,
            generated_at=now,
            totals=rollup.totals.clamped(),
            unbilled=unbilled.totals,
            unvalued_minutes=unbilled.unvalued_minutes,
            trend=trend,
            aging=aging,
            estates=estate_rows,
            recent_invoices=recent,
            estate_count=len(estates or []),
            show_onboarding=show_onboarding,
        )
        logger.info(
            "dashboard.built",
            extra=build_log_event(
                "dashboard.built",
                LogContext(tenant_id=tenant_id),
                invoice_count=len(invoices),
                unbilled_entry_count=unbilled.valued_entries,
                excluded_entry_count=unbilled.excluded_entries,
                estate_rows=len(estate_rows),
            ),
        )
        return summary

    def _load_estates(self, tenant_id: int) -> list[Estate] | None:
        try:
            return self.repository.list_estates(tenant_id)
        except DatabaseError as exc:
            logger.warning(
                "dashboard.estate_lookup_failed",
                extra=build_log_event("dashboard.estate_lookup_failed", LogContext(tenant_id=tenant_id), reason=str(exc)),
            )
            return None

    def _recent_invoices(
        self,
        invoices: list[InvoiceRecord],
        labels: dict[int, str],
        now: datetime,
    ) -> list[RecentInvoice]:
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        ordered = sorted(invoices, key=lambda invoice: invoice.effective_date or oldest, reverse=True)
        recent = []
        for invoice in ordered[: self.config.RECENT_INVOICE_LIMIT]:
            estate_id = invoice.estate_id
            recent.append(
                RecentInvoice(
                    invoice_id=invoice.invoice_id,
                    invoice_number=invoice.invoice_number,
                    estate_id=estate_id,
                    estate_label=labels.get(estate_id) or estate_label(estate_id if estate_id is not None else "unknown"),
                    status=invoice.status.value,
                    amount_cents=invoice.amount_cents,
                    issue_date=invoice.issue_date,
                    due_date=invoice.due_date,
                    days_past_due=days_past_due(invoice.due_basis, now) if invoice.is_outstanding else None,
                )
            )
        return recent

"""Dashboard response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from legatepro.schemas.common import Money


class BillingTotals(BaseModel):
    total_invoiced: Money
    collected: Money
    outstanding: Money
    voided: Money
    invoice_count: int
    collection_rate: int


class UnbilledTime(BaseModel):
    minutes: float
    hours: float
    value: Money
    unvalued_minutes: float


class TrendPoint(BaseModel):
    key: str
    label: str
    invoiced: Money
    collected: Money
    outstanding: Money
    collection_rate: int


class AgingBandResponse(BaseModel):
    band: str
    label: str
    total: Money
    invoice_count: int
    share: int


class EstateBillingResponse(BaseModel):
    estate_id: int
    label: str
    invoiced: Money
    collected: Money
    outstanding: Money
    voided: Money
    unbilled_hours: float
    unbilled_value: Money
    collection_rate: int


class RecentInvoiceResponse(BaseModel):
    invoice_id: int | None = None
    invoice_number: str | None = None
    estate_id: int | None = None
    estate_label: str
    status: str
    amount: Money
    issue_date: datetime | None = None
    due_date: datetime | None = None
    days_past_due: int | None = None


class DashboardResponse(BaseModel):
    currency: str
    generated_at: datetime
    totals: BillingTotals
    unbilled: UnbilledTime
    trend: list[TrendPoint]
    aging: list[AgingBandResponse]
    estates: list[EstateBillingResponse]
    recent_invoices: list[RecentInvoiceResponse]
    estate_count: int
    show_onboarding: bool

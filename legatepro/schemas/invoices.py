"""Invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from legatepro.schemas.common import Money


class LineItemRequest(BaseModel):
    item_type: str = Field(default="TIME", min_length=3, max_length=20)
    label: str = Field(min_length=1, max_length=255)
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    rate_cents: int = Field(default=0, ge=0)
    amount_cents: int | None = None
    source_time_entry_id: int | None = Field(default=None, ge=1)


class InvoiceCreateRequest(BaseModel):
    line_items: list[LineItemRequest] = Field(min_length=1)
    issue_date: date | None = None
    due_date: date | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    tax_rate: Decimal | None = Field(default=None, ge=0, le=1)
    invoice_number: str | None = Field(default=None, max_length=64)
    notes: str | None = Field(default=None, max_length=10000)


class InvoiceStatusUpdateRequest(BaseModel):
    status: str = Field(min_length=3, max_length=20)


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_type: str
    label: str
    quantity: Decimal
    rate_cents: int
    amount_cents: int
    source_time_entry_id: int | None = None


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    estate_id: int
    invoice_number: str | None = None
    status: str
    currency: str
    issue_date: datetime | None = None
    due_date: datetime | None = None
    paid_at: datetime | None = None
    notes: str | None = None
    subtotal_cents: int
    tax_rate: Decimal
    tax_cents: int
    amount_cents: int
    amount_formatted: str
    line_items: list[LineItemResponse] = Field(default_factory=list)


class AgedInvoiceResponse(BaseModel):
    invoice_id: int | None = None
    invoice_number: str | None = None
    estate_id: int | None = None
    estate_label: str
    status: str
    amount: Money
    due_date: datetime | None = None
    days_past_due: int | None = None


class AgingGroupResponse(BaseModel):
    band: str
    label: str
    total: Money
    invoice_count: int
    share: int
    invoices: list[AgedInvoiceResponse]


class AgingReportResponse(BaseModel):
    currency: str
    outstanding: Money
    bands: list[AgingGroupResponse]

"""Time entry request/response schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class TimeEntryCreateRequest(BaseModel):
    entry_date: date | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    hours: float | None = Field(default=None, gt=0)
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    description: str = Field(default="", max_length=5000)
    category: str | None = Field(default=None, max_length=60)
    hourly_rate_cents: int | None = Field(default=None, ge=0)
    billable: bool = True


class TimeEntryBilledRequest(BaseModel):
    billed: bool
    invoice_id: int | None = Field(default=None, ge=1)


class TimeEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    estate_id: int
    entry_date: date | None = None
    description: str
    category: str | None = None
    duration_minutes: int | None = None
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    hourly_rate_cents: int | None = None
    billable: bool
    is_archived: bool
    billed_invoice_id: int | None = None


class TimeSummaryResponse(BaseModel):
    start: date | None = None
    end: date | None = None
    total_entries: int
    total_minutes: float
    total_hours: float
    billable_minutes: float
    billable_hours: float
    non_billable_minutes: float
    non_billable_hours: float
    billed_minutes: float
    billed_hours: float
    unbilled_billable_minutes: float
    unbilled_billable_hours: float

"""Workspace settings schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SettingsUpdateRequest(BaseModel):
    firm_name: str | None = Field(default=None, max_length=255)
    default_currency: str | None = Field(default=None, min_length=3, max_length=3)
    default_hourly_rate_cents: int | None = Field(default=None, ge=0)
    default_invoice_terms: str | None = Field(default=None, max_length=20)


class SettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    firm_name: str | None = None
    default_currency: str | None = "USD"
    default_hourly_rate_cents: int | None = None
    default_invoice_terms: str

"""Estate request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EstateCreateRequest(BaseModel):
    display_name: str | None = Field(default=None, max_length=255)
    case_name: str | None = Field(default=None, max_length=255)
    decedent_name: str | None = Field(default=None, max_length=255)
    court_county: str | None = Field(default=None, max_length=120)
    court_state: str | None = Field(default=None, min_length=2, max_length=2)
    court_case_number: str | None = Field(default=None, max_length=120)


class EstateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: int
    label: str
    display_name: str | None = None
    case_name: str | None = None
    decedent_name: str | None = None
    court_county: str | None = None
    court_state: str | None = None
    court_case_number: str | None = None
    status: str
    created_at: datetime | None = None

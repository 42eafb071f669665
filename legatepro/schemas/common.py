"""Common schema module."""

from __future__ import annotations

from pydantic import BaseModel

from legatepro.billing.formatting import format_money


class ErrorEnvelope(BaseModel):
    status: str = "error"
    error_code: str
    detail: str | None = None


class Money(BaseModel):
    """Cents plus the display string rendered for the workspace currency."""

    cents: int
    formatted: str


def money(cents: int, currency: str) -> Money:
    return Money(cents=cents, formatted=format_money(cents, currency))

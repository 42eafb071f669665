"""Time tracking endpoints for API v1."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Header, HTTPException, Query, status

from legatepro.api.v1._authz import authorize, to_http_error
from legatepro.core.exceptions import LegateProException
from legatepro.database.db import get_db_session
from legatepro.schemas.time_entries import (
    TimeEntryBilledRequest,
    TimeEntryCreateRequest,
    TimeEntryResponse,
    TimeSummaryResponse,
)
from legatepro.services.time_entry_service import TimeEntryService

router = APIRouter(prefix="/estates/{estate_id}/time", tags=["time"])


def _check_range(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end < start:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end must not precede start.")


@router.get("")
def list_time_entries(
    estate_id: int,
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = authorize(authorization=authorization, scopes=["time.read"])
    _check_range(start, end)
    try:
        with get_db_session() as session:
            entries = TimeEntryService(session).list_entries(user.tenant, estate_id, start=start, end=end)
            items = [TimeEntryResponse.model_validate(entry).model_dump(mode="json") for entry in entries]
    except LegateProException as exc:
        raise to_http_error(exc) from exc
    return {"items": items, "total": len(items)}


@router.post("", response_model=TimeEntryResponse, status_code=status.HTTP_201_CREATED)
def create_time_entry(
    estate_id: int,
    payload: TimeEntryCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> TimeEntryResponse:
    user = authorize(authorization=authorization, scopes=["time.write"])
    duration = payload.duration_minutes
    if duration is None and payload.hours is not None:
        duration = round(payload.hours * 60)
    try:
        with get_db_session() as session:
            entry = TimeEntryService(session).create_entry(
                user.tenant,
                estate_id,
                entry_date=payload.entry_date,
                duration_minutes=duration,
                started_at=payload.started_at,
                stopped_at=payload.stopped_at,
                description=payload.description,
                category=payload.category,
                hourly_rate_cents=payload.hourly_rate_cents,
                billable=payload.billable,
            )
            return TimeEntryResponse.model_validate(entry)
    except LegateProException as exc:
        raise to_http_error(exc) from exc


@router.post("/{entry_id}/billed", response_model=TimeEntryResponse)
def set_time_entry_billed(
    estate_id: int,
    entry_id: int,
    payload: TimeEntryBilledRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> TimeEntryResponse:
    user = authorize(authorization=authorization, scopes=["time.write"])
    try:
        with get_db_session() as session:
            entry = TimeEntryService(session).set_billed(
                user.tenant,
                estate_id,
                entry_id,
                billed=payload.billed,
                invoice_id=payload.invoice_id,
            )
            return TimeEntryResponse.model_validate(entry)
    except LegateProException as exc:
        raise to_http_error(exc) from exc


@router.get("/summary", response_model=TimeSummaryResponse)
def time_summary(
    estate_id: int,
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> TimeSummaryResponse:
    user = authorize(authorization=authorization, scopes=["time.read"])
    _check_range(start, end)
    try:
        with get_db_session() as session:
            summary = TimeEntryService(session).summarize(user.tenant, estate_id, start=start, end=end)
    except LegateProException as exc:
        raise to_http_error(exc) from exc
    return TimeSummaryResponse(
        start=summary.start,
        end=summary.end,
        total_entries=summary.total_entries,
        total_minutes=summary.total_minutes,
        billable_minutes=summary.billable_minutes,
        non_billable_minutes=summary.non_billable_minutes,
        billed_minutes=summary.billed_minutes,
        unbilled_billable_minutes=summary.unbilled_billable_minutes,
        **summary.hours(),
    )

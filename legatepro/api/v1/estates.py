"""Estate endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from legatepro.api.v1._authz import authorize, to_http_error
from legatepro.core.exceptions import LegateProException
from legatepro.database.db import get_db_session
from legatepro.models import Estate
from legatepro.schemas.estates import EstateCreateRequest, EstateResponse
from legatepro.services.dashboard_service import estate_label
from legatepro.services.estate_service import EstateService

router = APIRouter(prefix="/estates", tags=["estates"])


def to_estate_response(estate: Estate) -> EstateResponse:
    return EstateResponse(
        id=estate.id,
        tenant_id=estate.tenant_id,
        label=estate_label(estate.id, estate.display_name, estate.case_name),
        display_name=estate.display_name,
        case_name=estate.case_name,
        decedent_name=estate.decedent_name,
        court_county=estate.court_county,
        court_state=estate.court_state,
        court_case_number=estate.court_case_number,
        status=estate.status,
        created_at=estate.created_at,
    )


@router.get("")
def list_estates(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = authorize(authorization=authorization, scopes=["estates.read"])
    try:
        with get_db_session() as session:
            estates = EstateService(session).list_estates(user.tenant)
            items = [to_estate_response(estate).model_dump(mode="json") for estate in estates]
    except LegateProException as exc:
        raise to_http_error(exc) from exc
    return {"items": items, "total": len(items)}


@router.post("", response_model=EstateResponse, status_code=status.HTTP_201_CREATED)
def create_estate(
    payload: EstateCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> EstateResponse:
    user = authorize(authorization=authorization, scopes=["estates.write"])
    try:
        with get_db_session() as session:
            estate = EstateService(session).create_estate(user.tenant, **payload.model_dump())
            return to_estate_response(estate)
    except LegateProException as exc:
        raise to_http_error(exc) from exc


@router.get("/{estate_id}", response_model=EstateResponse)
def get_estate(
    estate_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> EstateResponse:
    user = authorize(authorization=authorization, scopes=["estates.read"])
    try:
        with get_db_session() as session:
            estate = EstateService(session).require_access(user.tenant, estate_id)
            return to_estate_response(estate)
    except LegateProException as exc:
        raise to_http_error(exc) from exc

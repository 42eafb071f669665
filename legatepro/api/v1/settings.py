"""Workspace settings endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header

from legatepro.api.v1._authz import authorize, to_http_error
from legatepro.core.exceptions import LegateProException
from legatepro.database.db import get_db_session
from legatepro.schemas.settings import SettingsResponse, SettingsUpdateRequest
from legatepro.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def get_settings(authorization: str | None = Header(default=None, alias="Authorization")) -> SettingsResponse:
    user = authorize(authorization=authorization, scopes=["settings.read"])
    with get_db_session() as session:
        settings = SettingsService(session).get_or_default(user.tenant_id)
        return SettingsResponse.model_validate(settings)


@router.put("", response_model=SettingsResponse)
def update_settings(
    payload: SettingsUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> SettingsResponse:
    user = authorize(authorization=authorization, scopes=["settings.write"])
    try:
        with get_db_session() as session:
            settings = SettingsService(session).update_settings(
                user.tenant_id,
                payload.model_dump(exclude_unset=True),
            )
            return SettingsResponse.model_validate(settings)
    except LegateProException as exc:
        raise to_http_error(exc) from exc

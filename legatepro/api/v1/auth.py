"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from legatepro.auth.jwt import REFRESH_TOKEN, TokenPair, create_token_pair, decode_jwt
from legatepro.auth.tenant_context import from_claims
from legatepro.core.config import get_config
from legatepro.core.exceptions import AuthenticationError
from legatepro.database.db import get_db_session
from legatepro.schemas.auth import LoginRequest, RefreshRequest, SessionTokens
from legatepro.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_tokens(tokens: TokenPair, tenant_id: int, role: str) -> SessionTokens:
    return SessionTokens(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=get_config().JWT_ACCESS_TTL_MINUTES * 60,
        tenant_id=tenant_id,
        role=role,
    )


@router.post("/login", response_model=SessionTokens)
def login(payload: LoginRequest) -> SessionTokens:
    cfg = get_config()
    with get_db_session() as session:
        try:
            user = AuthService(session).authenticate(payload.email, payload.password)
        except AuthenticationError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
        tokens = create_token_pair(
            user_id=user.id,
            tenant_id=user.tenant_id,
            role=user.role,
            secret=cfg.JWT_SECRET,
            permissions_version=cfg.JWT_PERMISSIONS_VERSION,
            access_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
            refresh_ttl_days=cfg.JWT_REFRESH_TTL_DAYS,
        )
        return _session_tokens(tokens, user.tenant_id, user.role)


@router.post("/refresh", response_model=SessionTokens)
def refresh(payload: RefreshRequest) -> SessionTokens:
    cfg = get_config()
    try:
        claims = decode_jwt(payload.refresh_token, secret=cfg.JWT_SECRET, expected_use=REFRESH_TOKEN)
        context = from_claims(claims)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    tokens = create_token_pair(
        user_id=context.user_id,
        tenant_id=context.tenant_id,
        role=context.role,
        secret=cfg.JWT_SECRET,
        permissions_version=context.permissions_version,
        access_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
        refresh_ttl_days=cfg.JWT_REFRESH_TTL_DAYS,
    )
    return _session_tokens(tokens, context.tenant_id, context.role)

"""Dependency providers for API handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from legatepro.auth.jwt import ACCESS_TOKEN, decode_jwt
from legatepro.auth.tenant_context import TenantContext, from_claims
from legatepro.core.config import Config, get_config
from legatepro.core.exceptions import AuthenticationError


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    role: str
    tenant_id: int
    permissions_version: int
    claims: dict[str, Any]

    @property
    def tenant(self) -> TenantContext:
        return TenantContext(
            tenant_id=self.tenant_id,
            user_id=self.user_id,
            role=self.role,
            permissions_version=self.permissions_version,
        )


def get_settings() -> Config:
    return get_config()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve the caller from a bearer access token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET, expected_use=ACCESS_TOKEN)
    context = from_claims(claims)
    if context.permissions_version < cfg.JWT_PERMISSIONS_VERSION:
        raise AuthenticationError("Token permissions are stale; sign in again.")
    return CurrentUser(
        user_id=context.user_id,
        role=context.role,
        tenant_id=context.tenant_id,
        permissions_version=context.permissions_version,
        claims=claims,
    )

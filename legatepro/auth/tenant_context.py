"""Tenant context extraction and estate-level access enforcement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from legatepro.core.exceptions import AuthenticationError, AuthorizationError
from legatepro.models.enums import CollaboratorRole


@dataclass(frozen=True)
class TenantContext:
    tenant_id: int
    user_id: int
    role: str
    permissions_version: int = 1


def from_claims(claims: dict[str, Any]) -> TenantContext:
    try:
        return TenantContext(
            tenant_id=int(claims["tenant_id"]),
            user_id=int(claims["sub"]),
            role=str(claims["role"]).lower(),
            permissions_version=int(claims.get("permissions_version", 1)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token claims are missing tenant/user context.") from exc


def enforce_tenant_match(entity_tenant_id: int, context: TenantContext) -> None:
    if int(entity_tenant_id) != int(context.tenant_id):
        raise AuthorizationError("Cross-tenant access denied.")


def enforce_estate_access(
    estate_tenant_id: int,
    context: TenantContext,
    collaborator_role: str | None = None,
    write: bool = False,
) -> None:
    """Allow the owning tenant, or a collaborator tenant with a sufficient grant.

    Viewers may read; writes need an EDITOR grant.
    """
    if int(estate_tenant_id) == int(context.tenant_id):
        return
    if collaborator_role is None:
        raise AuthorizationError("Estate is not shared with this workspace.")
    if write and str(collaborator_role).upper() != CollaboratorRole.EDITOR.value:
        raise AuthorizationError("Editor access is required to modify this estate.")

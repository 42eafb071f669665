from __future__ import annotations

import pytest

from legatepro.auth.tenant_context import TenantContext, enforce_estate_access, enforce_tenant_match, from_claims
from legatepro.core.exceptions import AuthenticationError, AuthorizationError

CONTEXT = TenantContext(tenant_id=1, user_id=5, role="owner")


def test_from_claims_reads_tenant_user_and_role():
    context = from_claims({"sub": "5", "tenant_id": "1", "role": "Editor", "permissions_version": 2})
    assert context == TenantContext(tenant_id=1, user_id=5, role="editor", permissions_version=2)


def test_from_claims_requires_tenant():
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "5", "role": "owner"})


def test_tenant_match():
    enforce_tenant_match(1, CONTEXT)
    with pytest.raises(AuthorizationError):
        enforce_tenant_match(2, CONTEXT)


def test_estate_access_rules():
    enforce_estate_access(1, CONTEXT, write=True)
    enforce_estate_access(2, CONTEXT, collaborator_role="VIEWER")
    enforce_estate_access(2, CONTEXT, collaborator_role="editor", write=True)
    with pytest.raises(AuthorizationError):
        enforce_estate_access(2, CONTEXT)
    with pytest.raises(AuthorizationError):
        enforce_estate_access(2, CONTEXT, collaborator_role="VIEWER", write=True)

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from legatepro.auth.jwt import ACCESS_TOKEN, REFRESH_TOKEN, create_token_pair, decode_jwt, encode_jwt
from legatepro.auth.rbac import get_scopes_for_role, has_scopes, require_scopes
from legatepro.core.exceptions import AuthenticationError, AuthorizationError


def test_jwt_roundtrip_contains_required_claims():
    tokens = create_token_pair(user_id=10, tenant_id=20, role="owner", secret="test-secret")
    claims = decode_jwt(tokens.access_token, secret="test-secret", expected_use=ACCESS_TOKEN)
    assert claims["sub"] == "10"
    assert claims["tenant_id"] == 20
    assert claims["role"] == "owner"
    assert claims["permissions_version"] == 1
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims


def test_refresh_token_is_not_an_access_token():
    tokens = create_token_pair(user_id=10, tenant_id=20, role="owner", secret="test-secret")
    assert decode_jwt(tokens.refresh_token, secret="test-secret", expected_use=REFRESH_TOKEN)["token_use"] == "refresh"
    with pytest.raises(AuthenticationError, match="Expected access token"):
        decode_jwt(tokens.refresh_token, secret="test-secret", expected_use=ACCESS_TOKEN)


def test_jwt_rejects_tampering_and_expiry():
    token = create_token_pair(user_id=1, tenant_id=1, role="viewer", secret="test-secret").access_token
    with pytest.raises(AuthenticationError, match="signature"):
        decode_jwt(token, secret="other-secret")
    with pytest.raises(AuthenticationError, match="format"):
        decode_jwt("not-a-token", secret="test-secret")

    issued = datetime(2026, 10, 17, tzinfo=timezone.utc)
    expired = encode_jwt({"sub": "1"}, secret="test-secret", ttl=timedelta(minutes=5), now=issued)
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(expired, secret="test-secret", now=issued + timedelta(minutes=6))


def test_rbac_blocks_missing_scope():
    require_scopes("viewer", ["dashboard.read"])
    with pytest.raises(AuthorizationError, match="invoices.write"):
        require_scopes("viewer", ["invoices.write"])


def test_role_scope_matrix():
    assert has_scopes("admin", ["anything.at.all"])
    assert has_scopes("OWNER", ["invoices.export", "settings.write"])
    assert not has_scopes("editor", ["invoices.export"])
    assert has_scopes("editor", ["time.write"])
    assert get_scopes_for_role("unknown") == set()

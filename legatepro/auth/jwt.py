"""HS256 bearer tokens carrying tenant, user and role claims."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from legatepro.core.exceptions import AuthenticationError

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(f"{data}{padding}".encode("ascii"))


def _sign(message: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    return _b64url_encode(digest)


def _segment(payload: dict[str, Any]) -> str:
    return _b64url_encode(json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8"))


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta, now: datetime | None = None) -> str:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")

    issued_at = now or datetime.now(timezone.utc)
    body = dict(payload)
    body.setdefault("iat", int(issued_at.timestamp()))
    body.setdefault("exp", int((issued_at + ttl).timestamp()))
    body.setdefault("jti", uuid.uuid4().hex)

    signing_input = f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(body)}"
    return f"{signing_input}.{_sign(signing_input, secret)}"


def decode_jwt(
    token: str,
    secret: str,
    expected_use: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Verify signature, expiry and (optionally) token_use, returning the claims."""
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    try:
        header_segment, payload_segment, signature_segment = token.split(".")
    except ValueError as exc:
        raise AuthenticationError("Invalid token format.") from exc

    expected_signature = _sign(f"{header_segment}.{payload_segment}", secret)
    if not hmac.compare_digest(expected_signature, signature_segment):
        raise AuthenticationError("Invalid token signature.")

    try:
        claims = json.loads(_b64url_decode(payload_segment).decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        raise AuthenticationError("Invalid token payload.") from exc
    if not isinstance(claims, dict):
        raise AuthenticationError("Invalid token payload.")

    exp = claims.get("exp")
    if exp is None:
        raise AuthenticationError("Token is missing exp claim.")
    current = now or datetime.now(timezone.utc)
    if int(exp) < int(current.timestamp()):
        raise AuthenticationError("Token has expired.")

    if expected_use is not None and claims.get("token_use") != expected_use:
        raise AuthenticationError(f"Expected {expected_use} token.")
    return claims


def _claims(user_id: int, tenant_id: int, role: str, permissions_version: int, token_use: str) -> dict[str, Any]:
    return {
        "sub": str(user_id),
        "tenant_id": tenant_id,
        "role": role,
        "permissions_version": permissions_version,
        "token_use": token_use,
    }


def create_token_pair(
    user_id: int,
    tenant_id: int,
    role: str,
    secret: str,
    permissions_version: int = 1,
    access_ttl_minutes: int = 15,
    refresh_ttl_days: int = 14,
) -> TokenPair:
    """Issue a short-lived access token and a long-lived refresh token."""
    return TokenPair(
        access_token=encode_jwt(
            _claims(user_id, tenant_id, role, permissions_version, ACCESS_TOKEN),
            secret=secret,
            ttl=timedelta(minutes=access_ttl_minutes),
        ),
        refresh_token=encode_jwt(
            _claims(user_id, tenant_id, role, permissions_version, REFRESH_TOKEN),
            secret=secret,
            ttl=timedelta(days=refresh_ttl_days),
        ),
    )

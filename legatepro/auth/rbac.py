"""Role-based authorization helpers."""

from __future__ import annotations

from legatepro.core.exceptions import AuthorizationError

_READ_SCOPES = {
    "dashboard.read",
    "estates.read",
    "invoices.read",
    "time.read",
    "settings.read",
}

# Scope strings are kept explicit for endpoint-level declarations.
ROLE_SCOPES: dict[str, set[str]] = {
    "admin": {"*"},
    "owner": _READ_SCOPES
    | {
        "estates.write",
        "invoices.write",
        "invoices.export",
        "time.write",
        "settings.write",
    },
    "editor": _READ_SCOPES | {"estates.write", "invoices.write", "time.write"},
    "viewer": set(_READ_SCOPES),
}


def get_scopes_for_role(role: str) -> set[str]:
    return ROLE_SCOPES.get(role.lower(), set())


def has_scopes(role: str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> bool:
    granted = get_scopes_for_role(role)
    if "*" in granted:
        return True
    return set(required_scopes).issubset(granted)


def require_scopes(role: str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> None:
    """Raise AuthorizationError naming the scopes `role` lacks."""
    if has_scopes(role=role, required_scopes=required_scopes):
        return
    missing = sorted(set(required_scopes) - get_scopes_for_role(role))
    raise AuthorizationError(f"Missing required scopes: {', '.join(missing)}")

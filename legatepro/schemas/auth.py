"""Login and token payloads for workspace users."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8, max_length=256)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        email = value.strip().lower()
        if "@" not in email:
            raise ValueError("email must contain '@'")
        return email


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class SessionTokens(BaseModel):
    """Token pair plus the workspace the access token is scoped to."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    tenant_id: int
    role: str

"""Credential checks for workspace users."""

from __future__ import annotations

import logging

from legatepro.core.exceptions import AuthenticationError
from legatepro.core.security import verify_password
from legatepro.models import Tenant, User
from legatepro.services.base_service import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    def authenticate(self, email: str, password: str) -> User:
        """Return the active user for these credentials or raise AuthenticationError."""
        user = (
            self.db.query(User)
            .join(Tenant, Tenant.id == User.tenant_id)
            .filter(
                User.email == email.strip().lower(),
                User.is_active.is_(True),
                User.not_deleted(),
                Tenant.is_active.is_(True),
            )
            .first()
        )
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("auth.login_failed", extra={"event": "auth.login_failed"})
            raise AuthenticationError("Invalid credentials.")
        logger.info(
            "auth.login_succeeded",
            extra={"event": "auth.login_succeeded", "tenant_id": user.tenant_id, "user_id": user.id},
        )
        return user

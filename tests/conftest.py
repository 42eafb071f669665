from __future__ import annotations

import os

# Must be set before legatepro.core.config is first imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENV"] = "test"
os.environ["DB_CONNECTIVITY_REQUIRED"] = "false"

from dataclasses import dataclass
from datetime import date

import pytest

import legatepro.database.db as db_module
from legatepro.auth.jwt import create_token_pair
from legatepro.auth.tenant_context import TenantContext
from legatepro.core.config import get_config
from legatepro.core.security import hash_password
from legatepro.models import (
    Base,
    Estate,
    EstateCollaborator,
    Invoice,
    Tenant,
    TimeEntry,
    User,
    WorkspaceSettings,
)

PASSWORD = "correct-horse-battery"


@pytest.fixture
def db_session():
    db_module.reset_engine("sqlite://")
    engine = db_module.get_engine()
    Base.metadata.create_all(bind=engine)
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@dataclass
class Seeder:
    session: object

    def tenant(self, key: str = "acme", role: str = "owner", email: str | None = None) -> tuple[Tenant, User]:
        tenant = Tenant(tenant_key=key, name=f"{key.title()} Law")
        self.session.add(tenant)
        self.session.flush()
        user = User(
            tenant_id=tenant.id,
            email=email or f"{role}@{key}.example.com",
            full_name=f"{key} {role}",
            password_hash=hash_password(PASSWORD),
            role=role,
        )
        self.session.add(user)
        self.session.commit()
        return tenant, user

    def user(self, tenant: Tenant, role: str) -> User:
        user = User(
            tenant_id=tenant.id,
            email=f"{role}@{tenant.tenant_key}.example.com",
            password_hash=hash_password(PASSWORD),
            role=role,
        )
        self.session.add(user)
        self.session.commit()
        return user

    def estate(self, tenant: Tenant, display_name: str | None = None, case_name: str | None = None) -> Estate:
        estate = Estate(tenant_id=tenant.id, display_name=display_name, case_name=case_name)
        self.session.add(estate)
        self.session.commit()
        return estate

    def share(self, estate: Estate, tenant: Tenant, role: str = "VIEWER") -> EstateCollaborator:
        grant = EstateCollaborator(estate_id=estate.id, tenant_id=tenant.id, role=role)
        self.session.add(grant)
        self.session.commit()
        return grant

    def invoice(self, estate: Estate, status: str | None = "DRAFT", **fields) -> Invoice:
        invoice = Invoice(tenant_id=estate.tenant_id, estate_id=estate.id, status=status, **fields)
        self.session.add(invoice)
        self.session.commit()
        return invoice

    def time_entry(self, estate: Estate, **fields) -> TimeEntry:
        fields.setdefault("entry_date", date(2026, 10, 1))
        entry = TimeEntry(tenant_id=estate.tenant_id, estate_id=estate.id, **fields)
        self.session.add(entry)
        self.session.commit()
        return entry

    def settings(self, tenant: Tenant, **fields) -> WorkspaceSettings:
        settings = WorkspaceSettings(tenant_id=tenant.id, **fields)
        self.session.add(settings)
        self.session.commit()
        return settings


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def seed(db_session) -> Seeder:
    return Seeder(db_session)


@pytest.fixture
def context_for():
    def _context(user: User) -> TenantContext:
        return TenantContext(tenant_id=user.tenant_id, user_id=user.id, role=user.role)

    return _context


@pytest.fixture
def bearer_for():
    def _headers(user: User) -> dict[str, str]:
        cfg = get_config()
        tokens = create_token_pair(
            user_id=user.id,
            tenant_id=user.tenant_id,
            role=user.role,
            secret=cfg.JWT_SECRET,
            permissions_version=cfg.JWT_PERMISSIONS_VERSION,
        )
        return {"Authorization": f"Bearer {tokens.access_token}"}

    return _headers


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from legatepro.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client